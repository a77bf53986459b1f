from alohasim.sim_params import SimParams as sparams_module
from alohasim.user_config import UserConfig as cfg_module

from alohasim.utils.data_units import Packet
from alohasim.utils.event_logger import get_logger
from alohasim.utils.statistics import ReceiverStats

import simpy


class Receiver:
    def __init__(
        self,
        cfg: cfg_module,
        sparams: sparams_module,
        env: simpy.Environment,
        id: int,
        gate: int,
        stats: ReceiverStats = None,
    ):
        self.cfg = cfg
        self.sparams = sparams
        self.env = env

        self.id = id
        self.gate = gate

        self.stats = stats if stats is not None else ReceiverStats(cfg.WARMUP_TIME_s)

        self.name = "RX"
        self.logger = get_logger(
            self.name,
            cfg,
            sparams,
            env,
            True if id in self.cfg.EXCLUDED_IDS else False,
        )

    def receive(self, packet: Packet):
        """Terminal consumer of the packets delivered by the channel."""
        self.logger.debug(
            f"RX {self.id} -> Packet received from TX {packet.id_transmitter}"
        )
        self.stats.record_packet_received(self.env.now)

        self.handle_response_time(packet)

    def handle_response_time(self, packet: Packet):
        packet.reception_time_s = self.env.now

        response_time_s = packet.reception_time_s - packet.creation_time_s
        self.logger.debug(f"RX {self.id} -> Response time = {response_time_s}")
        self.stats.record_response_time(self.env.now, packet)
