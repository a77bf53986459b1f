from alohasim.sim_params import SimParams as sparams_module
from alohasim.user_config import UserConfig as cfg_module

from alohasim.traffic.recorder import TrafficRecorder
from alohasim.utils.data_units import Packet
from alohasim.utils.event_logger import get_logger

import simpy
import random


class TrafficGenerator:
    """Packet arrival process of a transmitter (Poisson or deterministic)."""

    def __init__(
        self,
        cfg: cfg_module,
        sparams: sparams_module,
        env: simpy.Environment,
        transmitter,
        rng: random.Random,
    ):
        self.cfg = cfg
        self.sparams = sparams
        self.env = env

        self.transmitter = transmitter
        self.rng = rng

        self.src_id = transmitter.id

        self.mean_interarrival_time_s = sparams.MEAN_INTERARRIVAL_TIME_s
        self.deterministic = sparams.DETERMINISTIC_INTERARRIVAL_TIME

        self.packet_id = 0

        self.recorder = TrafficRecorder(cfg, sparams, self.src_id)

        self.name = "GEN"
        self.logger = get_logger(
            self.name,
            cfg,
            sparams,
            self.env,
            True if self.src_id in self.cfg.EXCLUDED_IDS else False,
        )

        self.process = self.env.process(self.run())

    def next_interarrival_time(self) -> float:
        if self.deterministic:
            return self.mean_interarrival_time_s
        return self.rng.expovariate(1 / self.mean_interarrival_time_s)

    def run(self):
        while True:
            yield self.env.timeout(self.next_interarrival_time())
            self._create_and_send_packet()

    def _create_and_send_packet(self):
        """Creates a packet stamped with its arrival time and hands it to the transmitter."""
        self.packet_id += 1
        packet = Packet(id=self.packet_id, creation_time_s=self.env.now)
        self.logger.debug(f"TX {self.src_id} -> Created {packet}")
        self.transmitter.handle_arrived_packet(packet)
        self.recorder.record_packet(packet)
