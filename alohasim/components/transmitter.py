from alohasim.sim_params import SimParams as sparams_module
from alohasim.user_config import UserConfig as cfg_module

from alohasim.traffic.generator import TrafficGenerator
from alohasim.utils.data_units import Packet, Feedback
from alohasim.utils.event_logger import get_logger
from alohasim.utils.statistics import TransmitterStats

from collections import deque

import simpy


class Transmitter:
    """
    Transmitting station. Buffers the packets of its arrival process and, once per slot,
    reacts to the channel feedback: binary exponential back-off after a collision,
    then a Bernoulli trial deciding whether the head of the buffer is sent.
    """

    def __init__(
        self,
        cfg: cfg_module,
        sparams: sparams_module,
        env: simpy.Environment,
        id: int,
        gate: int,
        network,
        stats: TransmitterStats = None,
    ):
        from alohasim.components.network import Network

        self.cfg = cfg
        self.sparams = sparams
        self.env = env

        self.id = id
        self.gate = gate  # Channel gate the transmitter is wired to

        self.network: Network = network
        self.rng = network.rng

        self.buffer: deque[Packet] = deque()  # Packets not acknowledged yet (FIFO)

        self.max_backoff_time = sparams.MIN_BACKOFF_WINDOW  # Back-off window bound
        self.backoff_time = 0  # Slots to wait before being allowed to transmit

        self.last_update_time_s = 0
        self.pkts_in_buffer_integral = 0.0  # Buffer occupancy integrated over time

        self.stats = (
            stats if stats is not None else TransmitterStats(cfg.WARMUP_TIME_s)
        )

        self.name = "TX"
        self.logger = get_logger(
            self.name,
            cfg,
            sparams,
            env,
            True if id in self.cfg.EXCLUDED_IDS else False,
        )

        self.traffic_generator = TrafficGenerator(cfg, sparams, env, self, self.rng)

    def _draw_channel(self) -> int:
        return self.rng.randint(0, self.sparams.NUM_CHANNELS - 1)

    def handle_arrived_packet(self, packet: Packet):
        """Stores a newly arrived packet into the buffer."""
        # Occupancy before the new packet is stored
        self.update_buffer_count()

        self.stats.record_packet_created(self.env.now)

        packet.id_transmitter = self.id

        if not self.sparams.CHANGE_CHANNEL_AFTER_COLLISION:
            packet.id_channel = self._draw_channel()

        self.buffer.append(packet)
        self.logger.debug(
            f"TX {self.id} -> Arrived packet inserted into the buffer ({len(self.buffer)} pkts)"
        )

        self.stats.record_buffer_len(self.env.now, len(self.buffer))

    def handle_channel_feedback(self, feedback: Feedback):
        """Reacts to the ACK, NACK or PROMPT received at the end of a slot."""
        self.stats.record_feedback(self.env.now, feedback.type)

        if self.backoff_time > 0 and self.sparams.ENABLE_BACKOFF:
            self.backoff_time -= 1
            self.logger.debug(f"TX {self.id} -> Back-off remaining: {self.backoff_time}")
            return

        if feedback.type == "NACK" and self.sparams.ENABLE_BACKOFF:
            self.max_backoff_time *= 2
            self.backoff_time = self.rng.randint(1, self.max_backoff_time)
            self.stats.record_backoff(self.env.now)
            self.logger.debug(
                f"TX {self.id} -> NACK received, back-off time = {self.backoff_time} (window {self.max_backoff_time})"
            )
            return

        if feedback.type == "ACK":
            # The head of the buffer was delivered
            self.update_buffer_count()
            self.buffer.popleft()

            self.max_backoff_time = self.sparams.MIN_BACKOFF_WINDOW
            self.logger.debug(f"TX {self.id} -> ACK received")

        if self.buffer and self.rng.random() < self.sparams.SEND_PROBABILITY:
            self.send_head_of_buffer()

    def send_head_of_buffer(self):
        """Offers a copy of the head of the buffer to the channel, keeping the original until ACK."""
        packet = self.buffer[0]

        if self.sparams.CHANGE_CHANNEL_AFTER_COLLISION:
            packet.id_channel = self._draw_channel()

        self.network.channel.receive(packet.dup(), self.gate)
        self.stats.record_tx_attempt(self.env.now)

        self.logger.debug(
            f"TX {self.id} -> Packet {packet.id} sent on sub-channel {packet.id_channel}, waiting for answer"
        )

    def update_buffer_count(self):
        """Integrates the buffer occupancy since the last update (only after the warm-up)."""
        warmup_s = self.cfg.WARMUP_TIME_s

        if self.env.now < warmup_s:
            return

        # Start counting at the warm-up boundary if it falls in the interval
        if self.last_update_time_s < warmup_s:
            self.last_update_time_s = warmup_s

        self.pkts_in_buffer_integral += len(self.buffer) * (
            self.env.now - self.last_update_time_s
        )
        self.last_update_time_s = self.env.now

    def finish(self):
        """Reports the mean buffer occupancy and releases the packets left in the buffer."""
        duration_s = self.env.now - self.cfg.WARMUP_TIME_s

        self.update_buffer_count()

        mean_pkts_in_buffer = (
            self.pkts_in_buffer_integral / duration_s if duration_s > 0 else 0
        )
        self.stats.record_mean_pkts_in_buffer(mean_pkts_in_buffer)
        self.logger.default(
            f"TX {self.id} -> Mean packets in buffer: {mean_pkts_in_buffer:.4f}"
        )

        self.buffer.clear()

    def __repr__(self):
        return f"Transmitter({self.id}, gate={self.gate}, buffer={len(self.buffer)}, backoff={self.backoff_time}/{self.max_backoff_time})"
