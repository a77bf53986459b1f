from alohasim.sim_params import SimParams as sparams
from alohasim.user_config import UserConfig as cfg

from alohasim.utils.data_units import Packet
from alohasim.utils.event_logger import get_logger

from typing import cast

import numpy as np
import pandas as pd
import json
import os


class RecordingStats:
    """
    Base class of the statistics recorders injected into the components.

    Observations stamped before the warm-up boundary are ignored.
    """

    def __init__(self, warmup_s: float = 0.0):
        self.warmup_s = warmup_s

    def is_recording(self, timestamp_s: float) -> bool:
        return timestamp_s >= self.warmup_s


class TransmitterStats(RecordingStats):
    def __init__(self, warmup_s: float = 0.0):
        super().__init__(warmup_s)

        self.pkts_created = 0  # Packets generated by the arrival process

        self.tx_attempts = 0  # Packets offered to the channel

        self.acks_rx = 0
        self.nacks_rx = 0
        self.prompts_rx = 0

        self.backoffs = 0  # Back-off periods started after a collision

        self.mean_pkts_in_buffer = None  # Time-averaged buffer occupancy (set at finish)

        self._buffer_len_rows = []

    def record_packet_created(self, timestamp_s: float):
        if self.is_recording(timestamp_s):
            self.pkts_created += 1

    def record_buffer_len(self, timestamp_s: float, buffer_len: int):
        if self.is_recording(timestamp_s):
            self._buffer_len_rows.append(
                {"timestamp_s": timestamp_s, "buffer_len": buffer_len}
            )

    def record_tx_attempt(self, timestamp_s: float):
        if self.is_recording(timestamp_s):
            self.tx_attempts += 1

    def record_feedback(self, timestamp_s: float, feedback_type: str):
        if not self.is_recording(timestamp_s):
            return
        match feedback_type:
            case "ACK":
                self.acks_rx += 1
            case "NACK":
                self.nacks_rx += 1
            case "PROMPT":
                self.prompts_rx += 1

    def record_backoff(self, timestamp_s: float):
        if self.is_recording(timestamp_s):
            self.backoffs += 1

    def record_mean_pkts_in_buffer(self, mean_pkts_in_buffer: float):
        self.mean_pkts_in_buffer = mean_pkts_in_buffer

    @property
    def buffer_len_history(self) -> pd.DataFrame:
        return pd.DataFrame(self._buffer_len_rows, columns=["timestamp_s", "buffer_len"])


class ChannelStats(RecordingStats):
    def __init__(self, warmup_s: float = 0.0):
        super().__init__(warmup_s)

        self.collisions = 0  # Collided sub-channels, summed over all slots

        self.attempts_resolved = 0  # Attempts counted when their slot is resolved
        self.attempts_collided = 0

        self.pkts_delivered_created_after_warmup = 0

        self._collision_rows = []
        self._throughput_rows = []
        self._response_time_rows = []

    def record_collision(self, timestamp_s: float, id_channel: int):
        if self.is_recording(timestamp_s):
            self.collisions += 1
            self._collision_rows.append(
                {"timestamp_s": timestamp_s, "id_channel": id_channel}
            )

    def record_throughput(self, timestamp_s: float, pkts_sent: int):
        if self.is_recording(timestamp_s):
            self._throughput_rows.append(
                {"timestamp_s": timestamp_s, "pkts_sent": pkts_sent}
            )

    def record_response_time(self, timestamp_s: float, packet: Packet):
        if self.is_recording(timestamp_s):
            if self.is_recording(packet.creation_time_s):
                self.pkts_delivered_created_after_warmup += 1
            self._response_time_rows.append(
                {
                    "timestamp_s": timestamp_s,
                    "packet_id": packet.id,
                    "id_transmitter": packet.id_transmitter,
                    "id_channel": packet.id_channel,
                    "response_time_s": timestamp_s - packet.creation_time_s,
                }
            )

    def record_attempts(self, timestamp_s: float, attempts: int, collided: int):
        if self.is_recording(timestamp_s):
            self.attempts_resolved += attempts
            self.attempts_collided += collided

    @property
    def collision_history(self) -> pd.DataFrame:
        return pd.DataFrame(self._collision_rows, columns=["timestamp_s", "id_channel"])

    @property
    def throughput_history(self) -> pd.DataFrame:
        return pd.DataFrame(self._throughput_rows, columns=["timestamp_s", "pkts_sent"])

    @property
    def response_time_history(self) -> pd.DataFrame:
        return pd.DataFrame(
            self._response_time_rows,
            columns=[
                "timestamp_s",
                "packet_id",
                "id_transmitter",
                "id_channel",
                "response_time_s",
            ],
        )


class ReceiverStats(RecordingStats):
    def __init__(self, warmup_s: float = 0.0):
        super().__init__(warmup_s)

        self.pkts_rx = 0

        self._rx_packets_rows = []

    def record_packet_received(self, timestamp_s: float):
        if self.is_recording(timestamp_s):
            self.pkts_rx += 1

    def record_response_time(self, timestamp_s: float, packet: Packet):
        if self.is_recording(timestamp_s):
            self._rx_packets_rows.append(
                {
                    "packet_id": packet.id,
                    "id_transmitter": packet.id_transmitter,
                    "id_channel": packet.id_channel,
                    "creation_time_s": packet.creation_time_s,
                    "reception_time_s": timestamp_s,
                    "response_time_s": timestamp_s - packet.creation_time_s,
                }
            )

    @property
    def rx_packets_history(self) -> pd.DataFrame:
        return pd.DataFrame(
            self._rx_packets_rows,
            columns=[
                "packet_id",
                "id_transmitter",
                "id_channel",
                "creation_time_s",
                "reception_time_s",
                "response_time_s",
            ],
        )


def _describe_response_times(response_times: pd.Series) -> dict:
    if response_times.empty:
        return {"mean": 0.0, "std": 0.0, "max": 0.0, "p95": 0.0, "p99": 0.0}
    values = response_times.to_numpy(dtype=float)
    return {
        "mean": float(np.mean(values)),
        "std": float(np.std(values)),
        "max": float(np.max(values)),
        "p95": float(np.percentile(values, 95)),
        "p99": float(np.percentile(values, 99)),
    }


class NetworkStats:
    def __init__(self, cfg: cfg, sparams: sparams, network):
        from alohasim.components.network import Network

        self.cfg = cfg
        self.sparams = sparams

        self.network = network
        self.network = cast(Network, self.network)

        # Global Network Stats
        self.total_pkts_created = 0
        self.total_tx_attempts = 0
        self.total_pkts_delivered = 0
        self.total_pkts_rx = 0
        self.total_collisions = 0

        self.delivery_ratio = 0
        self.collision_ratio = 0

        self.avg_throughput_pkts_per_slot = 0
        self.avg_throughput_per_channel = 0

        self.avg_pkts_in_buffer = 0

        self.response_time_s = {}

        # Per-transmitter stats
        self.per_transmitter_stats = {}

        # Per-receiver stats
        self.per_receiver_stats = {}

        # Channel stats
        self.channel_stats = {}

        self.name = "STATS"
        self.logger = get_logger(self.name, cfg, sparams, self.network.env)

    def collect_stats(self):
        """Aggregate statistics from all transmitters, receivers and the channel."""
        from alohasim.components.transmitter import Transmitter

        channel = self.network.channel
        ch_stats = channel.stats
        elapsed_s = max(0.0, self.network.env.now - self.cfg.WARMUP_TIME_s)

        total_pkts_in_buffer = 0

        for tx in self.network.get_transmitters():
            tx = cast(Transmitter, tx)
            tx_stats = tx.stats

            self.total_pkts_created += tx_stats.pkts_created
            self.total_tx_attempts += tx_stats.tx_attempts

            mean_pkts_in_buffer = tx_stats.mean_pkts_in_buffer or 0
            total_pkts_in_buffer += mean_pkts_in_buffer

            self.per_transmitter_stats[tx.id] = {
                "pkts_created": tx_stats.pkts_created,
                "tx_attempts": tx_stats.tx_attempts,
                "acks_rx": tx_stats.acks_rx,
                "nacks_rx": tx_stats.nacks_rx,
                "prompts_rx": tx_stats.prompts_rx,
                "backoffs": tx_stats.backoffs,
                "pkts_in_buffer": len(tx.buffer),
                "mean_pkts_in_buffer": mean_pkts_in_buffer,
                "max_buffer_len": (
                    int(tx_stats.buffer_len_history["buffer_len"].max())
                    if not tx_stats.buffer_len_history.empty
                    else 0
                ),
                "creation_rate_pkts_per_sec": (
                    tx_stats.pkts_created / elapsed_s if elapsed_s > 0 else 0
                ),
            }

        for rx in self.network.get_receivers():
            rx_stats = rx.stats
            self.total_pkts_rx += rx_stats.pkts_rx

            self.per_receiver_stats[rx.id] = {
                "pkts_rx": rx_stats.pkts_rx,
                "response_time_s": _describe_response_times(
                    rx_stats.rx_packets_history["response_time_s"]
                ),
                "rx_rate_pkts_per_sec": (
                    rx_stats.pkts_rx / elapsed_s if elapsed_s > 0 else 0
                ),
            }

        throughput_history = ch_stats.throughput_history
        self.total_pkts_delivered = int(throughput_history["pkts_sent"].sum())
        self.total_collisions = ch_stats.collisions

        self.avg_throughput_pkts_per_slot = (
            float(throughput_history["pkts_sent"].mean())
            if not throughput_history.empty
            else 0
        )
        self.avg_throughput_per_channel = (
            self.avg_throughput_pkts_per_slot / channel.num_channels
            if channel.num_channels > 0
            else 0
        )

        # Attempts are counted at resolution, delivered packets by creation time
        self.delivery_ratio = (
            ch_stats.pkts_delivered_created_after_warmup / self.total_pkts_created
            if self.total_pkts_created > 0
            else 0
        )
        self.collision_ratio = (
            ch_stats.attempts_collided / ch_stats.attempts_resolved
            if ch_stats.attempts_resolved > 0
            else 0
        )

        self.avg_pkts_in_buffer = (
            total_pkts_in_buffer / len(self.network.get_transmitters())
            if len(self.network.get_transmitters()) > 0
            else 0
        )

        self.response_time_s = _describe_response_times(
            ch_stats.response_time_history["response_time_s"]
        )

        self.channel_stats = {
            "num_channels": channel.num_channels,
            "slots": len(throughput_history),
            "collisions": ch_stats.collisions,
            "attempts_resolved": ch_stats.attempts_resolved,
            "attempts_collided": ch_stats.attempts_collided,
            "collisions_per_channel": {
                int(ch_id): int(count)
                for ch_id, count in ch_stats.collision_history["id_channel"]
                .value_counts()
                .sort_index()
                .items()
            },
            "pkts_delivered": self.total_pkts_delivered,
            "avg_throughput_pkts_per_slot": self.avg_throughput_pkts_per_slot,
            "idle_or_collided_slots": (
                int((throughput_history["pkts_sent"] == 0).sum())
                if not throughput_history.empty
                else 0
            ),
        }

        if self.cfg.ENABLE_STATS_COLLECTION:
            self.save_stats()

    def save_stats(self):
        """Save statistics to JSON if enabled."""
        stats_data = {
            "global_stats": {
                "total_pkts_created": self.total_pkts_created,
                "total_tx_attempts": self.total_tx_attempts,
                "total_pkts_delivered": self.total_pkts_delivered,
                "total_pkts_rx": self.total_pkts_rx,
                "total_collisions": self.total_collisions,
                "delivery_ratio": self.delivery_ratio,
                "collision_ratio": self.collision_ratio,
                "avg_throughput_pkts_per_slot": self.avg_throughput_pkts_per_slot,
                "avg_throughput_per_channel": self.avg_throughput_per_channel,
                "avg_pkts_in_buffer": self.avg_pkts_in_buffer,
                "response_time_s": self.response_time_s,
            },
            "per_transmitter_stats": self.per_transmitter_stats,
            "per_receiver_stats": self.per_receiver_stats,
            "channel_stats": self.channel_stats,
        }

        os.makedirs(self.cfg.STATS_SAVE_PATH, exist_ok=True)

        filepath = os.path.join(self.cfg.STATS_SAVE_PATH, "session_stats.json")

        with open(filepath, "w") as f:
            json.dump(stats_data, f, indent=4)

        self.logger.info(f"Statistics saved to {filepath}")

    def display_stats(self):
        """Print a summary of network statistics."""
        print("\033[93m" + "Network Statistics Summary:" + "\033[0m")
        print(f"Total Packets Created: {self.total_pkts_created}")
        print(f"Total TX Attempts: {self.total_tx_attempts}")
        print(f"Total Packets Delivered: {self.total_pkts_delivered}")
        print(f"Total Packets Received: {self.total_pkts_rx}")
        print(f"Total Collisions: {self.total_collisions}")
        print(f"Delivery Ratio: {self.delivery_ratio:.5%}")
        print(f"Collision Ratio: {self.collision_ratio:.5%}")
        print(
            f"Average Throughput: {self.avg_throughput_pkts_per_slot:.4f} pkts/slot "
            f"({self.avg_throughput_per_channel:.4f} pkts/slot per sub-channel)"
        )
        print(f"Average Packets in Buffer: {self.avg_pkts_in_buffer:.4f}")
        print(
            f"Response Time: mean {self.response_time_s.get('mean', 0):.4f} s, "
            f"95% {self.response_time_s.get('p95', 0):.4f} s, "
            f"99% {self.response_time_s.get('p99', 0):.4f} s"
        )

        print("\033[93m" + "\nPer-Transmitter Stats:" + "\033[0m")
        for tx_id, stats in self.per_transmitter_stats.items():
            print(f"  TX {tx_id}:")
            print(
                f"    Packets Created: {stats['pkts_created']}, "
                f"TX Attempts: {stats['tx_attempts']}, "
                f"Back-offs: {stats['backoffs']}"
            )
            print(
                f"    ACKs: {stats['acks_rx']}, NACKs: {stats['nacks_rx']}, PROMPTs: {stats['prompts_rx']}"
            )
            print(
                f"    Buffer: {stats['pkts_in_buffer']} pkts left, "
                f"{stats['mean_pkts_in_buffer']:.4f} on average, "
                f"{stats['max_buffer_len']} max"
            )

        print("\033[93m" + "\nPer-Receiver Stats:" + "\033[0m")
        for rx_id, stats in self.per_receiver_stats.items():
            print(f"  RX {rx_id}:")
            print(
                f"    Packets RX: {stats['pkts_rx']} ({stats['rx_rate_pkts_per_sec']:.4f} pkts/s)"
            )
            print(f"    Response Time (mean): {stats['response_time_s']['mean']:.4f} s")

        print("\033[93m" + "\nChannel Stats:" + "\033[0m")
        print(f"  Sub-channels: {self.channel_stats['num_channels']}")
        print(f"  Slots: {self.channel_stats['slots']}")
        print(f"  Collisions: {self.channel_stats['collisions']}")
        for ch_id, count in self.channel_stats["collisions_per_channel"].items():
            print(f"    Sub-channel {ch_id}: {count} collisions")
