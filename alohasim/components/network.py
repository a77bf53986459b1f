from alohasim.user_config import UserConfig as cfg_module
from alohasim.sim_params import SimParams as sparams_module

from alohasim.utils.event_logger import get_logger, update_loggers_environment
from alohasim.utils.statistics import NetworkStats

import networkx as nx
import simpy
import random


CHANNEL_NODE = "CHANNEL"


class Network:
    """
    A single shared-medium cell: a set of transmitters contending for one channel,
    and one receiver wired to each transmitter gate on the other side of the channel.
    """

    def __init__(self, cfg: cfg_module, sparams: sparams_module, env: simpy.Environment):
        from alohasim.components.channel import Channel

        self.env = env

        self.cfg = cfg
        self.sparams = sparams

        update_loggers_environment(env)

        # Single pseudo-random source shared by every component of the run
        self.rng = random.Random(cfg.SEED)

        self.graph = nx.DiGraph()
        self.graph.add_node(CHANNEL_NODE, type="CHANNEL")

        self.transmitters = []  # Indexed by gate
        self.receivers = []  # Indexed by gate

        self.channel = Channel(cfg, sparams, env, self)

        self.stats = NetworkStats(cfg, sparams, self)

        self.name = "NETWORK"
        self.logger = get_logger(self.name, cfg, sparams, env)

    def add_transmitter(self, tx_id: int):
        """Adds a transmitter to the network, wired to the next free channel gate."""
        from alohasim.components.transmitter import Transmitter

        gate = len(self.transmitters)

        self.logger.debug(f"Adding TX {tx_id} on gate {gate}")
        tx = Transmitter(self.cfg, self.sparams, self.env, tx_id, gate, self)
        self.transmitters.append(tx)

        self.graph.add_node(f"TX {tx_id}", type="TX", gate=gate)
        self.graph.add_edge(f"TX {tx_id}", CHANNEL_NODE, gate=gate)
        return tx

    def add_receiver(self, rx_id: int):
        """Adds a receiver to the network, wired to the next free channel output gate."""
        from alohasim.components.receiver import Receiver

        gate = len(self.receivers)

        self.logger.debug(f"Adding RX {rx_id} on gate {gate}")
        rx = Receiver(self.cfg, self.sparams, self.env, rx_id, gate)
        self.receivers.append(rx)

        self.graph.add_node(f"RX {rx_id}", type="RX", gate=gate)
        self.graph.add_edge(CHANNEL_NODE, f"RX {rx_id}", gate=gate)
        return rx

    def get_transmitters(self) -> list:
        return list(self.transmitters)

    def get_receivers(self) -> list:
        return list(self.receivers)

    def get_transmitter(self, gate: int):
        if gate >= len(self.transmitters):
            self.logger.error(f"No TX wired to gate {gate}")
            return None
        return self.transmitters[gate]

    def get_receiver(self, gate: int):
        if gate >= len(self.receivers):
            self.logger.error(f"No RX wired to gate {gate}")
            return None
        return self.receivers[gate]

    def is_terminated(self) -> bool:
        """Whether the simulation was ended before processing any event."""
        return self.channel.terminated

    def finish(self):
        """Runs the shutdown hook of every component."""
        for tx in self.transmitters:
            tx.finish()
        self.channel.finish()

    def __repr__(self):
        return f"Network(TXs: {[tx.id for tx in self.transmitters]}, sub-channels: {self.channel.num_channels}, RXs: {[rx.id for rx in self.receivers]})"
