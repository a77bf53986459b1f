from alohasim.sim_params import SimParams as sparams_module
from alohasim.user_config import UserConfig as cfg_module

from alohasim.utils.data_units import Packet, ACK, NACK, PROMPT
from alohasim.utils.event_logger import get_logger
from alohasim.utils.statistics import ChannelStats

import simpy


class Channel:
    """
    Shared medium split into independent sub-channels.

    Transmission attempts are accumulated during a slot and resolved all together
    at the slot boundary: attempts alone on their sub-channel are acknowledged and
    delivered to the receiver wired to the same gate, attempts sharing a sub-channel
    collide and are discarded. Transmitters that did not attempt are prompted.
    """

    def __init__(
        self,
        cfg: cfg_module,
        sparams: sparams_module,
        env: simpy.Environment,
        network,
        stats: ChannelStats = None,
    ):
        from alohasim.components.network import Network

        self.cfg = cfg
        self.sparams = sparams
        self.env = env

        self.network: Network = network

        self.num_channels = sparams.NUM_CHANNELS
        self.slot_size_s = sparams.TIME_SLOT_SIZE_s

        self.is_collided = [False] * self.num_channels  # One flag per sub-channel
        self.packets_of_slot: list[Packet] = []  # Attempts of the current slot, in arrival order

        self.stats = stats if stats is not None else ChannelStats(cfg.WARMUP_TIME_s)

        self.terminated = False
        self.slot_process = None

        self.name = "CHANNEL"
        self.logger = get_logger(self.name, cfg, sparams, env)

        if self.num_channels == 0:
            # No slot cycle can exist without sub-channels
            self.logger.warning(
                "No sub-channels configured (NUM_CHANNELS = 0). Ending simulation..."
            )
            self.terminated = True
            return

        self.slot_process = self.env.process(self.run())

    def run(self):
        """Slot cycle: accumulate attempts during a slot, then resolve them at its boundary."""
        while True:
            yield self.env.timeout(self.slot_size_s)

            self.logger.header("Slot boundary reached")
            self.find_collisions()
            self.transmission()

    def receive(self, packet: Packet, gate: int):
        """Accumulates an attempt coming from the transmitter wired to the given gate."""
        packet.id_gate = gate
        self.logger.debug(
            f"Packet from TX {packet.id_transmitter} arrived at sub-channel {packet.id_channel}"
        )
        self.packets_of_slot.append(packet)

    def find_collisions(self):
        """Flags every sub-channel carrying two or more attempts in the current slot."""
        attempts_per_channel = [0] * self.num_channels

        for packet in self.packets_of_slot:
            ch = packet.id_channel

            if attempts_per_channel[ch] == 1:
                self.is_collided[ch] = True
                self.stats.record_collision(self.env.now, ch)
                self.logger.debug(f"Collision on sub-channel {ch}")

            attempts_per_channel[ch] += 1

    def transmission(self):
        """
        Replies to every attempt of the slot and forwards the non-collided packets.

        ACK/NACK are sent to the transmitters that attempted, successful packets are
        forwarded to the receiver wired to the same gate, and every other transmitter
        is prompted. Replies are delivered as events of their own once the slot state is
        cleared: arrivals due at the boundary are buffered first, and attempts
        triggered by the replies belong to the next slot.
        """
        replied = [False] * len(self.network.transmitters)
        outbox = []  # (handler, data unit) in sending order
        pkts_sent = 0
        pkts_collided = 0

        for packet in self.packets_of_slot:
            gate = packet.id_gate

            # This transmitter does not need to be prompted
            replied[gate] = True

            if self.is_collided[packet.id_channel]:
                self.logger.debug(f"NACK sent to TX {packet.id_transmitter}")
                outbox.append(
                    (
                        self.network.get_transmitter(gate).handle_channel_feedback,
                        NACK(gate, self.env.now),
                    )
                )
                pkts_collided += 1
                # The collided copy is dropped here
                continue

            self.logger.debug(f"ACK sent to TX {packet.id_transmitter}")
            outbox.append(
                (
                    self.network.get_transmitter(gate).handle_channel_feedback,
                    ACK(gate, self.env.now),
                )
            )

            self.logger.debug(f"Packet sent to RX on gate {gate}")
            outbox.append((self.network.get_receiver(gate).receive, packet))

            response_time_s = self.env.now - packet.creation_time_s
            self.logger.debug(f"Response time = {response_time_s}")
            self.stats.record_response_time(self.env.now, packet)

            pkts_sent += 1

        self.logger.info(f"Sent {pkts_sent} packets")
        self.stats.record_throughput(self.env.now, pkts_sent)
        self.stats.record_attempts(
            self.env.now, len(self.packets_of_slot), pkts_collided
        )

        outbox.extend(self.prompt_others(replied))

        self.packets_of_slot = []
        self.is_collided = [False] * self.num_channels

        for handler, data_unit in outbox:
            self.env.process(self.send_response(handler, data_unit))

    def send_response(self, handler, data_unit):
        """Delivers a reply or a packet as an event of its own, after those already due now."""
        yield self.env.timeout(0)
        handler(data_unit)

    def prompt_others(self, replied: list[bool]) -> list:
        """Returns the PROMPTs for the transmitters that were not replied to in this slot."""
        prompts = []
        for gate, was_replied in enumerate(replied):
            if not was_replied:
                self.logger.debug(f"PROMPT sent to TX on gate {gate}")
                prompts.append(
                    (
                        self.network.get_transmitter(gate).handle_channel_feedback,
                        PROMPT(gate, self.env.now),
                    )
                )
        return prompts

    def finish(self):
        """Discards the attempts left in the current slot."""
        if self.packets_of_slot:
            self.logger.debug(
                f"Discarding {len(self.packets_of_slot)} packets left in the slot"
            )
        self.packets_of_slot = []
