from alohasim.sim_params import SimParams as sparams
from alohasim.user_config import UserConfig as cfg

from alohasim.utils.data_units import Packet
from alohasim.utils.file_manager import get_output_folder

import os
import csv


class TrafficRecorder:
    """Records the packets generated by a transmitter in a Wireshark-style CSV trace."""

    def __init__(self, cfg: cfg, sparams: sparams, tx_id=None, save_name="traffic_trace", save_format="csv"):
        self.cfg = cfg
        self.sparams = sparams
        self.tx_id = tx_id
        self.save_name = save_name
        self.save_format = save_format

        self.filepath = None

    def is_enabled(self):
        return self.cfg.ENABLE_TRAFFIC_GEN_RECORDING

    def get_filepath(self):
        if not self.filepath:
            save_folder = get_output_folder(self.cfg.TRAFFIC_GEN_RECORDING_PATH)
            self.filepath = os.path.join(save_folder, f"{self.save_name}_tx_{self.tx_id}.{self.save_format}")
        return self.filepath

    def record_packet(self, packet: Packet):
        if not self.is_enabled():
            return

        filepath = self.get_filepath()
        write_header = not os.path.exists(filepath)

        with open(filepath, mode="a", newline="") as file:
            writer = csv.writer(file)
            if write_header:
                writer.writerow(
                    ["node.src", "frame.number", "frame.time_relative", "sub_channel"])
            writer.writerow([
                packet.id_transmitter,
                packet.id,
                round(packet.creation_time_s, 6),
                "" if packet.id_channel is None else packet.id_channel,
            ])
