from alohasim.sim_params import SimParams as sparams_module
from alohasim.user_config import UserConfig as cfg_module

from alohasim.utils.file_manager import get_output_folder
from alohasim.utils.event_logger import get_logger
from alohasim.utils.theoretical import compute_slotted_aloha_throughput
from alohasim.components.network import Network, CHANNEL_NODE

from matplotlib import rcParams

import os
import simpy
import logging
import numpy as np
import pandas as pd
import networkx as nx
import matplotlib.pyplot as plt
import matplotlib.lines as mlines


rcParams["font.family"] = "serif"
rcParams["font.serif"] = ["DejaVu Serif"]
rcParams["mathtext.fontset"] = "dejavuserif"


class BasePlotter:
    """Base class for all plotters, handling saving and displaying plots."""

    def __init__(self, cfg: cfg_module, sparams: sparams_module, env: simpy.Environment = None):
        """
        Initialize a BasePlotter object.

        Args:
            cfg (cfg): The UserConfig object.
            sparams (sparams): The SimParams object.
            env (simpy.Environment, optional): The simulation environment. Defaults to None.
        """
        self.cfg = cfg
        self.sparams = sparams
        self.env: simpy.Environment = env

        self.name: str = "PLOTTER"
        self.logger: logging.Logger = get_logger(self.name, cfg, sparams, env)

    def is_enabled(self) -> bool:
        return self.cfg.ENABLE_FIGS_SAVING or self.cfg.ENABLE_FIGS_DISPLAY

    def save_plot(self, figure: plt.Figure, save_name: str, save_format: str) -> str:
        """
        Saves the plot in the configured figures folder.

        Args:
            figure (plt.Figure): The figure to save.
            save_name (str): The base name of the saved file.
            save_format (str): The format of the saved file (e.g. pdf, png).

        Returns:
            str: The path of the saved file, None if nothing was saved.
        """
        if not save_name or not save_format:
            return None

        save_folder = get_output_folder(self.cfg.FIGS_SAVE_PATH)

        file_path = os.path.join(save_folder, f"{save_name}.{save_format}")
        figure.savefig(file_path)
        self.logger.info(f"Figure saved to {file_path}")
        return file_path

    def _finish_plot(self, fig: plt.Figure, save_name: str, save_format: str):
        plt.tight_layout()

        if self.cfg.ENABLE_FIGS_SAVING:
            self.save_plot(fig, save_name, save_format)

        if self.cfg.ENABLE_FIGS_DISPLAY:
            plt.show()
        else:
            plt.close(fig)


class NetworkPlotter(BasePlotter):
    """Plotter for the wiring of the network (transmitters -> channel -> receivers)."""

    def __init__(self, cfg: cfg_module, sparams: sparams_module, env: simpy.Environment = None):
        super().__init__(cfg, sparams, env)

    @staticmethod
    def _get_positions(graph: nx.DiGraph) -> dict:
        """Transmitters on the left, receivers on the right, both sorted by gate around the channel."""
        gates = nx.get_node_attributes(graph, "gate")
        types = nx.get_node_attributes(graph, "type")

        num_gates = max(gates.values(), default=0) + 1

        positions = {CHANNEL_NODE: (1, (num_gates - 1) / 2)}
        for node, gate in gates.items():
            x = 0 if types[node] == "TX" else 2
            positions[node] = (x, num_gates - 1 - gate)
        return positions

    def plot_network(
        self,
        network: Network,
        node_size: int = 300,
        label_nodes: bool = True,
        save_name: str = "network",
        save_format: str = "pdf",
    ):
        """
        Plots the network graph using networkx and matplotlib.

        Args:
            network (Network): The network to plot.
            node_size (int, optional): The size of the nodes in the plot. Defaults to 300.
            label_nodes (bool, optional): Whether to label the nodes with their IDs. Defaults to True.
            save_name (str, optional): The base name of the saved file. Defaults to "network".
            save_format (str, optional): The format of the saved file (e.g. pdf, png). Defaults to "pdf".
        """
        if network is None or nx.is_empty(network.graph):
            self.logger.error("Network is empty. Nothing to plot.")
            return

        if not self.is_enabled():
            return

        self.logger.header("Generating Network plot...")

        plt.ion()
        fig, ax = plt.subplots(figsize=(6.4, 4.8))

        graph = network.graph
        positions = self._get_positions(graph)
        types = nx.get_node_attributes(graph, "type")

        node_styles = {
            "TX": ("s", "tab:blue"),
            "CHANNEL": ("o", "tab:orange"),
            "RX": ("D", "tab:green"),
        }

        for node_type, (marker, color) in node_styles.items():
            nodelist = [node for node, t in types.items() if t == node_type]
            nx.draw_networkx_nodes(
                graph,
                positions,
                nodelist=nodelist,
                node_shape=marker,
                node_color=color,
                edgecolors="black",
                node_size=node_size * (2 if node_type == "CHANNEL" else 1),
                ax=ax,
            )

        nx.draw_networkx_edges(
            graph, positions, arrowstyle="->", arrowsize=10, width=1, ax=ax
        )

        if label_nodes:
            nx.draw_networkx_labels(graph, positions, font_size=7, ax=ax)

        legend_elements = [
            mlines.Line2D(
                [],
                [],
                color="black",
                marker=marker,
                markerfacecolor=color,
                linestyle="None",
                markeredgewidth=1,
                markersize=6,
                label=node_type,
            )
            for node_type, (marker, color) in node_styles.items()
        ]
        ax.legend(handles=legend_elements, loc="best", fontsize="small", frameon=False)

        ax.set_title(
            f"Network Graph ({network.channel.num_channels} sub-channels, t={network.env.now} s)"
        )
        ax.axis("off")

        self._finish_plot(fig, save_name, save_format)


class ThroughputPlotter(BasePlotter):
    """Plotter for the per-slot throughput of the channel."""

    def __init__(self, cfg: cfg_module, sparams: sparams_module, env: simpy.Environment = None):
        super().__init__(cfg, sparams, env)

    def plot_throughput(
        self,
        throughput_history: pd.DataFrame,
        window_slots: int = 50,
        save_name: str = "throughput",
        save_format: str = "pdf",
    ):
        """
        Plots the packets delivered per slot and their moving average.

        Args:
            throughput_history (pd.DataFrame): Per-slot throughput (timestamp_s, pkts_sent).
            window_slots (int, optional): Width of the moving average in slots. Defaults to 50.
        """
        if not self.is_enabled():
            return

        if throughput_history.empty:
            self.logger.warning("No throughput recorded. Nothing to plot.")
            return

        self.logger.header("Generating Throughput plot...")

        plt.ion()
        fig, ax = plt.subplots(figsize=(6.4, 4.8))

        rolling = (
            throughput_history["pkts_sent"].rolling(window_slots, min_periods=1).mean()
        )

        ax.step(
            throughput_history["timestamp_s"],
            throughput_history["pkts_sent"],
            where="post",
            lw=0.5,
            alpha=0.5,
            label="per slot",
        )
        ax.plot(
            throughput_history["timestamp_s"],
            rolling,
            lw=1.5,
            label=f"moving average ({window_slots} slots)",
        )
        ax.axhline(
            throughput_history["pkts_sent"].mean(),
            color="black",
            ls="--",
            lw=1,
            label="mean",
        )

        ax.set_xlabel("Time (s)")
        ax.set_ylabel("Throughput (pkts/slot)")
        ax.legend(fontsize=8, frameon=False)

        self._finish_plot(fig, save_name, save_format)


class DelayPlotter(BasePlotter):
    """Plotter for the distribution of the response time of the delivered packets."""

    def __init__(self, cfg: cfg_module, sparams: sparams_module, env: simpy.Environment = None):
        super().__init__(cfg, sparams, env)

    def plot_delay_distribution(
        self,
        response_time_history: pd.DataFrame,
        bins: int = 50,
        save_name: str = "delay_distribution",
        save_format: str = "pdf",
    ):
        if not self.is_enabled():
            return

        if response_time_history.empty:
            self.logger.warning("No packet delivered. Nothing to plot.")
            return

        self.logger.header("Generating Delay distribution plot...")

        delays = response_time_history["response_time_s"].to_numpy(dtype=float)

        plt.ion()
        fig, (ax_hist, ax_cdf) = plt.subplots(1, 2, figsize=(9.6, 4.8))

        ax_hist.hist(delays, bins=bins, color="tab:blue", edgecolor="black", lw=0.5)
        ax_hist.axvline(np.mean(delays), color="black", ls="--", lw=1, label="mean")
        ax_hist.axvline(
            np.percentile(delays, 99), color="tab:red", ls=":", lw=1, label="99th"
        )
        ax_hist.set_xlabel("Delay (s)")
        ax_hist.set_ylabel("Packets")
        ax_hist.legend(fontsize=8, frameon=False)

        sorted_delays = np.sort(delays)
        cdf = np.arange(1, len(sorted_delays) + 1) / len(sorted_delays)
        ax_cdf.plot(sorted_delays, cdf, lw=1.5)
        ax_cdf.set_xlabel("Delay (s)")
        ax_cdf.set_ylabel("CDF")
        ax_cdf.grid(True, ls=":", lw=0.5)

        self._finish_plot(fig, save_name, save_format)


class ThroughputPerLoadPlotter(BasePlotter):
    """Plotter for the simulated throughput vs offered load, against slotted ALOHA."""

    def __init__(self, cfg: cfg_module, sparams: sparams_module, env: simpy.Environment = None):
        super().__init__(cfg, sparams, env)

    def validate_data(self, data: pd.DataFrame):
        """Validates the data passed to the plot method."""
        for column in ["offered_load", "avg_throughput_pkts_per_slot"]:
            if column not in data.columns:
                self.logger.error(f"Missing column '{column}' in data.")
                return False
        return True

    def plot_throughput_per_load(
        self,
        data: pd.DataFrame,
        num_channels: int = None,
        save_name: str = "throughput_vs_load",
        save_format: str = "pdf",
    ):
        """
        Plots the results of a sweep (one row per run) with the theoretical curve.

        Args:
            data (pd.DataFrame): Sweep results with 'offered_load' and 'avg_throughput_pkts_per_slot'.
            num_channels (int, optional): Sub-channels of the theoretical curve. Defaults to NUM_CHANNELS.
        """
        if not self.is_enabled():
            return

        if data.empty or not self.validate_data(data):
            return

        self.logger.header("Generating Throughput vs Load plot...")

        num_channels = (
            num_channels if num_channels is not None else self.sparams.NUM_CHANNELS
        )

        data = data.sort_values("offered_load")

        loads = np.linspace(0, max(data["offered_load"].max(), num_channels) * 1.2, 200)

        plt.ion()
        fig, ax = plt.subplots(figsize=(6.4, 4.8))

        ax.plot(
            loads,
            compute_slotted_aloha_throughput(loads, num_channels),
            "-",
            color="black",
            lw=1,
            label="slotted ALOHA",
        )
        ax.plot(
            data["offered_load"],
            data["avg_throughput_pkts_per_slot"],
            "o--",
            label="simulation",
            markerfacecolor="none",
            markersize=4,
        )

        ax.set_xlabel("Offered load G (pkts/slot)")
        ax.set_ylabel("Throughput S (pkts/slot)")
        ax.set_title(f"{num_channels} sub-channels")
        ax.legend(fontsize=8, frameon=False)

        self._finish_plot(fig, save_name, save_format)
