import matplotlib

matplotlib.use("Agg")

from alohasim.utils.plotters import (
    DelayPlotter,
    NetworkPlotter,
    ThroughputPerLoadPlotter,
    ThroughputPlotter,
)
from alohasim.utils.support import run_simulation

import pandas as pd
import pytest


@pytest.fixture
def figs_cfg(cfg, tmp_path, monkeypatch):
    """Saves figures under a temporary project root."""
    (tmp_path / "requirements.txt").write_text("")
    monkeypatch.chdir(tmp_path)

    cfg.ENABLE_FIGS_SAVING = True
    cfg.FIGS_SAVE_PATH = "figs"
    cfg.SIMULATION_TIME_s = 100
    return cfg


def test_plots_are_skipped_when_figures_are_disabled(cfg, sparams, env, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    network = run_simulation(cfg, sparams, env)

    NetworkPlotter(cfg, sparams, env).plot_network(network, save_format="png")

    assert not (tmp_path / "figs").exists()


def test_simulation_plots_are_saved(figs_cfg, sparams, env, tmp_path):
    network = run_simulation(figs_cfg, sparams, env)

    NetworkPlotter(figs_cfg, sparams, env).plot_network(network, save_format="png")
    ThroughputPlotter(figs_cfg, sparams, env).plot_throughput(
        network.channel.stats.throughput_history, save_format="png"
    )
    DelayPlotter(figs_cfg, sparams, env).plot_delay_distribution(
        network.channel.stats.response_time_history, save_format="png"
    )

    saved = {path.name for path in (tmp_path / "figs").iterdir()}
    assert saved == {"network.png", "throughput.png", "delay_distribution.png"}


def test_throughput_per_load_plot(figs_cfg, sparams, tmp_path):
    data = pd.DataFrame(
        {
            "offered_load": [0.5, 1.0, 2.0],
            "avg_throughput_pkts_per_slot": [0.3, 0.37, 0.27],
        }
    )

    ThroughputPerLoadPlotter(figs_cfg, sparams).plot_throughput_per_load(
        data, num_channels=1, save_format="png"
    )

    assert (tmp_path / "figs" / "throughput_vs_load.png").exists()


def test_throughput_per_load_plot_needs_its_columns(figs_cfg, sparams, tmp_path):
    data = pd.DataFrame({"offered_load": [0.5]})

    ThroughputPerLoadPlotter(figs_cfg, sparams).plot_throughput_per_load(
        data, save_format="png"
    )

    assert not (tmp_path / "figs").exists()
