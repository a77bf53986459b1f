from alohasim.user_config import UserConfig as cfg_module
from alohasim.sim_params import SimParams as sparams_module

from alohasim.utils.event_logger import get_logger, reset_loggers
from alohasim.utils.plotters import ThroughputPerLoadPlotter
from alohasim.utils.support import run_simulation, validate_settings
from alohasim.utils.theoretical import (
    compute_offered_load,
    compute_slotted_aloha_throughput,
)
from alohasim.utils.messages import (
    STARTING_EXECUTION_MSG,
    EXECUTION_TERMINATED_MSG,
    STARTING_SWEEP_MSG,
    SWEEP_COMPLETED_MSG,
    PRESS_TO_EXIT_MSG,
)

from tqdm import tqdm

import matplotlib.pyplot as plt
import concurrent.futures
import pandas as pd
import numpy as np
import simpy
import os


# Per-run outputs, turned off for every run of a sweep
DISABLED_IN_SWEEPS = {
    "ENABLE_CONSOLE_LOGGING": False,
    "ENABLE_LOGS_RECORDING": False,
    "ENABLE_TRAFFIC_GEN_RECORDING": False,
    "ENABLE_STATS_COLLECTION": False,
    "ENABLE_FIGS_DISPLAY": False,
    "ENABLE_FIGS_SAVING": False,
}


def get_settings(config_class) -> dict:
    """Returns the upper-case settings of a configuration class (inherited ones included)."""
    return {
        name: getattr(config_class, name)
        for name in dir(config_class)
        if name.isupper() and not name.startswith("_")
    }


def run_sweep_point(cfg_settings: dict, sparams_settings: dict) -> dict:
    """
    Runs one simulation of a sweep and summarizes it in a single row.

    Settings are passed as plain dictionaries so that the call can be sent to a worker process.
    """
    cfg = type("SweepUserConfig", (cfg_module,), dict(cfg_settings))
    sparams = type("SweepSimParams", (sparams_module,), dict(sparams_settings))

    reset_loggers()

    env = simpy.Environment()
    network = run_simulation(cfg, sparams, env)
    stats = network.stats

    offered_load = compute_offered_load(sparams)

    return {
        "num_transmitters": sparams.NUM_TRANSMITTERS,
        "num_channels": sparams.NUM_CHANNELS,
        "mean_interarrival_time_s": sparams.MEAN_INTERARRIVAL_TIME_s,
        "send_probability": sparams.SEND_PROBABILITY,
        "seed": cfg.SEED,
        "offered_load": offered_load,
        "theoretical_throughput": compute_slotted_aloha_throughput(
            offered_load, sparams.NUM_CHANNELS
        ),
        "avg_throughput_pkts_per_slot": stats.avg_throughput_pkts_per_slot,
        "avg_throughput_per_channel": stats.avg_throughput_per_channel,
        "delivery_ratio": stats.delivery_ratio,
        "collision_ratio": stats.collision_ratio,
        "mean_response_time_s": stats.response_time_s.get("mean", 0.0),
        "p99_response_time_s": stats.response_time_s.get("p99", 0.0),
        "avg_pkts_in_buffer": stats.avg_pkts_in_buffer,
        "total_pkts_created": stats.total_pkts_created,
        "total_pkts_delivered": stats.total_pkts_delivered,
    }


def run_sweep(
    cfg: cfg_module,
    sparams: sparams_module,
    param_name: str,
    values: list,
    max_workers: int = None,
    sequential: bool = False,
) -> pd.DataFrame:
    """
    Runs one simulation per value of a single setting.

    Args:
        cfg (cfg): The UserConfig object used as base of every run.
        sparams (sparams): The SimParams object used as base of every run.
        param_name (str): Name of the swept SimParams or UserConfig setting.
        values (list): Values taken by the swept setting.
        max_workers (int, optional): Worker processes. Defaults to half of the CPUs.
        sequential (bool, optional): Run in the calling process instead. Defaults to False.

    Returns:
        pd.DataFrame: One row per value, sorted by value.
    """
    logger = get_logger("SWEEP", cfg, sparams)

    cfg_settings = get_settings(cfg)
    sparams_settings = get_settings(sparams)

    if param_name in sparams_settings:
        swept_settings = sparams_settings
    elif param_name in cfg_settings:
        swept_settings = cfg_settings
    else:
        logger.error(f"Unknown setting '{param_name}'. Nothing to sweep.")
        return pd.DataFrame()

    cfg_settings.update(DISABLED_IN_SWEEPS)

    points = []
    for value in values:
        point_settings = dict(swept_settings)
        point_settings[param_name] = value
        if swept_settings is sparams_settings:
            points.append((value, cfg_settings, point_settings))
        else:
            points.append((value, point_settings, sparams_settings))

    logger.info(f"Sweeping {param_name} over {len(points)} values")

    rows = []

    def _add_row(value, row: dict):
        rows.append({"param": param_name, "value": value, **row})
        # Runs in this process reset the logger cache
        get_logger("SWEEP", cfg, sparams).info(
            f"{param_name} = {value} -> G = {row['offered_load']:.3f}, S = {row['avg_throughput_pkts_per_slot']:.3f} (theory {row['theoretical_throughput']:.3f})"
        )

    if sequential:
        for value, point_cfg, point_sparams in tqdm(points, desc=param_name):
            _add_row(value, run_sweep_point(point_cfg, point_sparams))
    else:
        max_workers = max_workers or max(1, (os.cpu_count() or 2) // 2)
        with concurrent.futures.ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(run_sweep_point, point_cfg, point_sparams): value
                for value, point_cfg, point_sparams in points
            }
            for future in tqdm(
                concurrent.futures.as_completed(futures),
                total=len(futures),
                desc=param_name,
            ):
                _add_row(futures[future], future.result())

    return pd.DataFrame(rows).sort_values("value").reset_index(drop=True)


if __name__ == "__main__":
    print(STARTING_EXECUTION_MSG)

    logger = get_logger("MAIN", cfg_module, sparams_module)

    validate_settings(cfg_module, sparams_module, logger)

    print(STARTING_SWEEP_MSG)

    # From light to heavy load (G = NUM_TRANSMITTERS * slot / mean interarrival)
    offered_loads = np.linspace(0.25, 3 * max(sparams_module.NUM_CHANNELS, 1), 12)
    interarrival_times = [
        float(sparams_module.NUM_TRANSMITTERS * sparams_module.TIME_SLOT_SIZE_s / g)
        for g in offered_loads
    ]

    results = run_sweep(
        cfg_module, sparams_module, "MEAN_INTERARRIVAL_TIME_s", interarrival_times
    )

    print(SWEEP_COMPLETED_MSG)

    logger.info(
        "\n"
        + results[
            [
                "offered_load",
                "avg_throughput_pkts_per_slot",
                "theoretical_throughput",
                "mean_response_time_s",
            ]
        ].to_string(index=False)
    )

    ThroughputPerLoadPlotter(cfg_module, sparams_module).plot_throughput_per_load(
        results
    )

    if len(plt.get_fignums()) > 0:
        input(PRESS_TO_EXIT_MSG)

    print(EXECUTION_TERMINATED_MSG)
