from alohasim.user_config import UserConfig as cfg
from alohasim.sim_params import SimParams as sparams

from alohasim.components.network import Network
from alohasim.utils.event_logger import flush_loggers
from alohasim.utils.file_manager import clean_folder, get_output_folder
from alohasim.utils.messages import PRESS_TO_CONTINUE_MSG

import os
import simpy
import random
import logging


VALID_LOG_MODULES = [
    "NETWORK",
    "TX",
    "CHANNEL",
    "RX",
    "GEN",
    "STATS",
    "SWEEP",
    "PLOTTER",
]
VALID_LOG_LEVELS = ["HEADER", "DEBUG", "INFO", "WARNING", "ALL"]


def validate_params(sparams: sparams, logger: logging.Logger):
    bool_params = {
        "DETERMINISTIC_INTERARRIVAL_TIME": sparams.DETERMINISTIC_INTERARRIVAL_TIME,
        "ENABLE_BACKOFF": sparams.ENABLE_BACKOFF,
        "CHANGE_CHANNEL_AFTER_COLLISION": sparams.CHANGE_CHANNEL_AFTER_COLLISION,
    }

    for name, value in bool_params.items():
        if not isinstance(value, bool):
            logger.critical(f"Invalid {name}: {value}. It must be a boolean.")

    positive_int_params = {
        "NUM_TRANSMITTERS": sparams.NUM_TRANSMITTERS,
        "MIN_BACKOFF_WINDOW": sparams.MIN_BACKOFF_WINDOW,
    }

    for name, value in positive_int_params.items():
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            logger.critical(f"Invalid {name}: {value}. It must be a positive integer.")

    # Zero sub-channels is accepted: the channel ends the simulation at start-up
    if (
        not isinstance(sparams.NUM_CHANNELS, int)
        or isinstance(sparams.NUM_CHANNELS, bool)
        or sparams.NUM_CHANNELS < 0
    ):
        logger.critical(
            f"Invalid NUM_CHANNELS: {sparams.NUM_CHANNELS}. It must be a non-negative integer."
        )

    positive_float_or_int_params = {
        "TIME_SLOT_SIZE_s": sparams.TIME_SLOT_SIZE_s,
        "MEAN_INTERARRIVAL_TIME_s": sparams.MEAN_INTERARRIVAL_TIME_s,
    }

    for name, value in positive_float_or_int_params.items():
        if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
            logger.critical(
                f"Invalid {name}: {value}. It must be a positive integer or float."
            )

    if not isinstance(sparams.SEND_PROBABILITY, (int, float)) or not (
        0 <= sparams.SEND_PROBABILITY <= 1
    ):
        logger.critical(
            f"Invalid SEND_PROBABILITY: {sparams.SEND_PROBABILITY}. It must be between 0 and 1."
        )

    logger.success("Simulation parameters validated.")


def validate_config(cfg: cfg, sparams: sparams, logger: logging.Logger) -> None:
    if (
        not isinstance(cfg.SIMULATION_TIME_s, (int, float))
        or cfg.SIMULATION_TIME_s <= 0
    ):
        logger.critical(
            f"Invalid SIMULATION_TIME_s: {cfg.SIMULATION_TIME_s}. It must be a positive number."
        )

    if not isinstance(cfg.WARMUP_TIME_s, (int, float)) or not (
        0 <= cfg.WARMUP_TIME_s < cfg.SIMULATION_TIME_s
    ):
        logger.critical(
            f"Invalid WARMUP_TIME_s: {cfg.WARMUP_TIME_s}. It must be non-negative and lower than SIMULATION_TIME_s ({cfg.SIMULATION_TIME_s})."
        )

    if cfg.SEED is not None:
        if not isinstance(cfg.SEED, int):
            logger.critical(f"Invalid SEED: {cfg.SEED}. It must be an integer.")
        random.seed(cfg.SEED)

    bool_settings = {
        "ENABLE_CONSOLE_LOGGING": cfg.ENABLE_CONSOLE_LOGGING,
        "USE_COLORS_IN_LOGS": cfg.USE_COLORS_IN_LOGS,
        "ENABLE_LOGS_RECORDING": cfg.ENABLE_LOGS_RECORDING,
        "ENABLE_FIGS_DISPLAY": cfg.ENABLE_FIGS_DISPLAY,
        "ENABLE_FIGS_SAVING": cfg.ENABLE_FIGS_SAVING,
        "ENABLE_TRAFFIC_GEN_RECORDING": cfg.ENABLE_TRAFFIC_GEN_RECORDING,
        "ENABLE_STATS_COLLECTION": cfg.ENABLE_STATS_COLLECTION,
    }

    for name, value in bool_settings.items():
        if not isinstance(value, bool):
            logger.critical(f"Invalid {name}: '{value}'. It must be a boolean.")

    str_settings = {
        "LOGS_RECORDING_PATH": cfg.LOGS_RECORDING_PATH,
        "FIGS_SAVE_PATH": cfg.FIGS_SAVE_PATH,
        "TRAFFIC_GEN_RECORDING_PATH": cfg.TRAFFIC_GEN_RECORDING_PATH,
        "STATS_SAVE_PATH": cfg.STATS_SAVE_PATH,
    }
    for name, value in str_settings.items():
        if not isinstance(value, str):
            logger.critical(f"Invalid {name}: '{value}'. It must be a string.")

    for module, levels in cfg.EXCLUDED_LOGS.items():
        if module not in VALID_LOG_MODULES:
            logger.warning(f"Invalid module name: '{module}' in EXCLUDED_LOGS.")

        for level in levels:
            if level not in VALID_LOG_LEVELS:
                logger.warning(
                    f"Invalid log level: '{level}' for module: '{module}' in EXCLUDED_LOGS."
                )

    if not isinstance(cfg.EXCLUDED_IDS, list) or not all(
        isinstance(id_, int) for id_ in cfg.EXCLUDED_IDS
    ):
        logger.critical(
            f"Invalid EXCLUDED_IDS: {cfg.EXCLUDED_IDS}. It must be a list of integers."
        )

    path_settings = {
        cfg.LOGS_RECORDING_PATH: cfg.ENABLE_LOGS_RECORDING,
        cfg.FIGS_SAVE_PATH: cfg.ENABLE_FIGS_SAVING,
        cfg.STATS_SAVE_PATH: cfg.ENABLE_STATS_COLLECTION,
    }

    for path, enabled in path_settings.items():
        if enabled:
            if not os.path.exists(path):
                logger.warning(f"Path '{path}' does not exist. Creating it...")
                os.makedirs(path)

    logger.success("User configuration validated.")


def warn_overwriting_enabled_paths(cfg: cfg, logger: logging.Logger):
    path_settings = {
        "logs": cfg.ENABLE_LOGS_RECORDING,
        "figures": cfg.ENABLE_FIGS_SAVING,
        "traffic generated": cfg.ENABLE_TRAFFIC_GEN_RECORDING,
        "statistics": cfg.ENABLE_STATS_COLLECTION,
    }

    enabled_settings = [name for name, enabled in path_settings.items() if enabled]

    if not enabled_settings:
        return

    logger.warning(
        f"The following data will be recorded: {', '.join(enabled_settings)}."
    )
    logger.warning(
        f"Existing files in the configured paths for {', '.join(enabled_settings)} will be overwritten. Save existing files first if you don't want to overwrite them."
    )
    input(PRESS_TO_CONTINUE_MSG)


def validate_settings(cfg: cfg, sparams: sparams, logger: logging.Logger):
    validate_params(sparams, logger)
    validate_config(cfg, sparams, logger)
    warn_overwriting_enabled_paths(cfg, logger)


def initialize_network(
    cfg: cfg, sparams: sparams, env: simpy.Environment, network: Network = None
) -> Network:
    """
    Builds the network: the channel, then one transmitter and one receiver per gate.

    Stations are numbered from 1. No station is created when the channel ended the
    simulation at start-up.
    """
    if not network:
        network = Network(cfg, sparams, env)

    if network.is_terminated():
        return network

    for gate in range(sparams.NUM_TRANSMITTERS):
        station_id = gate + 1
        network.add_transmitter(station_id)
        network.add_receiver(station_id)

    network.logger.info(f"Network initialized: {network}")

    return network


def run_simulation(cfg: cfg, sparams: sparams, env: simpy.Environment) -> Network:
    """
    Runs a whole simulation: builds the network, runs it until SIMULATION_TIME_s,
    runs the shutdown hooks and aggregates the statistics.
    """
    if cfg.ENABLE_TRAFFIC_GEN_RECORDING:
        clean_folder(get_output_folder(cfg.TRAFFIC_GEN_RECORDING_PATH))

    network = initialize_network(cfg, sparams, env)

    if not network.is_terminated():
        env.run(until=cfg.SIMULATION_TIME_s)

    network.finish()
    network.stats.collect_stats()

    flush_loggers()

    return network
