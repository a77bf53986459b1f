from alohasim.utils.event_logger import get_logger
from alohasim.utils.support import (
    validate_config,
    validate_params,
    validate_settings,
)

import pytest


@pytest.fixture
def logger(cfg, sparams):
    return get_logger("TEST", cfg, sparams)


def test_default_settings_are_valid(cfg, sparams, logger):
    validate_settings(cfg, sparams, logger)


def test_zero_sub_channels_is_a_valid_setting(cfg, sparams, logger):
    sparams.NUM_CHANNELS = 0
    validate_params(sparams, logger)


@pytest.mark.parametrize(
    "name, value",
    [
        ("NUM_CHANNELS", -1),
        ("NUM_CHANNELS", 1.5),
        ("NUM_TRANSMITTERS", 0),
        ("SEND_PROBABILITY", 1.5),
        ("TIME_SLOT_SIZE_s", 0),
        ("MEAN_INTERARRIVAL_TIME_s", -3),
        ("ENABLE_BACKOFF", "yes"),
    ],
)
def test_invalid_params_end_the_execution(sparams, logger, name, value):
    setattr(sparams, name, value)

    with pytest.raises(SystemExit):
        validate_params(sparams, logger)


@pytest.mark.parametrize(
    "name, value",
    [
        ("SIMULATION_TIME_s", 0),
        ("WARMUP_TIME_s", -1),
        ("WARMUP_TIME_s", 100.0),
        ("SEED", "one"),
        ("ENABLE_STATS_COLLECTION", 1),
        ("EXCLUDED_IDS", "1"),
    ],
)
def test_invalid_config_ends_the_execution(cfg, sparams, logger, name, value):
    setattr(cfg, name, value)

    with pytest.raises(SystemExit):
        validate_config(cfg, sparams, logger)


def test_recording_paths_are_created(cfg, sparams, logger, tmp_path):
    cfg.ENABLE_STATS_COLLECTION = True
    cfg.STATS_SAVE_PATH = str(tmp_path / "new" / "statistics")

    validate_config(cfg, sparams, logger)

    assert (tmp_path / "new" / "statistics").is_dir()
