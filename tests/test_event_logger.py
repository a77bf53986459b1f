from alohasim.utils.event_logger import get_logger, flush_loggers, LOGGER_CACHE

import logging
import json
import os

import pytest


def test_loggers_are_cached(cfg, sparams):
    assert get_logger("SWEEP", cfg, sparams) is get_logger("SWEEP", cfg, sparams)
    assert "SWEEP" in LOGGER_CACHE


def test_critical_ends_the_execution(cfg, sparams):
    logger = get_logger("TEST", cfg, sparams)

    with pytest.raises(SystemExit):
        logger.critical("Invalid setting")


def test_excluded_ids_get_a_silent_logger(cfg, sparams):
    cfg.ENABLE_CONSOLE_LOGGING = True

    logger = get_logger("TX", cfg, sparams, excluded=True)

    assert logger.name == "TX.EXCLUDED"
    assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)


def test_logs_are_recorded_as_json(cfg, sparams, env, tmp_path):
    cfg.ENABLE_LOGS_RECORDING = True
    cfg.LOGS_RECORDING_PATH = str(tmp_path / "events")

    logger = get_logger("SWEEP", cfg, sparams, env)
    logger.info("Sweep started")
    logger.success("Sweep completed")

    # Excluded module
    get_logger("NETWORK", cfg, sparams, env).info("Not recorded")

    flush_loggers()

    with open(os.path.join(cfg.LOGS_RECORDING_PATH, "session_logs.json")) as f:
        logs = json.load(f)["logs"]

    assert [entry["message"] for entry in logs] == ["Sweep started", "Sweep completed"]
    assert logs[1]["level"] == "SUCCESS"
    assert logs[0]["module"] == "SWEEP"
