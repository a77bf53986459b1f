from alohasim.sim_params import SimParams as sparams
from alohasim.user_config import UserConfig as cfg

from alohasim.utils.messages import EXECUTION_TERMINATED_MSG

from datetime import datetime
import logging
import simpy
import json
import os


# Levels added on top of the standard ones
HEADER_LEVEL = 5  # Slot boundaries and plot titles
DEFAULT_LEVEL = 15  # End-of-run summaries of a component
SUCCESS_LEVEL = 25  # Completed validations and saved outputs

CUSTOM_LEVELS = {
    "HEADER": HEADER_LEVEL,
    "DEFAULT": DEFAULT_LEVEL,
    "SUCCESS": SUCCESS_LEVEL,
}

COLORS = {
    "HEADER": "\033[95m",  # Magenta
    "DEBUG": "\033[94m",  # Blue
    "INFO": "\033[96m",  # Cyan
    "DEFAULT": "\033[0m",  # Default color
    "SUCCESS": "\033[92m",  # Green
    "WARNING": "\033[38;5;214m",  # Orange
    "ERROR": "\033[91m",  # Red
    "CRITICAL": "\033[1;38;5;1m",  # Bold Dark Red
}
RESET_COLOR = COLORS["DEFAULT"]

# Modules that log regardless of ENABLE_CONSOLE_LOGGING
ALWAYS_INCLUDED_MODULES = ["MAIN", "TEST"]

LOGS_RECORDING_FILENAME = "session_logs.json"

LOGGER_CACHE = {}
_recording_handler = None  # Shared by every logger, so that a single file is written


def _add_logging_level(level_name: str, level: int):
    """Registers a level and the Logger method named after it (e.g. logger.success)."""
    logging.addLevelName(level, level_name)

    def log_for_level(self, message: str, *args, **kwargs):
        if self.isEnabledFor(level):
            self._log(level, message, args, **kwargs)

    log_for_level.__name__ = level_name.lower()
    setattr(logging.Logger, level_name.lower(), log_for_level)


for _name, _level in CUSTOM_LEVELS.items():
    _add_logging_level(_name, _level)


def _get_slot(env: simpy.Environment, sparams: sparams) -> int:
    if env is None or not sparams.TIME_SLOT_SIZE_s:
        return 0
    return int(env.now // sparams.TIME_SLOT_SIZE_s)


class ConfigFilter(logging.Filter):
    """Drops the levels listed in EXCLUDED_LOGS for the module of the record."""

    def __init__(self, cfg: cfg):
        super().__init__()
        self.cfg = cfg

    def filter(self, record: logging.LogRecord) -> bool:
        # "TX.EXCLUDED" shares the exclusions of "TX"
        module_name = record.name.split(".")[0]
        excluded_levels = self.cfg.EXCLUDED_LOGS.get(module_name, [])
        return "ALL" not in excluded_levels and record.levelname not in excluded_levels


class ConsoleFormatter(logging.Formatter):
    """
    Stamps console records with the simulated time and slot, with optional colors.

    A CRITICAL record ends the execution (SystemExit) instead of being printed.
    """

    def __init__(self, cfg: cfg, sparams: sparams, env: simpy.Environment = None):
        super().__init__()
        self.cfg = cfg
        self.sparams = sparams
        self.env = env

    def _colorize(self, levelname: str, text: str) -> str:
        if not self.cfg.USE_COLORS_IN_LOGS:
            return text
        return f"{COLORS.get(levelname, RESET_COLOR)}{text}{RESET_COLOR}"

    def format(self, record: logging.LogRecord) -> str:
        message = self._colorize(record.levelname, record.getMessage())

        if record.levelname == "CRITICAL":
            raise SystemExit(
                f"{record.levelname}: {message}\n{EXECUTION_TERMINATED_MSG}"
            )

        if self.env is None:
            return f"{self._colorize(record.levelname, record.levelname)}: {message}"

        slot = _get_slot(self.env, self.sparams)
        return f"[t = {self.env.now:^12.4f} | slot {slot:>6}] {record.name:^10} {message}"


class JSONFileHandler(logging.Handler):
    """
    Records log entries in a JSON document ({"creation_time", "logs"}).

    Entries are kept in memory and the whole document is written on flush.
    """

    def __init__(
        self,
        filename: str,
        sparams: sparams,
        env: simpy.Environment = None,
    ):
        super().__init__()
        self.filename = filename
        self.sparams = sparams
        self.env = env

        self.creation_time = datetime.now().strftime("%Y-%m-%dT%H:%M:%S")
        self.entries = []
        self.is_closed = False

        self.flush()  # Empty document, overwriting the previous session

    def emit(self, record: logging.LogRecord) -> None:
        self.entries.append(
            {
                "level": record.levelname,
                "sim_time": self.env.now if self.env else 0,
                "slot": _get_slot(self.env, self.sparams),
                "module": record.name,
                "message": record.getMessage(),
            }
        )

    def flush(self) -> None:
        if self.is_closed:
            return
        with open(self.filename, "w") as file:
            json.dump(
                {"creation_time": self.creation_time, "logs": self.entries},
                file,
                indent=4,
            )

    def close(self) -> None:
        self.flush()
        self.is_closed = True
        super().close()


def _get_recording_handler(
    cfg: cfg, sparams: sparams, env: simpy.Environment = None
) -> JSONFileHandler:
    global _recording_handler

    if _recording_handler is None:
        os.makedirs(cfg.LOGS_RECORDING_PATH, exist_ok=True)
        _recording_handler = JSONFileHandler(
            os.path.join(cfg.LOGS_RECORDING_PATH, LOGS_RECORDING_FILENAME),
            sparams,
            env,
        )
        _recording_handler.addFilter(ConfigFilter(cfg))

    return _recording_handler


def get_logger(
    module_name: str,
    cfg: cfg,
    sparams: sparams,
    env: simpy.Environment = None,
    excluded: bool = False,
) -> logging.Logger:
    """
    Get the logger of a module, configured once from the UserConfig and cached.

    Args:
        module_name (str): Name of the module (e.g. "TX", "CHANNEL").
        cfg (cfg): The UserConfig object.
        sparams (sparams): The SimParams object.
        env (simpy.Environment, optional): The simulation environment. Defaults to None.
        excluded (bool, optional): Whether the caller's ID is listed in EXCLUDED_IDS. Defaults to False.

    Returns:
        logging.Logger: The logger instance.
    """
    if excluded:
        # Silent logger shared by every excluded ID of the module
        module_name = f"{module_name}.EXCLUDED"

    if module_name in LOGGER_CACHE:
        return LOGGER_CACHE[module_name]

    logger = logging.getLogger(module_name)
    logger.setLevel(HEADER_LEVEL)
    logger.propagate = False

    console_enabled = not excluded and (
        cfg.ENABLE_CONSOLE_LOGGING or module_name in ALWAYS_INCLUDED_MODULES
    )
    recording_enabled = not excluded and cfg.ENABLE_LOGS_RECORDING

    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ConsoleFormatter(cfg, sparams, env))
        console_handler.addFilter(ConfigFilter(cfg))
        logger.addHandler(console_handler)

    if recording_enabled:
        logger.addHandler(_get_recording_handler(cfg, sparams, env))

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    LOGGER_CACHE[module_name] = logger

    return logger


def update_loggers_environment(env: simpy.Environment):
    """Points every cached logger to the environment of a new run."""
    for logger in LOGGER_CACHE.values():
        for handler in logger.handlers:
            if isinstance(handler.formatter, ConsoleFormatter):
                handler.formatter.env = env

    if _recording_handler is not None:
        _recording_handler.env = env


def flush_loggers():
    """Writes the recorded logs to disk."""
    if _recording_handler is not None:
        _recording_handler.flush()


def reset_loggers():
    """Drops every cached logger, so that the next get_logger call applies the current configuration."""
    global _recording_handler

    for logger in LOGGER_CACHE.values():
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
    LOGGER_CACHE.clear()

    if _recording_handler is not None:
        _recording_handler.close()
        _recording_handler = None
