from tests._user_config_tests import UserConfig as cfg_module
from tests._sim_params_tests import SimParams as sparams_module
from tests._support_tests import NO_ARRIVALS_s

from alohasim.utils.event_logger import reset_loggers

import pytest
import simpy


@pytest.fixture(autouse=True)
def fresh_loggers():
    reset_loggers()
    yield
    reset_loggers()


@pytest.fixture
def cfg():
    """A fresh UserConfig subclass, so that each test can override settings freely."""
    return type("UserConfig", (cfg_module,), {})


@pytest.fixture
def sparams():
    """A fresh SimParams subclass, so that each test can override parameters freely."""
    return type("SimParams", (sparams_module,), {})


@pytest.fixture
def env():
    return simpy.Environment()


@pytest.fixture
def quiet_sparams(sparams):
    """Parameters of a network whose traffic generators stay silent."""
    sparams.MEAN_INTERARRIVAL_TIME_s = NO_ARRIVALS_s
    sparams.DETERMINISTIC_INTERARRIVAL_TIME = True
    return sparams
