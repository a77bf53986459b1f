from alohasim.utils.theoretical import (
    compute_max_throughput,
    compute_offered_load,
    compute_slotted_aloha_throughput,
)

from alohasim.utils.support import run_simulation

import numpy as np
import simpy
import pytest


def test_offered_load(sparams):
    sparams.NUM_TRANSMITTERS = 10
    sparams.MEAN_INTERARRIVAL_TIME_s = 4
    sparams.TIME_SLOT_SIZE_s = 2

    assert compute_offered_load(sparams) == pytest.approx(5)


def test_single_channel_peak_is_one_over_e():
    assert compute_slotted_aloha_throughput(1.0) == pytest.approx(np.exp(-1))
    assert compute_max_throughput(1) == pytest.approx((1.0, np.exp(-1)))


def test_load_is_split_over_sub_channels():
    loads = np.array([0.0, 2.0, 4.0])

    throughput = compute_slotted_aloha_throughput(loads, num_channels=2)

    assert throughput == pytest.approx(loads * np.exp(-loads / 2))
    assert throughput[1] == pytest.approx(compute_max_throughput(2)[1])


def test_no_sub_channels_no_throughput():
    assert compute_slotted_aloha_throughput(3.0, num_channels=0) == 0
    assert compute_max_throughput(0) == (0.0, 0.0)


def test_simulation_follows_slotted_aloha_at_light_load(cfg, sparams):
    # With light load almost every packet gets through: S ~ G
    sparams.NUM_TRANSMITTERS = 5
    sparams.NUM_CHANNELS = 4
    sparams.MEAN_INTERARRIVAL_TIME_s = 50
    cfg.SIMULATION_TIME_s = 5000
    cfg.WARMUP_TIME_s = 100

    network = run_simulation(cfg, sparams, simpy.Environment())

    offered_load = compute_offered_load(sparams)
    assert network.stats.avg_throughput_pkts_per_slot == pytest.approx(
        offered_load, rel=0.2
    )
