from alohasim.utils.support import initialize_network, run_simulation

import pandas as pd
import pytest


def test_deterministic_arrivals(cfg, sparams, env):
    sparams.NUM_TRANSMITTERS = 1
    sparams.SEND_PROBABILITY = 0.0
    sparams.DETERMINISTIC_INTERARRIVAL_TIME = True
    sparams.MEAN_INTERARRIVAL_TIME_s = 2.5

    network = initialize_network(cfg, sparams, env)
    (tx,) = network.get_transmitters()

    env.run(until=11)

    assert [packet.creation_time_s for packet in tx.buffer] == [2.5, 5.0, 7.5, 10.0]
    assert [packet.id for packet in tx.buffer] == [1, 2, 3, 4]


def test_poisson_arrivals_match_the_mean_rate(cfg, sparams, env):
    sparams.NUM_TRANSMITTERS = 1
    sparams.SEND_PROBABILITY = 0.0
    sparams.MEAN_INTERARRIVAL_TIME_s = 2

    network = initialize_network(cfg, sparams, env)
    (tx,) = network.get_transmitters()

    env.run(until=4000)

    creation_times = pd.Series([packet.creation_time_s for packet in tx.buffer])
    assert creation_times.is_monotonic_increasing
    assert creation_times.diff().mean() == pytest.approx(2, rel=0.1)


def test_generated_traffic_is_recorded(cfg, sparams, env, tmp_path, monkeypatch):
    (tmp_path / "requirements.txt").write_text("")
    monkeypatch.chdir(tmp_path)

    cfg.SIMULATION_TIME_s = 100
    cfg.ENABLE_TRAFFIC_GEN_RECORDING = True
    cfg.TRAFFIC_GEN_RECORDING_PATH = "traces"

    network = run_simulation(cfg, sparams, env)

    for tx in network.get_transmitters():
        trace = pd.read_csv(tmp_path / "traces" / f"traffic_trace_tx_{tx.id}.csv")

        assert list(trace.columns) == [
            "node.src",
            "frame.number",
            "frame.time_relative",
            "sub_channel",
        ]
        assert len(trace) == tx.stats.pkts_created
        assert (trace["node.src"] == tx.id).all()
        assert trace["frame.number"].tolist() == list(range(1, len(trace) + 1))
        assert trace["sub_channel"].between(0, sparams.NUM_CHANNELS - 1).all()
