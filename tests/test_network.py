from alohasim.components.network import CHANNEL_NODE
from alohasim.utils.support import initialize_network, run_simulation

import pytest
import simpy


@pytest.fixture
def loaded_sparams(sparams):
    sparams.NUM_TRANSMITTERS = 4
    sparams.NUM_CHANNELS = 2
    sparams.MEAN_INTERARRIVAL_TIME_s = 3
    sparams.SEND_PROBABILITY = 0.5
    return sparams


def test_stations_are_wired_gate_by_gate(cfg, loaded_sparams, env):
    network = initialize_network(cfg, loaded_sparams, env)

    transmitters = network.get_transmitters()
    receivers = network.get_receivers()

    assert [tx.id for tx in transmitters] == [1, 2, 3, 4]
    assert [tx.gate for tx in transmitters] == [0, 1, 2, 3]
    assert [rx.gate for rx in receivers] == [0, 1, 2, 3]

    assert network.get_transmitter(2) is transmitters[2]
    assert network.get_receiver(5) is None

    graph = network.graph
    assert graph.number_of_nodes() == 1 + 2 * 4
    assert graph.number_of_edges() == 2 * 4
    assert graph.has_edge("TX 1", CHANNEL_NODE)
    assert graph.has_edge(CHANNEL_NODE, "RX 1")


def test_every_transmitter_gets_one_reply_per_slot(cfg, loaded_sparams, env):
    cfg.SIMULATION_TIME_s = 200.5

    network = run_simulation(cfg, loaded_sparams, env)

    assert len(network.channel.stats.throughput_history) == 200

    for tx in network.get_transmitters():
        stats = tx.stats
        assert stats.acks_rx + stats.nacks_rx + stats.prompts_rx == 200


def test_delivered_packets_reach_their_receiver_once(cfg, loaded_sparams, env):
    cfg.SIMULATION_TIME_s = 300

    network = run_simulation(cfg, loaded_sparams, env)

    total_acks = 0
    for tx, rx in zip(network.get_transmitters(), network.get_receivers()):
        history = rx.stats.rx_packets_history

        assert rx.stats.pkts_rx == tx.stats.acks_rx
        assert (history["id_transmitter"] == tx.id).all()
        assert history["packet_id"].is_unique
        assert (history["response_time_s"] >= 1).all()

        total_acks += tx.stats.acks_rx

    assert total_acks > 0
    assert network.stats.total_pkts_delivered == total_acks
    assert network.stats.total_pkts_rx == total_acks


def test_same_seed_same_run(cfg, loaded_sparams):
    cfg.SIMULATION_TIME_s = 100

    first = run_simulation(cfg, loaded_sparams, simpy.Environment())
    second = run_simulation(cfg, loaded_sparams, simpy.Environment())

    assert (
        first.channel.stats.throughput_history["pkts_sent"].tolist()
        == second.channel.stats.throughput_history["pkts_sent"].tolist()
    )
    assert first.stats.total_pkts_created == second.stats.total_pkts_created


def test_collected_stats_are_consistent(cfg, loaded_sparams, env):
    cfg.SIMULATION_TIME_s = 300

    network = run_simulation(cfg, loaded_sparams, env)
    stats = network.stats

    assert stats.total_pkts_created > 0
    assert 0 <= stats.delivery_ratio <= 1
    assert 0 <= stats.collision_ratio <= 1
    assert stats.total_collisions == network.channel.stats.collisions
    # The boundary at t=300 is not processed
    assert stats.channel_stats["slots"] == 299
    assert sum(stats.channel_stats["collisions_per_channel"].values()) == (
        stats.total_collisions
    )
    assert stats.avg_throughput_per_channel == pytest.approx(
        stats.avg_throughput_pkts_per_slot / 2
    )
    assert set(stats.per_transmitter_stats) == {1, 2, 3, 4}
    assert set(stats.per_receiver_stats) == {1, 2, 3, 4}

    # Buffers are released at shutdown
    assert all(len(tx.buffer) == 0 for tx in network.get_transmitters())
