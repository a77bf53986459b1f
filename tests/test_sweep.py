from alohasim.sweep import get_settings, run_sweep, run_sweep_point


def test_settings_include_inherited_ones(sparams):
    sparams.NUM_CHANNELS = 3

    settings = get_settings(sparams)

    assert settings["NUM_CHANNELS"] == 3
    assert settings["MIN_BACKOFF_WINDOW"] == 2


def test_sweep_point_summarizes_a_run(cfg, sparams):
    cfg.SIMULATION_TIME_s = 50
    sparams.SEND_PROBABILITY = 0.0

    row = run_sweep_point(get_settings(cfg), get_settings(sparams))

    assert row["avg_throughput_pkts_per_slot"] == 0
    assert row["total_pkts_delivered"] == 0
    assert row["offered_load"] == sparams.NUM_TRANSMITTERS / 10


def test_sequential_sweep_over_send_probability(cfg, sparams):
    cfg.SIMULATION_TIME_s = 100

    results = run_sweep(
        cfg, sparams, "SEND_PROBABILITY", [1.0, 0.0], sequential=True
    )

    assert results["value"].tolist() == [0.0, 1.0]
    assert results["send_probability"].tolist() == [0.0, 1.0]
    assert (results["param"] == "SEND_PROBABILITY").all()
    assert results.loc[0, "total_pkts_delivered"] == 0
    assert results.loc[1, "total_pkts_delivered"] > 0


def test_sweep_over_a_user_setting(cfg, sparams):
    cfg.SIMULATION_TIME_s = 50

    results = run_sweep(cfg, sparams, "SEED", [1, 2], sequential=True)

    assert results["seed"].tolist() == [1, 2]


def test_unknown_setting_is_not_swept(cfg, sparams):
    cfg.ENABLE_CONSOLE_LOGGING = True

    # Reported as an error, the execution goes on
    results = run_sweep(cfg, sparams, "NOT_A_SETTING", [1], sequential=True)

    assert results.empty
