class UserConfig:
    # --- Simulation Parameters --- #
    SIMULATION_TIME_s = 100.0
    WARMUP_TIME_s = 0.0

    SEED = 1

    # --- Logging Configuration --- #
    ENABLE_CONSOLE_LOGGING = False
    USE_COLORS_IN_LOGS = False

    ENABLE_LOGS_RECORDING = False
    LOGS_RECORDING_PATH = "tests/events"
    EXCLUDED_LOGS = {
        "NETWORK": ["ALL"],
        "TX": ["ALL"],
        "CHANNEL": ["ALL"],
        "RX": ["ALL"],
        "GEN": ["ALL"],
    }
    EXCLUDED_IDS = []

    # --- Visualization --- #
    ENABLE_FIGS_DISPLAY = False
    ENABLE_FIGS_SAVING = False
    FIGS_SAVE_PATH = "figs/tests"

    # --- Traffic Recording --- #
    ENABLE_TRAFFIC_GEN_RECORDING = False
    TRAFFIC_GEN_RECORDING_PATH = "tests/sim_traces"

    # --- Statistics Collection --- #
    ENABLE_STATS_COLLECTION = False
    STATS_SAVE_PATH = "tests/statistics"
