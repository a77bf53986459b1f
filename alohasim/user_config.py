class UserConfig:
    # --- Simulation Parameters --- #
    SIMULATION_TIME_s = 300.0  # Total simulation time in seconds
    WARMUP_TIME_s = 0.0  # Observations before this time are not recorded

    SEED = 1  # Set to None for random behavior

    # --- Logging Configuration --- #
    ENABLE_CONSOLE_LOGGING = True  # Enable/disable displaying logs in the console (useful for debugging, may affect performance)
    USE_COLORS_IN_LOGS = True  # Enable/disable colored logs

    ENABLE_LOGS_RECORDING = (
        False  # Enable/disable recording logs (may affect performance)
    )
    LOGS_RECORDING_PATH = "data/events"  # Path to the directory where logs will be recorded

    # Logging exclusions (if ENABLE_CONSOLE_LOGGING or ENABLE_LOGS_RECORDING is enabled)
    # Format: { "<module_name>": ["<excluded_log_level_1>", "<excluded_log_level_2>", ...] }
    # <module_name>: Module name (e.g., "NETWORK", "TX", "CHANNEL", "RX", "GEN", "STATS", "SWEEP", "PLOTTER")
    # <excluded_log_level>: Log levels to exclude (e.g., "HEADER","DEBUG", "INFO", "WARNING", "ALL")
    EXCLUDED_LOGS = {
        "NETWORK": ["ALL"],
        "TX": ["ALL"],
        "CHANNEL": ["ALL"],
        "RX": ["ALL"],
        "GEN": ["ALL"],
        "STATS": ["ALL"],
    }
    # Logging exclusions for specific transmitter/receiver IDs (if ENABLE_CONSOLE_LOGGING or ENABLE_LOGS_RECORDING is enabled)
    EXCLUDED_IDS = []

    # --- Visualization --- #
    ENABLE_FIGS_DISPLAY = False  # Enable/disable displaying figures
    ENABLE_FIGS_SAVING = False  # Enable/disable saving figures
    FIGS_SAVE_PATH = "figs/sim"

    # --- Traffic Recording --- #
    # Enable/disable traffic generation recording (may affect performance)
    ENABLE_TRAFFIC_GEN_RECORDING = False
    TRAFFIC_GEN_RECORDING_PATH = "data/sim_traces/run_1"

    # --- Statistics Collection --- #
    ENABLE_STATS_COLLECTION = False  # Enable/disable saving the collected statistics
    STATS_SAVE_PATH = "data/statistics"
