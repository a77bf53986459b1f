class SimParams:
    # --- Network Topology --- #
    NUM_TRANSMITTERS = 10  # Number of transmitting stations (one receiver is wired per transmitter)

    # --- Channel Parameters --- #
    NUM_CHANNELS = 4  # Number of sub-channels of the shared medium. 0 ends the simulation at start-up

    TIME_SLOT_SIZE_s = 1  # Duration of a slot in seconds

    # --- Traffic Parameters --- #
    MEAN_INTERARRIVAL_TIME_s = 10  # Mean time between two packet arrivals at a station in seconds
    DETERMINISTIC_INTERARRIVAL_TIME = False  # If True, packets arrive exactly every MEAN_INTERARRIVAL_TIME_s

    # --- MAC Layer Parameters --- #
    SEND_PROBABILITY = 0.5  # Probability of attempting a transmission when allowed to (p-persistence)

    ENABLE_BACKOFF = True  # Enable/disable binary exponential back-off after a collision
    MIN_BACKOFF_WINDOW = 2  # Back-off window after a successful transmission (doubles on each collision)

    # If False, the sub-channel of a packet is drawn once at its arrival.
    # If True, a new sub-channel is drawn at every transmission attempt.
    CHANGE_CHANNEL_AFTER_COLLISION = False
