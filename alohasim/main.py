from alohasim.user_config import UserConfig as cfg_module
from alohasim.sim_params import SimParams as sparams_module

from alohasim.utils.plotters import NetworkPlotter, ThroughputPlotter, DelayPlotter
from alohasim.utils.support import run_simulation, validate_settings
from alohasim.utils.theoretical import (
    compute_offered_load,
    compute_slotted_aloha_throughput,
)
from alohasim.utils.event_logger import get_logger
from alohasim.utils.messages import (
    STARTING_EXECUTION_MSG,
    EXECUTION_TERMINATED_MSG,
    STARTING_SIMULATION_MSG,
    SIMULATION_TERMINATED_MSG,
    PRESS_TO_EXIT_MSG,
    SECTION_DIVIDER_MSG,
)

import simpy
import matplotlib.pyplot as plt


if __name__ == "__main__":
    print(STARTING_EXECUTION_MSG)

    logger = get_logger("MAIN", cfg_module, sparams_module)

    validate_settings(cfg_module, sparams_module, logger)

    print(STARTING_SIMULATION_MSG)

    env = simpy.Environment()
    network = run_simulation(cfg_module, sparams_module, env)

    print(SIMULATION_TERMINATED_MSG)

    if network.is_terminated():
        logger.warning("The simulation ended before processing any event.")
    else:
        network.stats.display_stats()

        print(SECTION_DIVIDER_MSG)

        offered_load = compute_offered_load(sparams_module)
        logger.info(
            f"Offered load G = {offered_load:.4f} pkts/slot -> slotted ALOHA throughput S = {compute_slotted_aloha_throughput(offered_load, sparams_module.NUM_CHANNELS):.4f} pkts/slot (simulated {network.stats.avg_throughput_pkts_per_slot:.4f})"
        )

        NetworkPlotter(cfg_module, sparams_module, env).plot_network(network)
        ThroughputPlotter(cfg_module, sparams_module, env).plot_throughput(
            network.channel.stats.throughput_history
        )
        DelayPlotter(cfg_module, sparams_module, env).plot_delay_distribution(
            network.channel.stats.response_time_history
        )

    if len(plt.get_fignums()) > 0:
        input(PRESS_TO_EXIT_MSG)

    print(EXECUTION_TERMINATED_MSG)
