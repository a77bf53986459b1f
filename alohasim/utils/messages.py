BANNER_WIDTH = 66

YELLOW = "\033[93m"
RESET = "\033[0m"


def _banner(text: str = "") -> str:
    """Yellow '=' line with the text centered in it."""
    label = f"  {text}  " if text else ""
    return f"{YELLOW}{label.center(BANNER_WIDTH, '=')}{RESET}"


STARTING_EXECUTION_MSG = _banner("STARTING EXECUTION")
EXECUTION_TERMINATED_MSG = _banner("EXECUTION TERMINATED")

STARTING_SIMULATION_MSG = _banner("STARTING SIMULATION")
SIMULATION_TERMINATED_MSG = _banner("SIMULATION TERMINATED")

STARTING_SWEEP_MSG = _banner("STARTING SWEEP")
SWEEP_COMPLETED_MSG = _banner("SWEEP COMPLETED")

PRESS_TO_EXIT_MSG = _banner("Press Enter to exit and close all plots")
PRESS_TO_CONTINUE_MSG = _banner("Press Enter to continue")

SECTION_DIVIDER_MSG = _banner()
