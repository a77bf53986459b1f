from alohasim.sim_params import SimParams as sparams_module

import numpy as np


# Roberts' slotted ALOHA: S = G * exp(-G), split over independent sub-channels
def compute_offered_load(sparams: sparams_module) -> float:
    """
    Calculates the offered load G of a configuration.

    Parameters
    ----------
    sparams: SimParams
        Protocol parameters of the run.

    Returns
    -------
    float
        Packets generated per slot by the whole network.
    """
    return (
        sparams.NUM_TRANSMITTERS
        * sparams.TIME_SLOT_SIZE_s
        / sparams.MEAN_INTERARRIVAL_TIME_s
    )


def compute_slotted_aloha_throughput(offered_load, num_channels: int = 1):
    """
    Calculates the slotted ALOHA throughput S for an offered load G.

    The load is spread uniformly over the sub-channels, each of them delivering
    a packet only when exactly one attempt is made on it.

    Parameters
    ----------
    offered_load: float or array-like
        Offered load G (packets per slot).
    num_channels: int
        Number of independent sub-channels.

    Returns
    -------
    float or np.ndarray
        Throughput S (packets delivered per slot). 0 without sub-channels.
    """
    g = np.asarray(offered_load, dtype=float)

    if num_channels <= 0:
        s = np.zeros_like(g)
    else:
        s = g * np.exp(-g / num_channels)

    return float(s) if s.ndim == 0 else s


def compute_max_throughput(num_channels: int = 1) -> tuple[float, float]:
    """
    Returns the optimal offered load and the maximum throughput (N_ch / e reached at G = N_ch).
    """
    if num_channels <= 0:
        return 0.0, 0.0
    return float(num_channels), float(num_channels * np.exp(-1))
