from numba import jit

import numpy as np


@jit(nopython=True, nogil=True, cache=True)
def gbw_dipole(r2: float, Qs2: float) -> float:
    """Golec-Biernat-Wusthoff dipole ``exp(-r2 Qs2 / 4)``."""
    return np.exp(-0.25 * r2 * Qs2)


@jit(nopython=True, nogil=True, cache=True)
def mv_dipole(r2: float, Qs2: float, LambdaMV: float) -> float:
    """McLerran-Venugopalan dipole.

    Parameters
    ----------
    r2 : float
        Squared dipole size.
    Qs2 : float
        Saturation scale.
    LambdaMV : float
        Infrared scale inside the logarithm.

    Returns
    -------
    float
        ``exp(-r2 Qs2 / 4 * ln(1 / (r LambdaMV) + e))``, equal to 1 at ``r2 = 0``.
    """
    if r2 <= 0.0:
        return 1.0
    r = np.sqrt(r2)
    return np.exp(-0.25 * r2 * Qs2 * np.log(1.0 / (r * LambdaMV) + np.e))


@jit(nopython=True, nogil=True, cache=True)
def gbw_momentum(q2: float, Qs2: float) -> float:
    """Closed-form two-dimensional Fourier transform of :func:`gbw_dipole`."""
    return np.exp(-q2 / Qs2) / (np.pi * Qs2)
