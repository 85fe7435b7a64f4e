"""Adaptive quadrature for position-to-momentum space transforms.

The momentum-space distribution is the two-dimensional Fourier transform of
the dipole. For an azimuthally symmetric dipole this reduces to a Hankel
transform of order zero:

.. math::

    F(q^2) = \\frac{1}{2\\pi} \\int_0^\\infty r\\, J_0(q r)\\, S_2(r^2)\\, dr.

Expanding :math:`J_0(q r) \\approx 1 - q^2 r^2 / 4` gives the small-``q2``
series used below the grid, whose coefficients are moments of the dipole.
"""

from __future__ import annotations

import logging
import math
from typing import Callable

import numpy as np
from scipy.integrate import quad
from scipy.special import j0

from gluondistpy.errors import QuadratureError

log = logging.getLogger(__name__)


def integrate(
    f: Callable[[float], float],
    a: float,
    b: float,
    limit: int,
    epsabs: float,
    epsrel: float,
    label: str = "integral",
) -> float:
    """Integrate ``f`` over ``[a, b]`` with QUADPACK.

    Parameters
    ----------
    f:
        Scalar integrand.
    a, b:
        Integration limits; ``b`` may be ``numpy.inf``.
    limit:
        Maximum number of subintervals the adaptive algorithm may create.
    epsabs, epsrel:
        Absolute and relative error goals.
    label:
        Description of the integral, used in messages.

    Returns
    -------
    float
        The integral estimate.

    Raises
    ------
    QuadratureError
        If the subdivision limit was reached before the error goal. Other
        QUADPACK notices (roundoff, extrapolation trouble) are logged and the
        estimate is returned.
    """
    result = quad(f, a, b, limit=limit, epsabs=epsabs, epsrel=epsrel, full_output=1)
    value, abserr, info = result[:3]
    if len(result) > 3:
        if info["last"] >= limit:
            raise QuadratureError(
                f"{label}: maximum number of subdivisions ({limit}) reached "
                f"(estimate {value!r}, error {abserr!r})"
            )
        log.warning("%s: %s", label, result[3])
    return value


def hankel_transform(
    S2: Callable[[float], float],
    q2: float,
    limit: int,
    epsabs: float,
    epsrel: float,
    label: str = "F",
) -> float:
    """Momentum-space transform of the dipole ``S2(r2)`` at ``q2``."""
    q = math.sqrt(q2)

    def integrand(r: float) -> float:
        return r * j0(q * r) * S2(r * r)

    return integrate(integrand, 0.0, np.inf, limit, epsabs, epsrel, label) / (
        2 * math.pi
    )


def small_q2_moments(
    S2: Callable[[float], float],
    limit: int,
    epsabs: float,
    epsrel: float,
    label: str = "F",
) -> tuple[float, float]:
    """Leading and subleading coefficients of ``F(q2) ~ a + b q2`` near ``q2 = 0``.

    Returns
    -------
    tuple[float, float]
        ``(1/2pi) int r S2 dr`` and ``-(1/8pi) int r^3 S2 dr``.
    """
    leading = integrate(
        lambda r: r * S2(r * r),
        0.0,
        np.inf,
        limit,
        epsabs,
        epsrel,
        f"{label} leading q2 moment",
    )
    subleading = integrate(
        lambda r: r**3 * S2(r * r),
        0.0,
        np.inf,
        limit,
        epsabs,
        epsrel,
        f"{label} subleading q2 moment",
    )
    return leading / (2 * math.pi), -subleading / (8 * math.pi)
