"""Gluon distribution interface and the closed-form GBW model.

A gluon distribution exposes the dipole ``S2(r2, Y)`` and quadrupole
``S4(r2, s2, t2, Y)`` in position space and the momentum-space distribution
``F(q2, Y)``. The Monte Carlo integrator only talks to this interface, so
closed-form, numerically transformed and tabulated distributions are
interchangeable.
"""

from __future__ import annotations

import logging

from gluondistpy.functions.cpu_numba import gbw_dipole, gbw_momentum
from gluondistpy.saturation import SaturationScale


class GluonDistribution:
    """Base class for gluon distributions.

    Parameters
    ----------
    satscale:
        Saturation scale converting the rapidity ``Y`` into ``Qs2``. The
        object is borrowed, not copied: several distributions may share one
        instance and it must stay alive as long as they do.

    Notes
    -----
    Distributions are immutable once constructed, so queries may be issued in
    any order and any number of times.
    """

    def __init__(self, satscale: SaturationScale):
        self.satscale = satscale
        self.log = logging.getLogger(self.__class__.__module__)

    def S2(self, r2: float, Y: float) -> float:  # pragma: no cover
        """Dipole correlator at squared separation ``r2``."""
        raise NotImplementedError

    def S4(self, r2: float, s2: float, t2: float, Y: float) -> float:
        """Quadrupole correlator.

        The default is the large-Nc product of two dipoles, ``S2(s2) S2(t2)``.
        ``r2`` does not enter this approximation. Subclasses for which the
        factorization is inexact should override this method.
        """
        return self.S2(s2, Y) * self.S2(t2, Y)

    def F(self, q2: float, Y: float) -> float:  # pragma: no cover
        """Momentum-space distribution at squared momentum ``q2``."""
        raise NotImplementedError

    def name(self) -> str:  # pragma: no cover
        raise NotImplementedError

    def __str__(self) -> str:
        return self.name()


class GBWGluonDistribution(GluonDistribution):
    """Golec-Biernat-Wusthoff distribution.

    ``S2 = exp(-r2 Qs2 / 4)`` and its exact Fourier transform
    ``F = exp(-q2 / Qs2) / (pi Qs2)``, so no numerical transform is needed.
    """

    def S2(self, r2: float, Y: float) -> float:
        return float(gbw_dipole(r2, self.satscale.Qs2Y(Y)))

    def F(self, q2: float, Y: float) -> float:
        return float(gbw_momentum(q2, self.satscale.Qs2Y(Y)))

    def name(self) -> str:
        return "GBW"
