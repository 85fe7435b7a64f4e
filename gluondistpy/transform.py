"""Gluon distributions whose momentum-space form is computed numerically.

:class:`GridTransformDistribution` takes nothing but a position-space dipole
``S2(r2, Y)`` from its subclass and derives ``F(q2, Y)`` from it:

1. the ``ln q2`` axis (``q2_dimension`` points over ``[q2min, q2max]``) and the
   ``Y`` axis (``Y_dimension`` points over ``[Ymin, Ymax]``, a single point
   when ``Ymin == Ymax``) are laid out,
2. the leading and subleading coefficients of the small-``q2`` series are
   computed for every ``Y``,
3. ``F`` is computed by adaptive quadrature at every grid node,
4. the results are stored in an :class:`~gluondistpy.grid.InterpolationGrid`.

Below ``q2min`` the series ``leading(Y) + subleading(Y) q2`` is used instead of
the grid, which has no data there and where the quadrature converges poorly.
"""

from __future__ import annotations

import math
from time import time
from typing import TextIO

import numpy as np
from scipy.interpolate import CubicSpline

from gluondistpy.distribution import GluonDistribution
from gluondistpy.errors import ConfigurationError, DomainError
from gluondistpy.grid import InterpolationGrid, check_policy
from gluondistpy.quadrature import hankel_transform, small_q2_moments
from gluondistpy.saturation import SaturationScale


class GridTransformDistribution(GluonDistribution):
    """Distribution with ``F`` interpolated from a numerically transformed ``S2``.

    Subclasses implement :meth:`S2` and :meth:`name`, set the attributes
    ``S2`` depends on, and then call this constructor, which builds the grid.

    Parameters
    ----------
    satscale:
        Shared saturation scale.
    q2min, q2max:
        Range of the momentum grid. Below ``q2min`` the small-``q2`` series
        is used.
    Ymin, Ymax:
        Range of the rapidity grid. ``Ymin == Ymax`` gives a one-dimensional
        grid on which the ``Y`` argument of :meth:`F` is ignored.
    q2_dimension, Y_dimension:
        Number of grid points along each axis.
    subinterval_limit:
        Subdivision budget of each adaptive quadrature. Exceeding it raises
        :class:`~gluondistpy.errors.QuadratureError` and aborts construction.
    q2max_policy:
        What :meth:`F` does for ``q2 > q2max`` or, on a 2-D grid, ``Y`` outside
        ``[Ymin, Ymax]``: ``"error"`` (default) raises
        :class:`~gluondistpy.errors.DomainError`, ``"clamp"`` evaluates at the
        grid boundary, ``"extrapolate"`` leaves it to the spline.
    epsabs, epsrel:
        Error goals of each quadrature.
    """

    def __init__(
        self,
        satscale: SaturationScale,
        q2min: float,
        q2max: float,
        Ymin: float,
        Ymax: float,
        q2_dimension: int = 100,
        Y_dimension: int = 20,
        subinterval_limit: int = 1000,
        q2max_policy: str = "error",
        epsabs: float = 1e-12,
        epsrel: float = 1e-8,
    ):
        super().__init__(satscale)
        self.q2min = float(q2min)
        self.q2max = float(q2max)
        self.Ymin = float(Ymin)
        self.Ymax = float(Ymax)
        self.q2_dimension = int(q2_dimension)
        self.Y_dimension = 1 if self.Ymin == self.Ymax else int(Y_dimension)
        self.subinterval_limit = int(subinterval_limit)
        self.epsabs = epsabs
        self.epsrel = epsrel

        self.__validate()
        self.q2max_policy = check_policy(q2max_policy)

        self.__setup()

    def __validate(self):
        name = self.name()
        if not (0 < self.q2min < self.q2max) or not math.isfinite(self.q2max):
            raise ConfigurationError(
                f"{name}: invalid q2 range [{self.q2min!r}, {self.q2max!r}], "
                "need 0 < q2min < q2max"
            )
        if self.q2_dimension < 2:
            raise ConfigurationError(
                f"{name}: invalid value {self.q2_dimension!r} for q2_dimension, need at least 2"
            )
        if not (math.isfinite(self.Ymin) and math.isfinite(self.Ymax)) or self.Ymin > self.Ymax:
            raise ConfigurationError(
                f"{name}: invalid Y range [{self.Ymin!r}, {self.Ymax!r}], need Ymin <= Ymax"
            )
        if self.Y_dimension < 2 and self.Ymin < self.Ymax:
            raise ConfigurationError(
                f"{name}: invalid value {self.Y_dimension!r} for Y_dimension, "
                "need at least 2 for a nonzero Y range"
            )
        if self.subinterval_limit < 1:
            raise ConfigurationError(
                f"{name}: invalid value {self.subinterval_limit!r} for subinterval_limit"
            )

    def __setup(self):
        setup_time_start = time()

        self.log_q2_values = np.linspace(
            np.log(self.q2min), np.log(self.q2max), self.q2_dimension
        )
        if self.Y_dimension == 1:
            self.Y_values = np.array([self.Ymin])
        else:
            self.Y_values = np.linspace(self.Ymin, self.Ymax, self.Y_dimension)

        self.__compute_series_coefficients()
        self.__compute_grid()

        setup_time_stop = time()
        self.log.info(
            "Computing the %s grid (%d x %d) took %f s"
            % (
                self.name(),
                self.Y_dimension,
                self.q2_dimension,
                setup_time_stop - setup_time_start,
            )
        )

    def __compute_series_coefficients(self):
        coefficients = np.array([self.series_coefficients(Y) for Y in self.Y_values])
        self.F_leading_q2 = coefficients[:, 0]
        self.F_subleading_q2 = coefficients[:, 1]
        if self.Y_dimension == 1:
            self._leading_spline = None
            self._subleading_spline = None
        else:
            self._leading_spline = CubicSpline(self.Y_values, self.F_leading_q2)
            self._subleading_spline = CubicSpline(self.Y_values, self.F_subleading_q2)

    def __compute_grid(self):
        F_values = np.empty((self.Y_dimension, self.q2_dimension))
        for j, Y in enumerate(self.Y_values):
            for i, log_q2 in enumerate(self.log_q2_values):
                F_values[j, i] = self.transform(math.exp(log_q2), Y)
        self.grid = InterpolationGrid(
            self.log_q2_values, self.Y_values, F_values, labels=("ln q2", "Y")
        )

    def series_coefficients(self, Y: float) -> tuple[float, float]:
        """Leading and subleading small-``q2`` coefficients of ``F`` at ``Y``.

        Computed from moments of the dipole by default. Subclasses with a
        closed form may override this.
        """
        return small_q2_moments(
            lambda r2: self.S2(r2, Y),
            self.subinterval_limit,
            self.epsabs,
            self.epsrel,
            label=f"{self.name()} at Y={float(Y)!r}",
        )

    def transform(self, q2: float, Y: float) -> float:
        """Compute ``F(q2, Y)`` by direct quadrature, bypassing the grid."""
        return hankel_transform(
            lambda r2: self.S2(r2, Y),
            q2,
            self.subinterval_limit,
            self.epsabs,
            self.epsrel,
            label=f"{self.name()} F(q2={float(q2)!r}, Y={float(Y)!r})",
        )

    @property
    def F_values(self) -> np.ndarray:
        """Grid values, shape ``(Y_dimension, q2_dimension)``."""
        return self.grid.values

    def F(self, q2: float, Y: float) -> float:
        if q2 < self.q2min:
            leading, subleading = self.__series_at(Y)
            return leading + subleading * q2
        return self.grid.evaluate(float(np.log(q2)), Y, self.q2max_policy)

    def __series_at(self, Y: float) -> tuple[float, float]:
        if self._leading_spline is None:
            return float(self.F_leading_q2[0]), float(self.F_subleading_q2[0])
        if not self.Ymin <= Y <= self.Ymax:
            if self.q2max_policy == "error":
                raise DomainError(
                    f"{self.name()}: Y={float(Y)!r} outside the grid range "
                    f"[{self.Ymin!r}, {self.Ymax!r}]"
                )
            if self.q2max_policy == "clamp":
                Y = min(max(Y, self.Ymin), self.Ymax)
        return float(self._leading_spline(Y)), float(self._subleading_spline(Y))

    def write_grid(self, stream: TextIO) -> None:
        """Write the momentum grid as ``Y  q2  F`` rows.

        The output can be read back as the momentum table of a
        :class:`~gluondistpy.tabulated.TabulatedDistribution`.
        """
        stream.write(f"# {self.name()} momentum grid\n")
        stream.write("# Y\tq2\tF\n")
        for j, Y in enumerate(self.Y_values):
            for i, log_q2 in enumerate(self.log_q2_values):
                stream.write(
                    f"{float(Y)!r}\t{math.exp(log_q2)!r}\t{float(self.F_values[j, i])!r}\n"
                )
