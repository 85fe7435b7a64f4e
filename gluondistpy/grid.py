"""Interpolation grids.

An :class:`InterpolationGrid` stores values on a rectangular grid spanned by a
fast axis (the transform variable, usually ``ln q2`` or ``ln r2``) and a slow
axis (the scale variable ``Y``). With a single point on the slow axis it
degenerates to a one-dimensional cubic spline.

The spline lookups are stateless (binary search on every call), so unlike an
accelerator cache shared between calls they are safe to use from several
threads at once.
"""

from __future__ import annotations

import numpy as np
from scipy.interpolate import CubicSpline, RectBivariateSpline

from gluondistpy.errors import ConfigurationError, DomainError

OUT_OF_RANGE_POLICIES = ("error", "clamp", "extrapolate")


def check_policy(policy: str) -> str:
    """Validate and normalize an out-of-range policy name."""
    normalized = str(policy).lower()
    if normalized not in OUT_OF_RANGE_POLICIES:
        raise ConfigurationError(
            f"Unsupported out-of-range policy: {policy!r}. "
            f"Expected one of {set(OUT_OF_RANGE_POLICIES)}."
        )
    return normalized


def _check_axis(axis: np.ndarray, label: str, minimum: int) -> None:
    if axis.ndim != 1 or axis.size < minimum:
        raise ConfigurationError(
            f"The {label} axis needs to be a sequence of at least {minimum} values"
        )
    if not np.all(np.isfinite(axis)):
        raise ConfigurationError(f"The {label} axis contains non-finite values")
    if np.any(np.diff(axis) <= 0):
        raise ConfigurationError(f"The {label} axis needs to be strictly increasing")


class InterpolationGrid:
    """Interpolating spline over a rectangular ``(x, y)`` grid.

    Parameters
    ----------
    x:
        Strictly increasing abscissae of the fast axis.
    y:
        Strictly increasing abscissae of the slow axis. A single value makes
        the grid one-dimensional; ``y`` is then ignored on evaluation.
    values:
        Grid values of shape ``(len(y), len(x))`` (row-major, one row per
        slow-axis point). A flat array of the same size is reshaped.
    labels:
        Names of the two axes, used in error messages.

    Notes
    -----
    The 1-D case uses :class:`scipy.interpolate.CubicSpline`, the 2-D case
    an interpolating (``s=0``) :class:`scipy.interpolate.RectBivariateSpline`
    whose degree along an axis drops below three when that axis has fewer
    than four points. Both reproduce the node values.
    """

    def __init__(
        self,
        x: np.ndarray,
        y: np.ndarray,
        values: np.ndarray,
        labels: tuple[str, str] = ("x", "y"),
    ):
        self.x = np.array(x, dtype=float)
        self.y = np.atleast_1d(np.array(y, dtype=float))
        self.labels = labels

        _check_axis(self.x, labels[0], 2)
        _check_axis(self.y, labels[1], 1)

        values = np.array(values, dtype=float)
        if values.size != self.x.size * self.y.size:
            raise ConfigurationError(
                f"Grid of {values.size} values does not match the "
                f"{self.y.size} x {self.x.size} axes"
            )
        self.values = values.reshape(self.y.size, self.x.size)
        if not np.all(np.isfinite(self.values)):
            raise ConfigurationError("The grid contains non-finite values")

        if self.is_1d:
            self._spline = CubicSpline(self.x.copy(), self.values[0].copy())
        else:
            self._spline = RectBivariateSpline(
                self.x.copy(),
                self.y.copy(),
                np.ascontiguousarray(self.values.T),
                kx=min(3, self.x.size - 1),
                ky=min(3, self.y.size - 1),
                s=0,
            )

    @property
    def is_1d(self) -> bool:
        return self.y.size == 1

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape

    def covers(self, x: float, y: float | None = None) -> bool:
        """Whether ``(x, y)`` lies inside the grid (``y`` is ignored on a 1-D grid)."""
        if not self.x[0] <= x <= self.x[-1]:
            return False
        if self.is_1d or y is None:
            return True
        return bool(self.y[0] <= y <= self.y[-1])

    def __call__(self, x: float, y: float | None = None) -> float:
        """Evaluate the spline without any range checking."""
        if self.is_1d:
            return float(self._spline(x))
        return float(self._spline.ev(x, y))

    def evaluate(self, x: float, y: float | None = None, policy: str = "error") -> float:
        """Evaluate the spline, applying an out-of-range policy.

        Parameters
        ----------
        x, y:
            Query point. ``y`` is ignored on a 1-D grid.
        policy:
            ``"error"`` raises :class:`~gluondistpy.errors.DomainError`,
            ``"clamp"`` moves the point onto the grid boundary and
            ``"extrapolate"`` hands the point to the spline unchanged
            (polynomial continuation in 1-D; FITPACK clamps to the boundary
            in 2-D).
        """
        if not self.covers(x, y):
            if policy == "error":
                raise DomainError(self._range_message(x, y))
            if policy == "clamp":
                x = min(max(x, self.x[0]), self.x[-1])
                if not self.is_1d:
                    y = min(max(y, self.y[0]), self.y[-1])
        return self(x, y)

    def _range_message(self, x: float, y: float | None) -> str:
        message = (
            f"{self.labels[0]}={x!r} outside the grid range "
            f"[{float(self.x[0])!r}, {float(self.x[-1])!r}]"
        )
        if not self.is_1d:
            message += (
                f" or {self.labels[1]}={y!r} outside "
                f"[{float(self.y[0])!r}, {float(self.y[-1])!r}]"
            )
        return message
