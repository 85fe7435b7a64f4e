"""Gluon distribution backed by tabulated data files.

Both representations are read from whitespace-delimited tables, one for
position space and one for momentum space. Each row holds one grid point::

    # Y    r2 (or q2)    S2 (or F)
    0.0    1.0e-4        0.99997
    ...

A two-column table (``x value``) describes a single scale. The rows may come
in any order but must cover every ``(Y, x)`` combination exactly once.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from gluondistpy.distribution import GluonDistribution
from gluondistpy.errors import ConfigurationError, DomainError
from gluondistpy.grid import InterpolationGrid
from gluondistpy.saturation import SaturationScale

log = logging.getLogger(__name__)


def read_table(path: str | Path) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Read a rectangular ``(Y, x, value)`` table.

    Args:
        path (str | Path): The path to the table file.

    Returns:
        (tuple): The sorted distinct ``x`` values, the sorted distinct ``Y``
            values and the values as an array of shape ``(len(Y), len(x))``.

    Raises:
        ConfigurationError: If the file is missing, empty, non-numeric, has
            the wrong number of columns, or does not form a complete
            rectangular grid.
    """
    try:
        table = pd.read_csv(path, sep=r"\s+", comment="#", header=None)
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Could not read table {path}: file does not exist") from exc
    except pd.errors.EmptyDataError as exc:
        raise ConfigurationError(f"Table {path} contains no data") from exc
    except pd.errors.ParserError as exc:
        raise ConfigurationError(f"Could not parse table {path}: {exc}") from exc

    if table.shape[1] == 2:
        log.info(
            "2 columns have been provided in %s. Implying that the table holds a single scale.",
            path,
        )
        table.insert(0, "Y", 0.0)
    elif table.shape[1] != 3:
        raise ConfigurationError(
            f"Table {path} needs 3 columns (Y, x, value) or 2 columns (x, value), "
            f"found {table.shape[1]}"
        )
    table.columns = ["Y", "x", "value"]

    try:
        table = table.apply(pd.to_numeric)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Table {path} contains non-numeric entries") from exc
    if not np.all(np.isfinite(table.to_numpy())):
        raise ConfigurationError(f"Table {path} contains non-finite entries")
    if np.any(table["x"] <= 0):
        raise ConfigurationError(f"Table {path} needs strictly positive r2/q2 values")

    if table.duplicated(subset=["Y", "x"]).any():
        raise ConfigurationError(f"Table {path} contains duplicate grid points")
    grid = table.pivot(index="Y", columns="x", values="value")
    if grid.isna().to_numpy().any():
        raise ConfigurationError(
            f"Table {path} is not a rectangular grid: "
            f"{int(grid.isna().to_numpy().sum())} (Y, x) combinations are missing"
        )
    if grid.shape[1] < 2:
        raise ConfigurationError(f"Table {path} needs at least 2 distinct r2/q2 values")

    return (
        grid.columns.to_numpy(dtype=float),
        grid.index.to_numpy(dtype=float),
        grid.to_numpy(dtype=float),
    )


class TabulatedDistribution(GluonDistribution):
    """Distribution whose ``S2`` and ``F`` are interpolated from data files.

    Parameters
    ----------
    satscale:
        Shared saturation scale (kept for the common interface).
    position_filename:
        Table of ``S2`` over ``(Y, r2)``.
    momentum_filename:
        Table of ``F`` over ``(Y, q2)``.
    lower_dist, upper_dist:
        Optional distributions answering queries below the smallest or above
        the largest tabulated ``r2``/``q2``.

    Notes
    -----
    Each table gives its own grid, interpolated in ``(ln r2, Y)`` and
    ``(ln q2, Y)``, or in the logarithm alone when the table holds a single
    scale. A query outside a grid's range is a
    :class:`~gluondistpy.errors.DomainError` unless a fallback distribution
    covers it; the grids are never extrapolated.
    """

    def __init__(
        self,
        satscale: SaturationScale,
        position_filename: str | Path,
        momentum_filename: str | Path,
        lower_dist: GluonDistribution | None = None,
        upper_dist: GluonDistribution | None = None,
    ):
        super().__init__(satscale)
        self.position_filename = str(position_filename)
        self.momentum_filename = str(momentum_filename)
        self.lower_dist = lower_dist
        self.upper_dist = upper_dist

        r2_values, position_Y_values, S2_values = read_table(self.position_filename)
        q2_values, momentum_Y_values, F_values = read_table(self.momentum_filename)
        self.position_grid = InterpolationGrid(
            np.log(r2_values), position_Y_values, S2_values, labels=("ln r2", "Y")
        )
        self.momentum_grid = InterpolationGrid(
            np.log(q2_values), momentum_Y_values, F_values, labels=("ln q2", "Y")
        )
        self.log.info(
            "Read %s grid of shape %s and %s grid of shape %s",
            self.position_filename,
            self.position_grid.shape,
            self.momentum_filename,
            self.momentum_grid.shape,
        )

    def __lookup(self, grid: InterpolationGrid, quantity: str, value: float, Y: float):
        log_value = float(np.log(value)) if value > 0 else -np.inf
        if log_value < grid.x[0]:
            if self.lower_dist is not None:
                return None, self.lower_dist
            raise DomainError(
                f"{self.name()}: {quantity}={value!r} below the tabulated range "
                f"starting at {float(np.exp(grid.x[0]))!r}"
            )
        if log_value > grid.x[-1]:
            if self.upper_dist is not None:
                return None, self.upper_dist
            raise DomainError(
                f"{self.name()}: {quantity}={value!r} above the tabulated range "
                f"ending at {float(np.exp(grid.x[-1]))!r}"
            )
        return grid.evaluate(log_value, Y, "error"), None

    def S2(self, r2: float, Y: float) -> float:
        value, fallback = self.__lookup(self.position_grid, "r2", r2, Y)
        if fallback is not None:
            return fallback.S2(r2, Y)
        return value

    def F(self, q2: float, Y: float) -> float:
        value, fallback = self.__lookup(self.momentum_grid, "q2", q2, Y)
        if fallback is not None:
            return fallback.F(q2, Y)
        return value

    def name(self) -> str:
        return "file"
