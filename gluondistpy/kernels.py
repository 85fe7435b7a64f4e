"""McLerran-Venugopalan type kernels for :class:`GridTransformDistribution`."""

from __future__ import annotations

from gluondistpy.errors import ConfigurationError
from gluondistpy.functions.cpu_numba import mv_dipole
from gluondistpy.saturation import SaturationScale
from gluondistpy.transform import GridTransformDistribution


def _check_positive(name: str, parameter: str, value: float) -> None:
    if not value > 0:
        raise ConfigurationError(
            f"{name}: invalid value {value!r} for {parameter}, must be positive"
        )


class MVGluonDistribution(GridTransformDistribution):
    """MV distribution with a rapidity-dependent saturation scale.

    ``S2 = exp(-r2 Qs2 / 4 ln(1 / (r LambdaMV) + e))`` with
    ``Qs2 = satscale.Qs2Y(Y)``; ``F`` comes from a two-dimensional
    ``(ln q2, Y)`` grid. Remaining keyword arguments are passed to
    :class:`~gluondistpy.transform.GridTransformDistribution`.
    """

    def __init__(
        self,
        satscale: SaturationScale,
        LambdaMV: float,
        q2min: float,
        q2max: float,
        Ymin: float,
        Ymax: float,
        **kwargs,
    ):
        self.LambdaMV = float(LambdaMV)
        _check_positive(self.name(), "LambdaMV", self.LambdaMV)
        super().__init__(satscale, q2min, q2max, Ymin, Ymax, **kwargs)

    def S2(self, r2: float, Y: float) -> float:
        return float(mv_dipole(r2, self.satscale.Qs2Y(Y), self.LambdaMV))

    def name(self) -> str:
        return "MV"


class FixedScaleMVGluonDistribution(GridTransformDistribution):
    """MV distribution evaluated at one constant saturation scale.

    The ``Y`` argument of every query is accepted and ignored, which collapses
    the momentum grid to one dimension. The single rapidity node ``Y = 0`` is
    nominal.
    """

    def __init__(
        self,
        satscale: SaturationScale,
        LambdaMV: float,
        q2min: float,
        q2max: float,
        Qs2: float,
        **kwargs,
    ):
        self.LambdaMV = float(LambdaMV)
        self.Qs2 = float(Qs2)
        _check_positive(self.name(), "LambdaMV", self.LambdaMV)
        _check_positive(self.name(), "Qs2", self.Qs2)
        kwargs.pop("Y_dimension", None)
        super().__init__(satscale, q2min, q2max, 0.0, 0.0, **kwargs)

    def S2(self, r2: float, Y: float) -> float:
        return float(mv_dipole(r2, self.Qs2, self.LambdaMV))

    def name(self) -> str:
        return "fMV"
