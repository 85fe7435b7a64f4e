"""Factory turning validated parameters into gluon distributions.

The bootstrap code picks a distribution once, by kind, and hands the result to
the integrator. :func:`create_gluon_distribution` is that single entry point.
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from gluondistpy.distribution import GBWGluonDistribution, GluonDistribution
from gluondistpy.errors import ConfigurationError
from gluondistpy.kernels import FixedScaleMVGluonDistribution, MVGluonDistribution
from gluondistpy.parameters import (
    FileParameters,
    FixedScaleMVParameters,
    GBWParameters,
    GluonDistributionParameters,
    MVParameters,
)
from gluondistpy.saturation import SaturationScale
from gluondistpy.tabulated import TabulatedDistribution
from gluondistpy.tracing import TracingGluonDistribution


def create_gluon_distribution(
    parameters: GluonDistributionParameters,
    satscale: SaturationScale,
    trace_sink: TextIO | str | Path | None = None,
) -> GluonDistribution:
    """Create the gluon distribution described by ``parameters``.

    Parameters
    ----------
    parameters:
        One of the models in :mod:`gluondistpy.parameters`.
    satscale:
        Saturation scale shared by the distribution (and its fallbacks).
    trace_sink:
        If given, the distribution is wrapped in a
        :class:`~gluondistpy.tracing.TracingGluonDistribution` writing to it.

    Returns
    -------
    GluonDistribution
        The fully constructed distribution. Grid construction happens here,
        so numerical failures surface from this call.
    """

    match parameters:
        case GBWParameters():
            gdist: GluonDistribution = GBWGluonDistribution(satscale)
        case MVParameters():
            gdist = MVGluonDistribution(
                satscale,
                LambdaMV=parameters.LambdaMV,
                q2min=parameters.q2min,
                q2max=parameters.q2max,
                Ymin=parameters.Ymin,
                Ymax=parameters.Ymax,
                q2_dimension=parameters.q2_dimension,
                Y_dimension=parameters.Y_dimension,
                subinterval_limit=parameters.subinterval_limit,
                q2max_policy=parameters.q2max_policy,
            )
        case FixedScaleMVParameters():
            gdist = FixedScaleMVGluonDistribution(
                satscale,
                LambdaMV=parameters.LambdaMV,
                q2min=parameters.q2min,
                q2max=parameters.q2max,
                Qs2=parameters.Qs2,
                q2_dimension=parameters.q2_dimension,
                subinterval_limit=parameters.subinterval_limit,
                q2max_policy=parameters.q2max_policy,
            )
        case FileParameters():
            gdist = TabulatedDistribution(
                satscale,
                position_filename=parameters.position_filename,
                momentum_filename=parameters.momentum_filename,
                lower_dist=(
                    create_gluon_distribution(parameters.lower, satscale)
                    if parameters.lower is not None
                    else None
                ),
                upper_dist=(
                    create_gluon_distribution(parameters.upper, satscale)
                    if parameters.upper is not None
                    else None
                ),
            )
        case _:
            raise ConfigurationError(
                f"Unsupported gluon distribution parameters: {parameters!r}"
            )

    if trace_sink is not None:
        gdist = TracingGluonDistribution(gdist, trace_sink)
    return gdist
