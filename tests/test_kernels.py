import math

import numpy as np
import pytest

from gluondistpy.errors import ConfigurationError, DomainError
from gluondistpy.kernels import FixedScaleMVGluonDistribution, MVGluonDistribution
from gluondistpy.saturation import SaturationScale

LAMBDA_MV = 0.241


@pytest.fixture(scope="module")
def satscale():
    return SaturationScale(Q02x0lambda=1.0, lambda_=0.3)


@pytest.fixture(scope="module")
def mv(satscale):
    return MVGluonDistribution(
        satscale, LambdaMV=LAMBDA_MV, q2min=1e-2, q2max=10.0, Ymin=0.0, Ymax=1.0,
        q2_dimension=40, Y_dimension=3,
    )


@pytest.fixture(scope="module")
def fmv():
    return FixedScaleMVGluonDistribution(
        SaturationScale(Q02x0lambda=1.0, lambda_=0.3),
        LambdaMV=LAMBDA_MV, q2min=1e-2, q2max=10.0, Qs2=1.5, q2_dimension=40,
        Y_dimension=99,
    )


def test_mv_dipole_formula(mv, satscale):
    r2, Y = 0.8, 0.6
    Qs2 = satscale.Qs2Y(Y)
    expected = math.exp(-0.25 * r2 * Qs2 * math.log(1 / (math.sqrt(r2) * LAMBDA_MV) + math.e))

    np.testing.assert_allclose(mv.S2(r2, Y), expected, rtol=1e-12)


@pytest.mark.parametrize("Y", [0.0, 0.5, 1.0])
def test_mv_dipole_is_one_at_zero_separation(mv, Y):
    assert mv.S2(0.0, Y) == 1.0


def test_mv_dipole_decreases_with_separation(mv):
    values = [mv.S2(r2, 0.5) for r2 in np.geomspace(1e-4, 1e2, 30)]

    assert np.all(np.diff(values) < 0)


def test_mv_grid_spans_rapidity(mv):
    assert mv.name() == "MV"
    assert mv.F_values.shape == (3, 40)
    np.testing.assert_allclose(mv.Y_values, [0.0, 0.5, 1.0])


@pytest.mark.parametrize("q2", [0.013, 0.4, 2.7, 9.1])
def test_mv_grid_matches_direct_transform(mv, q2):
    np.testing.assert_allclose(mv.F(q2, 0.5), mv.transform(q2, 0.5), rtol=1e-3)


def test_mv_series_joins_the_grid(mv):
    np.testing.assert_allclose(
        mv.F(mv.q2min * (1 - 1e-12), 0.0), mv.F(mv.q2min, 0.0), rtol=1e-3
    )


def test_mv_momentum_distribution_is_positive_and_falls_off(mv):
    values = [mv.F(q2, 1.0) for q2 in np.geomspace(1e-3, 10.0, 20)]

    assert all(value > 0 for value in values)
    assert values[-1] < values[0]


def test_mv_rejects_queries_above_q2max(mv):
    with pytest.raises(DomainError):
        mv.F(11.0, 0.5)


def test_fixed_scale_ignores_rapidity(fmv):
    assert fmv.name() == "fMV"
    assert fmv.Y_dimension == 1
    for q2 in [1e-3, 0.2, 5.0]:
        assert fmv.F(q2, 0.0) == fmv.F(q2, 8.0)
    assert fmv.S2(0.3, 0.0) == fmv.S2(0.3, 8.0)


def test_fixed_scale_matches_mv_at_the_same_scale(fmv, mv):
    Y = math.log(1.5) / 0.3

    np.testing.assert_allclose(fmv.S2(0.7, 0.0), mv.S2(0.7, Y), rtol=1e-12)


@pytest.mark.parametrize("q2", [0.02, 1.1, 7.5])
def test_fixed_scale_grid_matches_direct_transform(fmv, q2):
    np.testing.assert_allclose(fmv.F(q2, 3.0), fmv.transform(q2, 0.0), rtol=1e-3)


@pytest.mark.parametrize("LambdaMV", [0.0, -0.2])
def test_invalid_LambdaMV_raises(satscale, LambdaMV):
    with pytest.raises(ConfigurationError, match="LambdaMV"):
        MVGluonDistribution(
            satscale, LambdaMV=LambdaMV, q2min=1e-2, q2max=1.0, Ymin=0.0, Ymax=1.0
        )


def test_invalid_Qs2_raises(satscale):
    with pytest.raises(ConfigurationError, match="Qs2"):
        FixedScaleMVGluonDistribution(
            satscale, LambdaMV=LAMBDA_MV, q2min=1e-2, q2max=1.0, Qs2=0.0
        )
