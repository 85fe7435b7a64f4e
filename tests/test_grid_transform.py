import numpy as np
import pytest

from gluondistpy.distribution import GBWGluonDistribution
from gluondistpy.errors import ConfigurationError, DomainError, QuadratureError
from gluondistpy.functions.cpu_numba import gbw_dipole
from gluondistpy.saturation import SaturationScale
from gluondistpy.tabulated import TabulatedDistribution
from gluondistpy.transform import GridTransformDistribution


class GBWKernelDistribution(GridTransformDistribution):
    """GBW dipole pushed through the numerical transform."""

    def S2(self, r2, Y):
        return float(gbw_dipole(r2, self.satscale.Qs2Y(Y)))

    def name(self):
        return "GBW kernel"


@pytest.fixture(scope="module")
def satscale():
    return SaturationScale(Q02x0lambda=1.0, lambda_=0.3)


@pytest.fixture(scope="module")
def gbw(satscale):
    return GBWGluonDistribution(satscale)


@pytest.fixture(scope="module")
def gdist(satscale):
    return GBWKernelDistribution(
        satscale, q2min=1e-2, q2max=4.0, Ymin=0.0, Ymax=2.0, q2_dimension=100, Y_dimension=11
    )


@pytest.fixture(scope="module")
def gdist_1d(satscale):
    return GBWKernelDistribution(
        satscale, q2min=1e-2, q2max=4.0, Ymin=1.0, Ymax=1.0, q2_dimension=60
    )


def test_axes_are_strictly_increasing_with_requested_lengths(gdist):
    assert gdist.log_q2_values.shape == (100,)
    assert gdist.Y_values.shape == (11,)
    assert np.all(np.diff(gdist.log_q2_values) > 0)
    assert np.all(np.diff(gdist.Y_values) > 0)
    np.testing.assert_allclose(np.exp(gdist.log_q2_values[[0, -1]]), [1e-2, 4.0], rtol=1e-12)
    np.testing.assert_allclose(gdist.Y_values[[0, -1]], [0.0, 2.0])
    assert gdist.F_values.shape == (11, 100)


@pytest.mark.parametrize("Y", [0.0, 0.37, 1.0, 1.55, 2.0])
def test_grid_matches_closed_form(gdist, gbw, Y):
    for q2 in np.geomspace(1.01e-2, 3.99, 23):
        np.testing.assert_allclose(gdist.F(q2, Y), gbw.F(q2, Y), rtol=1e-3)


@pytest.mark.parametrize("Y", [0.0, 0.9, 2.0])
def test_series_matches_closed_form_at_zero_momentum(gdist, gbw, Y):
    np.testing.assert_allclose(gdist.F(1e-10, Y), gbw.F(0.0, Y), rtol=1e-3)
    np.testing.assert_allclose(gdist.F(0.0, Y), gbw.F(0.0, Y), rtol=1e-3)


def test_series_coefficients_of_the_gbw_dipole(gdist, satscale):
    Qs2 = satscale.Qs2Y(0.4)
    leading, subleading = gdist.series_coefficients(0.4)

    np.testing.assert_allclose(leading, 1.0 / (np.pi * Qs2), rtol=1e-6)
    np.testing.assert_allclose(subleading, -1.0 / (np.pi * Qs2**2), rtol=1e-6)


def test_series_joins_the_grid_at_q2min(gdist):
    np.testing.assert_allclose(
        gdist.F(gdist.q2min * (1 - 1e-12), 0.5), gdist.F(gdist.q2min, 0.5), rtol=1e-3
    )


def test_grid_nodes_are_reproduced(gdist):
    for j in range(1, gdist.Y_dimension - 1):
        for i in range(1, gdist.q2_dimension - 1):
            q2 = np.exp(gdist.log_q2_values[i])
            np.testing.assert_allclose(
                gdist.F(q2, gdist.Y_values[j]), gdist.F_values[j, i], rtol=1e-9
            )


def test_midpoints_lie_between_neighbouring_nodes(gdist_1d):
    log_q2 = gdist_1d.log_q2_values
    F_values = gdist_1d.F_values[0]
    for i in range(len(log_q2) - 1):
        value = gdist_1d.F(np.exp(0.5 * (log_q2[i] + log_q2[i + 1])), 1.0)
        assert F_values[i + 1] <= value <= F_values[i]


def test_degenerate_rapidity_axis_ignores_Y(gdist_1d, satscale):
    assert gdist_1d.Y_dimension == 1
    assert gdist_1d.grid.is_1d
    for q2 in [1e-4, 0.05, 1.3]:
        assert gdist_1d.F(q2, 0.0) == gdist_1d.F(q2, 17.0)
    np.testing.assert_allclose(
        gdist_1d.F(0.5, 3.0), np.exp(-0.5 / satscale.Qs2Y(1.0)) / (np.pi * satscale.Qs2Y(1.0)),
        rtol=1e-3,
    )


def test_above_q2max_raises_by_default(gdist):
    with pytest.raises(DomainError):
        gdist.F(5.0, 1.0)


def test_Y_outside_the_grid_raises_by_default(gdist):
    with pytest.raises(DomainError):
        gdist.F(0.5, 2.5)
    with pytest.raises(DomainError):
        gdist.F(1e-3, -0.5)


def test_clamp_policy_above_q2max(satscale):
    gdist = GBWKernelDistribution(
        satscale, q2min=1e-2, q2max=1.0, Ymin=0.0, Ymax=0.0, q2_dimension=20,
        q2max_policy="clamp",
    )

    assert gdist.F(50.0, 0.0) == gdist.F(1.0, 0.0)


def test_extrapolate_policy_above_q2max(satscale):
    gdist = GBWKernelDistribution(
        satscale, q2min=1e-2, q2max=1.0, Ymin=0.0, Ymax=1.0, q2_dimension=20, Y_dimension=3,
        q2max_policy="extrapolate",
    )

    assert np.isfinite(gdist.F(1.1, 0.5))


def test_direct_transform_bypasses_the_grid(gdist, gbw):
    np.testing.assert_allclose(gdist.transform(0.25, 0.3), gbw.F(0.25, 0.3), rtol=1e-6)


def test_exhausted_subdivision_budget_aborts_construction(satscale):
    with pytest.raises(QuadratureError):
        GBWKernelDistribution(
            satscale, q2min=1e-2, q2max=1.0, Ymin=0.0, Ymax=0.0, q2_dimension=5,
            subinterval_limit=1,
        )


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(q2min=1.0, q2max=1e-2, Ymin=0.0, Ymax=1.0),
        dict(q2min=0.0, q2max=1.0, Ymin=0.0, Ymax=1.0),
        dict(q2min=1e-2, q2max=1.0, Ymin=1.0, Ymax=0.0),
        dict(q2min=1e-2, q2max=1.0, Ymin=0.0, Ymax=1.0, Y_dimension=1),
        dict(q2min=1e-2, q2max=1.0, Ymin=0.0, Ymax=1.0, q2_dimension=1),
        dict(q2min=1e-2, q2max=1.0, Ymin=0.0, Ymax=1.0, subinterval_limit=0),
    ],
)
def test_invalid_construction_raises(satscale, kwargs):
    with pytest.raises(ConfigurationError, match="GBW kernel"):
        GBWKernelDistribution(satscale, **kwargs)


def test_unknown_policy_raises(satscale):
    with pytest.raises(ConfigurationError, match="wrap"):
        GBWKernelDistribution(
            satscale, q2min=1e-2, q2max=1.0, Ymin=0.0, Ymax=1.0, q2max_policy="wrap"
        )


def test_written_grid_reads_back_as_a_table(gdist, tmp_path, satscale):
    momentum_path = tmp_path / "momentum.dat"
    with open(momentum_path, "w") as stream:
        gdist.write_grid(stream)
    position_path = tmp_path / "position.dat"
    position_path.write_text("1e-2 0.9\n1.0 0.5\n10.0 0.1\n")

    tabulated = TabulatedDistribution(satscale, position_path, momentum_path)

    assert tabulated.momentum_grid.shape == gdist.F_values.shape
    for j in range(1, gdist.Y_dimension - 1):
        for i in range(1, gdist.q2_dimension - 1):
            q2 = np.exp(gdist.log_q2_values[i])
            np.testing.assert_allclose(
                tabulated.F(q2, gdist.Y_values[j]), gdist.F_values[j, i], rtol=1e-9
            )
