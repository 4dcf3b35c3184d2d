import math

import numpy as np

from mvn_utils import (
    BivariateNormal,
    Bounds2D,
    density_field,
    ellipse_points,
    grid_axis,
    kde2d_grid,
    pdf_bivariate_normal,
    sample_correlated,
    sample_correlation,
)


def _rng():
    return np.random.default_rng(0)


def test_grid_axis_half_open():
    g = grid_axis(50, -3.0, 3.0)
    assert len(g) == 50
    assert g[0] == -3.0
    assert g[25] == 0.0
    assert math.isclose(g[-1], 2.88)


def test_density_field_centre_is_peak():
    params = BivariateNormal(rho=0.7)
    gx, gy, z = density_field(params)
    assert z.shape == (2500,)
    centre = z[25 * 50 + 25]
    assert math.isclose(centre, 1.0 / (2.0 * math.pi * math.sqrt(1.0 - 0.7 ** 2)))
    assert math.isclose(centre, params.peak_density())
    assert math.isclose(z.max(), centre)


def test_density_field_row_major_y_outer():
    params = BivariateNormal()
    gx, gy, z = density_field(params, n=10)
    j, i = 3, 7
    expected = pdf_bivariate_normal(np.array(gx[i]), np.array(gy[j]), params)
    assert math.isclose(z[j * 10 + i], float(expected))


def test_pdf_symmetry_under_correlation():
    params = BivariateNormal(rho=0.7)
    a = pdf_bivariate_normal(np.array([1.0]), np.array([1.0]), params)
    b = pdf_bivariate_normal(np.array([1.0]), np.array([-1.0]), params)
    # Positive correlation favours the (1, 1) diagonal
    assert a[0] > b[0]
    assert np.allclose(pdf_bivariate_normal(np.array([0.5]), np.array([-0.2]), params),
                       pdf_bivariate_normal(np.array([-0.2]), np.array([0.5]), params))


def test_sample_correlated_moments():
    samples = sample_correlated(2000, _rng(), BivariateNormal(rho=0.7))
    assert samples.shape == (2000, 2)
    assert np.allclose(samples.mean(axis=0), [0.0, 0.0], atol=0.1)
    assert np.allclose(samples.std(axis=0), [1.0, 1.0], atol=0.1)
    assert abs(sample_correlation(samples) - 0.7) < 0.05


def test_sample_correlated_deterministic():
    a = sample_correlated(50, np.random.default_rng(5))
    b = sample_correlated(50, np.random.default_rng(5))
    assert np.array_equal(a, b)


def test_kde2d_grid_basic_properties():
    b = Bounds2D(-1.0, 1.0, -1.0, 1.0)
    data = np.array([[0.0, 0.0], [0.5, 0.5], [-0.5, -0.25]])
    X, Y, Z = kde2d_grid(data, b, gridsize=20)
    assert X.shape == Y.shape == Z.shape == (20, 20)
    assert Z.min() >= 0.0
    _, _, Z1 = kde2d_grid(data[:1], b, gridsize=5)
    assert np.all(Z1 == 0.0)


def test_ellipse_points_lie_on_mahalanobis_contour():
    params = BivariateNormal(rho=0.7)
    cov = params.covariance()
    pts = ellipse_points(params.mean(), cov, n=60, k_sigma=2.0)
    inv = np.linalg.inv(cov)
    d2 = np.einsum("ni,ij,nj->n", pts, inv, pts)
    assert np.allclose(d2, 4.0)


def test_kde2d_grid_chunking_matches_single_pass():
    samples = sample_correlated(500, _rng())
    b = Bounds2D(-3.0, 3.0, -3.0, 3.0)
    _, _, Z_small = kde2d_grid(samples, b, gridsize=30, chunk=7)
    _, _, Z_whole = kde2d_grid(samples, b, gridsize=30, chunk=30 * 30)
    assert np.allclose(Z_small, Z_whole)


def test_kde2d_grid_integrates_to_about_one():
    samples = sample_correlated(2000, _rng())
    b = Bounds2D(-4.0, 4.0, -4.0, 4.0)
    X, Y, Z = kde2d_grid(samples, b, gridsize=60)
    cell = (X[0, 1] - X[0, 0]) * (Y[1, 0] - Y[0, 0])
    assert abs(Z.sum() * cell - 1.0) < 0.05
