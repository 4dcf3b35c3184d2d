import math

import numpy as np
import pytest

from dist_models import (
    KINDS,
    PARAM_RANGES,
    BinomialSpec,
    ExponentialSpec,
    GridPoint,
    NormalSpec,
    PoissonSpec,
    UniformSpec,
    binomial_coefficient,
    clamp_params,
    clamp_to_range,
    density_grid,
    distribution_info,
    factorial,
    is_discrete,
    iter_grid_points,
    make_spec,
    pdf_exponential,
    pdf_normal,
    pdf_uniform,
    pmf_binomial,
    pmf_poisson,
)


def test_normal_peak_at_mean():
    for mean, std in [(0.0, 1.0), (2.5, 0.3), (-4.0, 3.0)]:
        peak = float(pdf_normal(np.array([mean]), mean, std)[0])
        assert math.isclose(peak, 1.0 / (std * math.sqrt(2.0 * math.pi)))
        xs = np.linspace(mean - 4 * std, mean + 4 * std, 201)
        assert peak >= pdf_normal(xs, mean, std).max() - 1e-12


def test_normal_symmetric_about_mean():
    mean, std = 1.5, 0.7
    offsets = np.linspace(0.0, 3.0, 31)
    left = pdf_normal(mean - offsets, mean, std)
    right = pdf_normal(mean + offsets, mean, std)
    assert np.allclose(left, right, rtol=1e-12, atol=1e-15)


def test_uniform_inside_and_outside():
    a, b = -2.0, 3.0
    xs = np.array([-3.0, -2.0, 0.0, 3.0, 3.5])
    ys = pdf_uniform(xs, a, b)
    assert np.allclose(ys, [0.0, 0.2, 0.2, 0.2, 0.0])


def test_exponential_zero_below_origin():
    ys = pdf_exponential(np.array([-1.0, 0.0, 1.0]), 2.0)
    assert ys[0] == 0.0
    assert math.isclose(ys[1], 2.0)
    assert math.isclose(ys[2], 2.0 * math.exp(-2.0))


def test_factorial_and_binomial_coefficient():
    assert factorial(0) == 1.0
    assert factorial(1) == 1.0
    assert factorial(5) == 120.0
    assert binomial_coefficient(10, 3) == 120.0
    assert binomial_coefficient(20, 10) == 184756.0
    assert binomial_coefficient(4, 0) == 1.0
    assert binomial_coefficient(4, 5) == 0.0
    assert binomial_coefficient(4, -1) == 0.0


def test_binomial_pmf_sums_to_one_over_slider_range():
    n_range = PARAM_RANGES["binomial"]["n"]
    for n in range(int(n_range.min), int(n_range.max) + 1):
        for p in np.arange(0.1, 0.91, 0.1):
            ks, probs = pmf_binomial(n, float(p))
            assert len(ks) == n + 1
            assert abs(probs.sum() - 1.0) < 1e-6


def test_binomial_zero_trials():
    ks, probs = pmf_binomial(0, 0.3)
    assert list(ks) == [0]
    assert math.isclose(probs[0], 1.0)


def test_poisson_pmf_sum_approaches_one():
    for lam in np.arange(0.5, 15.01, 0.5):
        ks, probs = pmf_poisson(float(lam))
        assert ks[-1] == min(20, math.ceil(3 * lam))
        total = probs.sum()
        assert total <= 1.0 + 1e-12
        assert total > 0.9


def test_poisson_truncated_at_twenty():
    ks, _ = pmf_poisson(15.0)
    assert ks[-1] == 20


def test_default_normal_grid_end_to_end():
    xs, ys = density_grid(NormalSpec(0.0, 1.0))
    assert len(xs) == 101
    assert math.isclose(xs[0], -4.0)
    assert math.isclose(xs[-1], 4.0)
    i = int(np.argmax(ys))
    assert abs(xs[i]) < 1e-12
    assert math.isclose(ys[i], 0.3989, abs_tol=1e-4)


def test_continuous_grids_span_their_domains():
    xs, ys = density_grid(UniformSpec(-3.0, 3.0))
    assert math.isclose(xs[0], -4.0) and math.isclose(xs[-1], 4.0)
    assert ys[0] == 0.0 and ys[-1] == 0.0
    assert math.isclose(ys.max(), 1.0 / 6.0)
    xs, ys = density_grid(ExponentialSpec(2.0))
    assert math.isclose(xs[0], 0.0) and math.isclose(xs[-1], 2.5)
    assert math.isclose(ys[0], 2.0)


def test_iter_grid_points_ordered_left_to_right():
    pts = list(iter_grid_points(BinomialSpec(6, 0.4)))
    assert all(isinstance(p, GridPoint) for p in pts)
    assert [p.x for p in pts] == [0, 1, 2, 3, 4, 5, 6]
    xs = [p.x for p in iter_grid_points(NormalSpec(1.0, 2.0))]
    assert all(xs[i] < xs[i + 1] for i in range(len(xs) - 1))


def test_make_spec_defaults_and_unknown_kind():
    assert make_spec("normal") == NormalSpec(0.0, 1.0)
    assert make_spec("binomial", n=7.0, p=0.2) == BinomialSpec(7, 0.2)
    assert make_spec("poisson", lam=2.0) == PoissonSpec(2.0)
    with pytest.raises(ValueError):
        make_spec("cauchy")


def test_clamp_to_range():
    assert clamp_to_range("normal", "std", 0.0) == 0.1
    assert clamp_to_range("binomial", "p", 1.0) == 0.9
    assert clamp_to_range("poisson", "lam", 3.0) == 3.0


def test_info_and_discreteness_for_every_kind():
    for kind in KINDS:
        spec = make_spec(kind)
        info = distribution_info(spec)
        assert info.title.lower().startswith(kind)
        assert info.formula and info.description
        assert is_discrete(spec) == (kind in ("binomial", "poisson"))


def test_uniform_slider_values_never_collapse():
    r_min = PARAM_RANGES["uniform"]["min"]
    r_max = PARAM_RANGES["uniform"]["max"]
    mins = np.arange(r_min.min, r_min.max + 1e-9, r_min.step)
    maxs = np.arange(r_max.min, r_max.max + 1e-9, r_max.step)
    for a in mins:
        for b in maxs:
            params = clamp_params("uniform", {"min": float(a), "max": float(b)})
            assert params["max"] > params["min"]
            _, ys = density_grid(make_spec("uniform", **params))
            assert ys.max() <= 1.0 / r_min.step + 1e-9


def test_clamp_params_separates_touching_uniform_bounds():
    params = clamp_params("uniform", {"min": 0.0, "max": 0.0})
    assert params["min"] == -0.5
    assert params["max"] == 0.5
    _, ys = density_grid(make_spec("uniform", **params))
    assert math.isclose(ys.max(), 1.0)


def test_clamp_params_binomial_n_is_int():
    params = clamp_params("binomial", {"n": 25.0, "p": 0.0})
    assert params == {"n": 20, "p": 0.1}
    assert isinstance(params["n"], int)
