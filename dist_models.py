import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, NamedTuple, Tuple, Union

import numpy as np


KINDS = ("normal", "uniform", "exponential", "binomial", "poisson")


# ----------- Distribution specs -----------

@dataclass(frozen=True)
class NormalSpec:
    mean: float = 0.0
    std: float = 1.0
    kind: str = "normal"


@dataclass(frozen=True)
class UniformSpec:
    min: float = -3.0
    max: float = 3.0
    kind: str = "uniform"


@dataclass(frozen=True)
class ExponentialSpec:
    lam: float = 1.0
    kind: str = "exponential"


@dataclass(frozen=True)
class BinomialSpec:
    n: int = 10
    p: float = 0.5
    kind: str = "binomial"


@dataclass(frozen=True)
class PoissonSpec:
    lam: float = 5.0
    kind: str = "poisson"


DistributionSpec = Union[NormalSpec, UniformSpec, ExponentialSpec, BinomialSpec, PoissonSpec]

_SPEC_TYPES = {
    "normal": NormalSpec,
    "uniform": UniformSpec,
    "exponential": ExponentialSpec,
    "binomial": BinomialSpec,
    "poisson": PoissonSpec,
}

DEFAULT_PARAMS: Dict[str, Dict[str, float]] = {
    "normal": {"mean": 0.0, "std": 1.0},
    "uniform": {"min": -3.0, "max": 3.0},
    "exponential": {"lam": 1.0},
    "binomial": {"n": 10, "p": 0.5},
    "poisson": {"lam": 5.0},
}


class ParamRange(NamedTuple):
    min: float
    max: float
    step: float


# Slider bounds; every value inside these keeps the formulas in float range.
PARAM_RANGES: Dict[str, Dict[str, ParamRange]] = {
    "normal": {"mean": ParamRange(-5.0, 5.0, 0.5), "std": ParamRange(0.1, 3.0, 0.1)},
    "uniform": {"min": ParamRange(-10.0, -0.5, 0.5), "max": ParamRange(0.5, 10.0, 0.5)},
    "exponential": {"lam": ParamRange(0.1, 3.0, 0.1)},
    "binomial": {"n": ParamRange(1, 20, 1), "p": ParamRange(0.1, 0.9, 0.1)},
    "poisson": {"lam": ParamRange(0.5, 15.0, 0.5)},
}


def make_spec(kind: str, **params) -> DistributionSpec:
    if kind not in _SPEC_TYPES:
        raise ValueError(f"Unknown distribution kind: {kind!r}")
    values = dict(DEFAULT_PARAMS[kind])
    values.update(params)
    if kind == "binomial":
        values["n"] = int(values["n"])
    return _SPEC_TYPES[kind](**values)


def clamp_to_range(kind: str, name: str, value: float) -> float:
    bounds = PARAM_RANGES[kind][name]
    return float(min(max(value, bounds.min), bounds.max))


def clamp_params(kind: str, params: Dict[str, float]) -> Dict[str, float]:
    out = {name: clamp_to_range(kind, name, value) for name, value in params.items()}
    if kind == "uniform":
        # Keep a < b so the density stays finite
        step = PARAM_RANGES["uniform"]["max"].step
        out["max"] = max(out["max"], out["min"] + step)
    if kind == "binomial":
        out["n"] = int(out["n"])
    return out


def is_discrete(spec: DistributionSpec) -> bool:
    return spec.kind in ("binomial", "poisson")


# ----------- Continuous PDFs -----------

def pdf_normal(x: np.ndarray, mean: float, std: float) -> np.ndarray:
    std = max(float(std), 1e-9)
    z = (np.asarray(x, dtype=float) - mean) / std
    return np.exp(-0.5 * z * z) / (std * math.sqrt(2.0 * math.pi))


def pdf_uniform(x: np.ndarray, a: float, b: float) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    a, b = (a, b) if a <= b else (b, a)
    y = np.zeros_like(x, dtype=float)
    inside = (x >= a) & (x <= b)
    width = max(b - a, 1e-12)
    y[inside] = 1.0 / width
    return y


def pdf_exponential(x: np.ndarray, lam: float) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    lam = max(float(lam), 1e-9)
    y = np.zeros_like(x, dtype=float)
    pos = x >= 0
    y[pos] = lam * np.exp(-lam * x[pos])
    return y


# ----------- Discrete PMFs -----------

def factorial(k: int) -> float:
    out = 1.0
    for i in range(2, int(k) + 1):
        out *= i
    return out


def binomial_coefficient(n: int, k: int) -> float:
    """n choose k as a running product; exact for the slider range of n."""
    n, k = int(n), int(k)
    if k < 0 or k > n:
        return 0.0
    k = min(k, n - k)
    out = 1.0
    for i in range(1, k + 1):
        out = out * (n - k + i) / i
    return out


def pmf_binomial(n: int, p: float) -> Tuple[np.ndarray, np.ndarray]:
    n = max(int(n), 0)
    p = float(p)
    ks = np.arange(n + 1)
    probs = np.array([binomial_coefficient(n, k) * p ** k * (1.0 - p) ** (n - k) for k in ks], dtype=float)
    return ks, probs


def poisson_max_k(lam: float) -> int:
    return min(20, int(math.ceil(lam * 3)))


def pmf_poisson(lam: float) -> Tuple[np.ndarray, np.ndarray]:
    lam = max(float(lam), 1e-9)
    ks = np.arange(poisson_max_k(lam) + 1)
    probs = np.array([lam ** k * math.exp(-lam) / factorial(k) for k in ks], dtype=float)
    return ks, probs


# ----------- Grids -----------

def support_grid(spec: DistributionSpec, points: int = 100) -> np.ndarray:
    if spec.kind == "normal":
        std = max(float(spec.std), 1e-9)
        return np.linspace(spec.mean - 4 * std, spec.mean + 4 * std, points + 1)
    if spec.kind == "uniform":
        a, b = min(spec.min, spec.max), max(spec.min, spec.max)
        return np.linspace(a - 1, b + 1, points + 1)
    if spec.kind == "exponential":
        lam = max(float(spec.lam), 1e-9)
        return np.linspace(0.0, 5.0 / lam, points + 1)
    if spec.kind == "binomial":
        return np.arange(max(int(spec.n), 0) + 1)
    if spec.kind == "poisson":
        return np.arange(poisson_max_k(spec.lam) + 1)
    raise ValueError(f"Unknown distribution kind: {spec.kind!r}")


def density_grid(spec: DistributionSpec, points: int = 100) -> Tuple[np.ndarray, np.ndarray]:
    """Support points and density (or mass) values for plotting ``spec``.

    Continuous kinds return ``points + 1`` evenly spaced values including both
    ends of the domain; discrete kinds return their integer support.
    """
    if spec.kind == "binomial":
        return pmf_binomial(spec.n, spec.p)
    if spec.kind == "poisson":
        return pmf_poisson(spec.lam)
    xs = support_grid(spec, points)
    if spec.kind == "normal":
        return xs, pdf_normal(xs, spec.mean, spec.std)
    if spec.kind == "uniform":
        return xs, pdf_uniform(xs, spec.min, spec.max)
    return xs, pdf_exponential(xs, spec.lam)


class GridPoint(NamedTuple):
    x: float
    y: float


def iter_grid_points(spec: DistributionSpec, points: int = 100) -> Iterator[GridPoint]:
    xs, ys = density_grid(spec, points)
    for x, y in zip(xs, ys):
        yield GridPoint(float(x), float(y))


# ----------- Descriptive text -----------

class DistributionInfo(NamedTuple):
    title: str
    formula: str
    parameters: str
    description: str


def distribution_info(spec: DistributionSpec) -> DistributionInfo:
    if spec.kind == "normal":
        return DistributionInfo(
            "Normal Distribution",
            "f(x) = (1 / (σ√2π)) · e^(-(x-μ)²/2σ²)",
            f"μ = {spec.mean:g}, σ = {spec.std:g}",
            "The normal distribution is fundamental in statistics and ML. It is symmetric around its mean μ "
            "and its spread is determined by the standard deviation σ. Many natural phenomena follow this "
            "distribution because of the Central Limit Theorem.",
        )
    if spec.kind == "uniform":
        return DistributionInfo(
            "Uniform Distribution",
            "f(x) = 1/(b-a) for a ≤ x ≤ b",
            f"a = {spec.min:g}, b = {spec.max:g}",
            "The uniform distribution spreads probability evenly across a range. It is often used to "
            "initialise ML algorithms and to generate random numbers for simulations.",
        )
    if spec.kind == "exponential":
        return DistributionInfo(
            "Exponential Distribution",
            "f(x) = λe^(-λx) for x ≥ 0",
            f"λ = {spec.lam:g}",
            "The exponential distribution models the time between events in a Poisson process. It shows up "
            "in survival analysis, reliability engineering and waiting-time models.",
        )
    if spec.kind == "binomial":
        return DistributionInfo(
            "Binomial Distribution",
            "P(X = k) = (n choose k) · p^k · (1-p)^(n-k)",
            f"n = {spec.n}, p = {spec.p:g}",
            "The binomial distribution counts successes in n independent trials with success probability p. "
            "It is used in classification problems and hypothesis testing.",
        )
    if spec.kind == "poisson":
        return DistributionInfo(
            "Poisson Distribution",
            "P(X = k) = (λ^k · e^(-λ)) / k!",
            f"λ = {spec.lam:g}",
            "The Poisson distribution models the number of events in a fixed interval. It is used for rare "
            "event analysis, queueing theory and count data.",
        )
    raise ValueError(f"Unknown distribution kind: {spec.kind!r}")


def param_labels(kind: str) -> List[Tuple[str, str]]:
    labels = {
        "normal": [("mean", "Mean (μ)"), ("std", "Standard deviation (σ)")],
        "uniform": [("min", "Minimum (a)"), ("max", "Maximum (b)")],
        "exponential": [("lam", "Rate (λ)")],
        "binomial": [("n", "Trials (n)"), ("p", "Success probability (p)")],
        "poisson": [("lam", "Rate (λ)")],
    }
    if kind not in labels:
        raise ValueError(f"Unknown distribution kind: {kind!r}")
    return labels[kind]
