import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from dist_models import pdf_normal


logger = logging.getLogger(__name__)

METHODS = ("rejection", "mcmc", "importance")


# ----------- Config and result types -----------

@dataclass(frozen=True)
class SamplerConfig:
    n_samples: int = 300
    max_proposals: int = 5000
    burn_in: int = 500
    step_size: float = 0.25
    proposal_std: float = 1.5
    weight_scale: float = 4.0
    weight_cap: float = 5.0
    jitter: float = 0.1


class Sample(NamedTuple):
    x: float
    y: float
    weight: float = 1.0


@dataclass
class SamplingResult:
    method: str
    samples: List[Sample] = field(default_factory=list)
    n_proposals: int = 0
    n_accepted: int = 0

    @property
    def acceptance_rate(self) -> float:
        return self.n_accepted / self.n_proposals if self.n_proposals else 0.0

    @property
    def xs(self) -> np.ndarray:
        return np.array([s.x for s in self.samples], dtype=float)

    @property
    def ys(self) -> np.ndarray:
        return np.array([s.y for s in self.samples], dtype=float)

    @property
    def weights(self) -> np.ndarray:
        return np.array([s.weight for s in self.samples], dtype=float)


# ----------- Target density -----------

@dataclass(frozen=True, eq=False)
class TargetDensity:
    """Bimodal target tabulated on [x_min, x_min + step * len(ys))."""

    xs: np.ndarray
    ys: np.ndarray
    x_min: float = -3.0
    x_max: float = 3.0
    step: float = 0.1

    def __len__(self) -> int:
        return len(self.ys)

    def index_of(self, x: float) -> int:
        return int(math.floor((x - self.x_min) / self.step))

    def lookup(self, x: float) -> float:
        idx = self.index_of(x)
        if 0 <= idx < len(self.ys):
            return float(self.ys[idx])
        return 0.0


def bimodal_density(x: np.ndarray) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    return 0.6 * np.exp(-((x - 1.0) ** 2) / 0.5) + 0.4 * np.exp(-((x + 1.0) ** 2) / 0.8)


def make_target_density(x_min: float = -3.0, x_max: float = 3.0, step: float = 0.1) -> TargetDensity:
    n = int(round((x_max - x_min) / step))
    xs = x_min + step * np.arange(n)
    ys = bimodal_density(xs)
    ys = ys / ys.max()
    return TargetDensity(xs=xs, ys=ys, x_min=x_min, x_max=x_max, step=step)


# ----------- Random draws -----------

def box_muller(rng: np.random.Generator) -> Tuple[float, float]:
    u = 0.0
    while u == 0.0:
        u = float(rng.random())
    v = 0.0
    while v == 0.0:
        v = float(rng.random())
    r = math.sqrt(-2.0 * math.log(u))
    return r * math.cos(2.0 * math.pi * v), r * math.sin(2.0 * math.pi * v)


# ----------- Samplers -----------

def rejection_sample(target: TargetDensity, rng: np.random.Generator,
                     config: SamplerConfig = SamplerConfig()) -> SamplingResult:
    width = target.x_max - target.x_min
    result = SamplingResult(method="rejection")
    while result.n_accepted < config.n_samples and result.n_proposals < config.max_proposals:
        result.n_proposals += 1
        x = target.x_min + width * float(rng.random())
        y = float(rng.random())
        if y < target.lookup(x):
            result.samples.append(Sample(x, y))
            result.n_accepted += 1
    if result.n_accepted < config.n_samples:
        logger.warning("rejection sampling stopped at %d proposals with %d/%d samples",
                       result.n_proposals, result.n_accepted, config.n_samples)
    logger.debug("rejection: %d accepted of %d proposals", result.n_accepted, result.n_proposals)
    return result


def metropolis_hastings(target: TargetDensity, rng: np.random.Generator,
                        config: SamplerConfig = SamplerConfig(),
                        start: Optional[float] = None) -> SamplingResult:
    """Random-walk Metropolis-Hastings on the tabulated target.

    The first ``config.burn_in`` states are discarded and the next
    ``config.n_samples`` are kept. Each kept state gets a uniform height in
    ``[0, config.jitter)`` so the points can be spread out when plotted.
    """
    width = target.x_max - target.x_min
    current = target.x_min + width * float(rng.random()) if start is None else float(start)
    result = SamplingResult(method="mcmc")
    for i in range(config.n_samples + config.burn_in):
        result.n_proposals += 1
        proposed = current + (float(rng.random()) - 0.5) * 2.0 * config.step_size
        if target.x_min <= proposed <= target.x_max:
            cur_idx = target.index_of(current)
            prop_idx = target.index_of(proposed)
            if 0 <= cur_idx < len(target) and 0 <= prop_idx < len(target):
                cur_density = float(target.ys[cur_idx])
                prop_density = float(target.ys[prop_idx])
                accept_prob = min(1.0, prop_density / cur_density) if cur_density > 0 else 1.0
                if float(rng.random()) < accept_prob:
                    current = proposed
                    result.n_accepted += 1
        if i >= config.burn_in:
            result.samples.append(Sample(current, float(rng.random()) * config.jitter))
    logger.debug("mcmc: %d moves accepted over %d iterations", result.n_accepted, result.n_proposals)
    return result


def proposal_density(x: float, config: SamplerConfig = SamplerConfig()) -> float:
    return float(pdf_normal(np.array([x]), 0.0, config.proposal_std)[0])


def importance_sample(target: TargetDensity, rng: np.random.Generator,
                      config: SamplerConfig = SamplerConfig()) -> SamplingResult:
    result = SamplingResult(method="importance")
    for _ in range(config.n_samples):
        result.n_proposals += 1
        z = box_muller(rng)[0]
        x = z * config.proposal_std
        if not (target.x_min <= x <= target.x_max):
            continue
        y = float(rng.random()) * config.jitter
        idx = target.index_of(x)
        weight = 0.0
        if 0 <= idx < len(target):
            weight = float(target.ys[idx]) / (proposal_density(x, config) * config.weight_scale)
        result.samples.append(Sample(x, y, min(weight, config.weight_cap)))
        result.n_accepted += 1
    logger.debug("importance: %d of %d draws inside the target range", result.n_accepted, result.n_proposals)
    return result


def self_normalized_mean(result: SamplingResult) -> float:
    w = result.weights
    total = float(w.sum())
    if total <= 0:
        return 0.0
    return float((w * result.xs).sum() / total)


def run_sampler(method: str, target: TargetDensity, rng: np.random.Generator,
                config: SamplerConfig = SamplerConfig()) -> SamplingResult:
    if method == "rejection":
        return rejection_sample(target, rng, config)
    if method == "mcmc":
        return metropolis_hastings(target, rng, config)
    if method == "importance":
        return importance_sample(target, rng, config)
    raise ValueError(f"Unknown sampling method: {method!r}")


# ----------- Descriptive text -----------

METHOD_INFO: Dict[str, Dict[str, str]] = {
    "rejection": {
        "title": "Rejection Sampling",
        "description": "Samples uniformly from a bounding region and keeps only points under the target density curve.",
        "applications": "Simple to implement but inefficient in high dimensions.",
        "note": "",
    },
    "mcmc": {
        "title": "Markov Chain Monte Carlo (MCMC)",
        "description": "Creates a Markov chain that has the target distribution as its equilibrium distribution.",
        "applications": "Bayesian inference, sampling from complex posteriors, variational inference.",
        "note": "",
    },
    "importance": {
        "title": "Importance Sampling",
        "description": "Samples from a proposal distribution and reweights samples to match the target distribution.",
        "applications": "Variational inference, reinforcement learning, rare event simulation.",
        "note": "Marker size represents importance weight.",
    },
}
