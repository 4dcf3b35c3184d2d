import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from sampling_methods import box_muller


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bounds2D:
    x_min: float
    x_max: float
    y_min: float
    y_max: float


@dataclass(frozen=True)
class BivariateNormal:
    mu1: float = 0.0
    mu2: float = 0.0
    sigma1: float = 1.0
    sigma2: float = 1.0
    rho: float = 0.7

    def mean(self) -> np.ndarray:
        return np.array([self.mu1, self.mu2], dtype=float)

    def covariance(self) -> np.ndarray:
        c = self.rho * self.sigma1 * self.sigma2
        return np.array([[self.sigma1 ** 2, c], [c, self.sigma2 ** 2]], dtype=float)

    def peak_density(self) -> float:
        return 1.0 / (2.0 * math.pi * self.sigma1 * self.sigma2 * math.sqrt(1.0 - self.rho * self.rho))


DEFAULT_BOUNDS = Bounds2D(-3.0, 3.0, -3.0, 3.0)


# ----------- Closed-form density -----------

def pdf_bivariate_normal(x: np.ndarray, y: np.ndarray, params: BivariateNormal = BivariateNormal()) -> np.ndarray:
    rho = float(np.clip(params.rho, -0.999, 0.999))
    s1 = max(float(params.sigma1), 1e-9)
    s2 = max(float(params.sigma2), 1e-9)
    zx = (np.asarray(x, dtype=float) - params.mu1) / s1
    zy = (np.asarray(y, dtype=float) - params.mu2) / s2
    one_m_r2 = 1.0 - rho * rho
    norm = 1.0 / (2.0 * math.pi * s1 * s2 * math.sqrt(one_m_r2))
    return norm * np.exp(-(zx * zx + zy * zy - 2.0 * rho * zx * zy) / (2.0 * one_m_r2))


def grid_axis(n: int = 50, lo: float = -3.0, hi: float = 3.0) -> np.ndarray:
    # Half-open [lo, hi): the centre lands exactly on index n // 2 for even n.
    return lo + (hi - lo) * np.arange(n) / n


def density_field(params: BivariateNormal = BivariateNormal(), n: int = 50,
                  lo: float = -3.0, hi: float = 3.0) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Evaluate the density on an n x n grid.

    Returns the x axis, the y axis and a flat array of n*n values ordered
    row-major with y as the outer index, so ``z[j * n + i]`` is the density
    at ``(gx[i], gy[j])``.
    """
    gx = grid_axis(n, lo, hi)
    gy = grid_axis(n, lo, hi)
    X, Y = np.meshgrid(gx, gy, indexing="xy")
    Z = pdf_bivariate_normal(X, Y, params)
    return gx, gy, Z.ravel()


# ----------- Correlated samples -----------

def sample_correlated(n: int, rng: np.random.Generator, params: BivariateNormal = BivariateNormal()) -> np.ndarray:
    out = np.empty((int(n), 2), dtype=float)
    scale = math.sqrt(max(0.0, 1.0 - params.rho * params.rho))
    for i in range(int(n)):
        z1, z2 = box_muller(rng)
        out[i, 0] = z1 * params.sigma1 + params.mu1
        out[i, 1] = (params.rho * z1 + scale * z2) * params.sigma2 + params.mu2
    logger.debug("drew %d correlated pairs with rho=%.3f", n, params.rho)
    return out


def sample_correlation(samples: np.ndarray) -> float:
    if samples.shape[0] < 2:
        return 0.0
    return float(np.corrcoef(samples[:, 0], samples[:, 1])[0, 1])


# ----------- Contour inputs -----------

def kde2d_grid(data: np.ndarray, bounds: Bounds2D = DEFAULT_BOUNDS,
               gridsize: int = 60, chunk: int = 256) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    n = data.shape[0]
    gx = np.linspace(bounds.x_min, bounds.x_max, gridsize)
    gy = np.linspace(bounds.y_min, bounds.y_max, gridsize)
    X, Y = np.meshgrid(gx, gy, indexing="xy")
    if n < 2:
        return X, Y, np.zeros_like(X)
    std = np.std(data, axis=0)
    factor = n ** (-1.0 / 6.0)
    hx = std[0] * factor if std[0] > 0 else (bounds.x_max - bounds.x_min) / 50.0
    hy = std[1] * factor if std[1] > 0 else (bounds.y_max - bounds.y_min) / 50.0
    hx = max(hx, 1e-6)
    hy = max(hy, 1e-6)
    xs = X.ravel()
    ys = Y.ravel()
    Z = np.empty(xs.size, dtype=float)
    # Sum the kernel a block of grid points at a time; memory stays chunk x n
    for start in range(0, xs.size, chunk):
        stop = start + chunk
        dx = (xs[start:stop, None] - data[:, 0][None, :]) / hx
        dy = (ys[start:stop, None] - data[:, 1][None, :]) / hy
        Z[start:stop] = np.exp(-0.5 * (dx * dx + dy * dy)).sum(axis=1)
    Z = Z.reshape(X.shape)
    Z *= 1.0 / (2.0 * np.pi * hx * hy * n)
    return X, Y, Z


def ellipse_points(mean: np.ndarray, cov: np.ndarray, n: int = 120, k_sigma: float = 1.0) -> np.ndarray:
    vals, vecs = np.linalg.eigh(cov)
    vals = np.clip(vals, 1e-12, None)
    axes = vecs @ (np.sqrt(vals) * k_sigma * np.eye(2))
    ts = np.linspace(0, 2 * np.pi, n)
    circle = np.stack([np.cos(ts), np.sin(ts)], axis=0)
    return (mean.reshape(2, 1) + axes @ circle).T
