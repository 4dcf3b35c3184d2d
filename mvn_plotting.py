from typing import List, Optional

import numpy as np

try:
    import plotly.graph_objects as go  # type: ignore
    PLOTLY_AVAILABLE = True
except Exception:
    PLOTLY_AVAILABLE = False

try:
    import matplotlib.pyplot as plt  # type: ignore
    MATPLOTLIB_AVAILABLE = True
except Exception:
    MATPLOTLIB_AVAILABLE = False

from mvn_utils import Bounds2D


def plot_contours_plotly(X: np.ndarray, Y: np.ndarray, Z: np.ndarray, bounds: Bounds2D, title: str,
                         samples: Optional[np.ndarray] = None,
                         ellipses: Optional[List[np.ndarray]] = None,
                         n_levels: int = 15):
    if not PLOTLY_AVAILABLE:
        return None
    fig = go.Figure()
    zmax = float(Z.max()) if Z.size else 0.0
    fig.add_trace(
        go.Contour(
            x=X[0, :], y=Y[:, 0], z=Z,
            colorscale="Blues",
            autocontour=False,
            contours=dict(start=0.0, end=zmax, size=(zmax / n_levels) if zmax > 0 else 1.0),
            line=dict(color="steelblue", width=0.5),
            showscale=False,
            name="density",
        )
    )
    if samples is not None and samples.size:
        fig.add_trace(
            go.Scatter(x=samples[:, 0], y=samples[:, 1], mode="markers",
                       marker=dict(size=3, color="rgba(214,39,40,0.35)"), name="samples")
        )
    for k, pts in enumerate(ellipses or [], start=1):
        fig.add_trace(
            go.Scatter(x=pts[:, 0], y=pts[:, 1], mode="lines",
                       line=dict(color="#FFD700", width=1.5, dash="dash"), name=f"{k}σ ellipse")
        )
    fig.update_xaxes(range=[bounds.x_min, bounds.x_max], title_text="X₁", showgrid=True)
    fig.update_yaxes(range=[bounds.y_min, bounds.y_max], title_text="X₂", scaleanchor="x", scaleratio=1, showgrid=True)
    fig.update_layout(title=title, margin=dict(l=10, r=10, t=30, b=10), height=480)
    return fig


def plot_contours_matplotlib(X: np.ndarray, Y: np.ndarray, Z: np.ndarray, bounds: Bounds2D, title: str,
                             samples: Optional[np.ndarray] = None,
                             ellipses: Optional[List[np.ndarray]] = None,
                             n_levels: int = 15):
    if not MATPLOTLIB_AVAILABLE:
        return None
    fig, ax = plt.subplots(figsize=(5, 5))
    if Z.size and float(Z.max()) > 0:
        ax.contourf(X, Y, Z, levels=n_levels, cmap="Blues")
        ax.contour(X, Y, Z, levels=n_levels, colors="steelblue", linewidths=0.5)
    if samples is not None and samples.size:
        ax.scatter(samples[:, 0], samples[:, 1], s=4, c=[(0.84, 0.15, 0.16, 0.35)], label="samples")
    for k, pts in enumerate(ellipses or [], start=1):
        ax.plot(pts[:, 0], pts[:, 1], color="#FFD700", linestyle="--", linewidth=1.5, label=f"{k}σ ellipse")
    ax.set_xlim(bounds.x_min, bounds.x_max)
    ax.set_ylim(bounds.y_min, bounds.y_max)
    ax.set_xlabel("X₁")
    ax.set_ylabel("X₂")
    ax.set_title(title)
    ax.set_aspect("equal", adjustable="box")
    ax.grid(True, alpha=0.3, which="major")
    if samples is not None or ellipses:
        ax.legend(loc="best")
    return fig


__all__ = [
    "plot_contours_plotly",
    "plot_contours_matplotlib",
]
