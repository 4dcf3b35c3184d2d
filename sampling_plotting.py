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

from sampling_methods import SamplingResult, TargetDensity


def _marker_sizes(result: SamplingResult, base: float) -> np.ndarray:
    if result.method == "importance":
        return np.sqrt(np.clip(result.weights, 0.0, None)) * base
    return np.full(len(result.samples), base / 2.0)


def plot_samples_plotly(target: TargetDensity, result: SamplingResult, title: str = "", show_hist: bool = False):
    if not PLOTLY_AVAILABLE:
        return None
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(x=target.xs, y=target.ys, mode="lines", line=dict(color="steelblue", width=2), name="Target")
    )
    if result.samples:
        fig.add_trace(
            go.Scatter(
                x=result.xs,
                y=result.ys,
                mode="markers",
                marker=dict(size=_marker_sizes(result, 8.0), color="rgba(214,39,40,0.5)"),
                name="Samples",
            )
        )
        if show_hist:
            fig.add_trace(
                go.Histogram(
                    x=result.xs,
                    xbins=dict(start=target.x_min, end=target.x_max, size=0.2),
                    histnorm="probability density",
                    marker_color="rgba(31,119,180,0.35)",
                    name="sample histogram",
                )
            )
    fig.update_xaxes(range=[target.x_min, target.x_max], title_text="x", dtick=1, showgrid=True)
    fig.update_yaxes(range=[0.0, 1.05], title_text="density (scaled)", showgrid=True)
    fig.update_layout(title=title, margin=dict(l=10, r=10, t=30, b=10), height=420)
    return fig


def plot_samples_matplotlib(target: TargetDensity, result: SamplingResult, title: str = "", show_hist: bool = False):
    if not MATPLOTLIB_AVAILABLE:
        return None
    fig, ax = plt.subplots(figsize=(6.5, 3.8))
    ax.plot(target.xs, target.ys, c="steelblue", lw=2, label="Target")
    if result.samples:
        sizes = _marker_sizes(result, 8.0) ** 2
        ax.scatter(result.xs, result.ys, s=sizes, c=[(0.84, 0.15, 0.16, 0.5)], label="Samples")
        if show_hist:
            bins = np.arange(target.x_min, target.x_max + 0.2, 0.2)
            ax.hist(result.xs, bins=bins, density=True, color=(0.12, 0.47, 0.71, 0.35), label="sample histogram")
    ax.set_xlim(target.x_min, target.x_max)
    ax.set_ylim(0.0, 1.05)
    ax.set_title(title)
    ax.grid(True, linestyle="--", alpha=0.4)
    ax.legend(loc="best")
    return fig


__all__ = [
    "plot_samples_plotly",
    "plot_samples_matplotlib",
]
