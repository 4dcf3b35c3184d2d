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


def make_plotly_density_figure(xs: np.ndarray, ys: np.ndarray, discrete: bool, title: str = ""):
    if not PLOTLY_AVAILABLE:
        return None
    fig = go.Figure()
    if discrete:
        fig.add_trace(go.Bar(x=xs, y=ys, marker_color="#8884d8", name="Probability"))
        fig.update_xaxes(title_text="k", dtick=1 if len(xs) <= 25 else None)
        fig.update_yaxes(title_text="P(X = k)")
    else:
        fig.add_trace(
            go.Scatter(x=xs, y=ys, mode="lines", line=dict(color="#8884d8", width=2), name="Probability density")
        )
        fig.update_xaxes(title_text="x")
        fig.update_yaxes(title_text="f(x)")
    fig.update_layout(title=title, margin=dict(l=10, r=10, t=30, b=10), height=420, showlegend=True)
    return fig


def make_matplotlib_density_figure(xs: np.ndarray, ys: np.ndarray, discrete: bool, title: str = ""):
    if not MATPLOTLIB_AVAILABLE:
        return None
    fig, ax = plt.subplots(figsize=(6.5, 3.8))
    if discrete:
        ax.bar(xs, ys, color="#8884d8", label="Probability")
        ax.set_xlabel("k")
        ax.set_ylabel("P(X = k)")
    else:
        ax.plot(xs, ys, c="#8884d8", lw=2, label="Probability density")
        ax.set_xlabel("x")
        ax.set_ylabel("f(x)")
    ax.set_title(title)
    ax.grid(True, linestyle="--", alpha=0.4)
    ax.legend(loc="best")
    return fig


__all__ = [
    "make_plotly_density_figure",
    "make_matplotlib_density_figure",
]
