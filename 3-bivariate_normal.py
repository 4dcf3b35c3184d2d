import logging

import numpy as np
import streamlit as st

from mvn_utils import (
    DEFAULT_BOUNDS,
    BivariateNormal,
    density_field,
    ellipse_points,
    kde2d_grid,
    sample_correlated,
    sample_correlation,
)
from mvn_plotting import (
    PLOTLY_AVAILABLE,
    MATPLOTLIB_AVAILABLE,
    plot_contours_plotly,
    plot_contours_matplotlib,
)


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Bivariate Normal Demo", layout="wide")


def ensure_state():
    if "rng_seed" not in st.session_state:
        st.session_state.rng_seed = 123
    if "rng" not in st.session_state:
        st.session_state.rng = np.random.default_rng(int(st.session_state.rng_seed))
    if "mvn_samples" not in st.session_state:
        st.session_state.mvn_samples = None
    if "mvn_params" not in st.session_state:
        st.session_state.mvn_params = None


def get_rng() -> np.random.Generator:
    return st.session_state.rng


def main():
    ensure_state()
    params = BivariateNormal()
    st.title(f"Bivariate Normal Distribution (ρ = {params.rho:g})")

    with st.sidebar:
        st.header("Settings")
        source = st.radio("Contours from", ["Samples (KDE)", "Closed-form density"], index=0)
        n_samples = st.slider("Sample pairs", 200, 2000, 2000, step=100)
        show_samples = st.checkbox("Show samples", value=False)
        show_ellipses = st.checkbox("Show 1σ/2σ ellipses", value=False)
        resample_clicked = st.button("Draw new samples")
        st.markdown("---")
        seed = st.number_input("Random seed", value=int(st.session_state.rng_seed), step=1)
        if seed != st.session_state.rng_seed:
            st.session_state.rng_seed = int(seed)
            st.session_state.rng = np.random.default_rng(int(seed))
            resample_clicked = True

    samples = st.session_state.mvn_samples
    if resample_clicked or samples is None or samples.shape[0] != n_samples or st.session_state.mvn_params != params:
        samples = sample_correlated(n_samples, get_rng(), params)
        st.session_state.mvn_samples = samples
        st.session_state.mvn_params = params
        logger.info("drew %d bivariate samples", n_samples)

    bounds = DEFAULT_BOUNDS
    if source == "Closed-form density":
        gx, gy, z = density_field(params, n=50, lo=bounds.x_min, hi=bounds.x_max)
        X, Y = np.meshgrid(gx, gy, indexing="xy")
        Z = z.reshape(len(gy), len(gx))
    else:
        X, Y, Z = kde2d_grid(samples, bounds, gridsize=60)

    ellipses = None
    if show_ellipses:
        ellipses = [ellipse_points(params.mean(), params.covariance(), k_sigma=k) for k in (1.0, 2.0)]
    title = f"Bivariate Normal Distribution (ρ = {params.rho:g})"
    shown = samples if show_samples else None

    if PLOTLY_AVAILABLE:
        fig = plot_contours_plotly(X, Y, Z, bounds, title, samples=shown, ellipses=ellipses)
        st.plotly_chart(fig, use_container_width=True)
    elif MATPLOTLIB_AVAILABLE:
        figm = plot_contours_matplotlib(X, Y, Z, bounds, title, samples=shown, ellipses=ellipses)
        st.pyplot(figm, clear_figure=True)
    else:
        st.info("Install plotly or matplotlib to see plots.")

    c1, c2 = st.columns(2)
    with c1:
        st.metric(label="Sample correlation", value=f"{sample_correlation(samples):.3f}")
    with c2:
        st.metric(label="Peak density", value=f"{params.peak_density():.4f}")

    st.markdown(
        f"""
        **Multivariate Normal Distribution** generalizes the normal distribution to higher dimensions.
        The visualization shows a bivariate normal with correlation ρ = {params.rho:g}.

        Key properties:
        - Completely described by mean vector and covariance matrix
        - Elliptical contours of equal density
        - Marginal and conditional distributions are also normal
        - Fundamental in many ML algorithms
        """
    )

    with st.expander("How the samples are drawn"):
        st.markdown(
            """
            Each pair starts from two independent standard normals z₁, z₂ produced by the Box-Muller
            transform. Setting x₁ = z₁ and x₂ = ρ·z₁ + √(1−ρ²)·z₂ gives unit-variance coordinates with
            correlation ρ. The contours are either a kernel density estimate over these samples or the
            closed-form density evaluated on a 50 × 50 grid.
            """
        )


if __name__ == "__main__":
    main()
