import logging

import numpy as np
import streamlit as st

from sampling_methods import (
    METHOD_INFO,
    METHODS,
    SamplerConfig,
    make_target_density,
    run_sampler,
    self_normalized_mean,
)
from sampling_plotting import (
    PLOTLY_AVAILABLE,
    MATPLOTLIB_AVAILABLE,
    plot_samples_plotly,
    plot_samples_matplotlib,
)


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Sampling Methods Demo", layout="wide")


def ensure_state():
    if "rng_seed" not in st.session_state:
        st.session_state.rng_seed = 0
    if "rng" not in st.session_state:
        st.session_state.rng = np.random.default_rng(int(st.session_state.rng_seed))
    if "target" not in st.session_state:
        st.session_state.target = make_target_density()
    if "method" not in st.session_state:
        st.session_state.method = "rejection"
    if "result" not in st.session_state:
        st.session_state.result = None


def get_rng() -> np.random.Generator:
    return st.session_state.rng


def resample(method: str, config: SamplerConfig) -> None:
    result = run_sampler(method, st.session_state.target, get_rng(), config)
    logger.info("%s: %d samples from %d proposals", method, len(result.samples), result.n_proposals)
    st.session_state.result = result


def main():
    ensure_state()
    st.title("Sampling Methods in Machine Learning")
    st.caption(
        "Three ways to draw samples from a bimodal target density: rejection sampling, "
        "a random-walk Metropolis-Hastings chain and importance sampling."
    )

    with st.sidebar:
        st.header("Method")
        method = st.radio(
            "Sampling method",
            list(METHODS),
            index=list(METHODS).index(st.session_state.method),
            format_func=lambda m: METHOD_INFO[m]["title"],
        )
        redraw = st.button("Draw again")

        with st.expander("Tuning", expanded=False):
            n_samples = st.slider("Samples", 50, 1000, 300, step=50)
            max_proposals = st.slider("Rejection: proposal cap", 500, 20000, 5000, step=500)
            burn_in = st.slider("MCMC: burn-in", 0, 2000, 500, step=50)
            step_size = st.slider("MCMC: step half-width", 0.05, 2.0, 0.25, step=0.05)
            proposal_std = st.slider("Importance: proposal σ", 0.5, 3.0, 1.5, step=0.1)
            weight_cap = st.slider("Importance: weight cap", 1.0, 20.0, 5.0, step=0.5)
        config = SamplerConfig(
            n_samples=int(n_samples),
            max_proposals=int(max_proposals),
            burn_in=int(burn_in),
            step_size=float(step_size),
            proposal_std=float(proposal_std),
            weight_cap=float(weight_cap),
        )

        st.markdown("---")
        st.subheader("Display")
        show_hist = st.checkbox("Show sample histogram", value=False)

        st.markdown("---")
        seed = st.number_input("Random seed", value=int(st.session_state.rng_seed), step=1)
        if seed != st.session_state.rng_seed:
            st.session_state.rng_seed = int(seed)
            st.session_state.rng = np.random.default_rng(int(seed))
            redraw = True

    if st.session_state.get("config") != config:
        st.session_state.config = config
        redraw = True
    if method != st.session_state.method or st.session_state.result is None or redraw:
        st.session_state.method = method
        resample(method, config)

    result = st.session_state.result
    target = st.session_state.target
    info = METHOD_INFO[method]

    if PLOTLY_AVAILABLE:
        fig = plot_samples_plotly(target, result, title=info["title"], show_hist=show_hist)
        st.plotly_chart(fig, use_container_width=True)
    elif MATPLOTLIB_AVAILABLE:
        figm = plot_samples_matplotlib(target, result, title=info["title"], show_hist=show_hist)
        st.pyplot(figm, clear_figure=True)
    else:
        st.info("Install plotly or matplotlib to see plots.")

    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric(label="Samples", value=f"{len(result.samples)}")
    with c2:
        label = "Move acceptance rate" if method == "mcmc" else "Acceptance rate"
        st.metric(label=label, value=f"{result.acceptance_rate:.1%}")
    with c3:
        if method == "importance":
            st.metric(label="Weighted mean of x", value=f"{self_normalized_mean(result):.3f}")
        elif result.samples:
            st.metric(label="Mean of x", value=f"{float(np.mean(result.xs)):.3f}")
    if method == "rejection" and len(result.samples) < config.n_samples:
        st.warning(
            f"Stopped after {result.n_proposals} proposals with {len(result.samples)} of "
            f"{config.n_samples} samples accepted."
        )

    st.markdown(f"### {info['title']}")
    st.markdown(info["description"])
    st.markdown(f"**Applications:** {info['applications']}")
    if info["note"]:
        st.caption(info["note"])


if __name__ == "__main__":
    main()
