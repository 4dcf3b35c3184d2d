import logging

import streamlit as st

from dist_models import (
    DEFAULT_PARAMS,
    KINDS,
    PARAM_RANGES,
    clamp_params,
    density_grid,
    distribution_info,
    is_discrete,
    make_spec,
    param_labels,
)
from dist_plotting import (
    PLOTLY_AVAILABLE,
    MATPLOTLIB_AVAILABLE,
    make_plotly_density_figure,
    make_matplotlib_density_figure,
)


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Interactive Probability Distributions", layout="wide")


# ---------- UI State ----------

def ensure_state():
    if "dist_kind" not in st.session_state:
        st.session_state.dist_kind = "normal"
    if "dist_params" not in st.session_state:
        # One parameter set per family so switching back keeps the last values
        st.session_state.dist_params = {k: dict(v) for k, v in DEFAULT_PARAMS.items()}


def param_controls(kind: str) -> dict:
    params = st.session_state.dist_params[kind]
    cols = st.columns(len(param_labels(kind)))
    for col, (name, label) in zip(cols, param_labels(kind)):
        bounds = PARAM_RANGES[kind][name]
        with col:
            if kind == "binomial" and name == "n":
                value = st.slider(label, int(bounds.min), int(bounds.max), int(params[name]),
                                  step=int(bounds.step), key=f"{kind}_{name}")
            else:
                value = st.slider(label, float(bounds.min), float(bounds.max), float(params[name]),
                                  step=float(bounds.step), key=f"{kind}_{name}")
        params[name] = value
    params.update(clamp_params(kind, params))
    return dict(params)


def main():
    ensure_state()
    st.title("Interactive Probability Distributions")
    st.caption("Pick a distribution, move the sliders and watch the density (or mass) function change.")

    with st.sidebar:
        st.header("Distribution")
        kind = st.radio(
            "Select distribution",
            list(KINDS),
            index=list(KINDS).index(st.session_state.dist_kind),
            format_func=lambda k: k.capitalize(),
        )
        if kind != st.session_state.dist_kind:
            logger.info("distribution changed: %s -> %s", st.session_state.dist_kind, kind)
            st.session_state.dist_kind = kind
        if st.button("Reset parameters"):
            st.session_state.dist_params[kind] = dict(DEFAULT_PARAMS[kind])
            for name, _label in param_labels(kind):
                st.session_state.pop(f"{kind}_{name}", None)
            st.rerun()

    params = param_controls(kind)
    spec = make_spec(kind, **params)
    info = distribution_info(spec)
    discrete = is_discrete(spec)

    st.subheader(info.title)
    st.code(info.formula, language=None)
    st.caption(f"Parameters: {info.parameters}")

    xs, ys = density_grid(spec)
    if PLOTLY_AVAILABLE:
        fig = make_plotly_density_figure(xs, ys, discrete, title=info.title)
        st.plotly_chart(fig, use_container_width=True)
    elif MATPLOTLIB_AVAILABLE:
        figm = make_matplotlib_density_figure(xs, ys, discrete, title=info.title)
        st.pyplot(figm, clear_figure=True)
    else:
        st.info("Install plotly or matplotlib to see plots.")

    st.info(info.description)

    if discrete:
        st.metric(label="Total probability shown", value=f"{float(ys.sum()):.4f}")

    with st.expander("More details"):
        st.markdown(
            """
            - Continuous families (normal, uniform, exponential) are drawn as a curve through 101 evenly spaced
              points covering the interesting part of the support: μ ± 4σ for the normal, one unit either side of
              [a, b] for the uniform and [0, 5/λ] for the exponential.
            - Discrete families are drawn as bars at every integer k: 0..n for the binomial and
              0..min(20, ⌈3λ⌉) for the Poisson. The Poisson bars can sum to slightly less than 1 because the
              tail beyond the last bar is cut off.
            - The height of a density curve is not a probability; areas under it are. Bar heights of a mass
              function are probabilities.
            """
        )


if __name__ == "__main__":
    main()
