"""Streamlit front-end for inspecting artifact substat roll evidence."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

import altair as alt
import pandas as pd
import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from roll_core import (
    MAX_ROLLS,
    SAMPLE_ARTIFACT,
    SUBSTAT_LABELS,
    AttributeEvidence,
    RollConfig,
    RollCoreError,
    RollEstimate,
    estimate_rolls,
    evidence_frame,
    format_combination,
    load_roll_config,
    roll_count_histogram,
)

PLACEHOLDER = "Select substat"
NUM_SLOTS = 4


def sample_substats() -> list[tuple[str, str]]:
    """Return the (stat, amount) pairs of the bundled sample artifact."""

    return [(str(entry["stat"]), str(entry["amount"])) for entry in SAMPLE_ARTIFACT["substats"]]


def reset_estimate() -> None:
    """Clear cached results so the UI reflects new inputs."""

    st.session_state.roll_estimate = None
    st.session_state.roll_error = None


def ensure_session_state_defaults() -> None:
    """Populate Streamlit session state with expected default entries."""

    if "substat_types" not in st.session_state or "substat_amounts" not in st.session_state:
        pairs = sample_substats()
        st.session_state.substat_types = [kind for kind, _ in pairs]
        st.session_state.substat_amounts = [amount for _, amount in pairs]
    st.session_state.setdefault("roll_estimate", None)
    st.session_state.setdefault("roll_error", None)


@st.cache_resource
def get_roll_config() -> RollConfig:
    """Load the roll config once per Streamlit process."""

    return load_roll_config()


def render_substat_slots(config: RollConfig) -> list[Optional[tuple[str, str]]]:
    """Render substat selectors and return the chosen (stat, amount) pairs."""

    choices = [PLACEHOLDER] + config.kinds
    selected: list[Optional[tuple[str, str]]] = []
    for idx in range(NUM_SLOTS):
        index_col, type_col, value_col = st.columns([0.25, 2.0, 1.0])
        with index_col:
            st.markdown(f"**#{idx + 1}**")

        current_type = st.session_state.substat_types[idx]
        if current_type not in choices:
            current_type = PLACEHOLDER
        kind = type_col.selectbox(
            "Substat",
            options=choices,
            index=choices.index(current_type),
            key=f"substat_type_widget_{idx}",
            label_visibility="collapsed",
            format_func=lambda name: SUBSTAT_LABELS.get(name, name),
            on_change=reset_estimate,
        )
        amount = value_col.text_input(
            "Amount",
            value=st.session_state.substat_amounts[idx],
            key=f"substat_amount_widget_{idx}",
            label_visibility="collapsed",
            on_change=reset_estimate,
        )
        st.session_state.substat_types[idx] = kind
        st.session_state.substat_amounts[idx] = amount
        selected.append((kind, amount) if kind != PLACEHOLDER else None)
    return selected


def compute_estimate(selected: list[Optional[tuple[str, str]]], config: RollConfig) -> None:
    """Run the estimator on the current inputs and store the outcome."""

    reset_estimate()
    item: Mapping[str, object] = {
        "substats": [{"stat": kind, "amount": amount} for kind, amount in filter(None, selected)]
    }
    try:
        st.session_state.roll_estimate = estimate_rolls(item, config)
    except RollCoreError as exc:
        st.session_state.roll_error = str(exc)


def render_roll_chart(entry: AttributeEvidence) -> None:
    """Draw how many combinations exist for each roll count."""

    counts = roll_count_histogram(entry)
    chart_data = pd.DataFrame({"rolls": range(len(counts)), "combinations": counts})
    chart_data = chart_data[chart_data["rolls"] > 0]
    chart = alt.Chart(chart_data).mark_bar(
        color="#6366f1",
        opacity=0.9,
        cornerRadiusTopLeft=2,
        cornerRadiusTopRight=2,
    ).encode(
        x=alt.X(
            "rolls:O",
            title="Rolls",
            axis=alt.Axis(labelFontSize=11, titleFontSize=12, labelAngle=0),
        ),
        y=alt.Y(
            "combinations:Q",
            title="Combinations",
            axis=alt.Axis(format="d", labelFontSize=11, titleFontSize=12),
        ),
        tooltip=[
            alt.Tooltip("rolls:O", title="Rolls"),
            alt.Tooltip("combinations:Q", title="Combinations"),
        ],
    ).properties(height=180)
    chart = chart.configure_view(strokeOpacity=0).configure_axis(gridColor="#e2e8f0")
    st.altair_chart(chart, use_container_width=True)


def render_estimate(estimate: RollEstimate) -> None:
    """Render the evidence table and per-substat combination details."""

    with st.container(border=True):
        st.markdown("**Roll evidence**")
        st.dataframe(evidence_frame(estimate), hide_index=True, use_container_width=True)

        roll_range = estimate.total_roll_range
        if roll_range is not None:
            st.caption(f"Substat rolls on this item: {roll_range[0]} to {roll_range[1]}")

        for entry in estimate.evidence:
            label = SUBSTAT_LABELS.get(entry.kind, entry.kind)
            with st.expander(f"{label}: {entry.amount}"):
                if not entry.ok:
                    st.error(entry.error)
                    continue
                if not entry.combinations:
                    st.warning("No combination of legal rolls reaches this value.")
                    continue
                for combo in sorted(entry.combinations, key=lambda c: (len(c), c)):
                    st.markdown(f"- {len(combo)} rolls: `{format_combination(combo)}`")
                render_roll_chart(entry)


def apply_page_styling() -> None:
    """Configure the page."""

    st.set_page_config(page_title="Artifact Roll Estimator", layout="centered")


def main() -> None:
    """Entry point used by Streamlit."""

    apply_page_styling()
    ensure_session_state_defaults()

    st.title("Artifact Roll Estimator")
    try:
        config = get_roll_config()
    except RollCoreError as exc:
        st.error(f"Could not load roll config: {exc}")
        return

    with st.container(border=True):
        st.caption(f"Up to {NUM_SLOTS} substats, at most {MAX_ROLLS} rolls each.")
        selected = render_substat_slots(config)
        if st.button("Estimate rolls", type="primary", disabled=not any(selected)):
            compute_estimate(selected, config)

    if st.session_state.roll_error:
        st.error(f"Estimation failed: {st.session_state.roll_error}")
    elif isinstance(st.session_state.roll_estimate, RollEstimate):
        render_estimate(st.session_state.roll_estimate)


if __name__ == "__main__":
    main()
