from __future__ import annotations

import uuid

import streamlit as st

from data.service import DataFetchOrchestrator


def _session_scope() -> str:
    # The orchestrator is shared across browser sessions; stale checks stay per session
    if "fetch_scope" not in st.session_state:
        st.session_state["fetch_scope"] = uuid.uuid4().hex
    return st.session_state["fetch_scope"]


def render(orchestrator: DataFetchOrchestrator, update: str) -> None:
    with st.spinner(f"Loading ESO data for {update}..."):
        result = orchestrator.fetch(update, scope=_session_scope())

    # A newer selection started while this one was loading
    if not orchestrator.is_current(result):
        return

    if result.error:
        st.warning(f"Error loading ESO Logs data: {result.error.message}. Displaying baseline data instead.")

    st.caption(f"Data source: **{result.source}** ({result.selector})")

    dataset = result.dataset
    if dataset.is_empty():
        st.info("No logged trial runs in this window.")
        return

    most_played = dataset.class_playrates[0]
    top = [("Most Played", most_played.class_name, most_played.total)]
    for title, breakdown in (
        ("Top Tank", dataset.tank_breakdown),
        ("Top Healer", dataset.healer_breakdown),
        ("Top DPS", dataset.dps_breakdown),
    ):
        top.append((title, breakdown[0].class_name, breakdown[0].percentage) if breakdown else (title, "n/a", None))

    for col, (title, class_name, value) in zip(st.columns(len(top)), top):
        col.metric(title, class_name, f"{value:.2f}%" if value is not None else None, delta_color="off")

    st.subheader("Class playrates")
    st.dataframe(dataset.playrates_frame(), hide_index=True, width="stretch")

    c1, c2, c3 = st.columns(3)
    for col, role, title in ((c1, "tank", "Tanks"), (c2, "healer", "Healers"), (c3, "dps", "DPS")):
        with col:
            st.markdown(f"**{title}**")
            st.dataframe(dataset.breakdown_frame(role), hide_index=True, width="stretch")
