from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from config import AppConfig
from data.time_ranges import supported_updates


@dataclass(frozen=True)
class SidebarState:
    view: str
    update: str


NAV_ITEMS = [
    ("Class Analysis", "classes"),
]


def render_sidebar(cfg: AppConfig, demo_mode: bool) -> SidebarState:
    with st.sidebar:
        st.markdown("### The Trial Tome")
        st.caption("ESO trial class composition by update")

        labels = [l for l, _ in NAV_ITEMS]
        label = st.radio("Nav", labels, label_visibility="collapsed")
        view = dict(NAV_ITEMS)[label]

        updates = supported_updates()
        default_update = st.session_state.get("update", cfg.default_update)
        idx = updates.index(default_update) if default_update in updates else 0
        update = st.selectbox("Update", updates, index=idx)
        st.session_state["update"] = update

        if demo_mode:
            st.info("Demo mode: set ESOLOGS_CLIENT_ID / ESOLOGS_CLIENT_SECRET to load live ESO Logs data.")

    return SidebarState(view=view, update=update)
