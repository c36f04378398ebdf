"""
Routing only.

View logic lives in app/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import os
import sys

# Make `app/` importable as a flat module path when running:
#   streamlit run app/app.py
APP_DIR = os.path.dirname(__file__)
if APP_DIR not in sys.path:
    sys.path.insert(0, APP_DIR)

import streamlit as st  # noqa: E402

from components.sidebar import render_sidebar  # noqa: E402
from config import AppConfig, get_config  # noqa: E402
from data.service import DataFetchOrchestrator, get_orchestrator  # noqa: E402
from log_config import configure_logging  # noqa: E402
from views import classes  # noqa: E402


@st.cache_resource
def _orchestrator(cfg: AppConfig) -> DataFetchOrchestrator:
    # One orchestrator (and token cache) per server process
    configure_logging(cfg.log_level, cfg.log_json)
    return get_orchestrator(cfg)


def main() -> None:
    st.set_page_config(page_title="The Trial Tome", layout="wide")
    cfg = get_config()
    orchestrator = _orchestrator(cfg)
    state = render_sidebar(cfg, demo_mode=not orchestrator.vault.is_configured())

    st.title("The Trial Tome")

    if state.view == "classes":
        classes.render(orchestrator, state.update)
    else:
        st.error("Unknown view")


if __name__ == "__main__":
    main()
