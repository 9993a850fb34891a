import logging
import os

import streamlit as st
from streamlit.errors import StreamlitAPIException

logger = logging.getLogger(__name__)

THEME_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "assets", "custom_theme.css")


def load_css(theme_file: str = THEME_FILE) -> str:
    try:
        with open(theme_file, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        logger.warning("Theme file not found at %s", theme_file)
        return ""


def set_theme(
    page_title: str = "Process To-Dos",
    page_icon: str = "✅",
    layout: str = "centered",
    initial_sidebar_state: str = "collapsed",
):
    """Configure the Streamlit page and inject the tracker CSS.

    Call once at the top of each page. Streamlit only honours the first
    set_page_config per run, later calls are ignored.
    """
    try:
        st.set_page_config(
            page_title=page_title,
            page_icon=page_icon,
            layout=layout,
            initial_sidebar_state=initial_sidebar_state,
        )
    except StreamlitAPIException:
        pass

    css = load_css()
    if css:
        st.markdown(f"<style>{css}</style>", unsafe_allow_html=True)
