"""Streamlit widgets shared by the process list and the process page."""

from __future__ import annotations

import html
import logging
from datetime import date
from typing import List, Optional, Tuple

import plotly.graph_objects as go
import streamlit as st

from todo_tracker import auth
from todo_tracker.context import AppContext, build_context
from todo_tracker.config import get_config
from todo_tracker.defaults import ICONS
from todo_tracker.logging_setup import setup_logging
from todo_tracker.models import CompletionStats, Priority, Task, WorkProcess
from todo_tracker.sync import SyncStatus
from todo_tracker.utils import format_date, parse_iso_date, tasks_to_df

logger = logging.getLogger(__name__)

CONTEXT_KEY = "todo_ctx"
SELECTED_PROCESS_KEY = "selected_process"
PROCESS_PAGE = "pages/1_Process.py"
HOME_PAGE = "app.py"

PRIORITY_LABELS = {
    Priority.NONE.value: "No priority",
    Priority.LOW.value: "Low",
    Priority.MEDIUM.value: "Medium",
    Priority.HIGH.value: "High",
}


def get_context() -> AppContext:
    """One AppContext per browser session; the date cursor survives page switches."""
    ctx = st.session_state.get(CONTEXT_KEY)
    if ctx is None:
        cfg = get_config()
        setup_logging(level=cfg.log_level, log_dir=cfg.log_dir)
        ctx = build_context(cfg)
        st.session_state[CONTEXT_KEY] = ctx
    return ctx


def require_login(ctx: AppContext) -> None:
    if auth.is_logged_in(st.session_state, session_hours=ctx.config.session_hours):
        return
    st.markdown("<div class='ptd-header'>Process To-Dos</div>", unsafe_allow_html=True)
    with st.form("login-form"):
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in")
    if submitted:
        if auth.login(st.session_state, password, expected=ctx.config.app_password):
            logger.info("Login succeeded")
            st.rerun()
        logger.warning("Login failed")
        st.error("Incorrect password.")
    st.stop()


def render_header(title: str) -> None:
    hc1, hc2 = st.columns([0.85, 0.15])
    with hc1:
        st.markdown(f"<div class='ptd-header'>{html.escape(title)}</div>", unsafe_allow_html=True)
    with hc2:
        if st.button("Log out", key="logout"):
            auth.logout(st.session_state)
            st.rerun()


def render_sync_notice(ctx: AppContext) -> None:
    if ctx.sync.failed:
        st.warning(f"⚠️ Sync failed, recent changes may not be saved. {ctx.sync.last_error or ''}".strip())


def format_last_saved(sync: SyncStatus) -> str:
    if sync.last_saved_at is None:
        return "Not saved yet in this session"
    return f"Last saved {sync.last_saved_at.strftime('%Y-%m-%d %H:%M:%S')} UTC"


def render_date_bar(ctx: AppContext, key_prefix: str) -> None:
    cursor = ctx.cursor
    c1, c2, c3, c4, c5 = st.columns([0.1, 0.45, 0.1, 0.15, 0.2])
    with c1:
        if st.button("◀", key=f"{key_prefix}-prev", help="Previous day"):
            cursor.go_prev_day()
            st.rerun()
    with c2:
        today_tag = " (today)" if cursor.is_today() else ""
        st.markdown(f"<div class='ptd-date'>📅 {cursor.formatted}{today_tag}</div>", unsafe_allow_html=True)
    with c3:
        if st.button("▶", key=f"{key_prefix}-next", help="Next day"):
            cursor.go_next_day()
            st.rerun()
    with c4:
        if st.button("Today", key=f"{key_prefix}-today", disabled=cursor.is_today()):
            cursor.go_to_today()
            st.rerun()
    with c5:
        current = parse_iso_date(cursor.selected_date) or date.today()
        picked = st.date_input("Date", value=current, key=f"{key_prefix}-picker-{cursor.selected_date}",
                               label_visibility="collapsed")
        if isinstance(picked, date) and format_date(picked) != cursor.selected_date:
            cursor.go_to(format_date(picked))
            st.rerun()


def icon_for(process: WorkProcess) -> str:
    # Unknown names are treated as a literal emoji chosen by the user.
    return ICONS.get(process.icon, process.icon or ICONS["Briefcase"])


def process_card_html(process: WorkProcess, stats: CompletionStats) -> str:
    start, end = (process.gradient + [process.color, process.color])[:2]
    return (
        f"<div class='ptd-process-card' style='background:linear-gradient(120deg,{start} 0%,{end} 100%);'>"
        f"<div class='ptd-process-title'>{icon_for(process)} {html.escape(process.title)}</div>"
        f"<div class='ptd-process-desc'>{html.escape(process.description)}</div>"
        f"<div class='ptd-process-stats'>{stats.completed}/{stats.total} done • {stats.percentage}%</div>"
        f"<div class='ptd-progress'><div class='ptd-progress-fill' style='width:{stats.percentage}%;'></div></div>"
        f"</div>"
    )


def priority_badge_html(priority: Priority) -> str:
    if priority == Priority.NONE:
        return ""
    return f"<span class='ptd-priority ptd-priority-{priority.value}'>{priority.value}</span>"


def task_html(task: Task) -> str:
    title_cls = "ptd-task-title ptd-task-done" if task.completed else "ptd-task-title"
    meta = []
    if task.description:
        meta.append(html.escape(task.description))
    if task.estimated_time:
        meta.append(f"⏱️ {html.escape(str(task.estimated_time))}")
    meta_html = f"<div class='ptd-task-meta'>{' • '.join(meta)}</div>" if meta else ""
    return f"<div class='{title_cls}'>{html.escape(task.title)}{priority_badge_html(task.priority)}</div>{meta_html}"


def open_process(process_id: str) -> None:
    st.session_state[SELECTED_PROCESS_KEY] = process_id
    st.query_params["process"] = process_id
    st.switch_page(PROCESS_PAGE)


def go_home() -> None:
    st.session_state.pop(SELECTED_PROCESS_KEY, None)
    st.query_params.clear()
    st.switch_page(HOME_PAGE)


def selected_process_id() -> Optional[str]:
    raw = st.query_params.get("process")
    if isinstance(raw, list):
        raw = raw[0] if raw else None
    if raw:
        st.session_state[SELECTED_PROCESS_KEY] = raw
        return raw
    return st.session_state.get(SELECTED_PROCESS_KEY)


def render_not_found() -> None:
    st.markdown(
        "<div class='ptd-not-found'><h1>404</h1><p>This process does not exist or was removed.</p></div>",
        unsafe_allow_html=True,
    )
    if st.button("← Back to processes", key="nf-home"):
        go_home()


def history_chart(history: List[Tuple[str, CompletionStats]], color: str) -> go.Figure:
    dates = [d for d, _ in history]
    pct = [s.percentage for _, s in history]
    labels = [f"{s.completed}/{s.total}" for _, s in history]
    fig = go.Figure()
    fig.add_bar(x=dates, y=pct, text=labels, textposition="outside", marker_color=color,
                hovertemplate="%{x}<br>%{y}% done (%{text})<extra></extra>")
    fig.update_layout(template="plotly_white", margin=dict(l=6, r=6, t=30, b=10), height=260,
                      yaxis=dict(range=[0, 110], title="% done"), showlegend=False)
    return fig


def render_export(process: WorkProcess, fixed: List[Task], daily: List[Task], selected_date: str) -> None:
    df = tasks_to_df(fixed, daily)
    st.download_button(
        "⬇️ Export CSV",
        data=df.to_csv(index=False).encode("utf-8"),
        file_name=f"{process.id}-{selected_date}.csv",
        mime="text/csv",
        disabled=df.empty,
        key="export-csv",
    )
