from typing import List

import streamlit as st

from todo_tracker.models import PRIORITIES, Priority, Task
from todo_tracker.theme import set_theme
from todo_tracker.ui import (
    PRIORITY_LABELS,
    get_context,
    go_home,
    history_chart,
    icon_for,
    render_date_bar,
    render_export,
    render_header,
    render_not_found,
    render_sync_notice,
    require_login,
    selected_process_id,
    task_html,
)

set_theme(page_title="Process")

ctx = get_context()
require_login(ctx)

process_id = selected_process_id()
process = ctx.processes.get(process_id) if process_id else None
if process is None:
    render_not_found()
    st.stop()

render_header(f"{icon_for(process)} {process.title}")
render_sync_notice(ctx)

nav1, nav2 = st.columns([0.25, 0.75])
with nav1:
    if st.button("← Processes", key="back-home"):
        go_home()
with nav2:
    if process.description:
        st.caption(process.description)

render_date_bar(ctx, "proc")

store = ctx.tasks
stats = store.get_completion_stats(process.id)
st.progress(stats.percentage / 100.0, text=f"{stats.completed}/{stats.total} tasks done ({stats.percentage}%)")


def render_task_list(tasks: List[Task], is_fixed: bool) -> None:
    section = "fixed" if is_fixed else "daily"
    last = len(tasks) - 1
    for idx, task in enumerate(tasks):
        tid = task.id
        c1, c2, c3, c4, c5, c6 = st.columns([0.07, 0.5, 0.19, 0.08, 0.08, 0.08])
        with c1:
            done = st.checkbox("Done", value=task.completed, key=f"{section}-done-{tid}-{task.completed}",
                               label_visibility="collapsed")
            if done != task.completed:
                store.toggle_task(process.id, tid, is_fixed=is_fixed)
                st.rerun()
        with c2:
            st.markdown(task_html(task), unsafe_allow_html=True)
        with c3:
            prio = st.selectbox(
                "Priority",
                PRIORITIES,
                index=PRIORITIES.index(task.priority),
                format_func=lambda p: PRIORITY_LABELS[p],
                key=f"{section}-prio-{tid}-{task.priority.value}",
                label_visibility="collapsed",
            )
            if prio != task.priority:
                store.update_task_priority(process.id, tid, prio, is_fixed=is_fixed)
                st.rerun()
        with c4:
            if st.button("↑", key=f"{section}-up-{tid}", disabled=idx == 0, help="Move up"):
                store.reorder_tasks(process.id, idx, idx - 1, is_fixed=is_fixed)
                st.rerun()
        with c5:
            if st.button("↓", key=f"{section}-down-{tid}", disabled=idx == last, help="Move down"):
                store.reorder_tasks(process.id, idx, idx + 1, is_fixed=is_fixed)
                st.rerun()
        with c6:
            if st.button("🗑", key=f"{section}-del-{tid}", help="Delete"):
                store.delete_task(process.id, tid, is_fixed=is_fixed)
                st.rerun()
        with st.expander("Edit", expanded=False):
            with st.form(f"{section}-edit-{tid}"):
                new_title = st.text_input("Title", value=task.title)
                new_desc = st.text_area("Description", value=task.description, height=70)
                new_prio = st.selectbox("Priority", PRIORITIES, index=PRIORITIES.index(task.priority),
                                        format_func=lambda p: PRIORITY_LABELS[p])
                if st.form_submit_button("💾 Save"):
                    if store.update_task(process.id, tid, new_title, new_desc, new_prio, is_fixed=is_fixed) is None:
                        st.error("Title is required.")
                    else:
                        st.rerun()


fixed_tasks = store.get_fixed_tasks(process.id)
daily_tasks = store.get_daily_tasks(process.id)

tab_tasks, tab_history = st.tabs(["🗂 Tasks", "📊 Last 7 days"])

with tab_tasks:
    st.markdown("<div class='ptd-section'>📌 Fixed tasks</div>", unsafe_allow_html=True)
    if fixed_tasks:
        render_task_list(fixed_tasks, is_fixed=True)
    else:
        st.caption("No fixed tasks. Fixed tasks show up on every day.")

    st.markdown(f"<div class='ptd-section'>📝 Tasks for {ctx.cursor.formatted}</div>", unsafe_allow_html=True)
    if daily_tasks:
        render_task_list(daily_tasks, is_fixed=False)
    else:
        st.caption("Nothing planned for this day yet.")

    ac1, ac2 = st.columns(2)
    with ac1:
        if st.button("⤵ Copy from previous day", key="copy-prev"):
            copied = store.copy_from_previous_day(process.id)
            if copied:
                st.toast(f"Copied {copied} task(s)")
            else:
                st.toast("No tasks on the previous day")
            st.rerun()
    with ac2:
        render_export(process, fixed_tasks, daily_tasks, ctx.cursor.selected_date)

    st.markdown("<div class='ptd-section'>➕ Add task</div>", unsafe_allow_html=True)
    with st.form("add-task", clear_on_submit=True):
        title = st.text_input("Title")
        description = st.text_area("Description", height=70)
        fc1, fc2, fc3 = st.columns([0.4, 0.35, 0.25])
        with fc1:
            priority = st.selectbox("Priority", PRIORITIES, index=PRIORITIES.index(Priority.NONE),
                                    format_func=lambda p: PRIORITY_LABELS[p])
        with fc2:
            estimated = st.text_input("Estimated time", placeholder="e.g. 30m")
        with fc3:
            is_fixed = st.checkbox("Fixed", help="Show on every day")
        if st.form_submit_button("Add"):
            if store.add_task(process.id, title, description, priority, is_fixed=is_fixed,
                              estimated_time=estimated) is None:
                st.error("Title is required.")
            else:
                st.rerun()

with tab_history:
    history = store.completion_history(process.id, days=7)
    st.plotly_chart(history_chart(history, process.color), width="stretch")
