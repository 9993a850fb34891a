import streamlit as st

from todo_tracker.defaults import ICONS
from todo_tracker.theme import set_theme
from todo_tracker.ui import (
    format_last_saved,
    get_context,
    open_process,
    process_card_html,
    render_date_bar,
    render_header,
    render_sync_notice,
    require_login,
)

set_theme()

ctx = get_context()
require_login(ctx)

render_header("Process To-Dos")
render_sync_notice(ctx)
render_date_bar(ctx, "home")

# ------------------ SIDEBAR: DATA ------------------
with st.sidebar:
    st.subheader("Data")
    st.caption(f"Backend: `{ctx.storage.name}` • user `{ctx.config.user_id}`")
    st.caption(format_last_saved(ctx.sync))
    if st.button("↻ Reload from storage", key="reload"):
        ctx.reload()
        st.toast("Reloaded")
        st.rerun()
    hidden = ctx.processes.hidden_ids
    if st.button(f"Restore hidden processes ({len(hidden)})", key="restore-hidden", disabled=not hidden):
        n = ctx.processes.restore_hidden()
        st.toast(f"Restored {n} process(es)")
        st.rerun()
    confirm_clear = st.checkbox("I understand this deletes everything", key="confirm-clear")
    if st.button("🗑 Clear all data", key="clear-all", disabled=not confirm_clear):
        if ctx.clear_all_data():
            st.toast("All data cleared")
        st.session_state.pop("confirm-clear", None)
        st.rerun()

# ------------------ PROCESS CARDS ------------------
processes = ctx.processes.list_processes()
if not processes:
    st.info("No processes yet. Add one below or restore hidden ones from the sidebar.")

for process in processes:
    stats = ctx.tasks.get_completion_stats(process.id)
    st.markdown(process_card_html(process, stats), unsafe_allow_html=True)
    ac1, ac2 = st.columns([0.3, 0.7])
    with ac1:
        if st.button("Open →", key=f"open-{process.id}", width="stretch"):
            open_process(process.id)
    with ac2:
        with st.expander("Edit / delete"):
            with st.form(f"edit-proc-{process.id}"):
                new_title = st.text_input("Title", value=process.title)
                new_desc = st.text_area("Description", value=process.description, height=70)
                if st.form_submit_button("💾 Save"):
                    if ctx.processes.edit_process(process.id, new_title, new_desc) is None:
                        st.error("Title is required.")
                    else:
                        st.rerun()
            builtin = ctx.processes.is_builtin(process.id)
            help_text = "Hides the process; its tasks are kept." if builtin else "Removes the process and all of its tasks."
            if st.button("Hide" if builtin else "Delete", key=f"del-{process.id}", help=help_text):
                ctx.processes.delete_process(process.id)
                st.rerun()

# ------------------ ADD PROCESS ------------------
st.markdown("<div class='ptd-section'>➕ New process</div>", unsafe_allow_html=True)
with st.form("add-process", clear_on_submit=True):
    title = st.text_input("Title")
    description = st.text_area("Description", height=70)
    fc1, fc2 = st.columns(2)
    with fc1:
        icon = st.selectbox("Icon", list(ICONS.keys()), index=list(ICONS.keys()).index("Briefcase"),
                            format_func=lambda name: f"{ICONS[name]} {name}")
    with fc2:
        use_color = st.checkbox("Custom colour")
        color = st.color_picker("Colour", value="#F59E0B")
    if st.form_submit_button("Create"):
        created = ctx.processes.add_process(title, description, icon=icon, color=color if use_color else None)
        if created is None:
            st.error("Title is required.")
        else:
            st.toast(f"Created {created.title}")
            st.rerun()
