import time
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from todo_tracker import auth
from todo_tracker.config import TrackerConfig
from todo_tracker.context import build_context
from todo_tracker.models import Priority
from todo_tracker.ui import CONTEXT_KEY

APP_DIR = Path(__file__).resolve().parents[1] / "process-todos"
PROCESS_PAGE = str(APP_DIR / "pages" / "1_Process.py")
HOME_PAGE = str(APP_DIR / "app.py")


@pytest.fixture
def config(tmp_path):
    return TrackerConfig(
        storage_backend="local",
        data_dir=tmp_path,
        database_url=f"sqlite:///{(tmp_path / 'todos.db').as_posix()}",
        user_id="tester",
        seed_sample_data=False,
        app_password="secret",
        session_hours=24,
        log_level="INFO",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def ctx(config, storage):
    return build_context(config, storage=storage, selected_date="2024-01-15")


def open_page(script, ctx, process_id=None):
    at = AppTest.from_file(script, default_timeout=30)
    at.session_state[CONTEXT_KEY] = ctx
    at.session_state[auth.LOGGED_IN_KEY] = True
    at.session_state[auth.AUTH_TIMESTAMP_KEY] = time.time()
    if process_id is not None:
        at.query_params["process"] = process_id
    return at.run()


def test_edit_form_priority_is_kept(ctx):
    task = ctx.tasks.add_task("onboarding", "Call", priority=Priority.LOW)
    at = open_page(PROCESS_PAGE, ctx, "onboarding")
    assert not at.exception

    edit_priority = [s for s in at.selectbox if s.key is None and s.label == "Priority"][0]
    edit_priority.set_value("high")
    save = [b for b in at.button if b.label == "💾 Save"][0]
    save.click().run()
    at.run()

    assert ctx.tasks.get_daily_tasks("onboarding")[0].priority == Priority.HIGH
    assert at.selectbox(key=f"daily-prio-{task.id}-high").value == "high"


def test_row_priority_select_updates_task(ctx):
    task = ctx.tasks.add_task("onboarding", "Call", priority=Priority.LOW)
    at = open_page(PROCESS_PAGE, ctx, "onboarding")
    at.selectbox(key=f"daily-prio-{task.id}-low").set_value("medium").run()
    at.run()
    assert ctx.tasks.get_daily_tasks("onboarding")[0].priority == Priority.MEDIUM


def test_done_checkbox_toggles_once(ctx):
    task = ctx.tasks.add_task("onboarding", "Call")
    at = open_page(PROCESS_PAGE, ctx, "onboarding")
    at.checkbox(key=f"daily-done-{task.id}-False").check().run()
    at.run()
    assert ctx.tasks.get_daily_tasks("onboarding")[0].completed is True


def test_completion_from_another_session_survives_reload(ctx, config, storage):
    task = ctx.tasks.add_task("onboarding", "Call")
    at = open_page(PROCESS_PAGE, ctx, "onboarding")

    other = build_context(config, storage=storage, selected_date="2024-01-15")
    other.tasks.toggle_task("onboarding", task.id)
    ctx.reload()
    at.run()
    at.run()

    assert ctx.tasks.get_daily_tasks("onboarding")[0].completed is True
    assert at.checkbox(key=f"daily-done-{task.id}-True").value is True


def test_unknown_process_shows_not_found(ctx):
    at = open_page(PROCESS_PAGE, ctx, "no-such-process")
    assert not at.exception
    assert any("does not exist" in m.value for m in at.markdown)
    assert len(at.checkbox) == 0


def test_hidden_process_shows_not_found(ctx):
    ctx.processes.delete_process("accounts")
    at = open_page(PROCESS_PAGE, ctx, "accounts")
    assert any("does not exist" in m.value for m in at.markdown)


def test_progress_counts_fixed_and_daily(ctx):
    ctx.tasks.add_task("onboarding", "Fixed", is_fixed=True)
    done = ctx.tasks.add_task("onboarding", "Daily")
    ctx.tasks.toggle_task("onboarding", done.id)
    at = open_page(PROCESS_PAGE, ctx, "onboarding")
    assert not at.exception
    assert at.get("progress")[0].proto.text == "1/2 tasks done (50%)"
    assert any(f"daily-done-{done.id}-True" == c.key for c in at.checkbox)
    assert any("fixed-done-" in (c.key or "") for c in at.checkbox)


def test_login_required(ctx):
    at = AppTest.from_file(PROCESS_PAGE, default_timeout=30)
    at.session_state[CONTEXT_KEY] = ctx
    at.run()
    assert at.text_input[0].label == "Password"
    assert len(at.checkbox) == 0


def test_home_lists_processes(ctx):
    at = open_page(HOME_PAGE, ctx)
    assert not at.exception
    cards = [m.value for m in at.markdown if "ptd-process-card" in m.value]
    assert len(cards) == 3
    assert any("Not saved yet" in c.value or "Last saved" in c.value for c in at.sidebar.caption)
