from todo_tracker import auth


def test_login_success():
    state = {}
    assert auth.login(state, "open-sesame", expected="open-sesame", now=1000.0) == True
    assert state[auth.LOGGED_IN_KEY] is True
    assert state[auth.AUTH_TIMESTAMP_KEY] == 1000.0


def test_login_failure():
    state = {}
    assert auth.login(state, "wrongpass", expected="open-sesame") == False
    assert auth.login(state, "", expected="") == False
    assert auth.LOGGED_IN_KEY not in state


def test_session_expires():
    state = {}
    auth.set_login_state(state, True, now=0.0)
    assert auth.is_logged_in(state, now=3599.0, session_hours=1)
    assert not auth.is_logged_in(state, now=3600.0, session_hours=1)
    assert state == {}


def test_missing_timestamp_logs_out():
    state = {auth.LOGGED_IN_KEY: True}
    assert not auth.is_logged_in(state, session_hours=1)
    assert auth.LOGGED_IN_KEY not in state


def test_logout():
    state = {}
    auth.set_login_state(state, True)
    auth.set_login_state(state, False)
    assert not auth.is_logged_in(state, session_hours=1)


def test_password_from_config(monkeypatch):
    from todo_tracker.config import reset_config

    monkeypatch.setenv("TODO_APP_PASSWORD", "from-env")
    reset_config()
    try:
        assert auth.check_password("from-env")
        assert not auth.check_password("ChangeThisPassphrase!")
    finally:
        reset_config()
