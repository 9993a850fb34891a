"""Shared-passphrase gate.

This keeps casual visitors out of a personal tracker; it is not an
authentication system. The flag and login time live in the Streamlit session.
"""

from __future__ import annotations

import hmac
import time
from typing import MutableMapping, Optional

from todo_tracker.config import get_config

LOGGED_IN_KEY = "logged_in"
AUTH_TIMESTAMP_KEY = "auth_timestamp"


def check_password(password: str, expected: Optional[str] = None) -> bool:
    if expected is None:
        expected = get_config().app_password
    if not password or not expected:
        return False
    return hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))


def login(session_state: MutableMapping, password: str, *, expected: Optional[str] = None,
          now: Optional[float] = None) -> bool:
    if not check_password(password, expected):
        return False
    set_login_state(session_state, True, now=now)
    return True


def logout(session_state: MutableMapping) -> None:
    session_state.pop(LOGGED_IN_KEY, None)
    session_state.pop(AUTH_TIMESTAMP_KEY, None)


def set_login_state(session_state: MutableMapping, state: bool, *, now: Optional[float] = None) -> None:
    if not state:
        logout(session_state)
        return
    session_state[LOGGED_IN_KEY] = True
    session_state[AUTH_TIMESTAMP_KEY] = time.time() if now is None else now


def is_logged_in(session_state: MutableMapping, *, now: Optional[float] = None,
                 session_hours: Optional[int] = None) -> bool:
    """True while the login is younger than ``session_hours``; expired sessions are cleared."""
    if not session_state.get(LOGGED_IN_KEY, False):
        return False
    ts = session_state.get(AUTH_TIMESTAMP_KEY)
    if not isinstance(ts, (int, float)):
        logout(session_state)
        return False
    if session_hours is None:
        session_hours = get_config().session_hours
    now = time.time() if now is None else now
    if (now - ts) / 3600.0 >= session_hours:
        logout(session_state)
        return False
    return True
