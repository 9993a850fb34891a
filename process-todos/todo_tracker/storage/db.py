from __future__ import annotations

from typing import Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker


# Engines are cached per URL so several stores can share one pool.
_ENGINES: Dict[str, Engine] = {}
_SESSIONMAKERS: Dict[str, sessionmaker] = {}


def get_engine(database_url: str) -> Engine:
    engine = _ENGINES.get(database_url)
    if engine is not None:
        return engine

    # Streamlit serves each session from its own script thread.
    connect_args = {}
    if database_url.startswith("sqlite:"):
        connect_args = {"check_same_thread": False}

    engine = create_engine(
        database_url,
        future=True,
        echo=False,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    _ENGINES[database_url] = engine
    _SESSIONMAKERS[database_url] = sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False, future=True
    )
    return engine


def get_sessionmaker(database_url: str) -> sessionmaker:
    if database_url not in _SESSIONMAKERS:
        get_engine(database_url)
    return _SESSIONMAKERS[database_url]


def dispose_all() -> None:
    for engine in _ENGINES.values():
        engine.dispose()
    _ENGINES.clear()
    _SESSIONMAKERS.clear()
