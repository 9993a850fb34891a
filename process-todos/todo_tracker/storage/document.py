"""Remote per-user document store on SQLAlchemy.

Each logical key is kept as one JSON document owned by a fixed user id, in its
collection from ``COLLECTIONS``. SQLite works for local
runs; point ``TODO_DATABASE_URL`` at PostgreSQL for a shared server.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from .base import (
    ALL_PROCESSES_KEY,
    CUSTOM_PROCESSES_KEY,
    DAILY_TODOS_KEY,
    HIDDEN_PROCESSES_KEY,
    StorageError,
)
from .db import get_engine, get_sessionmaker
from .models import Base, UserDocument

logger = logging.getLogger(__name__)

COLLECTIONS: Dict[str, str] = {
    DAILY_TODOS_KEY: "todos",
    CUSTOM_PROCESSES_KEY: "processes",
    HIDDEN_PROCESSES_KEY: "settings",
    ALL_PROCESSES_KEY: "allProcesses",
}


def init_db(database_url: str) -> None:
    """Create the documents table if it does not exist. Safe to call repeatedly."""
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)


class DocumentStorage:
    name = "document"

    def __init__(self, database_url: str, user_id: str) -> None:
        self.database_url = database_url
        self.user_id = user_id
        try:
            init_db(database_url)
        except SQLAlchemyError:
            logger.exception("Could not initialise document store at %s", get_engine(database_url).url)

    @staticmethod
    def collection_for(key: str) -> str:
        return COLLECTIONS.get(key, key)

    def load(self, key: str, default: Any) -> Any:
        collection = self.collection_for(key)
        sm = get_sessionmaker(self.database_url)
        try:
            with sm() as s:
                doc = s.get(UserDocument, (collection, self.user_id))
                raw = doc.payload if doc is not None else None
        except SQLAlchemyError:
            logger.exception("Failed to load %s/%s", collection, self.user_id)
            return default

        if raw is None:
            logger.info("No %s document for %s; using default", collection, self.user_id)
            return default
        try:
            value = json.loads(raw)
        except ValueError:
            logger.exception("Corrupt %s document for %s; using default", collection, self.user_id)
            return default
        logger.debug("Loaded %s/%s", collection, self.user_id)
        return default if value is None else value

    def save(self, key: str, value: Any) -> None:
        collection = self.collection_for(key)
        try:
            payload = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StorageError(key, f"value is not JSON serialisable: {exc}") from exc

        sm = get_sessionmaker(self.database_url)
        try:
            with sm() as s:
                doc = s.get(UserDocument, (collection, self.user_id))
                if doc is None:
                    doc = UserDocument(collection=collection, user_id=self.user_id)
                    s.add(doc)
                doc.payload = payload
                s.commit()
        except SQLAlchemyError as exc:
            raise StorageError(key, f"database write failed: {exc}") from exc
        logger.debug("Saved %s/%s", collection, self.user_id)

    def clear(self) -> None:
        sm = get_sessionmaker(self.database_url)
        try:
            with sm() as s:
                s.execute(delete(UserDocument).where(UserDocument.user_id == self.user_id))
                s.commit()
        except SQLAlchemyError as exc:
            raise StorageError("*", f"database clear failed: {exc}") from exc
        logger.info("Cleared documents for %s", self.user_id)

    def __repr__(self) -> str:
        return f"DocumentStorage(user_id={self.user_id!r})"
