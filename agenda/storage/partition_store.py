"""Key-value store holding one serialized value per partition key."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from agenda.core.errors import StoreWriteError
from agenda.helpers.clock import utc_now
from agenda.models.partition_entry import PartitionEntry
from agenda.storage.db import get_session

logger = logging.getLogger(__name__)


class PartitionStore(Protocol):
    """Contract the reconciliation core needs from persistence."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def list_keys(self, prefix: str) -> List[str]:
        ...


class SqlPartitionStore:
    """:class:`PartitionStore` backed by the ``partitionentry`` table."""

    def __init__(self, session_factory: Callable[[], Session] = get_session):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as session:
            row = session.get(PartitionEntry, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        try:
            with self._session_factory() as session:
                row = session.get(PartitionEntry, key)
                if row is None:
                    row = PartitionEntry(key=key, value=value)
                else:
                    row.value = value
                    row.updated_at = utc_now()
                session.add(row)
                session.commit()
        except SQLAlchemyError as exc:
            logger.error("Write of %s rejected: %s", key, exc)
            raise StoreWriteError(key, str(exc)) from exc
        logger.debug("Stored %s (%d bytes)", key, len(value))

    def list_keys(self, prefix: str) -> List[str]:
        with self._session_factory() as session:
            stmt = (
                select(PartitionEntry.key)
                .where(col(PartitionEntry.key).startswith(prefix, autoescape=True))
                .order_by(col(PartitionEntry.key).asc())
            )
            return list(session.exec(stmt))


__all__ = ["PartitionStore", "SqlPartitionStore"]
