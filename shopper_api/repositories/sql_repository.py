"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from typing import Callable, ContextManager, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from shopper_api.db.create_tables import create_all
from shopper_api.db.models import ShopperRecord
from shopper_api.db.session import dispose_engine, get_session

SessionFactory = Callable[[], ContextManager[Session]]


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session.

    One instance is built at startup and shared by every request; each call
    opens its own short-lived session from ``session_factory``.
    """

    def __init__(self, session_factory: SessionFactory = get_session) -> None:
        self._session_factory = session_factory

    def ensure_schema(self) -> None:
        """Create missing tables on the engine behind ``get_session``."""
        create_all()

    def close(self) -> None:
        dispose_engine()

    def create_shopper(self, **fields) -> ShopperRecord:
        entity = ShopperRecord(**fields)
        with self._session_factory() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def list_shoppers(self) -> list[ShopperRecord]:
        with self._session_factory() as session:
            return session.execute(select(ShopperRecord)).scalars().all()

    def get_shopper(self, username: str) -> Optional[ShopperRecord]:
        with self._session_factory() as session:
            return session.get(ShopperRecord, username)

    def save_shopper(self, shopper: ShopperRecord) -> ShopperRecord:
        """Insert or update ``shopper`` by primary key."""
        with self._session_factory() as session:
            merged = session.merge(shopper)
            session.commit()
            session.refresh(merged)
            return merged

    def delete_shopper(self, username: str) -> bool:
        with self._session_factory() as session:
            result = session.execute(delete(ShopperRecord).where(ShopperRecord.username == username))
            session.commit()
            return bool(result.rowcount)

    def count_shoppers(self) -> int:
        with self._session_factory() as session:
            return int(session.execute(select(func.count()).select_from(ShopperRecord)).scalar_one())
