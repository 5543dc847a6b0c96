from __future__ import annotations

import sys
from pathlib import Path

import pytest
from sqlalchemy.exc import OperationalError

# Make the shopper_api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shopper_api.core import config as core_config  # noqa: E402
from shopper_api.db import models  # noqa: E402
from shopper_api.db import session as db_session  # noqa: E402
from shopper_api.repositories.sql_repository import SQLRepository  # noqa: E402


def _reset_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point DATABASE_URL at a temporary SQLite file with a fresh schema."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    _reset_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    engine.dispose()
    _reset_caches()


def _operational_error(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("connection refused"))


class BrokenRepository(SQLRepository):
    """Every data call fails like an unreachable database."""

    create_shopper = list_shoppers = get_shopper = save_shopper = delete_shopper = _operational_error

    def ensure_schema(self) -> None:
        pass

    def close(self) -> None:
        pass


class FailingWritesRepository(SQLRepository):
    """Reads hit the real database; create, save and delete fail."""

    create_shopper = save_shopper = delete_shopper = _operational_error


@pytest.fixture()
def broken_repository():
    return BrokenRepository()


@pytest.fixture()
def failing_writes_repository(temp_db):
    return FailingWritesRepository()
