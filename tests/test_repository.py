import pytest

from errors import PersistenceError
from ledger import EntryStore
from repository import SqlKeyValueStore, build_engine
from session import UserSession

from conftest import ALICE, draft


def test_sql_store_get_and_replace(tmp_path) -> None:
    kv = SqlKeyValueStore(f"sqlite:///{tmp_path / 'kv.db'}")

    assert kv.get("workEntries-user-1") is None

    kv.set("workEntries-user-1", "[]")
    kv.set("workEntries-user-1", '[{"id": "entry-1"}]')

    assert kv.get("workEntries-user-1") == '[{"id": "entry-1"}]'


def test_sql_store_survives_reopen(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'kv.db'}"
    store = EntryStore(SqlKeyValueStore(url), UserSession(ALICE))
    entry = store.add(draft("2024-04-01", holiday=1))

    reopened = EntryStore(SqlKeyValueStore(url), UserSession(ALICE))

    assert reopened.entries == [entry]


def test_build_engine_adds_sslmode_for_postgres() -> None:
    pytest.importorskip("psycopg2")
    engine = build_engine("postgresql://user:pw@db.example.com/ledger")

    assert engine.url.query["sslmode"] == "require"


def test_sql_store_wraps_database_errors(tmp_path) -> None:
    kv = SqlKeyValueStore(f"sqlite:///{tmp_path / 'kv.db'}")
    # a directory is not a database file
    kv.engine = build_engine(f"sqlite:///{tmp_path}")

    with pytest.raises(PersistenceError):
        kv.get("workEntries-user-1")
