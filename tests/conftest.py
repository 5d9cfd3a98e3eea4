from datetime import date

import pytest

from domain import EntryDraft, User
from ledger import EntryStore
from session import UserSession


class FakeKeyValueStore:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.writes: list[str] = []

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes.append(key)
        self.values[key] = value


ALICE = User(id="user-1", name="Alice", email="alice@example.com", hourly_rate=20)
BOB = User(id="user-2", name="Bob", email="bob@example.com", hourly_rate=30)


def draft(day: str = "2024-01-15", regular: int = 1, weekend: int = 0, holiday: int = 0, notes: str = "") -> EntryDraft:
    return EntryDraft(date=date.fromisoformat(day), regular_days=regular,
                      weekend_days=weekend, holiday_days=holiday, notes=notes)


@pytest.fixture
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture
def session() -> UserSession:
    return UserSession(ALICE)


@pytest.fixture
def store(kv, session) -> EntryStore:
    return EntryStore(kv, session)
