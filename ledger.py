# ledger.py
from __future__ import annotations

import json
import logging
import uuid
from dataclasses import replace
from typing import Iterable, List, Tuple

from domain import EDITABLE_FIELDS, EntryDraft, User, WorkEntry
from errors import NotFoundError, PersistenceError, ValidationError
from repository import KeyValueStore
from services import check_entry
from session import UserSession

logger = logging.getLogger(__name__)


def entries_key(user_id: str) -> str:
    return f"workEntries-{user_id}"


def new_entry_id(existing: Iterable[str]) -> str:
    taken = set(existing)
    while True:
        candidate = f"entry-{uuid.uuid4().hex}"
        if candidate not in taken:
            return candidate


def serialize_entries(entries: Iterable[WorkEntry]) -> str:
    return json.dumps([e.to_record() for e in entries])


def deserialize_entries(raw: str) -> List[WorkEntry]:
    try:
        return [WorkEntry.from_record(r) for r in json.loads(raw)]
    except (ValueError, KeyError, TypeError) as e:
        raise PersistenceError("Stored work entries are unreadable") from e


# =========================
# Pure transitions: current list in, next list out
# =========================
def append_entry(entries: List[WorkEntry], draft: EntryDraft,
                 user_id: str, entry_id: str) -> List[WorkEntry]:
    entry = WorkEntry(
        id=entry_id,
        user_id=user_id,
        date=draft.date,
        regular_days=draft.regular_days,
        weekend_days=draft.weekend_days,
        holiday_days=draft.holiday_days,
        notes=draft.notes or "",
    )
    return [*entries, entry]


def apply_update(entries: List[WorkEntry], entry_id: str, user_id: str,
                 changes: dict) -> Tuple[List[WorkEntry], WorkEntry | None]:
    """Returns the next list and the merged entry, or (entries, None) if nothing matched."""
    illegal = set(changes) - set(EDITABLE_FIELDS)
    if illegal:
        raise ValidationError({name: "Field cannot be changed" for name in sorted(illegal)})

    for i, entry in enumerate(entries):
        if entry.id != entry_id or entry.user_id != user_id:
            continue
        merged = replace(entry, **changes)
        check_entry(merged.date, merged.regular_days, merged.weekend_days, merged.holiday_days)
        if merged.notes is None:
            merged.notes = ""
        return [*entries[:i], merged, *entries[i + 1:]], merged
    return entries, None


def remove_entry(entries: List[WorkEntry], entry_id: str,
                 user_id: str) -> Tuple[List[WorkEntry], bool]:
    remaining = [e for e in entries if not (e.id == entry_id and e.user_id == user_id)]
    return remaining, len(remaining) != len(entries)


class EntryStore:
    """
    CRUD ledger for the signed-in user's work entries.
    Every mutation writes the whole list back through the key-value store
    before the in-memory working set changes.
    """
    def __init__(self, store: KeyValueStore, session: UserSession):
        self.store = store
        self.session = session
        self._user_id: str | None = None
        self._entries: List[WorkEntry] = []
        session.subscribe(self._on_session_change)
        self._on_session_change(session.current_user)

    @property
    def entries(self) -> List[WorkEntry]:
        return list(self._entries)

    def load(self, user_id: str | None) -> List[WorkEntry]:
        if not user_id:
            return []
        raw = self.store.get(entries_key(user_id))
        if not raw:
            return []
        return deserialize_entries(raw)

    def add(self, draft: EntryDraft) -> WorkEntry | None:
        if self._user_id is None:
            logger.debug("Ignoring add with no signed-in user")
            return None
        check_entry(draft.date, draft.regular_days, draft.weekend_days, draft.holiday_days)

        entry_id = new_entry_id(e.id for e in self._entries)
        updated = append_entry(self._entries, draft, self._user_id, entry_id)
        self._persist(updated)
        logger.info("Added entry %s for user=%s", entry_id, self._user_id)
        return updated[-1]

    def update(self, entry_id: str, strict: bool = False, **changes) -> bool:
        """Merge changes into an entry. Unknown or foreign ids are a no-op unless strict."""
        if self._user_id is None:
            return self._missing(entry_id, strict)
        updated, merged = apply_update(self._entries, entry_id, self._user_id, changes)
        if merged is None:
            return self._missing(entry_id, strict)
        self._persist(updated)
        logger.info("Updated entry %s", entry_id)
        return True

    def delete(self, entry_id: str, strict: bool = False) -> bool:
        if self._user_id is None:
            return self._missing(entry_id, strict)
        remaining, removed = remove_entry(self._entries, entry_id, self._user_id)
        if not removed:
            return self._missing(entry_id, strict)
        self._persist(remaining)
        logger.info("Deleted entry %s", entry_id)
        return True

    def _missing(self, entry_id: str, strict: bool) -> bool:
        if strict:
            raise NotFoundError(entry_id)
        logger.debug("No entry %s for user=%s", entry_id, self._user_id)
        return False

    def _persist(self, entries: List[WorkEntry]) -> None:
        self.store.set(entries_key(self._user_id), serialize_entries(entries))
        self._entries = entries

    def _on_session_change(self, user: User | None) -> None:
        user_id = user.id if user is not None else None
        if user_id == self._user_id and user_id is not None:
            return  # profile edit only, same partition
        try:
            entries = self.load(user_id)
        except PersistenceError:
            # Nobody's partition is active until a readable one loads
            self._user_id, self._entries = None, []
            raise
        self._user_id, self._entries = user_id, entries
        logger.debug("Loaded %d entries for user=%s", len(self._entries), user_id)


__all__ = [
    "EntryStore",
    "entries_key",
    "new_entry_id",
    "serialize_entries",
    "deserialize_entries",
    "append_entry",
    "apply_update",
    "remove_entry",
]
