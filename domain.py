# domain.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from enum import Enum

HOURS_PER_DAY = 8
WEEKEND_MULTIPLIER = 1.5
HOLIDAY_MULTIPLIER = 2.0

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Fields a caller may change after creation; id and user_id never move.
EDITABLE_FIELDS = ("date", "regular_days", "weekend_days", "holiday_days", "notes")


@dataclass(frozen=True)
class User:
    """Identity supplied by the session. Only id and hourly_rate matter to the ledger."""
    id: str
    name: str
    email: str
    hourly_rate: float


@dataclass
class WorkEntry:
    """One logged record of days worked on a date."""
    id: str
    user_id: str
    date: date
    regular_days: int = 0
    weekend_days: int = 0
    holiday_days: int = 0
    notes: str = ""

    @property
    def total_days(self) -> int:
        return self.regular_days + self.weekend_days + self.holiday_days

    def to_record(self) -> dict:
        """Serialized form, camelCase keys as stored under workEntries-{userId}."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "regularDays": self.regular_days,
            "weekendDays": self.weekend_days,
            "holidayDays": self.holiday_days,
            "notes": self.notes,
        }

    @classmethod
    def from_record(cls, record: dict) -> "WorkEntry":
        """Raises ValueError for counts that are not non-negative whole numbers."""
        counts = [_day_count(record, key) for key in ("regularDays", "weekendDays", "holidayDays")]
        if sum(counts) == 0:
            raise ValueError(f"Entry {record['id']} has no days worked")
        return cls(
            id=record["id"],
            user_id=record["userId"],
            date=date.fromisoformat(record["date"][:10]),
            regular_days=counts[0],
            weekend_days=counts[1],
            holiday_days=counts[2],
            notes=record.get("notes") or "",
        )


def _day_count(record: dict, key: str) -> int:
    value = record.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{key} must be a non-negative whole number, got {value!r}")
    return value


@dataclass
class EntryDraft:
    """What a caller submits to add an entry: everything but id and user_id."""
    date: date | None
    regular_days: int = 0
    weekend_days: int = 0
    holiday_days: int = 0
    notes: str = ""


@dataclass(frozen=True)
class RateSchedule:
    """Day rates derived from an hourly rate. Never persisted."""
    regular: float
    weekend: float
    holiday: float

    @classmethod
    def from_hourly_rate(cls, hourly_rate: float) -> "RateSchedule":
        regular = hourly_rate * HOURS_PER_DAY
        return cls(
            regular=regular,
            weekend=regular * WEEKEND_MULTIPLIER,
            holiday=regular * HOLIDAY_MULTIPLIER,
        )


@dataclass(frozen=True)
class DashboardStats:
    total_regular_days: int = 0
    total_weekend_days: int = 0
    total_holiday_days: int = 0
    total_days: int = 0


@dataclass(frozen=True)
class ReportSummary:
    total_earnings: float
    average_monthly: float
    highest_month: tuple[str, float]


class SortField(str, Enum):
    DATE = "date"
    REGULAR_DAYS = "regular_days"
    WEEKEND_DAYS = "weekend_days"
    HOLIDAY_DAYS = "holiday_days"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass
class SortState:
    """Column sort selection for the entry list. Starts on date, newest first."""
    field: SortField = SortField.DATE
    direction: SortDirection = SortDirection.DESC

    def select(self, new_field: SortField | str) -> "SortState":
        new_field = SortField(new_field)
        if new_field == self.field:
            self.direction = self.direction.flipped()
        else:
            self.field = new_field
            self.direction = SortDirection.DESC
        return self
