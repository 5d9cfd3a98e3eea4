# services.py
from __future__ import annotations
from datetime import date
from typing import Iterable, Dict, List

from domain import (
    MONTH_LABELS,
    DashboardStats,
    RateSchedule,
    ReportSummary,
    SortDirection,
    SortField,
    WorkEntry,
)
from errors import ValidationError

DAY_FIELDS = {
    "regular_days": "Regular days",
    "weekend_days": "Weekend days",
    "holiday_days": "Holiday days",
}


class EarningsCalculator:
    """Business rules for turning logged days into money."""
    def __init__(self, schedule: RateSchedule | None):
        self.schedule = schedule

    @classmethod
    def for_hourly_rate(cls, hourly_rate: float | None) -> "EarningsCalculator":
        if hourly_rate is None:
            return cls(None)
        return cls(RateSchedule.from_hourly_rate(hourly_rate))

    def compute(self, entry: WorkEntry) -> float:
        """Earnings for one entry. Zero when nobody is signed in."""
        s = self.schedule
        if s is None:
            return 0
        return (
            entry.regular_days * s.regular
            + entry.weekend_days * s.weekend
            + entry.holiday_days * s.holiday
        )

    def compute_total(self, entries: Iterable[WorkEntry]) -> float:
        return sum((self.compute(e) for e in entries), 0)


# =========================
# Aggregation
# =========================
def dashboard_stats(entries: Iterable[WorkEntry]) -> DashboardStats:
    regular = weekend = holiday = 0
    for e in entries:
        regular += e.regular_days
        weekend += e.weekend_days
        holiday += e.holiday_days
    return DashboardStats(
        total_regular_days=regular,
        total_weekend_days=weekend,
        total_holiday_days=holiday,
        total_days=regular + weekend + holiday,
    )


def monthly_report(entries: Iterable[WorkEntry], year: int,
                   calculator: EarningsCalculator) -> Dict[str, float]:
    """
    Earnings per month for one year.
    Returns {"Jan": ..., ..., "Dec": ...} in calendar order; empty months are 0.
    """
    report: Dict[str, float] = {label: 0 for label in MONTH_LABELS}
    for e in entries:
        if e.date.year != year:
            continue
        report[MONTH_LABELS[e.date.month - 1]] += calculator.compute(e)
    return report


def report_summary(report: Dict[str, float]) -> ReportSummary:
    total = sum(report.values(), 0)
    # max() keeps the first maximum, so ties go to the earlier month
    highest = max(report.items(), key=lambda kv: kv[1])
    return ReportSummary(
        total_earnings=total,
        average_monthly=total / 12,
        highest_month=highest,
    )


def share_of_annual(report: Dict[str, float]) -> Dict[str, float]:
    """Percentage of the year's total earned in each month."""
    total = sum(report.values(), 0)
    if total <= 0:
        return {label: 0.0 for label in report}
    return {label: value / total * 100 for label, value in report.items()}


def available_years(entries: Iterable[WorkEntry], today: date | None = None) -> List[int]:
    years = sorted({e.date.year for e in entries}, reverse=True)
    if not years:
        years = [(today or date.today()).year]
    return years


# =========================
# Sorting
# =========================
def sort_by(entries: Iterable[WorkEntry],
            field: SortField | str = SortField.DATE,
            direction: SortDirection | str = SortDirection.DESC) -> List[WorkEntry]:
    """Stable sorted copy. Entries with equal keys keep their relative order."""
    attr = SortField(field).value
    reverse = SortDirection(direction) is SortDirection.DESC
    return sorted(entries, key=lambda e: getattr(e, attr), reverse=reverse)


# =========================
# Validation
# =========================
def validate_entry(entry_date: date | None, regular_days, weekend_days, holiday_days) -> Dict[str, str]:
    """Field-level problems with an entry, keyed by field name. Empty when valid."""
    errors: Dict[str, str] = {}
    if not isinstance(entry_date, date):
        errors["date"] = "Date is required"

    counts = {
        "regular_days": regular_days,
        "weekend_days": weekend_days,
        "holiday_days": holiday_days,
    }
    for name, value in counts.items():
        label = DAY_FIELDS[name]
        if isinstance(value, bool) or not isinstance(value, int):
            errors[name] = f"{label} must be a whole number"
        elif value < 0:
            errors[name] = f"{label} cannot be negative"

    if not errors.keys() & counts.keys() and sum(counts.values()) == 0:
        errors["regular_days"] = "You must enter at least one day worked"
    return errors


def check_entry(entry_date: date | None, regular_days, weekend_days, holiday_days) -> None:
    errors = validate_entry(entry_date, regular_days, weekend_days, holiday_days)
    if errors:
        raise ValidationError(errors)


__all__ = [
    "EarningsCalculator",
    "dashboard_stats",
    "monthly_report",
    "report_summary",
    "share_of_annual",
    "available_years",
    "sort_by",
    "validate_entry",
    "check_entry",
]
