# app.py
# -----------------------------------------------
# Work-days ledger: wiring for whichever UI sits on top
# -----------------------------------------------
# Builds the key-value store from the environment, hooks the entry ledger to
# the session and exposes the queries a dashboard/report screen needs.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, List

import pandas as pd

from config import Settings, configure_logging, load_settings
from domain import DashboardStats, ReportSummary, SortState, WorkEntry
from ledger import EntryStore
from pdf_export import save_annual_report
from repository import KeyValueStore, SqlKeyValueStore
from services import (
    EarningsCalculator,
    available_years,
    dashboard_stats,
    monthly_report,
    report_summary,
    sort_by,
)
from session import UserSession
from utils import entries_to_dataframe, report_to_csv

logger = logging.getLogger(__name__)


@dataclass
class WorkLedgerApp:
    session: UserSession
    store: EntryStore
    reports_dir: Path
    sort_state: SortState = field(default_factory=SortState)

    @property
    def calculator(self) -> EarningsCalculator:
        return EarningsCalculator(self.session.schedule)

    # Dashboard
    def dashboard(self) -> DashboardStats:
        return dashboard_stats(self.store.entries)

    def total_earnings(self) -> float:
        return self.calculator.compute_total(self.store.entries)

    def sorted_entries(self) -> List[WorkEntry]:
        return sort_by(self.store.entries, self.sort_state.field, self.sort_state.direction)

    def select_sort(self, field_name: str) -> List[WorkEntry]:
        self.sort_state.select(field_name)
        return self.sorted_entries()

    # Reports
    def years(self, today: date | None = None) -> List[int]:
        return available_years(self.store.entries, today=today)

    def report(self, year: int) -> Dict[str, float]:
        return monthly_report(self.store.entries, year, self.calculator)

    def summary(self, year: int) -> ReportSummary:
        return report_summary(self.report(year))

    def entries_frame(self) -> pd.DataFrame:
        return entries_to_dataframe(self.store.entries, self.calculator)

    def report_csv(self, year: int) -> str:
        return report_to_csv(self.report(year))

    def export_pdf(self, year: int) -> Path:
        return save_annual_report(self.report(year), year, self.reports_dir)


def build_app(settings: Settings | None = None, kv: KeyValueStore | None = None) -> WorkLedgerApp:
    settings = settings or load_settings()
    if kv is None:
        kv = SqlKeyValueStore(settings.database_url)
    session = UserSession()
    store = EntryStore(kv, session)
    logger.info("Ledger ready (db=%s)", settings.database_url.split("@")[-1])
    return WorkLedgerApp(session=session, store=store, reports_dir=settings.reports_dir)


def main() -> WorkLedgerApp:
    settings = load_settings()
    configure_logging(settings.log_level)
    return build_app(settings)


if __name__ == "__main__":
    main()
