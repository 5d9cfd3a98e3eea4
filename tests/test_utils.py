from datetime import date

from domain import MONTH_LABELS, WorkEntry
from pdf_export import annual_report_pdf, report_heading, report_table_rows, save_annual_report
from services import EarningsCalculator, monthly_report
from utils import entries_to_dataframe, format_currency, monthly_report_to_dataframe, report_to_csv


def make_entries() -> list[WorkEntry]:
    return [
        WorkEntry(id="e1", user_id="u", date=date(2024, 1, 5), regular_days=1),
        WorkEntry(id="e2", user_id="u", date=date(2024, 3, 9), weekend_days=1, notes="fair"),
        WorkEntry(id="e3", user_id="u", date=date(2024, 1, 5), holiday_days=1),
    ]


def test_format_currency() -> None:
    assert format_currency(0) == "$0.00"
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(-3) == "-$3.00"


def test_entries_to_dataframe_newest_first() -> None:
    df = entries_to_dataframe(make_entries(), EarningsCalculator.for_hourly_rate(20))

    assert list(df["ID"]) == ["e2", "e1", "e3"]
    assert list(df["Earnings"]) == [240, 160, 320]
    assert df.loc[0, "Notes"] == "fair"


def test_entries_to_dataframe_empty() -> None:
    df = entries_to_dataframe([], EarningsCalculator.for_hourly_rate(20))

    assert df.empty


def test_monthly_report_frame_and_csv() -> None:
    report = monthly_report(make_entries(), 2024, EarningsCalculator.for_hourly_rate(20))

    df = monthly_report_to_dataframe(report)

    assert list(df["Month"]) == MONTH_LABELS
    assert df.loc[0, "Earnings"] == 480
    assert df.loc[0, "% of Annual"] == 66.7
    assert df.loc[2, "% of Annual"] == 33.3

    csv = report_to_csv(report)
    assert csv.splitlines()[0] == "Month,Earnings,% of Annual"
    assert len(csv.splitlines()) == 13


def test_annual_report_pdf_is_pdf() -> None:
    report = monthly_report(make_entries(), 2024, EarningsCalculator.for_hourly_rate(20))

    assert annual_report_pdf(report, 2024).startswith(b"%PDF")


def test_save_annual_report_writes_file(tmp_path) -> None:
    report = monthly_report([], 2025, EarningsCalculator.for_hourly_rate(20))

    target = save_annual_report(report, 2025, tmp_path / "reports")

    assert target.name == "report_2025.pdf"
    assert target.read_bytes().startswith(b"%PDF")


def test_report_heading_is_plain_ascii() -> None:
    heading = report_heading(2024)

    assert heading == "Earnings Report: 2024"
    assert heading.isascii()


def test_report_table_rows_fixed_layout() -> None:
    report = monthly_report(make_entries(), 2024, EarningsCalculator.for_hourly_rate(20))

    rows = report_table_rows(report)

    assert rows[0] == ["Month", "Earnings", "% of Annual"]
    assert rows[1] == ["Jan", "$480.00", "66.7%"]
    assert rows[2] == ["Feb", "$0.00", "0.0%"]
    assert len(rows) == 13
