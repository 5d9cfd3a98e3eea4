import pandas as pd
from typing import Dict, Iterable
from domain import WorkEntry
from services import EarningsCalculator, share_of_annual

def format_currency(amount: float) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"

def entries_to_dataframe(entries: Iterable[WorkEntry], calculator: EarningsCalculator) -> pd.DataFrame:
    rows = []
    for e in entries:
        rows.append({
            "ID": e.id,
            "Date": e.date.isoformat(),
            "Regular Days": e.regular_days,
            "Weekend Days": e.weekend_days,
            "Holiday Days": e.holiday_days,
            "Total Days": e.total_days,
            "Earnings": round(calculator.compute(e), 2),
            "Notes": e.notes or ""
        })
    df = pd.DataFrame(rows)
    if not df.empty:
        # mergesort is the stable one; same-day entries keep insertion order
        df = df.sort_values(["Date"], ascending=False, kind="mergesort").reset_index(drop=True)
    return df

def monthly_report_to_dataframe(report: Dict[str, float]) -> pd.DataFrame:
    shares = share_of_annual(report)
    return pd.DataFrame({
        "Month": list(report.keys()),
        "Earnings": [round(v, 2) for v in report.values()],
        "% of Annual": [round(shares[m], 1) for m in report],
    })

def report_to_csv(report: Dict[str, float]) -> str:
    return monthly_report_to_dataframe(report).to_csv(index=False)
