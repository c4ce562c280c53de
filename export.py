"""
CSV export of the library, the current stack and the analytics data.

Every value is wrapped in double quotes with embedded quotes doubled; the
header row is left bare. Missing and falsy values export as empty strings.
"""
from __future__ import annotations

import csv
from typing import Dict, List, Mapping, Sequence

import pandas as pd

from catalog import SupplementCatalog, SupplementRecord
from seed_data import Budget, MonthlySpending

LIBRARY_COLUMNS = {
    "id": "id",
    "name": "name",
    "category": "category",
    "dosage": "dosage",
    "timing": "timing",
    "costPerMonth": "cost_per_month",
    "purpose": "purpose",
    "roi": "roi",
    "notes": "notes",
    "inCurrentStack": "in_current_stack",
    "currentDosage": "current_dosage",
}

STACK_COLUMNS = {
    "name": "name",
    "currentDosage": "current_dosage",
    "costPerMonth": "cost_per_month",
    "timing": "timing",
    "purpose": "purpose",
    "startDate": "start_date",
}

ANALYTICS_HEADERS = ["type", "month", "amount", "supplements", "monthly", "yearly"]


def _cell(value) -> str:
    if not value:
        return ""
    if isinstance(value, bool):
        return "true"
    return str(value)


def to_csv(rows: Sequence[Mapping[str, object]], headers: Sequence[str]) -> str:
    '''
    Render ``rows`` under ``headers`` with every value quoted.

    >>> print(to_csv([{"name": 'Say "hi"', "cost": 0}], ["name", "cost"]))
    name,cost
    "Say ""hi""",""
    '''
    df = pd.DataFrame([[_cell(row.get(h)) for h in headers] for row in rows], columns=list(headers))
    body = df.to_csv(index=False, header=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    lines = [",".join(headers)]
    if body:
        lines.append(body[:-1])
    return "\n".join(lines)


def _record_rows(records: Sequence[SupplementRecord], columns: Dict[str, str]) -> List[Dict[str, object]]:
    return [{header: getattr(r, attr) for header, attr in columns.items()} for r in records]


def export_library_csv(catalog: SupplementCatalog) -> str:
    return to_csv(_record_rows(catalog.records, LIBRARY_COLUMNS), list(LIBRARY_COLUMNS))


def export_stack_csv(catalog: SupplementCatalog) -> str:
    return to_csv(_record_rows(catalog.stack(), STACK_COLUMNS), list(STACK_COLUMNS))


def export_analytics_csv(monthly_spending: Sequence[MonthlySpending], budget: Budget) -> str:
    rows: List[Dict[str, object]] = [
        {"type": "Monthly Spending", "month": m.month, "amount": m.amount, "supplements": m.supplements}
        for m in monthly_spending
    ]
    rows.append({"type": "Budget", "monthly": budget.monthly, "yearly": budget.yearly})
    return to_csv(rows, ANALYTICS_HEADERS)
