"""
Derived, stateless view data for the Supplement Archive.

Every function here is a pure function of the catalog (and the static seed
data); none of them mutate state. The dependency table at the top decides
which views go stale when a handler touches a piece of state.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set

import plotly.graph_objects as go

from catalog import SupplementCatalog, SupplementRecord
from config import CATEGORIES, CURRENCY
from seed_data import Budget, Goal, MonthlySpending, Recommendation

# -------------------------------
# View invalidation
# -------------------------------
# State facets: "catalog" (records added/edited/removed), "stack" (membership),
# "query" (library search text), "view" (current view mode).
VIEW_DEPENDENCIES: Dict[str, Set[str]] = {
    "library": {"catalog", "stack", "query"},
    "stack": {"catalog", "stack"},
    "analytics": {"catalog", "stack"},
    "recommendations": set(),
    "summary": {"catalog", "stack"},
}

RENDER_ORDER = ["library", "stack", "analytics", "recommendations", "summary"]


def stale_views(changed: Iterable[str], visible: Iterable[str]) -> List[str]:
    """
    Visible views that read any of the ``changed`` facets, in render order.

    >>> stale_views({"stack"}, {"analytics", "summary"})
    ['analytics', 'summary']
    >>> stale_views({"query"}, {"stack"})
    []
    """
    changed = set(changed)
    visible = set(visible)
    return [v for v in RENDER_ORDER if v in visible and VIEW_DEPENDENCIES[v] & changed]


# -------------------------------
# Card formatting
# -------------------------------

def format_currency(amount: int) -> str:
    """
    >>> format_currency(3125)
    '₹3,125'
    """
    return f"{CURRENCY}{amount:,}"


def cost_display(record: SupplementRecord, stack_card: bool = False) -> str:
    if record.cost_per_month:
        return f"{CURRENCY}{record.cost_per_month}"
    if not stack_card and record.cost_range:
        return record.cost_range
    return "Cost TBD"


def supplement_card(record: SupplementRecord) -> Dict[str, object]:
    """Label/value pairs for a library card; empty optional fields are skipped."""
    info = []
    if record.dosage:
        info.append(("Dosage", record.dosage))
    if record.timing:
        info.append(("Timing", record.timing))
    info.append(("Cost per Month", cost_display(record)))
    if record.purpose:
        info.append(("Purpose", record.purpose))
    if record.roi:
        info.append(("ROI", record.roi))
    return {
        "id": record.id,
        "title": record.name,
        "in_stack": record.in_current_stack,
        "toggle_label": "Remove from Stack" if record.in_current_stack else "Add to Stack",
        "info": info,
    }


def stack_card(record: SupplementRecord) -> Dict[str, object]:
    return {
        "id": record.id,
        "title": record.name,
        "current_dose": record.current_dosage or "Not specified",
        "details": [
            ("Recommended", record.dosage or "N/A"),
            ("Monthly Cost", cost_display(record, stack_card=True)),
            ("Timing", record.timing or "N/A"),
            ("Purpose", record.purpose or "N/A"),
        ],
    }


# -------------------------------
# Views
# -------------------------------

def library_view(catalog: SupplementCatalog, query: str = "") -> Dict[str, List[SupplementRecord]]:
    """Filtered catalog partitioned by category; empty buckets are left out."""
    filtered = catalog.search(query)
    buckets: Dict[str, List[SupplementRecord]] = {}
    for category in CATEGORIES:
        matching = [r for r in filtered if r.category == category]
        if matching:
            buckets[category] = matching
    return buckets


def stack_view(catalog: SupplementCatalog) -> List[SupplementRecord]:
    return catalog.stack()


@dataclass
class AnalyticsView:
    current_spending: int
    remaining: int
    percentage: int
    bar_percentage: int
    by_category: Dict[str, int]
    monthly_spending: List[MonthlySpending] = field(default_factory=list)

    @property
    def progress_text(self) -> str:
        return f"{self.percentage}% of budget used"


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def budget_percentage(current_spending: int, monthly_budget: int) -> int:
    """
    Share of the monthly budget consumed, rounded to a whole percent.

    >>> budget_percentage(2125, 3000), budget_percentage(4500, 3000)
    (71, 150)
    """
    if monthly_budget <= 0:
        return 100 if current_spending > 0 else 0
    return _round_half_up(current_spending / monthly_budget * 100)


def cost_by_category(records: Iterable[SupplementRecord]) -> Dict[str, int]:
    """Sum of monthly cost per category, keyed in first-seen order."""
    totals: Dict[str, int] = {}
    for record in records:
        totals[record.category] = totals.get(record.category, 0) + (record.cost_per_month or 0)
    return totals


def analytics_view(
    catalog: SupplementCatalog,
    budget: Budget,
    monthly_spending: Sequence[MonthlySpending] = (),
) -> AnalyticsView:
    members = catalog.stack()
    aggregate = catalog.stack_aggregate(budget.monthly)
    percentage = budget_percentage(aggregate.total_cost, budget.monthly)
    return AnalyticsView(
        current_spending=aggregate.total_cost,
        remaining=aggregate.remaining,
        percentage=percentage,
        bar_percentage=max(0, min(percentage, 100)),
        by_category=cost_by_category(members),
        monthly_spending=list(monthly_spending),
    )


def recommendations_view(
    recommendations: Sequence[Recommendation],
    goals: Optional[Sequence[Goal]] = None,
) -> Dict[str, list]:
    """Static recommendations plus the goals currently marked active."""
    return {
        "recommendations": list(recommendations),
        "active_goals": [g for g in goals or [] if g.active],
    }


def priority_class(priority: str) -> str:
    """
    >>> priority_class("High"), priority_class("Very High")
    ('high', 'very-high')
    """
    return priority.lower().replace(" ", "-")


# -------------------------------
# Visualization helpers
# -------------------------------

def make_spending_chart(monthly_spending: Sequence[MonthlySpending]) -> go.Figure:
    fig = go.Figure()
    if not monthly_spending:
        fig.update_layout(title="Monthly Spending", template="plotly_white")
        return fig

    x = [m.month for m in monthly_spending]
    y = [m.amount for m in monthly_spending]
    fig.add_trace(go.Scatter(
        x=x,
        y=y,
        mode="lines+markers",
        name="Monthly Spending",
        line=dict(color="#50b8c6", shape="spline"),
        fill="tozeroy",
        hovertemplate=f"%{{x}}: {CURRENCY}%{{y}}<extra></extra>",
    ))
    fig.update_layout(
        title="Monthly Spending",
        xaxis_title="Month",
        yaxis_title=f"Spend ({CURRENCY})",
        yaxis=dict(rangemode="tozero", tickprefix=CURRENCY),
        template="plotly_white",
    )
    return fig


CATEGORY_COLORS = ["#1FB8CD", "#FFC185", "#B4413C", "#ECEBD5", "#5D878F"]


def make_category_chart(by_category: Dict[str, int]) -> go.Figure:
    fig = go.Figure()
    if not by_category:
        fig.update_layout(title="Stack Cost by Category", template="plotly_white")
        return fig

    labels = list(by_category.keys())
    fig.add_trace(go.Pie(
        labels=labels,
        values=list(by_category.values()),
        hole=0.5,
        marker=dict(colors=CATEGORY_COLORS[: len(labels)], line=dict(color="#2d2d2d", width=2)),
        hovertemplate=f"%{{label}}: {CURRENCY}%{{value}} (%{{percent}})<extra></extra>",
    ))
    fig.update_layout(
        title="Stack Cost by Category",
        legend=dict(orientation="h"),
        template="plotly_white",
    )
    return fig
