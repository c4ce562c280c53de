"""
In-memory supplement catalog.

The catalog owns the list of supplement records and the current-stack flag on
each of them. Mutators return True when the target record exists and False
when the id is unknown, in which case nothing changes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Iterator, List, Optional

from config import CATEGORIES, MONTHLY_BUDGET

logger = logging.getLogger(__name__)

# Fields a caller may set through update(); id is never among them
MUTABLE_FIELDS = (
    "name",
    "category",
    "dosage",
    "timing",
    "purpose",
    "notes",
    "roi",
    "cost_per_month",
    "in_current_stack",
    "current_dosage",
    "evidence_rating",
    "mega_dosing",
    "cost_range",
    "start_date",
    "goals",
)

SEARCH_FIELDS = ("name", "purpose", "notes")


class SupplementValidationError(ValueError):
    """Raised when a supplement is submitted without its required fields."""


@dataclass
class SupplementRecord:
    id: int
    name: str
    category: str
    dosage: str = ""
    timing: str = ""
    purpose: str = ""
    notes: str = ""
    roi: str = ""
    cost_per_month: int = 0
    in_current_stack: bool = False
    current_dosage: str = ""
    evidence_rating: int = 3
    mega_dosing: str = ""
    cost_range: str = ""
    start_date: Optional[str] = None
    goals: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.cost_per_month = parse_cost(self.cost_per_month)
        _couple_dosage(self)


@dataclass(frozen=True)
class StackAggregate:
    count: int
    total_cost: int
    budget: int = MONTHLY_BUDGET

    @property
    def remaining(self) -> int:
        return self.budget - self.total_cost


def parse_cost(value) -> int:
    """
    Parse a monthly cost into a non-negative int, 0 when unparsable.

    >>> parse_cost("450"), parse_cost(" 12.9 "), parse_cost("abc"), parse_cost(None), parse_cost(-5)
    (450, 12, 0, 0, 0)
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        cost = int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return 0
    return max(cost, 0)


def validate_submission(data: Dict[str, object]) -> None:
    """Require non-empty name and category; raise SupplementValidationError otherwise."""
    name = str(data.get("name") or "").strip()
    category = str(data.get("category") or "").strip()
    if not name or not category:
        raise SupplementValidationError("Name and Category are required fields.")
    if category not in CATEGORIES:
        logger.warning("Supplement %r submitted with unknown category %r", name, category)


def _couple_dosage(record: SupplementRecord) -> None:
    # current_dosage only exists while the supplement is in the stack
    if not record.in_current_stack:
        record.current_dosage = ""


def matches_query(record: SupplementRecord, query: str) -> bool:
    if not query.strip():
        return True
    term = query.lower()
    return any(term in (getattr(record, name) or "").lower() for name in SEARCH_FIELDS)


class SupplementCatalog:
    """Ordered, mutable collection of SupplementRecord with unique ids."""

    def __init__(self, records: Optional[Iterable[SupplementRecord]] = None) -> None:
        self._records: List[SupplementRecord] = []
        for record in records or []:
            if self.get(record.id) is not None:
                raise ValueError(f"Duplicate supplement id: {record.id}")
            self._records.append(record)

    def __iter__(self) -> Iterator[SupplementRecord]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> List[SupplementRecord]:
        return list(self._records)

    def next_id(self) -> int:
        return max((r.id for r in self._records), default=0) + 1

    def get(self, supplement_id: int) -> Optional[SupplementRecord]:
        for record in self._records:
            if record.id == supplement_id:
                return record
        return None

    def add(self, data: Dict[str, object]) -> SupplementRecord:
        """Append a new record built from ``data`` under the next free id."""
        values = {k: v for k, v in data.items() if k in MUTABLE_FIELDS}
        record = SupplementRecord(id=self.next_id(), **values)
        self._records.append(record)
        logger.info("Added supplement %d (%s)", record.id, record.name)
        return record

    def update(self, supplement_id: int, data: Dict[str, object]) -> bool:
        """Replace the mutable fields given in ``data``; the id is preserved."""
        for index, record in enumerate(self._records):
            if record.id == supplement_id:
                values = {k: v for k, v in data.items() if k in MUTABLE_FIELDS}
                self._records[index] = replace(record, **values)
                logger.info("Updated supplement %d", supplement_id)
                return True
        logger.debug("Update skipped, supplement %d not found", supplement_id)
        return False

    def delete(self, supplement_id: int) -> bool:
        before = len(self._records)
        self._records = [r for r in self._records if r.id != supplement_id]
        removed = len(self._records) < before
        if removed:
            logger.info("Deleted supplement %d", supplement_id)
        return removed

    def set_stack_membership(self, supplement_id: int, in_stack: bool) -> bool:
        record = self.get(supplement_id)
        if record is None:
            return False
        record.in_current_stack = bool(in_stack)
        _couple_dosage(record)
        return True

    def toggle_stack(self, supplement_id: int) -> bool:
        record = self.get(supplement_id)
        if record is None:
            return False
        return self.set_stack_membership(supplement_id, not record.in_current_stack)

    def search(self, query: Optional[str]) -> List[SupplementRecord]:
        """
        Case-insensitive substring match over name, purpose and notes.

        A blank query returns the whole catalog in insertion order.
        """
        if not query or not query.strip():
            return self.records
        return [r for r in self._records if matches_query(r, query)]

    def stack(self) -> List[SupplementRecord]:
        return [r for r in self._records if r.in_current_stack]

    def stack_aggregate(self, budget: int = MONTHLY_BUDGET) -> StackAggregate:
        members = self.stack()
        return StackAggregate(
            count=len(members),
            total_cost=sum(r.cost_per_month or 0 for r in members),
            budget=budget,
        )
