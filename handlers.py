"""
Command handlers for the Supplement Archive.

Each user gesture maps to one handler. A handler performs one store mutation on
an explicitly passed ArchiveState, then asks the state to re-render the visible
views that depend on what changed. Handlers never raise for user mistakes;
they return a CommandResult the UI turns into a message.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Set

from catalog import (
    SupplementCatalog,
    SupplementRecord,
    SupplementValidationError,
    parse_cost,
    validate_submission,
)
from config import DEFAULT_EVIDENCE_RATING, DEFAULT_VIEW, USER_ADDED_ROI, VIEW_MODES
from seed_data import BUDGET, Budget, seed_catalog
from views import stale_views

logger = logging.getLogger(__name__)

Renderer = Callable[["ArchiveState"], None]
Confirm = Callable[[str], bool]


@dataclass
class CommandResult:
    ok: bool
    message: str = ""
    stale_views: List[str] = field(default_factory=list)


@dataclass
class ArchiveState:
    """All mutable state of one archive session."""

    catalog: SupplementCatalog = field(default_factory=seed_catalog)
    budget: Budget = BUDGET
    current_view: str = DEFAULT_VIEW
    query: str = ""
    editing_id: Optional[int] = None
    subscribers: Dict[str, List[Renderer]] = field(default_factory=dict)

    def visible_views(self) -> Set[str]:
        # The stack summary sits above every view
        return {self.current_view, "summary"}

    def filtered(self) -> List[SupplementRecord]:
        return self.catalog.search(self.query)

    def subscribe(self, view: str, renderer: Renderer) -> None:
        self.subscribers.setdefault(view, []).append(renderer)

    def notify(self, changed: Set[str]) -> List[str]:
        """Run the renderers of every visible view that reads a changed facet."""
        stale = stale_views(changed, self.visible_views())
        for view in stale:
            for renderer in self.subscribers.get(view, []):
                renderer(self)
        return stale


# -------------------------------
# Confirmation prompts
# -------------------------------

def delete_prompt(record: SupplementRecord) -> str:
    return f'Are you sure you want to delete "{record.name}"?'


def remove_prompt(record: SupplementRecord) -> str:
    return f'Remove "{record.name}" from your current stack?'


def _not_found(action: str, supplement_id: int) -> CommandResult:
    logger.warning("%s ignored: supplement %s not found", action, supplement_id)
    return CommandResult(False, f"Supplement {supplement_id} not found.")


# -------------------------------
# Handlers
# -------------------------------

def form_to_fields(form: Mapping[str, object]) -> Dict[str, object]:
    """Normalize raw form input: trim text, parse cost, coerce the stack flag."""

    def text(key: str) -> str:
        return str(form.get(key) or "").strip()

    return {
        "name": text("name"),
        "category": text("category"),
        "dosage": text("dosage"),
        "timing": text("timing"),
        "cost_per_month": parse_cost(form.get("cost_per_month")),
        "purpose": text("purpose"),
        "notes": text("notes"),
        "in_current_stack": bool(form.get("in_current_stack")),
        "current_dosage": text("current_dosage"),
    }


def open_editor(state: ArchiveState, supplement_id: Optional[int] = None) -> CommandResult:
    if supplement_id is not None and state.catalog.get(supplement_id) is None:
        return _not_found("Edit", supplement_id)
    state.editing_id = supplement_id
    return CommandResult(True)


def close_editor(state: ArchiveState) -> CommandResult:
    state.editing_id = None
    return CommandResult(True)


def submit_supplement(state: ArchiveState, form: Mapping[str, object]) -> CommandResult:
    """Add a new supplement, or update the one being edited."""
    data = form_to_fields(form)
    try:
        validate_submission(data)
    except SupplementValidationError as e:
        return CommandResult(False, str(e))

    if state.editing_id is not None:
        supplement_id = state.editing_id
        if not state.catalog.update(supplement_id, data):
            state.editing_id = None
            return _not_found("Update", supplement_id)
        message = f"Updated {data['name']}."
    else:
        data["roi"] = USER_ADDED_ROI
        data["evidence_rating"] = DEFAULT_EVIDENCE_RATING
        state.catalog.add(data)
        message = f"Added {data['name']}."

    state.editing_id = None
    return CommandResult(True, message, state.notify({"catalog", "stack"}))


def toggle_stack(state: ArchiveState, supplement_id: int) -> CommandResult:
    if not state.catalog.toggle_stack(supplement_id):
        return _not_found("Toggle stack", supplement_id)
    return CommandResult(True, stale_views=state.notify({"stack"}))


def remove_from_stack(state: ArchiveState, supplement_id: int, confirm: Confirm) -> CommandResult:
    record = state.catalog.get(supplement_id)
    if record is None:
        return _not_found("Remove from stack", supplement_id)
    if not confirm(remove_prompt(record)):
        return CommandResult(False, "Cancelled.")
    state.catalog.set_stack_membership(supplement_id, False)
    return CommandResult(True, f"Removed {record.name} from your stack.", state.notify({"stack"}))


def delete_supplement(state: ArchiveState, supplement_id: int, confirm: Confirm) -> CommandResult:
    record = state.catalog.get(supplement_id)
    if record is None:
        return _not_found("Delete", supplement_id)
    if not confirm(delete_prompt(record)):
        return CommandResult(False, "Cancelled.")
    state.catalog.delete(supplement_id)
    if state.editing_id == supplement_id:
        state.editing_id = None
    return CommandResult(True, f"Deleted {record.name}.", state.notify({"catalog", "stack"}))


def search(state: ArchiveState, query: str) -> CommandResult:
    state.query = query or ""
    return CommandResult(True, stale_views=state.notify({"query"}))


def switch_view(state: ArchiveState, view: str) -> CommandResult:
    if view not in VIEW_MODES:
        raise ValueError(f"Unknown view: {view}")
    state.current_view = view
    # A newly shown view always renders
    stale = [view]
    for renderer in state.subscribers.get(view, []):
        renderer(state)
    return CommandResult(True, stale_views=stale)
