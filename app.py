#!/usr/bin/env python3
"""
Run instructions
- Install dependencies:
    pip install -e .
- Run the app:
    streamlit run app.py

Notes
- Single-page Streamlit app over an in-memory supplement catalog. The catalog is
  seeded on every new session and is never written back; use the export buttons
  in the sidebar to keep a copy.
- Supabase credentials (optional) go in .streamlit/secrets.toml:
    SUPABASE_URL = 'your-project-url'
    SUPABASE_ANON_KEY = 'your-anon-key'
  They are only used for the cloud status check in the sidebar.

"""
from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from catalog import SupplementRecord
from check_database import READY, check_status
from config import (
    APP_CAPTION,
    APP_TITLE,
    CATEGORIES,
    EXPORT_FILENAMES,
    VIEW_MODES,
    create_supabase_client,
)
from export import export_analytics_csv, export_library_csv, export_stack_csv
from handlers import (
    ArchiveState,
    CommandResult,
    close_editor,
    delete_prompt,
    delete_supplement,
    open_editor,
    remove_from_stack,
    remove_prompt,
    search,
    submit_supplement,
    switch_view,
    toggle_stack,
)
from seed_data import GOALS, MONTHLY_SPENDING, RECOMMENDATIONS
from views import (
    analytics_view,
    format_currency,
    library_view,
    make_category_chart,
    make_spending_chart,
    priority_class,
    recommendations_view,
    stack_card,
    stack_view,
    supplement_card,
)

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

VIEW_LABELS = {
    "library": "📚 Library",
    "stack": "💊 Current Stack",
    "analytics": "📊 Analytics",
    "recommendations": "💡 Recommendations",
}

CARDS_PER_ROW = 3

# Initialize Supabase client
try:
    supabase = create_supabase_client()
    SUPABASE_AVAILABLE = True
except Exception as e:
    supabase = None
    SUPABASE_AVAILABLE = False
    logger.info("Supabase not configured: %s", e)


# -------------------------------
# Session state
# -------------------------------

def _archive() -> ArchiveState:
    if "archive" not in st.session_state:
        st.session_state.archive = ArchiveState()
    return st.session_state.archive


def _apply(result: CommandResult) -> None:
    """Queue a handler's outcome for display on the next run."""
    if result.stale_views:
        logger.debug("Stale views: %s", ", ".join(result.stale_views))
    if result.message:
        st.session_state["flash"] = (result.ok, result.message)


def _show_flash() -> None:
    flash = st.session_state.pop("flash", None)
    if flash is None:
        return
    ok, message = flash
    if ok:
        st.success(message)
    else:
        st.info(message)


# -------------------------------
# Callbacks (run before the next script pass)
# -------------------------------

def on_view_change() -> None:
    _apply(switch_view(_archive(), st.session_state["nav_view"]))


def on_search_change() -> None:
    _apply(search(_archive(), st.session_state.get("search_query", "")))


def on_add_clicked() -> None:
    open_editor(_archive())
    st.session_state["editor_open"] = True


def on_edit_clicked(supplement_id: int) -> None:
    result = open_editor(_archive(), supplement_id)
    st.session_state["editor_open"] = result.ok
    _apply(result)


def on_toggle_clicked(supplement_id: int) -> None:
    _apply(toggle_stack(_archive(), supplement_id))


def on_confirm_requested(action: str, supplement_id: int) -> None:
    st.session_state["pending_confirm"] = {"action": action, "id": supplement_id}


def on_confirm_answer(accepted: bool) -> None:
    pending = st.session_state.pop("pending_confirm", None)
    if pending is None:
        return
    archive = _archive()

    def answer(_prompt: str) -> bool:
        return accepted

    if pending["action"] == "delete":
        result = delete_supplement(archive, pending["id"], answer)
        if archive.editing_id is None:
            st.session_state["editor_open"] = False
    else:
        result = remove_from_stack(archive, pending["id"], answer)
    _apply(result)


# -------------------------------
# UI helpers
# -------------------------------

def render_confirmation(archive: ArchiveState) -> None:
    pending = st.session_state.get("pending_confirm")
    if not pending:
        return
    record = archive.catalog.get(pending["id"])
    if record is None:
        st.session_state.pop("pending_confirm", None)
        return
    prompt = delete_prompt(record) if pending["action"] == "delete" else remove_prompt(record)
    st.warning(prompt)
    c1, c2, _ = st.columns([1, 1, 4])
    with c1:
        st.button("Confirm", key="confirm_yes", type="primary", on_click=on_confirm_answer, args=(True,))
    with c2:
        st.button("Cancel", key="confirm_no", on_click=on_confirm_answer, args=(False,))


def render_editor(archive: ArchiveState) -> None:
    if not st.session_state.get("editor_open"):
        return

    record: Optional[SupplementRecord] = None
    if archive.editing_id is not None:
        record = archive.catalog.get(archive.editing_id)

    st.subheader("Edit Supplement" if record else "Add Supplement")
    with st.form(f"supplement_form_{record.id if record else 'new'}"):
        name = st.text_input("Name *", value=record.name if record else "")
        category_options = [""] + CATEGORIES
        category = st.selectbox(
            "Category *",
            category_options,
            index=category_options.index(record.category) if record and record.category in CATEGORIES else 0,
        )
        c1, c2 = st.columns(2)
        with c1:
            dosage = st.text_input("Dosage", value=record.dosage if record else "")
            cost = st.number_input(
                "Cost per Month",
                min_value=0,
                step=50,
                value=int(record.cost_per_month) if record else 0,
            )
        with c2:
            timing = st.text_input("Timing", value=record.timing if record else "")
            in_stack = st.checkbox("In current stack", value=record.in_current_stack if record else False)
        current_dosage = st.text_input(
            "Current dosage",
            value=record.current_dosage if record else "",
            help="Only kept while the supplement is in your stack.",
        )
        purpose = st.text_area("Purpose", value=record.purpose if record else "")
        notes = st.text_area("Notes", value=record.notes if record else "")

        s1, s2, _ = st.columns([1, 1, 4])
        with s1:
            submitted = st.form_submit_button("Save", type="primary")
        with s2:
            cancelled = st.form_submit_button("Cancel")

    if cancelled:
        close_editor(archive)
        st.session_state["editor_open"] = False
        st.rerun()

    if submitted:
        result = submit_supplement(archive, {
            "name": name,
            "category": category,
            "dosage": dosage,
            "timing": timing,
            "cost_per_month": cost,
            "purpose": purpose,
            "notes": notes,
            "in_current_stack": in_stack,
            "current_dosage": current_dosage,
        })
        if not result.ok:
            st.error(result.message)
            if record is not None and archive.editing_id is None:
                # The supplement disappeared while the form was open
                st.session_state["editor_open"] = False
            return
        st.session_state["editor_open"] = False
        _apply(result)
        st.rerun()


def render_summary(archive: ArchiveState) -> None:
    aggregate = archive.catalog.stack_aggregate(archive.budget.monthly)
    c1, c2, c3 = st.columns(3)
    c1.metric("Supplements in Stack", aggregate.count)
    c2.metric("Monthly Cost", format_currency(aggregate.total_cost))
    c3.metric("Budget Remaining", format_currency(aggregate.remaining))


def _supplement_card_ui(record: SupplementRecord) -> None:
    card = supplement_card(record)
    with st.container(border=True):
        title = f"**{card['title']}**"
        if card["in_stack"]:
            title += " · :green[In Stack]"
        st.markdown(title)
        for label, value in card["info"]:
            st.caption(label)
            st.write(value)
        b1, b2, b3 = st.columns(3)
        b1.button("✏️", key=f"edit_{record.id}", help="Edit", on_click=on_edit_clicked, args=(record.id,))
        b2.button("🗑️", key=f"delete_{record.id}", help="Delete", on_click=on_confirm_requested, args=("delete", record.id))
        b3.button(
            "➖" if card["in_stack"] else "➕",
            key=f"toggle_{record.id}",
            help=card["toggle_label"],
            on_click=on_toggle_clicked,
            args=(record.id,),
        )


def _grid(records: List[SupplementRecord], render) -> None:
    for start in range(0, len(records), CARDS_PER_ROW):
        cols = st.columns(CARDS_PER_ROW)
        for col, record in zip(cols, records[start:start + CARDS_PER_ROW]):
            with col:
                render(record)


# -------------------------------
# Views
# -------------------------------

def render_library(archive: ArchiveState) -> None:
    # Widget state is dropped while the library is hidden; restore it from the archive
    st.session_state["search_query"] = archive.query
    st.text_input(
        "Search supplements",
        key="search_query",
        placeholder="Search by name, purpose or notes",
        on_change=on_search_change,
    )
    buckets: Dict[str, List[SupplementRecord]] = library_view(archive.catalog, archive.query)
    if not buckets:
        st.info("No supplements match your search.")
        return
    for category, records in buckets.items():
        st.subheader(category)
        _grid(records, _supplement_card_ui)


def _stack_card_ui(record: SupplementRecord) -> None:
    card = stack_card(record)
    with st.container(border=True):
        st.markdown(f"**{card['title']}**")
        st.markdown(f"Current dose: `{card['current_dose']}`")
        for label, value in card["details"]:
            st.caption(label)
            st.write(value)
        b1, b2 = st.columns(2)
        b1.button(
            "Remove from Stack",
            key=f"remove_{record.id}",
            on_click=on_confirm_requested,
            args=("remove", record.id),
        )
        b2.button("Edit", key=f"stack_edit_{record.id}", on_click=on_edit_clicked, args=(record.id,))


def render_stack(archive: ArchiveState) -> None:
    members = stack_view(archive.catalog)
    if not members:
        st.info("Your current stack is empty. Add supplements from the library.")
        return
    _grid(members, _stack_card_ui)


def render_analytics(archive: ArchiveState) -> None:
    data = analytics_view(archive.catalog, archive.budget, MONTHLY_SPENDING)

    st.subheader("Budget Overview")
    c1, c2, c3 = st.columns(3)
    c1.metric("Current Spending", format_currency(data.current_spending))
    c2.metric("Remaining Budget", format_currency(data.remaining))
    c3.metric("Monthly Budget", format_currency(archive.budget.monthly))
    st.progress(data.bar_percentage / 100, text=data.progress_text)

    left, right = st.columns(2)
    with left:
        st.plotly_chart(make_spending_chart(data.monthly_spending), use_container_width=True)
    with right:
        st.plotly_chart(make_category_chart(data.by_category), use_container_width=True)

    if data.by_category:
        table = pd.DataFrame(
            [{"Category": k, "Monthly Cost": v} for k, v in data.by_category.items()]
        )
        st.dataframe(table, use_container_width=True, hide_index=True)


def render_recommendations(archive: ArchiveState) -> None:
    data = recommendations_view(RECOMMENDATIONS, GOALS)
    for rec in data["recommendations"]:
        with st.container(border=True):
            badge = ":red" if priority_class(rec.priority) == "high" else ":orange"
            st.markdown(f"#### {rec.supplement}  {badge}[{rec.priority} Priority]")
            st.write(rec.reason)
            st.markdown(f"**ROI:** {rec.roi}")
            st.markdown(f"**Budget Impact:** {rec.budget_impact}")

    if data["active_goals"]:
        st.subheader("Active Goals")
        st.dataframe(
            pd.DataFrame([
                {"Goal": g.name, "Target": g.target, "Progress": g.progress}
                for g in data["active_goals"]
            ]),
            use_container_width=True,
            hide_index=True,
        )


RENDERERS = {
    "library": render_library,
    "stack": render_stack,
    "analytics": render_analytics,
    "recommendations": render_recommendations,
}


def render_sidebar(archive: ArchiveState) -> None:
    with st.sidebar:
        st.radio(
            "View",
            VIEW_MODES,
            index=VIEW_MODES.index(archive.current_view),
            format_func=lambda v: VIEW_LABELS[v],
            key="nav_view",
            on_change=on_view_change,
        )
        st.button("➕ Add Supplement", key="add_btn", use_container_width=True, on_click=on_add_clicked)

        st.markdown("---")
        st.markdown("### Export")
        st.download_button(
            "📥 Library CSV",
            data=export_library_csv(archive.catalog),
            file_name=EXPORT_FILENAMES["library"],
            mime="text/csv",
            use_container_width=True,
        )
        st.download_button(
            "📥 Stack CSV",
            data=export_stack_csv(archive.catalog),
            file_name=EXPORT_FILENAMES["stack"],
            mime="text/csv",
            use_container_width=True,
        )
        st.download_button(
            "📥 Analytics CSV",
            data=export_analytics_csv(MONTHLY_SPENDING, archive.budget),
            file_name=EXPORT_FILENAMES["analytics"],
            mime="text/csv",
            use_container_width=True,
        )

        st.markdown("---")
        st.markdown("### Cloud")
        if not SUPABASE_AVAILABLE:
            st.caption("Supabase not configured.")
        elif st.button("Check database", key="db_check_btn"):
            status, message = check_status(supabase)
            if status == READY:
                st.success(message)
            else:
                st.warning(message)


# Main UI
def main():
    st.set_page_config(page_title=APP_TITLE, layout="wide")
    st.title(APP_TITLE)
    st.caption(APP_CAPTION)

    archive = _archive()
    render_sidebar(archive)
    _show_flash()
    render_summary(archive)
    st.markdown("---")

    render_confirmation(archive)
    render_editor(archive)
    RENDERERS[archive.current_view](archive)


main()
