"""
Smoke tests driving the Streamlit app through streamlit.testing.
"""

import doctest
import os

import pytest
from streamlit.testing.v1 import AppTest

import catalog
import check_database
import export
import views

APP_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "app.py")


@pytest.fixture
def at(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
    app = AppTest.from_file(APP_PATH, default_timeout=30)
    app.run()
    return app


def test_library_renders(at):
    assert not at.exception
    assert at.title[0].value == "Supplement Archive"
    assert [s.value for s in at.subheader] == [
        "Essential Lifelong", "Goal-Specific", "Uncertain/Trial", "Wishlist",
    ]


def test_search_filters_library(at):
    at.text_input(key="search_query").input("testosterone").run()
    assert not at.exception
    assert [s.value for s in at.subheader] == ["Essential Lifelong", "Goal-Specific"]


def test_search_box_survives_view_switch(at):
    at.text_input(key="search_query").input("testosterone").run()
    at.radio(key="nav_view").set_value("stack").run()
    at.radio(key="nav_view").set_value("library").run()
    assert not at.exception
    assert at.text_input(key="search_query").value == "testosterone"
    assert at.session_state["archive"].query == "testosterone"
    assert [s.value for s in at.subheader] == ["Essential Lifelong", "Goal-Specific"]

    at.text_input(key="search_query").input("").run()
    assert at.session_state["archive"].query == ""
    assert len(at.subheader) == 4


def test_toggle_updates_summary(at):
    at.button(key="toggle_3").click().run()
    assert not at.exception
    assert at.session_state["archive"].catalog.get(3).in_current_stack
    assert at.metric[0].value == "4"


def test_delete_requires_confirmation(at):
    at.button(key="delete_8").click().run()
    assert at.session_state["archive"].catalog.get(8) is not None
    assert 'Are you sure you want to delete "Rauwolscine/Alpha-Yohimbine"?' in [w.value for w in at.warning]
    at.button(key="confirm_yes").click().run()
    assert not at.exception
    assert at.session_state["archive"].catalog.get(8) is None


def test_switch_to_analytics(at):
    at.radio(key="nav_view").set_value("analytics").run()
    assert not at.exception
    assert at.session_state["archive"].current_view == "analytics"
    assert "Budget Overview" in [s.value for s in at.subheader]


@pytest.mark.parametrize("module", [catalog, check_database, export, views])
def test_doctests(module):
    failures, _ = doctest.testmod(module)
    assert failures == 0
