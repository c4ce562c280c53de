"""
Configuration for the Supplement Archive.

Constants used across the app plus the Supabase credentials lookup. Credentials
come from `.streamlit/secrets.toml` when available:

    SUPABASE_URL = 'your-project-url'
    SUPABASE_ANON_KEY = 'your-anon-key'

and fall back to the environment variables of the same name.
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Tuple

import streamlit as st
from supabase import create_client, Client

logger = logging.getLogger(__name__)

# -------------------------------
# App constants
# -------------------------------
APP_TITLE = "Supplement Archive"
APP_CAPTION = "Your supplement library, stack and budget in one place."
CURRENCY = "₹"

CATEGORIES = [
    "Essential Lifelong",
    "Goal-Specific",
    "Uncertain/Trial",
    "Wishlist",
]

VIEW_MODES = ["library", "stack", "analytics", "recommendations"]
DEFAULT_VIEW = "library"

MONTHLY_BUDGET = 3000
YEARLY_BUDGET = 36000

# Defaults stamped onto supplements created from the form
USER_ADDED_ROI = "User added supplement"
DEFAULT_EVIDENCE_RATING = 3

EXPORT_FILENAMES = {
    "library": "supplement-library.csv",
    "stack": "current-stack.csv",
    "analytics": "analytics-data.csv",
}

# Hosted backend tables
STATUS_TABLE = "daily_entries"
SUPPLEMENTS_TABLE = "supplements"


def get_supabase_credentials() -> Tuple[Optional[str], Optional[str]]:
    """Return (url, anon_key) from Streamlit secrets, else the environment."""
    try:
        return st.secrets["SUPABASE_URL"], st.secrets["SUPABASE_ANON_KEY"]
    except Exception as e:
        logger.debug("Streamlit secrets unavailable: %s", e)
    return os.environ.get("SUPABASE_URL"), os.environ.get("SUPABASE_ANON_KEY")


def create_supabase_client() -> Client:
    """
    Build a Supabase client from the configured credentials.

    Raises RuntimeError when no credentials are configured.
    """
    url, key = get_supabase_credentials()
    if not url or not key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be configured")
    return create_client(url, key)
