#!/usr/bin/env python3
"""
Check whether the hosted Supabase project is reachable and has its tables.

Run this script after creating or resuming the project:

    python check_database.py

Exit code is 0 only when the project is online and the tables exist.
"""
from __future__ import annotations

import logging
import sys
from typing import Tuple

from supabase import Client

from config import STATUS_TABLE, create_supabase_client, get_supabase_credentials

logger = logging.getLogger(__name__)

READY = "ready"
NEEDS_SCHEMA = "needs_schema"
PAUSED = "paused"
ERROR = "error"

# Postgres "undefined_table" and PostgREST "table not in schema cache"
MISSING_TABLE_CODES = {"42P01", "PGRST205"}


def classify_error(exc: Exception) -> str:
    """
    Map an exception raised by the Supabase client to a status.

    >>> classify_error(RuntimeError("521: Web server is down"))
    'paused'
    """
    code = getattr(exc, "code", None)
    if code in MISSING_TABLE_CODES:
        return NEEDS_SCHEMA
    text = str(exc)
    if "521" in text or "Web server is down" in text:
        return PAUSED
    return ERROR


def check_status(client: Client, table: str = STATUS_TABLE) -> Tuple[str, str]:
    """Return (status, message) for the project behind ``client``."""
    try:
        client.auth.get_session()
    except Exception as e:
        status = classify_error(e)
        logger.warning("Auth check failed (%s): %s", status, e)
        return status, f"Project not ready: {e}"

    try:
        client.table(table).select("id").limit(1).execute()
    except Exception as e:
        status = classify_error(e)
        if status == NEEDS_SCHEMA:
            return status, "Project is online but tables need to be created."
        logger.warning("Table check failed (%s): %s", status, e)
        return status, f"Table check error: {e}"

    return READY, "Database tables exist! Everything is ready!"


def main() -> int:
    print("🚀 Supabase Status Checker")
    print("=" * 50)

    url, _ = get_supabase_credentials()
    if not url:
        print("❌ Supabase credentials not found")
        print("💡 Add SUPABASE_URL and SUPABASE_ANON_KEY to .streamlit/secrets.toml or the environment")
        return 1
    print(f"📡 URL: {url}")

    try:
        client = create_supabase_client()
    except Exception as e:
        print(f"❌ Failed to create Supabase client: {e}")
        return 1

    status, message = check_status(client)
    if status == READY:
        print(f"🎉 {message}")
        print("\n✅ Ready to use cloud backup!")
        return 0
    if status == NEEDS_SCHEMA:
        print(f"📝 {message}")
        print("\n📋 Run `python setup_database.py` and paste the SQL into the Supabase SQL Editor")
        print("Then run this check again")
    elif status == PAUSED:
        print("⏳ Project still paused - waiting for resume...")
        print("\n⏳ Try again in a few minutes")
    else:
        print(f"❌ {message}")
    return 1


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
