#!/usr/bin/env python3
"""
Print (or write) the SQL schema for the hosted Supabase project.

    python setup_database.py                 # print schema and instructions
    python setup_database.py -o schema.sql   # write schema to a file
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from config import CATEGORIES, STATUS_TABLE, SUPPLEMENTS_TABLE


def _policies(table: str, label: str) -> str:
    lines = [f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;", ""]
    for verb, clause in (
        ("view", "FOR SELECT USING"),
        ("insert", "FOR INSERT WITH CHECK"),
        ("update", "FOR UPDATE USING"),
        ("delete", "FOR DELETE USING"),
    ):
        lines.append(f'CREATE POLICY "Users can {verb} their own {label}" ON {table}')
        lines.append(f"  {clause} (auth.uid() = user_id);")
        lines.append("")
    return "\n".join(lines)


def build_schema() -> str:
    categories = ", ".join(f"'{c}'" for c in CATEGORIES)
    return f"""-- Daily entries (used by the status check)
CREATE TABLE {STATUS_TABLE} (
  id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
  user_id UUID REFERENCES auth.users(id) ON DELETE CASCADE,
  date DATE NOT NULL,
  notes TEXT,
  supplements JSONB DEFAULT '[]'::jsonb,
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  updated_at TIMESTAMP WITH TIME ZONE DEFAULT NOW(),
  UNIQUE(user_id, date)
);

-- Supplement library
CREATE TABLE {SUPPLEMENTS_TABLE} (
  id BIGINT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
  user_id UUID REFERENCES auth.users(id) ON DELETE CASCADE,
  name TEXT NOT NULL,
  category TEXT NOT NULL CHECK (category IN ({categories})),
  dosage TEXT,
  timing TEXT,
  purpose TEXT,
  notes TEXT,
  roi TEXT,
  cost_per_month INTEGER DEFAULT 0 CHECK (cost_per_month >= 0),
  in_current_stack BOOLEAN DEFAULT FALSE,
  current_dosage TEXT DEFAULT '',
  evidence_rating INTEGER CHECK (evidence_rating >= 1 AND evidence_rating <= 5),
  start_date DATE,
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

{_policies(STATUS_TABLE, "daily entries")}
{_policies(SUPPLEMENTS_TABLE, "supplements")}
CREATE INDEX idx_{STATUS_TABLE}_user_date ON {STATUS_TABLE}(user_id, date);
CREATE INDEX idx_{SUPPLEMENTS_TABLE}_user ON {SUPPLEMENTS_TABLE}(user_id);
"""


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Supabase schema helper")
    parser.add_argument("-o", "--output", help="write the schema to this file instead of stdout")
    args = parser.parse_args(argv)

    schema = build_schema()
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(schema)
        print(f"✅ Schema written to {args.output}")
    else:
        print("🚀 Supabase Database Setup Helper")
        print("=" * 50)
        print(schema)

    print("\n📋 Next steps:")
    print("1. Go to your Supabase dashboard")
    print("2. Open the SQL Editor")
    print("3. Run the schema above")
    print("4. Run `python check_database.py` to confirm")
    return 0


if __name__ == "__main__":
    sys.exit(main())
