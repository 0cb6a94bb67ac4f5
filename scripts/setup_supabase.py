#!/usr/bin/env python3
"""Supabase setup script for Podsite.

Prints the SQL that creates the key-value table the content service
stores every record in. Copy the output into the Supabase SQL Editor.

Usage:
    # Print SQL to console
    python scripts/setup_supabase.py

    # Save SQL to file
    python scripts/setup_supabase.py --output setup.sql

    # Verify the table is reachable with the configured credentials
    python scripts/setup_supabase.py --verify
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime

# =============================================================================
# SQL Schema Definitions
# =============================================================================

SCHEMA_SQL = """
-- =============================================================================
-- Podsite key-value store for Supabase
-- =============================================================================
-- Generated: {generated_at}
--
-- Keys: episode_<id>, blog_<id>, contact_<id> and the singleton profile_data.
-- Values are JSON records. Reads are point lookups or key prefix scans.
-- =============================================================================

CREATE TABLE IF NOT EXISTS {table} (
    key TEXT NOT NULL PRIMARY KEY,
    value JSONB NOT NULL
);

-- Prefix scans use LIKE 'prefix%'
CREATE INDEX IF NOT EXISTS idx_{table}_key_pattern
    ON {table} (key text_pattern_ops);

-- Only the service role (server side) touches this table.
ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;
"""

DROP_SQL = """
DROP TABLE IF EXISTS {table};
"""


# =============================================================================
# Verification
# =============================================================================


def verify_table(table: str) -> dict:
    """Check that the key-value table exists and answers a read.

    Returns:
        Dictionary with verification results.
    """
    try:
        from podsite.config.settings import get_settings
        from podsite.store.kv import create_supabase_client

        client = create_supabase_client(get_settings())
        response = client.table(table).select("key").limit(1).execute()
        return {
            "success": True,
            "table": table,
            "row_count": len(response.data) if response.data else 0,
        }
    except Exception as e:
        error_str = str(e)
        missing = "does not exist" in error_str.lower() or "relation" in error_str.lower()
        return {
            "success": False,
            "table": table,
            "missing": missing,
            "error": error_str[:200],
        }


def print_verification_results(results: dict) -> None:
    """Print verification results in a formatted way."""
    print("\n" + "=" * 70)
    print("Supabase Table Verification")
    print("=" * 70)

    icon = "[+]" if results["success"] else "[-]"
    print(f"\n  {icon} {results['table']}: {'OK' if results['success'] else 'FAIL'}")
    if results.get("missing"):
        print("\nRun this script without --verify to get the SQL that creates it.")
    if results.get("error"):
        print(f"      Error: {results['error']}")

    print("\n" + "=" * 70)


# =============================================================================
# Main Functions
# =============================================================================


def get_sql(table: str, sql_type: str = "setup") -> str:
    """Get the requested SQL for ``table``."""
    if sql_type == "drop":
        return DROP_SQL.format(table=table)
    return SCHEMA_SQL.format(
        table=table,
        generated_at=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the setup script."""
    parser = argparse.ArgumentParser(
        description="Generate Supabase setup SQL for Podsite",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        help="Save SQL to file instead of printing",
    )
    parser.add_argument(
        "--type", "-t",
        choices=["setup", "drop"],
        default="setup",
        help="Type of SQL to generate (default: setup)",
    )
    parser.add_argument(
        "--table",
        default="kv_store",
        help="Key-value table name (default: kv_store)",
    )
    parser.add_argument(
        "--verify", "-v",
        action="store_true",
        help="Verify that the table exists in Supabase",
    )

    args = parser.parse_args(argv)

    if args.verify:
        results = verify_table(args.table)
        print_verification_results(results)
        return 0 if results["success"] else 1

    sql = get_sql(args.table, args.type)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(sql)
        print(f"SQL saved to: {args.output}")
    else:
        if args.type == "drop":
            print("WARNING: This will DELETE ALL DATA!")
        print(sql)
    return 0


if __name__ == "__main__":
    sys.exit(main())
