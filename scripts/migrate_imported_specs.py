#!/usr/bin/env python3
"""
Imported Spec Migration

Backfills technicalSpecs on imported products from their short description
(wattage, light source, color temperature, beam angle, material, voltage,
mounting). Unknown labels are added to the standalone spec item pool.

Usage:
    python3 scripts/migrate_imported_specs.py
    python3 scripts/migrate_imported_specs.py --db output/catalog.db
"""

import argparse
import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from catalog_import.common.log_config import setup_logging
from catalog_import.importer import SpecMigration
from catalog_import.store import DEFAULT_DB_PATH, SQLiteDocumentStore


def main():
    parser = argparse.ArgumentParser(
        description="Re-derive technical specs of imported products from their descriptions"
    )
    parser.add_argument(
        "--db",
        default=DEFAULT_DB_PATH,
        help=f"SQLite document store path (default: {DEFAULT_DB_PATH})"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    if not os.path.exists(args.db):
        print(f"Database not found: {args.db}")
        sys.exit(1)

    report = SpecMigration(SQLiteDocumentStore(args.db)).run()

    print("=" * 60)
    print("Spec Migration Summary")
    print("=" * 60)
    print(f"  Imported products scanned: {report.scanned}")
    print(f"  Products updated:          {report.updated}")
    print(f"  New standalone labels:     {len(report.new_labels)}")
    for label in report.new_labels:
        print(f"     {label}")
    print("=" * 60)


if __name__ == "__main__":
    main()
