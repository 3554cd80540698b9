#!/usr/bin/env python3
"""
Seed the storefront catalog.

With no arguments the built-in catalog (Nova Runner and its three colors)
is inserted when the store is empty. A JSON file with the same shape
({"product": {...}, "variants": [...], "settings": {...}}) can be given
instead.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --file catalog.json --reset
"""
import argparse
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from storefront.db import SessionLocal, init_db
from storefront.db.seed import load_catalog_file, seed_default_catalog


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a catalog JSON file")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables first")
    args = parser.parse_args(argv)

    catalog = None
    if args.file:
        if not os.path.exists(args.file):
            print("File not found:", args.file)
            return 1
        catalog = load_catalog_file(args.file)

    init_db(reset=args.reset)
    with SessionLocal() as db:
        created = seed_default_catalog(db, catalog)
    print("Seeded catalog." if created else "Catalog already present, nothing to do.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
