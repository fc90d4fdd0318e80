#!/usr/bin/env python3
"""
Seed products from a JSON file through the stock service, so every product
with initial stock gets its "Initial stock" ledger entry.

The file holds a list of products (or an object with an ``items`` list) using
either camelCase or snake_case keys: name, description, sku, price,
initialStock, reorderLevel. SKUs that already exist are skipped.

Usage:
    python scripts/seed_products.py --file products.json
"""
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import argparse
import json

from stockledger.db import SessionLocal, init_db
from stockledger.logging_setup import setup_logging
from stockledger.services.errors import DuplicateSku, StockValidationError
from stockledger.services.stock_service import StockService


def _normalize_entry(entry):
    """Accept a few common key spellings (``stock``/``quantity`` for initial stock)."""
    return {
        "name": entry.get("name") or entry.get("title") or "",
        "description": entry.get("description") or "",
        "sku": entry.get("sku") or "",
        "price": entry.get("price", 0) or 0,
        "initial_stock": entry.get("initialStock", entry.get("initial_stock", entry.get("stock", 0))) or 0,
        "reorder_level": entry.get("reorderLevel", entry.get("reorder_level", 0)) or 0,
    }


def load_entries(path: str):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("items", [])
    return [_normalize_entry(e) for e in data if isinstance(e, dict)]


def seed_from_file(path: str):
    init_db(seed=False)
    created, skipped, invalid = 0, 0, 0
    db = SessionLocal()
    try:
        svc = StockService(db)
        for entry in load_entries(path):
            try:
                svc.create_product(entry)
                created += 1
            except DuplicateSku:
                skipped += 1
            except StockValidationError as e:
                invalid += 1
                print(f"Skipping invalid entry {entry.get('sku')!r}: {e.message}")
    finally:
        db.close()
    print(f"Seeded products: {created} created, {skipped} existing, {invalid} invalid")
    return created


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", required=True, help="Path to a JSON list of products")
    args = parser.parse_args()
    if not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    setup_logging()
    seed_from_file(args.file)
