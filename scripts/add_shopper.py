#!/usr/bin/env python3
"""
Register a shopper directly in the database, bypassing HTTP.

Usage:
  python scripts/add_shopper.py --username alice [--full-name "Alice A."] [--email a@example.com] ...
"""
from __future__ import annotations

import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError

from shopper_api.core.config import load_env_file
from shopper_api.db.create_tables import create_all
from shopper_api.schemas import ShopperIn
from shopper_api.services.shopper_service import ShopperError, ShopperService


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Register a shopper")
    ap.add_argument("--username", required=True, help="Unique username (primary key)")
    ap.add_argument("--full-name", default="", help="Full name")
    ap.add_argument("--email", default="")
    ap.add_argument("--street", default="")
    ap.add_argument("--city", default="")
    ap.add_argument("--state", default="")
    ap.add_argument("--zip-code", default="")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    load_env_file()
    try:
        create_all()
    except (RuntimeError, SQLAlchemyError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    svc = ShopperService()
    payload = ShopperIn(
        username=args.username,
        full_name=args.full_name,
        email=args.email,
        street=args.street,
        city=args.city,
        state=args.state,
        zip_code=args.zip_code,
    )
    try:
        shopper = svc.create(payload)
    except ShopperError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1
    print("OK: shopper registered")
    print(f"  Username: {shopper.username}")
    print(f"  Joined:   {shopper.date_joined}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
