#!/usr/bin/env python3
"""
Print every stored shopper as one JSON object per line.

Usage:
  python scripts/list_shoppers.py
"""
from __future__ import annotations

import sys

from shopper_api.core.config import load_env_file
from shopper_api.services.shopper_service import ShopperError, ShopperService


def main() -> int:
    load_env_file()
    try:
        shoppers = ShopperService().list_all()
    except (ShopperError, RuntimeError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1
    for shopper in shoppers:
        print(shopper.model_dump_json(by_alias=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
