#!/usr/bin/env python3
"""
Standalone catalogue seeding script.

Loads the restaurants and menu items from data/catalog.py into MongoDB.
By default only seeds an empty catalogue; pass --force to replace it.

Usage:
    python scripts/seed_catalog.py [--force]
"""

import argparse
import logging
import os
import sys

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from adapters import mongo_adapter
from app.config import settings
from services.catalog_service import CatalogService

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
logger = logging.getLogger("foodfly.scripts.seed_catalog")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the FoodFly catalogue")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Replace existing restaurants and menu items",
    )
    args = parser.parse_args(argv)

    try:
        db = mongo_adapter.connect(settings.mongo_uri, settings.mongo_db_name)
        mongo_adapter.ensure_indexes(db)
        counts = CatalogService.seed(db, force=args.force)
    except Exception as e:
        logger.error("Catalogue seeding failed: %s", e)
        return 1
    finally:
        mongo_adapter.close()

    if counts["restaurants"] == 0 and not args.force:
        print("Catalogue already present; nothing to do (use --force to reseed)")
    else:
        print(
            f"Seeded {counts['restaurants']} restaurants and "
            f"{counts['menu_items']} menu items into '{settings.mongo_db_name}'"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
