#!/usr/bin/env python3
# =============================================================================
# scripts/seed.py - Database Seeder
# =============================================================================
# Imports or destroys the sample users, bootcamps, courses and reviews.
#
# Usage:
#   # Import sample data
#   python scripts/seed.py -i
#
#   # Delete everything
#   python scripts/seed.py -d
#
# Prerequisites:
#   - MongoDB must be running and MONGO_URI set (.env file)
#   - Every seeded user has the password "123456"
# =============================================================================

import argparse
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import settings
from lib.mongo_client import MongoClientFactory
from lib.seed import destroy_data, import_data


def main():
    """Import (-i) or destroy (-d) the sample data."""
    parser = argparse.ArgumentParser(description="DevCamper database seeder")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("-i", "--import", dest="do_import", action="store_true", help="Import sample data")
    group.add_argument("-d", "--destroy", action="store_true", help="Delete all data")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    client, db = MongoClientFactory.connect(settings.MONGO_URI, settings.MONGO_DB_NAME)
    try:
        if args.do_import:
            MongoClientFactory.ensure_indexes(db)
            counts = import_data(db)
            print("Data Imported...")
            for name, count in counts.items():
                print(f"  {name}: {count}")
        else:
            destroy_data(db)
            print("Data Destroyed...")
    finally:
        client.close()


if __name__ == "__main__":
    main()
