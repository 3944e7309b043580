#!/usr/bin/env python3
"""
Script: init_database.py
Purpose: Create the customers / products / orders schema and load seed data

This script:
1. Optionally drops the existing tables (--drop)
2. Creates any missing tables from the SQLAlchemy models
3. Runs the seed SQL files, each one as a single batch in its own transaction

Usage:
    cd backend && source venv/bin/activate
    python scripts/init_database.py [--drop] [--no-seed] [--seed-file PATH ...]

Connection parameters come from .env / the environment (DATABASE_URL,
DB_SECRET or DB_HOST / DB_NAME / DB_USER / DB_PASSWORD).
"""

import argparse
import logging
import sys
from pathlib import Path

# Add backend to path
BACKEND_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BACKEND_DIR))

from dotenv import load_dotenv

from orderdesk.core.config import Settings
from orderdesk.core.exceptions import OrderDeskError
from orderdesk.core.logging import setup_logging
from orderdesk.core.schema import create_schema, drop_schema, run_sql_files

# Load environment
env_path = BACKEND_DIR / '.env.development'
if env_path.exists():
    load_dotenv(env_path)
else:
    load_dotenv(BACKEND_DIR / '.env')

DEFAULT_SEED_FILES = [BACKEND_DIR / 'sql' / 'seed_data.sql']

logger = logging.getLogger("init_database")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the OrderDesk schema and load seed data")
    parser.add_argument("--drop", action="store_true",
                        help="Drop existing tables before creating them (destroys data)")
    parser.add_argument("--no-seed", action="store_true",
                        help="Create the schema only")
    parser.add_argument("--seed-file", action="append", type=Path, dest="seed_files",
                        help="SQL file to run after schema creation (repeatable, default: sql/seed_data.sql)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    settings = Settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    try:
        config = settings.get_database_config()

        logger.info(f"Starting database initialization: {config.dbname} at {config.host}")

        if args.drop:
            logger.warning("Dropping existing tables")
            drop_schema(config)

        create_schema(config)

        if not args.no_seed:
            seed_files = args.seed_files or DEFAULT_SEED_FILES
            missing = [str(path) for path in seed_files if not path.exists()]
            if missing:
                logger.error(f"Seed files not found: {', '.join(missing)}")
                return 1
            executed = run_sql_files(config, seed_files)
            logger.info(f"Executed {executed} seed file(s)")

    except OrderDeskError as e:
        logger.error(f"Database initialization failed: {e}")
        return 1

    logger.info("Database initialization complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
