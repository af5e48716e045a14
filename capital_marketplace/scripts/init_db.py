# capital_marketplace/scripts/init_db.py
"""
Database initialization script - Create all tables

Usage:
    python -m capital_marketplace.scripts.init_db [--drop]

Options:
    --drop   Drop existing tables first (destroys all data)
"""
import argparse
import sys

from dotenv import load_dotenv

from capital_marketplace.config import get_settings
from capital_marketplace.core.database import Database
from capital_marketplace.core.logger import get_logger

load_dotenv()

logger = get_logger(__name__)


def initialize_database(database: Database, drop: bool = False) -> bool:
    """
    Create tables, optionally dropping them first.

    Returns:
        True if successful, False otherwise
    """
    logger.info("=" * 70)
    logger.info("🚀 Capital Marketplace Database Initialization")
    logger.info("=" * 70)

    logger.info("1️⃣ Testing database connection...")
    if not database.health_check():
        logger.error("❌ Cannot connect to database")
        logger.error(f"Database URL: {database.url}")
        return False
    logger.info("✓ Database connection successful")

    if drop:
        logger.info("2️⃣ Dropping existing tables...")
        database.drop_all()

    logger.info("3️⃣ Creating database tables...")
    database.create_all()
    logger.info("✅ DATABASE INITIALIZATION COMPLETE")
    return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create Capital Marketplace tables")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    args = parser.parse_args(argv)

    database = Database(get_settings().database_url)
    try:
        return 0 if initialize_database(database, drop=args.drop) else 1
    finally:
        database.dispose()


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("⚠️ Initialization cancelled by user")
        sys.exit(1)
