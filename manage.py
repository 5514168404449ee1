#!/usr/bin/env python3
"""
Database management script.
Creates, drops and seeds the tables of the database named by DATABASE_URL
and checks the configured storage backends. Also moves legacy uploads into
object storage.
"""

import asyncio
import sys
import argparse
import logging

from app import database
from app.config import settings
from app.storage import SqlStorage, create_object_store, migrate_legacy_uploads, seed_storage

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class DatabaseManager:
    """Runs management commands against the relational backend."""

    def __init__(self):
        if not settings.use_database:
            raise RuntimeError("DATABASE_URL is not set; management commands need a database")

    async def create_tables(self) -> None:
        logger.info("Creating database tables")
        await database.create_tables()

    async def drop_tables(self) -> None:
        logger.info("Dropping database tables")
        await database.drop_tables()

    async def seed(self) -> None:
        """Create tables if needed and load the demo data into an empty database."""
        await database.create_tables()

        async with database.AsyncSessionLocal() as session:
            seeded = await seed_storage(SqlStorage(session))

        if seeded:
            logger.info("Database seeded with demo data")
        else:
            logger.info("Database already contains locations, skipping seed")

    async def migrate_images(self) -> bool:
        """Move files from the legacy uploads directory into object storage."""
        async with database.AsyncSessionLocal() as session:
            storage = SqlStorage(session)
            report = await migrate_legacy_uploads(
                storage, create_object_store(settings, storage), settings.upload_dir
            )

        logger.info(f"Migrated {report['uploaded']} of {report['files']} legacy images")
        return report["failed"] == 0

    async def check(self) -> bool:
        """Check database connectivity and the object storage configuration."""
        db_ok = await database.test_database_connection()

        if settings.object_storage_backend == "database":
            async with database.AsyncSessionLocal() as session:
                report = await create_object_store(settings, SqlStorage(session)).check_config()
        else:
            report = await create_object_store(settings).check_config()

        logger.info(f"Database: {'connected' if db_ok else 'unreachable'}")
        logger.info(f"Object storage: {report}")
        return db_ok and bool(report.get("configured"))

    async def close(self) -> None:
        await database.close_db_connection()


async def run_command(command: str) -> bool:
    manager = DatabaseManager()
    try:
        if command == "create-tables":
            await manager.create_tables()
        elif command == "drop-tables":
            await manager.drop_tables()
        elif command == "seed":
            await manager.seed()
        elif command == "check":
            return await manager.check()
        elif command == "migrate-images":
            return await manager.migrate_images()
        return True
    finally:
        await manager.close()


def main():
    """Main CLI interface for database management."""
    parser = argparse.ArgumentParser(description="Rental Listings API database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create-tables", help="Create all tables")
    subparsers.add_parser("drop-tables", help="Drop all tables (not allowed in production)")
    subparsers.add_parser("seed", help="Seed an empty database with demo data")
    subparsers.add_parser("check", help="Check database and object storage connectivity")
    subparsers.add_parser("migrate-images", help="Move legacy /uploads files into object storage")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    try:
        ok = asyncio.run(run_command(args.command))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
