#!/usr/bin/env python3
"""
App directory management commands

Usage:
    python manage.py init-db        # Create tables directly (local development)
    python manage.py drop-db        # Drop all tables
    python manage.py list-apps [--pending]
    python manage.py list-reports

Use migrate.py (Alembic) to manage the schema of shared databases.
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

load_dotenv(override=True)
from app.container import ApplicationContainer  # noqa: E402
from app.database import db_manager  # noqa: E402
from app.db import fastapi_sqlalchemy_context  # noqa: E402
from app.models.app import category_label  # noqa: E402
from logging_config import setup_logging  # noqa: E402

setup_logging()

logger = logging.getLogger(__name__)

# Global container instance
container = ApplicationContainer()


async def init_db() -> None:
    db_manager.init_db()
    try:
        await db_manager.create_tables()
    finally:
        await db_manager.close()


async def drop_db() -> None:
    db_manager.init_db()
    try:
        await db_manager.drop_tables()
    finally:
        await db_manager.close()


async def list_apps(pending_only: bool = False) -> None:
    """List apps in the database."""
    async with fastapi_sqlalchemy_context():
        app_controller = container.controllers.app_controller()
        apps = await app_controller.list_apps(include_unapproved=True)
        if pending_only:
            apps = [app for app in apps if not app.approved]

        if not apps:
            logger.info("No apps found in database.")
            return

        logger.info(f"Found {len(apps)} apps:")
        logger.info("-" * 80)
        for i, app in enumerate(apps, 1):
            status = "approved" if app.approved else "pending"
            featured = "*" if app.featured else " "
            category = category_label(app.category)
            logger.info(f"{i:3d}. {featured} {app.name:30} {category:15} {status:9} {app.clicks:6d} {app.id}")
        logger.info("-" * 80)


async def list_reports() -> None:
    async with fastapi_sqlalchemy_context():
        report_controller = container.controllers.report_controller()
        reports = await report_controller.list_reports()

        if not reports:
            logger.info("No reports found in database.")
            return

        logger.info(f"Found {len(reports)} reports:")
        for report in reports:
            logger.info(f"{report.app_name:30} {', '.join(report.reasons)} ({report.app_id})")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="App directory management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("init-db", help="Create all tables")
    subparsers.add_parser("drop-db", help="Drop all tables")
    list_apps_parser = subparsers.add_parser("list-apps", help="List apps")
    list_apps_parser.add_argument("--pending", action="store_true", help="Only list apps awaiting approval")
    subparsers.add_parser("list-reports", help="List reports")

    args = parser.parse_args()

    try:
        if args.command == "init-db":
            asyncio.run(init_db())
        elif args.command == "drop-db":
            asyncio.run(drop_db())
        elif args.command == "list-apps":
            asyncio.run(list_apps(pending_only=args.pending))
        elif args.command == "list-reports":
            asyncio.run(list_reports())

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception:
        logger.exception("Command failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
