"""
CLI entry point for EventSpotter.

Usage:
    # Serve the API
    python -m eventspotter.cli serve --port 8000

    # Create any missing database tables
    python -m eventspotter.cli create-tables
"""

import argparse
import asyncio
import logging

from eventspotter.core.config import settings
from eventspotter.infrastructure.database import Database
from eventspotter.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the API under uvicorn."""
    import uvicorn

    logger.info("Starting %s at http://%s:%d", settings.project_name, args.host, args.port)
    uvicorn.run("eventspotter.main:app", host=args.host, port=args.port, reload=args.reload)


async def _create_tables() -> None:
    database = Database(settings.database_url, echo=settings.database_echo)
    await database.connect()
    try:
        await database.create_all()
    finally:
        await database.disconnect()


def cmd_create_tables(args: argparse.Namespace) -> None:
    """Create the EventSpotter tables in the configured database."""
    asyncio.run(_create_tables())


def main() -> None:
    configure_logging(level=settings.log_level, sql_echo=settings.database_echo)

    parser = argparse.ArgumentParser(description="EventSpotter CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Serve the HTTP API")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve_parser.set_defaults(func=cmd_serve)

    tables_parser = subparsers.add_parser("create-tables", help="Create missing database tables")
    tables_parser.set_defaults(func=cmd_create_tables)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
