#!/usr/bin/env python3
"""
Command line entrypoint: run the web API, seed or initialize the database.
"""
import logging
import sys
from typing import Optional

import click

from .config import DB_PATH, settings
from .db import ensure_db_exists
from .log import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.option('--debug', is_flag=True, help='Verbose logging to console and debug log')
def cli(debug: bool) -> None:
    """Personal activity time tracker."""
    # Without the flag, ACTIVITYLOG_DEBUG decides
    configure_logging(True if debug else None)


@cli.command('init-db')
def init_db() -> None:
    """Create the events table if it does not exist."""
    ensure_db_exists()
    click.echo(f"Database initialized at {DB_PATH}")


@cli.command()
def seed() -> None:
    """Replace all events with sample data."""
    from .seed import seed as seed_events
    count = seed_events()
    click.echo(f"Seeded {count} events into {DB_PATH}")


@cli.command()
@click.option('--host', default=None, help='Interface to bind (default from settings)')
@click.option('--port', type=int, default=None, help='Port to listen on (default from settings)')
def serve(host: Optional[str], port: Optional[int]) -> None:
    """Run the JSON API server."""
    from .web import create_app, find_free_port

    ensure_db_exists()
    host = host or settings.host
    port = port or find_free_port(settings.port, host)
    app = create_app()

    logger.info("DB path: %s", DB_PATH)
    logger.info("Starting server on http://%s:%d", host, port)
    try:
        app.run(host=host, port=port, debug=False, use_reloader=False)
    except Exception:
        logger.exception("Flask failed to start")
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
