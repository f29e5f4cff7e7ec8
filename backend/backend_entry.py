"""
Process entrypoint: validate required configuration, then serve the API with uvicorn.

Run from the backend dir:
  python backend_entry.py                      -> start the server (HOST/PORT env or flags)
  python backend_entry.py --ops create-schema  -> create database tables and exit
  python backend_entry.py --ops seed-demo --mentor-id user_123 -> add demo sessions and exit

Exits with status 1 when a required environment variable is missing.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

# Ensure backend dir is on path so "from main import app" works when run as a script
_backend_dir = Path(__file__).resolve().parent
if str(_backend_dir) not in sys.path:
    sys.path.insert(0, str(_backend_dir))

from core.config import Settings, get_settings  # noqa: E402
from core.logging import setup_logging  # noqa: E402

logger = logging.getLogger("backend_entry")


def _check_required(settings: Settings) -> bool:
    missing = settings.missing_required()
    for name in missing:
        logger.error("FATAL: missing required environment variable %s", name)
    return not missing


def _run_create_schema(settings: Settings) -> int:
    async def _run() -> None:
        from core.database import dispose_database, init_database

        await init_database(settings.database_url, create_schema=True)
        await dispose_database()

    asyncio.run(_run())
    logger.info("Schema created at %s", settings.database_url)
    return 0


def _run_seed_demo(settings: Settings, mentor_id: str) -> int:
    async def _run() -> int:
        from core.database import dispose_database, get_database_manager, init_database
        from services.session_service import ensure_demo_sessions

        await init_database(settings.database_url, create_schema=True)
        try:
            async with get_database_manager().session() as session:
                return await ensure_demo_sessions(session, mentor_id, datetime.now(timezone.utc))
        finally:
            await dispose_database()

    created = asyncio.run(_run())
    logger.info("Seeded %d demo sessions for %s", created, mentor_id)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Backend entry: server or ops subcommand")
    parser.add_argument("--ops", choices=["create-schema", "seed-demo"], help="Run ops and exit (no server)")
    parser.add_argument("--mentor-id", help="Mentor id for --ops seed-demo")
    parser.add_argument("--host", default=os.environ.get("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8080")))
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings)

    if args.ops == "create-schema":
        return _run_create_schema(settings)
    if args.ops == "seed-demo":
        if not args.mentor_id:
            parser.error("--mentor-id is required with --ops seed-demo")
        return _run_seed_demo(settings, args.mentor_id)

    if not _check_required(settings):
        return 1

    import uvicorn

    from main import app

    logger.info("Starting %s on %s:%s (env=%s)", settings.app_name, args.host, args.port, settings.env)
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
