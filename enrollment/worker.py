"""Run the background job worker until interrupted.

Usage:
    python -m enrollment.worker
"""

import asyncio
import signal

import structlog

from enrollment.config import configure_logging
from enrollment.core import container
from enrollment.database import dispose_engine, initialize_database

logger = structlog.get_logger(__name__)


async def main() -> None:
    """Drain the job queue, polling for new jobs, until SIGINT or SIGTERM."""
    settings = container.settings()
    configure_logging(settings.ENVIRONMENT)
    initialize_database(settings)

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    logger.info("worker_starting", project=settings.PROJECT_NAME, version=settings.VERSION)
    try:
        await container.job_worker().run(stop)
    finally:
        dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
