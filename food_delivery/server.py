"""
Process launcher shared by the three services.

Configures logging and runs a FastAPI application under uvicorn. Uvicorn
handles SIGINT/SIGTERM by draining open connections and running the app's
lifespan shutdown, which is where each service closes its store.
"""
import logging
from datetime import datetime, timezone

import uvicorn

from . import config


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def serve(app_path: str, default_port: int) -> None:
    """
    Run an application until it is interrupted.

    Args:
        app_path: Import string of the ASGI app (e.g. "food_delivery.users.main:app")
        default_port: Port used when PORT is not set

    Uvicorn exits with a non-zero status when the listener cannot bind.
    """
    configure_logging()
    uvicorn.run(
        app_path,
        host=config.HOST,
        port=config.get_port(default_port),
        log_level=config.LOG_LEVEL,
    )


def iso_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
