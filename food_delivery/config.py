"""
Environment configuration shared by the three services.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory.
"""
import os
from dotenv import load_dotenv

load_dotenv()

HOST = os.getenv("HOST", "0.0.0.0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "info").lower()

USER_SERVICE_URL = os.getenv("USER_SERVICE_URL", "http://localhost:3001").rstrip("/")
ORDER_SERVICE_URL = os.getenv("ORDER_SERVICE_URL", "http://localhost:3002").rstrip("/")

# Seconds allowed for a single outbound HTTP call
UPSTREAM_TIMEOUT = float(os.getenv("UPSTREAM_TIMEOUT", "5.0"))
# Seconds SQLite waits on a locked database file
DB_TIMEOUT = float(os.getenv("DB_TIMEOUT", "5.0"))

GATEWAY_PROPAGATE_ALL_STATUS = os.getenv("GATEWAY_PROPAGATE_ALL_STATUS", "false").lower() in ("1", "true", "yes")


def get_port(default: int) -> int:
    """Listening port for the current process (``PORT``), with a per-service default."""
    return int(os.getenv("PORT", default))


def get_db_path(default: str) -> str:
    """SQLite file for the current process (``DB_PATH``), with a per-service default."""
    return os.getenv("DB_PATH", default)
