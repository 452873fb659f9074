"""Load and check the knowledge API's settings before anything else reads them.

ENV selects the environment. In dev, variables come from a .env.dev file in
the working directory; in staging and prod the deployment injects them and no
file is read. The database URL and the identity provider settings are
required everywhere; object storage (S3_BUCKET) is optional and only the file
routes need it.
"""

import logging
import os
import sys
from typing import Literal, Optional
from dotenv import load_dotenv

EnvironmentName = Literal["dev", "staging", "prod"]
ENVIRONMENTS: tuple[EnvironmentName, ...] = ("dev", "staging", "prod")

REQUIRED_ENV_VARS = [
    "DATABASE_URL",
    "IDENTITY_PROVIDER_URL",
    "JWT_AUDIENCE",
]

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"

_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def validate_required_env_vars() -> None:
    """Exit the process if any required variable is unset or empty."""
    missing = [var for var in REQUIRED_ENV_VARS if not os.getenv(var)]
    if missing:
        print(
            f"ERROR: knowledge-api is missing required settings: {', '.join(missing)}",
            file=sys.stderr,
        )
        print(
            "Set them in .env.dev for local development, or in the deployment.",
            file=sys.stderr,
        )
        sys.exit(1)


def get_current_environment() -> EnvironmentName:
    """Get the current environment (dev, staging, or prod)."""
    env = os.getenv("ENV", "dev")
    if env not in ENVIRONMENTS:
        raise ValueError(f"Invalid ENV value: {env}. Must be one of {', '.join(ENVIRONMENTS)}.")
    return env  # type: ignore[return-value]


def get_cors_origins() -> list[str]:
    """Get allowed CORS origins from the comma-separated CORS_ORIGINS variable."""
    raw = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_log_level() -> Optional[int]:
    """The level for the `knowledge` loggers from LOG_LEVEL, or None to leave it alone.

    Raises:
        ValueError: If LOG_LEVEL names no standard level.
    """
    raw = os.getenv("LOG_LEVEL")
    if raw is None:
        return None
    try:
        return _LOG_LEVELS[raw.upper()]
    except KeyError:
        raise ValueError(f"Invalid log level: {raw}")


_env = get_current_environment()
if _env == "dev":
    load_dotenv(".env.dev")
else:
    print(f"knowledge-api running in {_env} (settings from deployment)")

validate_required_env_vars()
