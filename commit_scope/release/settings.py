"""Environment settings for the release integration."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

MAX_THREADS_ENV_VAR = "SRM_MAX_THREADS"
DEFAULT_MAX_THREADS = 500


def load_env_file() -> None:
    """Load environment variables from .env file."""
    # Try to find .env file in project root (parent of commit_scope package)
    project_root = Path(__file__).parent.parent.parent
    env_file = project_root / ".env"
    if env_file.exists():
        load_dotenv(env_file)
    else:
        # Fallback: try current directory
        load_dotenv()


def max_threads_from_env(env: Mapping[str, str] | None = None) -> int:
    """
    Read the maximum number of concurrent file fetches.

    Args:
        env: Environment to read from. Defaults to os.environ

    Returns:
        Configured value, or DEFAULT_MAX_THREADS when unset or invalid
    """
    raw = (os.environ if env is None else env).get(MAX_THREADS_ENV_VAR, "").strip()
    if not raw:
        return DEFAULT_MAX_THREADS

    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        logger.warning(
            "Ignoring invalid %s=%r, using %s", MAX_THREADS_ENV_VAR, raw, DEFAULT_MAX_THREADS
        )
        return DEFAULT_MAX_THREADS
    return value
