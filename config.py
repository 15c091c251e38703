"""
Configuration module for the Hacktoberfest Showcase.
Handles environment variable loading, logging, and the fixed search parameters.
"""

import pathlib
import os
from dotenv import load_dotenv
import logging
import sys

def get_log_level(name=None):
    """Resolves a level name such as 'debug' to its number. Unknown names give INFO."""
    if name is None:
        name = os.getenv("LOG_LEVEL", "INFO")
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.INFO

# Configure logging to output to stderr (stdout is used by the MCP stdio transport)
logging.basicConfig(
    level=get_log_level(),
    handlers=[logging.StreamHandler(sys.stderr)],
    format="%(asctime)s [showcase] %(message)s"
)

logger = logging.getLogger(__name__)

# Load environment variables: project-level .env, then the working directory
script_dir = pathlib.Path(__file__).parent
load_dotenv(script_dir / ".env")
load_dotenv()

SEARCH_ENDPOINT = "https://api.github.com/search/repositories"

# Every query is scoped to this topic
TOPIC = "hacktoberfest"

# Repositories below this star count are never listed
MIN_STARS = 1000

PER_PAGE = 50
SORT_FIELD = "stars"

# Tags offered in the filter bar
TAGS = (
    "javascript",
    "css",
    "figma",
    "react",
    "node.js",
    "api",
    "database",
)

def get_auth_token():
    """Returns the bearer token from GITHUB_TOKEN. Absence is not validated."""
    return os.getenv("GITHUB_TOKEN", "")

def get_tags():
    """Returns the tags offered in the filter bar."""
    return list(TAGS)

def get_request_timeout():
    """Returns the HTTP timeout in seconds, or None for the transport default."""
    value = os.getenv("REQUEST_TIMEOUT")
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError:
        timeout = None
    if timeout is None or not timeout > 0:
        logger.warning(f"Ignoring invalid REQUEST_TIMEOUT: {value!r}")
        return None
    return timeout
