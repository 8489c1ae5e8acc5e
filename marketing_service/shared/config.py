"""Environment configuration for the website backend."""

import os
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file (for local development)
load_dotenv()

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5000"
DEFAULT_PORT = 5000


def get_database_url() -> Optional[str]:
    """
    DATABASE_URL selects the SQL store when set (e.g. from Heroku).
    Without it submissions are kept in memory.
    """
    return os.environ.get("DATABASE_URL") or None


def get_cors_origins() -> List[str]:
    raw = os.environ.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_port() -> int:
    return int(os.environ.get("PORT", DEFAULT_PORT))
