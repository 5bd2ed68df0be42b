"""Centralized environment configuration for the blog backend"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).parent.parent
load_dotenv(ROOT_DIR / '.env')

# Logging
LOG_LEVEL: str = os.environ.get('LOG_LEVEL', 'INFO').upper()

# MongoDB: only used when DATABASE_URL has no database path
DB_NAME: Optional[str] = os.environ.get('DB_NAME') or None


def get_database_url() -> str:
    """Connection string from DATABASE_URL, read at call time.

    Not validated here: a missing (empty) or malformed value is handed to the
    driver as-is, which rejects it.
    """
    return os.environ.get('DATABASE_URL', '')
