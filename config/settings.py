"""
Application settings and configuration values.

This module centralizes all configuration values including:
- File paths
- Messenger Send API credentials
- Gemini classification parameters
- Timeouts for every external collaborator
- Langfuse observability keys

Environment variables are loaded via python-dotenv. Values are collected
into a frozen Settings object that is passed into component constructors
at startup, so nothing below reads the environment after that point.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# ============================================================================
# PATHS
# ============================================================================

BASE_DIR = Path(__file__).parent.parent
DATA_DIR = BASE_DIR / "data"
DEFAULT_COURSES_FILE = DATA_DIR / "courses.json"
DEFAULT_USER_STORE_FILE = DATA_DIR / "user_courses.json"

# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_SEND_API_URL = "https://graph.facebook.com/v2.6/me/messages"

# Placeholder stored in a freshly created course list
EMPTY_LIST_SENTINEL = "null"

# Collection name the user store writes under
USER_COURSES_KEY = "UserCourses"

SUPPORTED_STORE_BACKENDS = ("json", "memory")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_path(name: str, default: Path) -> Path:
    value = os.getenv(name)
    if not value:
        return default
    path = Path(value)
    return path if path.is_absolute() else BASE_DIR / path


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration for the bot.

    Attributes:
        page_access_token: Messenger page token used by the Send API
        send_api_url: Send API endpoint
        google_api_key: Enables Gemini classification when present
        gemini_model: Model used for intent classification
        temperature: Sampling temperature for classification
        max_retries: Retry attempts for retryable Gemini errors
        retry_delay: Initial backoff delay (seconds)
        store_timeout: Bound on a single user store call (seconds)
        catalog_timeout: Bound on a single catalog lookup (seconds)
        classifier_timeout: Bound on a classification call (seconds)
        send_timeout: Bound on a Send API call (seconds)
        courses_file: JSON file with the course catalog
        user_store_file: JSON file backing user course lists
        user_store_backend: "json" or "memory"
        max_list_results: Cap on courses shown for a department listing
        log_level: Root logging level name
    """
    page_access_token: Optional[str] = None
    send_api_url: str = DEFAULT_SEND_API_URL
    google_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    temperature: float = 0.2
    max_retries: int = 3
    retry_delay: float = 1.0
    store_timeout: float = 5.0
    catalog_timeout: float = 5.0
    classifier_timeout: float = 15.0
    send_timeout: float = 10.0
    courses_file: Path = DEFAULT_COURSES_FILE
    user_store_file: Path = DEFAULT_USER_STORE_FILE
    user_store_backend: str = "json"
    max_list_results: int = 10
    log_level: str = "INFO"
    langfuse_public_key: Optional[str] = None
    langfuse_secret_key: Optional[str] = None
    langfuse_host: str = "https://cloud.langfuse.com"
    langfuse_enabled: bool = False

    @property
    def use_gemini(self) -> bool:
        return bool(self.google_api_key)

    @property
    def tracing_enabled(self) -> bool:
        return bool(
            self.langfuse_enabled
            and self.langfuse_public_key
            and self.langfuse_secret_key
        )

    def missing_messenger_values(self) -> List[str]:
        """Names of settings a live Messenger deployment cannot run without."""
        missing = []
        if not self.page_access_token:
            missing.append("MESSENGER_PAGE_ACCESS_TOKEN")
        if not self.send_api_url:
            missing.append("MESSENGER_SEND_API_URL")
        return missing


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Build Settings from the environment (and .env file, if present).

    Args:
        env_file: Optional explicit .env path (defaults to dotenv discovery)

    Returns:
        Settings instance

    Raises:
        ValueError: If a numeric value or the store backend is invalid
    """
    load_dotenv(env_file)

    backend = os.getenv("USER_STORE_BACKEND", "json").strip().lower()
    if backend not in SUPPORTED_STORE_BACKENDS:
        raise ValueError(
            f"USER_STORE_BACKEND must be one of {SUPPORTED_STORE_BACKENDS}, got {backend!r}"
        )

    return Settings(
        page_access_token=os.getenv("MESSENGER_PAGE_ACCESS_TOKEN"),
        send_api_url=os.getenv("MESSENGER_SEND_API_URL", DEFAULT_SEND_API_URL),
        google_api_key=os.getenv("GOOGLE_API_KEY"),
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        temperature=float(os.getenv("TEMPERATURE", "0.2")),
        max_retries=int(os.getenv("MAX_RETRIES", "3")),
        retry_delay=float(os.getenv("RETRY_DELAY", "1.0")),
        store_timeout=float(os.getenv("STORE_TIMEOUT", "5")),
        catalog_timeout=float(os.getenv("CATALOG_TIMEOUT", "5")),
        classifier_timeout=float(os.getenv("CLASSIFIER_TIMEOUT", "15")),
        send_timeout=float(os.getenv("SEND_TIMEOUT", "10")),
        courses_file=_env_path("COURSES_FILE", DEFAULT_COURSES_FILE),
        user_store_file=_env_path("USER_STORE_FILE", DEFAULT_USER_STORE_FILE),
        user_store_backend=backend,
        max_list_results=int(os.getenv("MAX_LIST_RESULTS", "10")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        langfuse_public_key=os.getenv("LANGFUSE_PUBLIC_KEY"),
        langfuse_secret_key=os.getenv("LANGFUSE_SECRET_KEY"),
        langfuse_host=os.getenv("LANGFUSE_HOST", "https://cloud.langfuse.com"),
        langfuse_enabled=_env_bool("LANGFUSE_ENABLED", "false"),
    )
