"""
Configuration module for the course finder bot.

This module provides centralized configuration management including:
- Application settings (paths, tokens, timeouts)
- Classification prompt and output schema
- User-facing reply texts

All configurable values should be imported from this module to ensure
consistency across the application.
"""

from .settings import (
    # Paths
    BASE_DIR,
    DATA_DIR,
    DEFAULT_COURSES_FILE,
    DEFAULT_USER_STORE_FILE,

    # Constants
    DEFAULT_SEND_API_URL,
    EMPTY_LIST_SENTINEL,
    USER_COURSES_KEY,

    # Settings
    Settings,
    load_settings,
)

from .prompts import (
    # Classification
    CLASSIFIER_PROMPT,
    INTENT_SCHEMA,

    # Replies
    PLAN_EMPTY_REPLY,
    PLAN_HEADER,
    DEPARTMENT_NOT_FOUND_REPLY,
    DEPARTMENT_HEADER,
    DEPARTMENT_ENTRY,
    COURSE_NOT_FOUND_REPLY,
    COURSE_DETAIL,
    ADDED_REPLY,
    ADD_FAILED_REPLY,
    REMOVE_ACK_REPLY,
    CLARIFICATION_REPLY,
    HELP_REPLY,
    INTRODUCTION_REPLIES,
    ATTACHMENT_REPLY,
    QUICK_REPLY_REPLY,
    FAILURE_REPLY,

    # Utilities
    format_prompt,
)

__all__ = [
    # Settings
    "BASE_DIR",
    "DATA_DIR",
    "DEFAULT_COURSES_FILE",
    "DEFAULT_USER_STORE_FILE",
    "DEFAULT_SEND_API_URL",
    "EMPTY_LIST_SENTINEL",
    "USER_COURSES_KEY",
    "Settings",
    "load_settings",

    # Prompts
    "CLASSIFIER_PROMPT",
    "INTENT_SCHEMA",
    "PLAN_EMPTY_REPLY",
    "PLAN_HEADER",
    "DEPARTMENT_NOT_FOUND_REPLY",
    "DEPARTMENT_HEADER",
    "DEPARTMENT_ENTRY",
    "COURSE_NOT_FOUND_REPLY",
    "COURSE_DETAIL",
    "ADDED_REPLY",
    "ADD_FAILED_REPLY",
    "REMOVE_ACK_REPLY",
    "CLARIFICATION_REPLY",
    "HELP_REPLY",
    "INTRODUCTION_REPLIES",
    "ATTACHMENT_REPLY",
    "QUICK_REPLY_REPLY",
    "FAILURE_REPLY",
    "format_prompt",
]
