"""
Business Logic Services Module

This module contains the business logic of the course finder bot:
- User store: Per-user saved course lists
- Course catalog: Read-only course reference data
- Course list service: myplan, list, find, add and remove
- Reply formatter: Outcome -> reply text
- Chat service: Main coordinator for inbound messages
"""

from .user_store import (
    KeyValueBackend,
    InMemoryBackend,
    JsonFileBackend,
    UserStore,
)

from .course_catalog import (
    CourseCatalog,
    StaticCourseCatalog,
    JsonCourseCatalog,
    catalog_from_records,
)

from .course_list_service import CourseListService

from .reply_formatter import (
    ReplyFormatter,
    format_time,
)

from .chat_service import (
    ChatService,
    ChatResponse,
    build_chat_service,
)

__all__ = [
    # User Store
    "KeyValueBackend",
    "InMemoryBackend",
    "JsonFileBackend",
    "UserStore",

    # Course Catalog
    "CourseCatalog",
    "StaticCourseCatalog",
    "JsonCourseCatalog",
    "catalog_from_records",

    # Course List Service
    "CourseListService",

    # Reply Formatter
    "ReplyFormatter",
    "format_time",

    # Chat Service
    "ChatService",
    "ChatResponse",
    "build_chat_service",
]
