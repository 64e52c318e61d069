"""
Course Catalog - Read-Only Course Reference Data

Resolves department prefixes and course numbers to CourseDescriptor
objects. Lookups are exact matches (department upper-cased, number
compared as a string); normalisation of user input happens before the
catalog is consulted.

The JSON catalog is loaded once and cached. Records use the field names
of the course documents in the hosted course database.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from core.errors import CatalogUnavailable
from core.models import CourseDescriptor

logger = logging.getLogger(__name__)


class CourseCatalog(ABC):
    """Lookup contract consumed by CourseListService."""

    @abstractmethod
    async def find_by_department(self, prefix: str) -> List[CourseDescriptor]:
        """All courses offered under a department prefix (possibly empty)."""

    @abstractmethod
    async def find_by_department_and_number(
        self, prefix: str, number: str
    ) -> Optional[CourseDescriptor]:
        """The course with this prefix and number, or None."""


class StaticCourseCatalog(CourseCatalog):
    """Catalog backed by an in-memory list of descriptors."""

    def __init__(self, courses: Iterable[CourseDescriptor] = ()):
        self._courses: List[CourseDescriptor] = list(courses)

    async def _courses_async(self) -> List[CourseDescriptor]:
        return self._courses

    async def find_by_department(self, prefix: str) -> List[CourseDescriptor]:
        key = prefix.strip().upper()
        courses = await self._courses_async()
        return [c for c in courses if c.prefix == key]

    async def find_by_department_and_number(
        self, prefix: str, number: str
    ) -> Optional[CourseDescriptor]:
        key = prefix.strip().upper()
        num = str(number).strip()
        courses = await self._courses_async()
        return next((c for c in courses if c.prefix == key and c.number == num), None)


class JsonCourseCatalog(StaticCourseCatalog):
    """
    Catalog loaded lazily from a JSON file of course documents.

    Load failures surface as CatalogUnavailable; callers bound the
    lookup time.

    Args:
        path: JSON file containing a list of course records
    """

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)
        self._loaded = False
        self._load_lock = asyncio.Lock()

    def _load_records(self) -> List[CourseDescriptor]:
        if not self.path.exists():
            raise FileNotFoundError(
                f"Course catalog file not found at {self.path}. "
                f"Set COURSES_FILE or create data/courses.json."
            )

        try:
            records = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {self.path.name}: {e}")

        if not isinstance(records, list):
            raise ValueError(f"{self.path.name} must contain a list of course objects")

        courses = []
        for idx, record in enumerate(records):
            if not isinstance(record, dict):
                raise ValueError(f"Course at index {idx} is not an object")
            try:
                courses.append(CourseDescriptor.from_record(record))
            except ValueError as e:
                raise ValueError(f"Course at index {idx}: {e}")

        return courses

    async def _courses_async(self) -> List[CourseDescriptor]:
        if self._loaded:
            return self._courses

        async with self._load_lock:
            if not self._loaded:
                try:
                    self._courses = await asyncio.to_thread(self._load_records)
                except (OSError, ValueError) as e:
                    logger.error(f"❌ Course catalog unavailable: {e}")
                    raise CatalogUnavailable(str(e)) from e
                self._loaded = True
                logger.info(f"✅ Loaded {len(self._courses)} courses from {self.path}")

        return self._courses

    def reload(self) -> None:
        """Drop the cache so the next lookup re-reads the file."""
        self._loaded = False
        self._courses = []


def catalog_from_records(records: Iterable[Dict[str, Any]]) -> StaticCourseCatalog:
    """Build an in-memory catalog from raw course documents."""
    return StaticCourseCatalog(CourseDescriptor.from_record(r) for r in records)
