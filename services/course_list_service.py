"""
Course List Service - The Five Course Operations

Implements myplan, list, find, add and remove against the UserStore and
the CourseCatalog. Every operation bootstraps the user first, and only
identifiers returned by catalog lookups are ever written to a list.

Outcomes are returned as OperationOutcome values; rendering them into
text is the ReplyFormatter's job.
"""

import asyncio
import logging
from typing import Any, Awaitable, List, Optional

from core.errors import CatalogUnavailable, CourseBotError
from core.models import (
    AddResult,
    CourseDescriptor,
    OperationOutcome,
    OutcomeKind,
    RemoveResult,
)
from .course_catalog import CourseCatalog
from .user_store import UserStore

logger = logging.getLogger(__name__)


class CourseListService:
    """Course list operations for one bot deployment."""

    def __init__(
        self,
        store: UserStore,
        catalog: CourseCatalog,
        catalog_timeout: float = 5.0,
        max_list_results: int = 10,
    ):
        self.store = store
        self.catalog = catalog
        self.catalog_timeout = catalog_timeout
        self.max_list_results = max_list_results

    async def _catalog_call(self, awaitable: Awaitable[Any]) -> Any:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.catalog_timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"❌ Catalog lookup timed out after {self.catalog_timeout}s")
            raise CatalogUnavailable("Course catalog lookup timed out") from e
        except CourseBotError:
            raise
        except Exception as e:
            logger.error(f"❌ Catalog lookup failed: {type(e).__name__}: {e}")
            raise CatalogUnavailable(str(e)) from e

    async def _resolve(self, department: str, number: str) -> Optional[CourseDescriptor]:
        course = await self._catalog_call(
            self.catalog.find_by_department_and_number(department, number)
        )
        if course is None:
            logger.info(f"🔎 error {department} {number}: not in catalog")
        else:
            logger.info(f"🔎 success {department} {number} -> SLN {course.sln}")
        return course

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def my_plan(self, user_id: str) -> OperationOutcome:
        """Show the user's saved classes in the order they were added."""
        await self.store.ensure_user(user_id)
        entries = await self.store.get_list(user_id)

        if not entries:
            return OperationOutcome(kind=OutcomeKind.PLAN_EMPTY)
        return OperationOutcome(kind=OutcomeKind.PLAN_LISTED, entries=tuple(entries))

    async def list_department(self, user_id: str, department: str) -> OperationOutcome:
        """List classes offered by a department."""
        await self.store.ensure_user(user_id)
        logger.info(f"📚 Finding all courses in {department} department")

        courses: List[CourseDescriptor] = await self._catalog_call(
            self.catalog.find_by_department(department)
        )
        if not courses:
            return OperationOutcome(
                kind=OutcomeKind.DEPARTMENT_NOT_FOUND, department=department
            )

        if len(courses) > self.max_list_results:
            logger.info(
                f"📚 {len(courses)} courses in {department}, showing {self.max_list_results}"
            )
        return OperationOutcome(
            kind=OutcomeKind.DEPARTMENT_LISTED,
            courses=tuple(courses[: self.max_list_results]),
            department=department,
        )

    async def find_course(self, user_id: str, department: str, number: str) -> OperationOutcome:
        """Show details for one class."""
        await self.store.ensure_user(user_id)
        course = await self._resolve(department, number)

        if course is None:
            return OperationOutcome(
                kind=OutcomeKind.COURSE_NOT_FOUND,
                department=department,
                course_number=number,
            )
        return OperationOutcome(
            kind=OutcomeKind.COURSE_FOUND,
            courses=(course,),
            department=department,
            course_number=number,
        )

    async def add_course(self, user_id: str, department: str, number: str) -> OperationOutcome:
        """Save a catalog class to the user's list."""
        await self.store.ensure_user(user_id)
        course = await self._resolve(department, number)

        if course is None:
            return OperationOutcome(
                kind=OutcomeKind.COURSE_NOT_FOUND,
                department=department,
                course_number=number,
            )

        result = await self.store.add_entry(user_id, course.sln)
        kind = OutcomeKind.ADDED if result is AddResult.ADDED else OutcomeKind.ADD_FAILED
        return OperationOutcome(
            kind=kind,
            courses=(course,),
            department=department,
            course_number=number,
        )

    async def remove_course(self, user_id: str, department: str, number: str) -> OperationOutcome:
        """
        Take a class off the user's list.

        The user is told the class is being removed whether or not it was
        on the list; only the log records which case happened.
        """
        await self.store.ensure_user(user_id)
        course = await self._resolve(department, number)

        if course is None:
            return OperationOutcome(
                kind=OutcomeKind.COURSE_NOT_FOUND,
                department=department,
                course_number=number,
            )

        result = await self.store.remove_entry(user_id, course.sln)
        if result is RemoveResult.REMOVED:
            logger.info(f"✅ remove {course.code} for {user_id}: success")
        else:
            logger.info(f"⚠️  remove {course.code} for {user_id}: fail (not on list)")

        return OperationOutcome(
            kind=OutcomeKind.REMOVE_ACKNOWLEDGED,
            courses=(course,),
            department=department,
            course_number=number,
        )
