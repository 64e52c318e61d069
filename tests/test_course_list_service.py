"""
Unit Tests for Course List Service

Tests the five operations against an in-memory store and catalog.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from core.errors import CatalogUnavailable
from core.models import OutcomeKind
from services.course_catalog import CourseCatalog, catalog_from_records
from services.course_list_service import CourseListService
from services.user_store import InMemoryBackend, UserStore
from tests import SAMPLE_COURSE_RECORDS


@pytest.fixture
def store():
    return UserStore(InMemoryBackend())


@pytest.fixture
def service(store):
    """Fixture providing a CourseListService over sample data."""
    return CourseListService(store, catalog_from_records(SAMPLE_COURSE_RECORDS))


class TestMyPlan:
    """Test the myplan operation."""

    @pytest.mark.asyncio
    async def test_new_user_has_empty_plan(self, service, store):
        outcome = await service.my_plan("u1")

        assert outcome.kind is OutcomeKind.PLAN_EMPTY
        assert await store.get_list("u1") == []

    @pytest.mark.asyncio
    async def test_plan_lists_entries_in_order(self, service):
        await service.add_course("u1", "MATH", "124")
        await service.add_course("u1", "CSE", "344")

        outcome = await service.my_plan("u1")

        assert outcome.kind is OutcomeKind.PLAN_LISTED
        assert outcome.entries == ("16102", "12688")


class TestListDepartment:
    """Test the list operation."""

    @pytest.mark.asyncio
    async def test_lists_matches(self, service):
        outcome = await service.list_department("u1", "CSE")

        assert outcome.kind is OutcomeKind.DEPARTMENT_LISTED
        assert [c.number for c in outcome.courses] == ["344", "142"]

    @pytest.mark.asyncio
    async def test_unknown_department(self, service):
        outcome = await service.list_department("u1", "BIOL")
        assert outcome.kind is OutcomeKind.DEPARTMENT_NOT_FOUND

    @pytest.mark.asyncio
    async def test_listing_is_capped(self, store):
        service = CourseListService(
            store, catalog_from_records(SAMPLE_COURSE_RECORDS), max_list_results=1
        )
        outcome = await service.list_department("u1", "CSE")
        assert len(outcome.courses) == 1


class TestFindCourse:
    """Test the find operation."""

    @pytest.mark.asyncio
    async def test_found(self, service):
        outcome = await service.find_course("u1", "CSE", "142")

        assert outcome.kind is OutcomeKind.COURSE_FOUND
        assert outcome.courses[0].sln == "12501"

    @pytest.mark.asyncio
    async def test_not_found(self, service):
        outcome = await service.find_course("u1", "CSE", "999")
        assert outcome.kind is OutcomeKind.COURSE_NOT_FOUND


class TestAddCourse:
    """Test the add operation."""

    @pytest.mark.asyncio
    async def test_add_stores_catalog_sln(self, service, store):
        outcome = await service.add_course("u1", "CSE", "344")

        assert outcome.kind is OutcomeKind.ADDED
        assert await store.get_list("u1") == ["12688"]

    @pytest.mark.asyncio
    async def test_duplicate_add_fails(self, service, store):
        await service.add_course("u1", "CSE", "344")
        outcome = await service.add_course("u1", "CSE", "344")

        assert outcome.kind is OutcomeKind.ADD_FAILED
        assert await store.get_list("u1") == ["12688"]

    @pytest.mark.asyncio
    async def test_unknown_course_is_not_stored(self, service, store):
        outcome = await service.add_course("u1", "CSE", "999")

        assert outcome.kind is OutcomeKind.COURSE_NOT_FOUND
        assert await store.get_list("u1") == []


class TestRemoveCourse:
    """Test the remove operation."""

    @pytest.mark.asyncio
    async def test_remove_saved_course(self, service, store):
        await service.add_course("u1", "CSE", "344")

        outcome = await service.remove_course("u1", "CSE", "344")

        assert outcome.kind is OutcomeKind.REMOVE_ACKNOWLEDGED
        assert await store.get_list("u1") == []

    @pytest.mark.asyncio
    async def test_remove_never_added_still_acknowledged(self, service, store):
        await service.add_course("u1", "MATH", "124")

        outcome = await service.remove_course("u1", "CSE", "344")

        assert outcome.kind is OutcomeKind.REMOVE_ACKNOWLEDGED
        assert await store.get_list("u1") == ["16102"]

    @pytest.mark.asyncio
    async def test_remove_unknown_course(self, service):
        outcome = await service.remove_course("u1", "CSE", "999")
        assert outcome.kind is OutcomeKind.COURSE_NOT_FOUND


class TestBootstrapAndFailures:
    """Every operation bootstraps the user; catalog failures surface."""

    @pytest.mark.asyncio
    async def test_every_operation_ensures_user(self):
        store = Mock()
        store.ensure_user = AsyncMock()
        store.get_list = AsyncMock(return_value=[])
        store.add_entry = AsyncMock()
        store.remove_entry = AsyncMock()
        service = CourseListService(store, catalog_from_records(SAMPLE_COURSE_RECORDS))

        await service.my_plan("u1")
        await service.list_department("u1", "CSE")
        await service.find_course("u1", "CSE", "142")
        await service.add_course("u1", "CSE", "999")
        await service.remove_course("u1", "CSE", "999")

        assert store.ensure_user.await_count == 5

    @pytest.mark.asyncio
    async def test_slow_catalog_raises_catalog_unavailable(self, store):
        class SlowCatalog(CourseCatalog):
            async def find_by_department(self, prefix):
                await asyncio.sleep(10)

            async def find_by_department_and_number(self, prefix, number):
                await asyncio.sleep(10)

        service = CourseListService(store, SlowCatalog(), catalog_timeout=0.05)

        with pytest.raises(CatalogUnavailable):
            await service.find_course("u1", "CSE", "142")

    @pytest.mark.asyncio
    async def test_catalog_error_raises_catalog_unavailable(self, store):
        catalog = Mock()
        catalog.find_by_department = AsyncMock(side_effect=ConnectionError("mongo down"))
        service = CourseListService(store, catalog)

        with pytest.raises(CatalogUnavailable):
            await service.list_department("u1", "CSE")
