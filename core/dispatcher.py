"""
Dispatcher - Intent to Reply

Entry point used by the chat service for one classified message:

    route -> course list operation -> reply text

Every exception raised by an operation is caught here and converted into
a user-visible reply, so a failure for one user never propagates into
the transport layer or affects other users.
"""

import logging
from typing import Any, Optional

from config import FAILURE_REPLY

from .errors import CatalogUnavailable, StoreUnavailable
from .models import ClassifiedIntent, OperationOutcome, OutcomeKind
from .router import IntentRouter, Route

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Runs the router, the course list service and the reply formatter.

    Args:
        service: CourseListService (or anything with the same coroutines)
        formatter: ReplyFormatter
        router: IntentRouter (a default one is created if omitted)
    """

    def __init__(self, service: Any, formatter: Any, router: Optional[IntentRouter] = None):
        self.service = service
        self.formatter = formatter
        self.router = router or IntentRouter()

    async def _run(self, route: Route, user_id: str, intent: ClassifiedIntent) -> OperationOutcome:
        if route is Route.MYPLAN:
            return await self.service.my_plan(user_id)
        if route is Route.LIST:
            return await self.service.list_department(user_id, intent.department)
        if route is Route.FIND:
            return await self.service.find_course(user_id, intent.department, intent.course_number)
        if route is Route.ADD:
            return await self.service.add_course(user_id, intent.department, intent.course_number)
        if route is Route.REMOVE:
            return await self.service.remove_course(user_id, intent.department, intent.course_number)
        if route is Route.HELP:
            return OperationOutcome(kind=OutcomeKind.HELP)
        if route is Route.INTRODUCTION:
            return OperationOutcome(kind=OutcomeKind.INTRODUCTION, detail=intent.introduction)
        return OperationOutcome(kind=OutcomeKind.CLARIFICATION)

    async def dispatch(self, user_id: str, intent: ClassifiedIntent) -> str:
        """
        Produce the reply text for one classified message.

        Args:
            user_id: Platform user id
            intent: Classified intent

        Returns:
            Reply text (never raises)
        """
        route = self.router.route(intent)
        function = getattr(intent.function, "value", intent.function)
        logger.info(f"🧭 {user_id}: {function} -> {route.value}")

        try:
            outcome = await self._run(route, user_id, intent)
        except (StoreUnavailable, CatalogUnavailable) as e:
            logger.error(f"❌ {route.value} for {user_id} failed: {e}")
            outcome = OperationOutcome(kind=OutcomeKind.FAILURE, detail=str(e))
        except Exception as e:
            logger.error(f"❌ Unexpected error in {route.value} for {user_id}: {e}", exc_info=True)
            outcome = OperationOutcome(kind=OutcomeKind.FAILURE, detail=str(e))

        try:
            return self.formatter.render(outcome)
        except Exception as e:
            logger.error(f"❌ Could not render {outcome.kind.value}: {e}", exc_info=True)
            return FAILURE_REPLY
