"""
Intent Router

Maps a classified intent to exactly one handler. Routing is a pure,
total function: it performs no I/O, never raises, and anything it does
not recognise goes to the clarification handler.

Precedence:
1. help slot
2. introduction slot (small talk)
3. function, guarded by its required parameters
"""

import logging
from enum import Enum
from typing import Dict, Tuple

from .models import ClassifiedIntent, IntentFunction

logger = logging.getLogger(__name__)


class Route(Enum):
    """Handlers the dispatcher can invoke."""

    MYPLAN = "myplan"
    LIST = "list"
    ADD = "add"
    FIND = "find"
    REMOVE = "remove"
    HELP = "help"
    INTRODUCTION = "introduction"
    UNKNOWN = "unknown"


# Function -> (route, needs department, needs course number)
_FUNCTION_ROUTES: Dict[IntentFunction, Tuple[Route, bool, bool]] = {
    IntentFunction.MYPLAN: (Route.MYPLAN, False, False),
    IntentFunction.LIST: (Route.LIST, True, False),
    IntentFunction.ADD: (Route.ADD, True, True),
    IntentFunction.FIND: (Route.FIND, True, True),
    IntentFunction.REMOVE: (Route.REMOVE, True, True),
}


class IntentRouter:
    """Selects the handler for a classified intent."""

    def route(self, intent: ClassifiedIntent) -> Route:
        """
        Resolve the handler for an intent.

        Args:
            intent: Classified intent (any function value is accepted)

        Returns:
            The selected Route; Route.UNKNOWN for unrecognised functions or
            when a required department/number is missing
        """
        if intent.help:
            return Route.HELP

        if intent.introduction:
            return Route.INTRODUCTION

        function = intent.function
        if not isinstance(function, IntentFunction):
            function = IntentFunction.parse(function)

        entry = _FUNCTION_ROUTES.get(function)
        if entry is None:
            return Route.UNKNOWN

        route, needs_department, needs_number = entry
        if needs_department and not intent.department:
            logger.info(f"🧭 {route.value} without department -> clarification")
            return Route.UNKNOWN
        if needs_number and not intent.course_number:
            logger.info(f"🧭 {route.value} without course number -> clarification")
            return Route.UNKNOWN

        return route
