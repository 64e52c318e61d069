"""
Core Bot Logic Module

This module contains the brain of the course finder bot:
- Data model and error taxonomy shared by every layer
- Intent classification: Understands what the user wants
- Intent routing: Picks exactly one handler per message
- Dispatching: Runs the handler and converts failures into replies
"""

from .errors import (
    CourseBotError,
    ClassificationError,
    StoreUnavailable,
    CatalogUnavailable,
)

from .models import (
    IntentFunction,
    ClassifiedIntent,
    MessageEvent,
    CourseDescriptor,
    EnsureResult,
    AddResult,
    RemoveResult,
    OutcomeKind,
    OperationOutcome,
)

from .router import (
    IntentRouter,
    Route,
)

from .classifier import (
    GeminiIntentClassifier,
    KeywordIntentClassifier,
    build_classifier,
    normalize_intent,
)

from .dispatcher import Dispatcher

__all__ = [
    # Errors
    "CourseBotError",
    "ClassificationError",
    "StoreUnavailable",
    "CatalogUnavailable",

    # Models
    "IntentFunction",
    "ClassifiedIntent",
    "MessageEvent",
    "CourseDescriptor",
    "EnsureResult",
    "AddResult",
    "RemoveResult",
    "OutcomeKind",
    "OperationOutcome",

    # Router
    "IntentRouter",
    "Route",

    # Classifier
    "GeminiIntentClassifier",
    "KeywordIntentClassifier",
    "build_classifier",
    "normalize_intent",

    # Dispatcher
    "Dispatcher",
]
