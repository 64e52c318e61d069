"""
Central data model definitions shared by the pipeline.

Inbound payloads are validated into these frozen dataclasses at the
boundary, so everything past ChatService works with a strict contract
instead of loosely-typed dictionaries.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


# ============================================================================
# INTENTS
# ============================================================================

class IntentFunction(Enum):
    """Operation requested by the user."""

    MYPLAN = "myplan"
    LIST = "list"
    ADD = "add"
    FIND = "find"
    REMOVE = "remove"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "IntentFunction":
        """Map any raw classifier value to a function, defaulting to UNKNOWN."""
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class ClassifiedIntent:
    """
    Structured classification of one message.

    Attributes:
        function: Requested operation
        department: Department prefix (e.g. "CSE"), if mentioned
        course_number: Course number (e.g. "344"), if mentioned
        introduction: Small-talk slot ("intro", "nice", "how")
        help: Set when the user asked what the bot can do
    """
    function: IntentFunction = IntentFunction.UNKNOWN
    department: Optional[str] = None
    course_number: Optional[str] = None
    introduction: Optional[str] = None
    help: Optional[str] = None

    @classmethod
    def unknown(cls) -> "ClassifiedIntent":
        return cls()

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ClassifiedIntent":
        """
        Build an intent from a classifier response.

        Accepts both the snake_case keys produced by our schema and the
        capitalised parameter names used by the hosted NLU agent
        ("Functions", "Departments", "Introduction").

        Raises:
            ValueError: If payload is not a mapping
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Intent payload must be an object, got {type(payload).__name__}")

        def pick(*keys: str) -> Optional[str]:
            for key in keys:
                value = _clean(payload.get(key))
                if value is not None:
                    return value
            return None

        return cls(
            function=IntentFunction.parse(pick("function", "Functions")),
            department=pick("department", "Departments", "Department"),
            course_number=pick("number", "course_number"),
            introduction=pick("introduction", "Introduction"),
            help=pick("help"),
        )


# ============================================================================
# INBOUND EVENTS
# ============================================================================

@dataclass(frozen=True)
class MessageEvent:
    """
    A single inbound message, already stripped of the transport envelope.

    Attributes:
        sender_id: Platform-assigned user id
        text: Message text (may be empty for attachment-only messages)
        has_attachments: Whether the message carried attachments
        is_echo: Echo of a message the page itself sent
        quick_reply_payload: Payload of a tapped quick reply
    """
    sender_id: str
    text: str = ""
    has_attachments: bool = False
    is_echo: bool = False
    quick_reply_payload: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "MessageEvent":
        """
        Validate a Messenger messaging event.

        Expected shape:
            {"sender": {"id": "..."}, "message": {"text": "...", ...}}

        Raises:
            ValueError: If the sender id or message object is missing
        """
        if not isinstance(payload, dict):
            raise ValueError("Messaging event must be an object")

        sender = payload.get("sender")
        sender_id = _clean(sender.get("id")) if isinstance(sender, dict) else None
        if sender_id is None:
            raise ValueError("Messaging event has no sender id")

        message = payload.get("message")
        if not isinstance(message, dict):
            raise ValueError("Messaging event has no message object")

        text = message.get("text") or ""
        if not isinstance(text, str):
            raise ValueError("Message text must be a string")

        quick_reply = message.get("quick_reply")
        quick_reply_payload = None
        if isinstance(quick_reply, dict):
            quick_reply_payload = _clean(quick_reply.get("payload"))

        return cls(
            sender_id=sender_id,
            text=text.strip(),
            has_attachments=bool(message.get("attachments")),
            is_echo=bool(message.get("is_echo")),
            quick_reply_payload=quick_reply_payload,
        )


# ============================================================================
# CATALOG
# ============================================================================

@dataclass(frozen=True)
class CourseDescriptor:
    """
    One course offering as stored in the catalog.

    The sln is the identifier written to user course lists.
    """
    sln: str
    prefix: str
    number: str
    title: str
    days: str = ""
    start: Optional[int] = None
    end: Optional[int] = None
    instructor: str = ""
    is_open: bool = False
    general_education: str = ""
    is_writing: bool = False
    is_section: bool = False
    link: str = ""

    @property
    def code(self) -> str:
        return f"{self.prefix} {self.number}"

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CourseDescriptor":
        """
        Build a descriptor from a catalog document.

        Raises:
            ValueError: If an identifying field is missing
        """
        required = ["sln", "prefix", "number", "nameOfclassName"]
        missing = [f for f in required if _clean(record.get(f)) is None]
        if missing:
            raise ValueError(f"Course record is missing required fields: {missing}")

        return cls(
            sln=_clean(record["sln"]),
            prefix=_clean(record["prefix"]).upper(),
            number=_clean(record["number"]),
            title=_clean(record["nameOfclassName"]),
            days=_clean(record.get("days")) or "",
            start=_to_time(record.get("start")),
            end=_to_time(record.get("end")),
            instructor=_clean(record.get("instructor")) or "",
            is_open=bool(record.get("isOpen", False)),
            general_education=_clean(record.get("generalEd")) or "",
            is_writing=bool(record.get("isWriting", False)),
            is_section=bool(record.get("isSection", False)),
            link=_clean(record.get("link")) or "",
        )


def _to_time(value: Any) -> Optional[int]:
    """Times are stored as HHMM integers (1130 == 11:30)."""
    if value is None or value == "":
        return None
    try:
        return int(str(value).replace(":", ""))
    except ValueError:
        return None


# ============================================================================
# STORE RESULTS
# ============================================================================

class EnsureResult(Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


class AddResult(Enum):
    ADDED = "added"
    ALREADY_PRESENT = "already_present"


class RemoveResult(Enum):
    REMOVED = "removed"
    NOT_PRESENT = "not_present"


# ============================================================================
# OPERATION OUTCOMES
# ============================================================================

class OutcomeKind(Enum):
    """Every reply the bot can render."""

    PLAN_EMPTY = "plan_empty"
    PLAN_LISTED = "plan_listed"
    DEPARTMENT_NOT_FOUND = "department_not_found"
    DEPARTMENT_LISTED = "department_listed"
    COURSE_NOT_FOUND = "course_not_found"
    COURSE_FOUND = "course_found"
    ADDED = "added"
    ADD_FAILED = "add_failed"
    REMOVE_ACKNOWLEDGED = "remove_acknowledged"
    CLARIFICATION = "clarification"
    HELP = "help"
    INTRODUCTION = "introduction"
    FAILURE = "failure"


@dataclass(frozen=True)
class OperationOutcome:
    """
    Result of one operation, handed to the reply formatter.

    Attributes:
        kind: Which reply to render
        entries: Course-list entries (myplan)
        courses: Catalog descriptors (list / find / add)
        department: Department the user asked about
        course_number: Course number the user asked about
        detail: Extra rendering key (e.g. introduction kind)
    """
    kind: OutcomeKind
    entries: Tuple[str, ...] = field(default_factory=tuple)
    courses: Tuple[CourseDescriptor, ...] = field(default_factory=tuple)
    department: Optional[str] = None
    course_number: Optional[str] = None
    detail: Optional[str] = None
