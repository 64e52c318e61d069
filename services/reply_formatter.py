"""
Reply Formatter

Turns OperationOutcome values into the text sent back to the user.
Purely presentational: no lookups, no mutations.
"""

from typing import Callable, Dict, Optional

from config import (
    ADD_FAILED_REPLY,
    ADDED_REPLY,
    CLARIFICATION_REPLY,
    COURSE_DETAIL,
    COURSE_NOT_FOUND_REPLY,
    DEPARTMENT_ENTRY,
    DEPARTMENT_HEADER,
    DEPARTMENT_NOT_FOUND_REPLY,
    FAILURE_REPLY,
    HELP_REPLY,
    INTRODUCTION_REPLIES,
    PLAN_EMPTY_REPLY,
    PLAN_HEADER,
    REMOVE_ACK_REPLY,
)
from core.models import CourseDescriptor, OperationOutcome, OutcomeKind


def format_time(value: Optional[int]) -> str:
    """1130 -> "11:30"; missing times render as "TBA"."""
    if value is None:
        return "TBA"
    hours, minutes = divmod(value, 100)
    return f"{hours}:{minutes:02d}"


def _first_course(outcome: OperationOutcome) -> CourseDescriptor:
    return outcome.courses[0]


def render_plan_empty(outcome: OperationOutcome) -> str:
    return PLAN_EMPTY_REPLY


def render_plan_listed(outcome: OperationOutcome) -> str:
    return PLAN_HEADER + "".join(f"\n {entry}" for entry in outcome.entries)


def render_department_not_found(outcome: OperationOutcome) -> str:
    return DEPARTMENT_NOT_FOUND_REPLY


def render_department_listed(outcome: OperationOutcome) -> str:
    blocks = [
        DEPARTMENT_ENTRY.format(prefix=c.prefix, number=c.number, title=c.title)
        for c in outcome.courses
    ]
    return DEPARTMENT_HEADER + "\n" + "\n\n".join(blocks)


def render_course_not_found(outcome: OperationOutcome) -> str:
    return COURSE_NOT_FOUND_REPLY


def render_course_found(outcome: OperationOutcome) -> str:
    course = _first_course(outcome)
    return COURSE_DETAIL.format(
        sln=course.sln,
        title=course.title,
        days=course.days or "TBA",
        start=format_time(course.start),
        end=format_time(course.end),
        instructor=course.instructor or "TBA",
        is_open="yes" if course.is_open else "no",
    )


def render_added(outcome: OperationOutcome) -> str:
    course = _first_course(outcome)
    return ADDED_REPLY.format(title=course.title, sln=course.sln)


def render_add_failed(outcome: OperationOutcome) -> str:
    return ADD_FAILED_REPLY


def render_remove_acknowledged(outcome: OperationOutcome) -> str:
    return REMOVE_ACK_REPLY.format(
        department=outcome.department,
        number=outcome.course_number,
    )


def render_clarification(outcome: OperationOutcome) -> str:
    return CLARIFICATION_REPLY


def render_help(outcome: OperationOutcome) -> str:
    return HELP_REPLY


def render_introduction(outcome: OperationOutcome) -> str:
    return INTRODUCTION_REPLIES.get((outcome.detail or "").lower(), CLARIFICATION_REPLY)


def render_failure(outcome: OperationOutcome) -> str:
    return FAILURE_REPLY


_RENDERERS: Dict[OutcomeKind, Callable[[OperationOutcome], str]] = {
    OutcomeKind.PLAN_EMPTY: render_plan_empty,
    OutcomeKind.PLAN_LISTED: render_plan_listed,
    OutcomeKind.DEPARTMENT_NOT_FOUND: render_department_not_found,
    OutcomeKind.DEPARTMENT_LISTED: render_department_listed,
    OutcomeKind.COURSE_NOT_FOUND: render_course_not_found,
    OutcomeKind.COURSE_FOUND: render_course_found,
    OutcomeKind.ADDED: render_added,
    OutcomeKind.ADD_FAILED: render_add_failed,
    OutcomeKind.REMOVE_ACKNOWLEDGED: render_remove_acknowledged,
    OutcomeKind.CLARIFICATION: render_clarification,
    OutcomeKind.HELP: render_help,
    OutcomeKind.INTRODUCTION: render_introduction,
    OutcomeKind.FAILURE: render_failure,
}


class ReplyFormatter:
    """Renders outcomes; one renderer per outcome kind."""

    def render(self, outcome: OperationOutcome) -> str:
        return _RENDERERS[outcome.kind](outcome)
