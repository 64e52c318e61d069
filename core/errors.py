"""
Error taxonomy for the course finder bot.

Only infrastructure failures are exceptions. Expected outcomes such as
"course not found", "already on the list" or "not on the list" are
modeled as result values in core.models.
"""


class CourseBotError(Exception):
    """Base class for every error raised inside the bot."""


class ClassificationError(CourseBotError):
    """The message could not be classified; the pipeline treats it as unknown."""


class StoreUnavailable(CourseBotError):
    """The user course-list store failed or timed out."""


class CatalogUnavailable(CourseBotError):
    """The course catalog failed to load or timed out."""
