"""
Utilities package for shared helper functions.
"""

from utils.course_codes import (
    normalize_department,
    normalize_course_number,
    split_course_code,
)
from utils.event_loop import BackgroundEventLoop

__all__ = [
    'normalize_department',
    'normalize_course_number',
    'split_course_code',
    'BackgroundEventLoop',
]
