"""
Course code normalization utilities.

Maps the many ways students write a department ("computer science",
"cs", "Cse") to the catalog prefix ("CSE"), and splits glued codes such
as "cse344" into department and number. Catalog lookups stay exact;
this only cleans up input before it gets there.
"""

import re
from typing import Optional, Tuple


# Spoken department name -> catalog prefix
DEPARTMENT_ALIASES = {
    # Computer Science & Engineering
    "computer science": "CSE",
    "computer science and engineering": "CSE",
    "comp sci": "CSE",
    "cs": "CSE",

    # Mathematics
    "math": "MATH",
    "maths": "MATH",
    "mathematics": "MATH",

    # Information School
    "informatics": "INFO",
    "information": "INFO",

    # English
    "english": "ENGL",
    "eng": "ENGL",

    # Statistics
    "statistics": "STAT",
    "stats": "STAT",

    # Physics
    "physics": "PHYS",

    # Chemistry
    "chemistry": "CHEM",
    "chem": "CHEM",
}

_CODE_PATTERN = re.compile(r"^\s*([A-Za-z][A-Za-z &]*?)\s*(\d{3}[A-Za-z]?)\s*$")
_NUMBER_PATTERN = re.compile(r"\d{3}[A-Za-z]?")


def normalize_department(department: Optional[str]) -> Optional[str]:
    """
    Normalize a department name to its catalog prefix.

    Args:
        department: Department as the student wrote it

    Returns:
        Upper-case catalog prefix, or None for empty input

    Example:
        >>> normalize_department("computer science")
        "CSE"
        >>> normalize_department(" info ")
        "INFO"
    """
    if department is None:
        return None
    cleaned = " ".join(department.split())
    if not cleaned:
        return None
    return DEPARTMENT_ALIASES.get(cleaned.lower(), cleaned.upper())


def normalize_course_number(number: Optional[str]) -> Optional[str]:
    """
    Extract the course number ("344", "101A") from free-form input.

    Example:
        >>> normalize_course_number(" 344. ")
        "344"
    """
    if number is None:
        return None
    match = _NUMBER_PATTERN.search(str(number))
    if match:
        return match.group(0).upper()
    cleaned = str(number).strip()
    return cleaned or None


def split_course_code(code: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Split a code such as "CSE344" or "math 124" into (department, number).

    Returns (None, None) when the text does not look like a course code.
    """
    match = _CODE_PATTERN.match(code or "")
    if not match:
        return None, None
    return normalize_department(match.group(1)), normalize_course_number(match.group(2))
