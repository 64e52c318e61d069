"""
Course Finder Bot Test Suite

Unit tests for every module plus pipeline scenarios.
Run tests with: pytest tests/
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Test configuration
TEST_DATA_DIR = project_root / "data"
SAMPLE_COURSES_PATH = TEST_DATA_DIR / "courses.json"

SAMPLE_COURSE_RECORDS = [
    {
        "sln": "12688",
        "prefix": "CSE",
        "number": "344",
        "nameOfclassName": "Introduction to Data Management",
        "days": "MWF",
        "start": 1330,
        "end": 1420,
        "instructor": "Dan Suciu",
        "isOpen": True,
        "generalEd": "",
        "isWriting": False,
        "link": "https://courses.cs.washington.edu/courses/cse344/",
    },
    {
        "sln": "12501",
        "prefix": "CSE",
        "number": "142",
        "nameOfclassName": "Computer Programming I",
        "days": "MWF",
        "start": 930,
        "end": 1020,
        "instructor": "Stuart Reges",
        "isOpen": False,
        "generalEd": "NSc",
        "isWriting": False,
        "link": "",
    },
    {
        "sln": "16102",
        "prefix": "MATH",
        "number": "124",
        "nameOfclassName": "Calculus with Analytic Geometry I",
        "days": "MTWThF",
        "start": 830,
        "end": 920,
        "instructor": "Staff",
        "isOpen": True,
    },
]

__all__ = [
    "TEST_DATA_DIR",
    "SAMPLE_COURSES_PATH",
    "SAMPLE_COURSE_RECORDS",
]
