"""
Prompt templates, output schemas and reply texts for the course finder bot.

This module contains:
- The intent classification prompt
- The JSON schema the classifier must return
- Every user-facing reply template

All user-visible wording should be maintained here (not hardcoded in services).
"""

from typing import Dict

# ============================================================================
# CLASSIFIER PROMPT
# ============================================================================

CLASSIFIER_PROMPT = """You are the language understanding step of a course finder chat bot for university students.
Read the student's message and fill in the structured fields below.

**Functions:**

1. **myplan** - The student wants to see the classes saved on their list
   Examples: "show my plan", "what classes did I save?", "my list"

2. **list** - The student wants every class offered by a department
   Examples: "list cse classes", "what does the math department offer?"

3. **find** - The student wants details about one specific class
   Examples: "find cse 142", "tell me about MATH 124", "is info 200 open?"

4. **add** - The student wants a class saved to their list
   Examples: "add cse 344", "save engl 131 for me"

5. **remove** - The student wants a class taken off their list
   Examples: "remove cse 344", "drop math 126 from my list"

**Other fields:**
- department: the course prefix exactly as a catalog would print it (e.g. "CSE", "MATH", "INFO"). Leave empty if not mentioned.
- number: the course number (e.g. "344"). Leave empty if not mentioned.
- introduction: "intro" for a greeting such as "hi", "nice" for "nice to meet you", "how" for "how are you". Leave empty otherwise.
- help: "help" if the student asks what the bot can do. Leave empty otherwise.

If the message does not fit any function, leave function empty. Never guess a department or number that is not in the message.

**Student message:**
"{message}"
"""

# ============================================================================
# OUTPUT SCHEMAS
# ============================================================================

INTENT_SCHEMA = {
    "type": "object",
    "properties": {
        "function": {
            "type": "string",
            "enum": ["myplan", "list", "add", "find", "remove", ""],
            "description": "The operation the student is asking for",
        },
        "department": {
            "type": "string",
            "description": "Department prefix, e.g. CSE",
        },
        "number": {
            "type": "string",
            "description": "Course number, e.g. 344",
        },
        "introduction": {
            "type": "string",
            "description": "intro, nice, how or empty",
        },
        "help": {
            "type": "string",
            "description": "help or empty",
        },
    },
    "required": ["function"],
}

# ============================================================================
# REPLY TEXTS
# ============================================================================

PLAN_EMPTY_REPLY = "You have not added any classes to your list. You may want to do so now!"
PLAN_HEADER = "These are the classes I saved for you:"

DEPARTMENT_NOT_FOUND_REPLY = "these classes could not be found"
DEPARTMENT_HEADER = "Here is all the classes info:"
DEPARTMENT_ENTRY = "Class: {prefix} {number}\nName of the class: {title}"

COURSE_NOT_FOUND_REPLY = "this class could not be found"
COURSE_DETAIL = (
    "Here is the class info:\n"
    "SLN {sln}\n"
    "Name of the class: {title}\n"
    "Days: {days}\n"
    "Start time: {start}\n"
    "End time: {end}\n"
    "Instructor: {instructor}\n"
    "Is it open? {is_open}"
)

ADDED_REPLY = "Added class {title}, SLN: {sln}, to your list"
ADD_FAILED_REPLY = "Fail to add class"
REMOVE_ACK_REPLY = "I'll remove class {department} {number}, just a sec!"

CLARIFICATION_REPLY = "I'm sorry. I didn't understand what you said."

HELP_REPLY = (
    "Let me show you how I can help you! You can search for a class by typing \"search\" or "
    "I can add a class by Course and Title by typing \"add\" or remove a class by typing \"remove\""
)

INTRODUCTION_REPLIES: Dict[str, str] = {
    "intro": "Oh hi there! I'm a course finder!",
    "nice": "Nice seeing you there! How can I help you today?",
    "how": "It has been a great day! What can I help you today?",
}

ATTACHMENT_REPLY = "Message with attachment received"
QUICK_REPLY_REPLY = "Quick reply tapped"

FAILURE_REPLY = (
    "Sorry, I couldn't reach the course service just now. "
    "Please try again in a moment."
)


def format_prompt(template: str, **kwargs) -> str:
    """
    Format a prompt template with provided variables.

    Args:
        template: Prompt template string with {placeholders}
        **kwargs: Variables to substitute into the template

    Returns:
        Formatted prompt string
    """
    try:
        return template.format(**kwargs)
    except KeyError as e:
        raise ValueError(f"Missing required prompt variable: {e}")
