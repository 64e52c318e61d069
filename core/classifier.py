"""
Intent Classification

Turns free text into a ClassifiedIntent. Two classifiers share one
async contract, classify(text, session_id):

- GeminiIntentClassifier: LLM structured output (used when a Google
  API key is configured)
- KeywordIntentClassifier: deterministic keyword parser (offline mode,
  chat console, tests)

Classification never raises: timeouts, API errors and malformed output
all degrade to the unknown intent, which the router answers with a
clarification reply.
"""

import asyncio
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from ai import LLMService
from config import CLASSIFIER_PROMPT, INTENT_SCHEMA, Settings, format_prompt
from utils.course_codes import normalize_course_number, normalize_department, split_course_code

from .errors import ClassificationError
from .models import ClassifiedIntent, IntentFunction

logger = logging.getLogger(__name__)


def normalize_intent(intent: ClassifiedIntent) -> ClassifiedIntent:
    """
    Return a copy of an intent with department and number normalized.

    A department that carries its own number ("CSE344") fills in a
    missing course number.
    """
    department = intent.department
    number = intent.course_number

    if department and not number:
        split_department, split_number = split_course_code(department)
        if split_department and split_number:
            department, number = split_department, split_number

    return ClassifiedIntent(
        function=intent.function,
        department=normalize_department(department),
        course_number=normalize_course_number(number),
        introduction=intent.introduction.lower() if intent.introduction else None,
        help=intent.help,
    )


def parse_intent_payload(payload: Any) -> ClassifiedIntent:
    """
    Validate a classifier response.

    Raises:
        ClassificationError: If the payload is not a JSON object
    """
    try:
        return normalize_intent(ClassifiedIntent.from_payload(payload))
    except ValueError as e:
        raise ClassificationError(str(e)) from e


# ============================================================================
# GEMINI CLASSIFIER
# ============================================================================

class GeminiIntentClassifier:
    """
    LLM-backed classifier.

    Args:
        llm: Configured LLMService
        timeout: Bound on one classification (seconds)
    """

    def __init__(self, llm: LLMService, timeout: float = 15.0):
        self.llm = llm
        self.timeout = timeout

    async def classify(self, text: str, session_id: Optional[str] = None) -> ClassifiedIntent:
        prompt = format_prompt(CLASSIFIER_PROMPT, message=text)

        try:
            payload = await asyncio.wait_for(
                asyncio.to_thread(
                    self.llm.generate_structured_output,
                    prompt=prompt,
                    schema=INTENT_SCHEMA,
                    temperature=0.1,
                    metadata={"session_id": session_id},
                ),
                timeout=self.timeout,
            )
            intent = parse_intent_payload(payload)
        except asyncio.TimeoutError:
            logger.error(f"❌ Intent classification timed out after {self.timeout}s")
            return ClassifiedIntent.unknown()
        except ClassificationError as e:
            logger.warning(f"⚠️  Unusable classification output: {e}")
            return ClassifiedIntent.unknown()
        except Exception as e:
            logger.error(f"❌ Intent classification failed: {e}")
            return ClassifiedIntent.unknown()

        logger.info(
            f"🧭 Intent classified: {intent.function.value} "
            f"({intent.department or '-'} {intent.course_number or '-'})"
        )
        return intent


# ============================================================================
# KEYWORD CLASSIFIER
# ============================================================================

_VERBS: Dict[str, IntentFunction] = {
    "add": IntentFunction.ADD,
    "save": IntentFunction.ADD,
    "remove": IntentFunction.REMOVE,
    "drop": IntentFunction.REMOVE,
    "delete": IntentFunction.REMOVE,
    "find": IntentFunction.FIND,
    "search": IntentFunction.FIND,
    "lookup": IntentFunction.FIND,
    "list": IntentFunction.LIST,
}

_PHRASES: List[Tuple[str, str]] = [
    ("tell me about", "find"),
    ("look up", "lookup"),
    ("what is", "find"),
]

_PLAN_PHRASES = ("myplan", "my plan", "my list", "my classes", "my courses", "my schedule")

_FILLER = {
    "a", "about", "all", "class", "classes", "course", "courses", "department",
    "dept", "for", "from", "in", "list", "me", "my", "of", "off", "on",
    "plan", "please", "schedule", "the", "to",
}

_GREETINGS = {"hi", "hello", "hey", "yo", "howdy"}


class KeywordIntentClassifier:
    """Rule-based classifier for messages such as "add cse 344" or "my plan"."""

    async def classify(self, text: str, session_id: Optional[str] = None) -> ClassifiedIntent:
        intent = self.parse(text)
        logger.info(f"🧭 Keyword classification: {intent.function.value}")
        return intent

    def parse(self, text: str) -> ClassifiedIntent:
        message = (text or "").lower()
        tokens = re.findall(r"[a-z0-9]+", message)
        joined = " ".join(tokens)

        if "help" in tokens or "what can you do" in joined:
            return ClassifiedIntent(help="help")

        # plan phrases are matched before rewrites so "what is my plan" stays a plan request
        plan_index = self._phrase_index(joined, _PLAN_PHRASES)
        first_verb = self._verb_index(tokens)
        if plan_index is not None and (first_verb is None or plan_index < first_verb):
            return ClassifiedIntent(function=IntentFunction.MYPLAN)

        for phrase, replacement in _PHRASES:
            message = message.replace(phrase, replacement)
        tokens = re.findall(r"[a-z0-9]+", message)
        joined = " ".join(tokens)

        verb_index = self._verb_index(tokens)
        if verb_index is None:
            return ClassifiedIntent(introduction=self._introduction(tokens, joined))

        function = _VERBS[tokens[verb_index]]
        rest = [t for t in tokens[verb_index + 1:] if t not in _FILLER]
        department, number = self._course_reference(rest)

        if function is IntentFunction.LIST:
            number = None

        return ClassifiedIntent(function=function, department=department, course_number=number)

    @staticmethod
    def _verb_index(tokens: List[str]) -> Optional[int]:
        return next((i for i, t in enumerate(tokens) if t in _VERBS), None)

    @staticmethod
    def _phrase_index(joined: str, phrases) -> Optional[int]:
        """Word index of the first plan phrase in the message, if any."""
        positions = []
        for phrase in phrases:
            match = re.search(rf"\b{phrase}\b", joined)
            if match:
                positions.append(len(joined[: match.start()].split()))
        return min(positions) if positions else None

    @staticmethod
    def _course_reference(rest: List[str]) -> Tuple[Optional[str], Optional[str]]:
        if not rest:
            return None, None

        department, number = split_course_code(" ".join(rest))
        if department and number:
            return department, number

        words = [t for t in rest if not any(ch.isdigit() for ch in t)]
        digits = [t for t in rest if t.isdigit()]
        return (
            normalize_department(" ".join(words)) if words else None,
            normalize_course_number(digits[0]) if digits else None,
        )

    @staticmethod
    def _introduction(tokens: List[str], joined: str) -> Optional[str]:
        if "how are you" in joined or "how is it going" in joined:
            return "how"
        if joined.startswith("nice"):
            return "nice"
        if tokens and tokens[0] in _GREETINGS:
            return "intro"
        return None


# ============================================================================
# FACTORY
# ============================================================================

def build_classifier(settings: Settings):
    """Gemini classifier when an API key is configured, keyword parser otherwise."""
    if settings.use_gemini:
        return GeminiIntentClassifier(LLMService(settings), timeout=settings.classifier_timeout)

    logger.info("ℹ️  GOOGLE_API_KEY not set, using keyword classifier")
    return KeywordIntentClassifier()
