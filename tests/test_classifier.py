"""
Unit Tests for Intent Classification

Tests the keyword parser, the Gemini classifier (with a mocked
LLMService) and intent normalization.
"""

import time
from unittest.mock import Mock, patch

import pytest

from config import INTENT_SCHEMA, Settings
from core.classifier import (
    GeminiIntentClassifier,
    KeywordIntentClassifier,
    build_classifier,
    normalize_intent,
    parse_intent_payload,
)
from core.errors import ClassificationError
from core.models import ClassifiedIntent, IntentFunction


@pytest.fixture
def keyword():
    return KeywordIntentClassifier()


class TestKeywordClassifier:
    """Test rule-based classification."""

    @pytest.mark.parametrize("text,function,department,number", [
        ("add cse 344", IntentFunction.ADD, "CSE", "344"),
        ("Add CSE 344 to my list", IntentFunction.ADD, "CSE", "344"),
        ("save math 124 for me", IntentFunction.ADD, "MATH", "124"),
        ("add cse344", IntentFunction.ADD, "CSE", "344"),
        ("remove cse 344", IntentFunction.REMOVE, "CSE", "344"),
        ("drop math 124 from my plan", IntentFunction.REMOVE, "MATH", "124"),
        ("find cse 142", IntentFunction.FIND, "CSE", "142"),
        ("tell me about computer science 142", IntentFunction.FIND, "CSE", "142"),
        ("list cse classes", IntentFunction.LIST, "CSE", None),
        ("list all math courses", IntentFunction.LIST, "MATH", None),
        ("list info", IntentFunction.LIST, "INFO", None),
        ("find info 200", IntentFunction.FIND, "INFO", "200"),
        ("add info 200", IntentFunction.ADD, "INFO", "200"),
    ])
    def test_course_operations(self, keyword, text, function, department, number):
        intent = keyword.parse(text)

        assert intent.function is function
        assert intent.department == department
        assert intent.course_number == number

    @pytest.mark.parametrize("text", [
        "my plan", "show my plan", "what's on my list", "myplan",
        "what is my plan", "tell me about my classes",
    ])
    def test_myplan(self, keyword, text):
        assert keyword.parse(text).function is IntentFunction.MYPLAN

    def test_verb_without_course(self, keyword):
        intent = keyword.parse("add")

        assert intent.function is IntentFunction.ADD
        assert intent.department is None
        assert intent.course_number is None

    @pytest.mark.parametrize("text,expected", [
        ("hi", "intro"),
        ("Hello there", "intro"),
        ("nice to meet you", "nice"),
        ("how are you?", "how"),
    ])
    def test_introductions(self, keyword, text, expected):
        intent = keyword.parse(text)

        assert intent.function is IntentFunction.UNKNOWN
        assert intent.introduction == expected

    @pytest.mark.parametrize("text", ["help", "what can you do?"])
    def test_help(self, keyword, text):
        assert keyword.parse(text).help == "help"

    @pytest.mark.parametrize("text", ["", "the weather is nice today", "42"])
    def test_unrecognised_text(self, keyword, text):
        intent = keyword.parse(text)

        assert intent.function is IntentFunction.UNKNOWN
        assert intent.help is None

    @pytest.mark.asyncio
    async def test_classify_is_async_parse(self, keyword):
        intent = await keyword.classify("add cse 344", session_id="u1")
        assert intent == keyword.parse("add cse 344")


class TestNormalizeIntent:
    """Test department/number cleanup."""

    def test_glued_code_is_split(self):
        intent = normalize_intent(
            ClassifiedIntent(function=IntentFunction.ADD, department="cse344")
        )

        assert intent.department == "CSE"
        assert intent.course_number == "344"

    def test_department_alias(self):
        intent = normalize_intent(
            ClassifiedIntent(
                function=IntentFunction.FIND, department="Computer Science", course_number=" 142."
            )
        )

        assert intent.department == "CSE"
        assert intent.course_number == "142"

    def test_parse_payload_rejects_non_objects(self):
        with pytest.raises(ClassificationError):
            parse_intent_payload(["add", "cse", "344"])

    def test_parse_payload_accepts_agent_parameter_names(self):
        intent = parse_intent_payload({"Functions": "add", "Departments": "cse", "number": "344"})

        assert intent.function is IntentFunction.ADD
        assert intent.department == "CSE"


class TestGeminiIntentClassifier:
    """Test the LLM-backed classifier with a mocked LLMService."""

    @pytest.fixture
    def llm(self):
        return Mock()

    @pytest.mark.asyncio
    async def test_structured_output_becomes_intent(self, llm):
        llm.generate_structured_output.return_value = {
            "function": "add", "department": "cse", "number": "344",
        }
        classifier = GeminiIntentClassifier(llm)

        intent = await classifier.classify("add cse 344", session_id="u1")

        assert intent.function is IntentFunction.ADD
        assert intent.department == "CSE"
        assert intent.course_number == "344"

        kwargs = llm.generate_structured_output.call_args.kwargs
        assert kwargs["schema"] is INTENT_SCHEMA
        assert "add cse 344" in kwargs["prompt"]
        assert kwargs["metadata"] == {"session_id": "u1"}

    @pytest.mark.asyncio
    async def test_unlisted_function_is_unknown(self, llm):
        llm.generate_structured_output.return_value = {"function": "enroll"}

        intent = await GeminiIntentClassifier(llm).classify("enroll me")

        assert intent.function is IntentFunction.UNKNOWN

    @pytest.mark.asyncio
    async def test_malformed_output_is_unknown(self, llm):
        llm.generate_structured_output.return_value = "add cse 344"

        intent = await GeminiIntentClassifier(llm).classify("add cse 344")

        assert intent == ClassifiedIntent.unknown()

    @pytest.mark.asyncio
    async def test_api_error_is_unknown(self, llm):
        llm.generate_structured_output.side_effect = RuntimeError("quota exceeded")

        intent = await GeminiIntentClassifier(llm).classify("add cse 344")

        assert intent == ClassifiedIntent.unknown()

    @pytest.mark.asyncio
    async def test_timeout_is_unknown(self, llm):
        llm.generate_structured_output.side_effect = lambda **kwargs: time.sleep(0.3)

        intent = await GeminiIntentClassifier(llm, timeout=0.05).classify("add cse 344")

        assert intent == ClassifiedIntent.unknown()


class TestBuildClassifier:
    """Test classifier selection from settings."""

    def test_keyword_without_api_key(self):
        assert isinstance(build_classifier(Settings()), KeywordIntentClassifier)

    @patch("core.classifier.LLMService")
    def test_gemini_with_api_key(self, mock_llm_service):
        settings = Settings(google_api_key="test-key", classifier_timeout=3.0)

        classifier = build_classifier(settings)

        assert isinstance(classifier, GeminiIntentClassifier)
        assert classifier.timeout == 3.0
        mock_llm_service.assert_called_once_with(settings)
