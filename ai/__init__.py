"""
AI Infrastructure Module

This module provides the LLM infrastructure used for intent
classification:
- Gemini API client with error handling and retry logic
- Langfuse observability integration
- Structured output support

All LLM calls should go through this module to ensure consistent
observability, error handling, and configuration.
"""

from .llm_service import (
    LLMService,
    retry_on_error,
    is_retryable,
)

__all__ = [
    "LLMService",
    "retry_on_error",
    "is_retryable",
]
