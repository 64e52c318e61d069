"""
LLM Service - Gemini API Wrapper with Langfuse Observability

This service provides the structured-output call used for intent
classification:
- Automatic retry logic with exponential backoff
- Langfuse tracing for every LLM call (when enabled)
- JSON output validated against a schema

The client is configured from Settings at construction time; nothing
here reads the environment.
"""

import json
import logging
import time
from functools import wraps
from typing import Any, Dict, Optional

import google.generativeai as genai
from google.generativeai.types import GenerationConfig, HarmBlockThreshold, HarmCategory
from langfuse.decorators import langfuse_context, observe

from config import Settings

logger = logging.getLogger(__name__)

# ============================================================================
# SAFETY SETTINGS
# ============================================================================

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
}


# ============================================================================
# RETRY DECORATOR
# ============================================================================

def is_retryable(error: Exception) -> bool:
    """Rate limits, quota errors, timeouts and 5xx responses are worth retrying."""
    message = str(error).lower()
    return any([
        "rate limit" in message,
        "quota" in message,
        "timeout" in message,
        "503" in message,
        "429" in message,
        "500" in message,
    ])


def retry_on_error(max_retries: int = 3, delay: float = 1.0):
    """
    Decorator to retry function calls on retryable exceptions.
    Implements exponential backoff.

    Args:
        max_retries: Maximum number of attempts
        delay: Initial delay between retries (seconds)
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            attempt = 0
            current_delay = delay

            while True:
                attempt += 1
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if not is_retryable(e) or attempt >= max_retries:
                        logger.error(f"❌ {func.__name__} failed: {type(e).__name__}: {e}")
                        raise

                    logger.warning(
                        f"⚠️  {func.__name__} failed (attempt {attempt}/{max_retries}): "
                        f"{type(e).__name__}. Retrying in {current_delay}s..."
                    )
                    time.sleep(current_delay)
                    current_delay *= 2

        return wrapper
    return decorator


# ============================================================================
# LLM SERVICE
# ============================================================================

class LLMService:
    """
    Gemini client used for structured JSON generation.

    Args:
        settings: Application settings (API key, model, retry policy, Langfuse keys)
    """

    def __init__(self, settings: Settings):
        if not settings.google_api_key:
            raise ValueError(
                "GOOGLE_API_KEY is not set. Set it in your .env file "
                "or use the keyword classifier."
            )

        self.model_name = settings.gemini_model
        self.temperature = settings.temperature
        self.max_retries = settings.max_retries
        self.retry_delay = settings.retry_delay
        self.tracing_enabled = settings.tracing_enabled

        genai.configure(api_key=settings.google_api_key)

        langfuse_context.configure(
            public_key=settings.langfuse_public_key,
            secret_key=settings.langfuse_secret_key,
            host=settings.langfuse_host,
            enabled=settings.tracing_enabled,
        )
        if self.tracing_enabled:
            logger.info("✅ Langfuse observability initialized")
        else:
            logger.info("ℹ️  Langfuse observability disabled")

        logger.info(f"✅ LLMService ready ({self.model_name})")

    def _generation_config(self, temperature: Optional[float], schema: Dict) -> GenerationConfig:
        return GenerationConfig(
            temperature=self.temperature if temperature is None else temperature,
            response_mime_type="application/json",
            response_schema=schema,
        )

    @observe(name="generate_structured_output")
    def generate_structured_output(
        self,
        prompt: str,
        schema: Dict,
        system_instruction: Optional[str] = None,
        temperature: Optional[float] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict:
        """
        Generate structured JSON output conforming to a specific schema.

        Args:
            prompt: The prompt to send
            schema: JSON schema defining the expected output structure
            system_instruction: System prompt
            temperature: Sampling temperature (overrides default)
            metadata: Additional metadata for Langfuse tracking

        Returns:
            Parsed JSON object matching the schema

        Raises:
            ValueError: If output is not valid JSON
            Exception: If the API call fails after retries
        """
        if self.tracing_enabled:
            langfuse_context.update_current_trace(
                name="structured_output",
                metadata={"model": self.model_name, **(metadata or {})},
            )

        call = retry_on_error(self.max_retries, self.retry_delay)(self._generate)
        return call(prompt, schema, system_instruction, temperature)

    def _generate(
        self,
        prompt: str,
        schema: Dict,
        system_instruction: Optional[str],
        temperature: Optional[float],
    ) -> Dict:
        model = genai.GenerativeModel(
            model_name=self.model_name,
            generation_config=self._generation_config(temperature, schema),
            safety_settings=SAFETY_SETTINGS,
            system_instruction=system_instruction,
        )

        start_time = time.time()
        response = model.generate_content(prompt)
        latency = time.time() - start_time

        if not response.candidates:
            raise ValueError("No response candidates returned from Gemini API")

        text = response.text
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"❌ Invalid JSON from LLM: {text[:200]}...")
            raise ValueError(f"LLM did not return valid JSON: {e}")

        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            if self.tracing_enabled:
                langfuse_context.update_current_observation(
                    usage={
                        "input": usage.prompt_token_count,
                        "output": usage.candidates_token_count,
                        "total": usage.total_token_count,
                    }
                )
            logger.debug(
                f"📊 Tokens: {usage.prompt_token_count} in, "
                f"{usage.candidates_token_count} out, ⏱️  {latency:.2f}s"
            )

        return data
