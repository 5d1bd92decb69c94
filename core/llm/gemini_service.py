"""
Gemini Service - LLM implementation using the google-genai SDK.

Harassment and hate-speech content is blocked at the configured harm
threshold (medium and above by default).
"""
from typing import Dict, Any, Optional, List
import logging

import httpx
from google import genai
from google.genai import errors, types
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState

from core.llm.interfaces import LLMProvider
from core.rate_limiter import CallRateLimiter
from etl.resume.exceptions import ModelCallError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_SAFETY_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"

SAFETY_CATEGORIES = (
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
)


def _is_retryable(exc: BaseException) -> bool:
    """Server errors, 429s and transport failures are transient; other client errors are not."""
    if isinstance(exc, (errors.ServerError, httpx.TransportError)):
        return True
    return isinstance(exc, errors.ClientError) and getattr(exc, 'code', None) == 429


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "Transient Gemini error (attempt %s). Waiting %.1fs before retry. Details: %s",
        retry_state.attempt_number, wait, exc,
    )


def build_safety_settings(threshold: str = DEFAULT_SAFETY_THRESHOLD) -> List[types.SafetySetting]:
    """Safety settings applying one threshold to every blocked category."""
    block = types.HarmBlockThreshold(threshold)
    return [
        types.SafetySetting(category=category, threshold=block)
        for category in SAFETY_CATEGORIES
    ]


class GeminiService(LLMProvider):
    """
    Gemini LLM Service.

    Every attempt (including retries) passes through the shared
    CallRateLimiter before reaching the API.
    """

    def __init__(
        self,
        api_key: str,
        model_config: Optional[Dict[str, Any]] = None,
        rate_limiter: Optional[CallRateLimiter] = None,
    ):
        self.client = genai.Client(api_key=api_key)
        self.rate_limiter = rate_limiter or CallRateLimiter()

        self.model_config = model_config or {}
        self.model = self.model_config.get('model', DEFAULT_MODEL)
        self.temperature = self.model_config.get('temperature', 0.0)
        self.max_retries = self.model_config.get('max_retries', 3)
        self.safety_settings = build_safety_settings(
            self.model_config.get('safety_threshold', DEFAULT_SAFETY_THRESHOLD)
        )

    def generate_text(self, prompt: str) -> str:
        """Complete a prompt, retrying transient failures.

        Raises:
            ModelCallError: On API failure, blocked output or empty answer
        """
        retrying = retry(
            retry=retry_if_exception(_is_retryable),
            wait=wait_exponential(multiplier=1, min=2, max=60),
            stop=stop_after_attempt(self.max_retries),
            before_sleep=_log_retry,
            reraise=True,
        )
        try:
            response = retrying(self._generate)(prompt)
        except (errors.APIError, httpx.TransportError) as e:
            logger.error(f"Gemini call failed ({self.model}): {e}")
            raise ModelCallError(f"Model call failed: {e}") from e

        feedback = getattr(response, 'prompt_feedback', None)
        block_reason = getattr(feedback, 'block_reason', None)
        if block_reason:
            raise ModelCallError(f"Model response blocked: {block_reason}")

        text = response.text
        if not text or not text.strip():
            raise ModelCallError("Model returned an empty response")
        return text

    def _generate(self, prompt: str):
        config = types.GenerateContentConfig(
            temperature=self.temperature,
            safety_settings=self.safety_settings,
        )
        return self.rate_limiter.call_throttled(
            lambda: self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        )
