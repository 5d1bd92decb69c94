"""
OpenAI Service - LLM implementation using OpenAI-compatible chat completions.

OpenAI has no per-request harm thresholds, so safety settings from the
configuration do not apply here; only the prompt's data/instruction
separation does.
"""
from typing import Dict, Any, Optional
import logging
import re

import openai
from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState

from core.llm.interfaces import LLMProvider
from core.rate_limiter import CallRateLimiter
from etl.resume.exceptions import ModelCallError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

RETRYABLE_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    if isinstance(exc, openai.RateLimitError):
        logger.warning(
            "Rate limit hit (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )
    else:
        logger.warning(
            "Transient API error (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )


def _parse_reset_duration(value: str) -> float:
    """Parse a reset-timer header value like '1s', '500ms', '1m30s' into seconds."""
    total = 0.0
    for amount, unit in re.findall(r"([\d.]+)(ms|s|m|h)", value):
        a = float(amount)
        if unit == "ms":
            total += a / 1000
        elif unit == "s":
            total += a
        elif unit == "m":
            total += a * 60
        else:  # h
            total += a * 3600
    return total


def _wait_from_rate_limit_headers(exc: openai.RateLimitError) -> float:
    """Longest declared wait from retry-after / x-ratelimit-reset-* headers, or 0.0."""
    response = getattr(exc, 'response', None)
    headers = getattr(response, 'headers', None)
    if not headers:
        return 0.0

    candidates: list[float] = []
    retry_after = headers.get("retry-after", "")
    if retry_after:
        try:
            candidates.append(float(retry_after))
        except ValueError:
            pass

    for header in ("x-ratelimit-reset-requests", "x-ratelimit-reset-tokens"):
        parsed = _parse_reset_duration(headers.get(header, ""))
        if parsed > 0:
            candidates.append(parsed)

    return max(candidates) if candidates else 0.0


def _wait_respecting_retry_after(retry_state: RetryCallState) -> float:
    """Honour server-declared timers on RateLimitError, else capped exponential backoff."""
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        wait = _wait_from_rate_limit_headers(exc)
        if wait > 0:
            wait = min(wait, 120)  # cap at 2 min
            logger.info("Rate limit headers indicate %.1fs wait.", wait)
            return wait

    exp = wait_exponential(multiplier=1, min=2, max=60)
    return exp(retry_state)


class OpenAIService(LLMProvider):
    """
    OpenAI LLM Service.

    Sends one user message per prompt; every attempt (including retries)
    passes through the shared CallRateLimiter.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_config: Optional[Dict[str, Any]] = None,
        rate_limiter: Optional[CallRateLimiter] = None,
    ):
        client_kwargs = {}
        if api_key:
            client_kwargs['api_key'] = api_key
        if base_url:
            client_kwargs['base_url'] = base_url

        self.client = OpenAI(**client_kwargs)
        self.rate_limiter = rate_limiter or CallRateLimiter()

        self.model_config = model_config or {}
        self.model = self.model_config.get('model', 'gpt-4o-mini')
        self.temperature = self.model_config.get('temperature', 0.0)
        self.max_retries = self.model_config.get('max_retries', 3)

    def generate_text(self, prompt: str) -> str:
        """Complete a prompt, retrying transient failures.

        Raises:
            ModelCallError: On any failure that survives the retries
        """
        retrying = retry(
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            wait=_wait_respecting_retry_after,
            stop=stop_after_attempt(self.max_retries),
            before_sleep=_log_retry,
            reraise=True,
        )
        try:
            content = retrying(self._complete)(prompt)
        except openai.OpenAIError as e:
            logger.error(f"OpenAI call failed ({self.model}): {e}")
            raise ModelCallError(f"Model call failed: {e}") from e

        if not content or not content.strip():
            raise ModelCallError("Model returned an empty response")
        return content

    def _complete(self, prompt: str) -> Optional[str]:
        response = self.rate_limiter.call_throttled(
            lambda: self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
        )
        try:
            return response.choices[0].message.content
        except (IndexError, AttributeError) as e:
            raise ModelCallError(f"Malformed completion response: {e}") from e
