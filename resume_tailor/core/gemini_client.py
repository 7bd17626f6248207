import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

# The new SDK is imported from the top-level 'google' package
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from tenacity import RetryError, Retrying, retry_if_exception_type, stop_after_attempt, wait_incrementing

from resume_tailor import config
from resume_tailor.errors import ApiError, ExhaustedRetriesError


@dataclass
class ModelResponse:
    """
    The text payload of a Gemini reply: the first text part of each candidate,
    in candidate order. A candidate without text keeps its slot as None.
    """
    candidates: List[Optional[str]] = field(default_factory=list)

    @property
    def text(self) -> Optional[str]:
        return self.candidates[0] if self.candidates else None


class GeminiClient:
    """
    A robust client for the Google Gemini API using the Google GenAI SDK.

    Every call sends a single combined prompt with fixed, low-variance sampling
    and a fixed safety block list, and retries failed attempts with a linear
    backoff (attempt x base delay). The client holds configuration only; the API
    key is passed on each call, so one instance can serve any number of
    concurrent pipeline runs.
    """

    def __init__(
        self,
        model_name: str = config.GEMINI_MODEL,
        max_retries: int = config.GEMINI_MAX_RETRIES,
        retry_delay_ms: int = config.GEMINI_RETRY_DELAY_MS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            model_name: The Gemini model to use (e.g., "gemini-1.5-flash").
            max_retries: Total number of attempts per call.
            retry_delay_ms: Base backoff delay; attempt n waits n times this long.
            sleep: Called with the backoff in seconds. Tests pass a recorder here.
        """
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1.")
        self.model_name = model_name
        self.max_retries = max_retries
        self.retry_delay_ms = retry_delay_ms
        self._sleep = sleep
        self.generation_config = types.GenerateContentConfig(
            **config.GENERATION_PARAMS,
            safety_settings=[
                types.SafetySetting(category=category, threshold=config.SAFETY_THRESHOLD)
                for category in config.SAFETY_CATEGORIES
            ],
        )
        logging.info(f"GeminiClient initialized with model: {self.model_name}")

    def _log_retry(self, retry_state):
        delay_ms = retry_state.next_action.sleep * 1000 if retry_state.next_action else 0
        logging.warning(
            f"API call attempt {retry_state.attempt_number} failed, retrying in {delay_ms:.0f}ms: "
            f"{retry_state.outcome.exception()}"
        )

    def _attempt(self, api_key: str, prompt: str) -> ModelResponse:
        """One request. Raises on any failure so the retry loop can take over."""
        client = genai.Client(api_key=api_key)
        try:
            response = client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=self.generation_config,
            )
        except genai_errors.APIError as e:
            raise ApiError(e.code, e.message or str(e)) from e

        feedback = getattr(response, "prompt_feedback", None)
        block_reason = getattr(feedback, "block_reason", None)
        if block_reason:
            raise ApiError(200, f"Prompt blocked: {block_reason}")

        texts = []
        for candidate in response.candidates or []:
            parts = candidate.content.parts if candidate.content and candidate.content.parts else []
            texts.append(parts[0].text if parts and parts[0].text else None)
        return ModelResponse(candidates=texts)

    def call(self, api_key: str, prompt: str) -> ModelResponse:
        """
        Sends the prompt to Gemini, retrying failed attempts.

        Returns:
            The reply as a ModelResponse. An empty candidate list is still a
            successful call; the extractor decides what to do with it.

        Raises:
            ValueError: If no API key was supplied.
            ExhaustedRetriesError: If every attempt failed. `last_error` is the
                final attempt's exception (often an ApiError).
        """
        if not api_key:
            raise ValueError("API key is required")

        base_delay = self.retry_delay_ms / 1000
        retryer = Retrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_incrementing(start=base_delay, increment=base_delay),
            retry=retry_if_exception_type(Exception),
            before_sleep=self._log_retry,
            sleep=self._sleep,
        )
        logging.info("Sending prompt to Gemini API...")
        try:
            return retryer(self._attempt, api_key, prompt)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            logging.error(f"An error occurred in GeminiClient: {last_error}")
            raise ExhaustedRetriesError(self.max_retries, last_error) from last_error

    def check_api_key(self, api_key: str) -> bool:
        """Sends a trivial prompt and reports whether the key produced a reply."""
        try:
            response = self.call(api_key, "Please respond with 'OK' if you can read this message.")
        except (ValueError, ExhaustedRetriesError) as e:
            logging.error(f"API key test failed: {e}")
            return False
        return bool(response.text)
