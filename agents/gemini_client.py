"""Gemini API client with retry logic and error handling."""

import logging
import time
from typing import Any, Dict, List, Optional, Union
import google.generativeai as genai


logger = logging.getLogger(__name__)


Contents = Union[str, List[Any]]


class GeminiAPIError(Exception):
    """Raised when the Gemini API call fails on every attempt."""


def build_image_part(data: bytes, mime_type: str) -> Dict[str, Any]:
    """
    Build an inline image part for a multimodal request.

    Args:
        data: Raw image bytes
        mime_type: MIME type of the image (e.g. image/png)

    Returns:
        A content part accepted by GenerativeModel.generate_content
    """
    return {"mime_type": mime_type, "data": data}


class GeminiClient:
    """Client for interacting with Google Gemini API with retry logic."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        max_retries: int = 1,
        base_retry_delay_ms: int = 1000,
        retry_multiplier: int = 2
    ):
        """
        Initialize the Gemini API client.

        Args:
            api_key: Gemini API authentication key
            model: Model name to use (default: gemini-2.0-flash)
            max_retries: Maximum number of attempts (default: 1, no retry)
            base_retry_delay_ms: Base delay in milliseconds for retries (default: 1000)
            retry_multiplier: Multiplier for exponential backoff (default: 2)
        """
        self.api_key = api_key
        self.model_name = model
        self.max_retries = max_retries
        self.base_retry_delay_ms = base_retry_delay_ms
        self.retry_multiplier = retry_multiplier

        genai.configure(api_key=self.api_key)
        self.model = genai.GenerativeModel(self.model_name)

        logger.info(f"GeminiClient initialized with model: {self.model_name}")

    def generate_response(self, contents: Contents, allow_empty: bool = False) -> str:
        """
        Generate a response from the Gemini API with retry logic.

        Delay before attempt n (n >= 2) is
        base_retry_delay_ms * retry_multiplier^(n - 2).

        Args:
            contents: A prompt string, or a list of parts (prompt and image parts)
            allow_empty: Return "" instead of failing when the model sends no text

        Returns:
            The generated response text

        Raises:
            GeminiAPIError: If all attempts fail
        """
        last_exception: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                logger.debug(f"Gemini API call attempt {attempt}/{self.max_retries} ({self.model_name})")

                response = self.model.generate_content(contents)

                if response and response.text:
                    logger.debug(f"Gemini API call succeeded on attempt {attempt}")
                    return response.text
                elif response is not None and allow_empty:
                    logger.debug(f"Gemini API returned empty text on attempt {attempt}")
                    return ""
                else:
                    raise ValueError("Empty response from Gemini API")

            except Exception as e:
                last_exception = e
                logger.warning(
                    f"Gemini API call failed on attempt {attempt}/{self.max_retries}: {str(e)}"
                )

                if attempt < self.max_retries:
                    delay_ms = self.base_retry_delay_ms * (self.retry_multiplier ** (attempt - 1))
                    delay_seconds = delay_ms / 1000.0

                    logger.info(f"Retrying in {delay_seconds}s...")
                    time.sleep(delay_seconds)

        if self.max_retries == 1:
            # Single attempt: surface the underlying message as-is
            raise GeminiAPIError(str(last_exception)) from last_exception

        error_msg = f"Gemini API call failed after {self.max_retries} attempts"
        logger.error(f"{error_msg}: {str(last_exception)}")
        raise GeminiAPIError(f"{error_msg}: {str(last_exception)}") from last_exception
