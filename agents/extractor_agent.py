"""Extractor Agent for reading question text out of an image."""

import logging
from agents.gemini_client import GeminiClient, build_image_part
from agents.prompts import VISION_PROMPT


logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """Raised when text could not be extracted from the image."""


class ExtractorAgent:
    """Agent responsible for extracting all text from an uploaded image."""

    def __init__(self, gemini_client: GeminiClient):
        """
        Initialize the Extractor Agent.

        Args:
            gemini_client: The Gemini client bound to a vision-capable model
        """
        self.gemini_client = gemini_client
        logger.info("ExtractorAgent initialized")

    def extract_text(self, image_bytes: bytes, mime_type: str) -> str:
        """
        Extract the text of an image in reading order.

        Args:
            image_bytes: Raw image data
            mime_type: MIME type of the image

        Returns:
            The extracted text

        Raises:
            ExtractionError: If the vision call fails
        """
        logger.info(f"Extracting text from image ({len(image_bytes)} bytes, {mime_type})")

        contents = [VISION_PROMPT, build_image_part(image_bytes, mime_type)]
        try:
            extracted_text = self.gemini_client.generate_response(contents, allow_empty=True)
        except Exception as e:
            logger.error(f"Gemini Vision API error: {e}", exc_info=True)
            raise ExtractionError(str(e)) from e

        if not extracted_text.strip():
            logger.warning("No text found in image")

        logger.debug(f"Vision result text: {extracted_text}")
        return extracted_text
