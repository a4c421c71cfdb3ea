"""
Generation client for the hosted text-completion service (Google Gemini).
"""
import asyncio
import logging
from typing import Optional

from google import genai
from google.genai import types

from config import settings

logger = logging.getLogger(__name__)


class GenerationClientError(Exception):
    """Raised when the completion service fails or returns nothing usable."""


class MissingCredentialError(GenerationClientError):
    """Raised when no API key is configured."""


class GenerationClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = settings.GEMINI_MODEL,
        max_output_tokens: int = settings.GENERATION_MAX_OUTPUT_TOKENS,
        temperature: float = settings.GENERATION_TEMPERATURE,
        timeout: Optional[float] = settings.GENERATION_TIMEOUT,
    ):
        self.api_key = api_key
        self.model_name = model_name
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature
        self.timeout = timeout
        self._client = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_client(self) -> genai.Client:
        if not self.is_configured:
            raise MissingCredentialError("GEMINI_API_KEY not found in environment variables")
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(self, prompt: str) -> str:
        """
        Send a prompt to the model and return the raw text of its answer.

        Raises:
            GenerationClientError: on missing credential, transport/service
                failure or an empty response
        """
        client = self._get_client()
        logger.info(f"Requesting completion from {self.model_name} ({len(prompt)} prompt characters)")

        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(
                    client.models.generate_content,
                    model=self.model_name,
                    contents=prompt,
                    config=types.GenerateContentConfig(
                        max_output_tokens=self.max_output_tokens,
                        temperature=self.temperature,
                    ),
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Completion request timed out after {self.timeout}s")
            raise GenerationClientError(f"Generation timed out after {self.timeout} seconds") from e
        except Exception as e:
            logger.error(f"Completion request failed: {str(e)}")
            raise GenerationClientError(str(e)) from e

        text_output = extract_response_text(response)
        if not text_output:
            logger.error("No text parts found in Gemini response")
            raise GenerationClientError("Empty response from model")

        logger.info(f"Received {len(text_output)} characters from {self.model_name}")
        return text_output


def extract_response_text(response) -> str:
    """Join the text parts of the first candidate of a generate_content response."""
    if response and response.candidates:
        candidate = response.candidates[0]
        if candidate.content and getattr(candidate.content, "parts", None):
            return "".join(part.text for part in candidate.content.parts if getattr(part, "text", None))
    return ""


# Global client instance - created on first use
generation_client = None


def get_generation_client() -> GenerationClient:
    """Get or create the generation client"""
    global generation_client
    if generation_client is None:
        generation_client = GenerationClient(api_key=settings.GEMINI_API_KEY)
    return generation_client
