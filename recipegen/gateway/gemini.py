"""Gemini text generation gateway.

Wraps a single `generate_content` call: the prompt goes out with a JSON
response mime type and a fixed exploratory temperature, the first candidate's
text comes back. Upstream failures become TransportError (keeping Gemini's
status code), a reply without text becomes EmptyResponseError.

No retries here: every retry in RecipeGen is an explicit user action.
"""

import asyncio
from typing import Any, Optional

import httpx
from google import genai
from google.genai import errors, types

from recipegen.utils.config import config
from recipegen.utils.exceptions import ConfigError, EmptyResponseError, TransportError
from recipegen.utils.logger import logger


GENERATION_TEMPERATURE = 0.8
RESPONSE_MIME_TYPE = "application/json"


def extract_candidate_text(response: Any) -> Optional[str]:
    """Return the text of the first part of the first candidate, or None.

    Tolerates every level of the reply being missing (no candidates, no
    content, no parts) since blocked or truncated generations omit them.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return None
    return getattr(parts[0], "text", None) or None


class GeminiGateway:
    """Send prompts to Gemini and return the raw JSON text it produces."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Optional[genai.Client] = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            api_key: Gemini API key. Defaults to GEMINI_API_KEY from config.
            model: Model id. Defaults to GEMINI_MODEL from config.
            client: Pre-built genai client (tests inject a mock here).

        Raises:
            ConfigError: If no API key is available.
        """
        api_key = api_key if api_key is not None else config.GEMINI_API_KEY
        if not api_key:
            raise ConfigError("Missing GEMINI_API_KEY on server.")

        self.model = model or config.GEMINI_MODEL
        self.client = client or genai.Client(api_key=api_key)

    async def generate_json(self, prompt_text: str) -> str:
        """Ask Gemini for a JSON reply to `prompt_text`.

        Args:
            prompt_text: Full prompt text.

        Returns:
            The first candidate's text, expected (but not verified) to be JSON.

        Raises:
            TransportError: Gemini returned a non-success status (status kept)
                or could not be reached (502).
            EmptyResponseError: The reply carried no text.
        """
        logger.debug(f"Calling Gemini model {self.model} ({len(prompt_text)} chars)")
        try:
            # Sync SDK call runs in a worker thread so the event loop stays free
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.model,
                contents=prompt_text,
                config=types.GenerateContentConfig(
                    temperature=GENERATION_TEMPERATURE,
                    response_mime_type=RESPONSE_MIME_TYPE,
                ),
            )
        except errors.APIError as e:
            details = f" {e.message}" if e.message else ""
            status_code = e.code or 502
            logger.warning(f"Gemini request failed with status {status_code}:{details}")
            raise TransportError(f"Gemini request failed.{details}", status_code=status_code) from e
        except httpx.HTTPError as e:
            logger.warning(f"Gemini unreachable: {e}")
            raise TransportError(f"Gemini request failed. {e}", status_code=502) from e
        except ValueError as e:
            # errors.UnknownApiResponseError: reply body was not JSON
            logger.warning(f"Unreadable reply from Gemini: {e}")
            raise TransportError(f"Gemini request failed. {e}", status_code=502) from e

        text = extract_candidate_text(response)
        if not text:
            logger.warning("Gemini returned no candidate text")
            raise EmptyResponseError("Gemini returned an empty response.")

        logger.debug(f"Gemini replied with {len(text)} chars")
        return text
