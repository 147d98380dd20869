"""HTTP client for the RecipeGen proxy (POST /api/generate).

Client-side counterpart of GeminiGateway: same `generate_json` contract, but
the prompt travels through the proxy with the cached shared-password
credential instead of an API key.
"""

from typing import Any, Optional

import aiohttp

from recipegen.gateway.credentials import CredentialStore
from recipegen.utils.exceptions import AuthError, EmptyResponseError, UpstreamError
from recipegen.utils.logger import logger


class ProxyClient:
    """Forward prompts to the proxy and return the model's raw text."""

    def __init__(
        self,
        url: str,
        credentials: CredentialStore,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """Initialize the client.

        Args:
            url: Full URL of the proxy endpoint.
            credentials: Store holding the Basic-Auth credential.
            session: Shared aiohttp session. When None a session is opened per call.
        """
        self.url = url
        self.credentials = credentials
        self._session = session

    async def generate_json(self, prompt_text: str) -> str:
        """POST `prompt_text` to the proxy.

        Raises:
            AuthError: No credential stored, or the proxy answered 401 (the
                stored credential is cleared first).
            UpstreamError: Any other non-success status, or the proxy could not
                be reached.
            EmptyResponseError: The proxy answered 200 without text.
        """
        authorization = self.credentials.authorization_header()
        if not authorization:
            raise AuthError("Password is required to use this app.")

        try:
            if self._session is not None:
                return await self._post(self._session, prompt_text, authorization)
            async with aiohttp.ClientSession() as session:
                return await self._post(session, prompt_text, authorization)
        except aiohttp.ClientError as e:
            logger.warning(f"Proxy request to {self.url} failed: {e}")
            raise UpstreamError(f"Request failed. {e}") from e

    async def _post(self, session: aiohttp.ClientSession, prompt_text: str, authorization: str) -> str:
        async with session.post(
            self.url,
            json={"promptText": prompt_text},
            headers={"Authorization": authorization},
        ) as response:
            if not response.ok:
                message = await self._read_error_message(response)

                if response.status == 401:
                    self.credentials.clear()
                    raise AuthError("Unauthorized. Check your password and try again.")

                logger.warning(f"Proxy answered {response.status}: {message}")
                raise UpstreamError(message, status_code=response.status)

            try:
                payload = await response.json(content_type=None)
            except ValueError as e:
                logger.warning(f"Unreadable success body from proxy: {e}")
                payload = None

        text = payload.get("text") if isinstance(payload, dict) else None
        if not text or not isinstance(text, str):
            raise EmptyResponseError("Recipe proxy returned an empty response.")
        return text

    @staticmethod
    async def _read_error_message(response: Any) -> str:
        """Return the proxy's `error` field, or a status-based fallback."""
        message = f"Request failed ({response.status})."
        try:
            payload = await response.json(content_type=None)
        except (aiohttp.ContentTypeError, ValueError) as e:
            logger.debug(f"Unreadable error body from proxy: {e}")
            return message

        if isinstance(payload, dict) and isinstance(payload.get("error"), str) and payload["error"]:
            return payload["error"]
        return message
