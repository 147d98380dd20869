"""Error taxonomy shared by the proxy, the gateways and the recipe flow.

Every error carries the HTTP status the proxy answers with, so one exception
handler in the API layer can map the whole hierarchy to responses.
"""

from typing import Literal, Optional


class RecipeGenError(Exception):
    """Base class for all RecipeGen errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def headers(self) -> Optional[dict[str, str]]:
        return None


class AuthError(RecipeGenError):
    """Missing or wrong shared password."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized", realm: str = "RecipeGen") -> None:
        super().__init__(message)
        self.realm = realm

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": f'Basic realm="{self.realm}"'}


class ConfigError(RecipeGenError):
    """Server is missing configuration it needs (e.g. the Gemini API key)."""

    status_code = 500


class ValidationError(RecipeGenError):
    """Client sent a malformed request body."""

    status_code = 400


class UpstreamError(RecipeGenError):
    """The AI provider (or the proxy in front of it) did not succeed."""

    status_code = 502


class TransportError(UpstreamError):
    """Gemini answered with a non-success status or could not be reached."""


class EmptyResponseError(UpstreamError):
    """Gemini (or the proxy) answered without any text."""


class FormatError(RecipeGenError):
    """The AI reply could not be parsed, or parsed into the wrong shape.

    Attributes:
        reason: "parse" for malformed JSON, "shape" for JSON that fails validation.
    """

    status_code = 502

    def __init__(self, message: str, reason: Literal["parse", "shape"] = "shape") -> None:
        super().__init__(message)
        self.reason = reason
