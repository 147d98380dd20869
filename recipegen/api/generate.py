"""POST /api/generate: authenticated prompt forwarding to Gemini.

Checks run in a fixed order so each failure has one meaning:
method (405) -> shared password (401) -> server key (500) -> body (400) -> upstream.
"""

import base64
import binascii
import json
import secrets

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from recipegen.gateway.gemini import GeminiGateway
from recipegen.models.models import GenerateRequest, GenerateResponse
from recipegen.services.recipe_service import JsonGateway
from recipegen.utils.config import Config
from recipegen.utils.exceptions import AuthError, ConfigError, ValidationError
from recipegen.utils.logger import logger

router = APIRouter(tags=["generate"])

# ---- Dependencies ------------------------------------------------------------


def get_config() -> Config:
    return Config()


def _password_from_header(authorization: str) -> str | None:
    """Return the password part of a Basic Authorization header, or None."""
    if not authorization.startswith("Basic "):
        return None
    try:
        decoded = base64.b64decode(authorization[len("Basic "):], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    _, separator, password = decoded.partition(":")
    if not separator:
        return None
    return password


def require_shared_password(request: Request, config: Config = Depends(get_config)) -> None:
    """Reject the request unless it carries the shared password.

    Raises:
        AuthError: Header missing or malformed, wrong password, or no password
            configured on the server.
    """
    expected = config.APP_BASIC_AUTH_PASS
    password = _password_from_header(request.headers.get("authorization", ""))

    if not expected or password is None or not secrets.compare_digest(password.encode(), expected.encode()):
        logger.warning(f"Rejected unauthenticated request from {request.client.host if request.client else '?'}")
        raise AuthError("Unauthorized", realm=config.AUTH_REALM)


def get_gateway(config: Config = Depends(get_config)) -> JsonGateway:
    """Build the Gemini gateway with the server-held key.

    Raises:
        ConfigError: GEMINI_API_KEY is not set.
    """
    if not config.GEMINI_API_KEY:
        logger.error("GEMINI_API_KEY is not configured")
        raise ConfigError("Missing GEMINI_API_KEY on server.")
    return GeminiGateway(api_key=config.GEMINI_API_KEY, model=config.GEMINI_MODEL)


async def read_prompt_text(request: Request) -> str:
    """Parse the JSON body and return its non-blank promptText.

    Raises:
        ValidationError: Body is not JSON, or promptText is missing/blank/not a string.
    """
    body = await request.body()
    try:
        payload = json.loads(body or b"{}")
    except ValueError as e:
        raise ValidationError("Invalid JSON body.") from e

    try:
        prompt_text = GenerateRequest.model_validate(payload).prompt_text
    except PydanticValidationError as e:
        raise ValidationError("promptText is required.") from e

    if not prompt_text.strip():
        raise ValidationError("promptText is required.")
    return prompt_text


# ---- Routes ------------------------------------------------------------------


@router.post("/api/generate", response_model=GenerateResponse)
async def generate(
    request: Request,
    _: None = Depends(require_shared_password),
    gateway: JsonGateway = Depends(get_gateway),
) -> GenerateResponse:
    prompt_text = await read_prompt_text(request)
    text = await gateway.generate_json(prompt_text)
    logger.info(f"Forwarded prompt ({len(prompt_text)} chars), reply {len(text)} chars")
    return GenerateResponse(text=text)
