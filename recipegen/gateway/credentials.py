"""Client-side cache for the shared-password credential.

Stores base64(":" + password), the Basic-Auth payload with an empty user
name, under a fixed key in a small JSON file so the user is not asked for the
password every session. The proxy client clears it on a 401.
"""

import base64
import json
from pathlib import Path
from typing import Optional

from recipegen.utils.logger import logger


BASIC_AUTH_STORAGE_KEY = "recipegen.basic_auth"


def encode_password(password: str) -> str:
    """Encode a password as a Basic-Auth payload with an empty user name."""
    return base64.b64encode(f":{password}".encode("utf-8")).decode("ascii")


class CredentialStore:
    """File-backed credential cache keyed by BASIC_AUTH_STORAGE_KEY."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()
        self._cached: Optional[str] = None

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable credential file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def authorization_header(self) -> Optional[str]:
        """Return "Basic <encoded>" for the stored credential, or None."""
        if self._cached:
            return self._cached

        encoded = self._read().get(BASIC_AUTH_STORAGE_KEY)
        if not encoded or not isinstance(encoded, str):
            return None

        self._cached = f"Basic {encoded}"
        return self._cached

    def has_credentials(self) -> bool:
        return self.authorization_header() is not None

    def save_password(self, password: str) -> str:
        """Encode and persist `password`, returning the Authorization header value.

        Raises:
            ValueError: If the password is empty.
        """
        if not password:
            raise ValueError("Password is required to use this app.")

        encoded = encode_password(password)
        data = self._read()
        data[BASIC_AUTH_STORAGE_KEY] = encoded
        self._write(data)
        self._cached = f"Basic {encoded}"
        logger.info("Saved proxy credential")
        return self._cached

    def clear(self) -> None:
        """Forget the credential in memory and on disk."""
        self._cached = None
        data = self._read()
        if data.pop(BASIC_AUTH_STORAGE_KEY, None) is not None:
            self._write(data)
            logger.info("Cleared saved proxy credential")
