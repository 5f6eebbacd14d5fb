"""
Credential storage and boundary validation.

Credentials enter the client only through :func:`validate_credential`, which
rejects blank keys and values that are evidently not API keys (for example
an error message pasted or saved by mistake). :class:`CredentialStore`
persists a validated credential in the user's config directory.
"""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path

from wbglance.config import get_config_dir
from wbglance.exceptions import InvalidCredentialError
from wbglance.models import Credential
from wbglance.utils import atomic_write_json, read_json_file

__all__ = ["CredentialStore", "validate_credential"]

logger = logging.getLogger(__name__)

CREDENTIALS_FILENAME = "credentials.json"

MIN_EXPECTED_KEY_LENGTH = 20
MAX_KEY_LENGTH = 200

# Substrings that only show up when error text was stored instead of a key
_SENTINEL_SUBSTRINGS = ("viewer", "error", "null")


def validate_credential(api_key: str, entity: str) -> Credential:
    """Validate raw credential input and build a Credential.

    Args:
        api_key: Raw API key; surrounding whitespace is removed
        entity: Raw entity name; surrounding whitespace is removed

    Returns:
        The trimmed credential.

    Raises:
        InvalidCredentialError: If the key is empty, too long, or looks like an error message
    """
    key = api_key.strip()
    if not key:
        raise InvalidCredentialError("API key is empty")
    if len(key) > MAX_KEY_LENGTH:
        raise InvalidCredentialError(f"API key is longer than {MAX_KEY_LENGTH} characters")

    lowered = key.lower()
    for sentinel in _SENTINEL_SUBSTRINGS:
        if sentinel in lowered:
            raise InvalidCredentialError("API key looks like an error message, not a key")

    if len(key) < MIN_EXPECTED_KEY_LENGTH:
        logger.warning(f"API key is unusually short ({len(key)} characters)")

    return Credential(api_key=key, entity=entity.strip())


class CredentialStore:
    """Persists one credential as an owner-only JSON file."""

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: File to store the credential in. Defaults to
                ``<config dir>/credentials.json``.
        """
        self.path = Path(path) if path is not None else get_config_dir() / CREDENTIALS_FILENAME

    def save(self, credential: Credential) -> None:
        """Write a credential, replacing any stored one.

        Raises:
            InvalidCredentialError: If the credential fails boundary validation
        """
        validated = validate_credential(credential.api_key, credential.entity)
        atomic_write_json(self.path, {"api_key": validated.api_key, "entity": validated.entity})
        logger.debug(f"Saved credential to {self.path}")

    def load(self) -> Credential | None:
        """Read the stored credential.

        A stored value that is unreadable or fails validation is removed.

        Returns:
            The stored credential, or None if there is no usable one.
        """
        try:
            data = read_json_file(self.path)
        except (OSError, ValueError) as e:
            logger.warning(f"Stored credential is unreadable, clearing it: {e}")
            self.clear()
            return None

        if data is None:
            return None

        api_key = data.get("api_key")
        entity = data.get("entity", "")
        if not isinstance(api_key, str) or not isinstance(entity, str):
            logger.warning("Stored credential is malformed, clearing it")
            self.clear()
            return None

        try:
            return validate_credential(api_key, entity)
        except InvalidCredentialError as e:
            logger.warning(f"Stored credential appears corrupted, clearing it: {e}")
            self.clear()
            return None

    def clear(self) -> None:
        """Remove the stored credential, if any."""
        with contextlib.suppress(FileNotFoundError):
            self.path.unlink()
