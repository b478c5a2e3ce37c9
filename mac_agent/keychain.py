"""OS credential store facade, scoped to a single keyring service name."""

from __future__ import annotations

import logging

import keyring
from keyring.errors import PasswordDeleteError

logger = logging.getLogger(__name__)

DEFAULT_SERVICE = "mac-agent"


class KeychainError(Exception):
    """The credential store rejected or failed an operation.

    Backends raise KeyringError as well as platform errors (pywintypes.error,
    macOS api.Error); all of them end up here.
    """


class KeychainService:
    """Stores API keys and tokens in the OS keychain.

    Keys are caller-supplied strings; all entries live under ``service``.
    """

    def __init__(self, service: str = DEFAULT_SERVICE):
        self.service = service

    def set_secret(self, key: str, value: str) -> None:
        """Store or overwrite a secret."""
        try:
            keyring.set_password(self.service, key, value)
        except Exception as exc:
            logger.warning("Keychain write failed for %s/%s: %s", self.service, key, exc)
            raise KeychainError(str(exc) or type(exc).__name__) from exc

    def get_secret(self, key: str) -> str | None:
        """Return the stored secret, or None when no entry exists."""
        try:
            return keyring.get_password(self.service, key)
        except Exception as exc:
            logger.warning("Keychain read failed for %s/%s: %s", self.service, key, exc)
            raise KeychainError(str(exc) or type(exc).__name__) from exc

    def delete_secret(self, key: str) -> None:
        """Remove a secret. Deleting a missing entry is not an error."""
        try:
            keyring.delete_password(self.service, key)
        except PasswordDeleteError:
            logger.debug("No keychain entry for %s/%s, nothing to delete", self.service, key)
        except Exception as exc:
            logger.warning("Keychain delete failed for %s/%s: %s", self.service, key, exc)
            raise KeychainError(str(exc) or type(exc).__name__) from exc
