"""PBKDF2-HMAC-SHA256 password hashing.

Encoded form: pbkdf2$sha256$<iterations>$<salt b64>$<hash b64>
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets

_SCHEME = "pbkdf2"
_DIGEST = "sha256"


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _b64decode(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


class Pbkdf2PasswordHasher:
    def __init__(self, iterations: int = 200_000, salt_bytes: int = 16) -> None:
        self._iterations = iterations
        self._salt_bytes = salt_bytes

    def hash(self, password: str) -> str:
        salt = secrets.token_bytes(self._salt_bytes)
        derived = hashlib.pbkdf2_hmac(_DIGEST, password.encode("utf-8"), salt, self._iterations)
        return f"{_SCHEME}${_DIGEST}${self._iterations}${_b64encode(salt)}${_b64encode(derived)}"

    def verify(self, password: str, hashed: str) -> bool:
        """Constant-time check; malformed stored hashes simply fail."""
        try:
            scheme, digest, iterations, salt, expected = hashed.split("$")
            if scheme != _SCHEME:
                return False
            derived = hashlib.pbkdf2_hmac(
                digest, password.encode("utf-8"), _b64decode(salt), int(iterations)
            )
            return hmac.compare_digest(derived, _b64decode(expected))
        except (ValueError, TypeError):
            return False
