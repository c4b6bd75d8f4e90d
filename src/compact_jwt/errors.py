"""Error taxonomy for token signing and verification."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class JwtErrorCode(str, Enum):
    INVALID_INPUT = "InvalidInput"
    SIGNING_NOT_PERMITTED = "SigningNotPermitted"
    DECODE_ERROR = "DecodeError"
    KEY_DISPOSED = "KeyDisposed"


class JwtError(RuntimeError):
    """Base error for compact JWT failures."""

    code: Optional[JwtErrorCode] = None

    def __init__(self, message: str, *, details: Optional[dict[str, str]] = None) -> None:
        super().__init__(message)
        self.details = details or {}

    def __str__(self) -> str:
        base = str(self.args[0]) if self.code is None else f"{self.code.value}: {self.args[0]}"
        if self.details:
            return f"{base} ({self.details})"
        return base


class InvalidInputError(JwtError, ValueError):
    """Raised when a sign/verify precondition is violated."""

    code = JwtErrorCode.INVALID_INPUT


class SigningNotPermittedError(JwtError):
    """Raised when a verify-only key is asked to sign."""

    code = JwtErrorCode.SIGNING_NOT_PERMITTED


class DecodeError(JwtError, ValueError):
    """Raised when base64url input cannot be decoded."""

    code = JwtErrorCode.DECODE_ERROR


class KeyDisposedError(JwtError):
    """Raised when a closed key is used."""

    code = JwtErrorCode.KEY_DISPOSED


__all__ = [
    "DecodeError",
    "InvalidInputError",
    "JwtError",
    "JwtErrorCode",
    "KeyDisposedError",
    "SigningNotPermittedError",
]
