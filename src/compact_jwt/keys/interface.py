"""Typed interface shared by every token signing key."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..errors import InvalidInputError, KeyDisposedError


@runtime_checkable
class SignatureKey(Protocol):
    """Capability to sign and verify the encoded ``header.claims`` segment.

    ``algorithm`` is the value written to the token header ``alg`` field and
    ``can_sign`` reports whether :meth:`generate_signature` may be called.
    Implementations own their key material exclusively and release it on
    :meth:`close`. A single instance is not safe for concurrent use.
    """

    @property
    def algorithm(self) -> str:
        """Header ``alg`` identifier for this key."""

    @property
    def can_sign(self) -> bool:
        """True when the key holds material that can produce signatures."""

    @property
    def closed(self) -> bool:
        """True once :meth:`close` has released the key material."""

    def generate_signature(self, encoded_token: str) -> bytes:
        """Sign ``encoded_token`` (the ``header.claims`` segments)."""

    def is_signature_valid(self, encoded_token: str, signature: bytes) -> bool:
        """Return True when ``signature`` matches ``encoded_token``."""

    def close(self) -> None:
        """Release the key material."""


def require_encoded_token(encoded_token: Any) -> str:
    if not isinstance(encoded_token, str) or not encoded_token.strip():
        raise InvalidInputError("encoded_token must be a non-empty string")
    return encoded_token


def require_signature(signature: Any) -> bytes:
    if signature is None:
        raise InvalidInputError("signature is required")
    if not isinstance(signature, (bytes, bytearray, memoryview)):
        raise InvalidInputError(
            "signature must be bytes", details={"type": type(signature).__name__}
        )
    return bytes(signature)


def require_open(closed: bool, algorithm: str) -> None:
    if closed:
        raise KeyDisposedError("Key material has been released", details={"algorithm": algorithm})


def signing_input_bytes(encoded_token: str) -> bytes:
    """Return the ASCII bytes that are signed for ``encoded_token``."""
    try:
        return encoded_token.encode("ascii")
    except UnicodeEncodeError as exc:
        raise InvalidInputError("encoded_token must contain only ASCII characters") from exc


__all__ = [
    "SignatureKey",
    "require_encoded_token",
    "require_open",
    "require_signature",
    "signing_input_bytes",
]
