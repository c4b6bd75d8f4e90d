"""Padding-free base64url codec used for every token segment."""

from __future__ import annotations

import base64

from .errors import DecodeError

_PADDING = {0: "", 2: "==", 3: "="}


def encode(data: bytes) -> str:
    """Return the unpadded base64url form of ``data``."""
    return base64.urlsafe_b64encode(bytes(data)).rstrip(b"=").decode("ascii")


def decode(value: str) -> bytes:
    """Decode an unpadded base64url string.

    Padding is restored from the length of the input: a remainder of 2 gets
    ``==``, 3 gets ``=`` and 0 nothing. A remainder of 1 can never come out of
    :func:`encode` and is rejected, as is any character outside the alphabet.
    """
    if not isinstance(value, str):
        raise DecodeError(f"Expected str, got {type(value).__name__}")

    standard = value.replace("-", "+").replace("_", "/")
    padding = _PADDING.get(len(standard) % 4)
    if padding is None:
        raise DecodeError("Malformed base64url input", details={"length": str(len(value))})
    try:
        return base64.b64decode(standard + padding, validate=True)
    except ValueError as exc:
        raise DecodeError("Invalid base64url input") from exc


__all__ = ["decode", "encode"]
