"""Compact, signed JSON Web Token issuance."""

from importlib import metadata

from .assembler import TokenAssembler, generate_token
from .errors import (
    DecodeError,
    InvalidInputError,
    JwtError,
    JwtErrorCode,
    KeyDisposedError,
    SigningNotPermittedError,
)
from .keys import HmacKey, RsaKey, SignatureKey

try:
    __version__ = metadata.version("compact-jwt")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "HmacKey",
    "InvalidInputError",
    "JwtError",
    "JwtErrorCode",
    "KeyDisposedError",
    "RsaKey",
    "SignatureKey",
    "SigningNotPermittedError",
    "TokenAssembler",
    "__version__",
    "generate_token",
]
