"""HMAC-SHA256 (HS256) signing key."""

from __future__ import annotations

import hashlib
import hmac
from typing import Optional, Union

from ..constants import HS256, HS256_SIGNATURE_LENGTH
from ..errors import InvalidInputError
from ..logging import get_logger
from .interface import (
    require_encoded_token,
    require_open,
    require_signature,
    signing_input_bytes,
)

logger = get_logger(__name__)

Secret = Union[bytes, bytearray, memoryview, str]


class HmacKey:
    """Symmetric HS256 key wrapping a shared secret.

    The secret is copied into a buffer owned by the key and a keyed SHA-256
    context is prepared once; each operation works on a copy of that context.
    Not thread safe: use one instance per thread or serialize access.
    """

    def __init__(self, secret: Secret) -> None:
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not isinstance(secret, (bytes, bytearray, memoryview)):
            raise InvalidInputError(
                "HMAC secret must be bytes or str", details={"type": type(secret).__name__}
            )
        self._secret = bytearray(secret)
        self._context: Optional[hmac.HMAC] = hmac.new(bytes(self._secret), digestmod=hashlib.sha256)

    @property
    def algorithm(self) -> str:
        return HS256

    @property
    def can_sign(self) -> bool:
        return True

    @property
    def closed(self) -> bool:
        return self._context is None

    def generate_signature(self, encoded_token: str) -> bytes:
        require_encoded_token(encoded_token)
        require_open(self.closed, HS256)
        return self._digest(signing_input_bytes(encoded_token))

    def is_signature_valid(self, encoded_token: str, signature: bytes) -> bool:
        require_encoded_token(encoded_token)
        candidate = require_signature(signature)
        require_open(self.closed, HS256)

        # Length is public, so rejecting early reveals nothing about the secret.
        if len(candidate) != HS256_SIGNATURE_LENGTH:
            return False
        try:
            payload = signing_input_bytes(encoded_token)
        except InvalidInputError:
            return False

        valid = hmac.compare_digest(self._digest(payload), candidate)
        if not valid:
            logger.debug("key.signature_rejected", algorithm=HS256)
        return valid

    def close(self) -> None:
        if self._context is None:
            return
        for index in range(len(self._secret)):
            self._secret[index] = 0
        self._context = None
        logger.debug("key.closed", algorithm=HS256)

    def __enter__(self) -> HmacKey:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"HmacKey(algorithm={HS256!r}, {state})"

    def _digest(self, payload: bytes) -> bytes:
        assert self._context is not None
        context = self._context.copy()
        context.update(payload)
        return context.digest()


__all__ = ["HmacKey", "Secret"]
