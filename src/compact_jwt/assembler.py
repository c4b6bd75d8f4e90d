"""Compact JWT assembly: header, claims and signature segments."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from . import codec
from .constants import SEGMENT_SEPARATOR, TOKEN_TYPE
from .errors import InvalidInputError
from .keys.interface import SignatureKey
from .logging import get_logger
from .serialization import Serializer, canonical_json

logger = get_logger(__name__)

ClaimSet = Mapping[str, Any]


class TokenAssembler:
    """Builds ``header.claims.signature`` tokens signed by a :class:`SignatureKey`.

    The header is always ``{"typ": "JWT", "alg": key.algorithm}``; callers
    cannot add or override header fields. The signature is computed over the
    encoded ``header.claims`` text exactly as it appears in the token, and any
    error raised by the key propagates unchanged.

    The assembler keeps no state between calls, so one instance can be shared
    freely as long as each call gets a key that is not in use elsewhere.
    """

    def __init__(self, serializer: Serializer = canonical_json) -> None:
        self._serializer = serializer

    def build_header(self, key: SignatureKey) -> dict[str, str]:
        return {"typ": TOKEN_TYPE, "alg": key.algorithm}

    def encode_segment(self, value: Any) -> str:
        try:
            payload = self._serializer(value)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError("Value is not JSON serialisable") from exc
        return codec.encode(payload)

    def signing_input(self, claims: ClaimSet, key: SignatureKey) -> str:
        """Return the encoded ``header.claims`` text that ``key`` signs."""
        if not isinstance(claims, Mapping):
            raise InvalidInputError(
                "claims must be a mapping", details={"type": type(claims).__name__}
            )
        header_segment = self.encode_segment(self.build_header(key))
        claims_segment = self.encode_segment(claims)
        return f"{header_segment}{SEGMENT_SEPARATOR}{claims_segment}"

    def generate(self, claims: ClaimSet, key: SignatureKey) -> str:
        """Sign ``claims`` with ``key`` and return the compact token."""
        signing_input = self.signing_input(claims, key)
        signature = key.generate_signature(signing_input)
        token = f"{signing_input}{SEGMENT_SEPARATOR}{codec.encode(signature)}"
        logger.debug("token.generated", algorithm=key.algorithm, length=len(token))
        return token


_default_assembler = TokenAssembler()


def generate_token(claims: ClaimSet, key: SignatureKey) -> str:
    """Sign ``claims`` with the default assembler."""
    return _default_assembler.generate(claims, key)


__all__ = ["ClaimSet", "TokenAssembler", "generate_token"]
