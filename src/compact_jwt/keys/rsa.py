"""RSA-SHA256 (RS256) signing key."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from jose import jwk
from jose.exceptions import JWKError

from ..constants import DEFAULT_RSA_KEY_SIZE, RS256
from ..errors import InvalidInputError, SigningNotPermittedError
from ..logging import get_logger
from .interface import (
    require_encoded_token,
    require_open,
    require_signature,
    signing_input_bytes,
)

logger = get_logger(__name__)

RsaKeyMaterial = Union[rsa.RSAPrivateKey, rsa.RSAPublicKey]


class RsaKey:
    """Asymmetric RS256 key holding either a key pair or a public key only.

    Signatures use PKCS#1 v1.5 padding over a SHA-256 digest. Verification
    only needs the public component, so public-only keys can verify but
    :meth:`generate_signature` raises :class:`SigningNotPermittedError`.
    """

    def __init__(self, key: RsaKeyMaterial) -> None:
        if isinstance(key, rsa.RSAPrivateKey):
            self._private: Optional[rsa.RSAPrivateKey] = key
            self._public: Optional[rsa.RSAPublicKey] = key.public_key()
        elif isinstance(key, rsa.RSAPublicKey):
            self._private = None
            self._public = key
        else:
            raise InvalidInputError(
                "RsaKey requires an RSA private or public key",
                details={"type": type(key).__name__},
            )
        self._closed = False

    # Construction -----------------------------------------------------
    @classmethod
    def generate(cls, key_size: int = DEFAULT_RSA_KEY_SIZE) -> RsaKey:
        """Create a key backed by a freshly generated key pair."""
        return cls(rsa.generate_private_key(public_exponent=65537, key_size=key_size))

    @classmethod
    def from_pem(cls, data: Union[bytes, str], password: Union[bytes, str, None] = None) -> RsaKey:
        """Load a private or public RSA key from PEM text."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        if isinstance(password, str):
            password = password.encode("utf-8")

        try:
            if b"PRIVATE KEY" in data:
                loaded: Any = serialization.load_pem_private_key(data, password=password)
            else:
                loaded = serialization.load_pem_public_key(data)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise InvalidInputError("Unable to load RSA key from PEM") from exc
        return cls(loaded)

    @classmethod
    def from_jwk(cls, data: Mapping[str, Any]) -> RsaKey:
        """Load an RSA key from a JWK mapping (``kty`` must be ``RSA``)."""
        if not isinstance(data, Mapping):
            raise InvalidInputError("JWK must be a mapping", details={"type": type(data).__name__})
        if data.get("kty") != "RSA":
            raise InvalidInputError("JWK is not an RSA key", details={"kty": str(data.get("kty"))})
        try:
            constructed = jwk.construct(dict(data), algorithm=RS256)
        except (JWKError, KeyError, ValueError) as exc:
            raise InvalidInputError("Unable to load RSA key from JWK") from exc
        return cls.from_pem(constructed.to_pem())

    # Capability -------------------------------------------------------
    @property
    def algorithm(self) -> str:
        return RS256

    @property
    def can_sign(self) -> bool:
        return self._private is not None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def key_size(self) -> int:
        require_open(self._closed, RS256)
        assert self._public is not None
        return self._public.key_size

    def public_key(self) -> RsaKey:
        """Return a separate, verify-only key for the public component."""
        require_open(self._closed, RS256)
        assert self._public is not None
        return RsaKey(self._public.public_numbers().public_key())

    def public_pem(self) -> str:
        require_open(self._closed, RS256)
        assert self._public is not None
        return self._public.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode("ascii")

    def to_jwk(self) -> dict[str, Any]:
        """Export the public component as an RS256 JWK."""
        return jwk.construct(self.public_pem(), algorithm=RS256).to_dict()

    # Sign / verify ----------------------------------------------------
    def generate_signature(self, encoded_token: str) -> bytes:
        require_encoded_token(encoded_token)
        require_open(self._closed, RS256)
        if self._private is None:
            raise SigningNotPermittedError("No private key information is available")
        return self._private.sign(
            signing_input_bytes(encoded_token), padding.PKCS1v15(), hashes.SHA256()
        )

    def is_signature_valid(self, encoded_token: str, signature: bytes) -> bool:
        require_encoded_token(encoded_token)
        candidate = require_signature(signature)
        require_open(self._closed, RS256)
        assert self._public is not None

        # PKCS#1 signatures are exactly as long as the modulus.
        if len(candidate) != (self._public.key_size + 7) // 8:
            return False
        try:
            payload = signing_input_bytes(encoded_token)
        except InvalidInputError:
            return False

        try:
            self._public.verify(candidate, payload, padding.PKCS1v15(), hashes.SHA256())
        except InvalidSignature:
            logger.debug("key.signature_rejected", algorithm=RS256)
            return False
        return True

    # Lifecycle --------------------------------------------------------
    def close(self) -> None:
        if self._closed:
            return
        self._private = None
        self._public = None
        self._closed = True
        logger.debug("key.closed", algorithm=RS256)

    def __enter__(self) -> RsaKey:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        if self._closed:
            return f"RsaKey(algorithm={RS256!r}, closed)"
        material = "private" if self.can_sign else "public"
        return f"RsaKey(algorithm={RS256!r}, {material}, key_size={self.key_size})"


__all__ = ["RsaKey", "RsaKeyMaterial"]
