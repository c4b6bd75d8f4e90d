"""Signing keys for compact JWT issuance."""

from .hmac import HmacKey
from .interface import SignatureKey
from .rsa import RsaKey

__all__ = ["HmacKey", "RsaKey", "SignatureKey"]
