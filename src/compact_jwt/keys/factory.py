"""Build the configured signing key."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from ..config import AppConfig, ConfigError
from ..constants import HS256, RS256
from ..errors import InvalidInputError
from ..logging import get_logger
from .hmac import HmacKey
from .rsa import RsaKey

logger = get_logger(__name__)


def _read_pem(raw_path: str) -> bytes:
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ConfigError(f"Unable to read key file '{path}'") from exc


def build_signature_key(config: AppConfig) -> Union[HmacKey, RsaKey]:
    """Instantiate the key selected by ``config.signing_algorithm``.

    RS256 prefers the private key path; a public key path alone yields a
    verify-only key.
    """
    algorithm = config.signing_algorithm
    if algorithm == HS256:
        if not config.hmac_secret:
            raise ConfigError("JWT_HMAC_SECRET must be set when JWT_ALGORITHM=HS256")
        logger.debug("key.build", algorithm=algorithm)
        return HmacKey(config.hmac_secret)

    if algorithm == RS256:
        if config.rsa_private_key_path:
            pem = _read_pem(config.rsa_private_key_path)
            password = config.rsa_key_password
        elif config.rsa_public_key_path:
            pem = _read_pem(config.rsa_public_key_path)
            password = None
        else:
            raise ConfigError(
                "JWT_RSA_PRIVATE_KEY_PATH or JWT_RSA_PUBLIC_KEY_PATH must be set when JWT_ALGORITHM=RS256"
            )
        try:
            key = RsaKey.from_pem(pem, password=password)
        except InvalidInputError as exc:
            raise ConfigError("Configured RSA key could not be loaded") from exc
        logger.debug("key.build", algorithm=algorithm, canSign=key.can_sign)
        return key

    raise ConfigError(f"Unsupported signing algorithm '{algorithm}'")


__all__ = ["build_signature_key"]
