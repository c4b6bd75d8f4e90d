"""Shared fixtures for the compact JWT test suite."""

from __future__ import annotations

import base64
import logging

import pytest
import structlog
from cryptography.hazmat.primitives.asymmetric import rsa

from compact_jwt import RsaKey
from compact_jwt.logging import PACKAGE_LOGGER

# 1024-bit key pair (modulus, exponent and CRT parameters, base64) with a known RS256 vector.
FIXED_RSA_PARAMETERS = {
    "n": "3ZWrUY0Y6IKN1qI4BhxR2C7oHVFgGPYkd38uGq1jQNSqEvJFcN93CYm16/G78FAFKWqwsJb3Wx+nbxDn6LtP4AhULB1H0K0g7/jLklDAHvI8yhOKlvoyvsUFPWtNxlJyh5JJXvkNKV/4Oo12e69f8QCuQ6NpEPl+cSvXIqUYBCs=",
    "e": "AQAB",
    "p": "8sINkf+7d0NjhNvsqN/NgiyXa5Ui1UTlisG+LW9j44WOFwMFfHdb8tEXp8UwfiuTLue7lUkx7azCtBgLRa/N9w==",
    "q": "6avx20OHo61Yela/4k5kQDtjEf1N0LfI+BcWZtxsS3jDM3i1Hp0KSu5rsCPb8acJo5RO26gGVrfAsDcIXKC+bQ==",
    "dp": "ZZ2XIpsitLyPpuiMOvBbzPavd4gY6Z8KWrfYzJoI/Q9FuBo6rKwl4BFoToD7WIUS+hpkagwWiz+6zLoX1dbOZw==",
    "dq": "CmH5fSSjAkLRi54PKJ8TFUeOP15h9sQzydI8zJU+upvDEKZsZc/UhT/SySDOxQ4G/523Y0sz/OZtSWcol/UMgQ==",
    "qi": "Lesy++GdvoIDLfJX5GBQpuFgFenRiRDabxrE9MNUZ2aPFaFp+DyAe+b4nDwuJaW2LURbr8AEZga7oQj0uYxcYw==",
    "d": "D+onAtVye4ic7VR7V50DF9bOnwRwNXrARcDhq9LWNRrRGElESYYTQ6EbatXS3MCyjjX2eMhu/aF5YhXBwkppwxg+EOmXeh+MzL7Zh284OuPbkglAaGhV9bb6/5CpuGb1esyPbYW+Ty2PC0GSZfIXkXs76jXAu9TOBvD0ybc2Ylk=",
}


def _int(value: str) -> int:
    return int.from_bytes(base64.b64decode(value), "big")


@pytest.fixture(scope="session")
def fixed_rsa_private_key() -> rsa.RSAPrivateKey:
    params = {name: _int(value) for name, value in FIXED_RSA_PARAMETERS.items()}
    public_numbers = rsa.RSAPublicNumbers(e=params["e"], n=params["n"])
    return rsa.RSAPrivateNumbers(
        p=params["p"],
        q=params["q"],
        d=params["d"],
        dmp1=params["dp"],
        dmq1=params["dq"],
        iqmp=params["qi"],
        public_numbers=public_numbers,
    ).private_key()


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def rsa_key(rsa_private_key: rsa.RSAPrivateKey):
    with RsaKey(rsa_private_key) as key:
        yield key


@pytest.fixture
def rsa_public_key(rsa_private_key: rsa.RSAPrivateKey):
    with RsaKey(rsa_private_key.public_key()) as key:
        yield key


_CONFIG_ENV_VARS = (
    "LOG_LEVEL",
    "SERVICE_NAME",
    "ENVIRONMENT",
    "JWT_ALGORITHM",
    "JWT_HMAC_SECRET",
    "JWT_RSA_PRIVATE_KEY_PATH",
    "JWT_RSA_PUBLIC_KEY_PATH",
    "JWT_RSA_KEY_PASSWORD",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Remove configuration variables and run from an empty directory."""
    for name in _CONFIG_ENV_VARS:
        # setenv first so teardown also removes values a .env file injects
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # Keep a stray .env in the working tree from leaking into the tests.
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo handler and level changes made by ``setup_logging`` in a test."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    saved = (list(package_logger.handlers), package_logger.level, package_logger.propagate)
    yield
    package_logger.handlers, package_logger.level, package_logger.propagate = (
        saved[0],
        saved[1],
        saved[2],
    )
    structlog.reset_defaults()
