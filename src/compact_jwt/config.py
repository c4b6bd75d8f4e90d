"""Application configuration management."""

from __future__ import annotations

import os
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import HS256, RS256, SERVICE_NAME, SUPPORTED_ALGORITHMS
from .logging import DEFAULT_LOG_LEVEL


class ConfigError(RuntimeError):
    """Raised when application configuration is invalid."""


class AppConfig(BaseModel):
    """Validated configuration for building the default signing key."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Root log level")
    service_name: str = Field(default=SERVICE_NAME, description="Service identifier")
    environment: str = Field(default="development", description="Deployment environment tag")
    signing_algorithm: str = Field(
        default=HS256, description="Algorithm of the default signing key (HS256 or RS256)"
    )
    hmac_secret: Optional[str] = Field(
        default=None, repr=False, description="Shared secret for HS256 keys"
    )
    rsa_private_key_path: Optional[str] = Field(
        default=None, description="PEM file holding the RS256 private key"
    )
    rsa_public_key_path: Optional[str] = Field(
        default=None, description="PEM file holding an RS256 public key (verify only)"
    )
    rsa_key_password: Optional[str] = Field(
        default=None, repr=False, description="Password protecting the RS256 private key PEM"
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        from logging import getLevelName

        candidate = value.upper()
        resolved = getLevelName(candidate)
        if isinstance(resolved, int):
            return candidate
        raise ValueError(f"Unsupported log level '{value}'")

    @field_validator("signing_algorithm")
    @classmethod
    def _normalise_algorithm(cls, value: str) -> str:
        algorithm = value.strip().upper()
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported signing algorithm '{value}'")
        return algorithm

    @field_validator("hmac_secret", "rsa_private_key_path", "rsa_public_key_path", "rsa_key_password")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value

    @property
    def uses_rsa(self) -> bool:
        return self.signing_algorithm == RS256

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables (respecting .env)."""
        load_dotenv(find_dotenv(usecwd=True))
        raw: dict[str, Any] = {
            "log_level": os.getenv("LOG_LEVEL", cls.model_fields["log_level"].default),
            "service_name": os.getenv("SERVICE_NAME", cls.model_fields["service_name"].default),
            "environment": os.getenv("ENVIRONMENT", cls.model_fields["environment"].default),
            "signing_algorithm": os.getenv(
                "JWT_ALGORITHM", cls.model_fields["signing_algorithm"].default
            ),
            "hmac_secret": os.getenv("JWT_HMAC_SECRET"),
            "rsa_private_key_path": os.getenv("JWT_RSA_PRIVATE_KEY_PATH"),
            "rsa_public_key_path": os.getenv("JWT_RSA_PUBLIC_KEY_PATH"),
            "rsa_key_password": os.getenv("JWT_RSA_KEY_PASSWORD"),
        }
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise ConfigError("Invalid application configuration") from exc


def load_config() -> AppConfig:
    """Convenience helper to load configuration with error propagation."""
    return AppConfig.from_env()
