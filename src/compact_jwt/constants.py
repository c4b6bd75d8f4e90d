"""Shared constants for compact JWT issuance."""

SERVICE_NAME = "compact-jwt"
TOKEN_TYPE = "JWT"
SEGMENT_SEPARATOR = "."

HS256 = "HS256"
RS256 = "RS256"
SUPPORTED_ALGORITHMS = (HS256, RS256)

HS256_SIGNATURE_LENGTH = 32
DEFAULT_RSA_KEY_SIZE = 2048
