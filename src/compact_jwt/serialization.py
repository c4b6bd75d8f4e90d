"""Canonical JSON serialization for token headers and claim sets."""

from __future__ import annotations

import json
from typing import Any, Callable

Serializer = Callable[[Any], bytes]


def canonical_json(value: Any) -> bytes:
    """Serialize ``value`` to compact UTF-8 JSON.

    Mapping keys keep their insertion order, so the same mapping built the
    same way always yields the same bytes. NaN and infinities are rejected
    because they have no JSON representation.
    """
    return json.dumps(
        value,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


__all__ = ["Serializer", "canonical_json"]
