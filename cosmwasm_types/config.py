"""
cosmwasm_types.config — codec limits and decoding policy.

Configuration precedence:
  1) Environment variables (CW_TYPES_*)
  2) Hardcoded safe defaults below

Key env vars (case-insensitive where boolean):
  - CW_TYPES_MAX_MESSAGE_BYTES         (int)  default: 4_194_304  (4 MiB)
  - CW_TYPES_MAX_REPEATED              (int)  default: 65_536
  - CW_TYPES_REJECT_DUPLICATE_VARIANTS (bool) default: false
  - CW_TYPES_LOG_FORMAT                (str)  default: auto (json|text)
  - CW_TYPES_LOG_LEVEL                 (str)  default: INFO

Usage:
    from cosmwasm_types.config import load_config
    CFG = load_config()
    if CFG.reject_duplicate_variants: ...

Decoders take an optional `config=` argument; tests build their own
`CodecConfig` instead of mutating the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any, Dict, Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "t", "yes", "y", "on")


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    return max(min_v, min(max_v, v))


def _env_str(name: str, default: Optional[str]) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class CodecConfig:
    # Size caps enforced by the decoder
    max_message_bytes: int = 4_194_304
    max_repeated: int = 65_536

    # Oneof policy: False = last variant wins, True = duplicates are Malformed
    reject_duplicate_variants: bool = False

    # Logging (consumed by the CLI; the library never configures handlers)
    log_format: Optional[str] = None
    log_level: str = "INFO"

    def with_overrides(self, **changes: Any) -> "CodecConfig":
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "max_message_bytes": self.max_message_bytes,
            "max_repeated": self.max_repeated,
            "reject_duplicate_variants": self.reject_duplicate_variants,
            "log_format": self.log_format,
            "log_level": self.log_level,
        }


@lru_cache(maxsize=1)
def load_config() -> CodecConfig:
    """Build and cache a CodecConfig from environment + safe defaults."""
    return CodecConfig(
        max_message_bytes=_env_int(
            "CW_TYPES_MAX_MESSAGE_BYTES", 4_194_304, min_v=1_024, max_v=268_435_456
        ),
        max_repeated=_env_int("CW_TYPES_MAX_REPEATED", 65_536, min_v=16, max_v=16_777_216),
        reject_duplicate_variants=_env_bool("CW_TYPES_REJECT_DUPLICATE_VARIANTS", False),
        log_format=_env_str("CW_TYPES_LOG_FORMAT", None),
        log_level=_env_str("CW_TYPES_LOG_LEVEL", "INFO") or "INFO",
    )


__all__ = ["CodecConfig", "load_config"]
