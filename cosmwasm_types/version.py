"""cosmwasm_types.version — semantic version of the interchange schema package.

Resolution order (first match wins):
- CW_TYPES_VERSION environment variable (exact value)
- installed distribution metadata for 'cosmwasm-types'
- BASE_VERSION + '+dev'

Bump BASE_VERSION on any change to the wire format or field tag table.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import metadata as importlib_metadata
from typing import Optional

BASE_VERSION = "0.1.0"
DIST_NAME = "cosmwasm-types"


def _pkg_metadata_version(dist_name: str = DIST_NAME) -> Optional[str]:
    try:
        v = importlib_metadata.version(dist_name)
    except importlib_metadata.PackageNotFoundError:
        return None
    return v if v and v != "0.0.0" else None


@lru_cache(maxsize=1)
def compute_version() -> str:
    env = os.getenv("CW_TYPES_VERSION")
    if env:
        return env
    return _pkg_metadata_version() or f"{BASE_VERSION}+dev"


__version__ = compute_version()

__all__ = ["__version__", "BASE_VERSION", "compute_version"]
