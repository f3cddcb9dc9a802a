"""
cosmwasm_types.encoding
=======================

Wire codec for the interchange schema:

- wire.py:   varints, field keys, length-delimited framing, bounded Reader
- schema.py: schema-driven encode/decode/validate engine shared by all types

Only the generic entry points are re-exported here.
"""

from __future__ import annotations

from .schema import Message, decode, encode, from_dict, to_dict
from .wire import WireType

__all__ = ["Message", "encode", "decode", "to_dict", "from_dict", "WireType"]
