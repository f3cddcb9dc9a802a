"""
cosmwasm_types.errors
---------------------

Error system for the host/contract interchange codec.

- One root `CodecError` with a machine-stable `code` and JSON-safe `data`.
- `EncodeError` for values that cannot be put on the wire.
- `DecodeError` and its kinds for every way a byte stream can be rejected:
  MissingField, Malformed, Truncated, UnknownVariant, InvalidEncoding.
- `UnwrapPanic` for misuse of the test-only accessors on ContractResult.

Decoders never return partially populated objects; they raise one of these.
The contract-level business error (`Err("...")`) is a decoded *value*, not an
exception, and never appears here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class CodecErrorCode(str, Enum):
    ENCODE = "CODEC/ENCODE"
    MISSING_FIELD = "CODEC/MISSING_FIELD"
    MALFORMED = "CODEC/MALFORMED"
    TRUNCATED = "CODEC/TRUNCATED"
    UNKNOWN_VARIANT = "CODEC/UNKNOWN_VARIANT"
    INVALID_ENCODING = "CODEC/INVALID_ENCODING"
    PAYLOAD_TOO_LARGE = "CODEC/PAYLOAD_TOO_LARGE"


@dataclass(eq=False)
class CodecError(Exception):
    """
    Root error for the codec.

    Attributes
    ----------
    code: str
        Machine-stable error code (see CodecErrorCode).
    message: str
        Human hint suitable for logs.
    data: dict
        Machine data (type name, field, offset, path). JSON-serializable.
    cause: Optional[BaseException]
        Wrapped original exception; excluded from repr.
    """

    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        super().__init__(f"{self.code}: {self.message}")

    def with_context(self, **ctx: Any) -> "CodecError":
        """Return a copy of this error with extra context merged into `data`."""
        err = _clone(self)
        err.data = {**self.data, **_jsonmap(ctx)}
        return err

    def to_dict(self, include_cause: bool = False) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "code": str(getattr(self.code, "value", self.code)),
            "message": self.message,
            "data": _jsonmap(self.data),
        }
        if include_cause and self.cause is not None:
            out["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
        return out

    def __str__(self) -> str:  # pragma: no cover - human formatting
        code = getattr(self.code, "value", self.code)
        if not self.data:
            return f"{code}: {self.message}"
        preview = ", ".join(f"{k}={_preview(v)}" for k, v in self.data.items())
        return f"{code}: {self.message} [{preview}]"


class EncodeError(CodecError):
    def __init__(self, message: str = "cannot encode value", *,
                 cause: Optional[BaseException] = None, **data: Any) -> None:
        super().__init__(code=CodecErrorCode.ENCODE, message=message, data=_jsonmap(data), cause=cause)


class DecodeError(CodecError):
    """Base class of every decode failure."""

    default_code = CodecErrorCode.MALFORMED
    default_message = "decode failed"

    def __init__(self, message: Optional[str] = None, *,
                 cause: Optional[BaseException] = None, **data: Any) -> None:
        super().__init__(
            code=self.default_code,
            message=message or self.default_message,
            data=_jsonmap(data),
            cause=cause,
        )


class MissingField(DecodeError):
    default_code = CodecErrorCode.MISSING_FIELD
    default_message = "required field missing"

    def __init__(self, type_name: str, field_name: str, **data: Any) -> None:
        super().__init__(
            f"{type_name}.{field_name} is required",
            type=type_name,
            field=field_name,
            **data,
        )


class Malformed(DecodeError):
    default_code = CodecErrorCode.MALFORMED
    default_message = "malformed input"


class Truncated(DecodeError):
    default_code = CodecErrorCode.TRUNCATED
    default_message = "input ends mid-field"


class UnknownVariant(DecodeError):
    default_code = CodecErrorCode.UNKNOWN_VARIANT
    default_message = "unknown union variant"

    def __init__(self, union: str, tag: int, **data: Any) -> None:
        super().__init__(f"{union} has no variant with tag {tag}", type=union, tag=tag, **data)


class InvalidEncoding(DecodeError):
    default_code = CodecErrorCode.INVALID_ENCODING
    default_message = "semantically invalid encoding"


class PayloadTooLarge(Malformed):
    default_code = CodecErrorCode.PAYLOAD_TOO_LARGE
    default_message = "payload exceeds configured size"


class UnwrapPanic(BaseException):
    """
    Raised by the test-only ContractResult accessors on misuse.

    Derives from BaseException so that generic `except Exception` handlers do
    not recover from it.
    """


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _clone(err: CodecError) -> CodecError:
    new = Exception.__new__(type(err))
    new.__dict__.update(err.__dict__)
    Exception.__init__(new, *err.args)
    return new


def _jsonmap(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _coerce_json(v) for k, v in data.items()}


def _coerce_json(v: Any) -> Any:
    if v is None or isinstance(v, (bool, int, float, str)):
        return v
    if isinstance(v, Enum):
        return v.value
    if isinstance(v, (bytes, bytearray, memoryview)):
        return bytes(v).hex()
    if isinstance(v, (list, tuple)):
        return [_coerce_json(x) for x in v]
    if isinstance(v, dict):
        return {str(k): _coerce_json(x) for k, x in v.items()}
    return str(v)


def _preview(v: Any, limit: int = 96) -> str:
    s = str(_coerce_json(v))
    return s if len(s) <= limit else s[:limit] + "…"


__all__ = [
    "CodecErrorCode",
    "CodecError",
    "EncodeError",
    "DecodeError",
    "MissingField",
    "Malformed",
    "Truncated",
    "UnknownVariant",
    "InvalidEncoding",
    "PayloadTooLarge",
    "UnwrapPanic",
]
