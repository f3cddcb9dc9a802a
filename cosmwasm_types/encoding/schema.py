"""
Schema-driven message codec.

Each message type declares a `MessageSchema`: its plain fields (number, name,
kind, label) and at most one oneof. A single engine walks that schema to
encode, decode, validate and render JSON views, so every message in the
interchange format follows the same rules:

Encoding
  - plain fields in ascending field-number order, the oneof variant first
    when the type is a union wrapper
  - REQUIRED fields are always written, even when they hold 0 or ""
  - OPTIONAL fields are written iff not None ("" is written)
  - REPEATED fields write one entry per element, in sequence order

Decoding
  - fields may appear in any order; unknown field numbers are skipped,
    except inside a union wrapper where they raise UnknownVariant
  - a repeated scalar/message field keeps every entry in wire order; a
    non-repeated field that appears twice keeps the last occurrence
  - several variants of one oneof: the last one wins unless the config
    sets `reject_duplicate_variants`, in which case Malformed is raised
  - a union wrapper nested inside another message must carry a variant
    (InvalidEncoding otherwise)
  - absent REQUIRED fields raise MissingField, absent OPTIONAL fields
    become None
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from ..config import CodecConfig, load_config
from ..errors import (DecodeError, EncodeError, InvalidEncoding, Malformed, MissingField,
                      PayloadTooLarge, UnknownVariant)
from ..logging import get_logger
from .wire import (INT64_MAX, INT64_MIN, Reader, WireType, encode_int64, encode_key,
                   encode_len_delimited, encode_string)

log = get_logger(__name__)

M = TypeVar("M", bound="Message")


class Kind(Enum):
    INT64 = "int64"
    STRING = "string"
    MESSAGE = "message"

    @property
    def wire_type(self) -> WireType:
        return WireType.VARINT if self is Kind.INT64 else WireType.LEN


class Label(Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    REPEATED = "repeated"


@dataclass(frozen=True)
class FieldSpec:
    number: int
    name: str
    kind: Kind
    label: Label = Label.REQUIRED
    message: Optional[Type["Message"]] = None


@dataclass(frozen=True)
class VariantSpec:
    """
    One case of a oneof.

    `variant` is the Python class representing the case. When `attr` is None
    the variant instance is itself the payload message (CosmosMsg cases);
    otherwise the payload lives in `variant.<attr>` (Ok.response, Err.error).
    """

    number: int
    name: str
    kind: Kind
    variant: type
    attr: Optional[str] = None
    message: Optional[Type["Message"]] = None

    def payload_of(self, value: Any) -> Any:
        return value if self.attr is None else getattr(value, self.attr)

    def build(self, payload: Any) -> Any:
        return payload if self.attr is None else self.variant(payload)

    @property
    def payload_message(self) -> Optional[Type["Message"]]:
        if self.kind is not Kind.MESSAGE:
            return None
        return self.variant if self.attr is None else self.message


@dataclass(frozen=True)
class OneofSpec:
    attr: str
    union: str
    variants: Tuple[VariantSpec, ...]

    def by_number(self, number: int) -> Optional[VariantSpec]:
        for v in self.variants:
            if v.number == number:
                return v
        return None

    def by_name(self, name: str) -> Optional[VariantSpec]:
        for v in self.variants:
            if v.name == name:
                return v
        return None

    def spec_for(self, value: Any) -> Optional[VariantSpec]:
        for v in self.variants:
            if type(value) is v.variant:
                return v
        return None


@dataclass(frozen=True)
class MessageSchema:
    name: str
    fields: Tuple[FieldSpec, ...] = ()
    oneof: Optional[OneofSpec] = None
    _by_number: Dict[int, FieldSpec] = field(default_factory=dict, init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.fields, key=lambda f: f.number))
        object.__setattr__(self, "fields", ordered)
        object.__setattr__(self, "_by_number", {f.number: f for f in ordered})

    def lookup(self, number: int) -> Optional[FieldSpec]:
        return self._by_number.get(number)

    @property
    def is_union(self) -> bool:
        return self.oneof is not None and not self.fields


# ──────────────────────────────────────────────────────────────────────────────
# Base class
# ──────────────────────────────────────────────────────────────────────────────


class Message:
    """
    Mixin for frozen dataclasses that carry a `__schema__`.

    Provides validation on construction (types, int64 range, sequences
    normalised to tuples) plus encode/decode and JSON views. Subclasses add
    domain invariants by overriding `_check()`.
    """

    __schema__: ClassVar[MessageSchema]

    def __post_init__(self) -> None:
        validate(self)
        self._check()

    def _check(self) -> None:
        """Hook for per-type invariants; raise ValueError on violation."""

    def encode(self) -> bytes:
        return encode(self)

    @classmethod
    def decode(cls: Type[M], data: Union[bytes, bytearray, memoryview], *,
               config: Optional[CodecConfig] = None) -> M:
        return decode(data, cls, config=config)

    def to_dict(self) -> Dict[str, Any]:
        return to_dict(self)

    @classmethod
    def from_dict(cls: Type[M], obj: Mapping[str, Any]) -> M:
        return from_dict(obj, cls)


def schema_of(cls: type) -> MessageSchema:
    schema = getattr(cls, "__schema__", None)
    if not isinstance(schema, MessageSchema):
        raise TypeError(f"{cls.__name__} is not a schema message type")
    return schema


# ──────────────────────────────────────────────────────────────────────────────
# Validation
# ──────────────────────────────────────────────────────────────────────────────


def _check_scalar(spec_kind: Kind, message: Optional[type], where: str, v: Any) -> None:
    if spec_kind is Kind.INT64:
        if isinstance(v, bool) or not isinstance(v, int):
            raise TypeError(f"{where} must be int, got {type(v).__name__}")
        if not INT64_MIN <= v <= INT64_MAX:
            raise ValueError(f"{where} out of int64 range: {v}")
    elif spec_kind is Kind.STRING:
        if not isinstance(v, str):
            raise TypeError(f"{where} must be str, got {type(v).__name__}")
    elif message is not None and not isinstance(v, message):
        raise TypeError(f"{where} must be {message.__name__}, got {type(v).__name__}")


def validate(value: Message) -> None:
    """Check `value` against its schema; normalises repeated fields to tuples."""
    schema = schema_of(type(value))
    for f in schema.fields:
        where = f"{schema.name}.{f.name}"
        v = getattr(value, f.name)
        if f.label is Label.REPEATED:
            if isinstance(v, (str, bytes, Mapping)) or not hasattr(v, "__iter__"):
                raise TypeError(f"{where} must be a sequence")
            items = tuple(v)
            for i, item in enumerate(items):
                _check_scalar(f.kind, f.message, f"{where}[{i}]", item)
            object.__setattr__(value, f.name, items)
        elif v is None:
            if f.label is Label.REQUIRED:
                raise ValueError(f"{where} is required")
            items = ()
        else:
            _check_scalar(f.kind, f.message, where, v)
            items = (v,)
        if f.kind is Kind.MESSAGE and schema_of(f.message).is_union:
            oneof = schema_of(f.message).oneof
            for item in items:
                if getattr(item, oneof.attr) is None:
                    raise ValueError(f"{where} entries must carry a {oneof.union} variant")
    if schema.oneof is not None:
        v = getattr(value, schema.oneof.attr)
        if v is not None and schema.oneof.spec_for(v) is None:
            allowed = ", ".join(s.variant.__name__ for s in schema.oneof.variants)
            raise TypeError(f"{schema.name}.{schema.oneof.attr} must be one of {allowed} or None, "
                            f"got {type(v).__name__}")


# ──────────────────────────────────────────────────────────────────────────────
# Encoding
# ──────────────────────────────────────────────────────────────────────────────


def _encode_payload(kind: Kind, v: Any) -> bytes:
    if kind is Kind.INT64:
        return encode_int64(v)
    if kind is Kind.STRING:
        return encode_string(v)
    return encode_len_delimited(encode(v))


def encode(value: Message) -> bytes:
    """Deterministic encoding of a schema message."""
    schema = schema_of(type(value))
    out = bytearray()
    if schema.oneof is not None:
        v = getattr(value, schema.oneof.attr)
        if v is None:
            raise EncodeError(f"{schema.name} carries no {schema.oneof.union} variant", type=schema.name)
        spec = schema.oneof.spec_for(v)
        if spec is None:
            raise EncodeError("unknown variant type", type=schema.name, got=type(v).__name__)
        out += encode_key(spec.number, WireType.LEN)
        out += _encode_payload(spec.kind, spec.payload_of(v))
    for f in schema.fields:
        v = getattr(value, f.name)
        if f.label is Label.REPEATED:
            for item in v:
                out += encode_key(f.number, f.kind.wire_type)
                out += _encode_payload(f.kind, item)
        elif v is None:
            if f.label is Label.REQUIRED:
                raise EncodeError(f"{schema.name}.{f.name} is required", type=schema.name, field=f.name)
        else:
            out += encode_key(f.number, f.kind.wire_type)
            out += _encode_payload(f.kind, v)
    return bytes(out)


# ──────────────────────────────────────────────────────────────────────────────
# Decoding
# ──────────────────────────────────────────────────────────────────────────────


def _decode_payload(r: Reader, kind: Kind, message: Optional[type], cfg: CodecConfig, path: str) -> Any:
    if kind is Kind.INT64:
        return r.read_int64()
    if kind is Kind.STRING:
        return r.read_string()
    return _decode_message(r.read_len_delimited(), message, cfg, path)


def _require_wire_type(got: WireType, want: WireType, schema: MessageSchema, name: str, offset: int) -> None:
    if got != want:
        raise Malformed(
            f"{schema.name}.{name} expects wire type {int(want)}, got {int(got)}",
            type=schema.name,
            field=name,
            offset=offset,
        )


def _decode_message(r: Reader, cls: type, cfg: CodecConfig, path: str) -> Any:
    try:
        return _decode_fields(r, cls, cfg, path)
    except DecodeError as e:
        if "path" in e.data:
            raise
        raise e.with_context(path=path) from e.__cause__


def _decode_fields(r: Reader, cls: type, cfg: CodecConfig, path: str) -> Any:
    schema = schema_of(cls)
    scalars: Dict[str, Any] = {}
    repeated: Dict[str, List[Any]] = {f.name: [] for f in schema.fields if f.label is Label.REPEATED}
    variant: Any = None

    while not r.at_end():
        key_offset = r.offset
        number, wt = r.read_key()

        spec = schema.oneof.by_number(number) if schema.oneof is not None else None
        if spec is not None:
            _require_wire_type(wt, WireType.LEN, schema, spec.name, key_offset)
            if variant is not None:
                if cfg.reject_duplicate_variants:
                    raise Malformed(f"{schema.oneof.union} carries more than one variant",
                                    type=schema.name, offset=key_offset)
                log.debug("later %s variant replaces earlier one", schema.oneof.union,
                          extra={"type": schema.name, "variant": spec.name, "offset": key_offset})
            payload = _decode_payload(r, spec.kind, spec.payload_message, cfg, f"{path}.{spec.variant.__name__}")
            variant = spec.build(payload)
            continue

        f = schema.lookup(number)
        if f is None:
            if schema.is_union:
                raise UnknownVariant(schema.oneof.union, number, offset=key_offset)
            log.debug("skipping unknown field", extra={"type": schema.name, "field_number": number,
                                                       "wire_type": int(wt)})
            r.skip(wt)
            continue

        _require_wire_type(wt, f.kind.wire_type, schema, f.name, key_offset)
        if f.label is Label.REPEATED:
            entries = repeated[f.name]
            if len(entries) >= cfg.max_repeated:
                raise Malformed(f"{schema.name}.{f.name} exceeds {cfg.max_repeated} entries",
                                type=schema.name, field=f.name)
            value = _decode_payload(r, f.kind, f.message, cfg, f"{path}.{f.name}[{len(entries)}]")
            entries.append(value)
        else:
            value = _decode_payload(r, f.kind, f.message, cfg, f"{path}.{f.name}")
            scalars[f.name] = value

    return _build(cls, schema, scalars, repeated, variant, path)


def _build(cls: type, schema: MessageSchema, scalars: Dict[str, Any], repeated: Dict[str, List[Any]],
           variant: Any, path: str) -> Any:
    kwargs: Dict[str, Any] = {}
    for f in schema.fields:
        if f.label is Label.REPEATED:
            items = repeated[f.name]
            _reject_unset_unions(f, items, path)
            kwargs[f.name] = tuple(items)
        elif f.name in scalars:
            _reject_unset_unions(f, [scalars[f.name]], path)
            kwargs[f.name] = scalars[f.name]
        elif f.label is Label.REQUIRED:
            raise MissingField(schema.name, f.name)
        else:
            kwargs[f.name] = None
    if schema.oneof is not None:
        kwargs[schema.oneof.attr] = variant
    try:
        return cls(**kwargs)
    except (TypeError, ValueError) as e:
        raise InvalidEncoding(str(e), type=schema.name, cause=e) from e


def _reject_unset_unions(f: FieldSpec, items: List[Any], path: str) -> None:
    if f.kind is not Kind.MESSAGE or f.message is None:
        return
    nested = schema_of(f.message)
    if not nested.is_union:
        return
    for i, item in enumerate(items):
        if getattr(item, nested.oneof.attr) is None:
            where = f"{path}.{f.name}[{i}]" if f.label is Label.REPEATED else f"{path}.{f.name}"
            raise InvalidEncoding(f"{nested.name} carries no {nested.oneof.union} variant",
                                  type=nested.name, path=where)


def decode(data: Union[bytes, bytearray, memoryview], cls: Type[M], *,
           config: Optional[CodecConfig] = None) -> M:
    """
    Decode `data` as a `cls` message.

    A top-level union wrapper (Msg, ContractResult) with no variant decodes
    to its unset state; callers that need a variant use the strict loaders
    in cosmwasm_types.types.
    """
    cfg = config or load_config()
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"decode expects a bytes-like object, got {type(data).__name__}")
    size = memoryview(data).nbytes
    if size > cfg.max_message_bytes:
        raise PayloadTooLarge(type=cls.__name__, size=size, limit=cfg.max_message_bytes)
    return _decode_message(Reader(data), cls, cfg, cls.__name__)


# ──────────────────────────────────────────────────────────────────────────────
# JSON views
# ──────────────────────────────────────────────────────────────────────────────


def _payload_to_obj(kind: Kind, v: Any) -> Any:
    return to_dict(v) if kind is Kind.MESSAGE else v


def to_dict(value: Message) -> Dict[str, Any]:
    """
    JSON-friendly view using wire field names. Unions render as a single-key
    object naming the variant; optional fields are omitted when None.
    """
    schema = schema_of(type(value))
    out: Dict[str, Any] = {}
    if schema.oneof is not None:
        v = getattr(value, schema.oneof.attr)
        if v is not None:
            spec = schema.oneof.spec_for(v)
            out[spec.name] = _payload_to_obj(spec.kind, spec.payload_of(v))
    for f in schema.fields:
        v = getattr(value, f.name)
        if f.label is Label.REPEATED:
            out[f.name] = [_payload_to_obj(f.kind, x) for x in v]
        elif v is not None:
            out[f.name] = _payload_to_obj(f.kind, v)
    return out


def _payload_from_obj(kind: Kind, message: Optional[type], v: Any) -> Any:
    if kind is Kind.MESSAGE:
        if not isinstance(v, Mapping):
            raise TypeError(f"{message.__name__} must be given as an object")
        return from_dict(v, message)
    return v


def from_dict(obj: Mapping[str, Any], cls: Type[M]) -> M:
    """Inverse of `to_dict`; raises ValueError/TypeError on bad shapes."""
    schema = schema_of(cls)
    if not isinstance(obj, Mapping):
        raise TypeError(f"{schema.name} must be given as an object")
    known = {f.name for f in schema.fields}
    if schema.oneof is not None:
        known |= {v.name for v in schema.oneof.variants}
    extra = sorted(set(obj) - known)
    if extra:
        raise ValueError(f"{schema.name} has no field(s): {', '.join(extra)}")

    kwargs: Dict[str, Any] = {}
    if schema.oneof is not None:
        chosen = [v for v in schema.oneof.variants if v.name in obj]
        if len(chosen) > 1:
            raise ValueError(f"{schema.oneof.union} accepts exactly one variant")
        variant = None
        if chosen:
            spec = chosen[0]
            variant = spec.build(_payload_from_obj(spec.kind, spec.payload_message, obj[spec.name]))
        kwargs[schema.oneof.attr] = variant
    for f in schema.fields:
        if f.name not in obj or obj[f.name] is None:
            if f.label is Label.REQUIRED:
                raise ValueError(f"{schema.name}.{f.name} is required")
            kwargs[f.name] = () if f.label is Label.REPEATED else None
            continue
        raw = obj[f.name]
        if f.label is Label.REPEATED:
            if isinstance(raw, (str, bytes, Mapping)) or not hasattr(raw, "__iter__"):
                raise TypeError(f"{schema.name}.{f.name} must be a list")
            kwargs[f.name] = tuple(_payload_from_obj(f.kind, f.message, x) for x in raw)
        else:
            kwargs[f.name] = _payload_from_obj(f.kind, f.message, raw)
    return cls(**kwargs)


__all__ = [
    "Kind",
    "Label",
    "FieldSpec",
    "VariantSpec",
    "OneofSpec",
    "MessageSchema",
    "Message",
    "schema_of",
    "validate",
    "encode",
    "decode",
    "to_dict",
    "from_dict",
]
