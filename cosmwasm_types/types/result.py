from __future__ import annotations

"""
cosmwasm_types/types/result.py
==============================

What a contract returns to the host.

  ContractResult  1 ok  : Response (nested message)    oneof Result
                  2 err : string
  Response        1 messages : repeated Msg
                  2 log      : optional string
                  3 data     : optional string

`Err` is the contract-level business failure: a successfully decoded value
carrying a human-readable diagnostic. Codec failures are exceptions from
cosmwasm_types.errors and never show up here.

Host dispatch branches on `ContractResult.state` or uses `match(...)`;
`unwrap()` / `is_err()` are for tests and trusted internal paths only and
raise UnwrapPanic on misuse.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Tuple, TypeVar, Union

from ..config import CodecConfig
from ..encoding.schema import (FieldSpec, Kind, Label, Message, MessageSchema, OneofSpec,
                               VariantSpec)
from ..errors import InvalidEncoding, UnwrapPanic
from .msg import Msg

T = TypeVar("T")


@dataclass(frozen=True)
class Response(Message):
    messages: Tuple[Msg, ...] = ()
    log: Optional[str] = None
    data: Optional[str] = None

    __schema__ = MessageSchema(
        name="Response",
        fields=(
            FieldSpec(1, "messages", Kind.MESSAGE, Label.REPEATED, Msg),
            FieldSpec(2, "log", Kind.STRING, Label.OPTIONAL),
            FieldSpec(3, "data", Kind.STRING, Label.OPTIONAL),
        ),
    )


@dataclass(frozen=True)
class Ok:
    response: Response

    def __post_init__(self) -> None:
        if not isinstance(self.response, Response):
            raise TypeError(f"Ok wraps a Response, got {type(self.response).__name__}")


@dataclass(frozen=True)
class Err:
    error: str

    def __post_init__(self) -> None:
        if not isinstance(self.error, str):
            raise TypeError(f"Err wraps a str, got {type(self.error).__name__}")


Result = Union[Ok, Err]


class ResultState(str, Enum):
    OK = "ok"
    ERR = "err"
    UNSET = "unset"


@dataclass(frozen=True)
class ContractResult(Message):
    res: Optional[Result] = None

    __schema__ = MessageSchema(
        name="ContractResult",
        oneof=OneofSpec(
            attr="res",
            union="Result",
            variants=(
                VariantSpec(1, "ok", Kind.MESSAGE, Ok, attr="response", message=Response),
                VariantSpec(2, "err", Kind.STRING, Err, attr="error"),
            ),
        ),
    )

    # ---- smart constructors ----

    @classmethod
    def ok(
        cls,
        response: Optional[Response] = None,
        *,
        messages: Iterable[Msg] = (),
        log: Optional[str] = None,
        data: Optional[str] = None,
    ) -> "ContractResult":
        """Success; pass a Response or its fields, not both."""
        messages = tuple(messages)
        if response is None:
            response = Response(messages=messages, log=log, data=data)
        elif messages or log is not None or data is not None:
            raise TypeError("ContractResult.ok takes a Response or messages/log/data, not both")
        return cls(res=Ok(response))

    @classmethod
    def err(cls, error: str) -> "ContractResult":
        return cls(res=Err(error))

    # ---- production accessors ----

    @property
    def state(self) -> ResultState:
        if isinstance(self.res, Ok):
            return ResultState.OK
        if isinstance(self.res, Err):
            return ResultState.ERR
        return ResultState.UNSET

    def match(self, ok: Callable[[Response], T], err: Callable[[str], T]) -> T:
        """Exhaustive branch over the result; an unset union is InvalidEncoding."""
        if isinstance(self.res, Ok):
            return ok(self.res.response)
        if isinstance(self.res, Err):
            return err(self.res.error)
        raise InvalidEncoding("ContractResult carries no Result variant", type="ContractResult")

    # ---- test / trusted-path accessors ----

    def unwrap(self) -> Response:
        """Return the Response; panic on Err or an unset union."""
        if isinstance(self.res, Ok):
            return self.res.response
        if isinstance(self.res, Err):
            raise UnwrapPanic(f"Unexpected error: {self.res.error}")
        raise UnwrapPanic("called unwrap() on a ContractResult with no Result variant")

    def is_err(self) -> bool:
        if self.res is None:
            raise UnwrapPanic("called is_err() on a ContractResult with no Result variant")
        return isinstance(self.res, Err)


def load_contract_result(data: bytes, *, config: Optional[CodecConfig] = None) -> ContractResult:
    """Decode a result the host is about to act on; an unset union is InvalidEncoding."""
    result = ContractResult.decode(data, config=config)
    if result.res is None:
        raise InvalidEncoding("ContractResult carries no Result variant",
                              type="ContractResult", path="ContractResult")
    return result


__all__ = [
    "Response",
    "Ok",
    "Err",
    "Result",
    "ResultState",
    "ContractResult",
    "load_contract_result",
]
