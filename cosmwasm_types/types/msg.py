from __future__ import annotations

"""
cosmwasm_types/types/msg.py
===========================

Outgoing messages a contract asks the host to dispatch.

Msg is a union wrapper: its only fields are the CosmosMsg variants.

  Msg        1 send | 2 contract | 3 opaque   (oneof CosmosMsg, nested message)
  SendMsg    1 from_address, 2 to_address : string; 3 amount : repeated Coin
  ContractMsg 1 contract_addr, 2 msg : string
  OpaqueMsg  1 data : string

`ContractMsg.msg` and `OpaqueMsg.data` are opaque payloads owned by the
receiving contract / the host; nothing here parses them.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from ..config import CodecConfig
from ..encoding.schema import (FieldSpec, Kind, Label, Message, MessageSchema, OneofSpec,
                               VariantSpec)
from ..errors import InvalidEncoding
from .coin import Coin


@dataclass(frozen=True)
class SendMsg(Message):
    """Native value transfer."""

    from_address: str
    to_address: str
    amount: Tuple[Coin, ...] = ()

    __schema__ = MessageSchema(
        name="SendMsg",
        fields=(
            FieldSpec(1, "from_address", Kind.STRING),
            FieldSpec(2, "to_address", Kind.STRING),
            FieldSpec(3, "amount", Kind.MESSAGE, Label.REPEATED, Coin),
        ),
    )


@dataclass(frozen=True)
class ContractMsg(Message):
    """Dispatch to another contract; `msg` is its (usually JSON) handle payload."""

    contract_addr: str
    msg: str

    __schema__ = MessageSchema(
        name="ContractMsg",
        fields=(
            FieldSpec(1, "contract_addr", Kind.STRING),
            FieldSpec(2, "msg", Kind.STRING),
        ),
    )


@dataclass(frozen=True)
class OpaqueMsg(Message):
    """Passed in by the user and forwarded as-is; contracts never build one."""

    data: str

    __schema__ = MessageSchema(
        name="OpaqueMsg",
        fields=(FieldSpec(1, "data", Kind.STRING),),
    )


CosmosMsg = Union[SendMsg, ContractMsg, OpaqueMsg]


@dataclass(frozen=True)
class Msg(Message):
    msg: Optional[CosmosMsg] = None

    __schema__ = MessageSchema(
        name="Msg",
        oneof=OneofSpec(
            attr="msg",
            union="CosmosMsg",
            variants=(
                VariantSpec(1, "send", Kind.MESSAGE, SendMsg),
                VariantSpec(2, "contract", Kind.MESSAGE, ContractMsg),
                VariantSpec(3, "opaque", Kind.MESSAGE, OpaqueMsg),
            ),
        ),
    )

    # ---- smart constructors (never produce the unset state) ----

    @classmethod
    def of(cls, variant: CosmosMsg) -> "Msg":
        if variant is None:
            raise ValueError("Msg requires a CosmosMsg variant")
        return cls(msg=variant)

    @classmethod
    def send(cls, from_address: str, to_address: str, amount: Iterable[Coin]) -> "Msg":
        return cls(msg=SendMsg(from_address=from_address, to_address=to_address, amount=tuple(amount)))

    @classmethod
    def contract(cls, contract_addr: str, msg: str) -> "Msg":
        return cls(msg=ContractMsg(contract_addr=contract_addr, msg=msg))

    @classmethod
    def opaque(cls, data: str) -> "Msg":
        return cls(msg=OpaqueMsg(data=data))

    @property
    def is_set(self) -> bool:
        return self.msg is not None


def load_msg(data: bytes, *, config: Optional[CodecConfig] = None) -> Msg:
    """Decode a Msg that is about to be dispatched; an unset union is InvalidEncoding."""
    m = Msg.decode(data, config=config)
    if m.msg is None:
        raise InvalidEncoding("Msg carries no CosmosMsg variant", type="Msg", path="Msg")
    return m


__all__ = ["SendMsg", "ContractMsg", "OpaqueMsg", "CosmosMsg", "Msg", "load_msg"]
