from __future__ import annotations

"""
cosmwasm_types/types/params.py
==============================

Read-only call context the host hands to a contract invocation.

Params
  1 block    : BlockInfo     (required)
  2 message  : MessageInfo   (required)
  3 contract : ContractInfo  (required)

BlockInfo
  1 height   : int64
  2 time     : int64 (seconds since the unix epoch)
  3 chain_id : string

MessageInfo
  1 signer     : string (address)
  2 sent_funds : repeated Coin

ContractInfo
  1 address : string
  2 balance : repeated Coin

Every scalar is required: it is always written, and a payload without it is
rejected with MissingField rather than defaulted.
"""

from dataclasses import dataclass
from typing import Tuple

from ..encoding.schema import FieldSpec, Kind, Label, Message, MessageSchema
from .coin import Coin


@dataclass(frozen=True)
class BlockInfo(Message):
    height: int
    time: int
    chain_id: str

    __schema__ = MessageSchema(
        name="BlockInfo",
        fields=(
            FieldSpec(1, "height", Kind.INT64),
            FieldSpec(2, "time", Kind.INT64),
            FieldSpec(3, "chain_id", Kind.STRING),
        ),
    )


@dataclass(frozen=True)
class MessageInfo(Message):
    signer: str
    sent_funds: Tuple[Coin, ...] = ()

    __schema__ = MessageSchema(
        name="MessageInfo",
        fields=(
            FieldSpec(1, "signer", Kind.STRING),
            FieldSpec(2, "sent_funds", Kind.MESSAGE, Label.REPEATED, Coin),
        ),
    )


@dataclass(frozen=True)
class ContractInfo(Message):
    address: str
    balance: Tuple[Coin, ...] = ()

    __schema__ = MessageSchema(
        name="ContractInfo",
        fields=(
            FieldSpec(1, "address", Kind.STRING),
            FieldSpec(2, "balance", Kind.MESSAGE, Label.REPEATED, Coin),
        ),
    )


@dataclass(frozen=True)
class Params(Message):
    block: BlockInfo
    message: MessageInfo
    contract: ContractInfo

    __schema__ = MessageSchema(
        name="Params",
        fields=(
            FieldSpec(1, "block", Kind.MESSAGE, Label.REQUIRED, BlockInfo),
            FieldSpec(2, "message", Kind.MESSAGE, Label.REQUIRED, MessageInfo),
            FieldSpec(3, "contract", Kind.MESSAGE, Label.REQUIRED, ContractInfo),
        ),
    )


__all__ = ["BlockInfo", "MessageInfo", "ContractInfo", "Params"]
