"""
cosmwasm-types — binary interchange schema between a blockchain host and a
smart contract.

    from cosmwasm_types import ContractResult, Msg, encode, decode
    from cosmwasm_types.mock import coin

    res = ContractResult.ok(messages=[Msg.send("me", "you", coin("1015", "earth"))],
                            log="released funds!")
    assert ContractResult.decode(res.encode()) == res

The host encodes `Params`, the contract returns an encoded `ContractResult`.
Decoding raises a `DecodeError` subclass on any invalid payload.
"""

from __future__ import annotations

from .config import CodecConfig, load_config
from .encoding import decode, encode, from_dict, to_dict
from .errors import (CodecError, DecodeError, EncodeError, InvalidEncoding, Malformed,
                     MissingField, PayloadTooLarge, Truncated, UnknownVariant, UnwrapPanic)
from .types import (BlockInfo, Coin, ContractInfo, ContractMsg, ContractResult, CosmosMsg,
                    Err, MessageInfo, Msg, Ok, OpaqueMsg, Params, Response, Result,
                    ResultState, SendMsg, add_coins, load_contract_result, load_msg)
from .version import __version__

__all__ = [
    "__version__",
    # config
    "CodecConfig",
    "load_config",
    # codec
    "encode",
    "decode",
    "to_dict",
    "from_dict",
    # errors
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
    # types
    "Coin",
    "add_coins",
    "BlockInfo",
    "MessageInfo",
    "ContractInfo",
    "Params",
    "SendMsg",
    "ContractMsg",
    "OpaqueMsg",
    "CosmosMsg",
    "Msg",
    "load_msg",
    "Response",
    "Ok",
    "Err",
    "Result",
    "ResultState",
    "ContractResult",
    "load_contract_result",
]
