"""
cosmwasm_types.types
====================

Value types of the host/contract interchange schema, leaves first:

- coin.py:   Coin, add_coins
- params.py: BlockInfo, MessageInfo, ContractInfo, Params
- msg.py:    SendMsg, ContractMsg, OpaqueMsg, CosmosMsg, Msg
- result.py: Response, Ok, Err, Result, ContractResult
"""

from __future__ import annotations

from .coin import Coin, add_coins
from .msg import ContractMsg, CosmosMsg, Msg, OpaqueMsg, SendMsg, load_msg
from .params import BlockInfo, ContractInfo, MessageInfo, Params
from .result import (ContractResult, Err, Ok, Response, Result, ResultState,
                     load_contract_result)

__all__ = [
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
