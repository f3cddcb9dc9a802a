"""
Fixture constructors for contract tests.

Only signer, sent funds and balance vary; block and contract metadata are
fixed so test contexts are deterministic.
"""

from __future__ import annotations

from typing import Iterable, Tuple

from .types.coin import Coin
from .types.params import BlockInfo, ContractInfo, MessageInfo, Params

MOCK_HEIGHT = 12_345
MOCK_TIME = 1_571_797_419
MOCK_CHAIN_ID = "cosmos-testnet-14002"
MOCK_CONTRACT_ADDR = "cosmos2contract"


def mock_params(signer: str, sent: Iterable[Coin] = (), balance: Iterable[Coin] = ()) -> Params:
    return Params(
        block=BlockInfo(height=MOCK_HEIGHT, time=MOCK_TIME, chain_id=MOCK_CHAIN_ID),
        message=MessageInfo(signer=signer, sent_funds=tuple(sent)),
        contract=ContractInfo(address=MOCK_CONTRACT_ADDR, balance=tuple(balance)),
    )


def coin(amount: str, denom: str) -> Tuple[Coin, ...]:
    """A one-denomination coin set."""
    return (Coin(denom=denom, amount=amount),)


__all__ = ["MOCK_HEIGHT", "MOCK_TIME", "MOCK_CHAIN_ID", "MOCK_CONTRACT_ADDR", "mock_params", "coin"]
