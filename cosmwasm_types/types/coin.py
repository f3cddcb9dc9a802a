from __future__ import annotations

"""
cosmwasm_types/types/coin.py
============================

Coin: a denomination plus an amount carried as decimal text.

Wire (tags are stable):
- 1 denom  : string
- 2 amount : string

The amount stays a string end-to-end so host and contract never disagree
about integer widths. Arithmetic goes through Python's arbitrary-precision
int (`amount_int`, `add_coins`), never floats.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from ..encoding.schema import FieldSpec, Kind, Message, MessageSchema

_AMOUNT_RE = re.compile(r"[0-9]+")
_WS_RE = re.compile(r"\s")


@dataclass(frozen=True)
class Coin(Message):
    denom: str
    amount: str

    __schema__ = MessageSchema(
        name="Coin",
        fields=(
            FieldSpec(1, "denom", Kind.STRING),
            FieldSpec(2, "amount", Kind.STRING),
        ),
    )

    def _check(self) -> None:
        if not self.denom or _WS_RE.search(self.denom):
            raise ValueError(f"Coin.denom must be a non-empty token, got {self.denom!r}")
        if not _AMOUNT_RE.fullmatch(self.amount):
            raise ValueError(f"Coin.amount must be a non-negative decimal integer, got {self.amount!r}")

    @property
    def amount_int(self) -> int:
        return int(self.amount, 10)

    @classmethod
    def of(cls, amount: int | str, denom: str) -> "Coin":
        """Build from an int or decimal string amount."""
        if isinstance(amount, bool):
            raise TypeError("Coin amount must be int or str")
        if isinstance(amount, int):
            if amount < 0:
                raise ValueError("Coin amount must be non-negative")
            amount = str(amount)
        return cls(denom=denom, amount=amount)

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


def add_coins(*groups: Iterable[Coin]) -> Tuple[Coin, ...]:
    """
    Sum coin sequences per denomination.

    Denominations keep the order in which they are first seen.
    """
    totals: Dict[str, int] = {}
    for group in groups:
        for c in group:
            totals[c.denom] = totals.get(c.denom, 0) + c.amount_int
    return tuple(Coin.of(v, d) for d, v in totals.items())


__all__ = ["Coin", "add_coins"]
