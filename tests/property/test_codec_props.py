# -*- coding: utf-8 -*-
"""
Property tests for the interchange codec.

- decode(encode(v)) == v for every message type, including int64 extremes,
  empty strings, empty and multi-entry repeated fields
- re-encoding a decoded value is byte-identical (deterministic encoding)
- the decoded union variant is exactly the encoded one
- arbitrary bytes either decode or raise a DecodeError, nothing else
- every strict prefix of an encoded Params / Msg / ContractResult is rejected
"""
from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given, strategies as st

from cosmwasm_types import (BlockInfo, Coin, ContractInfo, ContractMsg, ContractResult,
                            DecodeError, MessageInfo, MissingField, Msg, OpaqueMsg, Params,
                            Response, SendMsg, Truncated, load_contract_result, load_msg)

# ---- strategies -------------------------------------------------------------

_INT64 = st.integers(min_value=-(1 << 63), max_value=(1 << 63) - 1)
_TEXT = st.text(alphabet=st.characters(codec="utf-8"), max_size=40)
_DENOM = st.from_regex(r"[a-z][a-z0-9/]{0,15}", fullmatch=True)
_AMOUNT = st.integers(min_value=0, max_value=(1 << 200)).map(str)


def _tuple_of(elt: st.SearchStrategy[Any], max_size: int = 3) -> st.SearchStrategy[tuple]:
    return st.lists(elt, min_size=0, max_size=max_size).map(tuple)


def _maybe(t: st.SearchStrategy[Any]) -> st.SearchStrategy[Any]:
    return st.one_of(st.none(), t)


coins = st.builds(Coin, denom=_DENOM, amount=_AMOUNT)

blocks = st.builds(BlockInfo, height=_INT64, time=_INT64, chain_id=_TEXT)
message_infos = st.builds(MessageInfo, signer=_TEXT, sent_funds=_tuple_of(coins))
contract_infos = st.builds(ContractInfo, address=_TEXT, balance=_tuple_of(coins))
params = st.builds(Params, block=blocks, message=message_infos, contract=contract_infos)

cosmos_msgs = st.one_of(
    st.builds(SendMsg, from_address=_TEXT, to_address=_TEXT, amount=_tuple_of(coins)),
    st.builds(ContractMsg, contract_addr=_TEXT, msg=_TEXT),
    st.builds(OpaqueMsg, data=_TEXT),
)
msgs = cosmos_msgs.map(Msg.of)

responses = st.builds(Response, messages=_tuple_of(msgs), log=_maybe(_TEXT), data=_maybe(_TEXT))
results = st.one_of(responses.map(ContractResult.ok), _TEXT.map(ContractResult.err))

any_message = st.one_of(coins, blocks, message_infos, contract_infos, params, msgs, responses, results)


# ---- round-trips ----------------------------------------------------------------

@given(any_message)
def test_roundtrip(value) -> None:
    raw = value.encode()
    back = type(value).decode(raw)
    assert back == value
    assert back.encode() == raw


@given(cosmos_msgs)
def test_msg_variant_exclusivity(variant) -> None:
    back = load_msg(Msg.of(variant).encode())
    assert type(back.msg) is type(variant)
    assert back.msg == variant


@given(results)
def test_result_state_survives(result: ContractResult) -> None:
    back = load_contract_result(result.encode())
    assert back.state is result.state
    assert back.is_err() == result.is_err()


@given(_TEXT)
def test_optional_presence_is_preserved(text: str) -> None:
    for r in (Response(log=text), Response(data=text), Response()):
        back = Response.decode(r.encode())
        assert (back.log is None) == (r.log is None)
        assert (back.data is None) == (r.data is None)


@given(params)
def test_json_view_roundtrip(p: Params) -> None:
    assert Params.from_dict(p.to_dict()) == p


# ---- rejection --------------------------------------------------------------

_DECODABLE = (Coin, BlockInfo, MessageInfo, ContractInfo, Params, Msg, Response, ContractResult)


@given(st.sampled_from(_DECODABLE), st.binary(max_size=256))
def test_arbitrary_bytes_decode_or_raise_decode_error(cls, data: bytes) -> None:
    try:
        value = cls.decode(data)
    except DecodeError:
        return
    assert isinstance(value, cls)


@given(params, st.data())
def test_params_prefix_rejected(p: Params, data) -> None:
    raw = p.encode()
    cut = data.draw(st.integers(min_value=0, max_value=len(raw) - 1))
    with pytest.raises((Truncated, MissingField)):
        Params.decode(raw[:cut])


@given(st.one_of(msgs.map(lambda m: (m, load_msg)), results.map(lambda r: (r, load_contract_result))), st.data())
def test_union_prefix_rejected(case, data) -> None:
    value, loader = case
    raw = value.encode()
    cut = data.draw(st.integers(min_value=0, max_value=len(raw) - 1))
    with pytest.raises(DecodeError):
        loader(raw[:cut])


@given(msgs, msgs)
def test_last_variant_wins(first: Msg, second: Msg) -> None:
    assert Msg.decode(first.encode() + second.encode()) == second
