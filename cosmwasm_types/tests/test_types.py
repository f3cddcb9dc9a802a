from __future__ import annotations

import pytest

from cosmwasm_types import (BlockInfo, Coin, ContractMsg, ContractResult, Err, InvalidEncoding,
                            Msg, Ok, OpaqueMsg, Params, Response, ResultState, SendMsg,
                            UnwrapPanic, add_coins, from_dict, to_dict)
from cosmwasm_types.mock import (MOCK_CHAIN_ID, MOCK_CONTRACT_ADDR, MOCK_HEIGHT, MOCK_TIME, coin,
                                 mock_params)


# ---------------------------------------------------------------------------
# Coin
# ---------------------------------------------------------------------------

class TestCoin:
    def test_of_accepts_int_and_str(self) -> None:
        assert Coin.of(1015, "earth") == Coin(denom="earth", amount="1015")
        assert Coin.of("0", "earth").amount_int == 0
        assert str(Coin.of(5, "moon")) == "5moon"

    def test_big_amounts_stay_exact(self) -> None:
        big = 10 ** 40 + 1
        assert Coin.of(big, "wei").amount_int == big

    @pytest.mark.parametrize("amount", [-1, True])
    def test_of_rejects(self, amount) -> None:
        with pytest.raises((TypeError, ValueError)):
            Coin.of(amount, "earth")

    @pytest.mark.parametrize(
        "denom,amount",
        [("", "1"), ("two words", "1"), ("earth", "-1"), ("earth", "1e3"), ("earth", " 1"), ("earth", "")],
    )
    def test_constructor_rejects(self, denom: str, amount: str) -> None:
        with pytest.raises(ValueError):
            Coin(denom=denom, amount=amount)

    def test_constructor_rejects_non_str(self) -> None:
        with pytest.raises(TypeError):
            Coin(denom="earth", amount=5)  # type: ignore[arg-type]

    def test_is_immutable(self) -> None:
        c = Coin.of(1, "x")
        with pytest.raises(AttributeError):
            c.amount = "2"  # type: ignore[misc]

    def test_add_coins_sums_per_denom_in_first_seen_order(self) -> None:
        total = add_coins(coin("5", "moon") + coin("1", "earth"), coin("2", "earth"), [])
        assert total == (Coin.of(5, "moon"), Coin.of(3, "earth"))

    def test_add_coins_empty(self) -> None:
        assert add_coins() == ()


# ---------------------------------------------------------------------------
# Params / mock
# ---------------------------------------------------------------------------

def test_mock_params_fixed_context() -> None:
    p = mock_params("cosmos1sender", coin("7", "earth"))
    assert p.block == BlockInfo(height=MOCK_HEIGHT, time=MOCK_TIME, chain_id=MOCK_CHAIN_ID)
    assert p.contract.address == MOCK_CONTRACT_ADDR
    assert p.contract.balance == ()
    assert p.message.signer == "cosmos1sender"
    assert p.message.sent_funds == (Coin.of(7, "earth"),)


def test_mock_params_is_deterministic() -> None:
    a = mock_params("x", balance=coin("1", "a"))
    b = mock_params("x", balance=[Coin.of(1, "a")])
    assert a == b
    assert a.encode() == b.encode()


def test_repeated_fields_normalise_to_tuples() -> None:
    s = SendMsg(from_address="a", to_address="b", amount=[Coin.of(1, "x")])  # type: ignore[arg-type]
    assert isinstance(s.amount, tuple)


@pytest.mark.parametrize("height", [1 << 63, -(1 << 63) - 1])
def test_block_height_must_fit_int64(height: int) -> None:
    with pytest.raises(ValueError):
        BlockInfo(height=height, time=0, chain_id="c")


def test_block_height_rejects_bool() -> None:
    with pytest.raises(TypeError):
        BlockInfo(height=True, time=0, chain_id="c")  # type: ignore[arg-type]


def test_params_requires_nested_types() -> None:
    p = mock_params("x")
    with pytest.raises(TypeError):
        Params(block=p.message, message=p.message, contract=p.contract)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Msg
# ---------------------------------------------------------------------------

class TestMsg:
    def test_smart_constructors(self) -> None:
        assert Msg.send("a", "b", coin("1", "x")).msg == SendMsg("a", "b", (Coin.of(1, "x"),))
        assert Msg.contract("c", "{}").msg == ContractMsg("c", "{}")
        assert Msg.opaque("d").msg == OpaqueMsg("d")
        assert Msg.of(OpaqueMsg("d")) == Msg.opaque("d")

    def test_of_requires_variant(self) -> None:
        with pytest.raises(ValueError):
            Msg.of(None)  # type: ignore[arg-type]

    def test_rejects_foreign_variant_type(self) -> None:
        with pytest.raises(TypeError):
            Msg(msg=Coin.of(1, "x"))  # type: ignore[arg-type]

    def test_is_set(self) -> None:
        assert Msg.opaque("d").is_set
        assert not Msg().is_set


# ---------------------------------------------------------------------------
# ContractResult accessors
# ---------------------------------------------------------------------------

class TestContractResult:
    def test_state(self) -> None:
        assert ContractResult.ok().state is ResultState.OK
        assert ContractResult.err("e").state is ResultState.ERR
        assert ContractResult().state is ResultState.UNSET

    def test_match_is_exhaustive(self) -> None:
        ok = ContractResult.ok(log="done")
        err = ContractResult.err("bad")
        assert ok.match(lambda r: ("ok", r.log), lambda e: ("err", e)) == ("ok", "done")
        assert err.match(lambda r: ("ok", r.log), lambda e: ("err", e)) == ("err", "bad")
        with pytest.raises(InvalidEncoding):
            ContractResult().match(lambda r: r, lambda e: e)

    def test_ok_accepts_response_or_fields(self) -> None:
        resp = Response(messages=(Msg.opaque("x"),), data="d")
        assert ContractResult.ok(resp) == ContractResult.ok(messages=[Msg.opaque("x")], data="d")
        assert ContractResult.ok(resp).res == Ok(resp)

    @pytest.mark.parametrize(
        "fields",
        [{"log": "kept?"}, {"data": ""}, {"messages": [Msg.opaque("x")]}],
    )
    def test_ok_rejects_response_mixed_with_fields(self, fields) -> None:
        with pytest.raises(TypeError):
            ContractResult.ok(Response(), **fields)

    def test_ok_with_response_and_default_fields(self) -> None:
        resp = Response(log="mine")
        assert ContractResult.ok(resp, messages=(), log=None, data=None).unwrap().log == "mine"

    def test_unwrap_on_err_panics_with_message(self) -> None:
        with pytest.raises(UnwrapPanic, match="Unexpected error: foobar"):
            ContractResult.err("foobar").unwrap()

    def test_unwrap_panic_escapes_generic_handlers(self) -> None:
        def swallow() -> None:
            try:
                ContractResult.err("x").unwrap()
            except Exception:  # noqa: BLE001 - the point of the test
                pytest.fail("UnwrapPanic must not be an Exception")

        with pytest.raises(UnwrapPanic):
            swallow()

    def test_unset_accessors_panic(self) -> None:
        with pytest.raises(UnwrapPanic):
            ContractResult().unwrap()
        with pytest.raises(UnwrapPanic):
            ContractResult().is_err()

    def test_is_err(self) -> None:
        assert ContractResult.err("").is_err() is True
        assert ContractResult.ok().is_err() is False

    def test_variant_wrappers_check_types(self) -> None:
        with pytest.raises(TypeError):
            Ok("not a response")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            Err(42)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# JSON views
# ---------------------------------------------------------------------------

def test_result_to_dict_shape() -> None:
    r = ContractResult.ok(messages=[Msg.send("me", "you", coin("1015", "earth"))], log="released funds!")
    assert r.to_dict() == {
        "ok": {
            "messages": [
                {"send": {"from_address": "me", "to_address": "you",
                          "amount": [{"denom": "earth", "amount": "1015"}]}}
            ],
            "log": "released funds!",
        }
    }
    assert ContractResult.err("foobar").to_dict() == {"err": "foobar"}
    assert ContractResult().to_dict() == {}


def test_from_dict_inverts_to_dict() -> None:
    values = [
        mock_params("s", coin("1", "a"), coin("2", "b")),
        ContractResult.ok(messages=[Msg.contract("c", "{}"), Msg.opaque("o")], data=""),
        ContractResult.err("e"),
        Msg.opaque("x"),
    ]
    for v in values:
        assert from_dict(to_dict(v), type(v)) == v
        assert type(v).from_dict(v.to_dict()) == v


@pytest.mark.parametrize(
    "obj",
    [
        {"send": {"from_address": "a", "to_address": "b"}, "opaque": {"data": "x"}},
        {"bogus": {}},
        {"opaque": "not-an-object"},
    ],
)
def test_from_dict_rejects_bad_msg_shapes(obj) -> None:
    with pytest.raises((TypeError, ValueError)):
        Msg.from_dict(obj)


def test_from_dict_requires_required_fields() -> None:
    with pytest.raises(ValueError):
        BlockInfo.from_dict({"height": 1, "time": 2})


def test_from_dict_empty_union_is_unset() -> None:
    assert ContractResult.from_dict({}) == ContractResult()
