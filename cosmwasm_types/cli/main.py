"""
cosmwasm_types.cli.main — decode/encode interchange payloads from a shell.

Payloads are hex (optionally 0x-prefixed) unless --base64 is given. JSON
views use the wire field names (see `to_dict`). Decode failures print the
error's machine shape to stderr and exit with status 1.
"""

from __future__ import annotations

import base64
import binascii
import json
import sys
from typing import Any, Dict, List, NoReturn, Optional, Type

import typer

from .. import logging as cwlog
from ..config import load_config
from ..errors import CodecError, DecodeError
from ..mock import mock_params
from ..types import (BlockInfo, Coin, ContractInfo, ContractResult, MessageInfo, Msg, Params,
                     Response, load_contract_result, load_msg)
from ..encoding.schema import Message
from ..version import __version__

log = cwlog.get_logger(__name__)

TYPES: Dict[str, Type[Message]] = {
    "params": Params,
    "block": BlockInfo,
    "message-info": MessageInfo,
    "contract-info": ContractInfo,
    "coin": Coin,
    "msg": Msg,
    "response": Response,
    "result": ContractResult,
}

app = typer.Typer(
    name="cw-types",
    help="Inspect host/contract interchange payloads",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (DEBUG shows skipped fields)", envvar="CW_TYPES_LOG_LEVEL"
    ),
) -> None:
    cfg = load_config()
    fmt = cfg.log_format.lower() if cfg.log_format else None
    cwlog.configure(json=None if fmt not in ("json", "text") else fmt == "json",
                    level=log_level or cfg.log_level)


def _resolve_type(name: str) -> Type[Message]:
    try:
        return TYPES[name.strip().lower()]
    except KeyError:
        raise typer.BadParameter(f"unknown type {name!r}; choose from {', '.join(TYPES)}")


def _parse_payload(payload: str, use_base64: bool) -> bytes:
    text = payload.strip()
    try:
        if use_base64:
            return base64.b64decode(text, validate=True)
        if text.startswith(("0x", "0X")):
            text = text[2:]
        return bytes.fromhex(text)
    except (ValueError, binascii.Error) as e:
        raise typer.BadParameter(f"payload is not valid {'base64' if use_base64 else 'hex'}: {e}")


def _render_bytes(data: bytes, use_base64: bool) -> str:
    return base64.b64encode(data).decode("ascii") if use_base64 else data.hex()


def _fail(err: CodecError) -> NoReturn:
    typer.echo(json.dumps(err.to_dict(), sort_keys=True), err=True)
    raise typer.Exit(1)


@app.command()
def decode(
    type_name: str = typer.Argument(..., metavar="TYPE", help=f"One of: {', '.join(TYPES)}"),
    payload: str = typer.Argument(..., help="Encoded bytes (hex, or base64 with --base64)"),
    use_base64: bool = typer.Option(False, "--base64", help="Payload is base64"),
    strict: bool = typer.Option(False, "--strict", help="Reject msg/result payloads with no variant"),
) -> None:
    """Decode a payload and print its JSON view."""
    cls = _resolve_type(type_name)
    data = _parse_payload(payload, use_base64)
    try:
        if strict and cls is Msg:
            value: Message = load_msg(data)
        elif strict and cls is ContractResult:
            value = load_contract_result(data)
        else:
            value = cls.decode(data)
    except DecodeError as e:
        log.debug("decode failed", extra={"type": cls.__name__, "code": e.to_dict()["code"]})
        _fail(e)
    typer.echo(json.dumps(value.to_dict(), indent=2))


@app.command()
def encode(
    type_name: str = typer.Argument(..., metavar="TYPE", help=f"One of: {', '.join(TYPES)}"),
    source: str = typer.Argument(..., help="JSON view of the value, or '-' to read stdin"),
    use_base64: bool = typer.Option(False, "--base64", help="Print base64 instead of hex"),
) -> None:
    """Build a value from its JSON view and print its encoding."""
    cls = _resolve_type(type_name)
    raw = sys.stdin.read() if source == "-" else source
    try:
        obj: Any = json.loads(raw)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"invalid JSON: {e}")
    try:
        value = cls.from_dict(obj)
    except (TypeError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)
    try:
        data = value.encode()
    except CodecError as e:
        _fail(e)
    typer.echo(_render_bytes(data, use_base64))


def _parse_coins(specs: List[str]) -> List[Coin]:
    coins: List[Coin] = []
    for spec in specs:
        amount, sep, denom = spec.partition(":")
        if not sep:
            raise typer.BadParameter(f"expected AMOUNT:DENOM, got {spec!r}")
        try:
            coins.append(Coin(denom=denom, amount=amount))
        except ValueError as e:
            raise typer.BadParameter(str(e))
    return coins


@app.command("mock-params")
def mock_params_cmd(
    signer: str = typer.Argument(..., help="Signer address"),
    sent: List[str] = typer.Option([], "--sent", help="Sent funds as AMOUNT:DENOM (repeatable)"),
    balance: List[str] = typer.Option([], "--balance", help="Contract balance as AMOUNT:DENOM (repeatable)"),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON view instead of bytes"),
    use_base64: bool = typer.Option(False, "--base64", help="Print base64 instead of hex"),
) -> None:
    """Print a deterministic test Params."""
    params = mock_params(signer, _parse_coins(sent), _parse_coins(balance))
    if as_json:
        typer.echo(json.dumps(params.to_dict(), indent=2))
    else:
        typer.echo(_render_bytes(params.encode(), use_base64))


@app.command()
def version() -> None:
    """Print the package version."""
    typer.echo(__version__)


def main() -> None:
    app(prog_name="cw-types")


if __name__ == "__main__":
    main()
