"""
cosmwasm_types.cli
------------------

`cw-types` command-line tool for inspecting interchange payloads:

  cw-types decode result 0a1d...
  cw-types encode coin '{"denom": "earth", "amount": "1015"}'
  cw-types mock-params creator --sent 1015:earth

The Typer app lives in cosmwasm_types.cli.main; console script target is
`cosmwasm_types.cli.main:main`.
"""

from __future__ import annotations

from .main import app, main

__all__ = ["app", "main"]
