""".. include:: ../../README.md

# Navigation

## `vxdparser.parser`

Tokenize `.vxd` text into a mapping of variable names to values.

## `vxdparser.values`

Decode values according to their type annotation.

## `vxdparser.backend`

Obtain the source text; serialize parsed variables for display.

### `vxdparser.local`

Use a local file as the source.

## `vxdparser.cli`

Commands and CLI documentation.

## `vxdparser.settings`

For settings and configuration.
"""  # noqa: D415

from __future__ import annotations

import sys
from typing import Any

__version__ = '0.1.0'

from vxdparser.parser import Entry, parse, scan
from vxdparser.values import parse_typed

__all__ = ['Entry', 'main', 'parse', 'parse_typed', 'scan']


def main(*args: Any) -> None:  # pylint: disable=missing-function-docstring
    """Entrypoint for the `vxd` CLI.

    When arguments are provided, they are used to replace `sys.argv[1:]`.
    """
    if args:
        sys.argv[1:] = list(args)

    from vxdparser.cli import app

    app(prog_name='vxd')
