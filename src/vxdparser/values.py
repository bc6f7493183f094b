"""Decode textual `.vxd` values according to their type annotation.

`vxdparser.parser.parse()` always produces text. This module is the opt-in layer that interprets
the annotation:

>>> parse_typed('DEBUG: bool = true; RETRIES: u32 = 3; RATIO: f64 = 0.5; NAME = "vxd";')
{'DEBUG': True, 'RETRIES': 3, 'RATIO': 0.5, 'NAME': 'vxd'}

Values that do not fit their type decode to `None` instead of raising:

>>> parse_typed('PORT: u32 = -1; FLAG: bool = yes; NOTHING: string = null;')
{'PORT': None, 'FLAG': None, 'NOTHING': None}
"""

from __future__ import annotations

import logging
import re
import typing
from typing import Any, Callable

from vxdparser.parser import Entry, scan

__all__ = ['INTEGER_BOUNDS', 'NULL', 'TYPES', 'VxdType', 'decode', 'parse_typed']

logger = logging.getLogger(__name__)

VxdType = typing.Literal['string', 'i32', 'i64', 'u32', 'u64', 'f32', 'f64', 'bool', 'char']
"""The recognized type annotations (matched case-insensitively)."""

TYPES: tuple[VxdType, ...] = typing.get_args(VxdType)

NULL = 'null'
"""This literal decodes to `None` for every recognized type."""

INTEGER_BOUNDS: dict[str, tuple[int, int]] = {
    'i32': (-(2**31), 2**31 - 1),
    'i64': (-(2**63), 2**63 - 1),
    'u32': (0, 2**32 - 1),
    'u64': (0, 2**64 - 1),
}
"""Inclusive `(minimum, maximum)` for each integer type."""

SIGNED_PATTERN = re.compile(r'[+-]?[0-9]+')
UNSIGNED_PATTERN = re.compile(r'\+?[0-9]+')
FLOAT_PATTERN = re.compile(r'[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)', re.IGNORECASE)
"""ASCII digits only: no `_` separators, no other Unicode digits."""

DecodeT = Callable[[str], Any]


def _decode_string(text: str) -> str | None:
    return text or None


def _decode_integer(vtype: str) -> DecodeT:
    minimum, maximum = INTEGER_BOUNDS[vtype]
    pattern = UNSIGNED_PATTERN if minimum == 0 else SIGNED_PATTERN

    def decode_integer(text: str) -> int | None:
        if not pattern.fullmatch(text):
            return None
        number = int(text)
        return number if minimum <= number <= maximum else None

    return decode_integer


def _decode_float(text: str) -> float | None:
    return float(text) if FLOAT_PATTERN.fullmatch(text) else None


def _decode_bool(text: str) -> bool | None:
    return {'true': True, 'false': False}.get(text)


def _decode_char(text: str) -> str | None:
    return text[0] if text else None


DECODERS: dict[VxdType, DecodeT] = {
    'string': _decode_string,
    'i32': _decode_integer('i32'),
    'i64': _decode_integer('i64'),
    'u32': _decode_integer('u32'),
    'u64': _decode_integer('u64'),
    'f32': _decode_float,
    'f64': _decode_float,
    'bool': _decode_bool,
    'char': _decode_char,
}


def decode(entry: Entry) -> Any:
    """Convert the entry's value according to its type annotation.

    Without a recognized annotation, the text is returned unchanged:

    >>> decode(Entry.from_segment(0, 'KEY = 42'))
    '42'
    >>> decode(Entry.from_segment(0, 'KEY: decimal = 42'))
    '42'

    Annotations are case-insensitive:

    >>> decode(Entry.from_segment(0, 'KEY: I32 = 42'))
    42

    `char` keeps only the first character:

    >>> decode(Entry.from_segment(0, 'KEY: char = abc'))
    'a'
    """
    if entry.value is None:
        return None

    vtype = (entry.type or '').lower()
    if vtype not in DECODERS:
        return entry.value

    if entry.value == NULL:
        return None

    return DECODERS[vtype](entry.value)  # type: ignore[index]


def parse_typed(source: str) -> dict[str, Any]:
    """Parse `.vxd` text and decode each value by its type annotation; later duplicates win."""
    return {entry.name: decode(entry) for entry in scan(source).accepted}


logger.debug('successfully imported %s', __name__)
