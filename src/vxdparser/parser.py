"""Tokenize `.vxd` text into a mapping of variable names to values.

A `.vxd` source is a flat sequence of `NAME [: TYPE] [= VALUE];` declarations:

>>> parse('HOST = "example.com"; PORT: i32 = 8080;')
{'HOST': 'example.com', 'PORT': '8080'}

Parsing is lenient: entries without a value, or with an empty name or value, are dropped without
an error. Use `scan()` to see which entries were dropped and why.

## Delimiters

`;`, `=` and `:` are never quote-aware. A `;` inside a quoted value still ends the entry:

>>> parse('NAME="va;lue";')
{'NAME': '"va'}

## Empty values

An entry whose value is blank is dropped, but the emptiness check runs on the trimmed text
*before* quotes are stripped. An empty pair of quotes is therefore kept, as an empty string,
even though every other variable has a non-empty value:

>>> parse('KEY=""; BLANK=  ;')
{'KEY': ''}
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import typing

__all__ = ['Discard', 'Entry', 'Scan', 'iter_entries', 'normalize_value', 'parse', 'scan']

logger = logging.getLogger(__name__)

ENTRY_DELIMITER = ';'
TYPE_DELIMITER = ':'
VALUE_DELIMITER = '='
QUOTE = '"'


class Discard(str, enum.Enum):
    """Reasons for dropping a candidate entry from the output mapping."""

    NO_VALUE = 'no value'
    """The entry has no `=`."""

    EMPTY_NAME = 'empty name'
    """The name is empty after trimming."""

    EMPTY_VALUE = 'empty value'
    """The value is empty after trimming."""

    def __str__(self) -> str:
        """Represent the reason as its human-readable value."""
        return self.value


def normalize_value(raw: str) -> str:
    """Trim the raw value, then strip one pair of surrounding double quotes.

    >>> normalize_value('  "hello world"  ')
    'hello world'

    The interior of a quoted value is kept verbatim:

    >>> normalize_value('" padded "')
    ' padded '

    Quotes are only stripped when both are present:

    >>> normalize_value('"unterminated')
    '"unterminated'
    """
    value = raw.strip()
    if len(value) > 1 and value.startswith(QUOTE) and value.endswith(QUOTE):
        return value[1:-1]
    return value


@dataclasses.dataclass(frozen=True)
class Entry:
    """A candidate declaration: one `;`-delimited segment of the source text."""

    index: int
    """Position of the segment in the source (counting every segment, including empty ones)."""

    raw: str
    """The untrimmed text of the segment."""

    name: str
    """The trimmed name (may be empty)."""

    type: str | None = None
    """The trimmed type annotation, or `None` if there was no `:` before the `=`."""

    value: str | None = None
    """The normalized value, or `None` if there was no `=`."""

    @classmethod
    def from_segment(cls, index: int, segment: str) -> Entry:
        """Decompose a single segment into its name, type annotation, and value.

        >>> Entry.from_segment(0, ' KEY : String = "a=b" ')
        Entry(index=0, raw=' KEY : String = "a=b" ', name='KEY', type='String', value='a=b')

        >>> Entry.from_segment(3, 'KEY:String')
        Entry(index=3, raw='KEY:String', name='KEY:String', type=None, value=None)
        """
        prefix, has_value, raw_value = segment.strip().partition(VALUE_DELIMITER)
        if not has_value:
            return cls(index=index, raw=segment, name=prefix)

        name, has_type, annotation = prefix.partition(TYPE_DELIMITER)
        return cls(
            index=index,
            raw=segment,
            name=name.strip(),
            type=annotation.strip() if has_type else None,
            value=normalize_value(raw_value),
        )

    @property
    def discard_reason(self) -> Discard | None:
        """Return the reason this entry is dropped from the output, or `None` if it is kept.

        >>> Entry.from_segment(0, 'KEY').discard_reason
        <Discard.NO_VALUE: 'no value'>

        >>> Entry.from_segment(0, ' = 1').discard_reason
        <Discard.EMPTY_NAME: 'empty name'>

        >>> Entry.from_segment(0, 'KEY =   ').discard_reason
        <Discard.EMPTY_VALUE: 'empty value'>

        >>> Entry.from_segment(0, 'KEY = 1').discard_reason is None
        True
        """
        if self.value is None:
            return Discard.NO_VALUE
        if not self.name:
            return Discard.EMPTY_NAME
        # an empty pair of quotes (`KEY="";`) is a value; only blank text after `=` is not
        if not self.raw.partition(VALUE_DELIMITER)[2].strip():
            return Discard.EMPTY_VALUE
        return None

    @property
    def is_valid(self) -> bool:
        """Whether the entry produces a variable."""
        return self.discard_reason is None


def iter_entries(source: str) -> typing.Iterator[Entry]:
    """Lazily yield a candidate `Entry` for each non-blank segment of the source.

    Blank segments (`;;`, a trailing `;`, whitespace between entries) are skipped:

    >>> [entry.name for entry in iter_entries('A=1;;\\n  ;B;')]
    ['A', 'B']
    """
    for index, segment in enumerate(source.split(ENTRY_DELIMITER)):
        if segment.strip():
            yield Entry.from_segment(index, segment)


@dataclasses.dataclass
class Scan:
    """The result of `scan()`: accepted and discarded entries, in source order."""

    accepted: list[Entry] = dataclasses.field(default_factory=list)
    """Every entry that produced a variable, duplicates included."""

    discarded: list[Entry] = dataclasses.field(default_factory=list)
    """Every non-blank entry that was dropped."""

    @property
    def variables(self) -> dict[str, str]:
        """Fold the accepted entries into a mapping; later duplicates win."""
        return {entry.name: typing.cast(str, entry.value) for entry in self.accepted}


def scan(source: str) -> Scan:
    """Sort each candidate entry into accepted or discarded.

    >>> result = scan('A=1; B; =2; A=3;')
    >>> result.variables
    {'A': '3'}
    >>> [(entry.raw, str(entry.discard_reason)) for entry in result.discarded]
    [(' B', 'no value'), (' =2', 'empty name')]
    """
    result = Scan()
    for entry in iter_entries(source):
        if entry.is_valid:
            result.accepted.append(entry)
        else:
            result.discarded.append(entry)
    return result


def parse(source: str) -> dict[str, str]:
    """Parse `.vxd` text into a mapping of names to textual values.

    Never raises for malformed input; invalid entries are omitted.

    >>> parse('')
    {}
    >>> parse('A=1;B=2;A=3;')
    {'A': '3', 'B': '2'}
    >>> parse('KEY;KEY=;KEY = ;')
    {}
    """
    variables: dict[str, str] = {}
    for entry in iter_entries(source):
        if entry.is_valid:
            variables[entry.name] = typing.cast(str, entry.value)
    return variables


logger.debug('successfully imported %s', __name__)
