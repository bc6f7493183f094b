"""Define the API for obtaining `.vxd` source text, and for displaying parsed variables."""

from __future__ import annotations

import abc
import json
import logging
import typing
from typing import Any, AsyncIterator, Callable

import tomlkit as toml
import yaml

__all__ = ['Backend', 'FormatT', 'ReadError', 'dumps']

logger = logging.getLogger(__name__)

FormatT = typing.Literal['json', 'raw', 'toml', 'yaml', 'yml']
"""The supported output formats for parsed variables."""

ReadKindT = typing.Literal['open', 'read', 'decode']
"""The stages at which obtaining the source text can fail."""

DumpT = Callable[[dict[str, Any]], str]


def dump_raw(data: dict[str, Any]) -> str:
    """Write one `NAME=VALUE` line per variable; a `None` value leaves the line empty after `=`.

    >>> print(dump_raw({'HOST': 'example.com', 'PORT': None}))
    HOST=example.com
    PORT=
    """
    return '\n'.join(f'{key}={"" if value is None else value}' for key, value in data.items())


def dump_toml(data: dict[str, Any]) -> str:
    """Serialize to TOML, skipping variables that have no TOML representation (`None`).

    >>> print(dump_toml({'HOST': 'example.com', 'PORT': None}), end='')
    HOST = "example.com"
    >>> caplog.messages
    ["TOML has no null; skipping 'PORT'"]
    """
    for key in [key for key, value in data.items() if value is None]:
        logger.debug("TOML has no null; skipping '%s'", key)

    return toml.dumps({key: value for key, value in data.items() if value is not None})


DUMPERS: dict[FormatT, DumpT] = {
    'json': json.dumps,
    'raw': dump_raw,
    'toml': dump_toml,
    'yaml': yaml.dump,
    'yml': yaml.dump,
}


def dumps(fmt: FormatT, data: dict[str, Any]) -> str:
    """Serialize the given `data` object to the given `FormatT`.

    >>> dumps('json', {'KEY': 'value'})
    '{"KEY": "value"}'

    >>> dumps('ini', {})
    Traceback (most recent call last):
    ...
    ValueError: unsupported format: 'ini'
    """
    try:
        dump = DUMPERS[fmt]
    except KeyError as exc:
        raise ValueError(f"unsupported format: '{fmt}'") from exc

    return dump(data)


class ReadError(Exception):
    """The source text could not be obtained; nothing was parsed."""

    kind: ReadKindT
    """The stage that failed: `'open'`, `'read'`, or `'decode'`."""

    source: str
    """Identifies the source (e.g. the file path)."""

    def __init__(self, kind: ReadKindT, source: str) -> None:
        """Record the failing stage and the source."""
        super().__init__(f'could not {kind} {source}')
        self.kind = kind
        self.source = source


class Backend(abc.ABC):
    """Define the API for backend implementations."""

    def __repr__(self) -> str:
        """Represent the backend object as its invocation.

        >>> example = ExampleBackend('an example')
        >>> example
        ExampleBackend(source='an example')
        """
        annotations = (klass := self.__class__).__annotations__
        annotations.pop('return', None)

        args = ', '.join(f'{key}={getattr(self, key)!r}' for key in annotations if hasattr(self, key))
        return f'{klass.__name__}({args})'

    @abc.abstractmethod
    def __str__(self) -> str:
        """When formatted as a string, represent the backend as the identifier of its source."""

    @abc.abstractmethod
    def get(self) -> str:
        """Retrieve the full `.vxd` source as a string; raise `ReadError` on failure."""

    @classmethod
    def new(
        cls: type[Backend],
        *args: Any,
        **kwargs: Any,
    ) -> Backend:
        """Connect a new instance to the backend."""
        return cls(*args, **kwargs)

    @abc.abstractmethod
    async def poll(self, interval: int = 0) -> AsyncIterator[str]:
        """Yield the source text, then yield it again each time it changes."""
        yield ''  # pragma: no cover


logger.debug('successfully imported %s', __name__)
