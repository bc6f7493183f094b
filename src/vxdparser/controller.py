"""Define a controller class for printing the variables parsed from a `vxdparser.backend.Backend`."""

from __future__ import annotations

import logging
import typing

from vxdparser.backend import Backend, FormatT, dumps
from vxdparser.parser import scan
from vxdparser.values import decode

try:
    from typing import TypeAlias  # type: ignore[attr-defined,unused-ignore]
except ImportError:  # pragma: no cover
    from typing_extensions import TypeAlias  # type: ignore[assignment,attr-defined,unused-ignore]

__all__ = ['ActionType', 'VariablesController']

logger = logging.getLogger(__name__)

ActionType: TypeAlias = typing.Callable[[str], typing.Any]


class VariablesController:
    """Parse the source text of a backend, and print the selected variables in the given format."""

    backend: Backend
    """Read the `.vxd` source text from this backend."""

    fmt: FormatT
    """Serialize the variables in this format for printing."""

    keys: tuple[str, ...]
    """Only print these variables (all of them if empty); a missing key raises `KeyError`."""

    logger: logging.Logger
    """Each `VariablesController` has its own logger (named `"vxdparser.controller:{backend}"`)."""

    typed: bool
    """Decode each value by its type annotation (see `vxdparser.values`)."""

    def __init__(
        self, backend: Backend, fmt: FormatT, keys: typing.Iterable[str] = (), typed: bool = False
    ) -> None:
        """Set attributes and initialize a logger."""
        self.logger = logging.getLogger(f'{__name__}:{backend}')
        self.backend = backend
        self.fmt = fmt
        self.keys = tuple(keys)
        self.typed = typed

    def __str__(self) -> str:
        """Represent the controller as its backend and output format."""
        return f'{self.backend} ({self.fmt})'

    def select(self, source: str) -> dict[str, typing.Any]:
        """Parse the source text and select the requested variables.

        >>> ctrl = VariablesController(ExampleBackend('example'), 'json', keys=['B'], typed=True)
        >>> ctrl.select('A = 1; B: u32 = 2; C;')
        {'B': 2}

        >>> ctrl.select('A = 1;')
        Traceback (most recent call last):
        ...
        KeyError: 'B'
        """
        result = scan(source)
        for entry in result.discarded:
            self.logger.debug('Discard entry #%d (%s): %r', entry.index, entry.discard_reason, entry.raw.strip())

        if self.typed:
            data = {entry.name: decode(entry) for entry in result.accepted}
        else:
            data = dict(result.variables)

        self.logger.debug('Parsed %d variable(s) from %s', len(data), self.backend)
        if not self.keys:
            return data

        return {key: data[key] for key in self.keys}

    def get(self, do_print: ActionType) -> None:
        """Retrieve the source text once, and print the selected variables."""
        do_print(dumps(self.fmt, self.select(self.backend.get())))

    async def aget(self, do_print: ActionType) -> None:
        """Poll the backend for the latest source text, and print the selected variables on each update."""
        async for content in self.backend.poll():
            do_print(dumps(self.fmt, self.select(content)))


logger.debug('successfully imported %s', __name__)
