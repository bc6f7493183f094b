"""Use a local `.vxd` file as the source.

## Example

```python
from vxdparser.local import LocalBackend
from vxdparser.parser import parse

variables = parse(LocalBackend('settings.vxd').get())
```
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import AsyncIterator

from watchfiles import awatch  # pyright: ignore[reportUnknownVariableType]

from vxdparser.backend import Backend, ReadError

__all__ = ['LocalBackend']

logger = logging.getLogger(__name__)


class LocalBackend(Backend):
    """Read the `.vxd` source from a local file.

    ## Usage

    >>> backend = LocalBackend(example_file)
    >>> print(backend.get())
    HOST: string = "example.com";
    PORT: i32 = 8080;
    DEBUG: bool = true;
    GREETING = "hello world";
    """

    path: Path
    """Read the source from this file"""

    def __init__(self, path: str | Path) -> None:
        """Set attributes to initialize the backend.

        If the given `path` doesn't exist, emit a warning and continue.

        >>> with pytest.warns(RuntimeWarning):
        ...     backend = LocalBackend('does_not_exist.vxd')
        """
        logger.debug("Initialize: %s('%s')", self.__class__.__name__, path)
        self.path = Path(path)
        if not self.path.is_file():
            warnings.warn(f'could not read file: {path}', category=RuntimeWarning, stacklevel=2)

    def __str__(self) -> str:
        """Return the source file's path as the string representation of the backend."""
        return f'{self.path}'

    def get(self) -> str:
        """Read the contents of the file as a string.

        A leading UTF-8 byte order mark is dropped. Failures are raised as `vxdparser.backend.ReadError`, tagged
        with the stage that failed:

        >>> with pytest.warns(RuntimeWarning):
        ...     backend = LocalBackend('does_not_exist.vxd')
        >>> backend.get()
        Traceback (most recent call last):
        ...
        vxdparser.backend.ReadError: could not open does_not_exist.vxd
        """
        logger.debug("Read file: '%s'", self.path)
        try:
            file = self.path.open(encoding='utf-8-sig')
        except OSError as exc:
            raise ReadError('open', str(self.path)) from exc

        with file:
            try:
                return file.read()
            except UnicodeDecodeError as exc:
                raise ReadError('decode', str(self.path)) from exc
            except OSError as exc:
                raise ReadError('read', str(self.path)) from exc

    async def poll(self, interval: int = 0) -> AsyncIterator[str]:
        """Poll the file for changes, and yield the file contents on change.

        .. note::
            The `interval` parameter is ignored
        """
        yield self.get()
        async for _ in awatch(self.path):
            logger.info("Detected change to '%s'", self.path)
            yield self.get()


logger.debug('successfully imported %s', __name__)
