"""Read and deserialize `vxdparser`'s own settings.

## Schema

The settings file is YAML; each key is prefixed with `PREFIX`:

```yaml
VXDPARSER_FORMAT: yaml      # the default output format of `vxd get`

VXDPARSER_LOGGING:          # merged over `DEFAULT_LOGGING_CONFIG`
  root:
    level: DEBUG
```
"""

from __future__ import annotations

import copy
import logging
import typing
from pathlib import Path

import pyspry

from vxdparser.backend import DUMPERS, FormatT

__all__ = [
    'DEFAULT_FORMAT',
    'DEFAULT_LOGGING_CONFIG',
    'DEFAULT_PATHS',
    'PREFIX',
    'load',
    'logging_config',
    'output_format',
    'resolve_path',
]

logger = logging.getLogger(__name__)

DEFAULT_PATHS = [
    Path.cwd() / 'vxdparser-settings.yaml',
    Path.home() / 'vxdparser-settings.yaml',
    Path('/etc/vxdparser/settings.yaml'),
]
"""Check each of these locations for `vxdparser`'s settings file.

The following locations are checked (ordered by priority):

1. `./vxdparser-settings.yaml`
2. `~/vxdparser-settings.yaml`
3. `/etc/vxdparser/settings.yaml`
"""

DEFAULT_FORMAT: FormatT = 'json'
"""Print parsed variables in this format unless the settings file (or `--format`) says otherwise."""

DEFAULT_LOGGING_CONFIG: dict[str, typing.Any] = {
    'version': 1,
    'formatters': {
        'simple': {
            'datefmt': logging.Formatter.default_time_format,
            'format': '%(message)s',
            'style': '%',
            'validate': False,
        },
    },
    'filters': {},
    'handlers': {
        'rich': {
            'class': 'rich.logging.RichHandler',
            'formatter': 'simple',
            'rich_tracebacks': True,
        },
    },
    'loggers': {},
    'root': {
        'handlers': ['rich'],
        'level': logging.INFO,
        'propagate': False,
    },
    'disable_existing_loggers': True,
    'incremental': False,
}
"""Default logging configuration passed to `logging.config.dictConfig()`."""

PREFIX = 'VXDPARSER'
"""Each of `vxdparser`'s settings must be prefixed with this string."""


def load(path: Path) -> pyspry.Settings:
    """Load the settings from the given path.

    >>> conf = load(settings_file)
    >>> conf.FORMAT
    'yaml'
    """
    logger.debug("Load settings: '%s'", path)
    return pyspry.Settings.load(path, PREFIX)


def logging_config(conf: pyspry.Settings | None, verbose: bool = False) -> dict[str, typing.Any]:
    """Build the configuration for `logging.config.dictConfig()`.

    Each section of the settings file's `LOGGING` is merged into the matching section of
    `DEFAULT_LOGGING_CONFIG`; `DEFAULT_LOGGING_CONFIG` itself is never modified.

    >>> logging_config(None)['root']['level'] == logging.INFO
    True
    >>> logging_config(load(settings_file))['root']['level']
    'DEBUG'

    `verbose` always wins over the settings file:

    >>> logging_config(None, verbose=True)['root']['level'] == logging.DEBUG
    True
    """
    merged = copy.deepcopy(DEFAULT_LOGGING_CONFIG)
    overrides = (conf.LOGGING or {}) if conf is not None else {}

    for section, value in overrides.items():
        if isinstance(merged.get(section), dict):
            merged[section].update(value)
        else:
            merged[section] = value

    if verbose:
        merged['root']['level'] = logging.DEBUG

    return merged


def output_format(conf: pyspry.Settings | None) -> FormatT:
    """Get the output format from the given settings, falling back to `DEFAULT_FORMAT`.

    >>> output_format(None)
    'json'
    >>> output_format(load(settings_file))
    'yaml'
    """
    fmt = (conf.FORMAT or DEFAULT_FORMAT) if conf is not None else DEFAULT_FORMAT
    if fmt not in DUMPERS:
        raise ValueError(f"unsupported format: '{fmt}'")

    return typing.cast(FormatT, fmt)


def resolve_path() -> Path:
    """Return the first path in `DEFAULT_PATHS` that exists."""
    for path in DEFAULT_PATHS:
        if path.is_file():
            return path

    raise FileNotFoundError('Could not find vxdparser settings', DEFAULT_PATHS)


logger.debug('successfully imported %s', __name__)
