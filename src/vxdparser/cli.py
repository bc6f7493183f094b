"""Create `vxdparser`'s CLI with `typer`_.

```sh
vxd get settings.vxd                 # print every variable as JSON
vxd get settings.vxd HOST PORT -f raw
vxd get settings.vxd --typed --poll  # decode values, and re-print on every change
vxd check settings.vxd               # show which entries were discarded, and why
```

.. note:: `typer`_ does not support `from __future__ import annotations` as of 2023-12-31

.. _typer: https://typer.tiangolo.com/
"""

import asyncio
import contextlib
import logging
import logging.config
import typing
from pathlib import Path

import rich
import typer
from rich.markup import escape
from rich.table import Table

from vxdparser import __version__, settings
from vxdparser.backend import DUMPERS, FormatT, ReadError
from vxdparser.controller import VariablesController
from vxdparser.local import LocalBackend
from vxdparser.parser import scan

try:
    from typing import Annotated, TypeAlias  # type: ignore[attr-defined,unused-ignore]
except ImportError:  # pragma: no cover
    from typing_extensions import Annotated, TypeAlias  # type: ignore[assignment,attr-defined,unused-ignore]


# ruff: noqa: PLR0913
# pylint: disable=redefined-outer-name,unused-argument,too-many-arguments

__all__ = [
    'app',
    'check',
    'get',
    'main',
    'version',
]

LOG_MISSING_SETTINGS_MESSAGE = "No settings file for [bold blue]vxdparser[/]; using defaults"
LOG_VERBOSITY_MESSAGE = 'logging verbosity set to [green]%s[/green]'

logger = logging.getLogger(__name__)

app_kwargs: typing.Dict[str, typing.Any] = {
    'context_settings': {'help_option_names': ['-h', '--help']},
    'no_args_is_help': True,
    'rich_markup_mode': 'rich',
}

app = typer.Typer(**app_kwargs)
"""The root `typer`_ application.

.. _typer: https://typer.tiangolo.com/
"""


def help_callback(ctx: typer.Context, value: typing.Optional[bool] = None) -> None:
    """Print the help message for the command."""
    if ctx.resilient_parsing:  # pragma: no cover
        return

    if value:
        rich.print(ctx.get_help())
        raise typer.Exit()


HelpAnnotation: TypeAlias = Annotated[
    typing.Optional[bool],
    typer.Option(
        '-h',
        '--help',
        callback=help_callback,
        rich_help_panel='Global',
        show_default=False,
        is_eager=True,
        help='Show this message and exit.',
    ),
]
PathAnnotation: TypeAlias = Annotated[
    Path,
    typer.Argument(help='Parse this [bold].vxd[/] file.', show_default=False, metavar='FILE'),
]
OptionalKeyAnnotation: TypeAlias = Annotated[
    typing.Optional[typing.List[str]],
    typer.Argument(
        help='Print only the variable(s) with matching name(s) (multiple values may be provided).'
        ' If unspecified, all variables will be printed',
        show_default=False,
        metavar='[KEY...]',
    ),
]
PollAnnotation: TypeAlias = Annotated[
    typing.Optional[bool],
    typer.Option(
        '-p',
        '--poll',
        help='Enable polling; print the variables on changes.',
        show_default=False,
    ),
]
TypedAnnotation: TypeAlias = Annotated[
    typing.Optional[bool],
    typer.Option(
        '-t',
        '--typed',
        help='Decode each value by its type annotation (e.g. [yellow]PORT: u32 = 80;[/] prints a number).',
        show_default=False,
    ),
]


def parse_format(ctx: typer.Context, value: typing.Optional[str]) -> typing.Optional[str]:
    """Validate the `--format` option against the supported output formats."""
    if ctx.resilient_parsing or value is None:
        return value

    if value not in DUMPERS:
        raise typer.BadParameter(f"unsupported format: '{value}' (choose from {', '.join(DUMPERS)})")

    return value


FormatAnnotation: TypeAlias = Annotated[
    typing.Optional[str],
    typer.Option(
        '-f',
        '--format',
        callback=parse_format,
        help='Print the variables in this format: ' + ', '.join(DUMPERS) + ' (default: from settings, or json).',
        show_default=False,
        metavar='FORMAT',
    ),
]


def load_config(ctx: typer.Context, value: typing.Optional[Path]) -> None:
    """Load the settings file from the given path."""
    if ctx.resilient_parsing:  # pragma: no cover
        return

    ctx.ensure_object(dict)
    if not value and 'settings' in ctx.obj:
        logger.debug('already loaded settings')
        return

    try:
        settings_file = value or settings.resolve_path()
    except FileNotFoundError:
        logger.debug(LOG_MISSING_SETTINGS_MESSAGE, extra={'markup': True})
        ctx.obj['settings'] = None
        return

    ctx.obj['settings'] = settings.load(settings_file)
    ctx.obj['settings_file'] = settings_file

    if ctx.obj.get('logging_configured') and ctx.obj['settings'].LOGGING:
        configure_logging(ctx, None)


ConfigAnnotation: TypeAlias = Annotated[
    typing.Optional[Path],
    typer.Option(
        '-c',
        '--config',
        callback=load_config,
        help="Path to [bold blue]vxdparser[/]'s own settings file.",
        rich_help_panel='Global',
        show_default=False,
    ),
]


def configure_logging(ctx: typer.Context, verbose: typing.Optional[bool] = None) -> None:
    """Callback for the `--verbose` option to configure logging verbosity.

    By default, log messages at the `logging.INFO` level:

    >>> configure_logging(ctx)
    >>> caplog.messages
    ['logging verbosity set to [green]INFO[/green]']

    <!-- Clear the `caplog` fixture for the `doctest`, but exclude this from the docs
    >>> caplog.clear()

    -->
    When `verbose` is `True`, log messages at the `logging.DEBUG` level:

    >>> configure_logging(ctx, True)
    >>> caplog.messages
    ['logging verbosity set to [green]DEBUG[/green]']
    """
    if ctx.resilient_parsing:  # pragma: no cover  # this is for tab completions
        return

    ctx.ensure_object(dict)

    # once given, `--verbose` sticks for the rest of the invocation
    verbose = bool(verbose or ctx.obj.get('verbose'))
    ctx.obj['verbose'] = verbose

    logging.config.dictConfig(settings.logging_config(ctx.obj.get('settings'), verbose))
    ctx.obj['logging_configured'] = True

    verbosity = logging.DEBUG if verbose else logging.INFO
    logger.debug(LOG_VERBOSITY_MESSAGE, logging.getLevelName(verbosity), extra={'markup': True})


VerbosityAnnotation = Annotated[
    typing.Optional[bool],
    typer.Option(
        '-v',
        '--verbose',
        callback=configure_logging,
        rich_help_panel='Global',
        help='Log messages at the [black]DEBUG[/] level.',
        is_eager=True,
        show_default=False,
    ),
]


def version_callback(ctx: typer.Context, value: typing.Optional[bool] = None) -> None:
    """Print the version of the package."""
    if ctx.resilient_parsing:  # pragma: no cover  # this is for tab completions
        return

    if value:
        rich.print(__version__)
        raise typer.Exit()


VersionAnnotation = Annotated[
    typing.Optional[bool],
    typer.Option(
        '-V',
        '--version',
        callback=version_callback,
        rich_help_panel='Global',
        show_default=False,
        is_eager=True,
        help='Print the version and exit.',
    ),
]


@contextlib.contextmanager
def handle_errors() -> typing.Iterator[None]:
    """Print errors raised within the managed context, then exit with status 1.

    >>> with pytest.raises(typer.Exit), handle_errors():
    ...     raise ReadError('open', 'missing.vxd')
    ERROR: could not open file: missing.vxd
    """
    try:
        yield
    except ReadError as exc:
        rich.print(f'[red]ERROR[/]: could not {exc.kind} file: [purple]{escape(exc.source)}[/]')
        raise typer.Exit(1) from exc
    except KeyError as exc:
        rich.print(f'[red]ERROR[/]: Missing key: [green]{escape(str(exc.args[0]))}[/]')
        raise typer.Exit(1) from exc
    except ValueError as exc:
        rich.print(f'[red]ERROR[/]: {escape(str(exc))}')
        raise typer.Exit(1) from exc


def print_data(text: str) -> None:
    """Print serialized variables verbatim: no markup, emoji, highlighting, or line wrapping."""
    rich.get_console().print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)


def status_table(path: Path, source: str) -> Table:
    """Tabulate every candidate entry in the source, and whether it produced a variable."""
    result = scan(source)
    table = Table(title=f'{path}', caption=f'{len(result.variables)} variable(s), {len(result.discarded)} discarded')
    for column in ('#', 'name', 'type', 'value', 'status'):
        table.add_column(column)

    entries = sorted(result.accepted + result.discarded, key=lambda entry: entry.index)
    for entry in entries:
        reason = entry.discard_reason
        table.add_row(
            str(entry.index),
            escape(entry.name),
            escape(entry.type or ''),
            escape(entry.value or ''),
            f'[red]{reason}[/]' if reason else '[green]ok[/]',
        )
    return table


# ⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯⎯
#                                             command definitions


@app.command()
def get(
    ctx: typer.Context,
    path: PathAnnotation,
    keys: OptionalKeyAnnotation = None,
    fmt: FormatAnnotation = None,
    typed: TypedAnnotation = False,
    poll: PollAnnotation = False,
    get_help: HelpAnnotation = None,
    config: ConfigAnnotation = None,
    verbose: VerbosityAnnotation = None,
    version: VersionAnnotation = None,
) -> None:
    """Print the variables declared in the given [bold].vxd[/] file."""
    ctx.ensure_object(dict)
    with handle_errors():
        out_fmt: FormatT = typing.cast(FormatT, fmt) if fmt else settings.output_format(ctx.obj.get('settings'))

    ctrl = VariablesController(LocalBackend(path), out_fmt, keys or [], typed or False)

    if poll:
        logger.debug('Begin monitoring (read-only): [yellow]%s[/yellow]', escape(f'{ctrl}'), extra={'markup': True})
        with handle_errors():
            asyncio.run(ctrl.aget(print_data))
        return

    logger.debug('Get [yellow]%s[/yellow]', escape(f'{ctrl}'), extra={'markup': True})
    with handle_errors():
        ctrl.get(print_data)


@app.command()
def check(
    ctx: typer.Context,
    path: PathAnnotation,
    get_help: HelpAnnotation = None,
    config: ConfigAnnotation = None,
    verbose: VerbosityAnnotation = None,
    version: VersionAnnotation = None,
) -> None:
    """Show every entry in the given [bold].vxd[/] file, and why any were discarded."""
    with handle_errors():
        source = LocalBackend(path).get()

    rich.print(status_table(path, source))


@app.command()
def version(
    ctx: typer.Context,
    get_help: HelpAnnotation = None,
    config: ConfigAnnotation = None,
    verbose: VerbosityAnnotation = None,
    version: VersionAnnotation = None,
) -> None:
    """Print the version and exit."""
    version_callback(ctx, True)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    get_help: HelpAnnotation = None,
    config: ConfigAnnotation = None,
    verbose: VerbosityAnnotation = None,
    version: VersionAnnotation = None,
) -> None:
    """Parse [bold].vxd[/] files: flat [yellow]NAME: TYPE = VALUE;[/] declarations."""
    ctx.ensure_object(dict)

    if not ctx.invoked_subcommand:  # pragma: no cover
        rich.print(ctx.get_help())


logger.debug('successfully imported %s', __name__)
