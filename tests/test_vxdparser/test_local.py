"""Test reading (and watching) `.vxd` files with `vxdparser.local.LocalBackend`."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, AsyncIterable

import pytest
from pytest_mock import MockerFixture

from vxdparser.backend import ReadError
from vxdparser.local import LocalBackend
from vxdparser.parser import parse

from tests.fixtures import MOCK_VXD_SOURCE, MOCK_VXD_VARIABLES


def test_get(example_file: Path) -> None:
    """Read the whole file."""
    backend = LocalBackend(example_file)
    assert MOCK_VXD_SOURCE.decode('utf-8') == backend.get()
    assert MOCK_VXD_VARIABLES == parse(backend.get())


def test_str_and_repr(example_file: Path) -> None:
    """The backend is represented by its path."""
    backend = LocalBackend(example_file)
    assert str(example_file) == str(backend)
    assert f'LocalBackend(path={example_file!r})' == repr(backend)


def test_missing_file(tmp_path: Path) -> None:
    """Warn on creation; fail with an 'open' error on read."""
    with pytest.warns(RuntimeWarning):
        backend = LocalBackend(tmp_path / 'missing.vxd')

    with pytest.raises(ReadError) as exc_info:
        backend.get()

    assert 'open' == exc_info.value.kind
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_undecodable_file(tmp_path: Path) -> None:
    """Fail with a 'decode' error for files that are not UTF-8."""
    path = tmp_path / 'latin-1.vxd'
    path.write_bytes('NAME = "Müller";'.encode('latin-1'))

    with pytest.raises(ReadError) as exc_info:
        LocalBackend(path).get()

    assert 'decode' == exc_info.value.kind
    assert str(path) == exc_info.value.source


def test_poll(example_file: Path, mocker: MockerFixture) -> None:
    """Yield the contents once initially, then again after each change."""
    changes = ['HOST = "changed";']

    async def mock_awatch(*_: Any, **__: Any) -> AsyncIterable[set[Any]]:
        for change in changes:
            example_file.write_text(change, encoding='utf-8')
            yield set()

    mocker.patch('vxdparser.local.awatch', new=mock_awatch)

    async def collect() -> list[str]:
        return [content async for content in LocalBackend(example_file).poll()]

    contents = asyncio.run(collect())

    assert [MOCK_VXD_SOURCE.decode('utf-8'), 'HOST = "changed";'] == contents


def test_byte_order_mark(tmp_path: Path) -> None:
    """A UTF-8 byte order mark is not part of the first name."""
    path = tmp_path / 'bom.vxd'
    path.write_bytes('HOST = example.com; PORT = 80;'.encode('utf-8-sig'))

    assert {'HOST': 'example.com', 'PORT': '80'} == parse(LocalBackend(path).get())
