"""Define fixtures for the test suite."""

from __future__ import annotations

from pathlib import Path
from unittest import mock

import pytest
import pytest_mock

# pylint: disable=redefined-outer-name

MOCK_VXD_SOURCE = b"""
HOST: string = "example.com";
PORT: i32 = 8080;
DEBUG: bool = true;
GREETING = "hello world";
""".strip()

MOCK_VXD_VARIABLES = {
    'HOST': 'example.com',
    'PORT': '8080',
    'DEBUG': 'true',
    'GREETING': 'hello world',
}
"""The result of parsing `MOCK_VXD_SOURCE`."""

MOCK_SETTINGS = b"""
VXDPARSER_FORMAT: yaml

VXDPARSER_LOGGING:
  root:
    level: DEBUG
""".strip()


@pytest.fixture(autouse=True)
def monkeypatch_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Monkeypatch environment variables for all tests."""
    monkeypatch.setenv('TERM', 'dumb')


@pytest.fixture(autouse=True)
def monkeypatch_settings_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> list[Path]:
    """Only look for the settings file in an empty temporary directory."""
    paths = [tmp_path / 'settings-search' / 'vxdparser-settings.yaml']
    monkeypatch.setattr('vxdparser.settings.DEFAULT_PATHS', paths)
    return paths


@pytest.fixture
def example_file(tmp_path: Path) -> Path:
    """Write the test source to a `.vxd` file in the temporary directory."""
    path = tmp_path / 'example.vxd'
    path.write_bytes(MOCK_VXD_SOURCE)
    return path


example_file.__doc__ = f"""Write the test source to a `.vxd` file in the temporary directory.

```
{MOCK_VXD_SOURCE.decode('utf-8')}
```
"""


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """Write `vxdparser`'s settings to a file in the temporary directory."""
    path = tmp_path / 'vxdparser-settings.yaml'
    path.write_bytes(MOCK_SETTINGS)
    return path


@pytest.fixture(autouse=True)
def mock_logging_dict_config(mocker: pytest_mock.MockerFixture) -> mock.MagicMock:
    """Mock the `logging.config.dictConfig()` function."""
    return mocker.patch('logging.config.dictConfig')
