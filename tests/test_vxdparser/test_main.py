"""A simple test to check `vxdparser.__main__`."""

from __future__ import annotations

import sys

from pytest_mock import MockerFixture

from vxdparser import __main__, cli


def test_main(mocker: MockerFixture) -> None:
    """Ensure the `typer` app is called."""
    # Arrange
    mock_app = mocker.patch.object(cli, 'app')
    mocker.patch.object(sys, 'argv', ['vxd', 'version'])

    # Act
    __main__.main()

    # Assert
    mock_app.assert_called_once_with(prog_name='vxd')


def test_main_args(mocker: MockerFixture) -> None:
    """Verify arguments override `sys.argv`."""
    # Arrange
    mock_app = mocker.patch.object(cli, 'app')
    mocker.patch.object(sys, 'argv', ['vxd'])

    # Act
    __main__.main('get', 'settings.vxd')

    # Assert
    assert ['vxd', 'get', 'settings.vxd'] == sys.argv
    mock_app.assert_called_once_with(prog_name='vxd')
