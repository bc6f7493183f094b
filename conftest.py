"""Register the shared fixtures in `tests.fixtures` for every test (including `doctest`s)."""

pytest_plugins = ['tests.fixtures']
