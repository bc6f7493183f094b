"""Component-level / integration tests for `vxdparser` are stored here.

Many unit tests are implemented as `doctest`_ examples in the source modules. The fixtures available to these
tests are defined in `tests.fixtures`.

.. _doctest: https://docs.python.org/3/library/doctest.html
"""
