"""Stable keys for test callables.

The same callable registered twice must land on the same graph node, so
nodes are keyed by object identity rather than equality. Bound methods are
the one wrinkle: ``obj.test_x`` builds a new method object on every access,
so they are keyed by the identities of the instance and the function.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable

from testdep.errors import NilFunctionError


def function_key(fn: Callable[..., Any] | None) -> Hashable:
    """Return the identity key for a test callable.

    Args:
        fn: The test callable.

    Returns:
        A hashable key, equal for the same callable and distinct for
        distinct callables while both are alive.

    Raises:
        NilFunctionError: If fn is None or not callable.
    """
    if fn is None:
        raise NilFunctionError()
    if not callable(fn):
        raise NilFunctionError(f"Function is not callable: {fn!r}")

    owner = getattr(fn, "__self__", None)
    func = getattr(fn, "__func__", None)
    if owner is not None and func is not None:
        return ("method", id(owner), id(func))
    return ("object", id(fn))
