"""Unit tests for the identity module."""

from __future__ import annotations

import functools

import pytest

from testdep.errors import NilFunctionError
from testdep.execution.identity import function_key


def _check_a(t):
    pass


def _check_b(t):
    pass


class _Suite:
    def check(self, t):
        pass

    def other(self, t):
        pass


class TestFunctionKey:
    """Tests for function_key()."""

    def test_same_function_same_key(self):
        """The same function always resolves to the same key."""
        assert function_key(_check_a) == function_key(_check_a)

    def test_distinct_functions_distinct_keys(self):
        """Two functions with identical bodies still get distinct keys."""
        assert function_key(_check_a) != function_key(_check_b)

    def test_distinct_closures_distinct_keys(self):
        """Closures made by the same factory are distinct callables."""
        def make():
            return lambda t: None

        first, second = make(), make()
        assert function_key(first) != function_key(second)

    def test_bound_method_stable_across_access(self):
        """Each attribute access builds a new bound method; the key is stable."""
        suite = _Suite()
        assert suite.check is not suite.check
        assert function_key(suite.check) == function_key(suite.check)

    def test_bound_methods_differ_by_instance(self):
        """The same method on two instances gives two keys."""
        first, second = _Suite(), _Suite()
        assert function_key(first.check) != function_key(second.check)

    def test_bound_methods_differ_by_function(self):
        """Two methods on one instance give two keys."""
        suite = _Suite()
        assert function_key(suite.check) != function_key(suite.other)

    def test_partial_keyed_by_identity(self):
        """A partial object is its own callable."""
        first = functools.partial(_check_a)
        second = functools.partial(_check_a)
        assert function_key(first) == function_key(first)
        assert function_key(first) != function_key(second)

    def test_none_raises(self):
        """None is rejected with NilFunctionError."""
        with pytest.raises(NilFunctionError, match="Function is nil"):
            function_key(None)

    def test_not_callable_raises(self):
        """A non-callable is rejected with NilFunctionError."""
        with pytest.raises(NilFunctionError, match="not callable"):
            function_key("check")  # type: ignore[arg-type]
