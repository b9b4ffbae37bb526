"""Error types raised by testdep.

TestDepError covers caller misuse that can be fixed and retried: a missing
callable or a cyclic set of requirements. InternalError covers states a
correct graph never reaches; it derives from AssertionError, not from
TestDepError.
"""

from __future__ import annotations


class TestDepError(Exception):
    """Base class for recoverable testdep errors."""

    __test__ = False


class NilFunctionError(TestDepError, TypeError):
    """A required callable argument was None."""

    def __init__(self, message: str = "Function is nil") -> None:
        super().__init__(message)


class CyclicDependencyError(TestDepError, ValueError):
    """The declared requirements contain a cycle."""

    def __init__(self, cycle: list[str] | None = None) -> None:
        self.cycle: list[str] = list(cycle or [])
        message = "Graph has cyclic dependency"
        if self.cycle:
            message = f"{message}: {' -> '.join(self.cycle)}"
        super().__init__(message)


class InternalError(AssertionError):
    """Base class for broken invariants inside testdep itself."""


class FunctionAlreadyPresentError(InternalError):
    def __init__(self) -> None:
        super().__init__("Internal error: function is already present in this graph")


class FunctionNotExecutedError(InternalError):
    def __init__(self) -> None:
        super().__init__("Internal error: function was not executed")
