"""Dependent testing: run tests only after the tests they rely on pass.

Build a graph, declare requirements, then run it:

    g = testdep.Graph()
    # foo requires a, b and c
    g.require(test_foo, test_a, test_b, test_c)
    g.require(test_a, test_c, test_d)
    g.name(test_foo, "foo")
    g.test(testdep.Context())

If any of test_a, test_b or test_c fails, test_foo is not run. Each test
callable is run through Context.run() under its assigned name and receives
a child Context to report through.
"""

from testdep.config import GraphConfig
from testdep.errors import (
    CyclicDependencyError,
    FunctionAlreadyPresentError,
    FunctionNotExecutedError,
    InternalError,
    NilFunctionError,
    TestDepError,
)
from testdep.execution import Graph, Node, NodeResult
from testdep.reporting import Context, CriticalAssertionError, Reporter
from testdep.runner import run_graph

__all__ = [
    "Context",
    "CriticalAssertionError",
    "CyclicDependencyError",
    "FunctionAlreadyPresentError",
    "FunctionNotExecutedError",
    "Graph",
    "GraphConfig",
    "InternalError",
    "NilFunctionError",
    "Node",
    "NodeResult",
    "Reporter",
    "TestDepError",
    "run_graph",
]
