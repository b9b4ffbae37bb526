"""Test graph engine: identity keys, graph store and executor."""

from testdep.execution.executor import NodeResult, SequentialExecutor
from testdep.execution.graph import Graph, Node
from testdep.execution.identity import function_key

__all__ = [
    "Graph",
    "Node",
    "NodeResult",
    "SequentialExecutor",
    "function_key",
]
