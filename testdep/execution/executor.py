"""Sequential executor for validated test graphs.

Runs each node in the graph's cached order and propagates requirement
failures: a node whose requirement failed is never invoked, it is logged
and marked failed instead.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from testdep.errors import FunctionNotExecutedError

if TYPE_CHECKING:
    from testdep.execution.graph import Graph, Node
    from testdep.reporting.context import ReportingContext


@dataclass
class NodeResult:
    """Result of processing a single node."""

    name: str
    status: str  # passed, failed, dependencies_failed
    duration: float = 0.0


class SequentialExecutor:
    """Executes the nodes of a validated graph one at a time.

    Nodes already done by an earlier run are not revisited, so running a
    graph twice only processes the nodes added in between.
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph

    def execute(self, ctx: ReportingContext) -> list[NodeResult]:
        """Execute every pending node in the graph's validated order.

        Args:
            ctx: Reporting context each callable is run through.

        Returns:
            List of NodeResult objects in execution order.
        """
        results: list[NodeResult] = []

        for node in self.graph.order:
            if node.done:
                continue

            self._check_requirements(node)

            if node.failed:
                ctx.log(f"Function {node.label!r} had requirements fail")
                node.skipped = True
                node.done = True
                results.append(NodeResult(name=node.name, status=node.status))
                continue

            start_time = time.monotonic()
            node.failed = not ctx.run(node.name, node.fn)
            duration = time.monotonic() - start_time
            node.done = True

            results.append(
                NodeResult(name=node.name, status=node.status, duration=duration)
            )

        return results

    def _check_requirements(self, node: Node) -> None:
        """Mark node failed if any of its requirements failed.

        Raises:
            FunctionNotExecutedError: If a requirement has not been processed
                yet, which the validated order rules out.
        """
        for required in node.requires:
            if required.failed:
                node.failed = True
            if not required.done:
                raise FunctionNotExecutedError()
