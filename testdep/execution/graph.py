"""Dependency graph of test callables.

Provides Node (one registered test callable plus its outcome state) and
Graph (the node store, requirement edges and the cached execution order).
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Hashable, Iterable

from testdep.errors import CyclicDependencyError, FunctionAlreadyPresentError
from testdep.execution.executor import NodeResult, SequentialExecutor
from testdep.execution.identity import function_key

if TYPE_CHECKING:
    from testdep.reporting.context import ReportingContext

TestFunc = Callable[[Any], Any]


@dataclass(eq=False)
class Node:
    """Represents a single test callable in the graph."""

    fn: TestFunc
    key: Hashable
    name: str = ""
    requires: list[Node] = field(default_factory=list)

    # Outcome state, filled in by the executor
    done: bool = False
    failed: bool = False
    skipped: bool = False

    @property
    def label(self) -> str:
        """Name for messages: the assigned name, or the callable's repr."""
        return self.name or repr(self.fn)

    @property
    def status(self) -> str:
        if not self.done:
            return "not_run"
        if self.skipped:
            return "dependencies_failed"
        return "failed" if self.failed else "passed"


class Graph:
    """Graph of test callables and the requirements between them.

    A graph may hold several disconnected sub-graphs as well as lone
    callables with no requirements. Requirements are only ever added;
    adding one invalidates the cached order, which is rebuilt lazily by
    validate() before the next test() run.
    """

    __test__ = False

    def __init__(self) -> None:
        self.nodes: dict[Hashable, Node] = {}
        self._order: list[Node] = []
        self.validated = False

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, fn: object) -> bool:
        if fn is None or not callable(fn):
            return False
        return function_key(fn) in self.nodes

    @property
    def order(self) -> list[Node]:
        """The validated execution order (empty until validate() succeeds)."""
        return list(self._order) if self.validated else []

    def require(self, subject: TestFunc, *prerequisites: TestFunc) -> None:
        """Declare that subject requires every callable in prerequisites.

        Callables not yet in the graph are added. Requiring the same
        prerequisite twice is a no-op.

        Raises:
            NilFunctionError: If subject or any prerequisite is None. The
                graph is left unchanged.
        """
        # Resolve every key before touching the graph
        function_key(subject)
        for fn in prerequisites:
            function_key(fn)

        self.validated = False

        node = self._get_node(subject)
        for fn in prerequisites:
            required = self._get_node(fn)
            if not any(r is required for r in node.requires):
                node.requires.append(required)

    def name(self, fn: TestFunc, name: str) -> None:
        """Set the name fn is run under. Adds fn to the graph if needed.

        Raises:
            NilFunctionError: If fn is None.
        """
        self._get_node(fn).name = name

    def name_all(self, pairs: Iterable[tuple[TestFunc, str]]) -> None:
        """Call name() on every (fn, name) pair."""
        for fn, name in pairs:
            self.name(fn, name)

    def node(self, fn: TestFunc) -> Node:
        """Get the node registered for fn.

        Raises:
            KeyError: If fn was never added to the graph.
        """
        key = function_key(fn)
        if key not in self.nodes:
            raise KeyError(f"Function not in graph: {fn!r}")
        return self.nodes[key]

    def requirements(self, fn: TestFunc) -> list[TestFunc]:
        """Get the callables fn directly requires."""
        return [r.fn for r in self.node(fn).requires]

    def dependents(self, fn: TestFunc) -> list[TestFunc]:
        """Get the callables that directly require fn."""
        target = self.node(fn)
        return [
            n.fn for n in self.nodes.values()
            if any(r is target for r in n.requires)
        ]

    def _get_node(self, fn: TestFunc) -> Node:
        node = self.nodes.get(function_key(fn))
        if node is not None:
            return node
        return self._blank(fn)

    def _blank(self, fn: TestFunc) -> Node:
        key = function_key(fn)
        if key in self.nodes:
            raise FunctionAlreadyPresentError()

        node = Node(fn=fn, key=key)
        self.nodes[key] = node
        # A new node is missing from any cached order
        self.validated = False
        return node

    def validate(self) -> list[Node]:
        """Compute an execution order with every node after its requirements.

        Kahn's algorithm over the inverted relation: edges run from a
        requirement to the nodes requiring it, so nodes with no
        requirements come first. Ties are broken by registration order.

        Returns:
            The nodes in execution order.

        Raises:
            CyclicDependencyError: If some callables (indirectly) require
                themselves. No order is kept.
        """
        self._order = []
        self.validated = False

        remaining: dict[Node, int] = {}
        dependents: dict[Node, list[Node]] = {n: [] for n in self.nodes.values()}
        for node in self.nodes.values():
            remaining[node] = len(node.requires)
            for required in node.requires:
                dependents[required].append(node)

        queue: deque[Node] = deque(n for n, count in remaining.items() if count == 0)
        result: list[Node] = []
        while queue:
            node = queue.popleft()
            result.append(node)
            for dependent in dependents[node]:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    queue.append(dependent)

        if len(result) != len(self.nodes):
            sorted_nodes = set(result)
            blocked = [n for n in self.nodes.values() if n not in sorted_nodes]
            raise CyclicDependencyError(_find_cycle(blocked))

        self._order = result
        self.validated = True
        return list(result)

    def test(self, ctx: ReportingContext) -> list[NodeResult]:
        """Run every test callable in dependency order.

        Callables whose requirements failed are not run; they are logged
        through ctx and marked failed. Test failures are reported through
        ctx only, never raised.

        Returns:
            One NodeResult per node processed by this call.

        Raises:
            CyclicDependencyError: If the graph fails validation. Nothing
                is run in that case.
        """
        if not self.validated:
            self.validate()
        return SequentialExecutor(self).execute(ctx)


def _find_cycle(nodes: list[Node]) -> list[str]:
    """Find one cycle among nodes left over by Kahn's algorithm.

    Every leftover node either sits on a cycle or requires one, so a DFS
    along requirement edges from any of them reaches a cycle.

    Returns:
        Labels of the nodes forming the cycle, first label repeated at the end.
    """
    WHITE, GRAY, BLACK = 0, 1, 2
    color: dict[Node, int] = {n: WHITE for n in nodes}
    path: list[Node] = []

    def dfs(node: Node) -> list[str] | None:
        color[node] = GRAY
        path.append(node)

        for required in node.requires:
            if required not in color:
                continue
            if color[required] == GRAY:
                cycle = path[path.index(required):] + [required]
                return [n.label for n in cycle]
            if color[required] == WHITE:
                found = dfs(required)
                if found is not None:
                    return found

        path.pop()
        color[node] = BLACK
        return None

    for node in nodes:
        if color[node] == WHITE:
            found = dfs(node)
            if found is not None:
                return found
    return []
