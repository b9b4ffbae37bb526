"""Top-level entry point for running a dependency graph from a test suite."""

from __future__ import annotations

from testdep.config import GraphConfig
from testdep.execution.graph import Graph
from testdep.reporting.context import Context
from testdep.reporting.reporter import Reporter


def run_graph(
    graph: Graph,
    config: GraphConfig | None = None,
    context: Context | None = None,
) -> int:
    """Run every test in graph and report the outcome.

    Args:
        graph: The populated dependency graph.
        config: Run configuration. When None, CONFIG_FILENAME is read
            from the working directory if it exists.
        context: Context to run the tests through. A new one is created
            from config when None.

    Returns:
        0 if every test passed, 1 otherwise.

    Raises:
        CyclicDependencyError: If the graph fails validation.
    """
    config = config if config is not None else GraphConfig.from_cwd()
    ctx = context if context is not None else Context(emit=config.emit_events)

    results = graph.test(ctx)

    if config.report_path is not None:
        reporter = Reporter()
        reporter.add_results(results)
        reporter.write_report(config.report_path)

    if any(r.status != "passed" for r in results):
        return 1
    return ctx.exit_code()
