"""Report generation for dependent test runs.

Generates a report from node results using the four-status model:
passed, failed, dependencies_failed, not_run. Reports are written as
YAML or JSON depending on the file suffix.
"""

from __future__ import annotations

import datetime
import json
from pathlib import Path
from typing import Any

import yaml

from testdep.execution.executor import NodeResult


VALID_STATUSES = frozenset({
    "passed",
    "failed",
    "dependencies_failed",
    "not_run",
})

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class Reporter:
    """Collects node results and generates run reports."""

    def __init__(self) -> None:
        self.results: list[NodeResult] = []

    def add_result(self, result: NodeResult) -> None:
        self.results.append(result)

    def add_results(self, results: list[NodeResult]) -> None:
        self.results.extend(results)

    def generate_report(self) -> dict[str, Any]:
        """Generate the report data structure.

        Returns:
            Dictionary representing the full report, suitable for
            YAML or JSON serialization.
        """
        now = datetime.datetime.now(tz=datetime.timezone.utc).isoformat()
        return {
            "report": {
                "generated_at": now,
                "summary": self._compute_summary(),
                "tests": [self._format_result(r) for r in self.results],
            }
        }

    def write_report(self, path: Path) -> None:
        """Write the report to path, as YAML for .yaml/.yml and JSON otherwise.

        Args:
            path: File path to write the report to.
        """
        report = self.generate_report()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            if path.suffix in YAML_SUFFIXES:
                yaml.dump(
                    report,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    allow_unicode=True,
                )
            else:
                json.dump(report, f, indent=2)
                f.write("\n")

    def _compute_summary(self) -> dict[str, Any]:
        """Compute summary statistics from results.

        Returns:
            Dictionary with per-status counts and total duration.
        """
        summary: dict[str, Any] = {"total": len(self.results)}
        for status in ("passed", "failed", "dependencies_failed", "not_run"):
            summary[status] = sum(1 for r in self.results if r.status == status)
        summary["total_duration_seconds"] = round(
            sum(r.duration for r in self.results), 3
        )
        return summary

    def _format_result(self, result: NodeResult) -> dict[str, Any]:
        return {
            "name": result.name,
            "status": result.status,
            "duration_seconds": round(result.duration, 3),
        }
