"""Run configuration file management.

Reads and writes the .testdep_config JSON file that controls how
run_graph() reports: whether [TST] events are printed and where the
run report is written. run_graph() looks for the file in the working
directory when no config is passed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

CONFIG_FILENAME = ".testdep_config"

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "emit_events": True,
    "report_path": None,
}


class GraphConfig:
    """Settings for run_graph(), optionally backed by a JSON file.

    Unknown keys in the file are ignored; a missing, unreadable or
    malformed file leaves the defaults in place.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self.emit_events: bool = DEFAULT_CONFIG["emit_events"]
        self.report_path: Path | None = DEFAULT_CONFIG["report_path"]
        if path is not None and path.is_file():
            try:
                data = json.loads(path.read_text())
            except (json.JSONDecodeError, OSError):
                data = None
            if isinstance(data, dict):
                self.set_config(**{k: data[k] for k in DEFAULT_CONFIG if k in data})

    @classmethod
    def from_cwd(cls) -> GraphConfig:
        """Load CONFIG_FILENAME from the working directory, if present."""
        return cls(Path(CONFIG_FILENAME))

    @property
    def config(self) -> dict[str, Any]:
        """The settings as written to the config file."""
        return {
            "emit_events": self.emit_events,
            "report_path": str(self.report_path) if self.report_path else None,
        }

    def set_config(
        self,
        emit_events: bool | None = None,
        report_path: str | Path | None = None,
    ) -> None:
        """Update configuration values; None leaves a value unchanged."""
        if emit_events is not None:
            self.emit_events = bool(emit_events)
        if report_path:
            self.report_path = Path(report_path)

    def save(self) -> None:
        """Write config to the file."""
        if self.path is None:
            raise ValueError("No config file path specified")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.config, indent=2) + "\n")
