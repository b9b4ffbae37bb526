"""Reporting context for dependent tests.

Test callables receive a Context and report through it. Every report is
emitted as a structured [TST] log event (one JSON object per line) and
failures are tracked so the caller learns whether a callable passed.
"""

from __future__ import annotations

import json
import os
import sys
import traceback
from typing import Any, Callable, Protocol, TextIO

from testdep.errors import InternalError


class ReportingContext(Protocol):
    """What the executor needs from a reporting context."""

    def run(self, name: str, fn: Callable[[Any], Any]) -> bool: ...

    def log(self, message: str) -> None: ...


def tst(event: dict[str, Any], stream: TextIO | None = None, depth: int = 1) -> None:
    """Emit a structured test log event with source location."""
    frame = sys._getframe(depth)
    rel = os.path.relpath(frame.f_code.co_filename)
    event = {**event, "_file": rel, "_line": frame.f_lineno}
    print(f"[TST] {json.dumps(event, default=repr)}", file=stream or sys.stdout)


class CriticalAssertionError(Exception):
    def __init__(self, message: str, logged: bool = False) -> None:
        super().__init__(message)
        self.logged: bool = logged


class Context:
    """Collects the outcome of test callables and emits [TST] events.

    A parent context is sealed while one of its children is active, so a
    callable cannot report to the wrong level by accident.
    """

    def __init__(self, emit: bool = True, stream: TextIO | None = None) -> None:
        self.failures: list[str] = []
        self.emit = emit
        self.stream = stream
        self._sealed: bool = False

    def _event(self, event: dict[str, Any]) -> None:
        if self.emit:
            # Report the caller of the public method, not this helper
            tst(event, stream=self.stream, depth=3)

    def _check_sealed(self) -> None:
        if self._sealed:
            raise RuntimeError(
                "Cannot report to a sealed context, use the active child context instead"
            )

    def run(self, name: str, fn: Callable[[Any], Any]) -> bool:
        """Run fn as a named sub-test and report whether it passed.

        fn is called with a child context. It fails when it reports a
        failure through that child or raises. Exceptions do not escape
        run(), except InternalError, which signals a broken graph.

        Returns:
            True if fn passed.
        """
        self._check_sealed()
        self._sealed = True
        child = Context(emit=self.emit, stream=self.stream)
        self._event({"type": "subtest_start", "name": name})
        try:
            fn(child)
        except InternalError:
            raise
        except CriticalAssertionError as e:
            if not e.logged:
                child._record_error(type(e).__name__, str(e))
        except Exception as e:
            child._record_error(
                type(e).__name__, str(e),
                traceback=traceback.format_exc(),
            )
        finally:
            self._sealed = False

        passed = not child.failures
        self._event({"type": "subtest_end", "name": name, "passed": passed})
        self.failures.extend(f"{name}/{f}" for f in child.failures)
        return passed

    def log(self, message: str, **extra: Any) -> None:
        self._check_sealed()
        self._event({"type": "log", "message": message, **extra})

    def feature(self, name: str, action: str, **extra: Any) -> None:
        self._check_sealed()
        self._event({"type": "feature", "name": name, "action": action, **extra})

    def measure(self, name: str, value: float, unit: str, **extra: Any) -> None:
        self._check_sealed()
        self._event({"type": "measurement", "name": name, "value": value, "unit": unit, **extra})

    def _record_error(self, name: str, message: str, **extra: Any) -> None:
        self._event({"type": "error", "name": name, "message": message, **extra})
        self.failures.append(name)

    def error(self, name: str, message: str, **extra: Any) -> None:
        """Record an error and stop the running callable."""
        self._check_sealed()
        self._record_error(name, message, **extra)
        raise CriticalAssertionError(f"Error: {name}: {message}", logged=True)

    def assert_that(self, name: str, passed: bool, critical: bool = False, **extra: Any) -> None:
        self._check_sealed()
        self._event({"type": "result", "name": name, "passed": passed, **extra})
        if not passed:
            self.failures.append(name)
            if critical:
                raise CriticalAssertionError(f"Critical assertion failed: {name}", logged=True)

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    def exit_code(self) -> int:
        return 1 if self.failures else 0
