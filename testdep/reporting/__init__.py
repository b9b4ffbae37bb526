"""Reporting: the context tests report through and run reports."""

from testdep.reporting.context import Context, CriticalAssertionError, ReportingContext
from testdep.reporting.reporter import Reporter

__all__ = ["Context", "CriticalAssertionError", "ReportingContext", "Reporter"]
