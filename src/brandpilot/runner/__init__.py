"""Pipeline execution runner."""

from brandpilot.runner.runner import ExecutionRunner
from brandpilot.runner.status import DEFAULT_STATUS_LINES, STATUS_LINES, StreamBuffer, status_lines_for

__all__ = [
    "ExecutionRunner",
    "STATUS_LINES",
    "DEFAULT_STATUS_LINES",
    "StreamBuffer",
    "status_lines_for",
]
