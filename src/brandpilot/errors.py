"""Error hierarchy for pipeline building and execution."""
from __future__ import annotations


class BrandPilotError(Exception):
    """Base error for all brandpilot errors."""


class PipelineLoadError(BrandPilotError):
    """A pipeline document could not be read or is malformed."""


class RunnerError(BrandPilotError):
    """Base error for execution runner misuse."""


class RunnerBusyError(RunnerError):
    """The runner already has an active run."""


class InvalidRunStateError(RunnerError):
    """The requested operation does not apply to the current run state."""
