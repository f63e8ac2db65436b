"""Exception hierarchy shared by every stage of the measurement pipeline.

Each exception carries a ``stage`` attribute so the CLI can name the part of
the pipeline that failed (``config``, ``generator``, ``execution``, ``fit``).
Nothing in the package retries; all of these propagate to the caller.
"""

from __future__ import annotations

from pathlib import Path


class ComplexityProbeError(Exception):
    """Base class for all errors raised by the package."""

    stage = "pipeline"


class ConfigError(ComplexityProbeError):
    """Invalid configuration detected before execution begins."""

    stage = "config"


class DomainMismatch(ConfigError):
    """Generator declared for one element kind but given a domain of another."""

    stage = "generator"

    def __init__(self, expected: str, actual: str):
        super().__init__(f"Expected '{expected}' values, but the domain produces '{actual}'")
        self.expected = expected
        self.actual = actual


class ExecutionError(ComplexityProbeError):
    stage = "execution"


class FailedToStart(ExecutionError):
    def __init__(self, target: str | Path, cause: OSError):
        super().__init__(f"Failed to start program '{target}'. {cause}")
        self.target = target
        self.cause = cause


class NotSuccessful(ExecutionError):
    """Target exited with a non-zero code, or was killed (``code is None``)."""

    def __init__(self, code: int | None):
        if code is None:
            message = "Program terminated by signal"
        else:
            message = f"Program finished not successful. Exit code '{code}'"
        super().__init__(message)
        self.code = code


class IoFailure(ExecutionError):
    def __init__(self, path: str | Path, cause: OSError):
        super().__init__(f"Can't write arguments to temporary file '{path}'. {cause}")
        self.path = Path(path)
        self.cause = cause


class Timeout(ExecutionError):
    def __init__(self, target: str | Path, timeout_s: float):
        super().__init__(f"Program '{target}' did not finish within {timeout_s:g}s")
        self.target = target
        self.timeout_s = timeout_s


class FitError(ComplexityProbeError):
    stage = "fit"


class DegenerateInput(FitError):
    """Observations cannot support a least-squares fit."""
