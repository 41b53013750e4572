from __future__ import annotations

from typing import Optional


class BootstrapError(Exception):
    """Base class for all bootstrap errors."""


class PreconditionError(BootstrapError):
    """The run cannot start at all."""


class ConfigError(PreconditionError):
    pass


class StepError(BootstrapError):
    def __init__(self, message: str, *, step: Optional[str] = None) -> None:
        super().__init__(message)
        self.step = step


class CheckError(StepError):
    """A presence check failed to evaluate (distinct from returning False)."""


class ActionError(StepError):
    """A step action failed. Carries the exit status when a command caused it."""

    def __init__(
        self,
        message: str,
        *,
        step: Optional[str] = None,
        returncode: Optional[int] = None,
    ) -> None:
        super().__init__(message, step=step)
        self.returncode = returncode
