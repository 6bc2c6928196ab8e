"""Fatal error types for xtask.

Every fault that must end the run is an :class:`XtaskError`.  The core
raises them and lets them propagate; only the CLI layer turns them into
an ``error:`` line and a non-zero exit status.
"""

from collections.abc import Sequence


class XtaskError(Exception):
    """Base class for unrecoverable xtask failures."""


class CommandLaunchError(XtaskError):
    """The external command could not be started at all."""

    def __init__(self, command: Sequence[str], reason: OSError) -> None:
        self.command = list(command)
        self.reason = reason
        super().__init__(f"failed to launch {' '.join(self.command)}: {reason}")


class CommandFailedError(XtaskError):
    """The external command ran but exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int) -> None:
        self.command = list(command)
        self.returncode = returncode
        super().__init__(f"command failed: exit status {returncode}: {' '.join(self.command)}")


class GenerateError(XtaskError):
    """Template or generated file could not be read, rendered or written."""
