"""Cargo invocation helpers for xtask.

Builds one ``cargo`` command line per (action, package, features) triple
and runs it as a blocking subprocess.  Any failure is fatal: a missing
executable raises :class:`~xtask.errors.CommandLaunchError` and a
non-zero exit raises :class:`~xtask.errors.CommandFailedError`.  There is
no retry and no timeout.

Command shape::

    cargo clippy --package uguid --features serde,std -- -D warnings
    cargo test --package uguid --features serde,std
"""

import enum
import subprocess
from collections.abc import Sequence

from xtask.errors import CommandFailedError, CommandLaunchError


class Action(enum.Enum):
    """Which cargo subcommand to run for a feature combination."""

    LINT = "clippy"
    TEST = "test"

    @property
    def subcommand(self) -> str:
        return self.value

    @property
    def trailing_args(self) -> list[str]:
        """Arguments passed through to the tool after ``--``."""
        if self is Action.LINT:
            # Warnings are errors for clippy.
            return ["--", "-D", "warnings"]
        return []


def cargo_command(
    action: Action,
    package: str,
    features: Sequence[str],
    cargo: str | Sequence[str] = "cargo",
) -> list[str]:
    """Build the argv for one cargo invocation.

    *cargo* is either a single executable or an argv prefix such as
    ``["cargo", "+nightly"]``.  ``--features`` is only added when at least
    one feature is enabled.
    """
    if isinstance(cargo, str):
        cargo = [cargo]
    cmd = [*cargo, action.subcommand, "--package", package]
    if features:
        cmd += ["--features", ",".join(features)]
    cmd += action.trailing_args
    return cmd


def format_command(cmd: Sequence[str]) -> str:
    """Render *cmd* for display, with quote characters stripped."""
    return " ".join(cmd).replace('"', "").replace("'", "")


def run_cmd(cmd: Sequence[str]) -> None:
    """Print and run *cmd*, raising on launch failure or non-zero exit.

    The child inherits the current working directory and environment.
    """
    print(f"Running: {format_command(cmd)}", flush=True)
    try:
        r = subprocess.run(list(cmd))
    except OSError as exc:
        raise CommandLaunchError(cmd, exc) from exc
    if r.returncode != 0:
        raise CommandFailedError(cmd, r.returncode)
