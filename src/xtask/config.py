"""Workspace configuration for xtask.

Every path is relative to the workspace root, which is the directory
xtask is run from (``cargo xtask`` runs it from the workspace root).  An
optional ``xtask.toml`` next to the workspace ``Cargo.toml`` can override
the cargo command and the generator paths::

    [cargo]
    command = "cargo +nightly"

    [gen_guids]
    template = "uguid/src/guid_template.rs"
    aligned = "uguid/src/aligned_guid.rs"
    unaligned = "uguid/src/unaligned_guid.rs"

Feature flag sets and the GUID substitution profiles are not
configurable; they live in :mod:`xtask.matrix` and :mod:`xtask.gen_guids`.

Usage::

    from xtask.config import load_config

    cfg = load_config()
    cfg.template_path      # Path object
    cfg.cargo_command()    # ["cargo"]
"""

from __future__ import annotations

import os
import shlex
import sys
from dataclasses import dataclass, field
from pathlib import Path

from xtask.errors import XtaskError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAME = "xtask.toml"

DEFAULT_CARGO = "cargo"
DEFAULT_TEMPLATE = "uguid/src/guid_template.rs"
DEFAULT_ALIGNED = "uguid/src/aligned_guid.rs"
DEFAULT_UNALIGNED = "uguid/src/unaligned_guid.rs"


@dataclass
class WorkspaceConfig:
    """Parsed workspace configuration with resolved paths."""

    # Workspace root (cwd unless given explicitly)
    root: Path

    # --- [cargo] ---
    cargo: str = DEFAULT_CARGO

    # --- [gen_guids] ---
    template_path: Path = field(default_factory=lambda: Path(DEFAULT_TEMPLATE))
    aligned_path: Path = field(default_factory=lambda: Path(DEFAULT_ALIGNED))
    unaligned_path: Path = field(default_factory=lambda: Path(DEFAULT_UNALIGNED))

    def cargo_command(self) -> list[str]:
        """Return the cargo executable as an argv prefix."""
        try:
            parts = shlex.split(self.cargo)
        except ValueError:
            parts = self.cargo.split()
        return parts or [DEFAULT_CARGO]


def _resolve(root: Path, rel: str) -> Path:
    """Resolve a path relative to the workspace root."""
    p = Path(rel)
    if p.is_absolute():
        return p
    return root / p


def _load_toml(toml_path: Path) -> dict:
    """Parse ``xtask.toml``, returning an empty table if it does not exist."""
    if not toml_path.exists():
        return {}
    try:
        with open(toml_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise XtaskError(f"invalid {toml_path.name}: {exc}") from exc
    except OSError as exc:
        raise XtaskError(f"cannot read {toml_path}: {exc}") from exc


def _section(raw: dict, name: str) -> dict:
    """Return table *name* from *raw*, rejecting non-table values."""
    value = raw.get(name, {})
    if not isinstance(value, dict):
        raise XtaskError(f"invalid {CONFIG_FILENAME}: [{name}] must be a table")
    return value


def _string(section: dict, section_name: str, key: str, default: str | None) -> str | None:
    """Return string *key* from *section*, rejecting non-string values."""
    value = section.get(key, default)
    if value is not None and not isinstance(value, str):
        raise XtaskError(f"invalid {CONFIG_FILENAME}: {section_name}.{key} must be a string")
    return value


def load_config(root: Path | None = None) -> WorkspaceConfig:
    """Load the workspace configuration.

    Args:
        root: Workspace root.  Defaults to the current working directory.

    The cargo command is taken from ``[cargo] command`` if set, then from
    the ``CARGO`` environment variable, then falls back to ``cargo``.
    """
    root = Path.cwd() if root is None else Path(root)
    raw = _load_toml(root / CONFIG_FILENAME)

    cargo_section = _section(raw, "cargo")
    gen = _section(raw, "gen_guids")

    cargo = (
        _string(cargo_section, "cargo", "command", None)
        or os.environ.get("CARGO")
        or DEFAULT_CARGO
    )

    return WorkspaceConfig(
        root=root,
        cargo=cargo,
        template_path=_resolve(root, _string(gen, "gen_guids", "template", DEFAULT_TEMPLATE)),
        aligned_path=_resolve(root, _string(gen, "gen_guids", "aligned", DEFAULT_ALIGNED)),
        unaligned_path=_resolve(root, _string(gen, "gen_guids", "unaligned", DEFAULT_UNALIGNED)),
    )
