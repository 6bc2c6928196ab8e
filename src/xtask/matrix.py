"""Feature matrix driver.

For each workspace package, every combination of its optional cargo
features is linted (clippy, warnings denied) and then tested.  This
makes sure each ``#[cfg(feature = ...)]`` path builds cleanly on its own,
not just the default configuration.

Combination order is fixed: the first declared feature varies slowest
and the all-disabled combination comes first.  For ``uguid``::

    ()
    ("std",)
    ("serde",)
    ("serde", "std")
    ("bytemuck",)
    ...
    ("bytemuck", "serde", "std")

The first failing invocation aborts the whole matrix.
"""

import itertools
from collections.abc import Sequence
from dataclasses import dataclass

from xtask.config import WorkspaceConfig
from xtask.runner import Action, cargo_command, run_cmd

FEAT_BYTEMUCK = "bytemuck"
FEAT_SERDE = "serde"
FEAT_STD = "std"


@dataclass(frozen=True)
class Package:
    """A workspace crate and the features its matrix covers."""

    name: str
    features: tuple[str, ...] = ()


PACKAGES: tuple[Package, ...] = (
    Package("uguid", (FEAT_BYTEMUCK, FEAT_SERDE, FEAT_STD)),
    Package("gpt_disk_types", (FEAT_BYTEMUCK, FEAT_STD)),
    Package("gpt_disk_io", (FEAT_STD,)),
)


def get_package(name: str) -> Package:
    """Look up a package from :data:`PACKAGES` by crate name."""
    for pkg in PACKAGES:
        if pkg.name == name:
            return pkg
    raise KeyError(f"Unknown package {name!r}, valid: {[p.name for p in PACKAGES]}")


def feature_combinations(flags: Sequence[str]) -> list[tuple[str, ...]]:
    """Return every subset of *flags*, each in declaration order.

    Produces ``2 ** len(flags)`` entries.  An empty *flags* gives a single
    empty combination.
    """
    combos: list[tuple[str, ...]] = []
    for enabled in itertools.product((False, True), repeat=len(flags)):
        combos.append(tuple(f for f, on in zip(flags, enabled) if on))
    return combos


def check_package(package: str, features: Sequence[str], cfg: WorkspaceConfig) -> None:
    """Lint, then test, one package with one feature combination."""
    cargo = cfg.cargo_command()
    run_cmd(cargo_command(Action.LINT, package, features, cargo))
    run_cmd(cargo_command(Action.TEST, package, features, cargo))


def run_matrix(package: Package, cfg: WorkspaceConfig) -> int:
    """Run the full lint/test matrix for *package*.

    Returns the number of feature combinations exercised.
    """
    combos = feature_combinations(package.features)
    for features in combos:
        check_package(package.name, features, cfg)
    return len(combos)
