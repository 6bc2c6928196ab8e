"""main.py – CLI entry point for xtask.

Takes exactly one action token.  Anything else prints the usage line and
exits with status 1, the same way ``cargo xtask`` with no arguments does.

Fatal errors from the runner or the generator propagate up to here and
are reported once, as a single ``error:`` line, with exit status 1.
"""

import functools
from collections.abc import Callable, Sequence

import typer
from rich.markup import escape

from xtask.cli import err_console, error_exit, warn
from xtask.config import WorkspaceConfig, load_config
from xtask.errors import XtaskError
from xtask.gen_guids import generate
from xtask.matrix import PACKAGES, Package, run_matrix

_EPILOG = """\
[bold]Actions:[/bold]

test_all              Lint + test every feature combination of every package

test_uguid            Lint + test every feature combination of uguid

test_gpt_disk_types   Lint + test every feature combination of gpt_disk_types

test_gpt_disk_io      Lint + test every feature combination of gpt_disk_io

gen_guids             Regenerate aligned_guid.rs / unaligned_guid.rs

[dim]gen_guids exits with status 1 if either generated file was out of date.
The files are rewritten either way, so re-running it should then pass.[/dim]"""

app = typer.Typer(
    help="Workspace task runner: feature-matrix lint/test and GUID code generation.",
    rich_markup_mode="rich",
    epilog=_EPILOG,
    add_completion=False,
)


def _test_packages(packages: Sequence[Package], cfg: WorkspaceConfig) -> None:
    for pkg in packages:
        run_matrix(pkg, cfg)


def _gen_guids(cfg: WorkspaceConfig) -> None:
    result = generate(cfg)
    if result.changed:
        for path in result.stale_paths:
            warn(f"{escape(str(path))} was out of date and has been regenerated")
        raise typer.Exit(code=1)


ACTIONS: dict[str, Callable[[WorkspaceConfig], None]] = {
    "test_all": functools.partial(_test_packages, PACKAGES),
    **{f"test_{pkg.name}": functools.partial(_test_packages, (pkg,)) for pkg in PACKAGES},
    "gen_guids": _gen_guids,
}


def usage() -> str:
    return f"usage: cargo xtask [{'|'.join(ACTIONS)}]"


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def run(
    ctx: typer.Context,
    action: str | None = typer.Argument(None, metavar="ACTION", help="Action to run."),
) -> None:
    """Run one workspace action."""
    if action is None or ctx.args or action not in ACTIONS:
        print(usage())
        raise typer.Exit(code=1)

    try:
        cfg = load_config()
        ACTIONS[action](cfg)
    except XtaskError as exc:
        error_exit(escape(str(exc)))
    err_console.print(f"[green]{action}: ok[/green]", highlight=False)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
