"""Generate ``aligned_guid.rs`` and ``unaligned_guid.rs`` from one template.

The two GUID types differ only in their name, ``#[repr]``, doc comment
and the name of their counterpart, so both are rendered from
``uguid/src/guid_template.rs`` by literal placeholder replacement:

=========================  ===================  ==================
Placeholder                AlignedGuid          Guid
=========================  ===================  ==================
``VAR_STRUCT_NAME``        ``AlignedGuid``      ``Guid``
``VAR_STRUCT_REPR``        ``C, align(8)``      ``C``
``VAR_OTHER_STRUCT_NAME``  ``Guid``             ``AlignedGuid``
``VAR_STRUCT_DOC``         8-byte aligned doc   1-byte aligned doc
=========================  ===================  ==================

Staleness check
~~~~~~~~~~~~~~~
:func:`generate` reads the template and *both* checked-in outputs before
writing anything, compares them with the fresh renders, and then
rewrites both files.  A read failure therefore never leaves the pair
half-updated.  The CLI exits non-zero when either file was stale, which
CI uses to catch generated files that were not regenerated.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from xtask.config import WorkspaceConfig
from xtask.errors import GenerateError
from xtask.utils import atomic_write_text, read_text_exact

MARKER = "// This file is autogenerated, do not edit.\n\n"

PLACEHOLDER_NAME = "VAR_STRUCT_NAME"
PLACEHOLDER_REPR = "VAR_STRUCT_REPR"
PLACEHOLDER_OTHER = "VAR_OTHER_STRUCT_NAME"
PLACEHOLDER_DOC = "VAR_STRUCT_DOC"

PLACEHOLDERS: tuple[str, ...] = (
    PLACEHOLDER_NAME,
    PLACEHOLDER_REPR,
    PLACEHOLDER_OTHER,
    PLACEHOLDER_DOC,
)


@dataclass(frozen=True)
class Replacements:
    """Values substituted into the template for one generated type."""

    name: str
    repr: str
    other: str
    doc: str


ALIGNED = Replacements(
    name="AlignedGuid",
    repr="C, align(8)",
    other="Guid",
    doc='''"Globally-unique identifier (8-byte aligned).

The format is described in Appendix A of the UEFI
Specification. Note that the first three fields are little-endian.

This type is compatible with the `EFI_GUID` type, which is specified
to be 8-byte aligned."''',
)

UNALIGNED = Replacements(
    name="Guid",
    repr="C",
    other="AlignedGuid",
    doc='''"Globally-unique identifier (1-byte aligned).

The format is described in Appendix A of the UEFI
Specification. Note that the first three fields are little-endian."''',
)


def render(template: str, r: Replacements) -> str:
    """Render *template* with *r*, prefixed by the autogenerated marker."""
    body = (
        template.replace(PLACEHOLDER_NAME, r.name)
        .replace(PLACEHOLDER_REPR, r.repr)
        .replace(PLACEHOLDER_OTHER, r.other)
        .replace(PLACEHOLDER_DOC, r.doc)
    )
    return MARKER + body


@dataclass
class GenerateResult:
    """Outcome of one :func:`generate` run."""

    aligned_path: Path
    unaligned_path: Path
    aligned_changed: bool = False
    unaligned_changed: bool = False

    @property
    def changed(self) -> bool:
        """True if at least one checked-in file was stale."""
        return self.aligned_changed or self.unaligned_changed

    @property
    def stale_paths(self) -> list[Path]:
        paths = []
        if self.aligned_changed:
            paths.append(self.aligned_path)
        if self.unaligned_changed:
            paths.append(self.unaligned_path)
        return paths


def _read(path: Path, what: str) -> str:
    try:
        return read_text_exact(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise GenerateError(f"cannot read {what} {path}: {exc}") from exc


def generate(cfg: WorkspaceConfig) -> GenerateResult:
    """Regenerate both GUID sources and report which ones were stale.

    Both outputs are always rewritten.  Raises :class:`GenerateError` if
    the template or either existing output cannot be read, before any
    file is touched.
    """
    template = _read(cfg.template_path, "template")

    aligned_code = render(template, ALIGNED)
    unaligned_code = render(template, UNALIGNED)

    old_aligned = _read(cfg.aligned_path, "generated file")
    old_unaligned = _read(cfg.unaligned_path, "generated file")

    result = GenerateResult(
        aligned_path=cfg.aligned_path,
        unaligned_path=cfg.unaligned_path,
        aligned_changed=old_aligned != aligned_code,
        unaligned_changed=old_unaligned != unaligned_code,
    )

    for path, code in ((cfg.aligned_path, aligned_code), (cfg.unaligned_path, unaligned_code)):
        try:
            atomic_write_text(path, code)
        except OSError as exc:
            raise GenerateError(f"cannot write {path}: {exc}") from exc

    return result
