"""Shared utilities for xtask."""

import contextlib
import os
import shutil
from pathlib import Path


def read_text_exact(filepath: Path, encoding: str = "utf-8") -> str:
    """Read a text file without newline translation."""
    with open(filepath, encoding=encoding, newline="") as f:
        return f.read()


def atomic_write_text(filepath: Path, text: str, encoding: str = "utf-8") -> None:
    """Write text to a file atomically to prevent corruption on crash.

    Symlinks are followed, so the link itself survives, and the existing
    file's permission bits are carried over to the replacement.
    """
    filepath = Path(os.path.realpath(filepath))
    tmp_path = filepath.with_suffix(filepath.suffix + ".tmp")
    try:
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
        if filepath.exists():
            shutil.copymode(filepath, tmp_path)
        os.replace(tmp_path, filepath)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise
