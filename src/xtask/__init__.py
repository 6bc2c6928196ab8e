"""xtask — workspace task runner for the uguid / gpt_disk crates.

Drives the per-package feature matrix (clippy + test for every feature
combination) and regenerates the aligned/unaligned GUID sources from
their shared template.
"""

__version__ = "0.1.0"
