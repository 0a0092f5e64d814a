"""
reaper.py — Removal of stale build artifacts before a fresh run.

Two independent policies:
  - compile mode with a named unit: delete `<unit><suffix>` for each reaped
    suffix (binary, .ali, .o by default). If the new compilation then fails,
    the previous binary cannot be run by mistake.
  - prove mode: delete gnatprove's output directory under the scratch root,
    so results are never read from a previous, unrelated unit.

Deletion errors (permissions etc.) are not caught; they fail the request.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


def reap_unit_artifacts(
    directory: Path,
    unit: str,
    suffixes: Iterable[str],
) -> list[Path]:
    """Delete existing `unit + suffix` files in `directory`. Returns what was removed."""
    removed: list[Path] = []
    for suffix in suffixes:
        candidate = directory / f"{unit}{suffix}"
        if candidate.is_file() or candidate.is_symlink():
            candidate.unlink()
            removed.append(candidate)
    if removed:
        logger.info(
            "Removed stale artifacts for unit %s: %s",
            unit,
            ", ".join(p.name for p in removed),
        )
    return removed


def reap_prover_cache(directory: Path, cache_dir_name: str) -> bool:
    """Recursively delete the prover's output directory if present."""
    cache_dir = directory / cache_dir_name
    if not cache_dir.is_dir():
        return False
    shutil.rmtree(cache_dir)
    logger.info("Removed prover cache %s", cache_dir)
    return True
