"""
descriptor.py — Minimal GNAT project file for gnatprove.

gnatprove discovers sources through a project (.gpr) file. For a block we
write the smallest one that works: the project is named after the .gpr
file's base name, lists the generated source as its only source file and
uses it as the main.

  project spark_project_000002 is
     for Source_Files use ("ada_src_000001.adb");
     for Main use ("/tmp/ada_src_000001.adb");
  end spark_project_000002;
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def project_name_for(descriptor_path: Path) -> str:
    """Project identifier derived from the descriptor's base name."""
    return descriptor_path.stem


def render_descriptor(project_name: str, source_path: Path) -> str:
    lines = [
        f"project {project_name} is",
        f'   for Source_Files use ("{source_path.name}");',
        f'   for Main use ("{source_path}");',
        f"end {project_name};",
        "",
    ]
    return "\n".join(lines)


def write_descriptor(descriptor_path: Path, source_path: Path) -> str:
    """Write the project file and return the project name used."""
    project_name = project_name_for(descriptor_path)
    descriptor_path.write_text(
        render_descriptor(project_name, source_path), encoding="utf-8"
    )
    logger.debug("Wrote project file %s (project %s)", descriptor_path, project_name)
    return project_name
