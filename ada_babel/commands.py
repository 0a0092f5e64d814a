"""
commands.py — Argument lists for gnatmake, gnatprove and the built binary.

Shapes:
  prove:   <prove cmd> -P<project.gpr> [--mode=M] [--level=L] -u <source>
  compile: <compile cmd> [-gnat<version>] [<assertion flag>] -o <binary> <source>
  run:     <binary>

Optional pieces are left out entirely when their value is absent; nothing is
emitted as an empty argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import Settings
from .params import BlockParams


@dataclass(frozen=True)
class CommandInvocation:
    """One subprocess call: argv plus working directory."""

    argv: tuple[str, ...]
    cwd: Path

    @property
    def executable(self) -> str:
        return self.argv[0]

    @property
    def arguments(self) -> tuple[str, ...]:
        return self.argv[1:]

    def display(self) -> str:
        return " ".join(self.argv)


def version_flag(version: int) -> str | None:
    if not version:
        return None
    return f"-gnat{version}"


def compose_prove_command(
    settings: Settings,
    params: BlockParams,
    descriptor_path: Path,
    source_path: Path,
    cwd: Path,
) -> CommandInvocation:
    argv = settings.prove_argv()
    argv.append(f"-P{descriptor_path}")
    if params.mode is not None:
        argv.append(f"--mode={params.mode}")
    if params.level is not None:
        argv.append(f"--level={params.level}")
    argv.extend(["-u", str(source_path)])
    return CommandInvocation(argv=tuple(argv), cwd=cwd)


def compose_compile_command(
    settings: Settings,
    params: BlockParams,
    binary_path: Path,
    source_path: Path,
    cwd: Path,
) -> CommandInvocation:
    argv = settings.compile_argv()
    flag = version_flag(params.effective_version(settings.default_version))
    if flag is not None:
        argv.append(flag)
    if params.assertions:
        argv.extend(settings.assertion_argv())
    argv.extend(["-o", str(binary_path), str(source_path)])
    return CommandInvocation(argv=tuple(argv), cwd=cwd)


def compose_run_command(binary_path: Path, cwd: Path) -> CommandInvocation:
    return CommandInvocation(argv=(str(binary_path),), cwd=cwd)
