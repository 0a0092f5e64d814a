"""
invoker.py — Synchronous toolchain execution.

Runs one CommandInvocation to completion with stderr merged into stdout.
Output is decoded leniently: Ada programs print Latin-1 `Character` values,
so undecodable bytes become U+FFFD instead of failing the block.
There is no timeout: builds and proofs run until the process exits.

A non-zero exit is not an exception at this level. `check_result` turns it
into a ToolchainFailure for callers that want to stop the pipeline; the
captured text travels with the exception so it can be shown as the block's
result (compiler and prover diagnostics are the useful output).
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Callable

from .commands import CommandInvocation

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
EXIT_COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and combined stdout/stderr of one invocation."""

    exit_code: int
    output: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class ToolchainFailure(RuntimeError):
    """A compiler, prover or built program exited non-zero."""

    def __init__(self, invocation: CommandInvocation, result: ProcessResult) -> None:
        super().__init__(
            f"{invocation.executable} exited with status {result.exit_code}"
        )
        self.invocation = invocation
        self.result = result

    @property
    def output(self) -> str:
        return self.result.output


Runner = Callable[[CommandInvocation], ProcessResult]


def run_process(invocation: CommandInvocation) -> ProcessResult:
    """Run the command and wait for it. Blocks the caller."""
    logger.info("Running %s (cwd=%s)", invocation.display(), invocation.cwd)
    try:
        completed = subprocess.run(
            list(invocation.argv),
            cwd=str(invocation.cwd),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
    except FileNotFoundError:
        logger.error("Command not found: %s", invocation.executable)
        return ProcessResult(
            exit_code=EXIT_COMMAND_NOT_FOUND,
            output=(
                f"'{invocation.executable}' command not found — "
                "is the GNAT toolchain installed and on PATH?\n"
            ),
        )

    if completed.returncode != 0:
        logger.warning(
            "%s exited with status %d",
            invocation.executable,
            completed.returncode,
        )
    return ProcessResult(exit_code=completed.returncode, output=completed.stdout or "")


def check_result(invocation: CommandInvocation, result: ProcessResult) -> ProcessResult:
    """Raise ToolchainFailure for a non-zero exit, else return the result."""
    if not result.ok:
        raise ToolchainFailure(invocation, result)
    return result
