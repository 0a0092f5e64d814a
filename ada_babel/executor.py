"""
executor.py — Top-level entry point for block execution.

Responsibility: take one block (source text + header parameters), build it
in the scratch directory and return a single result for the host.

Pipeline (one-shot, no state survives between blocks except the name
counter):

  normalize params → name source file
    prove:   name .gpr → purge prover cache → write .gpr → gnatprove
    compile: reap stale unit artifacts → name binary → gnatmake → run binary
  → result pass-through

The first failing invocation ends the pipeline; its captured output becomes
the result. Parameter errors, session requests and filesystem errors are
raised to the caller.

Usage:
  from ada_babel.executor import BlockExecutor
  executor = BlockExecutor(scratch=ScratchArea(temp_dir=Path("/tmp/doc")))
  print(executor.execute(body, {"unit": "hello"}))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from .commands import (
    CommandInvocation,
    compose_compile_command,
    compose_prove_command,
    compose_run_command,
)
from .config import Settings
from .descriptor import write_descriptor
from .invoker import ProcessResult, Runner, ToolchainFailure, check_result, run_process
from .naming import ArtifactNamer, ScratchArea, SequenceCounter
from .params import BlockParams, parse_params
from .reaper import reap_prover_cache, reap_unit_artifacts
from .results import TextOrTable, maybe_tabulate

logger = logging.getLogger(__name__)

RawParams = Optional[Union[Mapping[str, Any], Iterable[Tuple[Any, Any]]]]


class UnsupportedOperationError(RuntimeError):
    """Raised for operations this adapter refuses to perform (sessions)."""


@dataclass(frozen=True)
class BlockOutcome:
    """What one block run produced.

    `stage` is the last pipeline stage that ran: "prove", "compile" or "run".
    When `failed` is set, `value` is that stage's captured diagnostics.
    """

    value: TextOrTable
    failed: bool
    stage: str
    exit_code: int
    source_path: Path


def prepare_session(params: RawParams = None) -> None:
    """Sessions are not supported: every block is an isolated build."""
    raise UnsupportedOperationError(
        "Ada/SPARK blocks do not support sessions; each block is compiled "
        "and run (or proved) on its own."
    )


class BlockExecutor:
    """Runs blocks against one scratch area, settings and name counter."""

    def __init__(
        self,
        settings: Settings | None = None,
        scratch: ScratchArea | None = None,
        counter: SequenceCounter | None = None,
        runner: Runner = run_process,
    ) -> None:
        self.settings = settings or Settings()
        self.namer = ArtifactNamer(scratch, counter)
        self.runner = runner

    def execute(self, body: str, params: RawParams = None) -> TextOrTable:
        """Run a block and return only its result value."""
        return self.run(body, params).value

    def run(self, body: str, params: RawParams = None) -> BlockOutcome:
        block = parse_params(params)
        if block.wants_session:
            prepare_session(params)

        source = self.namer.make_temp_path(
            self.settings.source_prefix,
            self.settings.source_suffix,
            unit=block.unit,
        )
        source.path.write_text(body, encoding="utf-8")
        logger.info("Wrote block source to %s", source.path)

        if block.prove:
            return self._prove(block, source.path)
        return self._compile_and_run(block, source.path)

    def _invoke(self, invocation: CommandInvocation) -> ProcessResult:
        return check_result(invocation, self.runner(invocation))

    def _failure(self, exc: ToolchainFailure, stage: str, source_path: Path) -> BlockOutcome:
        logger.warning("Block %s failed: %s", stage, exc)
        return BlockOutcome(
            value=exc.output,
            failed=True,
            stage=stage,
            exit_code=exc.result.exit_code,
            source_path=source_path,
        )

    def _prove(self, block: BlockParams, source_path: Path) -> BlockOutcome:
        settings = self.settings
        descriptor = self.namer.make_temp_path(
            settings.descriptor_prefix, settings.descriptor_suffix
        )
        scratch_dir = descriptor.directory

        reap_prover_cache(scratch_dir, settings.prover_cache_dir)
        write_descriptor(descriptor.path, source_path)

        invocation = compose_prove_command(
            settings, block, descriptor.path, source_path, cwd=scratch_dir
        )
        try:
            result = self._invoke(invocation)
        except ToolchainFailure as exc:
            return self._failure(exc, "prove", source_path)

        return BlockOutcome(
            value=maybe_tabulate(result.output, block.result_params),
            failed=False,
            stage="prove",
            exit_code=result.exit_code,
            source_path=source_path,
        )

    def _compile_and_run(self, block: BlockParams, source_path: Path) -> BlockOutcome:
        settings = self.settings
        scratch_dir = source_path.parent

        if block.unit is not None:
            reap_unit_artifacts(scratch_dir, block.unit, settings.reaped_suffixes)

        binary = self.namer.make_temp_path(
            settings.binary_prefix, "", unit=block.unit, no_suffix=True
        )

        compile_invocation = compose_compile_command(
            settings, block, binary.path, source_path, cwd=scratch_dir
        )
        try:
            self._invoke(compile_invocation)
        except ToolchainFailure as exc:
            return self._failure(exc, "compile", source_path)

        run_invocation = compose_run_command(binary.path, cwd=scratch_dir)
        try:
            result = self._invoke(run_invocation)
        except ToolchainFailure as exc:
            return self._failure(exc, "run", source_path)

        return BlockOutcome(
            value=maybe_tabulate(result.output, block.result_params),
            failed=False,
            stage="run",
            exit_code=result.exit_code,
            source_path=source_path,
        )


_default_executor: BlockExecutor | None = None


def execute_block(body: str, params: RawParams = None, **kwargs: Any) -> TextOrTable:
    """Run a block with a process-lifetime default executor.

    Keyword arguments (settings, scratch, counter, runner) build a one-off
    executor instead.
    """
    global _default_executor
    if kwargs:
        return BlockExecutor(**kwargs).execute(body, params)
    if _default_executor is None:
        _default_executor = BlockExecutor(settings=Settings.from_env())
    return _default_executor.execute(body, params)
