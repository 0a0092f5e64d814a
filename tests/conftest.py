from __future__ import annotations

from pathlib import Path

import pytest

from ada_babel.commands import CommandInvocation
from ada_babel.config import Settings
from ada_babel.executor import BlockExecutor
from ada_babel.invoker import ProcessResult
from ada_babel.naming import ScratchArea, SequenceCounter


class FakeRunner:
    """Stands in for run_process: records invocations, replays scripted results."""

    def __init__(self, *results: ProcessResult) -> None:
        self.results = list(results)
        self.invocations: list[CommandInvocation] = []

    def __call__(self, invocation: CommandInvocation) -> ProcessResult:
        self.invocations.append(invocation)
        if self.results:
            return self.results.pop(0)
        return ProcessResult(exit_code=0, output="")


@pytest.fixture
def counter() -> SequenceCounter:
    return SequenceCounter()


@pytest.fixture
def scratch(tmp_path: Path) -> ScratchArea:
    return ScratchArea(temp_dir=tmp_path)


@pytest.fixture
def make_executor(scratch: ScratchArea, counter: SequenceCounter):
    def _make(*results: ProcessResult, settings: Settings | None = None):
        runner = FakeRunner(*results)
        executor = BlockExecutor(
            settings=settings or Settings(),
            scratch=scratch,
            counter=counter,
            runner=runner,
        )
        return executor, runner

    return _make
