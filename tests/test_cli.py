from __future__ import annotations

import io
from pathlib import Path

import pytest

from ada_babel import cli
from ada_babel.executor import BlockExecutor
from ada_babel.invoker import ProcessResult


@pytest.fixture
def fake_toolchain(monkeypatch, counter):
    """Route the CLI's executor through a scripted runner."""
    state = {"results": [], "invocations": []}

    def runner(invocation):
        state["invocations"].append(invocation)
        if state["results"]:
            return state["results"].pop(0)
        return ProcessResult(0, "")

    def build(settings=None, scratch=None):
        return BlockExecutor(settings=settings, scratch=scratch, counter=counter, runner=runner)

    monkeypatch.setattr(cli, "BlockExecutor", build)
    for name in (
        "ADA_BABEL_COMPILE_CMD",
        "ADA_BABEL_PROVE_CMD",
        "ADA_BABEL_ASSERTION_FLAG",
        "ADA_BABEL_DEFAULT_VERSION",
        "ADA_BABEL_REAPED_SUFFIXES",
    ):
        monkeypatch.delenv(name, raising=False)
    return state


def _source(tmp_path: Path) -> Path:
    path = tmp_path / "block.adb"
    path.write_text("procedure Hello is begin null; end Hello;", encoding="utf-8")
    return path


def test_prints_program_output(fake_toolchain, tmp_path: Path, capsys) -> None:
    fake_toolchain["results"] = [ProcessResult(0, ""), ProcessResult(0, "Hello\n")]
    scratch = tmp_path / "scratch"

    cli.main([str(_source(tmp_path)), "--unit", "hello", "--temp-dir", str(scratch)])

    assert capsys.readouterr().out == "Hello\n"
    compile_cmd = fake_toolchain["invocations"][0]
    assert compile_cmd.argv[-1] == str(scratch / "hello.adb")


def test_prove_options_reach_the_prover(fake_toolchain, tmp_path: Path) -> None:
    cli.main([
        str(_source(tmp_path)),
        "--prove",
        "--level", "silver",
        "--temp-dir", str(tmp_path / "scratch"),
        "--prove-cmd", "gnatprove -j0",
    ])

    (invocation,) = fake_toolchain["invocations"]
    assert invocation.argv[:2] == ("gnatprove", "-j0")
    assert "--level=silver" in invocation.argv


def test_toolchain_failure_exits_one(fake_toolchain, tmp_path: Path, capsys) -> None:
    fake_toolchain["results"] = [ProcessResult(4, "block.adb:1:01: error\n")]

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(_source(tmp_path)), "--temp-dir", str(tmp_path / "scratch")])

    assert excinfo.value.code == cli.EXIT_TOOLCHAIN_FAILURE
    captured = capsys.readouterr()
    assert "error" in captured.out
    assert "compile failed" in captured.err


def test_bad_unit_exits_two(fake_toolchain, tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(_source(tmp_path)), "--unit", "not-ada", "--temp-dir", str(tmp_path)])
    assert excinfo.value.code == cli.EXIT_USAGE
    assert fake_toolchain["invocations"] == []


def test_missing_source_exits_two(fake_toolchain, tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(tmp_path / "missing.adb")])
    assert excinfo.value.code == cli.EXIT_USAGE


def test_reads_source_from_stdin(fake_toolchain, tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("procedure Hello is begin null; end Hello;"))
    scratch = tmp_path / "scratch"

    cli.main(["-", "--temp-dir", str(scratch)])

    source = scratch / "ada_src_000001.adb"
    assert source.read_text(encoding="utf-8").startswith("procedure Hello")


def test_dotenv_is_loaded_by_main(fake_toolchain, tmp_path: Path, monkeypatch) -> None:
    def fake_load_dotenv(*args, **kwargs):
        monkeypatch.setenv("ADA_BABEL_COMPILE_CMD", "gnatmake -q")
        return True

    monkeypatch.setattr(cli, "load_dotenv", fake_load_dotenv)

    cli.main([str(_source(tmp_path)), "--temp-dir", str(tmp_path / "scratch")])

    compile_cmd = fake_toolchain["invocations"][0]
    assert compile_cmd.argv[:2] == ("gnatmake", "-q")


def test_bad_configured_prefix_exits_two(fake_toolchain, tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(
        cli.Settings,
        "from_env",
        classmethod(lambda cls, env=None: cls(source_prefix="ada-src-")),
    )

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(_source(tmp_path)), "--temp-dir", str(tmp_path / "scratch")])

    assert excinfo.value.code == cli.EXIT_USAGE
    assert "Configuration error" in capsys.readouterr().err
    assert fake_toolchain["invocations"] == []
