from __future__ import annotations

import re
import tempfile
import threading
from pathlib import Path

import pytest

from ada_babel import naming
from ada_babel.naming import ArtifactNamer, ScratchArea, SequenceCounter


def test_anonymous_names_are_increasing_and_padded(scratch, counter) -> None:
    namer = ArtifactNamer(scratch, counter)
    artifacts = [namer.make_temp_path("ada_src_", ".adb") for _ in range(12)]

    sequences = [a.sequence for a in artifacts]
    assert sequences == sorted(sequences)
    assert len(set(sequences)) == len(sequences)
    assert len({a.path for a in artifacts}) == len(artifacts)
    for artifact in artifacts:
        assert re.fullmatch(r"ada_src_\d{6}\.adb", artifact.name)
    assert artifacts[0].name == "ada_src_000001.adb"
    assert artifacts[-1].name == "ada_src_000012.adb"


def test_counter_is_shared_across_prefixes(scratch, counter) -> None:
    namer = ArtifactNamer(scratch, counter)
    src = namer.make_temp_path("ada_src_", ".adb")
    gpr = namer.make_temp_path("spark_project_", ".gpr")
    binary = namer.make_temp_path("ada_bin_", "")

    assert src.name == "ada_src_000001.adb"
    assert gpr.name == "spark_project_000002.gpr"
    assert binary.name == "ada_bin_000003"


def test_unit_name_with_and_without_suffix(scratch, counter) -> None:
    namer = ArtifactNamer(scratch, counter)

    assert namer.make_temp_path("ada_src_", ".adb", unit="hello").name == "hello.adb"
    assert namer.make_temp_path("ada_bin_", ".exe", unit="hello", no_suffix=True).name == "hello"


def test_unit_naming_still_advances_counter(scratch, counter) -> None:
    namer = ArtifactNamer(scratch, counter)
    namer.make_temp_path("ada_src_", ".adb", unit="hello")
    assert counter.value == 1
    assert namer.make_temp_path("ada_src_", ".adb").name == "ada_src_000002.adb"


def test_file_is_created_empty(scratch, counter, tmp_path: Path) -> None:
    stale = tmp_path / "hello.adb"
    stale.write_text("old contents")

    artifact = ArtifactNamer(scratch, counter).make_temp_path("ada_src_", ".adb", unit="hello")

    assert artifact.path == stale
    assert artifact.path.exists()
    assert artifact.path.read_text() == ""
    assert artifact.directory == tmp_path


def test_invalid_prefix_is_rejected(scratch, counter) -> None:
    namer = ArtifactNamer(scratch, counter)
    with pytest.raises(ValueError):
        namer.make_temp_path("ada-src-", ".adb")


def test_counter_reset(counter) -> None:
    counter.next()
    counter.next()
    counter.reset()
    assert counter.next() == 1


def test_scratch_falls_back_to_system_temp(tmp_path: Path) -> None:
    missing = tmp_path / "does-not-exist"
    area = ScratchArea(temp_dir=missing)
    assert area.resolve_directory() == Path(tempfile.gettempdir())
    assert ScratchArea().resolve_directory() == Path(tempfile.gettempdir())


def test_scratch_prefers_host_temp_dir(tmp_path: Path) -> None:
    assert ScratchArea(temp_dir=tmp_path).resolve_directory() == tmp_path


def test_remote_scratch_is_under_remote_root(tmp_path: Path) -> None:
    area = ScratchArea(temp_dir=tmp_path / "local", remote_root=tmp_path / "remote")
    assert area.is_remote
    assert area.resolve_directory() == tmp_path / "remote" / "tmp"

    namer = ArtifactNamer(area, SequenceCounter())
    artifact = namer.make_temp_path("ada_src_", ".adb")
    assert artifact.path == tmp_path / "remote" / "tmp" / "ada_src_000001.adb"
    assert artifact.path.exists()


def test_module_level_make_temp_path(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    first = naming.make_temp_path("ada_src_", ".adb")
    second = naming.make_temp_path("ada_src_", ".adb")

    assert first.directory == tmp_path
    assert second.sequence > first.sequence
    assert first.path != second.path


def test_counter_is_safe_across_threads() -> None:
    counter = SequenceCounter()
    seen: list[int] = []
    lock = threading.Lock()

    def draw() -> None:
        values = [counter.next() for _ in range(200)]
        with lock:
            seen.extend(values)

    threads = [threading.Thread(target=draw) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(seen) == list(range(1, 1601))


def test_default_namers_share_the_process_counter(tmp_path: Path) -> None:
    area = ScratchArea(temp_dir=tmp_path)
    first = ArtifactNamer(area).make_temp_path("ada_src_", ".adb")
    second = ArtifactNamer(area).make_temp_path("ada_src_", ".adb")

    assert ArtifactNamer(area).counter is naming.process_counter()
    assert second.sequence > first.sequence
    assert first.path != second.path
