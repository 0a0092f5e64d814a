"""
naming.py — Temporary artifact naming for block builds.

Every generated file (source, project file, binary) gets a path in the
scratch directory. Its base name is either the caller-supplied unit name or
`<prefix><NNNNNN>`, where NNNNNN is a zero-padded sequence number taken from
a SequenceCounter. The counter advances on every call, including calls that
end up using the unit name, so anonymous names never repeat within the
lifetime of a counter.

Base names double as Ada compilation-unit names (gnatmake maps file name to
unit name), so they must be legal Ada identifiers.

Usage:
  namer = ArtifactNamer(ScratchArea(temp_dir=Path("/tmp/doc")))
  src = namer.make_temp_path("ada_src_", ".adb")
  src.path.write_text(body)
"""

from __future__ import annotations

import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path

from .params import is_ada_identifier

SEQUENCE_WIDTH = 6


class SequenceCounter:
    """Monotonic counter for anonymous artifact names.

    Lock-protected so concurrent callers never receive the same number.
    """

    def __init__(self, start: int = 0) -> None:
        self._value = start
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def reset(self, value: int = 0) -> None:
        with self._lock:
            self._value = value

    @property
    def value(self) -> int:
        return self._value


# Shared by every namer built without an explicit counter, so anonymous names
# never repeat within the process.
_process_counter = SequenceCounter()


def process_counter() -> SequenceCounter:
    return _process_counter


@dataclass(frozen=True)
class ScratchArea:
    """Where a block's artifacts live.

    `remote_root` is the local mount point of a remote working context; when
    set, artifacts go to `remote_root/remote_temp_dir`. Otherwise the host's
    `temp_dir` is used if it exists, else the system temp directory.
    """

    temp_dir: Path | None = None
    remote_root: Path | None = None
    remote_temp_dir: str = "/tmp"

    @property
    def is_remote(self) -> bool:
        return self.remote_root is not None

    def resolve_directory(self) -> Path:
        if self.remote_root is not None:
            return Path(self.remote_root) / self.remote_temp_dir.lstrip("/")
        if self.temp_dir is not None and Path(self.temp_dir).is_dir():
            return Path(self.temp_dir)
        return Path(tempfile.gettempdir())


@dataclass(frozen=True)
class TempArtifact:
    """A generated scratch file."""

    path: Path
    directory: Path
    stem: str
    suffix: str
    sequence: int

    @property
    def name(self) -> str:
        return self.path.name


class ArtifactNamer:
    """Produces collision-free artifact paths inside a scratch area."""

    def __init__(
        self,
        scratch: ScratchArea | None = None,
        counter: SequenceCounter | None = None,
    ) -> None:
        self.scratch = scratch or ScratchArea()
        self.counter = counter if counter is not None else _process_counter

    @property
    def directory(self) -> Path:
        return self.scratch.resolve_directory()

    def make_temp_path(
        self,
        prefix: str,
        suffix: str,
        unit: str | None = None,
        no_suffix: bool = False,
    ) -> TempArtifact:
        """Name a scratch file and create it empty.

        With `unit`, the file is `unit + suffix` (or just `unit` when
        `no_suffix` is set, for executables). Without it, the file is
        `prefix + NNNNNN + suffix`.
        """
        sequence = self.counter.next()

        if unit is not None:
            stem = unit
            if no_suffix:
                suffix = ""
        else:
            stem = f"{prefix}{sequence:0{SEQUENCE_WIDTH}d}"

        if not is_ada_identifier(stem):
            raise ValueError(f"Artifact name {stem!r} is not a valid Ada unit name")

        directory = self.directory
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{stem}{suffix}"
        # Truncate: the caller writes fresh content into this path.
        path.write_bytes(b"")

        return TempArtifact(
            path=path,
            directory=directory,
            stem=stem,
            suffix=suffix,
            sequence=sequence,
        )


_default_namer = ArtifactNamer()


def make_temp_path(
    prefix: str,
    suffix: str,
    unit: str | None = None,
    no_suffix: bool = False,
) -> TempArtifact:
    """Name an artifact with the process-lifetime default namer."""
    return _default_namer.make_temp_path(prefix, suffix, unit=unit, no_suffix=no_suffix)
