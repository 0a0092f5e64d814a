"""
Toolchain settings for Ada/SPARK block execution.

Defines the base compile/prove commands, the assertion flag, the default
language version and the file-naming conventions used for scratch
artifacts. Every value can be overridden process-wide through environment
variables (optionally loaded from a .env file by the CLI entry point).
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field, replace
from typing import Mapping


DEFAULT_COMPILE_COMMAND = "gnatmake"
DEFAULT_PROVE_COMMAND = "gnatprove"
DEFAULT_ASSERTION_FLAG = "-gnata"

# 0 means "no -gnatXX flag": the compiler uses its built-in default.
DEFAULT_VERSION = 0

# Files gnatmake leaves next to a unit: the binary, the library info and the object.
DEFAULT_REAPED_SUFFIXES = ("", ".ali", ".o")

# Environment variable names for process-wide overrides.
ENV_COMPILE_COMMAND = "ADA_BABEL_COMPILE_CMD"
ENV_PROVE_COMMAND = "ADA_BABEL_PROVE_CMD"
ENV_ASSERTION_FLAG = "ADA_BABEL_ASSERTION_FLAG"
ENV_DEFAULT_VERSION = "ADA_BABEL_DEFAULT_VERSION"
ENV_REAPED_SUFFIXES = "ADA_BABEL_REAPED_SUFFIXES"


@dataclass(frozen=True)
class Settings:
    """Static, overridable toolchain configuration."""

    compile_command: str = DEFAULT_COMPILE_COMMAND
    prove_command: str = DEFAULT_PROVE_COMMAND
    assertion_flag: str = DEFAULT_ASSERTION_FLAG
    default_version: int = DEFAULT_VERSION
    reaped_suffixes: tuple[str, ...] = field(default=DEFAULT_REAPED_SUFFIXES)
    source_suffix: str = ".adb"
    descriptor_suffix: str = ".gpr"
    prover_cache_dir: str = "gnatprove"
    # Anonymous names are prefix + 6-digit counter; the result must be a legal
    # Ada unit name, so no hyphens here.
    source_prefix: str = "ada_src_"
    descriptor_prefix: str = "spark_project_"
    binary_prefix: str = "ada_bin_"

    def compile_argv(self) -> list[str]:
        return shlex.split(self.compile_command)

    def prove_argv(self) -> list[str]:
        return shlex.split(self.prove_command)

    def assertion_argv(self) -> list[str]:
        return shlex.split(self.assertion_flag)

    def with_overrides(self, **changes: object) -> "Settings":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from defaults plus ADA_BABEL_* environment overrides."""
        if env is None:
            env = os.environ

        changes: dict[str, object] = {}
        if env.get(ENV_COMPILE_COMMAND):
            changes["compile_command"] = env[ENV_COMPILE_COMMAND]
        if env.get(ENV_PROVE_COMMAND):
            changes["prove_command"] = env[ENV_PROVE_COMMAND]
        if ENV_ASSERTION_FLAG in env:
            changes["assertion_flag"] = env[ENV_ASSERTION_FLAG].strip()
        if env.get(ENV_DEFAULT_VERSION):
            raw = env[ENV_DEFAULT_VERSION].strip()
            try:
                changes["default_version"] = int(raw)
            except ValueError:
                raise ValueError(
                    f"{ENV_DEFAULT_VERSION} must be an integer, got {raw!r}"
                ) from None
        if ENV_REAPED_SUFFIXES in env:
            # An empty element stands for the suffix-less binary.
            changes["reaped_suffixes"] = tuple(
                part.strip() for part in env[ENV_REAPED_SUFFIXES].split(",")
            )

        return cls(**changes)  # type: ignore[arg-type]
