"""ada_babel — Ada/SPARK code-block execution for literate documents.

Takes one source block plus its header parameters and produces one result.
Contract: block text in, compiler/program/prover output out.

Each block is a fresh, one-shot build in a scratch directory: either
`gnatmake` + run the produced binary, or `gnatprove` over a generated
project file. Sessions are not supported.
"""
# ada_babel — block execution pipeline
#
# Modules:
#   config.py     — Settings: toolchain commands, flags, suffixes (env overridable)
#   params.py     — Header parameter normalization (strict token parsing)
#   naming.py     — Temporary artifact naming (sequence counter, scratch area)
#   descriptor.py — Minimal .gpr project file for gnatprove
#   reaper.py     — Removal of stale binaries/objects and the prover cache
#   commands.py   — Compile and prove command composition
#   invoker.py    — Synchronous subprocess execution (merged output)
#   results.py    — Result pass-through (text or table)
#   executor.py   — Top-level pipeline: normalize → name → build → run
#   cli.py        — Command-line host

from ada_babel.executor import (
    BlockExecutor,
    BlockOutcome,
    UnsupportedOperationError,
    execute_block,
    prepare_session,
)

__all__ = [
    "BlockExecutor",
    "BlockOutcome",
    "UnsupportedOperationError",
    "execute_block",
    "prepare_session",
]
