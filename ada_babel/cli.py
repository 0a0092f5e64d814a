"""
CLI entry point for ada_babel.

Usage:
    python -m ada_babel hello.adb --unit hello --assertions
    python -m ada_babel sum.adb --prove --level 2 --mode flow
    cat block.adb | python -m ada_babel -

The CLI is a thin host: it reads the block body, turns the options into the
same header parameters a document would carry and prints the result. All
pipeline logic lives in executor.py.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from ada_babel.config import Settings
from ada_babel.executor import BlockExecutor
from ada_babel.naming import ScratchArea
from ada_babel.params import ParameterError
from ada_babel.results import format_result

EXIT_TOOLCHAIN_FAILURE = 1
EXIT_USAGE = 2


def _build_params(args: argparse.Namespace) -> dict[str, object]:
    params: dict[str, object] = {}
    if args.unit:
        params["unit"] = args.unit
    if args.ada_version is not None:
        params["ada-version"] = args.ada_version
    if args.assertions:
        params["assertions"] = True
    if args.prove:
        params["prove"] = True
    if args.mode:
        params["mode"] = args.mode
    if args.level:
        params["level"] = args.level
    if args.results:
        params["results"] = args.results
    return params


def main(argv: list[str] | None = None) -> None:
    # The console script does not go through __main__, so load .env here too.
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="ada_babel",
        description="Compile and run (or prove) a single Ada/SPARK code block.",
    )
    parser.add_argument(
        "source",
        type=str,
        help="Path to the block source, or '-' to read it from stdin.",
    )
    parser.add_argument("--unit", type=str, default=None,
                        help="Unit name for the generated files (must be an Ada identifier).")
    parser.add_argument("--ada-version", type=str, default=None,
                        help="Language version, e.g. 95, 2005, 2012. Default: configured version.")
    parser.add_argument("--assertions", action="store_true",
                        help="Compile with assertions enabled.")
    parser.add_argument("--prove", action="store_true",
                        help="Run gnatprove instead of compiling and running.")
    parser.add_argument("--mode", type=str, default=None,
                        help="gnatprove --mode value (check, flow, prove, all, ...).")
    parser.add_argument("--level", type=str, default=None,
                        help="gnatprove --level value.")
    parser.add_argument("--results", type=str, default=None,
                        help="Result parameters, e.g. 'raw' to disable table conversion.")
    parser.add_argument("--temp-dir", type=Path, default=None,
                        help="Scratch directory (default: system temp directory).")
    parser.add_argument("--compile-cmd", type=str, default=None,
                        help="Override the compile command (default from ADA_BABEL_COMPILE_CMD or gnatmake).")
    parser.add_argument("--prove-cmd", type=str, default=None,
                        help="Override the prove command (default from ADA_BABEL_PROVE_CMD or gnatprove).")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log each toolchain invocation.")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.source == "-":
        body = sys.stdin.read()
    else:
        source_path = Path(args.source)
        if not source_path.exists():
            print(f"Error: source file not found: {args.source}", file=sys.stderr)
            sys.exit(EXIT_USAGE)
        body = source_path.read_text(encoding="utf-8")

    if args.temp_dir is not None:
        args.temp_dir.mkdir(parents=True, exist_ok=True)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)
    if args.compile_cmd:
        settings = settings.with_overrides(compile_command=args.compile_cmd)
    if args.prove_cmd:
        settings = settings.with_overrides(prove_command=args.prove_cmd)

    executor = BlockExecutor(settings=settings, scratch=ScratchArea(temp_dir=args.temp_dir))

    try:
        outcome = executor.run(body, _build_params(args))
    except ParameterError as e:
        print(f"Parameter error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    sys.stdout.write(format_result(outcome.value))

    if outcome.failed:
        print(
            f"{outcome.stage} failed with exit status {outcome.exit_code}",
            file=sys.stderr,
        )
        sys.exit(EXIT_TOOLCHAIN_FAILURE)


if __name__ == "__main__":
    main()
