#!/usr/bin/env python3
"""gitclone CLI entrypoint."""

import sys
import os
import argparse
import logging
from pathlib import Path

from gitclone.git.executor import GitExecutor
from gitclone.lib.config import (
    collect_inputs,
    describe_request,
    load_profile,
    load_request,
)
from gitclone.lib.constants import EXIT_SUCCESS, EXIT_ERROR, EXIT_CONFIG
from gitclone.lib.errors import ConfigInvalidError, StageError
from gitclone.lib.export import sink_from_config
from gitclone.workflow.engine import execute


def print_summary(rows: list[tuple[str, str]]) -> None:
    """Print the step configuration, one input per line."""
    print("Configs:")
    width = max(len(label) for label, _ in rows)
    for label, value in rows:
        print(f"  {label.ljust(width)}  {value or '-'}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gitclone',
        description='Check out a branch, tag, commit or pull request for a CI build',
    )
    parser.add_argument('--env-file', type=Path, help='Read step inputs from a KEY=value file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Show debug output')
    return parser


def main(argv: list[str] | None = None, environ=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )
    environ = os.environ if environ is None else environ

    try:
        inputs = collect_inputs(environ, args.env_file)
        request = load_request(inputs)
        profile = load_profile(inputs)
    except ConfigInvalidError as e:
        print(f"ERROR: invalid configuration: {e}")
        return EXIT_CONFIG

    print_summary(describe_request(request))

    executor = GitExecutor(request.clone_dir, timeout=profile.git_timeout)
    sink = sink_from_config(profile.export_file)

    try:
        result = execute(request, executor, sink)
    except StageError as e:
        print(f"ERROR: {e.stage} failed: {e.cause}")
        return EXIT_ERROR

    if result.merge is not None:
        print(f"Checked out pull request ({result.merge.strategy.value} merge) at {result.merge.head}")
    print("\nSuccess")
    return EXIT_SUCCESS


if __name__ == '__main__':
    sys.exit(main())
