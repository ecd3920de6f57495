"""CLI entrypoint: annotate a manifest with package scores.

Runs as the GitHub Action step (inputs read from ``INPUT_*`` variables) or
locally, with flags overriding the action inputs.
"""

from __future__ import annotations

import argparse
import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import TextIO

from . import core
from .annotations import AnnotationSink
from .config import ActionInputs, ConfigError, load_inputs
from .log import get_logger
from .models import ECOSYSTEMS

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_ERRORS_FOUND = 10


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="score-annotator", description=__doc__)
    parser.add_argument(
        "--ecosystem",
        choices=ECOSYSTEMS,
        default=None,
        help="Package ecosystem (overrides INPUT_PACKAGE-ECOSYSTEM)",
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        default=None,
        help="Manifest to scan (default: requirements.txt or environment.yml)",
    )
    parser.add_argument("--root", type=Path, default=Path("."), help="Repository root")
    parser.add_argument(
        "--modified-only",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Only annotate lines changed against the pull request base",
    )
    parser.add_argument("--base-ref", default=None, help="Base branch for --modified-only")
    parser.add_argument("--api-url", default=None, help="Score API base URL")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds")
    parser.add_argument(
        "--fail-on-error",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Exit with status 10 when any error annotation is emitted",
    )
    parser.add_argument("--json", action="store_true", help="Print the JSON report")
    return parser.parse_args(argv)


def _load_inputs(args: argparse.Namespace, env: Mapping[str, str]) -> ActionInputs:
    env = dict(env)
    if args.ecosystem:
        env["INPUT_PACKAGE-ECOSYSTEM"] = args.ecosystem
    inputs = load_inputs(env)
    return inputs.with_overrides(
        manifest_path=args.manifest,
        annotate_modified_only=args.modified_only,
        base_ref=args.base_ref,
        api_url=args.api_url,
        timeout=args.timeout,
        fail_on_error=args.fail_on_error,
    )


def main(
    argv: list[str] | None = None,
    env: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
) -> int:
    args = parse_args(argv)
    env = os.environ if env is None else env
    logger = get_logger(env=env)
    sink = AnnotationSink(stream)

    try:
        inputs = _load_inputs(args, env)
        report = core.run(inputs, sink=sink, root=args.root, env=env)
    except ConfigError as exc:
        sink.set_failed(str(exc))
        return EXIT_FAILURE
    except (OSError, UnicodeDecodeError) as exc:
        sink.set_failed(f"Failed to read manifest: {exc}")
        return EXIT_FAILURE

    if args.json:
        print(json.dumps(report, indent=2), file=sink.stream)

    totals = report["totals"]
    logger.info(
        "%d dependencies: %d notice(s), %d warning(s), %d error(s)",
        totals["dependencies"],
        totals["notice"],
        totals["warning"],
        totals["error"],
    )

    if sink.failed:
        return EXIT_FAILURE
    if inputs.fail_on_error and report.get("hasErrors"):
        return EXIT_ERRORS_FOUND
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
