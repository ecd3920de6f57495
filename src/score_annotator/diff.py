"""Find the lines of a file changed relative to a pull request's base branch."""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Callable, Iterable
from pathlib import Path

_HUNK_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")

GitRunner = Callable[[list[str], Path | None], str]

logger = logging.getLogger(__name__)


class DiffError(RuntimeError):
    """Raised when git cannot produce a diff for the manifest."""


def parse_modified_lines(diff_lines: str | Iterable[str]) -> set[int]:
    """Return new-file line numbers of lines added in a unified diff.

    Only lines inside hunks count; ``diff --git`` and ``---``/``+++`` file
    headers before a hunk are ignored.
    """
    if isinstance(diff_lines, str):
        diff_lines = diff_lines.split("\n")

    modified: set[int] = set()
    line_number: int | None = None

    for line in diff_lines:
        match = _HUNK_RE.match(line)
        if match:
            line_number = int(match.group(1))
            continue
        if line.startswith("diff --git "):
            line_number = None
            continue
        if line_number is None:
            continue
        if line.startswith("+"):
            modified.add(line_number)
            line_number += 1
        elif line.startswith("-") or line.startswith("\\"):
            continue
        else:
            line_number += 1

    return modified


def _run_git(args: list[str], cwd: Path | None = None) -> str:
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise DiffError(f"Unable to run git: {exc}") from exc

    if proc.returncode != 0:
        detail = proc.stderr.strip() or f"exit status {proc.returncode}"
        raise DiffError(f"git {' '.join(args)} failed: {detail}")
    return proc.stdout


def modified_lines(
    path: Path | str,
    base_ref: str,
    cwd: Path | None = None,
    runner: GitRunner = _run_git,
) -> set[int]:
    """Fetch ``base_ref`` from origin and diff ``path`` against HEAD."""
    if not base_ref:
        raise DiffError("Base branch (baseRef) is missing")

    runner(["fetch", "origin", base_ref], cwd)
    output = runner(["diff", f"origin/{base_ref}", "HEAD", "--", str(path)], cwd)

    lines = parse_modified_lines(output)
    logger.debug("%s: %d modified line(s) against origin/%s", path, len(lines), base_ref)
    return lines
