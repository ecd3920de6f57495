"""Core annotation entrypoints.

This module MUST NOT print workflow commands itself; everything user-visible goes
through the ``AnnotationSink`` it is handed, so the same flow serves the Action
and local CLI runs.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

import yaml

from . import diff as diff_mod
from .annotations import AnnotationSink
from .config import ActionInputs, resolve_base_ref
from .discovery import resolve_manifest
from .models import CONDA, Annotation, Assessment, DependencyRecord
from .parsers import iter_dependencies
from .parsers.lines import MANIFEST_ENCODING
from .recommendations import format_message, recommend
from .report import aggregate
from .scoring import ScoreClient, ScoreLookupError
from .summary import render_summary

logger = logging.getLogger(__name__)


class ScoreLookup(Protocol):
    """Anything able to score a package; ``ScoreClient`` in production."""

    def lookup(
        self, name: str, ecosystem: str, channel: str | None = None
    ) -> Assessment | None: ...


def annotate_record(
    record: DependencyRecord,
    file: str,
    *,
    client: ScoreLookup,
    sink: AnnotationSink,
) -> Annotation:
    """Score one dependency and emit the matching annotation."""
    location: dict[str, Any] = {
        "file": file,
        "line": record.line_number,
        "package": record.name,
        "ecosystem": record.ecosystem,
    }

    if not record.is_valid:
        return sink.error(f"Invalid package name: {record.name}", **location)

    try:
        assessment = client.lookup(record.name, record.ecosystem, record.channel)
    except ScoreLookupError as exc:
        logger.debug("lookup failed for %s", record.name, exc_info=True)
        return sink.error(
            f"Error looking up package {record.name} ({record.ecosystem}): {exc}", **location
        )

    if assessment is None:
        return sink.notice(f"Package {record.name} ({record.ecosystem}) not found.", **location)

    severity, recommendation = recommend(assessment)
    message = format_message(record.name, record.ecosystem, assessment, recommendation)
    return sink.annotate(severity, message, **location)


def _warn_if_not_yaml(text: str, file: str) -> None:
    try:
        yaml.safe_load(text)
    except yaml.YAMLError as exc:
        logger.warning("%s is not valid YAML, parsing best-effort: %s", file, exc)


def annotate_manifest(
    path: Path,
    ecosystem: str,
    *,
    client: ScoreLookup,
    sink: AnnotationSink,
    modified_lines: set[int] | None = None,
    display_path: str | None = None,
) -> dict[str, Any]:
    """Annotate every dependency of one manifest.

    Params:
        path: manifest on disk; read errors propagate to the caller
        ecosystem: "pip" or "conda", already validated
        modified_lines: when given, only records on these lines are annotated
        display_path: path used in annotations (repository-relative)

    Returns: per-manifest result dict consumed by ``report.aggregate``.
    """
    file = display_path or str(path)
    text = path.read_text(encoding=MANIFEST_ENCODING)

    if ecosystem == CONDA:
        _warn_if_not_yaml(text, file)

    annotations: list[Annotation] = []
    considered = 0
    for record in iter_dependencies(text, ecosystem):
        if modified_lines is not None and record.line_number not in modified_lines:
            continue
        considered += 1
        annotations.append(annotate_record(record, file, client=client, sink=sink))

    logger.info("%s: annotated %d dependencies", file, considered)
    return {
        "path": file,
        "ecosystem": ecosystem,
        "dependencies": considered,
        "annotations": [a.to_dict() for a in annotations],
    }


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return str(path)


def _modified_lines(
    file: str,
    root: Path,
    inputs: ActionInputs,
    env: Mapping[str, str],
    sink: AnnotationSink,
) -> set[int] | None:
    """Lines changed in the pull request, or None to annotate the whole file."""
    base_ref = inputs.base_ref or resolve_base_ref(env)
    if not base_ref:
        sink.set_failed(
            "Error: Base branch (baseRef) is missing. Please ensure the pull request "
            "is targeting a valid base branch."
        )
        return None

    try:
        return diff_mod.modified_lines(file, base_ref, cwd=root)
    except diff_mod.DiffError as exc:
        sink.set_failed(f"Error getting modified lines from commit diff: {exc}")
        return None


def _write_step_summary(report: dict[str, Any], env: Mapping[str, str]) -> None:
    summary_path = env.get("GITHUB_STEP_SUMMARY", "").strip()
    if not summary_path:
        return
    with open(summary_path, "a", encoding="utf-8") as fh:
        fh.write(render_summary(report))


def run(
    inputs: ActionInputs,
    *,
    sink: AnnotationSink,
    root: Path = Path("."),
    client: ScoreLookup | None = None,
    env: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Annotate the manifest selected by ``inputs`` and return the report.

    Raises:
        OSError: If the manifest cannot be read.
        UnicodeDecodeError: If the manifest is not UTF-8 text.
        ConfigError: If the pull request event payload is unreadable.
    """
    env = os.environ if env is None else env
    client = client or ScoreClient(inputs.api_url, inputs.timeout)

    path = resolve_manifest(root, inputs.ecosystem, inputs.manifest_path)
    file = _display_path(path, root)

    lines: set[int] | None = None
    if inputs.annotate_modified_only:
        lines = _modified_lines(file, root, inputs, env, sink)

    result = annotate_manifest(
        path,
        inputs.ecosystem,
        client=client,
        sink=sink,
        modified_lines=lines,
        display_path=file,
    )
    report = aggregate([result])

    _write_step_summary(report, env)
    return report
