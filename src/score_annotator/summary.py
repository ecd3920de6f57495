"""Human-readable summary rendering for $GITHUB_STEP_SUMMARY."""

from __future__ import annotations

from typing import Any


def _cell(value: Any) -> str:
    return str(value).replace("|", "\\|").replace("\n", " ")


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of annotated packages."""
    totals = report.get("totals", {})
    manifests = report.get("manifests", [])

    lines = []
    lines.append("# Package Score Summary")
    lines.append("")
    lines.append(
        f"Dependencies: {totals.get('dependencies', 0)} | "
        f"Notices: {totals.get('notice', 0)} | "
        f"Warnings: {totals.get('warning', 0)} | "
        f"Errors: {totals.get('error', 0)}"
    )
    lines.append("")
    lines.append("| Manifest | Line | Package | Ecosystem | Severity | Details |")
    lines.append("| --- | --- | --- | --- | --- | --- |")

    has_rows = False

    for manifest in manifests:
        path = manifest.get("path") or "(unknown manifest)"
        annotations = manifest.get("annotations") or []
        if not annotations:
            lines.append(f"| {_cell(path)} | n/a | No dependencies annotated | n/a | n/a | n/a |")
            has_rows = True
            continue

        for annotation in annotations:
            lines.append(
                "| {path} | {line} | {package} | {ecosystem} | {severity} | {message} |".format(
                    path=_cell(path),
                    line=annotation.get("line", "n/a"),
                    package=_cell(annotation.get("package", "")),
                    ecosystem=annotation.get("ecosystem", ""),
                    severity=annotation.get("severity", ""),
                    message=_cell(annotation.get("message", "")),
                )
            )
            has_rows = True

    if not has_rows:
        lines.append("| (no manifests scanned) | n/a | No dependencies annotated | n/a | n/a | n/a |")

    return "\n".join(lines) + "\n"
