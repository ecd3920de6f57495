"""GitHub Actions workflow-command output for annotations.

Annotations are printed as ``::notice file=...,line=...::message`` lines, which
the runner turns into inline markers on the referenced file.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from .models import ERROR, NOTICE, WARNING, Annotation


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_command(annotation: Annotation) -> str:
    """Render an annotation as a workflow command line."""
    props: list[str] = []
    if annotation.file is not None:
        props.append(f"file={escape_property(annotation.file)}")
    if annotation.line is not None:
        props.append(f"line={annotation.line}")
        props.append(f"endLine={annotation.line}")

    head = f"::{annotation.severity}"
    if props:
        head += " " + ",".join(props)
    return f"{head}::{escape_data(annotation.message)}"


class AnnotationSink:
    """Emit annotations to a stream and remember what was emitted."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self.annotations: list[Annotation] = []
        self.failed = False

    def emit(self, annotation: Annotation) -> Annotation:
        self.annotations.append(annotation)
        print(format_command(annotation), file=self.stream, flush=True)
        return annotation

    def annotate(
        self,
        severity: str,
        message: str,
        *,
        file: str | None = None,
        line: int | None = None,
        package: str | None = None,
        ecosystem: str | None = None,
    ) -> Annotation:
        return self.emit(
            Annotation(
                severity=severity,
                message=message,
                file=file,
                line=line,
                package=package,
                ecosystem=ecosystem,
            )
        )

    def notice(self, message: str, **location: Any) -> Annotation:
        return self.annotate(NOTICE, message, **location)

    def warning(self, message: str, **location: Any) -> Annotation:
        return self.annotate(WARNING, message, **location)

    def error(self, message: str, **location: Any) -> Annotation:
        return self.annotate(ERROR, message, **location)

    def set_failed(self, message: str) -> None:
        """Report a step-level failure; the CLI exits non-zero afterwards."""
        self.failed = True
        self.error(message)

    def count(self, severity: str) -> int:
        return sum(1 for a in self.annotations if a.severity == severity)
