"""Annotation model."""

from __future__ import annotations

from dataclasses import dataclass

NOTICE = "notice"
WARNING = "warning"
ERROR = "error"

SEVERITIES = (NOTICE, WARNING, ERROR)


@dataclass(frozen=True)
class Annotation:
    """A diagnostic attached to a file/line of a manifest."""

    severity: str
    message: str
    file: str | None = None
    line: int | None = None
    package: str | None = None
    ecosystem: str | None = None

    def __post_init__(self) -> None:
        if self.severity not in SEVERITIES:
            raise ValueError(f"Invalid severity: {self.severity}")
        if not self.message:
            raise ValueError("Annotation message must be non-empty")
        if self.line is not None and self.file is None:
            raise ValueError("A line requires a file")

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "severity": self.severity,
            "message": self.message,
        }
        if self.file is not None:
            data["file"] = self.file
        if self.line is not None:
            data["line"] = self.line
        if self.package is not None:
            data["package"] = self.package
        if self.ecosystem is not None:
            data["ecosystem"] = self.ecosystem
        return data
