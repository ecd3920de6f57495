"""Dependency record model."""

from __future__ import annotations

import re
from dataclasses import dataclass

PIP = "pip"
CONDA = "conda"
ECOSYSTEMS = (PIP, CONDA)

DEFAULT_CHANNEL = "conda-forge"

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


def is_valid_package_name(name: str) -> bool:
    return bool(_NAME_PATTERN.match(name))


@dataclass(frozen=True)
class DependencyRecord:
    """A dependency declared on one line of a manifest."""

    name: str
    ecosystem: str
    line_number: int
    channel: str | None = None

    def __post_init__(self) -> None:
        if self.ecosystem not in ECOSYSTEMS:
            raise ValueError(f"Invalid ecosystem: {self.ecosystem}")
        if self.line_number < 1:
            raise ValueError("line_number must be 1-based")
        if not self.name:
            raise ValueError("Dependency name must be non-empty")

    @property
    def is_valid(self) -> bool:
        """True when the name is safe to forward to the scoring API."""
        return is_valid_package_name(self.name)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "ecosystem": self.ecosystem,
            "channel": self.channel,
            "lineNumber": self.line_number,
        }
