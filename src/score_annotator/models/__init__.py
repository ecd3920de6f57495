"""Data models shared by the parsers and the annotation pipeline."""

from __future__ import annotations

from .annotation import ERROR, NOTICE, SEVERITIES, WARNING, Annotation
from .assessment import Assessment
from .dependency_record import (
    CONDA,
    DEFAULT_CHANNEL,
    ECOSYSTEMS,
    PIP,
    DependencyRecord,
    is_valid_package_name,
)

__all__ = [
    "Annotation",
    "Assessment",
    "CONDA",
    "DEFAULT_CHANNEL",
    "DependencyRecord",
    "ECOSYSTEMS",
    "ERROR",
    "NOTICE",
    "PIP",
    "SEVERITIES",
    "WARNING",
    "is_valid_package_name",
]
