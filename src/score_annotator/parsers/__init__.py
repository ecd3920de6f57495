"""Manifest parsers.

``iter_dependencies`` picks the walker for an ecosystem: pip manifests are flat
requirement lists, conda manifests are section-structured environment files.
"""

from __future__ import annotations

from collections.abc import Iterator

from ..models import CONDA, PIP, DependencyRecord
from . import environment_yml, requirements_txt


def iter_dependencies(text: str, ecosystem: str) -> Iterator[DependencyRecord]:
    """Lazily yield the dependencies declared in ``text``."""
    if ecosystem == PIP:
        return requirements_txt.iter_dependencies(text)
    if ecosystem == CONDA:
        return environment_yml.iter_dependencies(text)
    raise ValueError(f"Unsupported package ecosystem: {ecosystem}")


__all__ = [
    "iter_dependencies",
]
