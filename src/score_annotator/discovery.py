"""Manifest location utilities."""

from __future__ import annotations

from pathlib import Path

from .models import CONDA, PIP

MANIFEST_CANDIDATES = {
    PIP: ("requirements.txt",),
    CONDA: ("environment.yml", "environment.yaml"),
}


def resolve_manifest(root: Path, ecosystem: str, explicit: Path | None = None) -> Path:
    """Return the manifest to scan for ``ecosystem`` under ``root``.

    An explicit path wins (relative paths are taken from ``root``). Otherwise the
    first existing default name is used; when none exists the first default is
    returned so the caller reports a readable "file not found".
    """
    if explicit is not None:
        return explicit if explicit.is_absolute() else root / explicit

    try:
        candidates = MANIFEST_CANDIDATES[ecosystem]
    except KeyError:
        raise ValueError(f"Unsupported package ecosystem: {ecosystem}") from None

    for name in candidates:
        path = root / name
        if path.is_file():
            return path
    return root / candidates[0]
