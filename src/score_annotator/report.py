"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any

from .models import SEVERITIES


def aggregate(manifests: list[dict[str, Any]]) -> dict[str, Any]:
    """Aggregate per-manifest results into a single report.

    Each entry of ``manifests`` is expected to carry ``path``, ``ecosystem``,
    ``dependencies`` (number of records considered) and ``annotations`` (list of
    annotation dicts with at least a ``severity``).
    """

    totals: dict[str, int] = {
        "manifests": len(manifests),
        "dependencies": sum(int(m.get("dependencies", 0)) for m in manifests),
    }
    for severity in SEVERITIES:
        totals[severity] = sum(
            1
            for m in manifests
            for a in m.get("annotations", [])
            if a.get("severity") == severity
        )

    report: dict[str, Any] = {
        "version": "1",
        "hasErrors": totals["error"] > 0,
        "manifests": manifests,
        "totals": totals,
    }

    return report
