"""Maturity/health classification returned by the scoring API."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Assessment:
    """Maturity and health-risk labels for a single package."""

    maturity: str = UNKNOWN
    health_risk: str = UNKNOWN

    def to_dict(self) -> dict[str, str]:
        return {
            "maturity": self.maturity,
            "healthRisk": self.health_risk,
        }

    @classmethod
    def from_source(cls, source: Mapping[str, Any]) -> Assessment:
        """Build from the ``source`` object of a score API response.

        Missing labels fall back to ``"Unknown"``.
        """

        def _value(key: str) -> str:
            entry = source.get(key)
            if isinstance(entry, Mapping) and entry.get("value"):
                return str(entry["value"])
            return UNKNOWN

        return cls(maturity=_value("maturity"), health_risk=_value("health_risk"))
