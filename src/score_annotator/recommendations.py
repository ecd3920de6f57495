"""Map score labels to an annotation severity and recommendation text."""

from __future__ import annotations

from .models import ERROR, NOTICE, WARNING, Assessment

_UNCERTAIN_MATURITY = {"Not Found", "Unknown", "Placeholder"}
_UNCERTAIN_HEALTH = {"Not Found", "Unknown", "Placeholder", "Healthy"}

INSUFFICIENT_DATA = "Insufficient data to make an informed recommendation."


def recommend(assessment: Assessment) -> tuple[str, str]:
    """Return ``(severity, recommendation)`` for an assessment.

    Rules are checked in order; the first match wins.
    """
    maturity = assessment.maturity
    health = assessment.health_risk

    if maturity == "Mature" and health == "Healthy":
        return (
            NOTICE,
            "This package is likely to enhance stability and maintainability with minimal risks.",
        )
    if maturity == "Mature" and health == "Moderate Risk":
        return WARNING, "The package is stable but may introduce some moderate risks."
    if maturity == "Mature" and health == "High Risk":
        return ERROR, "The package is stable but introduces high risks."
    if maturity == "Developing" and health == "Healthy":
        return NOTICE, "The package is in development but poses low risks."
    if maturity == "Experimental" or health == "High Risk":
        return (
            ERROR,
            "This package may pose significant risks to stability and maintainability.",
        )
    if maturity == "Legacy":
        return WARNING, "This package is legacy and may not be stable, consider alternatives."
    if maturity in _UNCERTAIN_MATURITY or health in _UNCERTAIN_HEALTH:
        return NOTICE, INSUFFICIENT_DATA
    return WARNING, INSUFFICIENT_DATA


def format_message(name: str, ecosystem: str, assessment: Assessment, recommendation: str) -> str:
    return (
        f"Package {name} ({ecosystem}): (Maturity: {assessment.maturity}, "
        f"Health: {assessment.health_risk}). {recommendation}"
    )
