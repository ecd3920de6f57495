"""Configuration loader for the action inputs.

GitHub exposes each ``with:`` input of a step as an ``INPUT_<NAME>`` environment
variable (name upper-cased, spaces replaced by underscores, hyphens kept). This
module reads those variables, validates them and returns an ``ActionInputs``.
Command-line flags are layered on top by the CLI.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .models import ECOSYSTEMS
from .scoring import DEFAULT_API_URL, DEFAULT_TIMEOUT

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"", "0", "false", "no", "n", "off"}


class ConfigError(RuntimeError):
    """Raised when the action inputs are missing or invalid."""


def get_input(env: Mapping[str, str], name: str, default: str = "") -> str:
    """Return the value of action input ``name`` from ``env``."""
    key = "INPUT_" + name.replace(" ", "_").upper()
    return env.get(key, default).strip()


def parse_bool(value: str, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"Input '{name}' has invalid boolean value: {value!r}")


@dataclass(slots=True, frozen=True)
class ActionInputs:
    """Validated inputs for one run."""

    ecosystem: str
    manifest_path: Path | None = None
    annotate_modified_only: bool = False
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    fail_on_error: bool = False
    base_ref: str | None = None

    def __post_init__(self) -> None:
        if self.ecosystem not in ECOSYSTEMS:
            raise ConfigError(f"Unsupported package ecosystem: {self.ecosystem}")
        if not self.api_url.startswith(("http://", "https://")):
            raise ConfigError(f"Invalid score API URL: {self.api_url}")
        if self.timeout <= 0:
            raise ConfigError("Timeout must be a positive number of seconds")

    def with_overrides(self, **overrides: Any) -> ActionInputs:
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> ActionInputs:
        ecosystem = get_input(env, "package-ecosystem")
        if not ecosystem:
            raise ConfigError("Input required and not supplied: package-ecosystem")

        path_input = "requirements-path" if ecosystem == "pip" else "environment-path"
        manifest = get_input(env, path_input)

        timeout_raw = get_input(env, "timeout")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise ConfigError(f"Input 'timeout' is not a number: {timeout_raw!r}") from exc

        return cls(
            ecosystem=ecosystem,
            manifest_path=Path(manifest) if manifest else None,
            annotate_modified_only=parse_bool(
                get_input(env, "annotate-modified-only"), "annotate-modified-only"
            ),
            api_url=get_input(env, "score-api-url") or DEFAULT_API_URL,
            timeout=timeout,
            fail_on_error=parse_bool(get_input(env, "fail-on-error"), "fail-on-error"),
        )


def load_inputs(env: Mapping[str, str] | None = None) -> ActionInputs:
    """Load inputs from ``env`` (defaults to ``os.environ``).

    Raises:
        ConfigError: If a required input is missing or a value is invalid.
    """
    return ActionInputs.from_env(os.environ if env is None else env)


def resolve_base_ref(env: Mapping[str, str] | None = None) -> str | None:
    """Return the pull request's base branch, if this is a pull request run.

    Priority:
    1. GITHUB_BASE_REF (set by the runner on pull_request events)
    2. pull_request.base.ref from the event payload at GITHUB_EVENT_PATH
    """
    env = os.environ if env is None else env

    base_ref = env.get("GITHUB_BASE_REF", "").strip()
    if base_ref:
        return base_ref

    event_path = env.get("GITHUB_EVENT_PATH", "").strip()
    if not event_path:
        return None

    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Failed to read event payload: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in event payload: {exc}") from exc

    ref: Any = payload
    for key in ("pull_request", "base", "ref"):
        if not isinstance(ref, dict):
            return None
        ref = ref.get(key)
    return ref if isinstance(ref, str) and ref else None
