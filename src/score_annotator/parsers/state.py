"""Parser state for walking a conda environment file.

The state is an explicit finite-state machine. Each transition returns a new
immutable ``ParserState``; the walker threads it through the classifier one line
at a time and discards it once the manifest is exhausted.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

from ..models import DEFAULT_CHANNEL

# Channels that never replace the default channel.
_PASSIVE_CHANNELS = frozenset({"defaults", "nodefaults", DEFAULT_CHANNEL})


class Section(enum.Enum):
    OUTSIDE = "outside"
    CHANNELS = "channels"
    DEPENDENCIES = "dependencies"
    PIP_BLOCK = "pip-block"


@dataclass(frozen=True)
class ParserState:
    """Where the walker currently is in an ``environment.yml`` document."""

    section: Section = Section.OUTSIDE
    pip_indent: int | None = None
    active_channel: str = DEFAULT_CHANNEL

    def __post_init__(self) -> None:
        if (self.section is Section.PIP_BLOCK) != (self.pip_indent is not None):
            raise ValueError("pip_indent is set if and only if inside a pip block")
        if not self.active_channel:
            raise ValueError("active_channel must be non-empty")

    @property
    def in_dependencies(self) -> bool:
        return self.section in (Section.DEPENDENCIES, Section.PIP_BLOCK)

    @property
    def in_pip_block(self) -> bool:
        return self.section is Section.PIP_BLOCK

    def enter_dependencies(self) -> ParserState:
        return replace(self, section=Section.DEPENDENCIES, pip_indent=None)

    def enter_channels(self) -> ParserState:
        return replace(self, section=Section.CHANNELS, pip_indent=None)

    def enter_pip_block(self, indent: int) -> ParserState:
        if not self.in_dependencies:
            raise ValueError("A pip block can only open inside dependencies")
        return replace(self, section=Section.PIP_BLOCK, pip_indent=indent)

    def leave_pip_block(self) -> ParserState:
        return replace(self, section=Section.DEPENDENCIES, pip_indent=None)

    def leave_section(self) -> ParserState:
        return replace(self, section=Section.OUTSIDE, pip_indent=None)

    def with_channel(self, channel: str) -> ParserState:
        """Adopt ``channel`` unless one was already picked or it is passive.

        The first listed channel other than ``defaults`` and the default channel
        wins; later entries are ignored.
        """
        if not channel or channel in _PASSIVE_CHANNELS:
            return self
        if self.active_channel != DEFAULT_CHANNEL:
            return self
        return replace(self, active_channel=channel)
