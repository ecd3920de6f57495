"""Line classification for requirements and environment manifests.

Every function here is pure: it looks at one physical line (plus, for conda
files, the current ``ParserState``) and reports what the line is, which
dependency tokens it declares and which state the walker moves to next.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from ..models import CONDA, PIP
from .state import ParserState, Section

_COMMENT_RE = re.compile(r"(?<!\\)#")
_VERSION_SPLIT_RE = re.compile(r"[<>=~!]")
_DEPENDENCIES_RE = re.compile(r"^dependencies\s*:\s*(.*)$")
_CHANNELS_RE = re.compile(r"^channels\s*:\s*(.*)$")
_PIP_MARKER_RE = re.compile(r"^-\s*pip\s*:\s*(.*)$")

# Pip entries must sit strictly deeper than the "- pip:" anchor column.
PIP_INDENT_OFFSET = 1


class LineKind(enum.Enum):
    BLANK = "blank"
    DEPENDENCIES_MARKER = "dependencies-marker"
    CHANNELS_MARKER = "channels-marker"
    PIP_MARKER = "pip-marker"
    CHANNEL_ENTRY = "channel-entry"
    DEPENDENCY_ENTRY = "dependency-entry"
    PIP_OPTION = "pip-option"
    TERMINATOR = "terminator"
    MALFORMED = "malformed"
    OTHER = "other"


@dataclass(frozen=True)
class Entry:
    """A dependency token extracted from a line, version already stripped."""

    name: str
    ecosystem: str
    channel: str | None = None


@dataclass(frozen=True)
class Classification:
    kind: LineKind
    state: ParserState
    entries: tuple[Entry, ...] = ()


def strip_comment(line: str) -> str:
    """Drop everything from the first unescaped ``#``."""
    match = _COMMENT_RE.search(line)
    return line[: match.start()] if match else line


def strip_version(token: str) -> str:
    """Return the part of ``token`` before any ``< > = ~ !`` specifier."""
    return _VERSION_SPLIT_RE.split(token, maxsplit=1)[0].strip()


def parse_flow_list(text: str) -> list[str] | None:
    """Split a ``[a, b, c]`` flow list into its items.

    Returns None when ``text`` is not a bracketed list or the bracket is never
    closed.
    """
    text = text.strip()
    if not text.startswith("["):
        return None
    end = text.rfind("]")
    if end == -1:
        return None
    items = (_unquote(item.strip()) for item in text[1:end].split(","))
    return [item for item in items if item]


def _unquote(token: str) -> str:
    if len(token) >= 2 and token[0] == token[-1] and token[0] in ("'", '"'):
        return token[1:-1].strip()
    return token


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


def _list_item(content: str) -> str:
    return content[1:].strip()


def classify_requirement(raw_line: str) -> str | None:
    """Return the package name declared on a ``requirements.txt`` line.

    Comments, blank lines and option lines (``-r``, ``--index-url`` ...) yield
    None.
    """
    content = strip_comment(raw_line).strip()
    if not content or content.startswith("-"):
        return None
    return strip_version(content) or None


def _conda_entry(token: str, channel: str) -> Entry | None:
    token = _unquote(token)
    if "::" in token:
        prefix, token = token.split("::", 1)
        channel = prefix.strip() or channel
    name = strip_version(_unquote(token.strip()))
    return Entry(name=name, ecosystem=CONDA, channel=channel) if name else None


def _pip_entry(token: str) -> Entry | None:
    token = _unquote(token)
    # Installer options (-e ., -r file, --extra-index-url ...) declare no package.
    if token.startswith("-"):
        return None
    name = strip_version(token)
    return Entry(name=name, ecosystem=PIP) if name else None


def _item_entries(item: str, ecosystem: str, channel: str) -> tuple[Entry, ...] | None:
    """Entries for one ``- item`` line; the item may itself be a flow list."""
    if item.startswith("["):
        tokens = parse_flow_list(item)
        if tokens is None:
            return None
    else:
        tokens = [item]

    entries = []
    for token in tokens:
        entry = _pip_entry(token) if ecosystem == PIP else _conda_entry(token, channel)
        if entry is not None:
            entries.append(entry)
    return tuple(entries)


def _dependencies_marker(rest: str, state: ParserState) -> Classification:
    if not rest:
        return Classification(LineKind.DEPENDENCIES_MARKER, state.enter_dependencies())

    closed = state.leave_section()
    tokens = parse_flow_list(rest)
    if tokens is None:
        return Classification(LineKind.MALFORMED, closed)

    entries = tuple(
        entry
        for entry in (_conda_entry(token, state.active_channel) for token in tokens)
        if entry is not None
    )
    return Classification(LineKind.DEPENDENCIES_MARKER, closed, entries)


def _channels_marker(rest: str, state: ParserState) -> Classification:
    if not rest:
        return Classification(LineKind.CHANNELS_MARKER, state.enter_channels())

    closed = state.leave_section()
    tokens = parse_flow_list(rest)
    if tokens is None:
        return Classification(LineKind.MALFORMED, closed)
    for token in tokens:
        closed = closed.with_channel(token)
    return Classification(LineKind.CHANNELS_MARKER, closed)


def _pip_marker(rest: str, indent: int, state: ParserState) -> Classification:
    if not rest:
        return Classification(
            LineKind.PIP_MARKER, state.enter_pip_block(indent + PIP_INDENT_OFFSET)
        )

    tokens = parse_flow_list(rest)
    if tokens is None:
        return Classification(LineKind.MALFORMED, state)

    entries = tuple(entry for entry in (_pip_entry(token) for token in tokens) if entry)
    return Classification(LineKind.PIP_MARKER, state, entries)


def _entry_line(content: str, ecosystem: str, state: ParserState) -> Classification:
    entries = _item_entries(_list_item(content), ecosystem, state.active_channel)
    if entries is None:
        return Classification(LineKind.MALFORMED, state)
    return Classification(LineKind.DEPENDENCY_ENTRY, state, entries)


def classify(raw_line: str, state: ParserState) -> Classification:
    """Classify one line of an ``environment.yml`` given the current state."""
    content = strip_comment(raw_line).strip()
    if not content:
        return Classification(LineKind.BLANK, state)

    indent = _indent_of(raw_line)

    match = _DEPENDENCIES_RE.match(content)
    if match:
        return _dependencies_marker(match.group(1).strip(), state)

    match = _CHANNELS_RE.match(content)
    if match:
        return _channels_marker(match.group(1).strip(), state)

    if state.section is Section.PIP_BLOCK:
        pip_indent = state.pip_indent or 0
        if content.startswith("-") and indent >= pip_indent:
            if _list_item(content).startswith("-"):
                return Classification(LineKind.PIP_OPTION, state)
            return _entry_line(content, PIP, state)
        # Shallower or non-list line: the pip block is over, re-evaluate below.
        state = state.leave_pip_block()

    if state.section is Section.DEPENDENCIES:
        match = _PIP_MARKER_RE.match(content)
        if match:
            return _pip_marker(match.group(1).strip(), indent, state)
        if content.startswith("-"):
            return _entry_line(content, CONDA, state)
        return Classification(LineKind.TERMINATOR, state.leave_section())

    if state.section is Section.CHANNELS:
        if content.startswith("-"):
            channel = _unquote(_list_item(content))
            return Classification(LineKind.CHANNEL_ENTRY, state.with_channel(channel))
        return Classification(LineKind.TERMINATOR, state.leave_section())

    return Classification(LineKind.OTHER, state)
