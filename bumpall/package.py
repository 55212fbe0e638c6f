"""Parser for entries of the ``npm outdated`` report.

Two report formats are understood and produce identical records:

``npm outdated --parseable`` emits one colon-delimited line per dependency::

    location:name@wanted:name@current:name@latest:dependent

``npm outdated --json`` emits a mapping from dependency name to
``{current, wanted, latest, dependent, location}`` (or a list of such
objects when several workspace members depend on the same package).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from bumpall.utils.constants import MISSING


class ParseError(ValueError):
    """A report line or entry could not be read as a dependency record."""

    def __init__(self, message: str = "Unable to parse input"):
        super().__init__(message)


@dataclass(frozen=True)
class Version:
    """A dependency version, or the absence of an installed one.

    npm encodes "declared but not installed" as the literal ``MISSING``.
    Internally that is ``Version(None)``; ``str()`` turns it back into the
    literal.
    """

    value: str | None = None

    @classmethod
    def parse(cls, text: str) -> Version:
        if text == MISSING:
            return NOT_INSTALLED
        return cls(text)

    @property
    def is_installed(self) -> bool:
        return self.value is not None

    def __str__(self) -> str:
        return self.value if self.value is not None else MISSING


NOT_INSTALLED = Version(None)


@dataclass(frozen=True)
class NameVersionPair:
    name: str
    version: str

    @property
    def is_missing(self) -> bool:
        return self.version == MISSING


@dataclass(frozen=True)
class DependencyRecord:
    """One dependency from the outdated report."""

    name: str
    current: Version
    wanted_version: str
    latest_version: str
    owning_directory: str = ""
    location: str = ""

    @property
    def current_version(self) -> str:
        return str(self.current)

    @property
    def is_installed(self) -> bool:
        return self.current.is_installed


def split_name_and_version(segment: str | None) -> NameVersionPair:
    """Split a ``name@version`` segment, keeping the ``@`` of scoped names.

    ``MISSING`` short-circuits to ``("", "MISSING")``.

    Raises:
        ParseError: segment absent, or name/version empty after trimming
    """
    if segment is None:
        raise ParseError("Missing name@version segment")

    if segment == MISSING:
        return NameVersionPair("", MISSING)

    is_scoped = segment.startswith("@")
    tokens = segment.split("@")
    if is_scoped:
        # leading "@" always produces an empty first token
        tokens = tokens[1:]

    if len(tokens) < 2:
        raise ParseError(f"No version in segment: {segment!r}")

    name, version = tokens[0], tokens[1]
    if not name.strip() or not version.strip():
        raise ParseError(f"Empty name or version in segment: {segment!r}")

    prefix = "@" if is_scoped else ""
    return NameVersionPair(f"{prefix}{name}", version)


def _looks_like_drive(line: str) -> bool:
    """True for Windows locations such as ``D:\\git\\app``."""
    return len(line) > 4 and line[1:3] == ":\\"


class _Tokenizer:
    """Staged reader over the colon-delimited segments of one report line.

    Stage 1 takes the location, stage 2 the three ``name@version`` segments,
    stage 3 whatever is left (the dependent directory, which may itself
    contain colons).
    """

    def __init__(self, line: str):
        self.line = line
        self._segments = line.split(":")
        self._pos = 0

    def _next(self) -> str | None:
        if self._pos >= len(self._segments):
            return None
        segment = self._segments[self._pos]
        self._pos += 1
        return segment

    def take_location(self) -> str:
        first = self._next()
        if first is None:
            raise ParseError("Empty line")
        if _looks_like_drive(self.line):
            rest = self._next()
            if rest is None:
                raise ParseError("Truncated drive location")
            return f"{first}:{rest}"
        return first

    def take_pair(self) -> NameVersionPair:
        return split_name_and_version(self._next())

    def take_remainder(self) -> str:
        remainder = ":".join(self._segments[self._pos:])
        self._pos = len(self._segments)
        return remainder.strip()


def parse_line(line: str) -> DependencyRecord:
    """Parse one ``npm outdated --parseable`` line.

    Raises:
        ParseError: the line is not a well-formed report entry
    """
    if not line:
        raise ParseError("Empty line")

    tokens = _Tokenizer(line)
    location = tokens.take_location()
    wanted = tokens.take_pair()
    current = tokens.take_pair()
    latest = tokens.take_pair()
    owning_directory = tokens.take_remainder()

    return DependencyRecord(
        name=wanted.name or latest.name or current.name,
        current=Version.parse(current.version),
        wanted_version=wanted.version,
        latest_version=latest.version,
        owning_directory=owning_directory,
        location=location,
    )


def _require_str(entry: dict[str, Any], key: str, name: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ParseError(f"{name}: missing {key!r}")
    return value


def parse_json_entry(name: str, entry: Any) -> DependencyRecord:
    """Build a record from one value of the ``npm outdated --json`` mapping.

    Raises:
        ParseError: the entry is not a mapping or lacks wanted/latest
    """
    if not isinstance(name, str) or not name.strip():
        raise ParseError("Empty dependency name")
    if not isinstance(entry, dict):
        raise ParseError(f"{name}: entry is not an object")

    wanted = _require_str(entry, "wanted", name)
    latest = _require_str(entry, "latest", name)
    current = entry.get("current")
    if current is None or current == "":
        current = MISSING
    elif not isinstance(current, str):
        raise ParseError(f"{name}: current is not a string")

    dependent = entry.get("dependent") or ""
    location = entry.get("location") or ""

    return DependencyRecord(
        name=name,
        current=Version.parse(current),
        wanted_version=wanted,
        latest_version=latest,
        owning_directory=str(dependent).strip(),
        location=str(location),
    )


def iter_json_entries(report: dict[str, Any]):
    """Yield ``(name, entry)`` pairs, flattening per-workspace lists."""
    for name, value in report.items():
        if isinstance(value, list):
            for entry in value:
                yield name, entry
        else:
            yield name, value


def load_json_report(text: str) -> dict[str, Any]:
    """Decode the ``npm outdated --json`` document.

    Raises:
        ParseError: not valid JSON, or not an object
    """
    if not text.strip():
        return {}
    try:
        report = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON report: {e}") from e
    if not isinstance(report, dict):
        raise ParseError("JSON report is not an object")
    return report
