"""
Build metadata template engine for vergen.

A metadata pattern is literal text (alphanumerics, ``-`` and ``.``) mixed
with placeholders:

- ``{date}`` / ``{date[<format>]}`` — the build date, formatted with
  moment-style tokens (default ``YYYY-MM-DD``)
- ``{hash}`` / ``{hash[<start>,<end>]}`` — a slice of the commit hash
  (default ``0, 8``)

Typical usage::

    model = MetadataModel(date=datetime(2017, 3, 2, 17, 33, 3), hash=sha)
    expand_metadata("build.{date}.{hash}", model)   # "build.2017-03-02.622161f9"

Placeholders are resolved left to right with a cursor that only moves
forward; resolved values are emitted as literal text and never rescanned.
The result is returned as expanded even when it is not valid build
metadata (e.g. an empty hash slice leaves a trailing dot); a warning is
logged in that case.

Date formats inside a template cannot contain ``]``, so the ``[...]``
literal escapes of :func:`format_date` are only usable when calling it
directly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from vergen.exceptions import MetadataPatternError
from vergen.utils.logger import get_logger
from vergen.constants import (
    METADATA_DEFAULT_FORMATS,
    METADATA_PLACEHOLDER_PATTERN,
    METADATA_VALIDATION_PATTERN,
    SEMVER_REFERENCE_URL,
)

logger = get_logger("metadata")

_BUILD_METADATA = re.compile(r"[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*")
_HASH_INDEX = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class MetadataModel:
    """
    Values available to metadata placeholders.

    Attributes:
        date: Date substituted for ``{date}`` placeholders.
        hash: Full commit hash substituted for ``{hash}`` placeholders.
    """

    date: datetime
    hash: Optional[str] = None


# ---------------------------------------------------------------------------
# Date formatting
# ---------------------------------------------------------------------------

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_WEEKDAYS = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)

# Longest tokens first; ``[...]`` escapes literal text.
_DATE_TOKENS = re.compile(
    r"\[(?P<literal>[^\]]*)\]"
    r"|(?P<token>YYYY|YY|GGGG|Q|MMMM|MMM|MM|M|DDDD|DDD|Do|DD|D|dddd|ddd|dd|d"
    r"|E|e|WW|W|HH|H|hh|h|kk|k|mm|m|ss|s|SSS|SS|S|A|a|X|x|ZZ|Z)"
)


def _ordinal(number: int) -> str:
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def _weekday(value: datetime) -> int:
    """Day of week with Sunday as ``0``."""
    return value.isoweekday() % 7


def _hour12(value: datetime) -> int:
    return value.hour % 12 or 12


def _utc_offset(value: datetime, separator: str) -> str:
    offset = value.utcoffset()
    minutes = int(offset.total_seconds() // 60) if offset is not None else 0
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


_DATE_FORMATTERS: Dict[str, Callable[[datetime], str]] = {
    "YYYY": lambda v: f"{v.year:04d}",
    "YY": lambda v: f"{v.year % 100:02d}",
    "GGGG": lambda v: f"{v.isocalendar()[0]:04d}",
    "Q": lambda v: str((v.month - 1) // 3 + 1),
    "MMMM": lambda v: _MONTHS[v.month - 1],
    "MMM": lambda v: _MONTHS[v.month - 1][:3],
    "MM": lambda v: f"{v.month:02d}",
    "M": lambda v: str(v.month),
    "DDDD": lambda v: f"{v.timetuple().tm_yday:03d}",
    "DDD": lambda v: str(v.timetuple().tm_yday),
    "Do": lambda v: _ordinal(v.day),
    "DD": lambda v: f"{v.day:02d}",
    "D": lambda v: str(v.day),
    "dddd": lambda v: _WEEKDAYS[_weekday(v)],
    "ddd": lambda v: _WEEKDAYS[_weekday(v)][:3],
    "dd": lambda v: _WEEKDAYS[_weekday(v)][:2],
    "d": lambda v: str(_weekday(v)),
    "E": lambda v: str(v.isoweekday()),
    "e": lambda v: str(_weekday(v)),
    "WW": lambda v: f"{v.isocalendar()[1]:02d}",
    "W": lambda v: str(v.isocalendar()[1]),
    "HH": lambda v: f"{v.hour:02d}",
    "H": lambda v: str(v.hour),
    "hh": lambda v: f"{_hour12(v):02d}",
    "h": lambda v: str(_hour12(v)),
    "kk": lambda v: f"{v.hour or 24:02d}",
    "k": lambda v: str(v.hour or 24),
    "mm": lambda v: f"{v.minute:02d}",
    "m": lambda v: str(v.minute),
    "ss": lambda v: f"{v.second:02d}",
    "s": lambda v: str(v.second),
    "SSS": lambda v: f"{v.microsecond // 1000:03d}",
    "SS": lambda v: f"{v.microsecond // 10000:02d}",
    "S": lambda v: str(v.microsecond // 100000),
    "A": lambda v: "AM" if v.hour < 12 else "PM",
    "a": lambda v: "am" if v.hour < 12 else "pm",
    "X": lambda v: str(int(v.timestamp())),
    "x": lambda v: str(int(v.timestamp() * 1000)),
    "ZZ": lambda v: _utc_offset(v, ""),
    "Z": lambda v: _utc_offset(v, ":"),
}


def format_date(value: datetime, fmt: str) -> str:
    """Format ``value`` with moment-style tokens.

    Naive datetimes are taken as local time; aware ones are converted to
    local time first. Text in square brackets is emitted literally, as is
    anything that is not a known token. Square-bracket escapes only work
    in direct calls: a template placeholder such as ``{date[...]}`` ends its
    format at the first ``]``, so ``{date[YYYYMMDD[T]HHmm]}`` is rejected.

    Examples:
        >>> format_date(datetime(2017, 3, 2, 17, 33, 3), "YYYY-MM-DD")
        '2017-03-02'
        >>> format_date(datetime(2017, 3, 2, 17, 33, 3), "YYYYMMDD[T]HHmm")
        '20170302T1733'
    """
    local = value.astimezone()

    def _replace(match: "re.Match[str]") -> str:
        if match.group("literal") is not None:
            return match.group("literal")
        return _DATE_FORMATTERS[match.group("token")](local)

    return _DATE_TOKENS.sub(_replace, fmt)


# ---------------------------------------------------------------------------
# Hash slicing
# ---------------------------------------------------------------------------


def _parse_hash_range(pattern: str, placeholder: str, fmt: str) -> Tuple[int, int]:
    parts = re.split(r"\s*,\s*", fmt.strip())
    if len(parts) != 2 or not all(_HASH_INDEX.fullmatch(part) for part in parts):
        raise MetadataPatternError(
            pattern,
            f"hash format must be '<start>,<end>', got {fmt!r}",
            placeholder=placeholder,
        )
    return int(parts[0]), int(parts[1])


def slice_hash(value: str, start: int, end: int) -> str:
    """Return ``value[start:end]`` with both indices clamped into range.

    Negative indices count as ``0``, indices past the end count as the
    length, and the bounds are swapped when ``start > end``.

    Examples:
        >>> slice_hash("622161f9e2", 0, 10000000000000000000)
        '622161f9e2'
        >>> slice_hash("622161f9e2", 4, 2)
        '21'
    """
    length = len(value)
    start = min(max(start, 0), length)
    end = min(max(end, 0), length)
    if start > end:
        start, end = end, start
    return value[start:end]


# ---------------------------------------------------------------------------
# Expansion
# ---------------------------------------------------------------------------


def _resolve_date(pattern: str, placeholder: str, fmt: str, model: MetadataModel) -> str:
    return format_date(model.date, fmt.strip())


def _resolve_hash(pattern: str, placeholder: str, fmt: str, model: MetadataModel) -> str:
    if not model.hash:
        raise MetadataPatternError(
            pattern,
            "no commit hash available",
            placeholder=placeholder,
        )
    start, end = _parse_hash_range(pattern, placeholder, fmt)
    return slice_hash(model.hash, start, end)


_RESOLVERS: Dict[str, Callable[[str, str, str, MetadataModel], str]] = {
    "date": _resolve_date,
    "hash": _resolve_hash,
}


def validate_metadata_pattern(pattern: str) -> None:
    """Check that ``pattern`` only holds literals and known placeholders.

    Raises:
        MetadataPatternError: If the pattern contains other symbols,
            unbalanced braces, or unknown placeholder words.
    """
    if not isinstance(pattern, str) or METADATA_VALIDATION_PATTERN.fullmatch(pattern) is None:
        raise MetadataPatternError(
            str(pattern),
            "please check your pattern syntax or ensure it doesn't contain "
            f"incorrect symbols, see also: {SEMVER_REFERENCE_URL}",
        )


def expand_metadata(pattern: str, model: MetadataModel) -> str:
    """Expand a build metadata template.

    Args:
        pattern: Template text, e.g. ``"build.{date[YYYYMMDD]}.{hash[0,7]}"``.
        model: Date and commit hash used for substitution.

    Returns:
        The expanded metadata string.

    Raises:
        MetadataPatternError: If the pattern is malformed, uses an unknown
            placeholder or a format its resolver cannot parse.
    """
    validate_metadata_pattern(pattern)

    pieces: List[str] = []
    cursor = 0
    while cursor < len(pattern):
        match = METADATA_PLACEHOLDER_PATTERN.search(pattern, cursor)
        if match is None:
            break

        word = match.group("word")
        placeholder = match.group(0)
        resolver = _RESOLVERS.get(word)
        if resolver is None:
            raise MetadataPatternError(
                pattern, f"unknown word: {word!r}", placeholder=placeholder
            )

        fmt = match.group("format")
        if not fmt or not fmt.strip():
            fmt = METADATA_DEFAULT_FORMATS[word]

        pieces.append(pattern[cursor:match.start()])
        pieces.append(resolver(pattern, placeholder, fmt, model))
        cursor = match.end()

    pieces.append(pattern[cursor:])
    metadata = "".join(pieces)

    if metadata and _BUILD_METADATA.fullmatch(metadata) is None:
        logger.warning(
            "Metadata pattern %r expands to %r, which is not valid build metadata",
            pattern,
            metadata,
        )

    logger.debug("Expanded metadata pattern %r -> %r", pattern, metadata)
    return metadata
