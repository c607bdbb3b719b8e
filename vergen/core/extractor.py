"""
Regular-expression data extraction for vergen.

Two lookups live here:

- :func:`extract_version` finds the project version inside a version file
  (``gradle.properties``, ``package.json``, ...) with a plain regular
  expression.
- :class:`DataExtractor` pulls arbitrary named values out of one or more
  files with delimited expressions such as ``/^name=(.+)$/m``.

Typical usage::

    extractor = DataExtractor([parse_regex(r"/(\\w+)=(\\S+)/g")])
    extractor.extract({"gradle.properties": text})
    # {"gradle.properties": {"VERSION": "5.0.3-SNAPSHOT", "GROUP": "org.example"}}
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Sequence

from vergen.exceptions import RegexSyntaxError
from vergen.utils.logger import get_logger

logger = get_logger("extractor")

#: Delimited regex flags mapped to ``re`` flags. ``g`` selects all matches.
REGEX_FLAGS: Dict[str, int] = {
    "g": 0,
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}

_NON_ALNUM = re.compile(r"[^0-9A-Za-z]+")


@dataclass(frozen=True)
class RegexDescriptor:
    """
    A compiled extraction expression.

    Attributes:
        source: Expression text as supplied (including delimiters).
        regex: Compiled pattern.
        flags: Flag letters that followed the closing delimiter.
    """

    source: str
    regex: "re.Pattern[str]"
    flags: str = ""

    @property
    def is_global(self) -> bool:
        """Return True if every match should be used, not just the first."""
        return "g" in self.flags

    def finditer(self, content: str) -> Iterator["re.Match[str]"]:
        if self.is_global:
            yield from self.regex.finditer(content)
            return
        match = self.regex.search(content)
        if match is not None:
            yield match


def compile_pattern(pattern: str, flags: int = 0) -> "re.Pattern[str]":
    """Compile ``pattern``, converting ``re.error`` into :class:`RegexSyntaxError`."""
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise RegexSyntaxError(pattern, str(exc)) from exc


def parse_regex(text: str) -> RegexDescriptor:
    """Parse a delimited regular expression of the form ``/pattern/flags``.

    Args:
        text: Expression text. Flags are any of ``g``, ``i``, ``m``, ``s``,
            ``x`` and ``u``, each at most once.

    Returns:
        A :class:`RegexDescriptor`.

    Raises:
        RegexSyntaxError: If the text is not delimited, carries unknown or
            repeated flags, or the pattern does not compile.

    Examples:
        >>> parse_regex("/version=(.+)/i").flags
        'i'
    """
    if len(text) < 2 or not text.startswith("/"):
        raise RegexSyntaxError(text, "expected '/pattern/flags'")

    closing = text.rfind("/")
    if closing == 0:
        raise RegexSyntaxError(text, "missing closing '/'")

    body, flag_letters = text[1:closing], text[closing + 1:]

    combined = 0
    for letter in flag_letters:
        if letter not in REGEX_FLAGS:
            raise RegexSyntaxError(text, f"unknown flag {letter!r}")
        if flag_letters.count(letter) > 1:
            raise RegexSyntaxError(text, f"repeated flag {letter!r}")
        combined |= REGEX_FLAGS[letter]

    return RegexDescriptor(
        source=text,
        regex=compile_pattern(body, combined),
        flags=flag_letters,
    )


def extract_version(content: str, pattern: str) -> Optional[str]:
    """Find a version string inside file content.

    Args:
        content: Text of the version file.
        pattern: Plain regular expression. When it has capture groups the
            first group is the version, otherwise the whole match is.

    Returns:
        The matched text, or ``None`` if the pattern does not match.

    Raises:
        RegexSyntaxError: If ``pattern`` does not compile.

    Examples:
        >>> extract_version("version=5.0.3-SNAPSHOT\\n", r"(?<=version=).+")
        '5.0.3-SNAPSHOT'
    """
    match = compile_pattern(pattern).search(content)
    if match is None:
        return None
    if match.re.groups:
        return match.group(1)
    return match.group(0)


def normalize_variable_name(text: str) -> str:
    """Turn arbitrary text into an upper-case variable name.

    Runs of non-alphanumeric characters collapse into a single ``_``;
    leading and trailing underscores are stripped.

    Examples:
        >>> normalize_variable_name("app.build-number")
        'APP_BUILD_NUMBER'
    """
    return _NON_ALNUM.sub("_", text.upper()).strip("_")


class DataExtractor:
    """Extract named values from file contents with regular expressions.

    With a base ``name`` every match is a value: the first one is stored
    as ``name``, later ones (across all patterns and files) as ``name_1``,
    ``name_2``, and so on. The value is group 1 when the pattern has
    groups, otherwise the whole match.

    Without a base name each match must have at least two groups: group 1
    (normalized by :func:`normalize_variable_name`) names the variable and
    group 2 is its value. Matches with fewer groups are skipped.

    Args:
        descriptors: Parsed expressions, applied in order to every file.
        name: Optional base variable name.
    """

    def __init__(
        self,
        descriptors: Sequence[RegexDescriptor],
        name: Optional[str] = None,
    ) -> None:
        self.descriptors: List[RegexDescriptor] = list(descriptors)
        self.name = normalize_variable_name(name) if name else None

    def extract(self, contents: Mapping[str, str]) -> Dict[str, Dict[str, str]]:
        """Apply every expression to every file.

        Args:
            contents: File contents keyed by file name, in processing order.

        Returns:
            Extracted variables keyed by file name. Files without matches
            map to an empty dict.
        """
        results: Dict[str, Dict[str, str]] = {}
        counter = 0

        for source, content in contents.items():
            variables: Dict[str, str] = {}
            for descriptor in self.descriptors:
                for match in descriptor.finditer(content):
                    if self.name is not None:
                        key = self.name if counter == 0 else f"{self.name}_{counter}"
                        counter += 1
                        value = match.group(1) if match.re.groups else match.group(0)
                        variables[key] = value or ""
                        continue

                    if match.re.groups < 2:
                        logger.warning(
                            "Skipping match %r from %s in %s: at least two groups "
                            "(name, value) are required without a variable name",
                            match.group(0),
                            descriptor.source,
                            source,
                        )
                        continue

                    key = normalize_variable_name(match.group(1) or "")
                    if not key:
                        logger.warning(
                            "Skipping match %r in %s: empty variable name",
                            match.group(0),
                            source,
                        )
                        continue
                    variables[key] = match.group(2) or ""

            logger.debug("Extracted %d variable(s) from %s", len(variables), source)
            results[source] = variables

        return results
