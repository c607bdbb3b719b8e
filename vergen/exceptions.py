"""
Custom exception hierarchy for vergen.

This module defines structured exception types used across vergen.
All exceptions inherit from :class:`VergenError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional

from vergen.constants import SEMVER_REFERENCE_URL


class VergenError(Exception):
    """Base exception for all vergen errors.

    All vergen-specific exceptions should inherit from this class.
    It supports structured metadata via ``details`` for richer error
    reporting and debugging.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class VersionSyntaxError(VergenError):
    """Raised when text does not follow the semantic version grammar.

    Args:
        version: The offending version text.
        message: Optional error description overriding the default one.
    """

    __slots__ = ("version",)

    def __init__(self, version: str, message: str = "") -> None:
        self.version = version
        super().__init__(
            message
            or f"Unable to parse version: {_truncate(version)!r}; "
            f"please check your version syntax, refer: {SEMVER_REFERENCE_URL}"
        )


class MetadataPatternError(VergenError):
    """Raised when a build metadata template cannot be expanded.

    Args:
        pattern: The template being expanded.
        reason: What is wrong with it.
        placeholder: The placeholder text that failed, if any.
    """

    __slots__ = ("pattern", "reason", "placeholder")

    def __init__(
        self,
        pattern: str,
        reason: str,
        *,
        placeholder: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "placeholder", placeholder)

        super().__init__(
            f"Unable to process metadata pattern {_truncate(pattern)!r}: {reason}",
            details,
        )

        self.pattern = pattern
        self.reason = reason
        self.placeholder = placeholder


class RegexSyntaxError(VergenError):
    """Raised when an extraction pattern is not a valid regular expression.

    Args:
        pattern: The offending pattern text.
        reason: Why it was rejected.
    """

    __slots__ = ("pattern", "reason")

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid regular expression {_truncate(pattern)!r}: {reason}")

        self.pattern = pattern
        self.reason = reason


class VersionNotFoundError(VergenError):
    """Raised when a version file yields no match for its extraction pattern.

    Args:
        file_path: The file that was searched.
        pattern: The extraction pattern used.
    """

    __slots__ = ("file_path", "pattern")

    def __init__(self, file_path: str, pattern: str) -> None:
        super().__init__(
            f"Unable to get version from {file_path}",
            {"pattern": pattern},
        )

        self.file_path = file_path
        self.pattern = pattern


class ConfigError(VergenError):
    """Raised when configuration is missing, malformed, or inconsistent.

    Args:
        message: Error description.
        config_path: Path to the configuration file, if one is involved.
        option: Name of the offending option.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "config", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class FileOperationError(VergenError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/validate).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
