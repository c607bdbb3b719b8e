"""Configuration file loader for vergen.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``vergen.toml`` — settings under ``[vergen]`` table
- ``pyproject.toml`` — settings under ``[tool.vergen]`` table

Discovery order:

1. Explicit path from ``--config`` or ``VERGEN_CONFIG``
2. ``vergen.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.vergen]`` section

Configuration precedence: defaults < config file < CLI args.

Typical usage::

    config = load_config()  # Auto-discover
    config = load_config(Path("custom.toml"))  # Explicit path

Example (``vergen.toml``)::

    [vergen]
    source = "file"
    version_file = "gradle.properties"
    version_file_extraction_pattern = "(?<=version=).+"

    [vergen.release]
    cut_snapshot = true
    generate_build_metadata = true
    build_metadata_pattern = "build.{date[YYYYMMDD]}.{hash[0,7]}"

    [vergen.next]
    increment_minor = true

    [vergen.extract]
    patterns = ["/^(\\\\w+)=(.*)$/gm"]
    files = ["gradle.properties"]
"""

from __future__ import annotations


import tomli as tomllib
from pathlib import Path
from datetime import date, datetime, time
from typing import Any, Dict, Optional, Tuple, Type, Union
from dataclasses import dataclass, field, replace

from dateutil import parser as date_parser

from vergen.exceptions import ConfigError
from vergen.utils.logger import get_logger
from vergen.models import ExtractSettings, NextPolicy, ReleasePolicy, VersionSource
from vergen.constants import SOURCE_FILE, SOURCE_VARIABLE, VERSION_SOURCES

logger = get_logger("config")

# TOML key -> policy attribute
_RELEASE_KEYS: Dict[str, str] = {
    "cut_prerelease": "cut_prerelease",
    "cut_snapshot": "cut_snapshot",
    "cut_build_metadata": "cut_metadata",
    "generate_build_metadata": "generate_metadata",
}
_NEXT_KEYS: Dict[str, str] = {
    "cut_prerelease": "cut_prerelease",
    "cut_build_metadata": "cut_metadata",
    "put_build_metadata": "put_metadata",
    "increment_major": "increment_major",
    "increment_minor": "increment_minor",
    "increment_patch": "increment_patch",
    "increment_prerelease": "increment_prerelease",
}


@dataclass
class VergenConfig:
    """Parsed and validated vergen configuration.

    Contains settings from ``vergen.toml`` or ``pyproject.toml``.
    All fields have defaults, so empty config files are valid.

    Attributes:
        source: Where the current version is read from.
        release: Release version rules.
        next: Next version rules.
        extract: Data extraction settings.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    source: VersionSource = field(default_factory=VersionSource)
    release: ReleasePolicy = field(default_factory=ReleasePolicy)
    next: NextPolicy = field(default_factory=NextPolicy)
    extract: ExtractSettings = field(default_factory=ExtractSettings)

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging.

        Excludes ``source_path`` metadata.
        """
        return {
            "source": self.source.kind,
            "version": self.source.version,
            "version_file": self.source.version_file,
            "release": {
                "cut_prerelease": self.release.cut_prerelease,
                "cut_snapshot": self.release.cut_snapshot,
                "cut_build_metadata": self.release.cut_metadata,
                "generate_build_metadata": self.release.generate_metadata,
                "build_metadata_pattern": self.release.metadata_pattern,
            },
            "next": {
                key: getattr(self.next, attr) for key, attr in _NEXT_KEYS.items()
            },
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Search order:

    1. ``explicit_path`` (from ``--config`` or ``VERGEN_CONFIG``)
    2. ``vergen.toml`` in current directory
    3. ``pyproject.toml`` with ``[tool.vergen]`` section in current directory

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    vergen_toml = cwd / "vergen.toml"
    if vergen_toml.is_file():
        logger.debug("Found vergen.toml: %s", vergen_toml)
        return vergen_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_vergen_section(pyproject_toml):
        logger.debug("Found [tool.vergen] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_vergen_section(path: Path) -> bool:
    """Check if pyproject.toml contains a [tool.vergen] section.

    A pyproject.toml that cannot be parsed is treated as having no section;
    it belongs to the project being versioned, not to vergen.
    """
    try:
        raw = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring unreadable %s: %s", path, exc)
        return False
    return "vergen" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> VergenConfig:
    """Load and validate vergen configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`VergenConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return VergenConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("vergen", {})
    else:
        section = raw.get("vergen", {})

    if not section:
        logger.debug("Config file found but no vergen section, using defaults")
        return VergenConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


# ---------------------------------------------------------------------------
# Section parsing
# ---------------------------------------------------------------------------


def _check_keys(section: Dict[str, Any], known: set, *, config_path: str, table: str) -> None:
    unknown = set(section.keys()) - known
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys in [{table}]: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )


def _typed(
    section: Dict[str, Any],
    key: str,
    expected: Union[Type, Tuple[Type, ...]],
    type_name: str,
    *,
    config_path: str,
    table: str,
) -> Any:
    """Return ``section[key]`` after checking its type."""
    value = section[key]
    # bool is an int subclass; never accept one for the other
    if not isinstance(value, expected) or (expected is not bool and isinstance(value, bool)):
        raise ConfigError(
            f"{key} must be a {type_name}, got {type(value).__name__}",
            config_path=config_path,
            option=f"{table}.{key}",
        )
    return value


def _string_list(
    section: Dict[str, Any], key: str, *, config_path: str, table: str
) -> Tuple[str, ...]:
    values = _typed(section, key, list, "list of strings", config_path=config_path, table=table)
    if not all(isinstance(item, str) for item in values):
        raise ConfigError(
            f"{key} must be a list of strings",
            config_path=config_path,
            option=f"{table}.{key}",
        )
    return tuple(values)


def parse_datetime(value: Union[str, date, datetime], *, option: str = "build_metadata_datetime") -> datetime:
    """Parse a metadata date/time value.

    Accepts TOML datetimes and dates as well as any string ``dateutil``
    understands, such as ``2017-03-02T17:33:03`` or ``2017-03-02 17:33``.
    A bare date is taken as midnight.

    Raises:
        ConfigError: If the string is not a recognizable date/time.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as exc:
        raise ConfigError(
            f"Invalid date/time {value!r}: {exc}",
            option=option,
        ) from exc


def _parse_release(section: Dict[str, Any], *, config_path: str) -> ReleasePolicy:
    table = "release"
    _check_keys(
        section,
        set(_RELEASE_KEYS) | {"build_metadata_pattern", "build_metadata_datetime"},
        config_path=config_path,
        table=table,
    )

    changes: Dict[str, Any] = {}
    for key, attr in _RELEASE_KEYS.items():
        if key in section:
            changes[attr] = _typed(
                section, key, bool, "boolean", config_path=config_path, table=table
            )

    if "build_metadata_pattern" in section:
        changes["metadata_pattern"] = _typed(
            section, "build_metadata_pattern", str, "string",
            config_path=config_path, table=table,
        )

    if "build_metadata_datetime" in section:
        value = _typed(
            section, "build_metadata_datetime", (str, date), "string, date or datetime",
            config_path=config_path, table=table,
        )
        try:
            changes["metadata_time"] = parse_datetime(value)
        except ConfigError as exc:
            raise ConfigError(
                exc.message,
                config_path=config_path,
                option=f"{table}.build_metadata_datetime",
            ) from exc

    return replace(ReleasePolicy(), **changes)


def _parse_next(section: Dict[str, Any], *, config_path: str) -> NextPolicy:
    table = "next"
    _check_keys(section, set(_NEXT_KEYS), config_path=config_path, table=table)

    changes = {
        attr: _typed(section, key, bool, "boolean", config_path=config_path, table=table)
        for key, attr in _NEXT_KEYS.items()
        if key in section
    }
    return replace(NextPolicy(), **changes)


def _parse_extract(section: Dict[str, Any], *, config_path: str) -> ExtractSettings:
    table = "extract"
    _check_keys(section, {"patterns", "files", "name"}, config_path=config_path, table=table)

    changes: Dict[str, Any] = {}
    for key in ("patterns", "files"):
        if key in section:
            changes[key] = _string_list(section, key, config_path=config_path, table=table)
    if "name" in section:
        changes["name"] = _typed(section, "name", str, "string", config_path=config_path, table=table)
    return replace(ExtractSettings(), **changes)


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> VergenConfig:
    """Parse and validate the ``[vergen]`` or ``[tool.vergen]`` table.

    Rejects unknown keys and type mismatches.

    Raises:
        ConfigError: Unknown keys or incorrect types (e.g., string for boolean).
    """
    table = "vergen"
    _check_keys(
        section,
        {
            "source",
            "version",
            "version_file",
            "version_file_extraction_pattern",
            "release",
            "next",
            "extract",
        },
        config_path=config_path,
        table=table,
    )

    source_changes: Dict[str, Any] = {}
    if "source" in section:
        kind = _typed(section, "source", str, "string", config_path=config_path, table=table)
        if kind not in VERSION_SOURCES:
            raise ConfigError(
                f"source must be one of {', '.join(VERSION_SOURCES)}, got {kind!r}",
                config_path=config_path,
                option="source",
            )
        source_changes["kind"] = kind
    for key, attr in (
        ("version", "version"),
        ("version_file", "version_file"),
        ("version_file_extraction_pattern", "extraction_pattern"),
    ):
        if key in section:
            source_changes[attr] = _typed(
                section, key, str, "string", config_path=config_path, table=table
            )

    config = VergenConfig(source=replace(VersionSource(), **source_changes))

    for key, parse in (
        ("release", _parse_release),
        ("next", _parse_next),
        ("extract", _parse_extract),
    ):
        if key in section:
            sub = _typed(section, key, dict, "table", config_path=config_path, table=table)
            setattr(config, key, parse(sub, config_path=config_path))

    return config


def validate_source(source: VersionSource) -> None:
    """Check that a version source carries the fields its kind needs.

    Raises:
        ConfigError: ``file`` without file and pattern, ``variable``
            without a version, or an unknown kind.
    """
    if source.kind == SOURCE_FILE:
        if not source.version_file:
            raise ConfigError("version_file is required for source 'file'", option="version_file")
        if not source.extraction_pattern:
            raise ConfigError(
                "version_file_extraction_pattern is required for source 'file'",
                option="version_file_extraction_pattern",
            )
    elif source.kind == SOURCE_VARIABLE:
        if not source.version:
            raise ConfigError("version is required for source 'variable'", option="version")
    else:
        raise ConfigError(f"Unknown version source: {source.kind!r}", option="source")
