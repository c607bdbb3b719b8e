"""
Filesystem utilities for vergen.

vergen only ever reads files: version files and the files handed to the
data extractor. Missing files, directories, oversized files and decoding
failures are normalized to ``FileOperationError`` with the original
exception chained.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Sequence, Union

from vergen.utils.logger import get_logger
from vergen.exceptions import FileOperationError
from vergen.constants import MAX_FILE_SIZE


logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path) -> Path:
    """Validate and resolve a path that must be an existing file."""
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}",
            file_path=str(path),
            operation="read",
        )
    return path.resolve()


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Safely read a text file with optional size limits.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (None disables limit).
        encoding: Text encoding.

    Returns:
        File contents as a string.

    Raises:
        FileOperationError: The file is missing, not a regular file, too
            large, or cannot be read or decoded.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        content = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc

    logger.debug("Read %d bytes from %s", size, path)
    return content


def read_files(file_paths: Sequence[PathLike]) -> Dict[str, str]:
    """Read several text files, keyed by the path as given, in order.

    Raises:
        FileOperationError: On the first file that cannot be read.
    """
    return {str(file_path): safe_read_file(file_path) for file_path in file_paths}
