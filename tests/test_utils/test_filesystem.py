from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from vergen.exceptions import FileOperationError
from vergen.utils.filesystem import read_files, safe_read_file

RESOURCES = Path(__file__).resolve().parent.parent / "resources"


@pytest.mark.unit
class TestSafeReadFile:
    """Tests for safe_read_file."""

    def test_reads_text(self, tmp_path: Path) -> None:
        target = tmp_path / "gradle.properties"
        target.write_text("version=5.0.3-SNAPSHOT\n", encoding="utf-8")

        assert safe_read_file(target) == "version=5.0.3-SNAPSHOT\n"

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        target = tmp_path / "VERSION"
        target.write_text("1.0.0", encoding="utf-8")

        assert safe_read_file(str(target)) == "1.0.0"

    def test_reads_resource(self) -> None:
        content = safe_read_file(RESOURCES / "simple_package.json")

        assert '"version": "1.0.0"' in content

    def test_missing_file(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing.properties"

        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(missing)

        assert "File not found" in str(exc_info.value)
        assert exc_info.value.operation == "read"
        assert exc_info.value.file_path == str(missing)

    def test_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError, match="Not a file"):
            safe_read_file(tmp_path)

    def test_too_large(self, tmp_path: Path) -> None:
        """Test the size limit is enforced before reading.

        Edge case: a misconfigured path pointing at a build artifact.
        """
        target = tmp_path / "big.txt"
        target.write_text("x" * 100, encoding="utf-8")

        with pytest.raises(FileOperationError, match="File too large"):
            safe_read_file(target, max_size=10)

    def test_size_limit_disabled(self, tmp_path: Path) -> None:
        target = tmp_path / "big.txt"
        target.write_text("x" * 100, encoding="utf-8")

        assert len(safe_read_file(target, max_size=None)) == 100

    def test_decode_error_chained(self, tmp_path: Path) -> None:
        target = tmp_path / "binary.bin"
        target.write_bytes(b"\xff\xfe\x00\x81")

        with pytest.raises(FileOperationError) as exc_info:
            safe_read_file(target)

        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)
        assert exc_info.value.__cause__ is exc_info.value.original_error

    def test_os_error_wrapped(self, tmp_path: Path) -> None:
        target = tmp_path / "locked.txt"
        target.write_text("1.0.0", encoding="utf-8")

        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            with pytest.raises(FileOperationError, match="Failed to read file"):
                safe_read_file(target)


@pytest.mark.unit
class TestReadFiles:
    """Tests for read_files."""

    def test_keys_keep_order_and_spelling(self, tmp_path: Path) -> None:
        first = tmp_path / "b.txt"
        second = tmp_path / "a.txt"
        first.write_text("b", encoding="utf-8")
        second.write_text("a", encoding="utf-8")

        result = read_files([first, str(second)])

        assert list(result) == [str(first), str(second)]
        assert list(result.values()) == ["b", "a"]

    def test_first_failure_raises(self, tmp_path: Path) -> None:
        present = tmp_path / "present.txt"
        present.write_text("ok", encoding="utf-8")

        with pytest.raises(FileOperationError):
            read_files([present, tmp_path / "absent.txt"])

    def test_empty(self) -> None:
        assert read_files([]) == {}
