from __future__ import annotations

import sys
from typing import Generator
from unittest.mock import patch

import pytest
from rich.table import Table
from rich.console import Console

from vergen.utils.console import (
    VERGEN_THEME,
    _get_console,
    _should_use_color,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def reset_console() -> Generator[None, None, None]:
    """Reset the console singletons before and after each test."""
    reconfigure_console()
    yield
    reconfigure_console()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove environment variables that affect color detection."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("CI", raising=False)


# ==============================================================================
# Theme and console lifecycle
# ==============================================================================


@pytest.mark.unit
class TestThemeConfiguration:
    """Tests for the vergen Rich theme."""

    @pytest.mark.parametrize(
        "style_name", ["success", "error", "warning", "info", "dim", "version"]
    )
    def test_theme_has_style(self, style_name: str) -> None:
        assert style_name in VERGEN_THEME.styles


@pytest.mark.unit
class TestShouldUseColor:
    """Tests for _should_use_color."""

    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        assert _should_use_color(sys.stdout) is False

    def test_ci_env(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CI", "true")

        assert _should_use_color(sys.stdout) is False

    def test_tty(self, clean_env: None) -> None:
        with patch.object(sys.stdout, "isatty", return_value=True):
            assert _should_use_color(sys.stdout) is True

    def test_stream_without_isatty(self, clean_env: None) -> None:
        """Test objects lacking isatty() are treated as non-terminals.

        Edge case: test runners and pipes sometimes replace the streams.
        """
        assert _should_use_color(object()) is False


@pytest.mark.unit
class TestGetConsole:
    """Tests for the shared console instances."""

    def test_returns_console(self) -> None:
        assert isinstance(_get_console(), Console)

    def test_singleton_per_stream(self) -> None:
        assert _get_console() is _get_console()
        assert _get_console(stderr=True) is _get_console(stderr=True)
        assert _get_console() is not _get_console(stderr=True)

    def test_stderr_console_targets_stderr(self) -> None:
        assert _get_console(stderr=True).stderr is True

    def test_get_raw_console(self) -> None:
        assert get_raw_console() is _get_console()

    def test_reconfigure_creates_new_instance(self) -> None:
        first = _get_console()

        reconfigure_console()

        assert _get_console() is not first


# ==============================================================================
# Status messages
# ==============================================================================


@pytest.mark.unit
class TestStatusMessages:
    """Tests for print_success, print_error and print_warning."""

    def test_success(self) -> None:
        with patch.object(Console, "print") as mock_print:
            print_success("Versions computed")

            mock_print.assert_called_once_with("[OK] Versions computed", style="success")

    def test_error_without_markup(self) -> None:
        """Test error text is printed verbatim.

        Edge case: patterns such as ``{date[YYYY]}`` contain brackets that
        Rich would otherwise treat as markup.
        """
        with patch.object(Console, "print") as mock_print:
            print_error("bad pattern '{date[YYYY]}'")

            mock_print.assert_called_once_with(
                "[ERROR] bad pattern '{date[YYYY]}'", style="error", markup=False
            )

    def test_warning_custom_prefix(self) -> None:
        with patch.object(Console, "print") as mock_print:
            print_warning("careful", prefix="!")

            mock_print.assert_called_once_with("! careful", style="warning", markup=False)

    def test_status_goes_to_stderr(self) -> None:
        with patch("vergen.utils.console._get_console") as mock_get:
            print_success("done")

        mock_get.assert_called_once_with(stderr=True)


# ==============================================================================
# Tables
# ==============================================================================


@pytest.mark.unit
class TestPrintTable:
    """Tests for print_table."""

    def test_prints_table(self) -> None:
        data = [
            {"Variable": "CURRENT_VERSION", "Value": "1.2.3"},
            {"Variable": "NEXT_VERSION", "Value": "1.2.4"},
        ]

        with patch.object(Console, "print") as mock_print:
            print_table(data, title="Versions")

        table = mock_print.call_args[0][0]
        assert isinstance(table, Table)
        assert table.title == "Versions"
        assert [column.header for column in table.columns] == ["Variable", "Value"]
        assert table.row_count == 2

    def test_empty_data_prints_nothing(self) -> None:
        with patch.object(Console, "print") as mock_print:
            print_table([])

        mock_print.assert_not_called()

    def test_custom_headers_and_missing_values(self) -> None:
        with patch.object(Console, "print") as mock_print:
            print_table([{"a": 1}], headers=["b", "a"])

        table = mock_print.call_args[0][0]
        assert [column.header for column in table.columns] == ["b", "a"]

    def test_column_styles(self) -> None:
        with patch.object(Console, "print") as mock_print:
            print_table(
                [{"Variable": "X", "Value": "1"}],
                column_styles={"Variable": {"style": "bold cyan", "no_wrap": True}},
            )

        table = mock_print.call_args[0][0]
        assert table.columns[0].style == "bold cyan"
        assert table.columns[0].no_wrap is True
