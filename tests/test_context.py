from __future__ import annotations

from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from vergen.config import VergenConfig
from vergen.context import VergenContext, pass_context


@pytest.mark.unit
class TestVergenContext:
    """Tests for VergenContext class."""

    def test_default_initialization(self) -> None:
        """Test VergenContext starts with default configuration."""
        ctx = VergenContext()

        assert ctx.config_path is None
        assert ctx.verbose == 0
        assert ctx.color is True
        assert isinstance(ctx.config, VergenConfig)

    def test_instances_are_independent(self) -> None:
        ctx1 = VergenContext()
        ctx2 = VergenContext()

        ctx1.verbose = 2
        ctx1.config.source_path = Path("vergen.toml")

        assert ctx2.verbose == 0
        assert ctx2.config.source_path is None

    def test_slots_prevents_arbitrary_attributes(self) -> None:
        """Test __slots__ prevents setting undefined attributes."""
        ctx = VergenContext()

        with pytest.raises(AttributeError):
            ctx.undefined_attribute = "value"  # type: ignore[attr-defined]


@pytest.mark.unit
class TestPassContext:
    """Tests for the pass_context decorator."""

    def test_injects_existing_context(self) -> None:
        seen = []

        @click.command()
        @pass_context
        def command(ctx: VergenContext) -> None:
            seen.append(ctx)

        obj = VergenContext()
        obj.verbose = 3
        result = CliRunner().invoke(command, [], obj=obj)

        assert result.exit_code == 0
        assert seen == [obj]

    def test_creates_context_when_missing(self) -> None:
        """Test ensure=True builds a default context for bare commands."""
        seen = []

        @click.command()
        @pass_context
        def command(ctx: VergenContext) -> None:
            seen.append(ctx)

        result = CliRunner().invoke(command, [])

        assert result.exit_code == 0
        assert isinstance(seen[0], VergenContext)
        assert seen[0].verbose == 0
