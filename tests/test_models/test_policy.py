from __future__ import annotations

import pytest

from vergen.models import ExtractSettings, NextPolicy, ReleasePolicy, VersionSource


@pytest.mark.unit
class TestPolicyDefaults:
    """Tests for policy record defaults."""

    def test_release_defaults(self) -> None:
        policy = ReleasePolicy()

        assert policy.cut_prerelease is False
        assert policy.cut_snapshot is True
        assert policy.cut_metadata is True
        assert policy.generate_metadata is False
        assert policy.metadata_pattern == "build.{date}.{hash}"
        assert policy.metadata_time is None

    def test_next_defaults(self) -> None:
        policy = NextPolicy()

        assert policy.cut_prerelease is False
        assert policy.cut_metadata is True
        assert policy.put_metadata is False
        assert policy.has_explicit_increment is False

    def test_source_defaults(self) -> None:
        source = VersionSource()

        assert source.kind == "variable"
        assert source.version is None

    def test_extract_defaults(self) -> None:
        settings = ExtractSettings()

        assert settings.patterns == ()
        assert settings.files == ()
        assert settings.name is None


@pytest.mark.unit
class TestNextPolicyIncrements:
    """Tests for NextPolicy.has_explicit_increment."""

    @pytest.mark.parametrize(
        "flag",
        ["increment_major", "increment_minor", "increment_patch", "increment_prerelease"],
    )
    def test_any_flag_counts(self, flag: str) -> None:
        assert NextPolicy(**{flag: True}).has_explicit_increment is True

    def test_cut_flags_do_not_count(self) -> None:
        policy = NextPolicy(cut_prerelease=True, cut_metadata=True, put_metadata=True)

        assert policy.has_explicit_increment is False
