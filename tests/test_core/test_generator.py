"""Unit tests for vergen.core.generator.

Covers release computation (snapshot/prerelease/metadata cutting and
metadata generation), next version computation (automatic and explicit
increments), and the combined version set.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from vergen.core.generator import (
    VersionSet,
    _cut_snapshot,
    generate_next,
    generate_release,
    generate_versions,
)
from vergen.core.parser import parse_version
from vergen.exceptions import MetadataPatternError
from vergen.models import NextPolicy, ReleasePolicy, Version

COMMIT_HASH = "622161f9e2993288c026f9c8eb71a0659ed933ee"
BUILD_DATE = datetime(2017, 3, 2, 17, 33, 3)

KEEP_ALL = ReleasePolicy(cut_snapshot=False, cut_metadata=False)


def _next(current: str, policy: NextPolicy, release: str = "0.0.0") -> str:
    return str(generate_next(parse_version(current), parse_version(release), policy))


# ============================================================================
# Snapshot cutting
# ============================================================================


@pytest.mark.unit
class TestCutSnapshot:
    """Tests for the snapshot marker removal helper."""

    @pytest.mark.parametrize(
        "prerelease,expected",
        [
            (None, None),
            ("SNAPSHOT", None),
            ("BETA-7-SNAPSHOT", "BETA-7"),
            ("rc.1.SNAPSHOT", "rc.1"),
            ("BETA-7", "BETA-7"),
            ("SNAPSHOT-BETA", "SNAPSHOT-BETA"),
            ("BETA-snapshot", "BETA-snapshot"),
        ],
    )
    def test_cut_snapshot(self, prerelease, expected) -> None:
        assert _cut_snapshot(prerelease) == expected


# ============================================================================
# Release
# ============================================================================


@pytest.mark.unit
class TestGenerateRelease:
    """Tests for generate_release."""

    def test_cut_snapshot_suffix(self) -> None:
        current = parse_version("1.2.3-BETA-7-SNAPSHOT")

        release = generate_release(current, ReleasePolicy(cut_snapshot=True))

        assert str(release) == "1.2.3-BETA-7"

    def test_plain_snapshot_removed(self) -> None:
        release = generate_release(parse_version("5.0.3-SNAPSHOT"), ReleasePolicy())

        assert str(release) == "5.0.3"

    def test_cut_prerelease(self) -> None:
        current = parse_version("1.2.3-BETA-7-SNAPSHOT")

        release = generate_release(current, ReleasePolicy(cut_prerelease=True))

        assert str(release) == "1.2.3"

    def test_cut_prerelease_wins_over_cut_snapshot(self) -> None:
        policy = ReleasePolicy(cut_prerelease=True, cut_snapshot=False)

        assert str(generate_release(parse_version("1.2.3-RC1"), policy)) == "1.2.3"

    def test_keep_everything(self) -> None:
        current = parse_version("1.2.3-BETA-7-SNAPSHOT+build.1")

        assert str(generate_release(current, KEEP_ALL)) == "1.2.3-BETA-7-SNAPSHOT+build.1"

    def test_cut_metadata(self) -> None:
        policy = ReleasePolicy(cut_snapshot=False, cut_metadata=True)

        assert str(generate_release(parse_version("1.2.3+build.1"), policy)) == "1.2.3"

    def test_generate_metadata(self) -> None:
        policy = ReleasePolicy(
            generate_metadata=True,
            metadata_pattern="build.{date}.{hash}",
            metadata_time=BUILD_DATE,
        )

        release = generate_release(
            parse_version("1.2.3-BETA-7-SNAPSHOT+old"), policy, commit_hash=COMMIT_HASH
        )

        assert str(release) == "1.2.3-BETA-7+build.2017-03-02.622161f9"

    def test_generate_metadata_replaces_kept_metadata(self) -> None:
        policy = ReleasePolicy(
            cut_metadata=False,
            generate_metadata=True,
            metadata_pattern="{date[YYYYMMDD]}",
            metadata_time=BUILD_DATE,
        )

        release = generate_release(parse_version("1.0.0+old"), policy)

        assert release.build_metadata == "20170302"

    def test_now_used_without_metadata_time(self) -> None:
        policy = ReleasePolicy(generate_metadata=True, metadata_pattern="{date}")

        release = generate_release(parse_version("1.0.0"), policy, now=BUILD_DATE)

        assert release.build_metadata == "2017-03-02"

    def test_metadata_time_wins_over_now(self) -> None:
        policy = ReleasePolicy(
            generate_metadata=True,
            metadata_pattern="{date}",
            metadata_time=datetime(2020, 12, 31, 12),
        )

        release = generate_release(parse_version("1.0.0"), policy, now=BUILD_DATE)

        assert release.build_metadata == "2020-12-31"

    def test_metadata_error_propagates(self) -> None:
        policy = ReleasePolicy(generate_metadata=True, metadata_pattern="{hash}")

        with pytest.raises(MetadataPatternError):
            generate_release(parse_version("1.0.0"), policy, now=BUILD_DATE)

    def test_input_not_modified(self) -> None:
        current = parse_version("1.2.3-BETA-7-SNAPSHOT+meta")
        before = Version(1, 2, 3, "BETA-7-SNAPSHOT", "meta")

        generate_release(current, ReleasePolicy(cut_prerelease=True))

        assert current == before


# ============================================================================
# Next
# ============================================================================


@pytest.mark.unit
class TestGenerateNextAutomatic:
    """Tests for generate_next without explicit increment flags."""

    def test_prerelease_counter_incremented(self) -> None:
        assert _next("1.2.3-BETA-7-SNAPSHOT", NextPolicy()) == "1.2.3-BETA-8-SNAPSHOT"

    def test_patch_incremented_without_counter(self) -> None:
        assert _next("1.2.3-SNAPSHOT", NextPolicy()) == "1.2.4-SNAPSHOT"

    def test_patch_incremented_without_prerelease(self) -> None:
        assert _next("1.2.3", NextPolicy()) == "1.2.4"

    def test_cut_prerelease_bumps_patch(self) -> None:
        assert _next("1.2.3-BETA-7", NextPolicy(cut_prerelease=True)) == "1.2.4"

    def test_metadata_cut_by_default(self) -> None:
        assert _next("1.2.3+build.1", NextPolicy()) == "1.2.4"

    def test_metadata_kept(self) -> None:
        assert _next("1.2.3+build.1", NextPolicy(cut_metadata=False)) == "1.2.4+build.1"

    def test_put_metadata_from_release(self) -> None:
        result = _next(
            "1.2.3-BETA-7-SNAPSHOT",
            NextPolicy(put_metadata=True),
            release="1.2.3-BETA-7+build.2017-03-02.622161f9",
        )

        assert result == "1.2.3-BETA-8-SNAPSHOT+build.2017-03-02.622161f9"

    def test_put_metadata_release_without_metadata(self) -> None:
        result = _next(
            "1.2.3+old",
            NextPolicy(cut_metadata=False, put_metadata=True),
            release="1.2.3",
        )

        assert result == "1.2.4"


@pytest.mark.unit
class TestGenerateNextExplicit:
    """Tests for generate_next with explicit increment flags."""

    def test_increment_prerelease(self) -> None:
        assert _next("1.2.3-RC5", NextPolicy(increment_prerelease=True)) == "1.2.3-RC6"

    def test_increment_prerelease_without_counter(self) -> None:
        """Test no patch fallback happens in explicit mode."""
        assert _next("1.2.3-SNAPSHOT", NextPolicy(increment_prerelease=True)) == "1.2.3-SNAPSHOT"

    def test_increment_patch_resets_prerelease(self) -> None:
        assert _next("1.2.3-RC5", NextPolicy(increment_patch=True)) == "1.2.4-RC1"

    def test_increment_minor(self) -> None:
        assert _next("1.2.3-BETA-7", NextPolicy(increment_minor=True)) == "1.3.0-BETA-1"

    def test_increment_major(self) -> None:
        assert _next("1.2.3-SNAPSHOT", NextPolicy(increment_major=True)) == "2.0.0-SNAPSHOT"

    def test_prerelease_then_patch(self) -> None:
        policy = NextPolicy(increment_prerelease=True, increment_patch=True)

        assert _next("1.2.3-RC5", policy) == "1.2.4-RC1"

    def test_patch_and_major(self) -> None:
        policy = NextPolicy(increment_patch=True, increment_major=True)

        assert _next("1.2.3-RC5", policy) == "2.0.0-RC1"

    def test_all_flags(self) -> None:
        policy = NextPolicy(
            increment_prerelease=True,
            increment_patch=True,
            increment_minor=True,
            increment_major=True,
        )

        assert _next("1.2.3-BETA-7-SNAPSHOT", policy) == "2.0.0-BETA-1-SNAPSHOT"

    def test_explicit_with_cut_prerelease(self) -> None:
        policy = NextPolicy(increment_minor=True, cut_prerelease=True)

        assert _next("1.2.3-RC5", policy) == "1.3.0"

    def test_input_not_modified(self) -> None:
        current = parse_version("1.2.3-RC5")

        generate_next(current, current, NextPolicy(increment_major=True))

        assert str(current) == "1.2.3-RC5"


# ============================================================================
# Version set
# ============================================================================


@pytest.mark.unit
class TestGenerateVersions:
    """Tests for generate_versions."""

    def test_defaults(self) -> None:
        versions = generate_versions(
            parse_version("1.2.3-BETA-7-SNAPSHOT"), ReleasePolicy(), NextPolicy()
        )

        assert isinstance(versions, VersionSet)
        assert str(versions.current) == "1.2.3-BETA-7-SNAPSHOT"
        assert str(versions.release) == "1.2.3-BETA-7"
        assert str(versions.next) == "1.2.3-BETA-8-SNAPSHOT"
        assert str(versions.next_release) == "1.2.3-BETA-8"

    def test_shared_build_date(self) -> None:
        release_policy = ReleasePolicy(
            generate_metadata=True, metadata_pattern="build.{date}.{hash[0,7]}"
        )

        versions = generate_versions(
            parse_version("5.0.3-SNAPSHOT"),
            release_policy,
            NextPolicy(put_metadata=True),
            commit_hash=COMMIT_HASH,
            now=BUILD_DATE,
        )

        assert str(versions.release) == "5.0.3+build.2017-03-02.622161f"
        assert str(versions.next) == "5.0.4-SNAPSHOT+build.2017-03-02.622161f"
        assert str(versions.next_release) == "5.0.4+build.2017-03-02.622161f"

    def test_as_dict_order(self) -> None:
        versions = generate_versions(parse_version("1.0.0"), ReleasePolicy(), NextPolicy())

        assert list(versions.as_dict()) == [
            "CURRENT_VERSION",
            "RELEASE_VERSION",
            "NEXT_VERSION",
            "NEXT_RELEASE_VERSION",
        ]
        assert str(versions.as_dict()["NEXT_VERSION"]) == "1.0.1"
