"""Unit tests for gitversioning.utils.version_utils.

Computed versions follow git conventions; these tests check that each
shape is turned into a version ``packaging`` accepts.
"""

from __future__ import annotations

from dataclasses import replace

import pytest
from packaging.version import Version

from gitversioning.models import RelaxedVersion, VersionInfo, VersionNumber
from gitversioning.utils.version_utils import local_label, to_pep440


def _info(display: str) -> VersionInfo:
    base = VersionInfo(
        scm="git",
        branch="release/2.0",
        branch_type="release",
        branch_id="release-2.0",
        commit="a" * 40,
        commit_abbrev="abc1234",
        time=None,
        current_tag=None,
        last_tag=None,
        dirty=False,
        shallow=False,
        base="2.0",
        full="release-2.0-sha-abc1234",
        display=display,
        version_number=None,
    )
    return replace(
        base,
        version_number=VersionNumber.from_version(RelaxedVersion.parse(display)),
    )


@pytest.mark.unit
class TestToPep440:
    """Tests for to_pep440."""

    @pytest.mark.parametrize(
        "display, expected",
        [
            ("2.0.3", "2.0.3"),
            ("2.0.0-rc.2", "2.0.0rc2"),
            ("2024.05.0-12345", "2024.5.0.post12345"),
        ],
    )
    def test_valid_versions_are_normalized(self, display: str, expected: str) -> None:
        """Test versions packaging understands are kept."""
        assert to_pep440(_info(display)) == expected

    @pytest.mark.parametrize(
        "display, expected",
        [
            ("1.3.0-sha-abc1234", "1.3.0+sha.abc1234"),
            ("2.0.3-dirty", "2.0.3+dirty"),
            ("2.0.0-SNAPSHOT", "2.0.0+snapshot"),
        ],
    )
    def test_qualifier_becomes_local_label(self, display: str, expected: str) -> None:
        result = to_pep440(_info(display))

        assert result == expected
        assert str(Version(result)) == result

    def test_unversioned_display(self) -> None:
        """Test builds without a semantic version keep the identifier."""
        info = replace(
            _info("feature-login-sha-abc1234"),
            version_number=VersionNumber.from_version(RelaxedVersion()),
        )

        assert to_pep440(info) == "0.0.0+feature.login.sha.abc1234"

    def test_empty_info(self) -> None:
        assert to_pep440(VersionInfo.empty()) == ""


@pytest.mark.unit
class TestLocalLabel:
    """Tests for local_label."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("-sha-abc1234-dirty", "sha.abc1234.dirty"),
            ("+build.7", "build.7"),
            ("Feature/LOGIN", "feature.login"),
            ("---", ""),
        ],
    )
    def test_labels(self, text: str, expected: str) -> None:
        assert local_label(text) == expected
