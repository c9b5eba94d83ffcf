from __future__ import annotations

import pytest

from gitversioning.core.formatter import (
    format_value,
    format_version_text,
    property_name,
    version_rows,
)
from gitversioning.models import RelaxedVersion, VersionInfo, VersionNumber


@pytest.fixture
def info() -> VersionInfo:
    return VersionInfo(
        scm="git",
        branch="release/2.0",
        branch_type="release",
        branch_id="release-2.0",
        commit="0123456789abcdef0123456789abcdef01234567",
        commit_abbrev="0123456",
        time="2024-05-01T10:30:00+02:00",
        current_tag=None,
        last_tag="2.0.2",
        dirty=False,
        shallow=False,
        base="2.0",
        full="release-2.0-sha-0123456",
        display="2.0.3",
        version_number=VersionNumber.from_version(RelaxedVersion.parse("2.0.3")),
    )


@pytest.mark.unit
class TestFormatValue:
    """Tests for format_value."""

    @pytest.mark.parametrize(
        "value, expected",
        [(True, "true"), (False, "false"), (None, ""), (20003, "20003"), ("x", "x")],
    )
    def test_values(self, value, expected: str) -> None:
        """Test booleans are lower-case and None is empty."""
        assert format_value(value) == expected


@pytest.mark.unit
class TestPropertyName:
    """Tests for property_name."""

    @pytest.mark.parametrize(
        "key, expected",
        [("lastTag", "LAST_TAG"), ("branchId", "BRANCHID"), ("versionCode", "VERSIONCODE"), ("build", "BUILD")],
    )
    def test_names(self, key: str, expected: str) -> None:
        """Test only lastTag is split into words."""
        assert property_name(key) == expected


@pytest.mark.unit
class TestHumanForm:
    """Tests for the aligned display form."""

    def test_aligned_lines(self, info: VersionInfo) -> None:
        """Test keys are padded to 12 characters after the prefix."""
        lines = format_version_text(info).splitlines()

        assert lines[0] == "[version] build       = 0123456"
        assert lines[1] == "[version] branch      = release/2.0"
        assert "[version] lastTag     = 2.0.2" in lines
        assert "[version] dirty       = false" in lines
        assert "[version] versionCode = 20003" in lines
        assert "[version] tag         = " in lines
        assert len(lines) == 18

    def test_custom_prefix(self, info: VersionInfo) -> None:
        """Test the prefix is configurable."""
        text = format_version_text(info, prefix="> ")

        assert text.startswith("> build       = 0123456\n")
        assert text.endswith("\n")

    def test_empty_info(self) -> None:
        """Test a single notice line is printed without a repository."""
        assert format_version_text(VersionInfo.empty()) == (
            "[version] No version can be computed from the SCM.\n"
        )


@pytest.mark.unit
class TestMachineForm:
    """Tests for the properties form."""

    def test_properties(self, info: VersionInfo) -> None:
        """Test upper-case property names with the default prefix."""
        lines = format_version_text(info, machine=True).splitlines()

        assert lines[0] == "VERSION_BUILD=0123456"
        assert "VERSION_BRANCHID=release-2.0" in lines
        assert "VERSION_LAST_TAG=2.0.2" in lines
        assert "VERSION_DIRTY=false" in lines
        assert "VERSION_TAG=" in lines
        assert lines[-1] == "VERSION_TIME=2024-05-01T10:30:00+02:00"

    def test_custom_prefix(self, info: VersionInfo) -> None:
        """Test the property prefix is configurable."""
        text = format_version_text(info, prefix="APP_", machine=True)

        assert "APP_DISPLAY=2.0.3\n" in text

    def test_empty_info(self) -> None:
        """Test nothing is written without a repository."""
        assert format_version_text(VersionInfo.empty(), machine=True) == ""


@pytest.mark.unit
class TestVersionRows:
    """Tests for version_rows."""

    def test_rows(self, info: VersionInfo) -> None:
        """Test one row per output key, values formatted."""
        rows = version_rows(info)

        assert rows[0] == ("build", "0123456")
        assert ("dirty", "false") in rows
        assert len(rows) == 18
