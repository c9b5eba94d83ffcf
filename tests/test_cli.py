from __future__ import annotations

import os
import logging
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from git import Repo

from gitversioning.__version__ import __version__
from gitversioning.cli import cli, main
from gitversioning.exceptions import DirtyWorkingTreeError
from gitversioning.utils.console import reset_console


@pytest.fixture(autouse=True)
def isolated_cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Run each command from an empty directory and restore global state."""
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    root_logger = logging.getLogger("gitversioning")
    propagate = root_logger.propagate

    with patch.dict(os.environ):
        os.environ.pop("BUILD_NUMBER", None)
        os.environ.pop("GITVERSIONING_CONFIG", None)
        reset_console()
        yield

    root_logger.handlers.clear()
    root_logger.propagate = propagate
    reset_console()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def release_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Repository on ``release/2.0`` with tag ``2.0.0`` one commit back."""
    repo = Repo.init(tmp_path / "project")
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")

    root = Path(repo.working_tree_dir)
    for content in ("one\n", "two\n"):
        (root / "app.txt").write_text(content, encoding="utf-8")
        repo.index.add(["app.txt"])
        repo.index.commit(f"Write {content.strip()}")
        if content == "one\n":
            repo.git.branch("-M", "release/2.0")
            repo.create_tag("2.0.0")

    yield root
    repo.close()


@pytest.mark.integration
class TestDisplayCommand:
    """Tests for ``gitversioning display``."""

    def test_text_output(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(cli, ["display", str(release_repo)])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[1] == "[version] branch      = release/2.0"
        assert "[version] display     = 2.0.1" in lines
        assert "[version] lastTag     = 2.0.0" in lines

    def test_properties_output(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(cli, ["display", str(release_repo), "--format", "properties"])

        assert result.exit_code == 0, result.output
        assert "VERSION_DISPLAY=2.0.1" in result.output.splitlines()
        assert "VERSION_LAST_TAG=2.0.0" in result.output.splitlines()

    def test_custom_prefix(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(cli, ["display", str(release_repo), "-f", "properties", "--prefix", "APP_"])

        assert "APP_BRANCH=release/2.0" in result.output.splitlines()

    def test_table_output(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(cli, ["display", str(release_repo), "--format", "table"])

        assert result.exit_code == 0, result.output
        assert "Version of release/2.0" in result.output
        assert "2.0.1" in result.output

    def test_not_a_repository(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a plain directory prints the notice and succeeds."""
        result = runner.invoke(cli, ["display", str(tmp_path / "cwd")])

        assert result.exit_code == 0
        assert result.output == "[version] No version can be computed from the SCM.\n"

    def test_missing_path_is_usage_error(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["display", str(tmp_path / "missing")])

        assert result.exit_code == 2

    def test_build_number_options(self, runner: CliRunner, release_repo: Path) -> None:
        """Test build-number mode can be enabled from the command line."""
        result = runner.invoke(
            cli,
            ["display", str(release_repo), "-f", "properties", "--build-number-mode", "--build-number", "77"],
        )

        assert "VERSION_DISPLAY=2.0.77" in result.output.splitlines()

    def test_build_number_from_environment(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(
            cli,
            ["display", str(release_repo), "-f", "properties", "--build-number-mode"],
            env={"BUILD_NUMBER": "5"},
        )

        assert "VERSION_DISPLAY=2.0.5" in result.output.splitlines()

    def test_dirty_release_fails_when_configured(
        self, runner: CliRunner, release_repo: Path, tmp_path: Path
    ) -> None:
        """Test a dirty release branch aborts with the configured option."""
        config = tmp_path / "gitversioning.toml"
        config.write_text("[gitversioning]\ndirty_fail_on_releases = true\n", encoding="utf-8")
        (release_repo / "app.txt").write_text("local change\n", encoding="utf-8")

        result = runner.invoke(cli, ["--config", str(config), "display", str(release_repo)])

        assert result.exit_code == 1
        assert isinstance(result.exception, DirtyWorkingTreeError)


@pytest.mark.integration
class TestFileCommand:
    """Tests for ``gitversioning file``."""

    def test_writes_default_file(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(cli, ["file", str(release_repo)])

        assert result.exit_code == 0, result.output
        target = release_repo / "build" / "version.properties"
        lines = target.read_text(encoding="utf-8").splitlines()
        assert "VERSION_DISPLAY=2.0.1" in lines
        assert "VERSION_DIRTY=false" in lines
        assert "Version 2.0.1 written to" in result.output

    def test_custom_output_and_prefix(self, runner: CliRunner, release_repo: Path, tmp_path: Path) -> None:
        target = tmp_path / "out" / "ci.env"

        result = runner.invoke(cli, ["file", str(release_repo), "-o", str(target), "--prefix", "CI_"])

        assert result.exit_code == 0, result.output
        assert "CI_DISPLAY=2.0.1" in target.read_text(encoding="utf-8").splitlines()

    def test_no_file_without_repository(self, runner: CliRunner, tmp_path: Path) -> None:
        plain = tmp_path / "cwd"

        result = runner.invoke(cli, ["file", str(plain)])

        assert result.exit_code == 0
        assert not (plain / "build").exists()
        assert "no file written" in result.output


@pytest.mark.integration
class TestShowCommand:
    """Tests for ``gitversioning show``."""

    def test_prints_display_version(self, runner: CliRunner, release_repo: Path) -> None:
        result = runner.invoke(cli, ["show", str(release_repo)])

        assert result.output == "2.0.1\n"

    def test_pep440(self, runner: CliRunner, release_repo: Path) -> None:
        """Test snapshot versions are turned into local versions."""
        config = release_repo.parent / "snapshot.toml"
        config.write_text('[gitversioning]\nrelease_mode = "snapshot"\n', encoding="utf-8")

        plain = runner.invoke(cli, ["-c", str(config), "show", str(release_repo)])
        pep440 = runner.invoke(cli, ["-c", str(config), "show", str(release_repo), "--pep440"])

        assert plain.output == "2.0.1-SNAPSHOT\n"
        assert pep440.output == "2.0.1+snapshot\n"

    def test_base_version_override(self, runner: CliRunner, release_repo: Path) -> None:
        repo = Repo(release_repo)
        repo.git.checkout("-b", "main")
        repo.close()

        result = runner.invoke(cli, ["show", str(release_repo), "--base-version", "3.1"])

        assert result.output == "3.1.0\n"


@pytest.mark.unit
class TestGroupOptions:
    """Tests for global options."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert result.output == f"gitversioning {__version__}\n"

    def test_invalid_config_exits_with_error(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "broken.toml"
        config.write_text("[gitversioning]\nprecision = 'two'\n", encoding="utf-8")

        result = runner.invoke(cli, ["--config", str(config), "show"])

        assert result.exit_code == 1
        assert "precision" in result.output

    def test_config_from_environment(self, runner: CliRunner, release_repo: Path, tmp_path: Path) -> None:
        config = tmp_path / "env.toml"
        config.write_text('[gitversioning]\nrelease_mode = "snapshot"\n', encoding="utf-8")

        result = runner.invoke(cli, ["show", str(release_repo)], env={"GITVERSIONING_CONFIG": str(config)})

        assert result.output == "2.0.1-SNAPSHOT\n"


@pytest.mark.integration
class TestMain:
    """Tests for the main() entry point."""

    def test_success(self, release_repo: Path, capsys: pytest.CaptureFixture) -> None:
        with patch("sys.argv", ["gitversioning", "show", str(release_repo)]):
            assert main() == 0

        assert capsys.readouterr().out == "2.0.1\n"

    def test_usage_error(self) -> None:
        with patch("sys.argv", ["gitversioning", "unknown-command"]):
            assert main() == 2

    def test_versioning_error_returns_one(self, release_repo: Path, tmp_path: Path) -> None:
        """Test library errors are reported instead of raised."""
        config = tmp_path / "strict.toml"
        config.write_text("[gitversioning]\ndirty_fail_on_releases = true\n", encoding="utf-8")
        (release_repo / "app.txt").write_text("local change\n", encoding="utf-8")

        with patch("sys.argv", ["gitversioning", "-c", str(config), "show", str(release_repo)]):
            assert main() == 1

    def test_keyboard_interrupt(self) -> None:
        with patch("gitversioning.cli.cli", side_effect=KeyboardInterrupt):
            assert main() == 130

    def test_unexpected_error(self) -> None:
        with patch("gitversioning.cli.cli", side_effect=RuntimeError("boom")):
            assert main() == 1
