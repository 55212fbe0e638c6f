"""End-to-end tests for the bumpall commands with a fake npm."""

import json

import pytest
from click.testing import CliRunner

from bumpall.cli import cli
from bumpall.utils.constants import NPM
from bumpall.utils.exit_codes import ExitCodes

OUTDATED = "\n".join(
    [
        "/x/my_app/node_modules/react:react@18.3.1:react@18.2.0:react@19.0.0:my_app",
        "/x/my_app/node_modules/@babel/core:@babel/core@7.25.2:@babel/core@7.24.0:@babel/core@7.25.2:my_app",
        "/x/my_app/node_modules/vite:vite@5.4.0:vite@5.1.0:vite@6.0.0:web",
    ]
) + "\n"


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


class TestBump:

    def test_installs_wanted_versions(self, runner, project_dir, fake_npm):
        fake_npm.outdated_stdout = OUTDATED
        result = runner.invoke(cli, ["bump"])

        assert result.exit_code == 0, result.output
        assert "Updates required" in result.output
        assert "react 18.2.0 -> 18.3.1" in result.output
        assert "All packages bumped" in result.output
        assert fake_npm.install_calls == [[NPM, "i", "react@18.3.1", "@babel/core@7.25.2"]]

    def test_latest_with_legacy_peer_deps(self, runner, project_dir, fake_npm):
        fake_npm.outdated_stdout = OUTDATED
        result = runner.invoke(cli, ["bump", "--latest", "--legacy-peer-deps"])

        assert result.exit_code == 0, result.output
        assert fake_npm.install_calls == [
            [NPM, "i", "react@19.0.0", "@babel/core@7.25.2", "--legacy-peer-deps"]
        ]

    def test_dry_run_does_not_install(self, runner, project_dir, fake_npm):
        fake_npm.outdated_stdout = OUTDATED
        result = runner.invoke(cli, ["bump", "--dry-run"])

        assert result.exit_code == 0
        assert "Dry run, exiting..." in result.output
        assert fake_npm.install_calls == []

    def test_include_glob(self, runner, project_dir, fake_npm):
        fake_npm.outdated_stdout = OUTDATED
        result = runner.invoke(cli, ["bump", "-i", "@babel/*"])

        assert result.exit_code == 0
        assert fake_npm.install_calls == [[NPM, "i", "@babel/core@7.25.2"]]

    def test_nothing_to_do(self, runner, project_dir, fake_npm):
        fake_npm.outdated_stdout = ""
        result = runner.invoke(cli, ["bump"])

        assert result.exit_code == ExitCodes.SUCCESS
        assert "No outdated packages found" in result.output
        assert fake_npm.install_calls == []

    def test_json_report(self, runner, project_dir, fake_npm):
        fake_npm.outdated_stdout = json.dumps(
            {"react": {"current": "18.2.0", "wanted": "18.3.1", "latest": "19.0.0", "dependent": "my_app"}}
        )
        result = runner.invoke(cli, ["bump", "--json"])

        assert result.exit_code == 0, result.output
        assert fake_npm.calls[0] == [NPM, "outdated", "--json"]
        assert fake_npm.install_calls == [[NPM, "i", "react@18.3.1"]]

    def test_install_failure(self, runner, project_dir, fake_npm):
        fake_npm.outdated_stdout = OUTDATED
        fake_npm.install_returncode = 1
        result = runner.invoke(cli, ["bump"])

        assert result.exit_code == ExitCodes.INSTALL_FAILED
        assert "Issue installing packages" in result.output

    def test_npm_not_found(self, runner, project_dir, fake_npm):
        fake_npm.raise_on_run = FileNotFoundError("npm")
        result = runner.invoke(cli, ["bump"])

        assert result.exit_code == ExitCodes.NPM_FAILURE
        assert "not found" in result.output


    def test_patch_mode_restore_failure(self, runner, project_dir, fake_npm):
        fake_npm.outdated_stdout = OUTDATED
        fake_npm.on_outdated = lambda cwd: (cwd / "package.json.bkup").unlink()
        result = runner.invoke(cli, ["bump", "--patch"])

        assert result.exit_code == ExitCodes.NPM_FAILURE
        assert "Could not restore" in result.output
        assert fake_npm.install_calls == []


class TestReport:

    def test_report_from_stdin(self, runner, project_dir, fake_npm):
        result = runner.invoke(cli, ["report"], input=OUTDATED)

        assert result.exit_code == 0, result.output
        assert "react" in result.output
        assert "workspace" in result.output
        assert "2 of 3 packages would be bumped" in result.output
        assert fake_npm.calls == []

    def test_report_from_file_with_project_dir(self, runner, tmp_path, fake_npm):
        report = tmp_path / "outdated.txt"
        report.write_text(OUTDATED, encoding="utf-8")
        result = runner.invoke(cli, ["report", "--project-dir", "web", str(report)])

        assert result.exit_code == 0, result.output
        assert "1 of 3 packages would be bumped" in result.output

    def test_empty_report(self, runner, project_dir):
        result = runner.invoke(cli, ["report"], input="npm ERR! code E404\n")

        assert result.exit_code == 0
        assert "No entries found in report" in result.output


def test_help_lists_commands(runner):
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "bump" in result.output
    assert "report" in result.output


def test_help_is_ascii(runner):
    for args in (["--help"], ["bump", "--help"], ["report", "--help"]):
        result = runner.invoke(cli, args)
        assert result.exit_code == 0
        result.output.encode("ascii")
