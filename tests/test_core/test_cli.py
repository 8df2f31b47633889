"""Test CLI commands."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from batch_shell.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


class TestCLIBasic:
    """Test basic CLI functionality."""

    def test_help(self, runner: CliRunner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Batch Shell" in result.output
        assert "run" in result.output
        assert "check" in result.output

    def test_version(self, runner: CliRunner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_run_help(self, runner: CliRunner):
        result = runner.invoke(cli, ["run", "--help"])
        assert result.exit_code == 0
        assert "--parallel" in result.output
        assert "--prompt" in result.output

    def test_config_must_be_yaml(self, runner: CliRunner, tmp_path: Path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("[shell]\n")

        result = runner.invoke(cli, ["--config", str(config_file)], input="exit\n")

        assert result.exit_code == 2
        assert "YAML" in result.output

    def test_invalid_config_values(self, runner: CliRunner, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text('version: "9.9"\n')

        result = runner.invoke(cli, ["--config", str(config_file)], input="exit\n")

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestInteractiveSession:
    """Test the default interactive session."""

    def test_prompt_and_exit(self, runner: CliRunner):
        result = runner.invoke(cli, [], input="# comment\n\nexit\nnever-run\n")

        assert result.exit_code == 0
        assert result.stdout == "> > > "

    def test_end_of_input(self, runner: CliRunner):
        result = runner.invoke(cli, [], input="")

        assert result.exit_code == 0
        assert result.stdout == "> "

    def test_runs_command(self, runner: CliRunner, py_cmd):
        command = py_cmd("import sys; sys.exit(2)")

        result = runner.invoke(cli, [], input=f"{command}\nexit\n")

        assert result.exit_code == 0
        assert "Exit code: 2\n" in result.stdout
        assert result.stdout.startswith("> Running: ")

    def test_failures_do_not_change_exit_status(self, runner: CliRunner):
        result = runner.invoke(cli, ["--quiet"], input="definitely-not-a-real-program-xyz\nSERIAL\n")

        assert result.exit_code == 0
        assert "Exit code: 127" in result.stdout
        assert "Error: SERIAL requires a file path" in result.stdout

    def test_prompt_from_config(self, runner: CliRunner, sample_config: Path):
        result = runner.invoke(cli, ["--config", str(sample_config)], input="exit\n")

        assert result.exit_code == 0
        assert result.stdout == "$ "

    def test_directive_from_session(self, runner: CliRunner, write_script, py_cmd):
        write_script("jobs.txt", py_cmd("import sys; sys.exit(5)"), py_cmd("pass"))

        result = runner.invoke(cli, [], input="PARALLEL jobs.txt\nnever-run\n")

        assert result.exit_code == 0
        out = result.stdout.splitlines()
        assert out[0].startswith("> Running: ")
        assert out[1].startswith("Running: ")
        assert out[2:] == ["Exit code: 5", "Exit code: 0"]
        assert "never-run" not in result.stdout


class TestRunCommand:
    """Test the run command."""

    def test_serial(self, runner: CliRunner, write_script, py_cmd):
        script = write_script(
            "jobs.txt",
            "# first job",
            py_cmd("import sys; sys.exit(1)"),
            py_cmd("pass"),
        )

        result = runner.invoke(cli, ["run", str(script)])

        assert result.exit_code == 0
        out = result.stdout.splitlines()
        assert [line.split(":")[0] for line in out] == ["Running", "Exit code", "Running", "Exit code"]
        assert out[1] == "Exit code: 1"
        assert out[3] == "Exit code: 0"

    def test_parallel(self, runner: CliRunner, write_script, py_cmd):
        script = write_script("jobs.txt", py_cmd("import sys; sys.exit(1)"), py_cmd("pass"))

        result = runner.invoke(cli, ["run", "--parallel", str(script)])

        assert result.exit_code == 0
        out = result.stdout.splitlines()
        assert [line.split(":")[0] for line in out] == ["Running", "Running", "Exit code", "Exit code"]
        assert out[2:] == ["Exit code: 1", "Exit code: 0"]

    def test_prompt(self, runner: CliRunner, write_script):
        script = write_script("jobs.txt", "exit")

        result = runner.invoke(cli, ["run", "--prompt", "? ", str(script)])

        assert result.stdout == "? "

    def test_missing_script(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["run", str(tmp_path / "nope.txt")])
        assert result.exit_code == 2

    def test_binary_script_rejected(self, runner: CliRunner, tmp_path: Path):
        script = tmp_path / "binary.bin"
        script.write_bytes(b"\x7fELF\x00\x01")

        result = runner.invoke(cli, ["run", str(script)])

        assert result.exit_code == 2
        assert "binary" in result.output

    def test_log_file(self, runner: CliRunner, write_script, tmp_path: Path):
        script = write_script("jobs.txt", "exit")
        log_file = tmp_path / "logs" / "batch_shell.log"

        result = runner.invoke(cli, ["--log-file", str(log_file), "run", str(script)])

        assert result.exit_code == 0
        assert "Starting serial batch" in log_file.read_text()


class TestCheckCommand:
    """Test the check command."""

    def test_valid_script(self, runner: CliRunner, write_script):
        script = write_script(
            "jobs.txt",
            "# comment",
            'grep "a b" file.txt',
            "",
            "PARALLEL more.txt",
            "exit",
        )

        result = runner.invoke(cli, ["check", str(script)])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "2: execute ['grep', 'a b', 'file.txt']",
            "4: recurse parallel more.txt",
            "5: terminate",
        ]

    def test_parse_error(self, runner: CliRunner, write_script):
        script = write_script("jobs.txt", "ls", "SERIAL")

        result = runner.invoke(cli, ["check", str(script)])

        assert result.exit_code == 1
        assert "2: error SERIAL requires a file path" in result.stdout

    def test_nothing_is_run(self, runner: CliRunner, write_script, tmp_path: Path):
        marker = tmp_path / "marker"
        script = write_script("jobs.txt", f"touch {marker}")

        result = runner.invoke(cli, ["check", str(script)])

        assert result.exit_code == 0
        assert not marker.exists()

    def test_undecodable_bytes(self, runner: CliRunner, tmp_path: Path):
        script = tmp_path / "jobs.txt"
        script.write_bytes(b"ls\n\xff\xfe\nexit\n")

        result = runner.invoke(cli, ["check", str(script)])

        assert result.exit_code == 0
        assert result.stdout.splitlines()[0] == "1: execute ['ls']"
        assert result.stdout.splitlines()[-1] == "3: terminate"
