# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from click.testing import CliRunner

from lljob_lib import __version__, cli


def test_cli_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_cli_without_command_prints_help():
    runner = CliRunner()
    result = runner.invoke(cli, [])

    assert result.exit_code == 0
    assert "render" in result.output
    assert "inspect" in result.output


def test_cli_render_help():
    runner = CliRunner()
    result = runner.invoke(cli, ["render", "-h"])

    assert result.exit_code == 0
    assert "--notify-user" in result.output
    assert "--bg-size" in result.output


def test_cli_render_and_inspect(tmp_path):
    script = tmp_path / "job.ll"

    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "render",
            "-n",
            "sc_openmp",
            "--walltime",
            "30m",
            "--notify-user",
            "a@b.com",
            "-e",
            "./sc_openmp",
            "-o",
            str(script),
        ],
    )
    assert result.exit_code == 0
    assert "# @ wall_clock_limit = 00:30:00" in script.read_text()

    result = runner.invoke(cli, ["inspect", str(script), "--check"])
    assert result.exit_code == 0
