from __future__ import annotations

import io
from contextlib import redirect_stderr
from pathlib import Path

import pytest

from cloudterm import cli
from cloudterm.config import SEED_ENV
from cloudterm.errors import ExitCode


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv(SEED_ENV, raising=False)
    monkeypatch.setattr("cloudterm.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.toml")


def _main(tmp_path: Path, *argv: str, stdin: str = "") -> tuple[int, str]:
    stdout = io.StringIO()
    code = cli.main(
        [*argv, "--log-file", str(tmp_path / "cloudterm.log")],
        stdin=io.StringIO(stdin),
        stdout=stdout,
    )
    return code, stdout.getvalue()


def test_cli_help_includes_public_flags() -> None:
    help_text = cli.build_parser().format_help()

    for flag in ("--config", "--log-level", "--log-file", "--seed", "--command", "--script", "--no-banner"):
        assert flag in help_text


def test_commands_run_in_order(tmp_path: Path) -> None:
    code, output = _main(tmp_path, "-c", "create instance web1 compute", "-c", "instances list")

    assert code == 0
    lines = output.splitlines()
    assert lines[0] == "Instance 'web1' created successfully"
    assert lines[-1].split()[1:] == ["web1", "compute", "running"]


def test_seed_makes_ids_reproducible(tmp_path: Path) -> None:
    _, first = _main(tmp_path, "--seed", "11", "-c", "create instance a compute")
    _, second = _main(tmp_path, "--seed", "11", "-c", "create instance a compute")

    assert first == second


def test_script_file_is_executed(tmp_path: Path) -> None:
    script = tmp_path / "session.txt"
    script.write_text("whoami\n\npwd\nexit\nwhoami\n", encoding="utf-8")

    code, output = _main(tmp_path, "--script", str(script))

    assert code == 0
    assert output == "cloud-user\n/home/cloud-user\n"


def test_missing_script_reports_invalid_args(tmp_path: Path) -> None:
    stderr = io.StringIO()
    with redirect_stderr(stderr):
        code, _ = _main(tmp_path, "--script", str(tmp_path / "absent.txt"))

    assert code == int(ExitCode.INVALID_ARGS)
    assert stderr.getvalue().startswith("Error: Cannot read script")
    assert len(stderr.getvalue().splitlines()) == 1
    log_text = (tmp_path / "cloudterm.log").read_text(encoding="utf-8")
    assert "Handled CloudTermError (code=2): Cannot read script" in log_text


def test_missing_explicit_config_reports_config_error(tmp_path: Path) -> None:
    stderr = io.StringIO()
    with redirect_stderr(stderr):
        code, _ = _main(tmp_path, "--config", str(tmp_path / "absent.toml"))

    assert code == int(ExitCode.CONFIG_ERROR)
    assert "Config file not found" in stderr.getvalue()


def test_config_file_customizes_session(tmp_path: Path) -> None:
    config = tmp_path / "config.toml"
    config.write_text('username = "ops"\n', encoding="utf-8")

    _, output = _main(tmp_path, "--config", str(config), "-c", "whoami", "-c", "pwd")

    assert output == "ops\n/home/ops\n"


def test_repl_runs_when_no_commands_given(tmp_path: Path) -> None:
    code, output = _main(tmp_path, stdin="whoami\nexit\n")

    assert code == 0
    assert output.startswith("Welcome to Cloud Terminal Simulator v2.0")
    assert "~ $ cloud-user" in output


def test_no_banner_flag(tmp_path: Path) -> None:
    _, output = _main(tmp_path, "--no-banner", stdin="")

    assert output == "~ $ \n"


@pytest.mark.parametrize("level", ["DEBUG", "warning", "error"])
def test_log_level_flag_is_accepted(tmp_path: Path, level: str) -> None:
    code, _ = _main(tmp_path, "--log-level", level, "-c", "pwd")

    assert code == 0


@pytest.mark.parametrize("argv", [["--log-level", "loud"], ["--seed", "abc"], ["--unknown"]])
def test_invalid_flags_return_usage_code(tmp_path: Path, argv: list[str]) -> None:
    with redirect_stderr(io.StringIO()):
        code, _ = _main(tmp_path, *argv)

    assert code == 2


def test_unexpected_failure_points_to_log(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def explode(*args: object, **kwargs: object) -> int:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "run_cli_flow", explode)
    stderr = io.StringIO()
    with redirect_stderr(stderr):
        code, _ = _main(tmp_path, "-c", "pwd")

    assert code == int(ExitCode.RUNTIME_ERROR)
    assert "Inspect logs:" in stderr.getvalue()
