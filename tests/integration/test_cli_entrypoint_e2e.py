from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path


def _env_with_pythonpath(home: Path) -> dict[str, str]:
    env = dict(os.environ)
    existing = env.get("PYTHONPATH", "")
    src_path = str(Path("src").resolve())
    env["PYTHONPATH"] = f"{src_path}{os.pathsep}{existing}" if existing else src_path
    env["HOME"] = str(home)
    env.pop("CLOUDTERM_SEED", None)
    return env


def _run(tmp_path: Path, *argv: str, stdin: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "cloudterm", *argv, "--log-file", str(tmp_path / "ct.log")],
        input=stdin,
        capture_output=True,
        text=True,
        check=False,
        env=_env_with_pythonpath(tmp_path),
    )


def test_cli_module_reports_invalid_args_via_exit_code(tmp_path: Path) -> None:
    completed = _run(tmp_path, "--log-level", "loud")

    assert completed.returncode == 2
    assert "--log-level must be one of" in completed.stderr


def test_cli_module_runs_commands(tmp_path: Path) -> None:
    completed = _run(
        tmp_path,
        "--seed",
        "3",
        "-c",
        "create instance web1 compute",
        "-c",
        "describe instance web1",
    )

    assert completed.returncode == 0
    assert "Instance 'web1' created successfully" in completed.stdout
    assert "Region:  us-east-1" in completed.stdout


def test_cli_module_repl_session(tmp_path: Path) -> None:
    completed = _run(tmp_path, stdin="ssh-keygen\nssh-list\nexit\n")

    assert completed.returncode == 0
    assert "id_ed25519" in completed.stdout
    assert "Compute: 0 | DB: 0 | Storage: 0 | Net: 0 | Sec: 0 | SSH: 0" in completed.stdout
    assert (tmp_path / "ct.log").exists()
