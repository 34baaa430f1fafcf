from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from cloudterm.config import SEED_ENV, AppConfig, load_config, save_config
from cloudterm.errors import CloudTermError, ExitCode


@pytest.fixture(autouse=True)
def _clear_seed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(SEED_ENV, raising=False)


def test_load_defaults_when_config_missing(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "config.toml")

    assert cfg.username == "cloud-user"
    assert cfg.hostname == "cloud-terminal"
    assert cfg.prompt_path == "~"
    assert cfg.region == "us-east-1"
    assert cfg.clone_delay_ticks == 1
    assert cfg.seed is None
    assert cfg.log_level == "WARN"
    assert cfg.home_path == "/home/cloud-user"


def test_config_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.toml"
    original = AppConfig(
        username="ops",
        hostname="bastion-1",
        region="eu-west-2",
        timestamp_format="%Y-%m-%d %H:%M",
        clone_delay_ticks=3,
        seed=42,
        log_level="debug",
    )

    save_config(original, path)
    loaded = load_config(path)

    assert loaded == original
    assert loaded.log_level == "DEBUG"
    assert "seed = 42" in path.read_text(encoding="utf-8")


def test_save_omits_unset_seed(tmp_path: Path) -> None:
    path = save_config(AppConfig(), tmp_path / "config.toml")

    assert "seed" not in path.read_text(encoding="utf-8")


def test_env_seed_overrides_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.toml"
    path.write_text("seed = 5\n", encoding="utf-8")
    monkeypatch.setenv(SEED_ENV, "99")

    assert load_config(path).seed == 99


def test_non_integer_env_seed_is_ignored(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(SEED_ENV, "abc")

    assert load_config(tmp_path / "config.toml").seed is None


def test_corrupt_toml_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("not = [valid", encoding="utf-8")

    assert load_config(path) == AppConfig()


def test_strict_mode_reports_missing_and_corrupt_files(tmp_path: Path) -> None:
    with pytest.raises(CloudTermError) as missing:
        load_config(tmp_path / "absent.toml", strict=True)
    assert missing.value.code == ExitCode.CONFIG_ERROR

    path = tmp_path / "config.toml"
    path.write_text("not = [valid", encoding="utf-8")
    with pytest.raises(CloudTermError) as corrupt:
        load_config(path, strict=True)
    assert corrupt.value.code == ExitCode.CONFIG_ERROR


def test_invalid_fields_fall_back_individually(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "\n".join(
            [
                'username = "bad user"',
                'hostname = "edge-01"',
                "clone_delay_ticks = 99",
                "seed = true",
                'timestamp_format = "plain"',
                'log_level = "verbose"',
                'unknown_key = "ignored"',
            ]
        )
        + "\n",
        encoding="utf-8",
    )

    loaded = load_config(path)

    assert loaded.username == "cloud-user"
    assert loaded.hostname == "edge-01"
    assert loaded.clone_delay_ticks == 1
    assert loaded.seed is None
    assert loaded.timestamp_format == "%H:%M:%S"
    assert loaded.log_level == "WARN"


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("username", ""),
        ("hostname", "host name"),
        ("prompt_path", "~/my dir"),
        ("clone_delay_ticks", -1),
        ("log_level", "TRACE"),
    ],
)
def test_assignment_is_validated(field: str, value: object) -> None:
    cfg = AppConfig()

    with pytest.raises(ValidationError):
        setattr(cfg, field, value)


def test_warning_alias_is_normalized() -> None:
    assert AppConfig(log_level="warning").log_level == "WARN"
