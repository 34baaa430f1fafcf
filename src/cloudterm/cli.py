"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from .config import AppConfig, load_config
from .errors import CloudTermError, ExitCode, user_facing_error
from .logging import LOG_LEVELS, configure_logging, default_log_path, normalize_level
from .shell import Dispatcher, SessionContext
from .terminal import TerminalShell, run_lines, run_repl

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


def _log_level_type(value: str) -> str:
    if value.strip().upper() not in LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalize_level(value)


def _seed_type(value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--seed must be an integer") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cloudterm",
        description="Simulated cloud provider terminal.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config.toml")
    parser.add_argument("--log-level", type=_log_level_type, default=None)
    parser.add_argument("--log-file", type=Path, default=None)
    parser.add_argument("--seed", type=_seed_type, default=None, help="Seed for reproducible ids")
    parser.add_argument(
        "-c",
        "--command",
        dest="commands",
        action="append",
        default=[],
        metavar="LINE",
        help="Run a command line non-interactively (repeatable)",
    )
    parser.add_argument("--script", type=Path, default=None, help="Run command lines from a file")
    parser.add_argument("--no-banner", action="store_true", help="Skip the welcome banner")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def resolve_config(namespace: argparse.Namespace) -> AppConfig:
    config = load_config(namespace.config, strict=namespace.config is not None)
    try:
        if namespace.seed is not None:
            config.seed = namespace.seed
        if namespace.log_level is not None:
            config.log_level = namespace.log_level
    except ValidationError as exc:
        raise CloudTermError(
            "Invalid command-line override",
            code=ExitCode.INVALID_ARGS,
            hint=str(exc),
        ) from exc
    return config


def read_script(path: Path) -> list[str]:
    try:
        return path.expanduser().read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise CloudTermError(
            f"Cannot read script: {path}",
            code=ExitCode.INVALID_ARGS,
            hint=exc.strerror or "Check the --script path.",
        ) from exc
    except UnicodeDecodeError as exc:
        raise CloudTermError(
            f"Script is not valid UTF-8: {path}",
            code=ExitCode.INVALID_ARGS,
            hint="Save the script as UTF-8 text.",
        ) from exc


def build_shell(config: AppConfig) -> TerminalShell:
    return TerminalShell(Dispatcher(SessionContext.from_config(config)))


def run_cli_flow(
    namespace: argparse.Namespace,
    config: AppConfig,
    *,
    stdin: TextIO,
    stdout: TextIO,
) -> int:
    shell = build_shell(config)
    lines: list[str] = list(namespace.commands)
    if namespace.script is not None:
        lines.extend(read_script(namespace.script))
    if lines:
        run_lines(shell, lines, stdout)
        return int(ExitCode.SUCCESS)
    run_repl(shell, stdin, stdout, banner=not namespace.no_banner)
    return int(ExitCode.SUCCESS)


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    log_path = default_log_path()
    logger = configure_logging("WARN")
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    try:
        config = resolve_config(namespace)
        logger = configure_logging(level=config.log_level, log_file=log_path)
        logger.debug("Starting session seed=%s", config.seed)
        return run_cli_flow(
            namespace,
            config,
            stdin=stdin or sys.stdin,
            stdout=stdout or sys.stdout,
        )
    except CloudTermError as exc:
        # the console shows only the user-facing line printed below
        logger.debug(
            "Handled CloudTermError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=True,
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except KeyboardInterrupt:
        return int(ExitCode.SUCCESS)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        hint = f"Inspect logs: {log_path}"
        print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
