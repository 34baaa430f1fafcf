"""Shell built-ins: help, clear, navigation and echo."""

from __future__ import annotations

from cloudterm.errors import CommandError, ErrorKind
from cloudterm.reference import HELP_TEXT
from cloudterm.resources import RepoStatus
from cloudterm.shell.context import SessionContext
from cloudterm.shell.handlers.common import Handler, expect_args, expect_at_most
from cloudterm.shell.parser import ParsedCommand

HOME_DIRECTORIES: dict[str, list[str]] = {
    "documents": ["architecture.md", "runbook.md"],
    "projects": ["terraform/", "scripts/"],
}
HOME_FILES = ["README.md", "cloud-config.yaml"]
REPO_FILES = [".git/", ".gitignore", "README.md", "src/"]


def _cloned_repos(ctx: SessionContext) -> list[str]:
    return [repo.name for repo in ctx.store.repos.list(lambda item: item.status == RepoStatus.CLONED)]


def _child_entries(ctx: SessionContext, name: str) -> list[str] | None:
    if name in HOME_DIRECTORIES:
        return HOME_DIRECTORIES[name]
    if name in _cloned_repos(ctx):
        return REPO_FILES
    return None


def _normalize_target(raw: str) -> str:
    target = raw.rstrip("/") or "/"
    if target.startswith("~/"):
        target = target[2:]
    return target


def handle_help(ctx: SessionContext, command: ParsedCommand) -> str:
    expect_at_most(command.args, 0, "help")
    return HELP_TEXT


def handle_clear(ctx: SessionContext, command: ParsedCommand) -> str:
    expect_at_most(command.args, 0, "clear")
    ctx.log.clear()
    return ""


def handle_pwd(ctx: SessionContext, command: ParsedCommand) -> str:
    expect_at_most(command.args, 0, "pwd")
    return ctx.absolute_cwd()


def handle_ls(ctx: SessionContext, command: ParsedCommand) -> str:
    paths = [item for item in command.args if not item.startswith("-")]
    expect_at_most(paths, 1, "ls [dir]")

    at_home = ctx.cwd == ctx.config.prompt_path
    if not paths or paths[0] in {".", "./"}:
        if at_home:
            entries = [f"{name}/" for name in HOME_DIRECTORIES] + HOME_FILES
            entries += [f"{name}/" for name in _cloned_repos(ctx)]
            return "  ".join(entries)
        children = _child_entries(ctx, ctx.cwd.rsplit("/", 1)[-1])
        return "  ".join(children or [])

    target = _normalize_target(paths[0])
    children = _child_entries(ctx, target) if at_home or paths[0].startswith("~/") else None
    if children is None:
        raise CommandError(
            f"cannot access '{paths[0]}': No such file or directory",
            kind=ErrorKind.NOT_FOUND,
        )
    return "  ".join(children)


def handle_cd(ctx: SessionContext, command: ParsedCommand) -> str:
    args = expect_at_most(command.args, 1, "cd [dir]")
    home = ctx.config.prompt_path
    if not args or args[0] in {"~", "..", "~/"}:
        ctx.cwd = home
        return ""
    if args[0] in {".", "./"}:
        return ""

    target = _normalize_target(args[0])
    from_home = ctx.cwd == home or args[0].startswith("~/")
    if from_home and _child_entries(ctx, target) is not None:
        ctx.cwd = f"{home.rstrip('/')}/{target}"
        return ""
    raise CommandError(f"{args[0]}: No such file or directory", kind=ErrorKind.NOT_FOUND)


def handle_echo(ctx: SessionContext, command: ParsedCommand) -> str:
    return " ".join(command.args)


def handle_whoami(ctx: SessionContext, command: ParsedCommand) -> str:
    expect_args(command.args, 0, "whoami")
    return ctx.config.username


def handle_history(ctx: SessionContext, command: ParsedCommand) -> str:
    expect_at_most(command.args, 0, "history")
    inputs = [record.input for record in ctx.log.all()] + [command.raw]
    width = len(str(len(inputs)))
    return "\n".join(f"  {index:>{width}}  {line}" for index, line in enumerate(inputs, start=1))


HANDLERS: dict[str, Handler] = {
    "help": handle_help,
    "clear": handle_clear,
    "pwd": handle_pwd,
    "ls": handle_ls,
    "cd": handle_cd,
    "echo": handle_echo,
    "whoami": handle_whoami,
    "history": handle_history,
}
