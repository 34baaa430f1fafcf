"""Simulated ``git clone`` with a delayed transition out of ``cloning``."""

from __future__ import annotations

import logging as py_logging
import re
import urllib.parse

from cloudterm.errors import CommandError, ErrorKind, usage_error
from cloudterm.resources import GitRepo, RepoStatus
from cloudterm.shell.context import SessionContext
from cloudterm.shell.handlers.common import (
    Handler,
    expect_at_most,
    format_table,
    require_subcommand,
)
from cloudterm.shell.handlers.system import HOME_DIRECTORIES, HOME_FILES
from cloudterm.shell.parser import ParsedCommand

logger = py_logging.getLogger(__name__)

GIT_USAGE = "git clone <url> [name] | git repos"
CLONE_USAGE = "git clone <url> [name]"
REPO_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
SCP_URL_PATTERN = re.compile(r"^[A-Za-z0-9._-]+@[A-Za-z0-9.-]+:(?P<path>[A-Za-z0-9._/-]+)$")
_URL_SCHEMES = {"http", "https", "ssh", "git"}


def repo_path_from_url(url: str) -> str | None:
    """Return the repository path of a clone URL, or ``None`` when malformed."""
    scp = SCP_URL_PATTERN.match(url)
    if scp:
        return scp.group("path")
    try:
        parsed = urllib.parse.urlsplit(url)
    except ValueError:
        return None
    if parsed.scheme not in _URL_SCHEMES or not parsed.hostname:
        return None
    path = parsed.path.strip("/")
    return path or None


def repo_name_from_path(path: str) -> str:
    name = path.rstrip("/").rsplit("/", 1)[-1]
    return name.removesuffix(".git")


def _valid_repo_name(name: str) -> bool:
    return bool(name) and name not in {".", ".."} and bool(REPO_NAME_PATTERN.match(name))


def _finish_clone(ctx: SessionContext, name: str) -> None:
    repo = ctx.store.repos.get(name)
    if repo is None or repo.settled:
        return

    def _mark_cloned(item: GitRepo) -> None:
        item.status = RepoStatus.CLONED

    ctx.store.repos.update(name, _mark_cloned)


def _transition_key(name: str) -> str:
    return f"repo:{name}"


def handle_clone(ctx: SessionContext, args: tuple[str, ...]) -> str:
    if not args:
        raise usage_error(CLONE_USAGE)
    url, *rest = expect_at_most(args, 2, CLONE_USAGE)
    repo_path = repo_path_from_url(url)
    name = rest[0] if rest else repo_name_from_path(repo_path or url)
    if not _valid_repo_name(name):
        raise CommandError(
            f"cannot derive a repository name from '{url}'",
            kind=ErrorKind.INVALID_ARGUMENT,
            hint=CLONE_USAGE,
        )

    existing = ctx.store.repos.get(name)
    if name in HOME_DIRECTORIES or name in HOME_FILES or (
        existing is not None and existing.status != RepoStatus.ERROR
    ):
        raise CommandError(
            f"destination path '{name}' already exists",
            kind=ErrorKind.DUPLICATE_NAME,
        )
    if existing is not None:
        # failed clones leave nothing on disk, so the name may be retried
        ctx.store.repos.remove(name)

    if repo_path is None:
        reason = f"repository '{url}' is not a valid git URL"
        ctx.store.repos.add(GitRepo(name=name, url=url, status=RepoStatus.ERROR, error=reason))
        logger.info("clone failed name=%s reason=%s", name, reason)
        return f"Cloning into '{name}'...\nfatal: {reason}"

    ctx.store.repos.add(GitRepo(name=name, url=url))
    objects = ctx.ids.randint(40, 400)
    ctx.scheduler.schedule(
        _transition_key(name),
        ctx.config.clone_delay_ticks,
        lambda: _finish_clone(ctx, name),
    )
    lines = [
        f"Cloning into '{name}'...",
        f"remote: Enumerating objects: {objects}, done.",
        f"remote: Total {objects} (delta {objects // 3}), reused {objects // 2} (delta {objects // 5})",
    ]
    if ctx.store.repos.require(name).settled:
        lines.append(f"Receiving objects: 100% ({objects}/{objects}), done.")
    else:
        lines.append(f"Receiving objects: in progress ({objects} objects)")
    return "\n".join(lines)


def handle_repos(ctx: SessionContext, args: tuple[str, ...]) -> str:
    expect_at_most(args, 0, "git repos")
    repos = ctx.store.repos.list()
    if not repos:
        return "No repositories found."
    rows = []
    for repo in repos:
        status = repo.status.value
        if repo.status == RepoStatus.ERROR and repo.error:
            status = f"{status}: {repo.error}"
        rows.append([repo.name, repo.url, status])
    return format_table(["NAME", "URL", "STATUS"], rows)


def handle_git(ctx: SessionContext, command: ParsedCommand) -> str:
    subcommand = require_subcommand(command, ("clone", "repos"), GIT_USAGE)
    if subcommand == "clone":
        return handle_clone(ctx, command.rest)
    return handle_repos(ctx, command.rest)


HANDLERS: dict[str, Handler] = {
    "git": handle_git,
}
