"""SSH key management and simulated remote connections."""

from __future__ import annotations

import re

from cloudterm.errors import CommandError, ErrorKind
from cloudterm.ids import simulated_address
from cloudterm.resources import InstanceStatus, SSHKey
from cloudterm.shell.context import SessionContext
from cloudterm.shell.handlers.common import Handler, expect_args, expect_at_most
from cloudterm.shell.parser import ParsedCommand

DEFAULT_KEY_NAME = "id_ed25519"
USER_HOST_PATTERN = re.compile(r"^[A-Za-z0-9._-]+@[A-Za-z0-9.-]+$")


def _next_key_name(ctx: SessionContext) -> str:
    if DEFAULT_KEY_NAME not in ctx.store.ssh_keys:
        return DEFAULT_KEY_NAME
    suffix = 2
    while f"{DEFAULT_KEY_NAME}_{suffix}" in ctx.store.ssh_keys:
        suffix += 1
    return f"{DEFAULT_KEY_NAME}_{suffix}"


def handle_keygen(ctx: SessionContext, command: ParsedCommand) -> str:
    args = expect_at_most(command.args, 1, "ssh-keygen [name]")
    name = args[0] if args else _next_key_name(ctx)
    if name in ctx.store.ssh_keys:
        raise CommandError(f"key '{name}' already exists", kind=ErrorKind.DUPLICATE_NAME)

    owner = f"{ctx.config.username}@{ctx.config.hostname}"
    key = ctx.store.ssh_keys.add(
        SSHKey(
            name=name,
            public_key=ctx.ids.new_public_key(ctx.config.username, hostname=ctx.config.hostname),
            fingerprint=ctx.ids.new_fingerprint(name),
            created=ctx.clock(),
        )
    )
    return "\n".join(
        [
            f"Generating public/private {key.key_type.removeprefix('ssh-')} key pair.",
            f"Your identification has been saved in ~/.ssh/{key.name}",
            f"Your public key has been saved in ~/.ssh/{key.name}.pub",
            "The key fingerprint is:",
            f"{key.fingerprint} {owner}",
            f"Public key: {key.public_key}",
        ]
    )


def handle_add(ctx: SessionContext, command: ParsedCommand) -> str:
    (name,) = expect_args(command.args, 1, "ssh-add <name>")
    key = ctx.store.ssh_keys.require(name)
    if key.loaded:
        return f"Identity already added: ~/.ssh/{key.name} ({key.fingerprint})"

    def _load(item: SSHKey) -> None:
        item.loaded = True

    ctx.store.ssh_keys.update(name, _load)
    return f"Identity added: ~/.ssh/{key.name} ({key.fingerprint})"


def handle_list(ctx: SessionContext, command: ParsedCommand) -> str:
    expect_at_most(command.args, 0, "ssh-list")
    keys = ctx.store.ssh_keys.list()
    if not keys:
        return "No SSH keys found."
    width = max(len(key.name) for key in keys)
    lines = []
    for key in keys:
        marker = "  (added)" if key.loaded else ""
        lines.append(f"{key.name:<{width}}  {key.fingerprint}{marker}")
    return "\n".join(lines)


def handle_remove(ctx: SessionContext, command: ParsedCommand) -> str:
    (name,) = expect_args(command.args, 1, "ssh-remove <name>")
    key = ctx.store.ssh_keys.remove(name)
    return f"Removed key '{key.name}' ({key.fingerprint})"


def handle_ssh(ctx: SessionContext, command: ParsedCommand) -> str:
    (target,) = expect_args(command.args, 1, "ssh <user@host>")
    if not USER_HOST_PATTERN.match(target):
        raise CommandError(
            f"invalid host syntax '{target}'",
            kind=ErrorKind.INVALID_ARGUMENT,
            hint="ssh <user@host>",
        )
    user, host = target.split("@", 1)
    instance = ctx.store.instances.get(host)
    if instance is not None and instance.status == InstanceStatus.STOPPED:
        raise CommandError(
            f"connect to host {host} port 22: Connection refused",
            kind=ErrorKind.INVALID_STATE_TRANSITION,
            hint=f"start instance {host}",
        )

    address = simulated_address(host, private=instance is not None)
    lines = [
        f"Connecting to {host} ({address}) as {user}...",
        f"Warning: Permanently added '{host}' (ED25519) to the list of known hosts.",
    ]
    loaded = ctx.store.ssh_keys.list(lambda item: item.loaded)
    if loaded:
        lines.append(f"Authenticated with key '{loaded[0].name}' ({loaded[0].fingerprint})")
    else:
        lines.append(f"Authenticated as {user} using password")
    lines.extend(
        [
            "Welcome to Ubuntu 22.04.3 LTS (GNU/Linux 5.15.0-1051-aws x86_64)",
            "",
            f"Last login: {ctx.timestamp()} from {simulated_address(ctx.config.hostname)}",
            f"{user}@{host}:~$ exit",
            f"Connection to {host} closed.",
        ]
    )
    return "\n".join(lines)


HANDLERS: dict[str, Handler] = {
    "ssh-keygen": handle_keygen,
    "ssh-add": handle_add,
    "ssh-list": handle_list,
    "ssh-remove": handle_remove,
    "ssh": handle_ssh,
}
