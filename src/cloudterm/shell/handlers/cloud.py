"""Instance lifecycle commands."""

from __future__ import annotations

from cloudterm.errors import CommandError, ErrorKind
from cloudterm.resources import (
    INSTANCE_TYPES,
    Instance,
    InstanceStatus,
    parse_instance_type,
)
from cloudterm.shell.context import SessionContext
from cloudterm.shell.handlers.common import (
    Handler,
    expect_args,
    expect_at_most,
    format_table,
    require_subcommand,
)
from cloudterm.shell.parser import ParsedCommand

CREATE_USAGE = "create instance <name> <type>"
LIST_USAGE = "instances list"


def _instance_name(command: ParsedCommand, verb: str) -> str:
    usage = f"{verb} instance <name>"
    require_subcommand(command, ("instance",), usage)
    (name,) = expect_args(command.rest, 1, usage)
    return name


def handle_create(ctx: SessionContext, command: ParsedCommand) -> str:
    require_subcommand(command, ("instance",), CREATE_USAGE)
    name, raw_type = expect_args(command.rest, 2, CREATE_USAGE)
    instance_type = parse_instance_type(raw_type)
    if instance_type is None:
        raise CommandError(
            f"invalid type '{raw_type}' (expected one of: {', '.join(INSTANCE_TYPES)})",
            kind=ErrorKind.INVALID_ARGUMENT,
            hint=CREATE_USAGE,
        )
    if name in ctx.store.instances:
        raise CommandError(f"instance '{name}' already exists", kind=ErrorKind.DUPLICATE_NAME)

    instance = ctx.store.instances.add(
        Instance(
            id=ctx.ids.new_instance_id(),
            name=name,
            type=instance_type,
            region=ctx.config.region,
            created=ctx.clock(),
        )
    )
    return "\n".join(
        [
            f"Instance '{instance.name}' created successfully",
            f"ID: {instance.id}",
            f"Type: {instance.type.value}",
            f"Status: {instance.status.value}",
        ]
    )


def handle_instances(ctx: SessionContext, command: ParsedCommand) -> str:
    if command.args:
        require_subcommand(command, ("list",), LIST_USAGE)
        expect_at_most(command.rest, 0, LIST_USAGE)
    instances = ctx.store.instances.list()
    if not instances:
        return "No instances found."
    rows = [[item.id, item.name, item.type.value, item.status.value] for item in instances]
    return format_table(["ID", "NAME", "TYPE", "STATUS"], rows)


def _transition(ctx: SessionContext, name: str, target: InstanceStatus) -> Instance:
    instance = ctx.store.instances.require(name)
    if instance.status == target:
        raise CommandError(
            f"instance '{name}' is already {target.value}",
            kind=ErrorKind.INVALID_STATE_TRANSITION,
        )

    def _apply(item: Instance) -> None:
        item.status = target

    return ctx.store.instances.update(name, _apply)


def handle_start(ctx: SessionContext, command: ParsedCommand) -> str:
    instance = _transition(ctx, _instance_name(command, "start"), InstanceStatus.RUNNING)
    return f"Instance '{instance.name}' ({instance.id}) started"


def handle_stop(ctx: SessionContext, command: ParsedCommand) -> str:
    instance = _transition(ctx, _instance_name(command, "stop"), InstanceStatus.STOPPED)
    return f"Instance '{instance.name}' ({instance.id}) stopped"


def handle_describe(ctx: SessionContext, command: ParsedCommand) -> str:
    instance = ctx.store.instances.require(_instance_name(command, "describe"))
    fields = [
        ("ID", instance.id),
        ("Name", instance.name),
        ("Type", instance.type.value),
        ("Status", instance.status.value),
        ("Region", instance.region),
        ("Created", instance.created.isoformat(timespec="seconds")),
    ]
    return "\n".join(f"{label + ':':<9}{value}" for label, value in fields)


def handle_delete(ctx: SessionContext, command: ParsedCommand) -> str:
    instance = ctx.store.instances.remove(_instance_name(command, "delete"))
    return f"Instance '{instance.name}' ({instance.id}) deleted"


HANDLERS: dict[str, Handler] = {
    "create": handle_create,
    "instances": handle_instances,
    "start": handle_start,
    "stop": handle_stop,
    "describe": handle_describe,
    "delete": handle_delete,
}
