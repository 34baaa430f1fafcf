"""Simulated network diagnostics and HTTP clients."""

from __future__ import annotations

import statistics
import urllib.parse

from cloudterm.errors import CommandError, ErrorKind, usage_error
from cloudterm.ids import simulated_address
from cloudterm.resources import InstanceStatus, InstanceType
from cloudterm.shell.context import SessionContext
from cloudterm.shell.handlers.common import Handler, expect_args, expect_at_most
from cloudterm.shell.parser import ParsedCommand

PING_USAGE = "ping [-c count] <host>"
DEFAULT_PING_COUNT = 4
MAX_PING_COUNT = 10
SERVICE_PORTS: dict[InstanceType, int] = {
    InstanceType.COMPUTE: 22,
    InstanceType.DATABASE: 5432,
    InstanceType.STORAGE: 443,
    InstanceType.NETWORK: 80,
    InstanceType.SECURITY: 8443,
}


def _parse_ping_args(args: tuple[str, ...]) -> tuple[int, str]:
    count = DEFAULT_PING_COUNT
    remaining = list(args)
    if remaining and remaining[0] == "-c":
        if len(remaining) < 2:
            raise usage_error(PING_USAGE)
        raw_count = remaining[1]
        valid = raw_count.isascii() and raw_count.isdigit()
        if not valid or not 1 <= int(raw_count) <= MAX_PING_COUNT:
            raise CommandError(
                f"invalid count '{raw_count}' (expected 1-{MAX_PING_COUNT})",
                kind=ErrorKind.INVALID_ARGUMENT,
                hint=PING_USAGE,
            )
        count = int(raw_count)
        remaining = remaining[2:]
    (host,) = expect_args(remaining, 1, PING_USAGE)
    return count, host


def handle_ping(ctx: SessionContext, command: ParsedCommand) -> str:
    count, host = _parse_ping_args(command.args)
    instance = ctx.store.instances.get(host)
    address = simulated_address(host, private=instance is not None)
    lines = [f"PING {host} ({address}) 56(84) bytes of data."]

    if instance is not None and instance.status == InstanceStatus.STOPPED:
        gateway = simulated_address(ctx.config.hostname)
        lines.extend(
            f"From {gateway} icmp_seq={seq} Destination Host Unreachable"
            for seq in range(1, count + 1)
        )
        lines.extend(
            [
                "",
                f"--- {host} ping statistics ---",
                f"{count} packets transmitted, 0 received, 100% packet loss, time {(count - 1) * 1000}ms",
            ]
        )
        return "\n".join(lines)

    latencies = [ctx.ids.latency_ms() for _ in range(count)]
    lines.extend(
        f"64 bytes from {host} ({address}): icmp_seq={seq} ttl=64 time={latency:.3f} ms"
        for seq, latency in enumerate(latencies, start=1)
    )
    summary = "/".join(
        f"{value:.3f}"
        for value in (
            min(latencies),
            statistics.fmean(latencies),
            max(latencies),
            statistics.pstdev(latencies),
        )
    )
    lines.extend(
        [
            "",
            f"--- {host} ping statistics ---",
            f"{count} packets transmitted, {count} received, 0% packet loss, time {(count - 1) * 1000}ms",
            f"rtt min/avg/max/mdev = {summary} ms",
        ]
    )
    return "\n".join(lines)


def handle_ifconfig(ctx: SessionContext, command: ParsedCommand) -> str:
    expect_at_most(command.args, 0, "ifconfig")
    address = simulated_address(ctx.config.hostname)
    netmask_prefix = address.rsplit(".", 1)[0]
    return "\n".join(
        [
            "eth0: flags=4163<UP,BROADCAST,RUNNING,MULTICAST>  mtu 9001",
            f"        inet {address}  netmask 255.255.255.0  broadcast {netmask_prefix}.255",
            "        ether 0a:1b:2c:3d:4e:5f  txqueuelen 1000  (Ethernet)",
            "        RX packets 184230  bytes 201442115 (201.4 MB)",
            "        TX packets 96112  bytes 12871203 (12.8 MB)",
            "",
            "lo: flags=73<UP,LOOPBACK,RUNNING>  mtu 65536",
            "        inet 127.0.0.1  netmask 255.0.0.0",
            "        loop  txqueuelen 1000  (Local Loopback)",
        ]
    )


def handle_netstat(ctx: SessionContext, command: ParsedCommand) -> str:
    expect_at_most(command.args, 0, "netstat")
    local = simulated_address(ctx.config.hostname)
    rows = [
        ("tcp", "0.0.0.0:22", "0.0.0.0:*", "LISTEN"),
        ("tcp", f"{local}:22", "203.0.113.7:51234", "ESTABLISHED"),
    ]
    running = ctx.store.instances.list(lambda item: item.status == InstanceStatus.RUNNING)
    for offset, instance in enumerate(running):
        port = SERVICE_PORTS[instance.type]
        rows.append(
            (
                "tcp",
                f"{local}:{40000 + offset}",
                f"{simulated_address(instance.name)}:{port}",
                "ESTABLISHED",
            )
        )
    lines = [
        "Active Internet connections (servers and established)",
        f"{'Proto':<6}{'Recv-Q':>7}{'Send-Q':>7} {'Local Address':<23}{'Foreign Address':<23}State",
    ]
    lines.extend(
        f"{proto:<6}{0:>7}{0:>7} {local_addr:<23}{foreign:<23}{state}"
        for proto, local_addr, foreign, state in rows
    )
    return "\n".join(lines)


def _parse_url(command: ParsedCommand) -> urllib.parse.SplitResult:
    (raw_url,) = expect_args(command.args, 1, f"{command.word} <url>")
    url = raw_url if "://" in raw_url else f"http://{raw_url}"
    invalid = CommandError(
        f"invalid URL '{raw_url}'",
        kind=ErrorKind.INVALID_ARGUMENT,
        hint=f"{command.word} <url>",
    )
    try:
        parsed = urllib.parse.urlsplit(url)
        port = parsed.port
    except ValueError as exc:
        raise invalid from exc
    if parsed.scheme not in {"http", "https"} or not parsed.hostname or port == 0:
        raise invalid
    return parsed


def _page(host: str, path: str) -> str:
    return "\n".join(
        [
            "<!DOCTYPE html>",
            "<html>",
            f"<head><title>{host}</title></head>",
            "<body>",
            f"<h1>Welcome to {host}</h1>",
            f"<p>Simulated response for {path}</p>",
            "</body>",
            "</html>",
        ]
    )


def handle_curl(ctx: SessionContext, command: ParsedCommand) -> str:
    parsed = _parse_url(command)
    return _page(parsed.hostname or "", parsed.path or "/")


def handle_wget(ctx: SessionContext, command: ParsedCommand) -> str:
    parsed = _parse_url(command)
    host = parsed.hostname or ""
    body = _page(host, parsed.path or "/")
    size = len(body.encode("utf-8"))
    filename = parsed.path.rstrip("/").rsplit("/", 1)[-1] or "index.html"
    port = parsed.port or (443 if parsed.scheme == "https" else 80)
    address = simulated_address(host, private=False)
    stamp = ctx.clock().astimezone().strftime("%Y-%m-%d %H:%M:%S")
    return "\n".join(
        [
            f"--{stamp}--  {parsed.geturl()}",
            f"Resolving {host} ({host})... {address}",
            f"Connecting to {host} ({host})|{address}|:{port}... connected.",
            "HTTP request sent, awaiting response... 200 OK",
            f"Length: {size} [text/html]",
            f"Saving to: '{filename}'",
            "",
            f"{filename:<20}100%[===================>]{size:>8}  --.-KB/s    in 0s",
            "",
            f"{stamp} - '{filename}' saved [{size}/{size}]",
        ]
    )


HANDLERS: dict[str, Handler] = {
    "ping": handle_ping,
    "ifconfig": handle_ifconfig,
    "netstat": handle_netstat,
    "curl": handle_curl,
    "wget": handle_wget,
}
