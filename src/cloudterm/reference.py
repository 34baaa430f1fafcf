"""Static reference text shown by ``help`` and the quick reference panel."""

from __future__ import annotations

from typing_extensions import TypedDict

PRODUCT_NAME = "Cloud Terminal Simulator"
PRODUCT_VERSION = "2.0"


class ReferenceSection(TypedDict):
    title: str
    entries: list[str]


QUICK_REFERENCE: tuple[ReferenceSection, ...] = (
    ReferenceSection(
        title="System",
        entries=[
            "help - Show all commands",
            "clear - Clear screen",
            "pwd - Show current directory",
            "ls - List files",
        ],
    ),
    ReferenceSection(
        title="SSH Commands",
        entries=[
            "ssh-keygen - Generate key",
            "ssh-add - Add key",
            "ssh-list - List keys",
            "ssh user@host - Connect",
        ],
    ),
    ReferenceSection(
        title="Cloud",
        entries=[
            "create instance [name] [type]",
            "instances list",
            "start/stop instance [name]",
            "describe instance [name]",
        ],
    ),
    ReferenceSection(
        title="Network",
        entries=[
            "ping [host]",
            "ifconfig",
            "netstat",
            "curl/wget [url]",
        ],
    ),
)

HELP_TEXT = """Available commands:

System:
  help                              Show this command reference
  clear                             Clear the terminal screen
  pwd                               Print the current directory
  ls [dir]                          List files
  cd [dir]                          Change directory
  echo [text...]                    Print text
  whoami                            Print the current user
  history                           Show command history

Cloud:
  create instance <name> <type>     Create an instance (compute, database, storage, network, security)
  instances list                    List all instances
  start instance <name>             Start a stopped instance
  stop instance <name>              Stop a running instance
  describe instance <name>          Show instance details
  delete instance <name>            Delete an instance

SSH:
  ssh-keygen [name]                 Generate a new SSH key pair
  ssh-add <name>                    Add a key to the SSH agent
  ssh-list                          List SSH keys
  ssh-remove <name>                 Remove an SSH key
  ssh <user@host>                   Connect to a remote host

Network:
  ping [-c count] <host>            Send ICMP echo requests
  ifconfig                          Show network interfaces
  netstat                           Show network connections
  curl <url>                        Fetch a URL
  wget <url>                        Download a URL

Git:
  git clone <url> [name]            Clone a repository
  git repos                         List cloned repositories"""


def welcome_lines() -> list[str]:
    return [
        f"Welcome to {PRODUCT_NAME} v{PRODUCT_VERSION}",
        "Type 'help' to see available commands",
    ]


def quick_reference_text() -> str:
    blocks: list[str] = []
    for section in QUICK_REFERENCE:
        lines = [section["title"]]
        lines.extend(f"  • {entry}" for entry in section["entries"])
        blocks.append("\n".join(lines))
    return "Quick Reference\n\n" + "\n\n".join(blocks)
