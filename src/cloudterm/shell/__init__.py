"""Command interpreter package."""

from .context import SessionContext
from .dispatcher import Dispatcher
from .parser import ParsedCommand, parse_line

__all__ = ["Dispatcher", "ParsedCommand", "SessionContext", "parse_line"]
