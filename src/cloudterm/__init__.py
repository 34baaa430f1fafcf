"""Cloud Terminal Simulator: an in-memory cloud CLI illusion."""

__version__ = "2.0.0"
