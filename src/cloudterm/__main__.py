"""Module entrypoint for `python -m cloudterm`."""

try:
    from .cli import run
except ImportError:
    # Executed as a plain script (no parent package).
    from cloudterm.cli import run


if __name__ == "__main__":
    raise SystemExit(run())
