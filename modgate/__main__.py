"""
Executable module for modgate.

Running ``python -m modgate`` is equivalent to running ``modgate``.
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Explain why the CLI could not be imported."""
    sys.stderr.write("modgate CLI could not be started.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from modgate.__version__ import __version__

        sys.stderr.write(f"modgate version: {__version__}\n")
    except ImportError:
        sys.stderr.write("modgate version: <unknown>\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """Entrypoint for ``python -m modgate``.

    Returns:
        Exit code returned by the CLI, or 1 if it cannot be imported.
    """
    try:
        # Import lazily so dependencies are only loaded during CLI use
        from modgate.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
