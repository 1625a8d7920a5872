"""Check command implementation for modgate.

Loads every mod manifest from a mods directory, validates requirements and
conflicts, and prints either the resulting load order or every problem
that prevents one.

The command orchestrates two components:

1. **ModDefinitionLoader**: reads ``<mod>/Definition.json`` manifests into
   :class:`~modgate.models.descriptor.ModDescriptor` objects, skipping broken
   ones.
2. **ModResolver**: validates the set and computes the dependency-first
   load order, all-or-nothing.

Typical usage::

    # Check the Mods directory under the current working directory
    $ modgate check

    # Check another directory and emit JSON
    $ modgate check path/to/Mods --format json
"""

from __future__ import annotations

import sys
import json
from pathlib import Path
from typing import List, Optional, Sequence

import click

from modgate.config import ModGateConfig
from modgate.exceptions import ModGateError
from modgate.models.descriptor import ModDescriptor
from modgate.context import pass_context, ModGateContext
from modgate.core import ModDefinitionLoader, ModResolver, ResolutionResult
from modgate.utils import (
    get_logger,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
)

logger = get_logger("commands.check")


@click.command()
@click.argument(
    "mods_dir",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option(
    "--definition-file",
    "-d",
    default=None,
    help="Manifest file name inside each mod directory.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "simple", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def check(
    ctx: ModGateContext,
    mods_dir: Optional[Path],
    definition_file: Optional[str],
    format: str,
) -> None:
    """Validate mods and print their load order.

    MODS_DIR defaults to the ``mods_dir`` configuration option
    (``Mods`` unless configured).

    Exits 0 when every mod can be loaded, 1 when any requirement,
    conflict or cycle problem was found or an error occurred.
    """
    config = ctx.config or ModGateConfig()
    directory = mods_dir or Path(config.mods_dir)
    manifest_name = definition_file or config.definition_file

    try:
        is_valid = _run_check(ctx, directory, manifest_name, format.lower())
    except ModGateError as e:
        print_error(f"{e}")
        sys.exit(1)

    sys.exit(0 if is_valid else 1)


def _run_check(
    ctx: ModGateContext,
    directory: Path,
    definition_file: str,
    format: str,
) -> bool:
    """Load, resolve and render; return True if the mod set is loadable."""
    # JSON output must stay parseable, so it never gets a summary line
    show_progress = format != "json" and (format == "table" or ctx.verbose > 0)

    logger.info("Checking mods in %s...", directory)
    loader = ModDefinitionLoader(directory, definition_file)
    descriptors = loader.load()

    if format != "json":
        for issue in loader.issues:
            print_warning(issue)

    result = ModResolver().resolve(descriptors)

    if format == "json":
        _display_json(result, loader.issues)
    elif not descriptors:
        print_warning(f"No mods found in {directory}")
    elif not result.is_valid:
        _display_errors(result)
    elif format == "table":
        _display_table(result.ordered)
    else:
        _display_simple(result.ordered)

    if show_progress and descriptors:
        if result.is_valid:
            print_success(f"\n{len(result.ordered)} mod(s) ready to load")
        else:
            print_error(
                f"\n{len(result.errors)} problem(s) found; no mods will be loaded"
            )

    return result.is_valid


def _display_table(ordered: Sequence[ModDescriptor]) -> None:
    """Render the load order as a Rich table."""
    rows = [
        {
            "#": position,
            "Mod": mod.identifier,
            "Name": mod.display_name,
            "Version": str(mod.version),
            "Requires": ", ".join(mod.requires) or "-",
        }
        for position, mod in enumerate(ordered, start=1)
    ]
    print_table(
        rows,
        title="Load Order",
        column_styles={
            "#": {"justify": "right", "style": "dim"},
            "Mod": {"style": "highlight", "no_wrap": True},
            "Version": {"justify": "right"},
        },
    )


def _display_simple(ordered: Sequence[ModDescriptor]) -> None:
    """Render the load order one mod per line.

    Example::

        1. Core 1.0.0
        2. Maps 2.1 (requires: Core)
    """
    console = get_raw_console()
    for position, mod in enumerate(ordered, start=1):
        line = f"{position}. {mod.identifier} {mod.version}"
        if mod.requires:
            line += f" (requires: {', '.join(mod.requires)})"
        console.print(line, markup=False, highlight=False, soft_wrap=True)


def _display_errors(result: ResolutionResult) -> None:
    console = get_raw_console()
    console.print("\n[bold]Mod resolution failed:[/bold]")
    for error in result.errors:
        console.print(f"  - {error}", style="error", markup=False, soft_wrap=True)


def _display_json(result: ResolutionResult, skipped: List[str]) -> None:
    """Render the outcome as JSON for machine consumption.

    Example::

        {
          "valid": true,
          "order": [{"id": "Core", "version": "1.0.0", ...}],
          "errors": [],
          "skipped": []
        }
    """
    data = {
        "valid": result.is_valid,
        "order": [mod.to_json() for mod in result.ordered],
        "errors": list(result.errors),
        "skipped": list(skipped),
    }
    print(json.dumps(data, indent=2))
