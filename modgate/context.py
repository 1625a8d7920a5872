"""
Shared context object for modgate CLI commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from modgate.config import ModGateConfig


class ModGateContext:
    """Per-invocation state shared between the CLI group and its commands.

    Attributes:
        config_path: Path to the configuration file, if one was used.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration, set by the CLI group.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[ModGateConfig] = None


#: Click decorator for injecting :class:`ModGateContext` into commands.
pass_context = click.make_pass_decorator(ModGateContext, ensure=True)
