"""
Shared context object for verspan CLI commands.

This module defines the global Click context used to share configuration
and runtime options across CLI subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from verspan.config import VerspanConfig


class VerspanContext:
    """Global context object for verspan CLI commands.

    Attributes:
        config_path: Path to the verspan configuration file, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration, set by the CLI group.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[VerspanConfig] = None

    @property
    def effective_config(self) -> VerspanConfig:
        """The loaded configuration, or defaults if none was loaded."""
        return self.config if self.config is not None else VerspanConfig()


#: Click decorator for injecting :class:`VerspanContext` into commands.
pass_context = click.make_pass_decorator(VerspanContext, ensure=True)
