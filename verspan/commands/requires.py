"""Requires command implementation for verspan.

Reads ``requires_dist``-style dependency lines, either from a file (one
per line, ``#`` comments allowed) or from repeated ``--line`` options, and
prints the per-dependency constraint records a resolver would consume.

Lines guarded by ``extra`` markers, and lines naming an unknown platform
or architecture, are skipped. ``--os`` and ``--arch`` narrow the output to
the dependencies that apply to one target environment.

Typical usage::

    $ verspan requires requires.txt
    $ verspan requires --line "numpy>=1.21" --line "pywin32; sys_platform == 'win32'"
    $ verspan requires requires.txt --os linux --arch x86_64 --format json
"""

from __future__ import annotations

import sys
import json
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import click

from verspan.core import ConstraintResolver, DependencyConstraint
from verspan.exceptions import VerspanError
from verspan.models import parse_architecture, parse_operating_system
from verspan.context import pass_context, VerspanContext
from verspan.utils import (
    get_logger,
    print_error,
    print_table,
    print_warning,
    safe_read_file,
    render_export,
)

logger = get_logger("commands.requires")


@click.command()
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=False,
)
@click.option(
    "--line",
    "-l",
    "lines",
    multiple=True,
    help="Dependency line to export (can be repeated).",
)
@click.option("--os", "target_os", help="Only show dependencies for this OS.")
@click.option("--arch", "target_arch", help="Only show dependencies for this architecture.")
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def requires(
    ctx: VerspanContext,
    file: Optional[Path],
    lines: Tuple[str, ...],
    target_os: Optional[str],
    target_arch: Optional[str],
    format: str,
) -> None:
    """Export version constraints for dependency lines.

    Reads lines from FILE and/or ``--line`` options.
    """
    if file is None and not lines:
        raise click.UsageError("Provide a FILE or at least one --line.")

    try:
        os_tag = parse_operating_system(target_os).value if target_os else None
        arch_tag = parse_architecture(target_arch).value if target_arch else None

        texts: List[str] = safe_read_file(file).splitlines() if file is not None else []
        texts.extend(lines)
        logger.info("Exporting %d dependency line(s)", len(texts))

        resolver = ConstraintResolver(ctx.effective_config)
        constraints = resolver.dependency_constraints(texts)
    except VerspanError as e:
        print_error(f"{e}")
        sys.exit(1)

    constraints = [dep for dep in constraints if dep.applies_to(os_tag, arch_tag)]

    if format == "json":
        print(json.dumps([dep.to_json() for dep in constraints], indent=2))
        return

    if not constraints:
        print_warning("No applicable dependencies found")
        return
    _display_table(constraints)


def _display_table(constraints: List[DependencyConstraint]) -> None:
    data: List[Dict[str, str]] = []
    for dep in constraints:
        rendered = render_export(dep.export)
        data.append(
            {
                "Package": dep.name,
                "OS": dep.os or "any",
                "Arch": dep.arch or "any",
                "Allowed": rendered["allowed"],
                "Rejects": rendered["rejects"],
            }
        )

    print_table(
        data,
        title="Dependency Constraints",
        column_styles={
            "Package": {"style": "bold cyan", "no_wrap": True},
            "OS": {"justify": "center", "style": "dim"},
            "Arch": {"justify": "center", "style": "dim"},
        },
    )
