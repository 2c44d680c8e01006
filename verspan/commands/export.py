"""Export command implementation for verspan.

Parses a version specifier and prints the form a dependency-resolution
engine consumes: one contiguous allowed range plus the sub-ranges inside
it that are rejected, or an always/never-match sentinel.

Typical usage::

    $ verspan export ">=1.0,!=1.5,<2"
    $ verspan export "==1.2.*" --format json
    $ verspan -v export "~=2.2"
"""

from __future__ import annotations

import sys
import json
from typing import Any, Dict, Optional

import click

from verspan.exceptions import VerspanError
from verspan.models import ConstraintSet, ExportResult
from verspan.context import pass_context, VerspanContext
from verspan.utils import get_logger, print_error, print_table, render_export

logger = get_logger("commands.export")


@click.command()
@click.argument("specifier")
@click.option(
    "--widen/--no-widen",
    default=None,
    help="Widen unrepresentable sets to a single range (default: from config).",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def export(
    ctx: VerspanContext,
    specifier: str,
    widen: Optional[bool],
    format: str,
) -> None:
    """Show the resolver export form of SPECIFIER.

    SPECIFIER is a comma-joined list of terms such as ``>=1.0,!=1.5,<2``.
    An empty string matches every version.
    """
    if widen is None:
        widen = ctx.effective_config.widen_unrepresentable

    try:
        constraint = ConstraintSet.parse(specifier)
        logger.debug("Parsed %r as %s", specifier, constraint)
        result = constraint.export(widen=widen)
    except VerspanError as e:
        print_error(f"{e}")
        sys.exit(1)

    if format == "json":
        _display_json(specifier, result)
    else:
        _display_table(specifier, result)


def _display_table(specifier: str, result: ExportResult) -> None:
    row: Dict[str, Any] = {"Specifier": specifier or "<any>"}
    row.update(
        {key.capitalize(): value for key, value in render_export(result).items()}
    )
    print_table(
        [row],
        title="Export",
        column_styles={"Specifier": {"style": "bold cyan", "no_wrap": True}},
    )


def _display_json(specifier: str, result: ExportResult) -> None:
    data = {"specifier": specifier, "export": result.to_json()}
    print(json.dumps(data, indent=2))
