"""Sort command implementation for verspan.

Parses a listing of version identifiers, sorts it by version order and
optionally keeps only the versions satisfying a specifier.

Typical usage::

    $ verspan sort 1.0 1.0rc1 1.0.dev0 1.0.post1
    $ verspan sort --file versions.txt --spec ">=1.0,<2" --format json
"""

from __future__ import annotations

import sys
import json
from pathlib import Path
from typing import List, Optional, Tuple

import click

from verspan.core import ConstraintResolver
from verspan.exceptions import VerspanError
from verspan.context import pass_context, VerspanContext
from verspan.utils import get_logger, print_error, print_table, print_warning, read_lines

logger = get_logger("commands.sort")


@click.command()
@click.argument("versions", nargs=-1)
@click.option(
    "--file",
    "listing_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read versions from a file, one per line.",
)
@click.option("--spec", "-s", "specifier", help="Keep only versions matching SPECIFIER.")
@click.option("--reverse", "-r", is_flag=True, help="Newest first.")
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def sort(
    ctx: VerspanContext,
    versions: Tuple[str, ...],
    listing_file: Optional[Path],
    specifier: Optional[str],
    reverse: bool,
    format: str,
) -> None:
    """Sort VERSIONS by version order.

    Unparseable versions are skipped with a warning unless
    ``skip_invalid_versions`` is disabled in the configuration.
    """
    try:
        listing: List[str] = read_lines(listing_file) if listing_file else []
        listing.extend(versions)

        resolver = ConstraintResolver(ctx.effective_config)
        if specifier is not None:
            ordered = resolver.matching_versions(specifier, listing)
        else:
            ordered = resolver.sort_versions(listing)
    except VerspanError as e:
        print_error(f"{e}")
        sys.exit(1)

    if reverse:
        ordered.reverse()
    logger.info("%d of %d version(s) selected", len(ordered), len(listing))

    if format == "json":
        print(json.dumps([str(v) for v in ordered], indent=2))
        return

    if not ordered:
        print_warning("No matching versions")
        return

    print_table(
        [
            {
                "#": str(index),
                "Version": str(version),
                "Pre": "yes" if version.is_prerelease else "",
                "Post": "yes" if version.is_postrelease else "",
                "Dev": "yes" if version.is_devrelease else "",
            }
            for index, version in enumerate(ordered, start=1)
        ],
        title="Versions",
        column_styles={
            "#": {"justify": "right", "style": "dim"},
            "Version": {"style": "bold cyan", "no_wrap": True},
        },
    )
