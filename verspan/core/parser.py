"""Dependency line parser for distribution metadata.

Parses ``requires_dist``-style dependency lines::

    <name> [\\[extras\\]] [(<specifier>) | <specifier>] [; <marker> [and <marker>]...]

Only simple marker conjunctions are understood:

- ``sys_platform == "<value>"`` — operating-system predicate
- ``platform_machine == "<value>"`` — architecture predicate
- ``extra ...`` — the requirement belongs to an optional extra and is
  skipped, since extras are not installed by default

Any other marker (including ``or`` expressions and parentheses) is
ignored rather than treated as an error.

Typical usage::

    from verspan.core import RequirementParser

    parser = RequirementParser()
    req = parser.parse('foo (>=1.0,<2.0); sys_platform == "linux"')
    if req is not None:
        print(req.name, req.os, req.export())

    # Many lines at once; skipped requirements are dropped
    reqs = parser.parse_lines(metadata["requires_dist"])
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from verspan.models.constraint import ConstraintSet
from verspan.models.requirement import Requirement
from verspan.models.environment import arch_from_platform_machine, os_from_sys_platform
from verspan.utils import get_logger, safe_read_file
from verspan.exceptions import InvalidRequirement, ParseError
from verspan.constants import (
    EXTRA_MARKER,
    MARKER_CONJUNCTION,
    MARKER_SEPARATOR,
    PLATFORM_MACHINE_MARKER,
    SYS_PLATFORM_MARKER,
)

# ``key == "value"`` with either quote style
_EQUALITY_MARKER_RE = re.compile(
    r"""^(?P<key>[A-Za-z_]+)\s*==\s*(?P<quote>["'])(?P<value>.*)(?P=quote)$"""
)

_IDENTIFIER_PUNCTUATION = frozenset("_-.")


def _is_identifier_char(char: str) -> bool:
    return char.isalnum() or char in _IDENTIFIER_PUNCTUATION


class RequirementParser:
    """Stateless parser for single dependency lines.

    Args:
        keep_inapplicable: Return requirements guarded by an ``extra``
            marker with ``applicable=False`` instead of skipping them.

    Example::

        >>> parser = RequirementParser()
        >>> parser.parse('bar; extra == "test"') is None
        True
        >>> parser.parse("foo>=1.0").name
        'foo'
    """

    def __init__(self, *, keep_inapplicable: bool = False) -> None:
        self.logger = get_logger("parser")
        self.keep_inapplicable = keep_inapplicable

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, text: str) -> Optional[Requirement]:
        """Parse one dependency line.

        Args:
            text: The dependency line.

        Returns:
            The parsed :class:`Requirement`, or ``None`` when the line is
            guarded by an ``extra`` marker (unless ``keep_inapplicable``).

        Raises:
            InvalidRequirement: No package name, or an unclosed ``(``.
            InvalidSpecifier: The version clause is malformed.
            InvalidVersionFormat: A version in the clause is malformed.
        """
        line = text.strip()

        end = 0
        while end < len(line) and _is_identifier_char(line[end]):
            end += 1
        name = line[:end]
        if not name:
            raise InvalidRequirement("Missing package name in requirement", text=text)

        rest = line[end:].strip()
        spec_part, _, marker_part = rest.partition(MARKER_SEPARATOR)
        spec_text = self._strip_extras(spec_part.strip(), text)
        spec_text = self._unwrap_parentheses(spec_text, text)

        os: Optional[str] = None
        arch: Optional[str] = None
        applicable = True
        for marker in marker_part.split(MARKER_CONJUNCTION) if marker_part else ():
            marker = marker.strip()
            if not marker:
                continue
            if marker.startswith(EXTRA_MARKER):
                if not self.keep_inapplicable:
                    self.logger.debug("Skipping %s: guarded by %r", name, marker)
                    return None
                applicable = False
                continue

            key, value = self._split_marker(marker)
            if key == SYS_PLATFORM_MARKER and value is not None:
                os = os_from_sys_platform(value)
            elif key == PLATFORM_MACHINE_MARKER and value is not None:
                arch = arch_from_platform_machine(value)
            else:
                self.logger.debug("Ignoring unsupported marker %r for %s", marker, name)

        constraint = ConstraintSet.parse(spec_text) if spec_text else None
        return Requirement(
            name=name,
            constraint=constraint,
            os=os,
            arch=arch,
            applicable=applicable,
            raw_line=text,
        )

    def parse_lines(self, lines: Iterable[str]) -> List[Requirement]:
        """Parse many dependency lines.

        Blank lines and ``#`` comments are ignored; skipped requirements
        are dropped from the result.

        Raises:
            ParseError: A line is malformed. The error carries its
                1-based line number.
        """
        requirements: List[Requirement] = []
        for number, line in enumerate(lines, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            try:
                requirement = self.parse(stripped)
            except ParseError as exc:
                raise type(exc)(exc.message, text=stripped, line_number=number) from exc
            if requirement is not None:
                requirements.append(requirement)

        self.logger.debug("Parsed %d requirement(s)", len(requirements))
        return requirements

    def parse_file(self, file_path: Union[str, Path]) -> List[Requirement]:
        """Read a file of dependency lines and parse it.

        Raises:
            FileOperationError: The file cannot be read.
            ParseError: A line is malformed; ``file_path`` is recorded.
        """
        content = safe_read_file(file_path)
        try:
            return self.parse_lines(content.splitlines())
        except ParseError as exc:
            exc.file_path = str(file_path)
            exc.details["file"] = str(file_path)
            raise

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _strip_extras(spec_text: str, requirement: str) -> str:
        """Drop a leading ``[extra,...]`` group; extras do not affect versions."""
        if not spec_text.startswith("["):
            return spec_text
        end = spec_text.find("]")
        if end == -1:
            raise InvalidRequirement(
                "Unclosed extras group in requirement", text=requirement
            )
        return spec_text[end + 1 :].strip()

    @staticmethod
    def _unwrap_parentheses(spec_text: str, requirement: str) -> str:
        if not spec_text.startswith("("):
            return spec_text
        end = spec_text.find(")")
        if end == -1:
            raise InvalidRequirement(
                "Unclosed version spec in requirement", text=requirement
            )
        return spec_text[1:end].strip()

    @staticmethod
    def _split_marker(marker: str) -> Tuple[str, Optional[str]]:
        """Split ``key == "value"``; other forms yield a ``None`` value."""
        match = _EQUALITY_MARKER_RE.match(marker)
        if match is None:
            return marker.split(" ", 1)[0], None
        return match.group("key"), match.group("value").strip()
