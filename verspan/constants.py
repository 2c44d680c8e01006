"""
Centralized constants for verspan.

This module defines immutable configuration values used across verspan,
including specifier operators, environment-marker mappings, file limits,
configuration defaults, and logging formats. All values are intended to
be treated as read-only.
"""

from typing import Final, Mapping, Sequence

# ---------------------------------------------------------------------------
# Specifier operators
# ---------------------------------------------------------------------------

#: Comparison operators, longest first so prefixes never shadow each other.
SPECIFIER_OPERATORS: Final[Sequence[str]] = (
    "===",
    "==",
    "~=",
    "!=",
    ">=",
    "<=",
    ">",
    "<",
)

#: Suffix that turns ``==`` / ``!=`` into a wildcard family match.
WILDCARD_SUFFIX: Final[str] = ".*"

#: Separator between specifier terms (logical AND).
SPECIFIER_SEPARATOR: Final[str] = ","

# ---------------------------------------------------------------------------
# Requirement / environment markers
# ---------------------------------------------------------------------------

#: Separator between the specifier clause and the marker clause.
MARKER_SEPARATOR: Final[str] = ";"

#: Literal conjunction between marker clauses.
MARKER_CONJUNCTION: Final[str] = " and "

SYS_PLATFORM_MARKER: Final[str] = "sys_platform"
PLATFORM_MACHINE_MARKER: Final[str] = "platform_machine"
EXTRA_MARKER: Final[str] = "extra"

#: ``sys_platform`` values mapped to operating-system names.
SYS_PLATFORM_ALIASES: Final[Mapping[str, str]] = {
    "linux": "linux",
    "linux2": "linux",
    "darwin": "macos",
    "win32": "windows",
}

#: ``platform_machine`` values (lower-cased) mapped to architecture names.
PLATFORM_MACHINE_ALIASES: Final[Mapping[str, str]] = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
}

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading input files.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

#: Widen unrepresentable constraint sets instead of failing the export.
DEFAULT_WIDEN_UNREPRESENTABLE: Final[bool] = False

#: Skip unparseable entries in version listings instead of failing.
DEFAULT_SKIP_INVALID_VERSIONS: Final[bool] = True

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
