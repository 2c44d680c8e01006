"""
Operating-system and architecture tags.

Environment markers in dependency metadata use Python's own spellings
(``sys_platform == "darwin"``, ``platform_machine == "AMD64"``). This
module maps them onto a small canonical vocabulary:

- operating systems: ``linux``, ``macos``, ``windows``
- architectures: ``x86_64``, ``arm64``, ``x86``

The ``*_from_*`` helpers pass unknown values through verbatim, as marker
parsing must not fail on them. The ``parse_*`` helpers are for tags
supplied by external collaborators (e.g. a wheel filename classifier)
and raise :class:`~verspan.exceptions.UnrecognizedEnvironmentTag` for
anything outside the vocabulary.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from verspan.exceptions import UnrecognizedEnvironmentTag
from verspan.constants import PLATFORM_MACHINE_ALIASES, SYS_PLATFORM_ALIASES


class OperatingSystem(str, Enum):
    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"


class Architecture(str, Enum):
    X86_64 = "x86_64"
    ARM64 = "arm64"
    X86 = "x86"


_KNOWN_OS = frozenset(member.value for member in OperatingSystem)
_KNOWN_ARCH = frozenset(member.value for member in Architecture)


def os_from_sys_platform(value: str) -> str:
    """Map a ``sys_platform`` marker value to an OS name.

    Unknown values are returned unchanged.

    Example:
        >>> os_from_sys_platform("linux2")
        'linux'
        >>> os_from_sys_platform("cygwin")
        'cygwin'
    """
    return SYS_PLATFORM_ALIASES.get(value, value)


def arch_from_platform_machine(value: str) -> str:
    """Map a ``platform_machine`` marker value to an architecture name.

    Matching is case-insensitive; unknown values are returned unchanged.
    """
    return PLATFORM_MACHINE_ALIASES.get(value.lower(), value)


def is_known_os(value: Optional[str]) -> bool:
    return value is None or value in _KNOWN_OS


def is_known_arch(value: Optional[str]) -> bool:
    return value is None or value in _KNOWN_ARCH


def tag_matches(predicate: Optional[str], target: Optional[str]) -> bool:
    """Check an environment predicate against a target tag.

    A missing tag on either side matches anything.
    """
    return predicate is None or target is None or predicate == target


def parse_operating_system(value: str) -> OperatingSystem:
    """Resolve an externally supplied OS tag.

    Accepts canonical names and ``sys_platform`` spellings.

    Raises:
        UnrecognizedEnvironmentTag: The tag is not a supported OS.
    """
    mapped = os_from_sys_platform(value.strip().lower())
    try:
        return OperatingSystem(mapped)
    except ValueError as exc:
        raise UnrecognizedEnvironmentTag(
            f"Unrecognized operating system: {value!r}",
            kind="os",
            value=value,
        ) from exc


def parse_architecture(value: str) -> Architecture:
    """Resolve an externally supplied architecture tag.

    Accepts canonical names and ``platform_machine`` spellings.

    Raises:
        UnrecognizedEnvironmentTag: The tag is not a supported architecture.
    """
    mapped = arch_from_platform_machine(value.strip())
    try:
        return Architecture(mapped)
    except ValueError as exc:
        raise UnrecognizedEnvironmentTag(
            f"Unrecognized architecture: {value!r}",
            kind="arch",
            value=value,
        ) from exc
