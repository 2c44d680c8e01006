"""
Custom exception hierarchy for verspan.

This module defines structured exception types used across verspan.
All exceptions inherit from :class:`VerspanError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.

An unsatisfiable specifier is *not* an error: it parses to an empty
:class:`~verspan.models.constraint.ConstraintSet` that exports to
``NEVER_MATCH``.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class VerspanError(Exception):
    """Base exception for all verspan errors.

    All verspan-specific exceptions should inherit from this class.
    It supports structured metadata via ``details`` for richer error
    reporting and debugging.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ParseError(VerspanError):
    """Raised when version, specifier or requirement text cannot be parsed.

    Args:
        message: Error description.
        text: The offending input text.
        line_number: Line number in the source, if parsing a file.
        file_path: Path to the file being parsed.
    """

    __slots__ = ("text", "line_number", "file_path")

    def __init__(
        self,
        message: str,
        *,
        text: Optional[str] = None,
        line_number: Optional[int] = None,
        file_path: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "text", _truncate(text) if text is not None else None)
        _add_if(details, "line", line_number)
        _add_if(details, "file", file_path)

        super().__init__(message, details)

        self.text = text
        self.line_number = line_number
        self.file_path = file_path


class InvalidVersionFormat(ParseError):
    """Raised when a version string does not match the version grammar.

    Callers must not substitute a default version; the error invalidates
    the enclosing specifier or requirement.
    """

    __slots__ = ()


class InvalidSpecifier(ParseError):
    """Raised when a range specifier term is malformed."""

    __slots__ = ()


class InvalidRequirement(ParseError):
    """Raised when a dependency line cannot be split into its parts."""

    __slots__ = ()


class UnrecognizedEnvironmentTag(VerspanError):
    """Raised when an operating-system or architecture tag is unknown.

    The owning requirement or file should be treated as "not understood"
    and excluded, rather than failing the whole batch.

    Args:
        message: Error description.
        kind: Either ``"os"`` or ``"arch"``.
        value: The unrecognized tag value.
    """

    __slots__ = ("kind", "value")

    def __init__(
        self,
        message: str,
        *,
        kind: Optional[str] = None,
        value: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "kind", kind)
        _add_if(details, "value", value)

        super().__init__(message, details)

        self.kind = kind
        self.value = value


class UnrepresentableConstraintSet(VerspanError):
    """Raised when a constraint set cannot be exported losslessly.

    The export form holds a single allowed range plus excluded
    sub-ranges, so an allowed set made of several disjoint intervals
    that cannot be written that way is reported instead of widened.

    Args:
        message: Error description.
        constraint: Text form of the offending constraint set.
    """

    __slots__ = ("constraint",)

    def __init__(
        self,
        message: str,
        *,
        constraint: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "constraint", constraint)

        super().__init__(message, details)

        self.constraint = constraint


class ConfigError(VerspanError):
    """Raised when the configuration file is missing or invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class FileOperationError(VerspanError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/write/delete).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error
