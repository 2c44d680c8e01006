"""
Core functionality exports for verspan.

This module provides convenient access to the core subsystems of verspan.
Importing from here keeps user-facing imports clean and stable:

    from verspan.core import RequirementParser, ConstraintResolver
"""

from __future__ import annotations

from verspan.core.parser import RequirementParser
from verspan.core.resolver import ConstraintResolver, DependencyConstraint

__all__ = [
    "RequirementParser",
    "ConstraintResolver",
    "DependencyConstraint",
]
