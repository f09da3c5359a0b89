"""
Fatal scaffolding errors.

Per-directory creation failures are never raised: they are collected as
strings into ``ScaffoldResult.errors``. The exceptions below signal a
configuration problem that cannot be repaired locally, so the current
scaffolding call is aborted and the caller decides what to do next.
"""

from __future__ import annotations


class ScaffoldError(RuntimeError):
    """Base class for unrecoverable scaffolding failures."""


class MissingPathError(ScaffoldError):
    """A required input path (intensity, analysis) is not available."""


class RunStateError(ScaffoldError):
    """Raised when a write-once run attribute is assigned a second time."""


class ProductsNotAvailableError(ScaffoldError):
    """The product collection needed for product-level scaffolding is absent."""


class SymlinkCreationError(ScaffoldError):
    def __init__(self, link: str, target: str) -> None:
        super().__init__(f"Failed to create a symlink {link} to target {target}")
        self.link = link
        self.target = target
