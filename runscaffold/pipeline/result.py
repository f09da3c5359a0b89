from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScaffoldResult:
    """
    Outcome of one scaffolding pass.

    Attributes:
        msgs: Informational messages about paths discovered or created.
        errors: Per-directory creation failures; empty on success.
    """
    msgs: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
