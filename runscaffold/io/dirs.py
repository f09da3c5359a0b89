"""
Batch directory creation.

Directories are created one by one with their missing ancestors. A failure
on one path is recorded and the remaining paths are still attempted, so a
partially created tree can be completed by calling again with the same
list.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from runscaffold.io.layout import log_path


@dataclass(frozen=True)
class LogDirsResult:
    dirs: list[Path]
    errors: list[str]


def _describe_error(exc: OSError) -> str:
    message = exc.strerror or str(exc)
    if not exc.filename:
        return f"General error: {message}"
    return f"Problem creating {exc.filename}: {message}"


def make_directories(paths: Iterable[Path | str]) -> list[str]:
    """
    Create every directory in ``paths``, including intermediate ones.

    Existing directories are not an error. Returns one message per failed
    path, empty when everything was created.

    Example:
        >>> make_directories([tmp / "a" / "b", tmp / "c"])
        []
    """
    errors: list[str] = []
    for path in paths:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            errors.append(_describe_error(exc))
    return errors


def make_log_dirs(analysis_path: Path | str | None, names: Iterable[str]) -> LogDirsResult:
    """Create ``<analysis>/log/<name>`` for each name."""
    root = log_path(analysis_path)
    dirs = [root / name for name in names]
    return LogDirsResult(dirs=dirs, errors=make_directories(dirs))
