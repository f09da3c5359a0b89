"""
Structured JSON Lines logging for scaffolding runs.

Every entry is a single JSON object so that the audit trail of a
scaffolding pass (paths discovered, directories created, links made) can
be filtered with jq or shipped to a log aggregator.

Example log entry:
    {"ts": "2026-01-15T10:30:00Z", "level": "INFO", "id_run": 1000,
     "event": "symlink_created", "module": "product_level",
     "msg": "Stage1 link created", "extra": {"link": "...", "target": "..."}}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class LogSettings:
    """
    Logger configuration for one CLI invocation.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        id_run: Run identifier added to every entry, None before the
            config is loaded.
        log_file: Optional file to append entries to.
        jsonl: JSON Lines output when True, plain text otherwise.
    """
    level: str
    id_run: int | None
    log_file: Path | None
    jsonl: bool


class JsonLineFormatter(logging.Formatter):
    """
    Logging formatter that outputs JSON Lines format.

    Each record becomes one JSON object per line, tagged with the run it
    belongs to so entries from several scaffolding passes can be merged.
    """

    def __init__(self, id_run: int | None):
        """
        Initialize formatter with the run identifier.

        Args:
            id_run: Run identifier included in all log entries, None
                before the run config is known.
        """
        super().__init__()
        self._id_run = id_run

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as a JSON object.

        ``Path`` values in the structured extras are written as strings.

        Args:
            record: Record emitted through :func:`log_event` or plain logging.

        Returns:
            Single-line JSON string.
        """
        event = getattr(record, "event", "log")
        extra = getattr(record, "extra", {})
        if not isinstance(extra, dict):
            extra = {"value": extra}

        payload = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "id_run": self._id_run,
            "event": event,
            "module": record.module,
            "msg": record.getMessage(),
            "extra": {key: _jsonable(value) for key, value in extra.items()},
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def build_logger(settings: LogSettings) -> logging.Logger:
    """
    Create an isolated logger for one scaffolding invocation.

    The logger does not propagate. It always writes to the console and,
    when ``settings.log_file`` is set, to that file as well. Handlers left
    over from an earlier call for the same run are closed first.

    Args:
        settings: LogSettings with level, id_run, file path and format.

    Returns:
        Configured Logger instance ready for use.
    """
    suffix = settings.id_run if settings.id_run is not None else "cli"
    logger = logging.getLogger(f"runscaffold.run.{suffix}")
    logger.setLevel(settings.level)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = False

    formatter = JsonLineFormatter(settings.id_run) if settings.jsonl else None

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    for handler in handlers:
        if formatter:
            handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    message: str,
    *,
    exc_info: logging._ExcInfoType | None = None,
    **extra: Any,
) -> None:
    """
    Log a structured event with typed metadata.

    The ``module`` field of the entry names the caller of this function,
    not this module.

    Args:
        logger: Logger instance to use.
        level: Log level (logging.DEBUG, INFO, WARNING, ERROR).
        event: Event type identifier (e.g., "symlink_created", "scaffold_failed").
        message: Human-readable log message.
        exc_info: Optional exception info for error logging.
        **extra: Additional key-value pairs to include in the entry.

    Example:
        >>> log_event(logger, logging.INFO, "symlink_created",
        ...           "Stage1 link created", link="/a/b.cram", target="../c.cram")
    """
    logger.log(
        level,
        message,
        extra={"event": event, "extra": extra},
        exc_info=exc_info,
        stacklevel=2,
    )
