"""
Placeholder tileviz pages.

The run index under ``<archive>/tileviz/index.html`` links to one page per
lane. Lane pages sit beside the lane tileviz directories
(``<archive>/tileviz_lane<N>.html``) and are later replaced by the tileviz
tool when it finds data for the lane, so an existing lane page is never
overwritten.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from runscaffold.io.layout import tileviz_index_file_path
from runscaffold.models.product import Product
from runscaffold.models.run import Run
from runscaffold.obs.logging import log_event

NO_DATA_TEXT = "No tileviz data available for this lane"


def _pages_by_position(lanes: Iterable[Product], base: Path | str) -> dict[int, str]:
    pages: dict[int, str] = {}
    for lane in lanes:
        pages[lane.composition.get_component(0).position] = f"{lane.tileviz_path(base)}.html"
    return dict(sorted(pages.items()))


def _render(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def create_run_index(
    run: Run,
    lanes: Iterable[Product],
    *,
    logger: logging.Logger | None = None,
) -> Path:
    logger = logger or logging.getLogger(__name__)

    # links are relative to the tileviz index directory
    pages = _pages_by_position(lanes, "..")
    title = f"Run {run.id_run} Tileviz Reports"
    content = [f"<html><head><title>{title}</title></head>", f"<h2>{title}</h2>"]
    for position, ref in pages.items():
        content.append(f'<div><a href="{ref}">Lane {position}</a></div>')
    content.append("</html>")

    index_path = tileviz_index_file_path(run.archive_path)
    index_path.write_text(_render(content), encoding="utf-8")
    log_event(
        logger,
        logging.INFO,
        "tileviz_index_written",
        "Tileviz run index written",
        path=index_path,
        lanes=list(pages),
    )
    return index_path


def create_lane_indexes(
    run: Run,
    lanes: Iterable[Product],
    *,
    logger: logging.Logger | None = None,
) -> list[Path]:
    logger = logger or logging.getLogger(__name__)

    written: list[Path] = []
    for position, page in _pages_by_position(lanes, run.archive_path).items():
        page_path = Path(page)
        if page_path.exists():
            continue
        title = f"Run {run.id_run} Lane {position} Tileviz Report"
        content = [
            f"<html><head><title>{title}</title></head>",
            f"<h2>{title}</h2>",
            NO_DATA_TEXT,
            "</html>",
        ]
        page_path.write_text(_render(content), encoding="utf-8")
        written.append(page_path)
        log_event(logger, logging.INFO, "lane_index_written", "Placeholder lane page written", path=page_path)
    return written
