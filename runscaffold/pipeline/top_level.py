"""
Run-wide directories created before any product-level work.

The bam-basecall directory is decided here: it is named after the run
timestamp inside the intensities directory when that exists, otherwise it
is the externally supplied analysis directory. All other top-level
directories hang off the analysis directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from runscaffold.errors import MissingPathError
from runscaffold.io.dirs import make_directories
from runscaffold.io.layout import (
    irods_locations_dir_path,
    irods_publisher_rstart_dir_path,
    metadata_cache_dir_path,
    status_files_path,
    tileviz_index_dir_path,
)
from runscaffold.models.run import Run
from runscaffold.obs.logging import log_event
from runscaffold.pipeline.result import ScaffoldResult


def _report_path(info: list[str], label: str, path: Path) -> None:
    if Path(path).is_dir():
        info.append(f"{label} path: {path}")
    else:
        info.append(f"{label} path {path} not found")


def resolve_bam_basecall_path(run: Run) -> Path:
    """
    Return the bam-basecall path, setting it on the run when it is not known.

    Creates nothing, so a product-level pass run on its own derives the same
    analysis folder that an earlier top-level pass created.
    """
    if run.has_bam_basecall_path:
        return Path(run.bam_basecall_path)
    if Path(run.intensity_path).is_dir():
        return run.set_bam_basecall_path(run.timestamp)
    if run.has_analysis_path:
        return run.set_bam_basecall_path(Path(run.analysis_path))
    raise MissingPathError(
        f"Intensity path {run.intensity_path} does not exist, "
        "either bam_basecall_path or analysis_path should be given"
    )


def top_level_dirs(run: Run) -> list[Path]:
    """Directories created by top-level scaffolding, bam-basecall path first."""
    return [
        Path(run.bam_basecall_path),
        run.recalibrated_path,
        metadata_cache_dir_path(run.analysis_path, run.id_run),
        run.archive_path,
        run.no_archive_path,
        run.pp_archive_path,
        status_files_path(run.analysis_path),
        tileviz_index_dir_path(run.archive_path),
        irods_publisher_rstart_dir_path(run.analysis_path),
        irods_locations_dir_path(run.analysis_path),
    ]


def create_top_level(run: Run, *, logger: logging.Logger | None = None) -> ScaffoldResult:
    logger = logger or logging.getLogger(__name__)

    info: list[str] = []
    _report_path(info, "Intensities", run.intensity_path)
    _report_path(info, "Basecalls", run.basecall_path)

    bam_basecall_path = resolve_bam_basecall_path(run)
    info.append(f"BAM_basecall path: {bam_basecall_path}")
    info.append(f"Recalibrated directory path: {run.recalibrated_path}")
    info.append(f"Metadata cache path: {metadata_cache_dir_path(run.analysis_path, run.id_run)}")

    dirs = top_level_dirs(run)
    errors = make_directories(dirs)

    log_event(
        logger,
        logging.INFO if not errors else logging.WARNING,
        "top_level_scaffolded",
        "Top-level directories scaffolded",
        analysis_path=run.analysis_path,
        dirs_total=len(dirs),
        errors_total=len(errors),
    )
    return ScaffoldResult(msgs=info, errors=errors)
