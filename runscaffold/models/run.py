"""
Run metadata for analysis folder scaffolding.

A :class:`Run` carries the externally supplied locations of a sequencing
run (intensities, basecalls) and the analysis paths that are derived from
them. The bam-basecall path is the only field that changes after
construction: it is set exactly once, by top-level scaffolding, and read
thereafter.

Layout of the derived roots::

    <analysis>/no_cal               recalibrated output
    <analysis>/no_cal/archive       archive root
    <analysis>/no_archive           no-archive root
    <analysis>/pp_archive           post-processing archive root
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from runscaffold.errors import MissingPathError, RunStateError

BAM_BASECALL_PREFIX = "BAM_basecalls_"
RECALIBRATED_DIR_NAME = "no_cal"
ARCHIVE_DIR_NAME = "archive"
NO_ARCHIVE_DIR_NAME = "no_archive"
PP_ARCHIVE_DIR_NAME = "pp_archive"


@dataclass
class Run:
    """
    One sequencing run as seen by the scaffolding code.

    Attributes:
        id_run: Integer run identifier.
        timestamp: Timestamp used to name a new bam-basecall directory.
        intensity_path: Intensities directory of the run folder.
        basecall_path: Basecalls directory of the run folder.
        analysis_path: Analysis root; when absent it becomes the
            bam-basecall path once that is set.
        bam_basecall_path: Write-once; see :meth:`set_bam_basecall_path`.
    """
    id_run: int
    timestamp: str
    intensity_path: Path
    basecall_path: Path
    analysis_path: Path | None = None
    bam_basecall_path: Path | None = None

    def __post_init__(self) -> None:
        if self.bam_basecall_path is not None and not self.analysis_path:
            self.analysis_path = self.bam_basecall_path

    @property
    def has_bam_basecall_path(self) -> bool:
        return self.bam_basecall_path is not None

    @property
    def has_analysis_path(self) -> bool:
        return bool(self.analysis_path)

    def set_bam_basecall_path(self, value: str | Path) -> Path:
        """
        Set the bam-basecall path once and return it.

        A ``Path`` is taken as-is. A string is a suffix and gives
        ``<intensity_path>/BAM_basecalls_<suffix>``.
        """
        if self.bam_basecall_path is not None:
            raise RunStateError(f"bam_basecall_path is already set to {self.bam_basecall_path}")

        if isinstance(value, Path):
            path = value
        else:
            path = Path(self.intensity_path) / f"{BAM_BASECALL_PREFIX}{value}"

        self.bam_basecall_path = path
        if not self.analysis_path:
            self.analysis_path = path
        return path

    def _require_analysis_path(self) -> Path:
        if not self.analysis_path:
            raise MissingPathError("Failed to retrieve analysis_path")
        return Path(self.analysis_path)

    @property
    def recalibrated_path(self) -> Path:
        return self._require_analysis_path() / RECALIBRATED_DIR_NAME

    @property
    def archive_path(self) -> Path:
        return self.recalibrated_path / ARCHIVE_DIR_NAME

    @property
    def no_archive_path(self) -> Path:
        return self._require_analysis_path() / NO_ARCHIVE_DIR_NAME

    @property
    def pp_archive_path(self) -> Path:
        return self._require_analysis_path() / PP_ARCHIVE_DIR_NAME
