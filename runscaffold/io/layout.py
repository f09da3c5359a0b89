from __future__ import annotations

from pathlib import Path

from runscaffold.errors import MissingPathError

OUTGOING_PATH_COMPONENT = "/outgoing/"
ANALYSIS_PATH_COMPONENT = "/analysis/"
LOG_DIR_NAME = "log"
STATUS_FILES_DIR_NAME = "status"
METADATA_CACHE_DIR_PREFIX = "metadata_cache_"
TILEVIZ_INDEX_DIR_NAME = "tileviz"
TILEVIZ_INDEX_FILE_NAME = "index.html"
IRODS_PUBLISHER_RSTART_DIR_NAME = "irods_publisher_restart_files"
IRODS_LOCATIONS_DIR_NAME = "irods_locations_files"


def _analysis_root(analysis_path: Path | str | None) -> Path:
    if not analysis_path:
        raise MissingPathError("Failed to retrieve analysis_path")
    return Path(analysis_path)


def status_files_path(analysis_path: Path | str | None) -> Path:
    return _analysis_root(analysis_path) / STATUS_FILES_DIR_NAME


def metadata_cache_dir_path(analysis_path: Path | str | None, id_run: int) -> Path:
    return _analysis_root(analysis_path) / f"{METADATA_CACHE_DIR_PREFIX}{id_run}"


def irods_publisher_rstart_dir_path(analysis_path: Path | str | None) -> Path:
    return _analysis_root(analysis_path) / IRODS_PUBLISHER_RSTART_DIR_NAME


def irods_locations_dir_path(analysis_path: Path | str | None) -> Path:
    return _analysis_root(analysis_path) / IRODS_LOCATIONS_DIR_NAME


def log_path(analysis_path: Path | str | None) -> Path:
    return _analysis_root(analysis_path) / LOG_DIR_NAME


def tileviz_index_dir_path(archive_path: Path | str) -> Path:
    return Path(archive_path) / TILEVIZ_INDEX_DIR_NAME


def tileviz_index_file_path(archive_path: Path | str) -> Path:
    return tileviz_index_dir_path(archive_path) / TILEVIZ_INDEX_FILE_NAME


def path_in_outgoing(path: Path | str) -> str:
    """Map a path inside an ``analysis`` directory to the ``outgoing`` one."""
    if not path:
        raise ValueError("Path required")
    return str(path).replace(ANALYSIS_PATH_COMPONENT, OUTGOING_PATH_COMPONENT, 1)
