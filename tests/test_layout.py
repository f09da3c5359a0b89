from pathlib import Path

import pytest

from runscaffold.errors import MissingPathError
from runscaffold.io.layout import (
    irods_locations_dir_path,
    irods_publisher_rstart_dir_path,
    log_path,
    metadata_cache_dir_path,
    path_in_outgoing,
    status_files_path,
    tileviz_index_dir_path,
    tileviz_index_file_path,
)


def test_analysis_level_paths() -> None:
    analysis = Path("/staging/analysis/run_1000")

    assert status_files_path(analysis) == analysis / "status"
    assert metadata_cache_dir_path(analysis, 1000) == analysis / "metadata_cache_1000"
    assert irods_publisher_rstart_dir_path(analysis) == analysis / "irods_publisher_restart_files"
    assert irods_locations_dir_path(analysis) == analysis / "irods_locations_files"
    assert log_path(analysis) == analysis / "log"


@pytest.mark.parametrize(
    "helper",
    [
        status_files_path,
        irods_publisher_rstart_dir_path,
        irods_locations_dir_path,
        log_path,
        lambda path: metadata_cache_dir_path(path, 1000),
    ],
)
@pytest.mark.parametrize("analysis_path", [None, ""])
def test_analysis_path_required(helper, analysis_path) -> None:
    with pytest.raises(MissingPathError, match="Failed to retrieve analysis_path"):
        helper(analysis_path)


def test_tileviz_index_paths() -> None:
    archive = Path("/a/no_cal/archive")

    assert tileviz_index_dir_path(archive) == archive / "tileviz"
    assert tileviz_index_file_path(archive) == archive / "tileviz" / "index.html"


def test_path_in_outgoing() -> None:
    assert path_in_outgoing("/seq/analysis/run_1/analysis/x") == "/seq/outgoing/run_1/analysis/x"
    assert path_in_outgoing("/seq/inbox/run_1") == "/seq/inbox/run_1"

    with pytest.raises(ValueError):
        path_in_outgoing("")
