import os
from pathlib import Path

import pytest

from runscaffold.errors import ProductsNotAvailableError, SymlinkCreationError
from runscaffold.models.product import Component, Product, ProductSet
from runscaffold.models.run import Run
from runscaffold.pipeline.product_level import create_product_level, product_level_dirs
from runscaffold.pipeline.top_level import create_top_level


def _scaffolded_run(tmp_path: Path) -> Run:
    intensities = tmp_path / "runfolder" / "Data" / "Intensities"
    (intensities / "BaseCalls").mkdir(parents=True)
    run = Run(
        id_run=1000,
        timestamp="20260101-120000",
        intensity_path=intensities,
        basecall_path=intensities / "BaseCalls",
    )
    assert create_top_level(run).ok
    return run


def _products() -> ProductSet:
    return ProductSet(
        lanes=[Product.lane(1000, 1)],
        data_products=[Product.data_product([Component(1000, 1, 1)])],
    )


def test_single_lane_scenario(tmp_path: Path) -> None:
    run = _scaffolded_run(tmp_path)
    products = _products()

    result = create_product_level(run, products)

    assert result.errors == []
    archive = run.archive_path
    assert "Lane 1" in (archive / "tileviz" / "index.html").read_text(encoding="utf-8")
    assert "No tileviz data available" in (archive / "tileviz_lane1.html").read_text(encoding="utf-8")
    link = run.no_archive_path / "lane1" / "1000_1#1.cram"
    assert link.is_symlink()
    assert result.msgs[0].splitlines()[0] == "Created the following directories:"


def test_product_directories_created(tmp_path: Path) -> None:
    run = _scaffolded_run(tmp_path)

    create_product_level(run, _products())

    archive = run.archive_path
    for path in (
        archive / "lane1" / "qc",
        archive / "lane1" / ".npg_cache_10000",
        archive / "lane1" / "plex1" / "qc",
        archive / "lane1" / "plex1" / ".npg_cache_10000",
        archive / "tileviz_lane1",
        run.no_archive_path / "lane1" / "plex1",
        run.pp_archive_path / "lane1" / "plex1",
    ):
        assert path.is_dir(), path


def test_symlink_target_is_relative(tmp_path: Path) -> None:
    run = _scaffolded_run(tmp_path)

    create_product_level(run, _products())

    link = run.no_archive_path / "lane1" / "1000_1#1.cram"
    target = os.readlink(link)
    assert target == os.path.join("..", "..", "no_cal", "1000_1#1.cram")
    assert (link.parent / target).resolve() == (run.recalibrated_path / "1000_1#1.cram").resolve()
    assert not link.exists()


def test_existing_symlink_is_left_alone(tmp_path: Path) -> None:
    run = _scaffolded_run(tmp_path)
    link = run.no_archive_path / "lane1" / "1000_1#1.cram"
    link.parent.mkdir(parents=True)
    os.symlink("somewhere/else.cram", link)

    result = create_product_level(run, _products())

    assert result.ok
    assert os.readlink(link) == "somewhere/else.cram"


def test_rerun_is_idempotent(tmp_path: Path) -> None:
    run = _scaffolded_run(tmp_path)
    create_product_level(run, _products())
    lane_page = run.archive_path / "tileviz_lane1.html"
    lane_page.write_text("real report", encoding="utf-8")

    result = create_product_level(run, _products())

    assert result.ok
    assert lane_page.read_text(encoding="utf-8") == "real report"


def test_directory_errors_skip_pages_and_links(tmp_path: Path) -> None:
    run = _scaffolded_run(tmp_path)
    blocker = run.pp_archive_path / "lane1"
    blocker.write_text("file in the way", encoding="utf-8")

    result = create_product_level(run, _products())

    assert result.errors
    assert (run.archive_path / "tileviz" / "index.html").exists()
    assert not (run.archive_path / "tileviz_lane1.html").exists()
    assert not (run.no_archive_path / "lane1" / "1000_1#1.cram").is_symlink()

    blocker.unlink()
    retried = create_product_level(run, _products())

    assert retried.errors == []
    assert (run.pp_archive_path / "lane1" / "plex1").is_dir()
    assert "No tileviz data available" in (run.archive_path / "tileviz_lane1.html").read_text(encoding="utf-8")
    assert (run.no_archive_path / "lane1" / "1000_1#1.cram").is_symlink()


def test_symlink_failure_is_fatal(tmp_path: Path) -> None:
    run = _scaffolded_run(tmp_path)
    blocking_file = run.no_archive_path / "lane1" / "1000_1#1.cram"
    blocking_file.parent.mkdir(parents=True)
    blocking_file.write_text("not a link", encoding="utf-8")

    with pytest.raises(SymlinkCreationError, match="Failed to create a symlink"):
        create_product_level(run, _products())


@pytest.mark.parametrize("products", [None, object()])
def test_products_required(tmp_path: Path, products) -> None:
    run = _scaffolded_run(tmp_path)

    with pytest.raises(ProductsNotAvailableError, match="products attribute should be implemented"):
        create_product_level(run, products)


def test_tileviz_dirs_for_lanes_only(tmp_path: Path) -> None:
    run = _scaffolded_run(tmp_path)
    products = ProductSet(
        lanes=[Product.lane(1000, 1), Product.lane(1000, 2)],
        data_products=[Product.data_product([Component(1000, 1, 1), Component(1000, 2, 1)])],
    )

    dirs = product_level_dirs(run, products)

    tileviz = [path for path in dirs if path.name.startswith("tileviz_")]
    assert tileviz == [run.archive_path / "tileviz_lane1", run.archive_path / "tileviz_lane2"]
    assert len(dirs) == 3 * 6 + 2


def test_merged_product_link(tmp_path: Path) -> None:
    run = _scaffolded_run(tmp_path)
    products = ProductSet(
        lanes=[Product.lane(1000, 1), Product.lane(1000, 2)],
        data_products=[Product.data_product([Component(1000, 1, 4), Component(1000, 2, 4)])],
    )

    result = create_product_level(run, products)

    assert result.ok
    link = run.no_archive_path / "plex4" / "1000_1-2#4.cram"
    assert os.readlink(link) == os.path.join("..", "..", "no_cal", "1000_1-2#4.cram")
