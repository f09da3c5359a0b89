"""
Per-product directories, tileviz pages and stage1 links.

Runs after top-level scaffolding, once the product set is known. Tileviz
pages and stage1 links are only written when every product directory was
created, and both steps skip what already exists so that an analysis
folder can be scaffolded again after a partial run.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from runscaffold.errors import ProductsNotAvailableError, SymlinkCreationError
from runscaffold.io.dirs import make_directories
from runscaffold.io.index_pages import create_lane_indexes, create_run_index
from runscaffold.models.product import PRODUCT_CATEGORIES, Product, ProductSet
from runscaffold.models.run import Run
from runscaffold.obs.logging import log_event
from runscaffold.pipeline.result import ScaffoldResult

STAGE1_EXT = "cram"


def _require_products(products: ProductSet | None) -> ProductSet:
    required = (*PRODUCT_CATEGORIES, "all_products")
    if products is None or not all(hasattr(products, name) for name in required):
        raise ProductsNotAvailableError("products attribute should be implemented")
    return products


def product_level_dirs(run: Run, products: ProductSet) -> list[Path]:
    archive_path = run.archive_path
    no_archive_path = run.no_archive_path
    pp_archive_path = run.pp_archive_path

    dirs: list[Path] = []
    for product in products.all_products():
        dirs.extend(
            [
                product.path(archive_path),
                product.qc_out_path(archive_path),
                product.short_files_cache_path(archive_path),
                product.path(no_archive_path),
                product.stage1_out_path(no_archive_path),
                product.path(pp_archive_path),
            ]
        )
    dirs.extend(lane.tileviz_path(archive_path) for lane in products.lanes)
    return dirs


def _link_stage1_output(run: Run, product: Product, logger: logging.Logger) -> None:
    link = product.file_path(product.stage1_out_path(run.no_archive_path), ext=STAGE1_EXT)
    # the analysis folder may be reused, keep whatever link is there
    if link.is_symlink():
        log_event(logger, logging.DEBUG, "symlink_exists", "Stage1 link already present", link=link)
        return

    target = product.file_path(run.recalibrated_path, ext=STAGE1_EXT)
    relative_target = os.path.relpath(target, link.parent)
    # the target is written later by the stage1 job
    try:
        os.symlink(relative_target, link)
    except OSError as exc:
        raise SymlinkCreationError(str(link), relative_target) from exc
    log_event(
        logger,
        logging.INFO,
        "symlink_created",
        "Stage1 link created",
        link=link,
        target=relative_target,
    )


def create_product_level(
    run: Run,
    products: ProductSet | None,
    *,
    logger: logging.Logger | None = None,
) -> ScaffoldResult:
    logger = logger or logging.getLogger(__name__)
    products = _require_products(products)

    dirs = product_level_dirs(run, products)
    create_run_index(run, products.lanes, logger=logger)

    errors = make_directories(dirs)

    if not errors:
        create_lane_indexes(run, products.lanes, logger=logger)
        for product in products.data_products:
            _link_stage1_output(run, product, logger)

    log_event(
        logger,
        logging.INFO if not errors else logging.WARNING,
        "product_level_scaffolded",
        "Product-level directories scaffolded",
        products_total=len(products.lanes) + len(products.data_products),
        dirs_total=len(dirs),
        errors_total=len(errors),
    )

    message = "\n".join(["Created the following directories:", *(str(path) for path in dirs)])
    return ScaffoldResult(msgs=[message], errors=errors)
