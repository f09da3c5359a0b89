from pathlib import Path

import pytest

from runscaffold.models.product import Component, Composition, Product, ProductSet


def test_lane_paths() -> None:
    lane = Product.lane(1000, 2)
    base = Path("/arch")

    assert lane.file_name_root == "1000_2"
    assert lane.path(base) == base / "lane2"
    assert lane.qc_out_path(base) == base / "lane2" / "qc"
    assert lane.short_files_cache_path(base) == base / "lane2" / ".npg_cache_10000"
    assert lane.stage1_out_path(base) == base / "lane2"
    assert lane.tileviz_path(base) == base / "tileviz_lane2"
    assert str(lane.tileviz_path("..")) + ".html" == "../tileviz_lane2.html"


def test_tagged_data_product_paths() -> None:
    product = Product.data_product([Component(1000, 1, 5)])
    base = Path("/na")

    assert product.file_name_root == "1000_1#5"
    assert product.path(base) == base / "lane1" / "plex5"
    assert product.stage1_out_path(base) == base / "lane1"
    assert product.file_path(base, ext="cram") == base / "1000_1#5.cram"
    assert product.file_path(base) == base / "1000_1#5"


def test_merged_data_product_paths() -> None:
    product = Product.data_product([Component(1000, 2, 3), Component(1000, 1, 3)])
    base = Path("/na")

    assert product.file_name_root == "1000_1-2#3"
    assert product.path(base) == base / "plex3"
    assert product.stage1_out_path(base) == base / "plex3"


def test_tileviz_path_only_for_lanes() -> None:
    product = Product.data_product([Component(1000, 1, 5)])

    with pytest.raises(ValueError):
        product.tileviz_path("/arch")


def test_lane_validation() -> None:
    with pytest.raises(ValueError):
        Product(Composition((Component(1, 1), Component(1, 2))), "lane")
    with pytest.raises(ValueError):
        Product(Composition((Component(1, 1, 4),)), "lane")
    with pytest.raises(ValueError):
        Composition(())


def test_product_set_enumerates_all_categories() -> None:
    lane = Product.lane(1000, 1)
    plex = Product.data_product([Component(1000, 1, 1)])
    products = ProductSet(lanes=[lane], data_products=[plex])

    assert list(products.all_products()) == [lane, plex]
    assert products.by_category() == {"lanes": [lane], "data_products": [plex]}

    with pytest.raises(ValueError):
        ProductSet(lanes=[plex])
