"""
Products of a sequencing run and the paths they render.

A product is anything the pipeline produces output for: a whole lane, or a
sample-level data product that may be tagged (a plex) and may be merged
across several lanes. Each product renders its directories relative to a
base directory supplied by the caller, so the same product yields its
archive, no-archive and post-processing archive locations.

Naming examples for run 1000::

    lane 1                      dir lane1            file root 1000_1
    lane 1, tag 3               dir lane1/plex3      file root 1000_1#3
    lanes 1 and 2, tag 3        dir plex3            file root 1000_1-2#3
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Literal

ProductCategory = Literal["lane", "data_product"]

PRODUCT_CATEGORIES = ("lanes", "data_products")
QC_DIR_NAME = "qc"
SHORT_FILES_CACHE_DIR_NAME = ".npg_cache_10000"
TILEVIZ_PREFIX = "tileviz_"


@dataclass(frozen=True)
class Component:
    """
    One (run, lane, tag) triple making up a product.

    Attributes:
        id_run: Run identifier.
        position: Lane number.
        tag_index: Index of the sample tag, None for a whole lane.
    """
    id_run: int
    position: int
    tag_index: int | None = None


@dataclass(frozen=True)
class Composition:
    components: tuple[Component, ...]

    def __post_init__(self) -> None:
        if not self.components:
            raise ValueError("Composition requires at least one component")

    @property
    def num_components(self) -> int:
        return len(self.components)

    @property
    def positions(self) -> list[int]:
        return sorted({component.position for component in self.components})

    def get_component(self, index: int) -> Component:
        return self.components[index]


@dataclass(frozen=True)
class Product:
    composition: Composition
    category: ProductCategory

    def __post_init__(self) -> None:
        if self.category not in ("lane", "data_product"):
            raise ValueError(f"Unknown product category: {self.category}")
        if self.category == "lane":
            if self.composition.num_components != 1:
                raise ValueError("Lane product must have exactly one component")
            if self.composition.get_component(0).tag_index is not None:
                raise ValueError("Lane product cannot be tagged")

    @classmethod
    def lane(cls, id_run: int, position: int) -> "Product":
        return cls(Composition((Component(id_run, position),)), "lane")

    @classmethod
    def data_product(cls, components: list[Component]) -> "Product":
        return cls(Composition(tuple(components)), "data_product")

    @property
    def is_lane(self) -> bool:
        return self.category == "lane"

    @property
    def position(self) -> int:
        return self.composition.get_component(0).position

    @property
    def _tag_index(self) -> int | None:
        return self.composition.get_component(0).tag_index

    @property
    def file_name_root(self) -> str:
        first = self.composition.get_component(0)
        positions = "-".join(str(position) for position in self.composition.positions)
        root = f"{first.id_run}_{positions}"
        if first.tag_index is not None:
            root = f"{root}#{first.tag_index}"
        return root

    @property
    def dir_path(self) -> str:
        tag_index = self._tag_index
        if self.composition.num_components == 1:
            lane_dir = f"lane{self.position}"
            if tag_index is None:
                return lane_dir
            return f"{lane_dir}/plex{tag_index}"
        if tag_index is not None:
            return f"plex{tag_index}"
        return "lane" + "-".join(str(position) for position in self.composition.positions)

    def path(self, base: Path | str) -> Path:
        return Path(base) / self.dir_path

    def qc_out_path(self, base: Path | str) -> Path:
        return self.path(base) / QC_DIR_NAME

    def short_files_cache_path(self, base: Path | str) -> Path:
        return self.path(base) / SHORT_FILES_CACHE_DIR_NAME

    def stage1_out_path(self, base: Path | str) -> Path:
        # stage1 output is per lane; merged products keep their own directory
        if self.composition.num_components == 1:
            return Path(base) / f"lane{self.position}"
        return self.path(base)

    def tileviz_path(self, base: Path | str) -> Path:
        if not self.is_lane:
            raise ValueError(f"Tileviz path is only defined for lanes, not {self.file_name_root}")
        return Path(base) / f"{TILEVIZ_PREFIX}lane{self.position}"

    def file_path(self, base: Path | str, ext: str | None = None) -> Path:
        name = self.file_name_root
        if ext:
            name = f"{name}.{ext}"
        return Path(base) / name


@dataclass
class ProductSet:
    """
    All products of a run, grouped by category.

    Attributes:
        lanes: Lane products, one per sequenced lane.
        data_products: Sample-level products, tagged or merged.
    """
    lanes: list[Product] = field(default_factory=list)
    data_products: list[Product] = field(default_factory=list)

    def __post_init__(self) -> None:
        for product in self.lanes:
            if not product.is_lane:
                raise ValueError(f"Not a lane product: {product.file_name_root}")

    def by_category(self) -> dict[str, list[Product]]:
        return {"lanes": list(self.lanes), "data_products": list(self.data_products)}

    def all_products(self) -> Iterator[Product]:
        for products in self.by_category().values():
            yield from products
