from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from runscaffold.models.product import Component, Product, ProductSet
from runscaffold.models.run import Run

INTENSITIES_SUBPATH = Path("Data") / "Intensities"
BASECALLS_DIR_NAME = "BaseCalls"


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or validated."""


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id_run: int = Field(gt=0)
    runfolder_path: Path
    intensity_path: Path | None = Field(default=None)
    basecall_path: Path | None = Field(default=None)
    analysis_path: Path | None = Field(default=None)
    bam_basecall_path: Path | None = Field(default=None)
    timestamp: str | None = Field(default=None)

    def resolved_intensity_path(self) -> Path:
        return self.intensity_path or self.runfolder_path / INTENSITIES_SUBPATH

    def resolved_basecall_path(self) -> Path:
        return self.basecall_path or self.resolved_intensity_path() / BASECALLS_DIR_NAME


class ComponentConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    position: int = Field(gt=0)
    tag_index: int | None = Field(default=None, ge=0)


class DataProductConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    components: list[ComponentConfig] = Field(min_length=1)


class ProductsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    lanes: list[int] = Field(default_factory=list)
    data_products: list[DataProductConfig] = Field(default_factory=list)

    @field_validator("lanes")
    @classmethod
    def _validate_lanes(cls, value: list[int]) -> list[int]:
        for position in value:
            if position <= 0:
                raise ValueError(f"Lane position must be positive: {position}")
        if len(set(value)) != len(value):
            raise ValueError("Lane positions must be unique")
        return value


class ObsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    log_jsonl: bool = Field(default=True)
    log_file: Path | None = Field(default=None)


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    run: RunConfig
    products: ProductsConfig = Field(default_factory=ProductsConfig)
    obs: ObsConfig = Field(default_factory=ObsConfig)


@dataclass(frozen=True)
class LoadedConfig:
    config: AppConfig
    raw: dict[str, Any]


def load_config(path: Path) -> LoadedConfig:
    if not path.exists():
        raise ConfigError(f"Config not found: {path}")

    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigError("Config root must be a mapping")

    try:
        config = AppConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

    return LoadedConfig(config=config, raw=payload)


def build_run(config: AppConfig, timestamp: str) -> Run:
    run_cfg = config.run
    return Run(
        id_run=run_cfg.id_run,
        timestamp=run_cfg.timestamp or timestamp,
        intensity_path=run_cfg.resolved_intensity_path(),
        basecall_path=run_cfg.resolved_basecall_path(),
        analysis_path=run_cfg.analysis_path,
        bam_basecall_path=run_cfg.bam_basecall_path,
    )


def build_products(config: AppConfig) -> ProductSet:
    id_run = config.run.id_run
    lanes = [Product.lane(id_run, position) for position in sorted(config.products.lanes)]
    data_products = [
        Product.data_product(
            [Component(id_run, item.position, item.tag_index) for item in entry.components]
        )
        for entry in config.products.data_products
    ]
    return ProductSet(lanes=lanes, data_products=data_products)
