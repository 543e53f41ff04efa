import logging
from typing import Any, Dict, List, Optional

import yaml  # type: ignore[import]
from pydantic import BaseModel, Field, ValidationError, field_validator

from .index.records import SeriesRecord, load_series_csv, normalize_keys
from .index.spec_index import SpecIndex


# Compatibility helper: safely convert Pydantic models to plain dicts across
# pydantic versions. Non-model objects are returned unchanged.
def model_as_dict(obj):
    if isinstance(obj, BaseModel):
        if hasattr(obj, "model_dump") and callable(getattr(obj, "model_dump")):
            return obj.model_dump()
        if hasattr(obj, "dict") and callable(getattr(obj, "dict")):
            return obj.dict()
    return obj


class ReportsConfig(BaseModel):
    artifact_dir: str = "data/_artifacts"
    write_manifest: bool = True


class LoggingConfig(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def check_level(cls, v):
        name = str(v).upper()
        if name not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level '{v}'")
        return name


class ConfigModel(BaseModel):
    data_root: str = "./shared_data"
    series: List[SeriesRecord] = Field(default_factory=list)
    series_csv: Optional[str] = None
    reports: ReportsConfig = Field(default_factory=ReportsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("series", mode="before")
    @classmethod
    def parse_series(cls, v):
        if v is None:
            return []
        return [normalize_keys(r) if isinstance(r, dict) else r for r in v]

    def spec_index(self) -> SpecIndex:
        """Index built from the inline ``series`` entries followed by ``series_csv``."""
        records = list(self.series)
        if self.series_csv:
            records.extend(load_series_csv(self.series_csv))
        return SpecIndex.from_records(records)


DEFAULT_CONFIG: Dict[str, Any] = {
    "data_root": "./shared_data",
    "series": [],
    "series_csv": None,
    "reports": {"artifact_dir": "data/_artifacts", "write_manifest": True},
    "logging": {"level": "INFO"},
}


def load_config(path: Optional[str] = None) -> ConfigModel:
    if path:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    else:
        cfg = DEFAULT_CONFIG
    try:
        model = ConfigModel(**cfg)
    except ValidationError as e:
        logging.getLogger(__name__).error("Config validation error:")
        print(e.json())
        raise
    return model
