"""Validation of series records handed over by the specification parser."""
from typing import Any, Dict, List

import pandas as pd
from pydantic import BaseModel, field_validator

from ..primitives import DataKind, Region, SeriesId, SeriesSpec


def normalize_keys(m: Dict[str, Any]) -> Dict[str, Any]:
    """Map ``data_kind``/``region`` keys onto the spec file names ``data_type``/``country``."""
    data = dict(m)
    if "data_type" not in data and "data_kind" in data:
        data["data_type"] = data.pop("data_kind")
    if "country" not in data and "region" in data:
        data["country"] = data.pop("region")
    return data


class SeriesRecord(BaseModel):
    """One ``series`` entry of a series specification.

    Accepts the keys used in the spec files (``data_type``, ``country``) as
    well as ``data_kind``/``region``.
    """

    data_type: DataKind
    country: Region
    series_id: str

    @field_validator("data_type", mode="before")
    @classmethod
    def parse_data_type(cls, v):
        if isinstance(v, DataKind):
            return v
        return DataKind.from_str(str(v))

    @field_validator("country", mode="before")
    @classmethod
    def parse_country(cls, v):
        if isinstance(v, Region):
            return v
        return Region.from_str(str(v))

    @field_validator("series_id")
    @classmethod
    def check_series_id(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("series_id must not be empty")
        return v

    @classmethod
    def from_mapping(cls, m: Dict[str, Any]) -> "SeriesRecord":
        return cls(**normalize_keys(m))

    def to_spec(self) -> SeriesSpec:
        return SeriesSpec(self.data_type, self.country, SeriesId(self.series_id))


def load_series_csv(path: str) -> List[SeriesRecord]:
    """Read a ``data_type,country,series_id`` listing into validated records."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    missing = {"data_type", "country", "series_id"} - set(df.columns)
    if missing:
        raise ValueError(f"{path} is missing columns: {', '.join(sorted(missing))}")
    return [SeriesRecord.from_mapping(r) for r in df.to_dict(orient="records")]
