"""Turn provider search results into series specifications.

A selector names a country, a data type and the provider tags to search
with. The provider (a separate client, passed in as a callable) answers a tag
query with a list of items carrying an ``id`` and a ``title``; the
``enumerate``/``exclude``/``require`` rules then decide which titles are kept.
"""
import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Tuple

from pydantic import BaseModel, Field, field_validator

from .index.spec_index import SpecIndex
from .primitives import DataKind, Region, SeriesId, SeriesSpec

logger = logging.getLogger(__name__)

# Provider tag names differ from the display names for a few countries.
_PROVIDER_COUNTRY = {
    Region.SOUTH_KOREA: "korea",
    Region.UNITED_STATES: "usa",
}


class TagSelector(BaseModel):
    country: Region
    data_type: DataKind
    tags: List[str] = Field(default_factory=list)
    enumerate: List[str] = Field(default_factory=list)
    exclude: List[str] = Field(default_factory=list)
    require: List[str] = Field(default_factory=list)

    @field_validator("country", mode="before")
    @classmethod
    def parse_country(cls, v):
        return v if isinstance(v, Region) else Region.from_str(str(v))

    @field_validator("data_type", mode="before")
    @classmethod
    def parse_data_type(cls, v):
        return v if isinstance(v, DataKind) else DataKind.from_str(str(v))


def provider_country(region: Region) -> str:
    return _PROVIDER_COUNTRY.get(region, region.display_name.lower())


def tag_query(selector: TagSelector) -> str:
    """Tags joined with ``;`` and the provider country appended, e.g. ``unemployment;australia``."""
    parts = [t.strip() for t in selector.tags]
    parts.append(provider_country(selector.country))
    return ";".join(parts)


def is_selected(selector: TagSelector, title: str) -> bool:
    if selector.enumerate and not any(t == title for t in selector.enumerate):
        return False
    if selector.exclude and any(x in title for x in selector.exclude):
        return False
    if selector.require and any(r not in title for r in selector.require):
        return False
    return True


def select_series(
    selector: TagSelector, items: Iterable[Mapping[str, Any]]
) -> Tuple[List[SeriesSpec], List[Mapping[str, Any]]]:
    """Split provider items into selected series specs and dropped items."""
    selected: List[SeriesSpec] = []
    dropped: List[Mapping[str, Any]] = []
    logger.info(f"{selector.country} {selector.data_type}")
    for item in items:
        sid = str(item.get("id", "")).strip()
        title = str(item.get("title", ""))
        if sid and is_selected(selector, title):
            logger.info(f"      {sid} {title}")
            selected.append(SeriesSpec(selector.data_type, selector.country, SeriesId(sid)))
        else:
            logger.info(f"drop: {sid} {title}")
            dropped.append(item)
    return selected, dropped


def index_from_selectors(
    selectors: Iterable[TagSelector],
    fetch_items: Callable[[str], List[Dict[str, Any]]],
) -> SpecIndex:
    """Query the provider once per selector and fold every selected series into a SpecIndex."""
    index = SpecIndex()
    for selector in selectors:
        selected, _ = select_series(selector, fetch_items(tag_query(selector)))
        for spec in selected:
            index.insert(spec)
    return index
