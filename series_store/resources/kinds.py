from dataclasses import dataclass
from typing import List

from ..primitives import DataKind, Region
from .base import ResourceKind


# === series data =====================================================================


@dataclass(frozen=True)
class RawData(ResourceKind):
    """Downloaded CSV series for one (data kind, country). Metadata files may sit beside them."""

    data_kind: DataKind
    region: Region

    allowed = frozenset({"csv", "meta"})
    extensions = frozenset({"csv"})

    def segments(self) -> List[str]:
        return ["raw_data", str(self.data_kind), self.region.as_filepath()]


@dataclass(frozen=True)
class MetaData(ResourceKind):
    """Per-series metadata, stored in the raw data directory."""

    data_kind: DataKind
    region: Region

    allowed = frozenset({"csv", "meta"})
    extensions = frozenset({"meta"})

    def segments(self) -> List[str]:
        return ["raw_data", str(self.data_kind), self.region.as_filepath()]


@dataclass(frozen=True)
class TransformedData(ResourceKind):
    data_kind: DataKind
    region: Region

    allowed = frozenset({"csv", "meta"})
    extensions = frozenset({"csv"})

    def segments(self) -> List[str]:
        return ["transformed_data", str(self.data_kind), self.region.as_filepath()]


# === specifications ==================================================================


@dataclass(frozen=True)
class Specs(ResourceKind):
    """Specification files. Nothing but ``.keytree`` is accepted."""

    allowed = frozenset({"keytree"})

    def segments(self) -> List[str]:
        return ["specs"]


@dataclass(frozen=True)
class TsPageSpec(ResourceKind):
    allowed = frozenset({"keytree"})

    def segments(self) -> List[str]:
        return ["ts_graphics", "spec"]


# === static assets ===================================================================


@dataclass(frozen=True)
class PidGraphicsCss(ResourceKind):
    allowed = frozenset({"css"})
    filename = "style.css"

    def segments(self) -> List[str]:
        return ["pid_graphics", "css"]


@dataclass(frozen=True)
class PidGraphicsJs(ResourceKind):
    """Javascript helpers; fails if anything other than ``.js`` is in the directory."""

    allowed = frozenset({"js"})

    def segments(self) -> List[str]:
        return ["pid_graphics", "js"]


@dataclass(frozen=True)
class PidGraphicsFavicon(ResourceKind):
    allowed = frozenset({"png"})
    filename = "favicon.png"

    def segments(self) -> List[str]:
        return ["pid_graphics", "favicon"]


@dataclass(frozen=True)
class TsGraphicsJs(ResourceKind):
    allowed = frozenset({"js"})

    def segments(self) -> List[str]:
        return ["ts_graphics", "js"]
