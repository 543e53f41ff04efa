"""Value types shared by the resource locator, the spec index and the reconciler."""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import pycountry


class _DeclaredOrder:
    # Enum members compare by declaration order so bucket keys sort the same way on every run.
    def _rank(self) -> int:
        return type(self)._member_names_.index(self.name)  # type: ignore[attr-defined]

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._rank() < other._rank()

    def __le__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._rank() <= other._rank()

    def __gt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._rank() > other._rank()

    def __ge__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._rank() >= other._rank()


class DataKind(_DeclaredOrder, Enum):
    U = "u"
    CPI = "cpi"
    INF = "inf"
    INT = "int"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, s: str) -> "DataKind":
        key = (s or "").strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Failed to read data type '{s}'")


class Region(_DeclaredOrder, Enum):
    """Countries with good data. Value is (display name, ISO3)."""

    AUSTRALIA = ("Australia", "AUS")
    AUSTRIA = ("Austria", "AUT")
    BELGIUM = ("Belgium", "BEL")
    CANADA = ("Canada", "CAN")
    CHILE = ("Chile", "CHL")
    CZECH_REPUBLIC = ("Czech Republic", "CZE")
    DENMARK = ("Denmark", "DNK")
    ESTONIA = ("Estonia", "EST")
    FINLAND = ("Finland", "FIN")
    FRANCE = ("France", "FRA")
    GERMANY = ("Germany", "DEU")
    GREECE = ("Greece", "GRC")
    IRELAND = ("Ireland", "IRL")
    ISRAEL = ("Israel", "ISR")
    ITALY = ("Italy", "ITA")
    JAPAN = ("Japan", "JPN")
    LATVIA = ("Latvia", "LVA")
    NETHERLANDS = ("Netherlands", "NLD")
    NEW_ZEALAND = ("New Zealand", "NZL")
    NORWAY = ("Norway", "NOR")
    POLAND = ("Poland", "POL")
    SERBIA = ("Serbia", "SRB")
    SOUTH_KOREA = ("South Korea", "KOR")
    SPAIN = ("Spain", "ESP")
    SWEDEN = ("Sweden", "SWE")
    SWITZERLAND = ("Switzerland", "CHE")
    UNITED_KINGDOM = ("United Kingdom", "GBR")
    UNITED_STATES = ("United States", "USA")

    @property
    def display_name(self) -> str:
        return self.value[0]

    @property
    def iso3(self) -> str:
        return self.value[1]

    def as_filepath(self) -> str:
        """Filesystem-safe form, e.g. ``united_states``."""
        return self.display_name.lower().replace(" ", "_")

    def __str__(self) -> str:
        return self.display_name

    @classmethod
    def from_str(cls, s: str) -> "Region":
        """Parse a display name, a filesystem form or an ISO alpha-2/alpha-3 code."""
        raw = (s or "").strip()
        for member in cls:
            if raw == member.display_name or raw.lower() == member.as_filepath():
                return member
        iso3 = iso_to_iso3(raw)
        for member in cls:
            if iso3 == member.iso3:
                return member
        raise ValueError(f"Unknown country '{s}'")


def iso_to_iso3(code: str) -> str:
    # Accept ISO3, ISO2 or a pycountry name; returns the input upper-cased when nothing matches
    if not code:
        return code
    code = code.strip()
    if len(code) == 3:
        return code.upper()
    if len(code) == 2:
        try:
            c = pycountry.countries.get(alpha_2=code.upper())
        except KeyError:
            c = None
        if c:
            return c.alpha_3
    try:
        return pycountry.countries.lookup(code).alpha_3
    except LookupError:
        return code.upper()


class SeriesId(str):
    """A provider series id like ``LRHUTTTTAUA156N``, or a transformation of one like
    ``LRHUTTTTAUA156N_a``."""

    def stem(self) -> "SeriesId":
        """Return the id without its transformation suffix."""
        return SeriesId(self.split("_", 1)[0])

    def __repr__(self) -> str:
        return f"SeriesId({str.__repr__(self)})"


BucketKey = Tuple[DataKind, Region]


@dataclass(frozen=True)
class SeriesSpec:
    data_kind: DataKind
    region: Region
    series_id: SeriesId

    def __post_init__(self):
        if not isinstance(self.series_id, SeriesId):
            object.__setattr__(self, "series_id", SeriesId(self.series_id))

    @property
    def key(self) -> BucketKey:
        return (self.data_kind, self.region)

    def filename(self, ext: str = "csv") -> str:
        return f"{self.series_id}.{ext}"
