import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

import pandas as pd

from ..errors import PathLike
from ..index.spec_index import SpecIndex
from ..primitives import SeriesSpec
from ..resources.kinds import RawData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeriesStatus:
    spec: SeriesSpec
    filename: str
    found: bool
    path: Optional[Path] = None


@dataclass
class Report:
    """Outcome of a verification pass, one entry per declared series in bucket order."""

    entries: List[SeriesStatus] = field(default_factory=list)

    @property
    def found(self) -> List[SeriesStatus]:
        return [e for e in self.entries if e.found]

    @property
    def missing(self) -> List[SeriesStatus]:
        return [e for e in self.entries if not e.found]

    @property
    def ok(self) -> bool:
        return not self.missing

    def __len__(self) -> int:
        return len(self.entries)

    def lines(self) -> List[str]:
        return [f"{' ok ' if e.found else 'none'} {e.filename}" for e in self.entries]

    def summary(self) -> Dict[str, int]:
        n_found = len(self.found)
        return {
            "declared": len(self.entries),
            "found": n_found,
            "missing": len(self.entries) - n_found,
        }

    def to_records(self) -> List[Dict[str, Any]]:
        return [
            {
                "data_kind": str(e.spec.data_kind),
                "region": e.spec.region.as_filepath(),
                "series_id": str(e.spec.series_id),
                "filename": e.filename,
                "found": e.found,
                "path": str(e.path) if e.path is not None else None,
            }
            for e in self.entries
        ]

    def to_frame(self) -> pd.DataFrame:
        columns = ["data_kind", "region", "series_id", "filename", "found", "path"]
        df = pd.DataFrame(self.to_records(), columns=columns)
        # keep None for missing paths; newer pandas infers a string dtype with NaN
        paths = df["path"].astype(object)
        df["path"] = paths.where(paths.notna(), None)
        return df


def verify(spec_index: SpecIndex, root: PathLike, kind: Type = RawData) -> Report:
    """Check every declared series against the files on disk.

    Each bucket directory is listed once. Missing files are collected rather
    than raised; a missing or contaminated directory still aborts the pass.
    """
    report = Report()
    for (data_kind, region), specs in spec_index.iter_buckets():
        resource_kind = kind(data_kind, region)
        listing = resource_kind.resources(root)
        for spec in specs:
            filename = spec.filename("csv")
            hit = listing.find(filename)
            report.entries.append(
                SeriesStatus(
                    spec=spec,
                    filename=filename,
                    found=hit is not None,
                    path=hit.path if hit is not None else None,
                )
            )
        logger.debug(f"Checked {len(specs)} series in {listing.directory}")
    s = report.summary()
    logger.info(
        f"Verified {s['declared']} series: {s['found']} found, {s['missing']} missing"
    )
    return report
