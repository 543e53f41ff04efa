"""SpecIndex: the declared series, grouped by (data kind, country).

Series are kept in the order the specification declares them, one list per
bucket, because pages built from the data rely on that order. A reverse map
from series id to (bucket, position) gives lookups without scanning.
"""
import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from ..primitives import BucketKey, DataKind, Region, SeriesId, SeriesSpec
from .records import SeriesRecord

logger = logging.getLogger(__name__)


class SpecIndex:
    def __init__(self):
        self._buckets: Dict[BucketKey, List[SeriesSpec]] = {}
        self._reverse: Dict[SeriesId, Tuple[BucketKey, int]] = {}

    @classmethod
    def from_records(
        cls, records: Iterable[Union[SeriesSpec, SeriesRecord, Mapping[str, Any]]]
    ) -> "SpecIndex":
        index = cls()
        for r in records:
            if isinstance(r, SeriesSpec):
                index.insert(r)
            elif isinstance(r, SeriesRecord):
                index.insert(r.to_spec())
            else:
                index.insert(SeriesRecord.from_mapping(r).to_spec())
        return index

    def insert(self, spec: SeriesSpec) -> None:
        """Add ``spec``, or update it in place if its series id is already indexed."""
        key = spec.key
        slot = self._reverse.get(spec.series_id)
        if slot is None:
            seq = self._buckets.setdefault(key, [])
            seq.append(spec)
            self._reverse[spec.series_id] = (key, len(seq) - 1)
            return

        old_key, pos = slot
        if old_key == key:
            self._buckets[key][pos] = spec
            return

        # the series moved to another bucket: it is declared there from now on
        logger.debug(
            f"{spec.series_id} moved from {old_key[0]}/{old_key[1]} to {key[0]}/{key[1]}"
        )
        self._remove(spec.series_id)
        seq = self._buckets.setdefault(key, [])
        seq.append(spec)
        self._reverse[spec.series_id] = (key, len(seq) - 1)

    def _remove(self, series_id: SeriesId) -> None:
        key, pos = self._reverse.pop(series_id)
        seq = self._buckets[key]
        del seq[pos]
        for i in range(pos, len(seq)):
            self._reverse[seq[i].series_id] = (key, i)
        if not seq:
            del self._buckets[key]

    def lookup(self, series_id: Union[SeriesId, str]) -> Optional[SeriesSpec]:
        slot = self._reverse.get(SeriesId(series_id))
        if slot is None:
            return None
        key, pos = slot
        return self._buckets[key][pos]

    def bucket_of(self, series_id: Union[SeriesId, str]) -> Optional[BucketKey]:
        slot = self._reverse.get(SeriesId(series_id))
        return slot[0] if slot is not None else None

    def bucket(self, data_kind: DataKind, region: Region) -> List[SeriesSpec]:
        return list(self._buckets.get((data_kind, region), []))

    def keys(self) -> List[BucketKey]:
        return sorted(self._buckets)

    def iter_buckets(self) -> Iterator[Tuple[BucketKey, List[SeriesSpec]]]:
        """Yield (bucket key, series) by data kind, then country, in declaration order of the enums."""
        for key in self.keys():
            yield key, list(self._buckets[key])

    def reverse_items(self) -> Iterator[Tuple[SeriesId, BucketKey]]:
        for series_id, (key, _) in self._reverse.items():
            yield series_id, key

    def __iter__(self) -> Iterator[SeriesSpec]:
        for _, specs in self.iter_buckets():
            yield from specs

    def __len__(self) -> int:
        return len(self._reverse)

    def __contains__(self, series_id: object) -> bool:
        if not isinstance(series_id, str):
            return False
        return SeriesId(series_id) in self._reverse

    def __repr__(self) -> str:
        return f"SpecIndex({len(self._buckets)} buckets, {len(self)} series)"
