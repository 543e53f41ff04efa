from typing import List, Union

from ..errors import UndefinedResumePoint
from ..index.spec_index import SpecIndex
from ..primitives import SeriesId, SeriesSpec


def resume_from(spec_index: SpecIndex, last_series_id: Union[SeriesId, str]) -> List[SeriesSpec]:
    """Series still to process after ``last_series_id``, in bucket order.

    Raises UndefinedResumePoint when the id is not in the index.
    """
    last = SeriesId(last_series_id)
    if last not in spec_index:
        raise UndefinedResumePoint(last)
    remaining: List[SeriesSpec] = []
    seen = False
    for spec in spec_index:
        if seen:
            remaining.append(spec)
        elif spec.series_id == last:
            seen = True
    return remaining
