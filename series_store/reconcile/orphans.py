import logging
from pathlib import Path
from typing import List, Tuple

from ..errors import PathLike, ResourceIOError
from ..index.spec_index import SpecIndex
from ..primitives import DataKind, Region, SeriesId
from ..resources.base import Resource, ResourceSet, join_paths
from ..resources.kinds import RawData, TransformedData

logger = logging.getLogger(__name__)

TREES = {"raw_data": RawData, "transformed_data": TransformedData}

# directory name -> enum member, exact canonical forms only
_KINDS = {str(k): k for k in DataKind}
_REGIONS = {r.as_filepath(): r for r in Region}


def _entries(path: Path) -> Tuple[List[Path], List[Path]]:
    """(subdirectories, files) of ``path``, each sorted by name."""
    try:
        children = sorted(path.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise ResourceIOError(path, e) from e
    dirs = [p for p in children if p.is_dir()]
    files = [p for p in children if not p.is_dir()]
    return dirs, files


def _data_files(directory: Path, files: List[Path], allowed) -> ResourceSet:
    # same extension check as a resource kind, for directories no kind resolves to
    listing = ResourceSet((Resource.from_path(p) for p in files), directory)
    listing.only_ext(allowed)
    return listing


def _is_declared(spec_index: SpecIndex, r: Resource) -> bool:
    sid = SeriesId(r.path.stem)
    return sid in spec_index or sid.stem() in spec_index


def find_orphans(spec_index: SpecIndex, root: PathLike, tree: str = "raw_data") -> List[Path]:
    """Data files on disk whose series id, or its base id, is not declared in ``spec_index``.

    Files in directories that are not a known data type or country, and files
    lying loose above the country level, are reported as well. Nothing is
    deleted; the caller decides what to do with the result.
    """
    if tree not in TREES:
        raise ValueError(f"tree must be one of {', '.join(TREES)}, got '{tree}'")
    kind = TREES[tree]
    allowed = kind.allowed
    base = join_paths(root, [tree])

    listings: List[ResourceSet] = []
    kind_dirs, loose = _entries(base)
    if loose:
        logger.warning(f"{len(loose)} file(s) directly under {base}")
        listings.append(_data_files(base, loose, allowed))

    for kind_dir in kind_dirs:
        data_kind = _KINDS.get(kind_dir.name)
        if data_kind is None:
            logger.warning(f"{kind_dir} is not a known data type")
        region_dirs, loose = _entries(kind_dir)
        if loose:
            logger.warning(f"{len(loose)} file(s) directly under {kind_dir}")
            listings.append(_data_files(kind_dir, loose, allowed))

        for region_dir in region_dirs:
            region = _REGIONS.get(region_dir.name)
            if data_kind is not None and region is not None:
                resource_kind = kind(data_kind, region)
                # checks the whole directory for stray extensions
                listing = resource_kind.list(root)
                listing.only_ext(resource_kind.allowed)
                listings.append(listing)
                continue
            if region is None:
                logger.warning(f"{region_dir} is not a known country")
            _, files = _entries(region_dir)
            listings.append(_data_files(region_dir, files, allowed))

    orphans = [
        r.path for listing in listings for r in listing if not _is_declared(spec_index, r)
    ]
    logger.info(f"Found {len(orphans)} orphan file(s) under {base}")
    return orphans
