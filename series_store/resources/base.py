"""Resource kinds and the file sets they resolve to.

A resource kind knows where its files live relative to the data root, and
which file extensions may live there. Asking a kind for its resources checks
that the whole directory is clean before handing back any paths, so a stray
file is reported instead of silently ignored.

Adding a new kind means writing a small class that implements
:class:`ResourceKind`; the interface itself does not change.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, List, Optional

from ..errors import (
    DirectoryNotFound,
    ExtensionContamination,
    FileNotFound,
    PathLike,
    ResourceIOError,
)

logger = logging.getLogger(__name__)


def join_paths(root: PathLike, segments: Iterable[str]) -> Path:
    """Join ``segments`` onto ``root`` and canonicalize. The directory must already exist."""
    path = Path(root)
    for s in segments:
        path = path / s
    try:
        resolved = path.resolve(strict=True)
    except (FileNotFoundError, NotADirectoryError):
        raise DirectoryNotFound(path) from None
    except OSError as e:
        raise ResourceIOError(path, e) from e
    if not resolved.is_dir():
        raise DirectoryNotFound(path)
    return resolved


def extension_of(path: Path) -> str:
    """Extension without the leading dot, '' when there is none."""
    return path.suffix[1:] if path.suffix else ""


def extension_is(path: Path, extension: str) -> bool:
    return extension_of(path) == extension


@dataclass(frozen=True)
class Resource:
    path: Path
    extension: str

    @property
    def name(self) -> str:
        return self.path.name

    @classmethod
    def from_path(cls, path: Path) -> "Resource":
        return cls(path=path, extension=extension_of(path))


class ResourceSet:
    """Ordered collection of the entries of one directory."""

    def __init__(self, resources: Iterable[Resource], directory: Optional[Path] = None):
        self._items: List[Resource] = list(resources)
        self.directory = directory

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ResourceSet({self.directory}, {[r.name for r in self._items]})"

    def paths(self) -> List[Path]:
        return [r.path for r in self._items]

    def names(self) -> List[str]:
        return [r.name for r in self._items]

    def filter_by_ext(self, extensions: Iterable[str]) -> "ResourceSet":
        allowed = set(extensions)
        return ResourceSet(
            (r for r in self._items if r.extension in allowed), self.directory
        )

    def only_ext(self, extensions: Iterable[str]) -> None:
        """Raise ExtensionContamination on the first entry with any other extension."""
        allowed = frozenset(extensions)
        for r in self._items:
            if r.extension not in allowed:
                directory = self.directory or r.path.parent
                raise ExtensionContamination(directory, r.extension, allowed, r.path)

    def find(self, name: str) -> Optional[Resource]:
        # match on the final path component only
        for r in self._items:
            if r.name == name:
                return r
        return None

    def has_file(self, name: str) -> bool:
        return self.find(name) is not None


class ResourceKind(ABC):
    """Interface implemented by every resource kind.

    Implementers supply :meth:`segments` and ``allowed``; ``extensions``
    narrows what :meth:`resources` returns and ``filename`` restricts it to a
    single named file.
    """

    allowed: FrozenSet[str] = frozenset()
    extensions: Optional[FrozenSet[str]] = None
    filename: Optional[str] = None

    @abstractmethod
    def segments(self) -> List[str]:
        """Path segments of the kind's directory, relative to the data root."""

    def directory(self, root: PathLike) -> Path:
        return join_paths(root, self.segments())

    def list(self, root: PathLike) -> ResourceSet:
        directory = self.directory(root)
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise ResourceIOError(directory, e) from e
        logger.debug(f"Listed {len(entries)} entries in {directory}")
        return ResourceSet((Resource.from_path(p) for p in entries), directory)

    def resources(self, root: PathLike) -> ResourceSet:
        everything = self.list(root)
        everything.only_ext(self.allowed)
        canonical = everything.filter_by_ext(
            self.extensions if self.extensions is not None else self.allowed
        )
        if self.filename is not None:
            canonical = ResourceSet(
                (r for r in canonical if r.name == self.filename), canonical.directory
            )
        return canonical

    def has_file(self, root: PathLike, name: str) -> bool:
        return self.resources(root).has_file(name)

    def _find(self, root: PathLike, name: str) -> Resource:
        found = self.resources(root).find(name)
        if found is None:
            raise FileNotFound(name, self.directory(root))
        return found

    def read(self, root: PathLike, name: str) -> str:
        found = self._find(root, name)
        try:
            return found.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ResourceIOError(found.path, e) from e

    def read_bytes(self, root: PathLike, name: str) -> bytes:
        found = self._find(root, name)
        try:
            return found.path.read_bytes()
        except OSError as e:
            raise ResourceIOError(found.path, e) from e

    def full_path(self, root: PathLike, name: str) -> Path:
        """Path of ``name`` inside the kind's directory, whether or not it is a declared resource."""
        directory = self.directory(root)
        try:
            return (directory / name).resolve(strict=True)
        except (FileNotFoundError, NotADirectoryError):
            raise FileNotFound(name, directory) from None
        except OSError as e:
            raise ResourceIOError(directory / name, e) from e
