from pathlib import Path
from typing import Iterable, Optional, Union

PathLike = Union[str, Path]


class StoreError(Exception):
    """Base class for every failure raised by the resource locator and the reconciler."""


class DirectoryNotFound(StoreError):
    def __init__(self, path: PathLike):
        self.path = Path(path)
        super().__init__(f"Directory '{self.path}' not found")


class FileNotFound(StoreError):
    def __init__(self, name: str, directory: PathLike):
        self.name = str(name)
        self.directory = Path(directory)
        super().__init__(f"File '{self.name}' not found in '{self.directory}'")


class ExtensionContamination(StoreError):
    def __init__(
        self,
        directory: PathLike,
        extension: str,
        allowed: Iterable[str],
        path: Optional[PathLike] = None,
    ):
        self.directory = Path(directory)
        self.extension = extension
        self.allowed = sorted(allowed)
        self.path = Path(path) if path is not None else None
        shown = f"'{self.path.name}'" if self.path is not None else "a file"
        super().__init__(
            f"Directory '{self.directory}' contained {shown} with extension "
            f"'{extension}' (allowed: {', '.join(self.allowed)})"
        )


class UndefinedResumePoint(StoreError):
    def __init__(self, series_id: str):
        self.series_id = str(series_id)
        super().__init__(
            f"Cannot resume after '{self.series_id}': series id is not in the spec index"
        )


class ResourceIOError(StoreError):
    """Listing or reading failed for a reason other than a missing path."""

    def __init__(self, path: PathLike, cause: Optional[BaseException] = None):
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"I/O error on '{self.path}'{detail}")
