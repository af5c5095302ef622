from glob import has_magic
from typing import IO, TypeAlias

from fsspec import AbstractFileSystem
from fsspec import open as fsspec_open
from fsspec.core import url_to_fs
from fsspec.implementations.dirfs import DirFileSystem
from fsspec.implementations.local import LocalFileSystem


class DataFolder(DirFileSystem):
    """fsspec DirFileSystem rooted at the folder holding the region files. Paths are relative to `path`.

    Args:
        path: local path or url of the folder
        fs: an initialized filesystem to wrap. If not given one is created from `path` and `storage_options`
        **storage_options: passed to the new filesystem
    """

    def __init__(self, path: str, fs: AbstractFileSystem | None = None, **storage_options):
        super().__init__(path=path, fs=fs if fs else url_to_fs(path, **storage_options)[0])

    def list_files(self, glob_pattern: str = "*", recursive: bool = False) -> list[str]:
        """
        Sorted relative paths of the files matching `glob_pattern`. A bare extension such as ".txt" matches every
        file with that extension.
        """
        if not has_magic(glob_pattern):
            glob_pattern = f"*{glob_pattern}"
        if recursive and not glob_pattern.startswith("**"):
            glob_pattern = f"**/{glob_pattern}"
        matches = self.glob(glob_pattern, detail=True)
        return sorted(path for path, info in matches.items() if info["type"] != "directory")

    def resolve_path(self, path: str) -> str:
        """Full path or url of `path`, used in logs and error messages."""
        if isinstance(self.fs, LocalFileSystem):
            return self.fs._strip_protocol(self._join(path))
        return self.fs.unstrip_protocol(self._join(path))


DataFolderLike: TypeAlias = str | tuple[str, dict] | tuple[str, AbstractFileSystem] | DataFolder


def get_datafolder(data: DataFolderLike) -> DataFolder:
    """
    `DataFolder` factory. Accepts a path or url, a `(path, storage options)` tuple, a `(path, filesystem)` tuple or
    a DataFolder, which is returned as is.
    """
    if isinstance(data, DataFolder):
        return data
    if isinstance(data, str):
        return DataFolder(data)
    if isinstance(data, tuple) and len(data) == 2 and isinstance(data[0], str):
        path, options = data
        if isinstance(options, dict):
            return DataFolder(path, **options)
        if isinstance(options, AbstractFileSystem):
            return DataFolder(path, fs=options)
    raise ValueError(f"Can not build a DataFolder from {data!r}: expected a path, (path, options) or (path, fs)")


def open_file(file: IO | str, mode="rt", **kwargs):
    """Open `file` with fsspec if it is a path or url. Already opened files are returned unchanged."""
    if isinstance(file, str):
        return fsspec_open(file, mode, **kwargs).open()
    return file
