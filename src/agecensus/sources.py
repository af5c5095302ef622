"""Age sources backed by text files, one age per line, on any fsspec filesystem."""

from typing import IO

from agecensus.data import AgeInputIterator, AgeSourceFactory
from agecensus.io import DataFolderLike, get_datafolder, open_file
from agecensus.utils.logging import logger


DEFAULT_EXTENSION = ".txt"


class FileAgeInput(AgeInputIterator):
    """Reads ages lazily from a text file. Blank lines are ignored.
    The file is opened on creation and closed by `close`. A line that is not an integer raises ValueError.

    Args:
        file: a path/url (opened with fsspec) or an already opened text file, which will be owned by this source
        name: used in error messages (Default: the file's name)
    """

    def __init__(self, file: IO | str, name: str | None = None):
        self.name = name or (file if isinstance(file, str) else getattr(file, "name", repr(file)))
        self._file = open_file(file, mode="rt")
        self._line_number = 0
        self.closed = False

    def __next__(self) -> int:
        for line in self._file:
            self._line_number += 1
            line = line.strip()
            if not line:
                continue
            try:
                return int(line)
            except ValueError as e:
                raise ValueError(f"{self.name}:{self._line_number}: invalid age {line!r}") from e
        raise StopIteration

    def close(self) -> None:
        if not self.closed:
            self._file.close()
            self.closed = True


def folder_factory(data_folder: DataFolderLike, extension: str = DEFAULT_EXTENSION) -> AgeSourceFactory:
    """
        Build a factory mapping region `name` to the file `name{extension}` in `data_folder`.
        Regions without a file resolve to None.
    Args:
      data_folder: local or remote folder holding one file per region
      extension: file extension of region files (Default value = ".txt")

    Returns: a factory to pass to `Census`

    """
    data_folder = get_datafolder(data_folder)

    def factory(region: str) -> FileAgeInput | None:
        path = f"{region}{extension}"
        if not data_folder.isfile(path):
            logger.debug(f"No file {path} in {data_folder.path}")
            return None
        return FileAgeInput(data_folder.open(path, mode="rt"), name=data_folder.resolve_path(path))

    return factory


def list_regions(
    data_folder: DataFolderLike, extension: str = DEFAULT_EXTENSION, recursive: bool = False
) -> list[str]:
    """
        Names of the regions stored in `data_folder`, i.e. the paths of its `extension` files without the extension.
    Args:
      data_folder: folder holding one file per region
      extension: (Default value = ".txt")
      recursive: also look into subfolders (Default value = False)

    Returns: sorted region names

    """
    data_folder = get_datafolder(data_folder)
    return [
        path.removesuffix(extension)
        for path in data_folder.list_files(f"*{extension}", recursive=recursive)
    ]
