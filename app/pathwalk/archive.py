"""Access to entries of zip and jar archives.

Entries are identified for display as ``<archive>!/<entry>``, and their
bytes are materialized with the whole-stream readers in pathwalk.buffer,
using the entry's declared size when the archive records one.
"""

import zipfile
import zlib
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from pathwalk.buffer import DEFAULT_BUFFER_SIZE, EMPTY, read_known_length, read_unknown_length
from pathwalk.core.errors import EntryUnavailableError
from pathwalk.filters import matches_any

ENTRY_SEPARATOR = "!/"


def archive_display_name(archive: zipfile.ZipFile | Path | str) -> str:
    """Get the display name of an archive (its file name as given)."""
    if isinstance(archive, zipfile.ZipFile):
        return str(archive.filename or "<archive>")
    return str(archive)


def format_entry_name(archive: zipfile.ZipFile | Path | str, entry_name: str) -> str:
    """Compose the ``archive!/entry`` identifier of an archive entry.

    Example:
        >>> format_entry_name("lib/rt.jar", "java/lang/Object.class")
        'lib/rt.jar!/java/lang/Object.class'
    """
    return f"{archive_display_name(archive)}{ENTRY_SEPARATOR}{entry_name}"


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """A file entry inside a zip or jar archive.

    Attributes:
        archive: Path of the archive on disk.
        name: Entry name inside the archive.
        size: Declared uncompressed size in bytes.
    """

    archive: Path
    name: str
    size: int

    @property
    def display_name(self) -> str:
        """Identifier in ``archive!/entry`` form."""
        return format_entry_name(self.archive, self.name)


def read_archive_entry_known_size(
    zip_file: zipfile.ZipFile, entry: zipfile.ZipInfo | str, length: int
) -> bytes:
    """Read an entry whose uncompressed length is known.

    The entry stream is not opened when ``length`` is 0.
    """
    if length == 0:
        return EMPTY
    with zip_file.open(entry) as stream:
        return read_known_length(stream, length)


def read_archive_entry_unknown_size(
    zip_file: zipfile.ZipFile,
    entry: zipfile.ZipInfo | str,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> bytes:
    """Read an entry of unknown length, starting from a ``buffer_size`` buffer."""
    with zip_file.open(entry) as stream:
        return read_unknown_length(stream, buffer_size)


def read_archive_entry(
    zip_file: zipfile.ZipFile,
    entry: zipfile.ZipInfo | str,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> bytes:
    """Read the whole content of an archive entry.

    Uses the size recorded in the archive directory when there is one.

    Args:
        zip_file: Open archive.
        entry: Entry, or its name.
        buffer_size: First buffer size if the size is not recorded.

    Returns:
        The uncompressed entry content.

    Raises:
        EntryUnavailableError: If the entry does not exist or cannot be decompressed.
        CapacityExceededError: If an entry of unknown size is too large.
    """
    try:
        info = entry if isinstance(entry, zipfile.ZipInfo) else zip_file.getinfo(entry)
        if info.file_size >= 0:
            return read_archive_entry_known_size(zip_file, info, info.file_size)
        return read_archive_entry_unknown_size(zip_file, info, buffer_size)
    except (KeyError, zipfile.BadZipFile, zlib.error, OSError) as e:
        name = entry.filename if isinstance(entry, zipfile.ZipInfo) else entry
        raise EntryUnavailableError(format_entry_name(zip_file, name), e) from e


def iter_archive_entries(
    archive: Path,
    extensions: Iterable[str] | None = None,
) -> Iterator[ArchiveEntry]:
    """Yield the file entries of an archive.

    Args:
        archive: Path of a zip or jar file.
        extensions: If given, only entries carrying one of these extensions.

    Yields:
        ArchiveEntry for each non-directory entry, in archive order.

    Raises:
        EntryUnavailableError: If the archive cannot be opened or is not a zip file.
    """
    wanted = tuple(extensions) if extensions is not None else None
    try:
        with zipfile.ZipFile(archive) as zf:
            infos = zf.infolist()
    except (zipfile.BadZipFile, OSError) as e:
        raise EntryUnavailableError(archive, e) from e

    for info in infos:
        if info.is_dir():
            continue
        if wanted is not None and not matches_any(info.filename, wanted):
            continue
        yield ArchiveEntry(archive=archive, name=info.filename, size=info.file_size)


def read_entry(entry: ArchiveEntry, buffer_size: int = DEFAULT_BUFFER_SIZE) -> bytes:
    """Open the archive of ``entry`` and read the entry's content.

    Raises:
        EntryUnavailableError: If the archive or entry cannot be read.
    """
    try:
        with zipfile.ZipFile(entry.archive) as zf:
            return read_archive_entry(zf, entry.name, buffer_size)
    except (zipfile.BadZipFile, OSError) as e:
        raise EntryUnavailableError(entry.archive, e) from e
