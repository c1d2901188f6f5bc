"""Extension-based file filters.

Name predicates (``has_extension``, ``matches_any``) look only at the final
path segment. ``ExtensionFilter`` additionally requires the entry to be a
readable regular file at the moment it is checked; that state is queried
fresh on every call and never cached.
"""

import os
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from pathlib import Path, PurePath

from pathwalk.core.errors import EntryUnavailableError

PathUser = Callable[[Path], None]


def has_extension(path: PurePath | str, extension: str) -> bool:
    """Check if a file name ends with ``"." + extension``.

    Matching is case-sensitive.

    Args:
        path: A path (its final segment is used) or a bare file name.
        extension: Extension without leading dot (e.g. "java").

    Returns:
        True if the name carries the extension.
    """
    name = path if isinstance(path, str) else path.name
    return name.endswith("." + extension)


def matches_any(path: PurePath | str, extensions: Iterable[str]) -> bool:
    """Check if a file name carries any of the given extensions."""
    return any(has_extension(path, ext) for ext in extensions)


def is_readable(path: Path) -> bool:
    """Check if the current user may read ``path``. Errors count as False."""
    try:
        return os.access(path, os.R_OK)
    except (OSError, ValueError):
        return False


def is_regular_file(path: Path) -> bool:
    """Check if ``path`` is a regular file, following links. Errors count as False."""
    try:
        return path.is_file()
    except (OSError, ValueError):
        return False


def is_directory(path: Path) -> bool:
    """Check if ``path`` is a directory, following links. Errors count as False."""
    try:
        return path.is_dir()
    except (OSError, ValueError):
        return False


class DirectoryFilter(ABC):
    """Accepts or rejects the immediate entries of a directory.

    Subclasses implement ``accept``; ``filter`` feeds every accepted entry
    of a folder to a callback.
    """

    @abstractmethod
    def accept(self, entry: Path) -> bool:
        """Return True if ``entry`` should be passed on."""

    def filter(self, folder: Path, use: PathUser) -> None:
        """Call ``use`` for each accepted entry directly inside ``folder``.

        Does nothing unless ``folder`` is currently a readable directory.
        Entries are visited in name order.

        Args:
            folder: Directory whose entries are filtered.
            use: Callback receiving each accepted entry.

        Raises:
            EntryUnavailableError: If the directory cannot be enumerated.
        """
        if not (is_readable(folder) and is_directory(folder)):
            return

        try:
            entries = sorted(folder.iterdir())
        except OSError as e:
            raise EntryUnavailableError(folder, e) from e

        for entry in entries:
            if self.accept(entry):
                use(entry)


class ExtensionFilter(DirectoryFilter):
    """Accepts readable regular files carrying one of a fixed set of extensions.

    Extensions are checked in the order given. The first one that matches
    the name decides: the entry is then accepted only if it is readable and
    a regular file, and later extensions are not tried.

    Example:
        >>> IS_JAR_OR_ZIP_FILE.filter(Path("lib"), print)
    """

    def __init__(self, *extensions: str) -> None:
        if not extensions:
            msg = "At least one extension is required"
            raise ValueError(msg)
        self._extensions: tuple[str, ...] = extensions

    @property
    def extensions(self) -> tuple[str, ...]:
        """Configured extensions, in insertion order."""
        return self._extensions

    def accept(self, entry: Path) -> bool:
        for extension in self._extensions:
            if has_extension(entry, extension):
                return is_readable(entry) and is_regular_file(entry)
        return False

    def __repr__(self) -> str:
        return f"ExtensionFilter{self._extensions!r}"


IS_JAVA_FILE = ExtensionFilter("java")
IS_CLASS_FILE = ExtensionFilter("class")
IS_JAVA_OR_CLASS_FILE = ExtensionFilter("java", "class")
IS_JAR_OR_ZIP_FILE = ExtensionFilter("jar", "zip")


def is_java_file(name: str) -> bool:
    """Check if a file name ends with ``.java``."""
    return has_extension(name, "java")


def is_class_file(name: str) -> bool:
    """Check if a file name ends with ``.class``."""
    return has_extension(name, "class")
