"""Recursive deletion built on the tree walker.

Files are removed as they are visited and each directory once its entries
are gone, so the tree is deleted bottom-up. Entries that disappear while
the walk runs are ignored; any other failure stops the deletion.
"""

from pathlib import Path

from pathwalk.core.errors import DeletionFailedError
from pathwalk.walker.models import VisitFailure, VisitOutcome
from pathwalk.walker.walker import TreeWalker


class RecursiveDeleter:
    """Visitor deleting every file and directory it is walked over.

    Symbolic links are removed, never followed.

    Args:
        root: Root of the tree being deleted, used in error reports.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)
        self._deleted = 0

    @property
    def deleted(self) -> int:
        """Number of entries removed so far."""
        return self._deleted

    def pre_visit_directory(self, directory: Path) -> VisitOutcome:
        return VisitOutcome.CONTINUE

    def visit_file(self, path: Path) -> VisitOutcome:
        try:
            path.unlink()
        except FileNotFoundError:
            return VisitOutcome.CONTINUE
        except OSError as e:
            raise DeletionFailedError(self._root, path, e) from e
        self._deleted += 1
        return VisitOutcome.CONTINUE

    def visit_file_failed(self, path: Path, failure: VisitFailure) -> VisitOutcome:
        if failure.is_loop or isinstance(failure.cause, FileNotFoundError):
            return VisitOutcome.CONTINUE
        raise DeletionFailedError(self._root, path, failure.cause) from failure.error

    def post_visit_directory(self, directory: Path, error: OSError | None) -> VisitOutcome:
        if error is not None and not isinstance(error, FileNotFoundError):
            raise DeletionFailedError(self._root, directory, error) from error
        try:
            directory.rmdir()
            self._deleted += 1
        except FileNotFoundError:
            pass
        except OSError as e:
            raise DeletionFailedError(self._root, directory, e) from e
        return VisitOutcome.CONTINUE


def delete_tree(root: Path) -> int:
    """Delete ``root`` and everything below it.

    A root that does not exist is not an error.

    Args:
        root: File or directory to delete.

    Returns:
        Number of files and directories removed.

    Raises:
        DeletionFailedError: On the first entry that cannot be removed or
            visited for a reason other than no longer existing.
    """
    deleter = RecursiveDeleter(root)
    TreeWalker(follow_symlinks=False).walk(Path(root), deleter)
    return deleter.deleted
