"""A file that can be removed from and restored to its location."""

import shutil
from pathlib import Path

from halfwit.bisection.behavior import State
from halfwit.bisection.errors import ObjectStateError
from halfwit.core.log import logger


def present(path: Path) -> bool:
    """True if path exists on disk, counting dangling symlinks."""
    return path.is_symlink() or path.exists()


def copy_back(backup: Path, path: Path) -> None:
    """Copy backup over path, keeping symlinks as symlinks.

    Raises:
        OSError: If the copy fails
    """
    if path.is_symlink() or (backup.is_symlink() and present(path)):
        path.unlink()
    path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(backup, path, follow_symlinks=False)


class TrackedFile:
    """A file with a backup copy, toggled by deleting and restoring.

    Disabling removes the file from its original path; enabling
    copies the backup back. Both do nothing when the file is
    already in the requested state on disk. Symlinks are removed
    and restored as links, never as the file they point to.
    """

    def __init__(self, path: Path, backup: Path):
        self.path = path
        self.backup = backup
        self._state = State.ENABLED if present(path) else State.DISABLED

    def set_state(self, state: State) -> None:
        """Make the file present (ENABLED) or absent (DISABLED).

        Raises:
            ObjectStateError: If the file could not be copied or
                removed
        """
        try:
            if state is State.ENABLED:
                if not present(self.path):
                    copy_back(self.backup, self.path)
                    logger.spew(f"Restored {self.path}")
            elif present(self.path):
                self.path.unlink()
                logger.spew(f"Removed {self.path}")
        except OSError as e:
            raise ObjectStateError(
                f"Could not set {self.path} to {state.value}: {e}"
            ) from e

        self._state = state

    def state(self) -> State:
        return self._state

    def __repr__(self) -> str:
        return f"TrackedFile({str(self.path)!r}, {self._state.value})"
