"""Backup directory holding a copy of every file under bisection."""

from __future__ import annotations

import shutil
import uuid
from pathlib import Path

from pydantic import BaseModel, Field

from halfwit.core.log import logger
from halfwit.files.tracked import TrackedFile, copy_back

MANIFEST_NAME = "MANIFEST"


class ManifestEntry(BaseModel):
    """One backed-up file."""

    id: str = Field(description="Name of the backup copy")
    path: Path = Field(description="Original location of the file")


class ManifestData(BaseModel):
    """Contents of the MANIFEST file."""

    entries: list[ManifestEntry] = Field(default_factory=list)


class Manifest:
    """Copies files into a backup directory and puts them back.

    The backup directory is wiped when a new manifest is created.
    A MANIFEST file listing every backup and its original path is
    written next to the copies so a human can recover files by
    hand if the process dies.
    """

    def __init__(self, backup_dir: Path):
        self.backup_dir = backup_dir
        self.entries: list[ManifestEntry] = []

    @property
    def manifest_file(self) -> Path:
        return self.backup_dir / MANIFEST_NAME

    def create(self, paths: list[Path]) -> list[TrackedFile]:
        """Back up paths and return a TrackedFile for each, in order.

        Raises:
            OSError: If the backup directory or a copy cannot be made
        """
        if self.backup_dir.exists():
            logger.debug(f"Removing old backup directory {self.backup_dir}")
            shutil.rmtree(self.backup_dir)
        self.backup_dir.mkdir(parents=True)

        self.entries = []
        tracked = []
        for path in paths:
            entry = ManifestEntry(id=uuid.uuid4().hex, path=path)
            backup = self.backup_dir / entry.id
            shutil.copy2(path, backup, follow_symlinks=False)
            self.entries.append(entry)
            tracked.append(TrackedFile(path, backup))

        self.manifest_file.write_text(
            ManifestData(entries=self.entries).model_dump_json(indent=2)
        )
        logger.info(
            f"Backed up {len(self.entries)} file(s) to {self.backup_dir}"
        )
        return tracked

    def restore_all(self) -> None:
        """Copy every backup back over its original path.

        Safe to call any number of times. Every file is attempted
        even when an earlier one fails; the first error is raised
        at the end.
        """
        first_error: OSError | None = None
        for entry in self.entries:
            try:
                copy_back(self.backup_dir / entry.id, entry.path)
            except OSError as e:
                logger.error(f"Could not restore {entry.path}: {e}")
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error
        logger.debug(f"Restored {len(self.entries)} file(s)")
