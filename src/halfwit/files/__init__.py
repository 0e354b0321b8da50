"""Files as bisection objects, with backup and restore."""

from halfwit.files.manifest import Manifest, ManifestEntry
from halfwit.files.resolve import resolve_paths
from halfwit.files.tracked import TrackedFile

__all__ = ["Manifest", "ManifestEntry", "TrackedFile", "resolve_paths"]
