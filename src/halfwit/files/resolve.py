"""Expand file arguments into a list of regular files."""

import glob
from pathlib import Path

from halfwit.core.log import logger


def resolve_paths(patterns: list[str]) -> list[Path]:
    """Expand paths and globs into existing regular files.

    Patterns are expanded in order and ``**`` matches across
    directories. Directories are skipped, and a file matched by
    more than one pattern is kept at its first position.

    Args:
        patterns: File paths or glob patterns

    Returns:
        Matching files, in first-seen order
    """
    paths: list[Path] = []
    seen: set[Path] = set()

    for pattern in patterns:
        matches = sorted(glob.glob(pattern, recursive=True))
        if not matches:
            logger.warn(f"No files match {pattern!r}")
            continue

        for match in matches:
            path = Path(match)
            if not path.is_file():
                logger.spew(f"Skipping non-file {match}")
                continue
            key = path.resolve()
            if key in seen:
                continue
            seen.add(key)
            paths.append(path)

    logger.debug(f"Resolved {len(paths)} file(s)")
    return paths
