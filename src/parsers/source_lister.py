"""Lists the source files whose comments are turned into documentation."""

import logging
from pathlib import Path
from typing import Optional

from src.parsers.structure import SourceFile

logger = logging.getLogger(__name__)


def _unit_name(path: Path) -> str:
    """Derive the documented unit name from a file path.

    Files named ``index.*`` take the name of their directory
    (``src/addDays/index.js`` -> ``addDays``); other files use their stem.
    """
    if path.stem == "index":
        return path.parent.name
    return path.stem


def list_source_files(
    root: Path,
    pattern: str = "src/*/index.js",
    exclude_patterns: Optional[list[str]] = None,
) -> list[SourceFile]:
    """Collect the source files to scan, in a stable order.

    Args:
        root: Project root directory.
        pattern: Glob pattern relative to the root.
        exclude_patterns: Path components to skip (e.g. '_lib').

    Returns:
        SourceFile objects sorted by relative path. Units whose name
        starts with '.' or '_' are private and never listed.
    """
    exclude = set(exclude_patterns or [])
    files = []
    for path in sorted(root.glob(pattern)):
        relative = path.relative_to(root)
        if any(part in exclude for part in relative.parts):
            continue
        name = _unit_name(relative)
        if name.startswith((".", "_")):
            continue
        files.append(
            SourceFile(name=name, path=relative.as_posix(), full_path=str(path))
        )

    logger.info("Found %d source files matching %s", len(files), pattern)
    return files
