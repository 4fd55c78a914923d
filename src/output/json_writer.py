"""JSON output for the grouped documentation artifact."""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from src.generators.grouper import GroupedDocs

logger = logging.getLogger(__name__)


def serialize_docs(grouped: GroupedDocs) -> str:
    """Serialize grouped docs to compact JSON, keeping group order."""
    payload: dict[str, list[dict[str, Any]]] = {
        category: [item.to_dict() for item in items]
        for category, items in grouped.items()
    }
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def _default_mode() -> int:
    """Mode a newly created file gets under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _write_atomic(path: Path, text: str) -> None:
    """Write text to a sibling temporary file, then rename it over path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.chmod(tmp_name, _default_mode())
        os.replace(tmp_name, path)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise


async def write_docs_file(
    grouped: GroupedDocs,
    output_dir: str = "dist",
    artifact_name: str = "date_fns_docs",
    cwd: Optional[Path] = None,
) -> Path:
    """Write the docs artifact to ``<cwd>/<output_dir>/<artifact_name>.json``.

    The file is replaced in a single rename, so readers never observe a
    partially written artifact.

    Args:
        grouped: Final grouped documentation.
        output_dir: Output directory relative to cwd.
        artifact_name: File name without the .json extension.
        cwd: Base directory; defaults to the process working directory.

    Returns:
        Path of the written file.

    Raises:
        OSError: If the file cannot be written.
    """
    json_path = (cwd or Path.cwd()) / output_dir / f"{artifact_name}.json"
    text = serialize_docs(grouped)
    await asyncio.to_thread(_write_atomic, json_path, text)

    logger.info("Wrote docs file %s (%d bytes)", json_path, len(text.encode("utf-8")))
    return json_path
