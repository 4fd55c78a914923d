"""Loads free-form documents and appends them to their categories.

Static documents (getting started guides, changelogs...) are listed in
the docs config. Their content is read verbatim from disk and they are
placed after every source-derived entry of the same category.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any

from src.generators.grouper import GroupedDocs, UnknownCategoryError
from src.parsers.structure import StaticDoc

logger = logging.getLogger(__name__)


async def _load_static_doc(descriptor: dict[str, Any], root: Path) -> StaticDoc:
    path = root / descriptor["path"]
    content = await asyncio.to_thread(path.read_text, encoding="utf-8")
    logger.debug("Read static doc %s (%d chars)", path, len(content))
    return StaticDoc.from_descriptor(descriptor, content)


async def load_static_docs(
    descriptors: list[dict[str, Any]], root: Path
) -> list[StaticDoc]:
    """Read all static documents concurrently.

    Args:
        descriptors: Static doc descriptors from the docs config.
        root: Directory the descriptor paths are relative to.

    Returns:
        StaticDoc objects in descriptor order.

    Raises:
        OSError: If any document cannot be read.
    """
    return list(
        await asyncio.gather(
            *(_load_static_doc(descriptor, root) for descriptor in descriptors)
        )
    )


async def inject_static_docs(
    grouped: GroupedDocs, descriptors: list[dict[str, Any]], root: Path
) -> GroupedDocs:
    """Append the configured static documents to the grouped docs.

    Grouping must be complete before this runs, so static documents
    always follow the source-derived entries of their category.

    Args:
        grouped: Output of the grouper; mutated in place.
        descriptors: Static doc descriptors from the docs config.
        root: Directory the descriptor paths are relative to.

    Returns:
        The same mapping, with static documents appended.

    Raises:
        OSError: If any document cannot be read.
        UnknownCategoryError: If a descriptor's category is not configured.
    """
    static_docs = await load_static_docs(descriptors, root)
    for static_doc in static_docs:
        if static_doc.category not in grouped:
            raise UnknownCategoryError(
                f"Static doc {static_doc.metadata['path']}",
                static_doc.category,
                list(grouped),
            )
        grouped[static_doc.category].append(static_doc)

    logger.info("Injected %d static docs", len(static_docs))
    return grouped
