"""Documentation build pipeline.

Lists the source files, extracts their JSDoc records one file at a
time, assembles and groups the entries, appends the static documents
and writes the JSON artifact. Any failure propagates to the caller and
nothing is written.
"""

import logging
from pathlib import Path
from typing import Optional

from src.generators.doc_entry import build_doc_entries
from src.generators.grouper import group_docs
from src.generators.static_docs import inject_static_docs
from src.output.json_writer import write_docs_file
from src.parsers.extractor import CommentExtractor, ParsingEngine, create_engine
from src.parsers.source_lister import list_source_files
from src.utils.config import AppConfig, DocsConfig

logger = logging.getLogger(__name__)


async def build_docs(
    config: AppConfig,
    docs_config: DocsConfig,
    engine: Optional[ParsingEngine] = None,
    cwd: Optional[Path] = None,
) -> Path:
    """Run the whole pipeline and write the docs artifact.

    Args:
        config: Application configuration.
        docs_config: Groups and static documents.
        engine: Parsing engine; built from ``config.extractor`` when omitted.
        cwd: Base directory for the output; defaults to the working directory.

    Returns:
        Path of the written artifact.
    """
    root = config.root_path
    files = list_source_files(
        root, config.source.pattern, config.source.exclude_patterns
    )

    extractor = CommentExtractor(engine or create_engine(config.extractor))
    records = await extractor.extract_all(files)

    entries = build_doc_entries(records, config.library)
    grouped = group_docs(entries, docs_config.groups)
    grouped = await inject_static_docs(grouped, docs_config.static_docs, root)

    return await write_docs_file(
        grouped,
        output_dir=config.output.output_dir,
        artifact_name=config.output.artifact_name,
        cwd=cwd,
    )
