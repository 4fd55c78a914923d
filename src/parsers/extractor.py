"""Comment extraction: runs a parsing engine over source files.

A parsing engine turns one source file into a stream of serialized
(JSON) text chunks. The extractor buffers the whole stream and
deserializes it once the stream completes. Any engine failure is fatal
for the run and surfaces as an ExtractionError.
"""

import asyncio
import codecs
import json
import logging
from typing import Any, AsyncIterator, Optional, Protocol

from src.parsers.jsdoc_parser import JSDocParser
from src.parsers.structure import SourceFile
from src.utils.config import ExtractorConfig

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class EngineError(Exception):
    """Raised by a parsing engine when it cannot produce output."""


class ExtractionError(Exception):
    """Raised when documentation cannot be extracted from a source file.

    Attributes:
        path: Path of the file being parsed.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to extract docs from {path}: {reason}")
        self.path = path


class ParsingEngine(Protocol):
    """Streams the serialized documentation records of one file."""

    def stream(self, path: str) -> AsyncIterator[str]: ...


class TreeSitterEngine:
    """In-process engine backed by the tree-sitter JSDoc parser."""

    def __init__(self, parser: Optional[JSDocParser] = None) -> None:
        self.parser = parser or JSDocParser()

    async def stream(self, path: str) -> AsyncIterator[str]:
        records = await asyncio.to_thread(self.parser.parse_file, path)
        yield json.dumps(records)


class CommandEngine:
    """Engine that runs an external JSDoc tool and streams its stdout.

    Args:
        command: Argument list; '{path}' is replaced with the file path.
    """

    def __init__(self, command: list[str], chunk_size: int = _CHUNK_SIZE) -> None:
        if not command:
            raise ValueError("Command engine requires a non-empty command")
        self.command = command
        self.chunk_size = chunk_size

    async def stream(self, path: str) -> AsyncIterator[str]:
        args = [arg.replace("{path}", path) for arg in self.command]
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        # stderr is drained concurrently with stdout
        stderr_task = asyncio.create_task(process.stderr.read())
        decoder = codecs.getincrementaldecoder("utf-8")()

        try:
            while True:
                chunk = await process.stdout.read(self.chunk_size)
                if not chunk:
                    break
                yield decoder.decode(chunk)
            tail = decoder.decode(b"", final=True)
            if tail:
                yield tail

            stderr = await stderr_task
            returncode = await process.wait()
        finally:
            if process.returncode is None:
                process.kill()
                await process.wait()
            if not stderr_task.done():
                stderr_task.cancel()

        if returncode != 0:
            raise EngineError(
                f"{args[0]} exited with status {returncode}: "
                f"{stderr.decode('utf-8', errors='replace').strip()}"
            )


def create_engine(config: ExtractorConfig) -> ParsingEngine:
    """Build the parsing engine selected in the configuration.

    Raises:
        ValueError: If the engine name is unknown.
    """
    if config.engine == "tree-sitter":
        return TreeSitterEngine()
    if config.engine == "command":
        return CommandEngine(config.command)
    raise ValueError(f"Unknown extractor engine: {config.engine!r}")


class CommentExtractor:
    """Extracts raw documentation records from annotated source files."""

    def __init__(self, engine: ParsingEngine) -> None:
        self.engine = engine

    async def extract(self, source_file: SourceFile) -> list[dict[str, Any]]:
        """Extract the records of one file, in engine emission order.

        Args:
            source_file: The file to parse.

        Returns:
            Raw documentation records.

        Raises:
            ExtractionError: If the engine fails or emits invalid output.
        """
        path = source_file.full_path
        chunks: list[str] = []
        try:
            async for chunk in self.engine.stream(path):
                chunks.append(chunk)
        except (EngineError, OSError, UnicodeDecodeError) as exc:
            raise ExtractionError(path, str(exc)) from exc

        try:
            records = json.loads("".join(chunks))
        except json.JSONDecodeError as exc:
            raise ExtractionError(path, f"invalid engine output ({exc})") from exc

        if not isinstance(records, list):
            raise ExtractionError(path, "engine output is not a list of records")

        logger.debug(
            "Extracted %d records for %s from %s",
            len(records),
            source_file.name,
            source_file.path,
        )
        return records

    async def extract_all(self, files: list[SourceFile]) -> list[dict[str, Any]]:
        """Extract records from every file, one file at a time.

        Files are awaited sequentially so at most one engine runs at a
        time; the result preserves file order.

        Args:
            files: Source files in listing order.

        Returns:
            Concatenated records of all files.
        """
        records: list[dict[str, Any]] = []
        for source_file in files:
            records.extend(await self.extract(source_file))

        logger.info("Extracted %d records from %d files", len(records), len(files))
        return records
