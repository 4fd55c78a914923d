"""Configuration loader for the documentation builder.

Loads settings from configs/config.yaml and the documentation grouping
from configs/docs.yaml, and provides typed access to all configuration
sections via dataclasses.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"


@dataclass
class ProjectConfig:
    """Location of the documented project and its docs configuration."""

    root: str = "."
    docs_config: str = "configs/docs.yaml"


@dataclass
class SourceConfig:
    """Configuration for listing the source files to scan."""

    pattern: str = "src/*/index.js"
    exclude_patterns: list[str] = field(default_factory=lambda: ["_lib", "locale"])


@dataclass
class ExtractorConfig:
    """Configuration for the comment parsing engine.

    Attributes:
        engine: Either 'tree-sitter' (in-process) or 'command'.
        command: Argument list for the 'command' engine. The '{path}'
            placeholder is replaced with the file being parsed.
    """

    engine: str = "tree-sitter"
    command: list[str] = field(default_factory=lambda: ["jsdoc-parse", "{path}"])


@dataclass
class LibraryConfig:
    """Naming of the documented library, used in usage snippets."""

    package: str = "date-fns"
    global_name: str = "dateFns"


@dataclass
class OutputConfig:
    """Configuration for the JSON artifact."""

    output_dir: str = "dist"
    artifact_name: str = "date_fns_docs"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    project: ProjectConfig = field(default_factory=ProjectConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    extractor: ExtractorConfig = field(default_factory=ExtractorConfig)
    library: LibraryConfig = field(default_factory=LibraryConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def root_path(self) -> Path:
        """Project root as an absolute path."""
        return Path(self.project.root).resolve()

    @property
    def docs_config_path(self) -> Path:
        """Docs configuration path, resolved against the project root."""
        return self.root_path / self.project.docs_config


@dataclass
class DocsConfig:
    """Documentation grouping configuration.

    Attributes:
        groups: Category names in the order they appear in the artifact.
        static_docs: Descriptors of free-form documents. Each one has at
            least a 'category' and a 'path', plus display metadata.
    """

    groups: list[str] = field(default_factory=list)
    static_docs: list[dict[str, Any]] = field(default_factory=list)


def _read_yaml(path: Path) -> dict:
    """Read a YAML mapping, treating an empty file as an empty mapping."""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            default path at configs/config.yaml.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig()

    raw = _read_yaml(path)
    logger.info("Loaded configuration from %s", path)

    defaults = AppConfig()

    project_data = raw.get("project", {})
    project_config = ProjectConfig(
        root=project_data.get("root", defaults.project.root),
        docs_config=project_data.get("docs_config", defaults.project.docs_config),
    )

    source_data = raw.get("source", {})
    source_config = SourceConfig(
        pattern=source_data.get("pattern", defaults.source.pattern),
        exclude_patterns=source_data.get(
            "exclude_patterns", defaults.source.exclude_patterns
        ),
    )

    extractor_data = raw.get("extractor", {})
    extractor_config = ExtractorConfig(
        engine=extractor_data.get("engine", defaults.extractor.engine),
        command=extractor_data.get("command", defaults.extractor.command),
    )

    library_data = raw.get("library", {})
    library_config = LibraryConfig(
        package=library_data.get("package", defaults.library.package),
        global_name=library_data.get("global_name", defaults.library.global_name),
    )

    output_data = raw.get("output", {})
    output_config = OutputConfig(
        output_dir=output_data.get("output_dir", defaults.output.output_dir),
        artifact_name=output_data.get("artifact_name", defaults.output.artifact_name),
    )

    logging_data = raw.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", defaults.logging.level),
        format=logging_data.get("format", defaults.logging.format),
        file=logging_data.get("file"),
    )

    return AppConfig(
        project=project_config,
        source=source_config,
        extractor=extractor_config,
        library=library_config,
        output=output_config,
        logging=logging_config,
    )


def load_docs_config(docs_config_path: Path) -> DocsConfig:
    """Load the documentation grouping configuration.

    Unlike the application config, the docs config is mandatory: the
    artifact cannot be grouped without it.

    Args:
        docs_config_path: Path to the docs YAML file.

    Returns:
        A DocsConfig instance.

    Raises:
        FileNotFoundError: If the docs config file does not exist.
        ValueError: If a static document descriptor lacks a category or path.
    """
    raw = _read_yaml(docs_config_path)

    static_docs = list(raw.get("static_docs", []))
    for descriptor in static_docs:
        missing = [key for key in ("category", "path") if key not in descriptor]
        if missing:
            raise ValueError(
                f"Static doc descriptor {descriptor!r} is missing: {', '.join(missing)}"
            )

    docs_config = DocsConfig(
        groups=list(raw.get("groups", [])), static_docs=static_docs
    )
    logger.info(
        "Loaded %d groups and %d static docs from %s",
        len(docs_config.groups),
        len(docs_config.static_docs),
        docs_config_path,
    )
    return docs_config
