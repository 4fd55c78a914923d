"""CLI entry point for the documentation builder.

Provides the Click-based 'build-docs' command, which runs the pipeline
and is the single place where failures are reported.
"""

import asyncio
import logging
import traceback
from typing import Optional

import click

from src import __version__
from src.pipeline import build_docs
from src.utils.config import load_config, load_docs_config
from src.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@click.command(name="build-docs")
@click.version_option(version=__version__, prog_name="build-docs")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to config.yaml (defaults to configs/config.yaml).",
)
def build(config_path: Optional[str]) -> None:
    """Build the JSON documentation file from JSDoc comments.

    Extracts documentation from the library sources, groups it into the
    configured categories and writes it to the output directory.
    """
    try:
        config = load_config(config_path)
        setup_logging(
            level=config.logging.level,
            log_format=config.logging.format,
            log_file=config.logging.file,
        )
        docs_config = load_docs_config(config.docs_config_path)
        json_path = asyncio.run(build_docs(config, docs_config))
    except Exception:
        logger.error("Documentation build failed")
        click.echo(traceback.format_exc(), err=True)
        raise SystemExit(1)

    click.echo(f"Docs written to {json_path}")
