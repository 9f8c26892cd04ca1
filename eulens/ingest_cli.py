"""Command line entry point for ingesting a document into the vector index."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from eulens.core.config import Settings, get_settings
from eulens.core.dependencies import ServiceContainer
from eulens.core.exceptions import ConfigurationMissing, FetchError, VectorIndexError

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ingestion command."""
    parser = argparse.ArgumentParser(
        prog="eulens-ingest",
        description="Ingest a document into the EU-Lens vector database",
    )
    parser.add_argument("-u", "--url", required=True, help="URL of the document to ingest")
    parser.add_argument("-n", "--name", required=True, help="Name of the document")
    parser.add_argument(
        "-f", "--force", action="store_true", default=False,
        help="Force update even if document exists",
    )
    return parser


def create_container(settings: Settings) -> ServiceContainer:
    """
    Create the service container used for one ingestion run.

    Args:
        settings: Application settings.

    Returns:
        Uninitialized service container.
    """
    return ServiceContainer(settings)


async def run_ingestion(container: ServiceContainer, url: str, name: str, force: bool = False) -> int:
    """
    Ingest one document with an initialized container, then shut it down.

    Returns:
        Process exit code.
    """
    try:
        await container.initialize()
        report = await container.ingestion_pipeline.ingest(url, name, force=force)
    except FetchError as e:
        logger.error(f"Failed to fetch document content: {str(e)}")
        return 1
    except VectorIndexError as e:
        logger.error(f"Vector index unavailable: {str(e)}")
        return 1
    finally:
        await container.shutdown()

    if report.failed:
        logger.warning(
            f"Skipped {len(report.failed)} of {report.total_chunks} chunks: {report.failed}")
    logger.info(f"Successfully processed document: {name}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, load settings and ingest the requested document.

    Args:
        argv: Command line arguments, defaults to sys.argv.

    Returns:
        Process exit code, 0 on success and 1 on any failure.
    """
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ConfigurationMissing as e:
        logger.error(str(e))
        return 1

    logging.getLogger().setLevel(settings.log_level.upper())
    container = create_container(settings)
    return asyncio.run(run_ingestion(container, args.url, args.name, args.force))


if __name__ == "__main__":
    sys.exit(main())
