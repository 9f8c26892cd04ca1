"""Script to ingest the core EU legal documents into the vector index."""

import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from eulens.core.config import get_settings
from eulens.core.dependencies import ServiceContainer
from eulens.core.exceptions import FetchError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DOCUMENTS = [
    {
        "name": "GDPR",
        "url": "http://data.europa.eu/eli/reg/2016/679",
    },
]


async def populate() -> None:
    """Ingest every document in DOCUMENTS, moving on when one cannot be fetched."""
    services = ServiceContainer(get_settings())
    await services.initialize()
    pipeline = services.ingestion_pipeline

    try:
        for doc in DOCUMENTS:
            logger.info(f"Processing {doc['name']}...")
            try:
                report = await pipeline.ingest(doc["url"], doc["name"])
            except FetchError as e:
                logger.error(f"Skipping {doc['name']}: {str(e)}")
                continue
            logger.info(
                f"Finished processing {doc['name']}: {len(report.upserted)} chunks indexed")
    finally:
        await services.shutdown()

    print("\nDatabase population complete!")


if __name__ == "__main__":
    asyncio.run(populate())
