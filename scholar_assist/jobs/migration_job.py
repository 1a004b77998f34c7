"""
Dramatiq actor for bulk knowledge migration.

This module defines the background job that loads a text file (such as a
legacy `knowledge.txt`) into the knowledge base, plus a small command line
entry point that enqueues it.
"""

import argparse
import logging
from datetime import datetime, timezone
from pathlib import Path

import dramatiq
from tortoise import Tortoise

from scholar_assist.core import queue  # noqa: F401 - Initialize Dramatiq broker for worker
from scholar_assist.core.config import TORTOISE_ORM
from scholar_assist.core.errors import InvalidInputError
from scholar_assist.services.ingestion_service import IngestionReport, IngestionService
from scholar_assist.services.knowledge_store import KnowledgeStore

logger = logging.getLogger(__name__)


async def _ingest_file(path: str, source: str | None = None) -> IngestionReport:
    """
    Read a text file and ingest its content.

    Args:
        path: Path of the UTF-8 text file
        source: Value stored as `metadata.source` (defaults to the file name)

    Returns:
        The ingestion report

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidInputError: If the file is empty
        RuntimeError: If no chunk could be stored
    """
    file_path = Path(path)
    content = file_path.read_text(encoding="utf-8")

    metadata = {
        "source": source or file_path.name,
        "migrated_at": datetime.now(timezone.utc).isoformat(),
    }
    service = IngestionService(KnowledgeStore())
    report = await service.ingest(content, metadata)

    if not report.success:
        raise RuntimeError(f"No chunks from {file_path} could be stored ({len(report.errors)} failures)")

    if report.errors:
        failed = ", ".join(str(f.chunk_index) for f in report.errors)
        logger.warning(f"Migration of {file_path} skipped chunks: {failed}")

    logger.info(f"Migration of {file_path} stored {report.chunks_stored}/{report.chunks_processed} chunks")
    return report


async def _migrate_knowledge_file(path: str, source: str | None = None) -> None:
    """
    Core logic for a migration job, wrapped with ORM setup and teardown.

    Exceptions are re-raised so Dramatiq can retry the job.
    """
    # Initialize Tortoise ORM connection for this worker
    await Tortoise.init(config=TORTOISE_ORM)

    try:
        await _ingest_file(path, source)
    except Exception as e:
        logger.error(f"Error migrating knowledge file {path}: {e}", exc_info=True)
        raise
    finally:
        await Tortoise.close_connections()


@dramatiq.actor(max_retries=3, throws=(FileNotFoundError, InvalidInputError))
async def migrate_knowledge_file(path: str, source: str | None = None) -> None:
    """
    Dramatiq actor that loads a knowledge file into the knowledge base.

    Missing or empty files are not retried.

    Args:
        path: Path of the text file, readable by the worker
        source: Optional `metadata.source` value
    """
    await _migrate_knowledge_file(path, source)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Enqueue a knowledge file migration.")
    parser.add_argument("path", help="Text file to load into the knowledge base")
    parser.add_argument("--source", default=None, help="metadata.source for the stored chunks")
    args = parser.parse_args(argv)

    migrate_knowledge_file.send(str(Path(args.path).resolve()), args.source)
    print(f"Enqueued migration of {args.path}")


if __name__ == "__main__":
    main()
