"""
Console entry point.

Typing `init` at the prompt embeds the whole content file and stores it;
anything else is treated as a search query and the best matches are printed.
"""
import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from media_search.config import SearchConfig
from media_search.database.qdrant_client import QdrantVectorClient
from media_search.errors import MediaSearchError
from media_search.models.embedding_models import SimilarityResult
from media_search.pipelines.ingestion_orchestrator import IngestionOrchestrator
from media_search.pipelines.search_orchestrator import SearchOrchestrator
from media_search.services.content_loader import load_contacts, load_media_library
from media_search.services.vector_db_service import VectorDBService

logger = logging.getLogger(__name__)

INIT_COMMAND = "init"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="media-search",
        description="Embed a media library and search it by semantic similarity",
    )
    parser.add_argument("--query", help="Query text, or 'init' to ingest; prompts when omitted")
    parser.add_argument("--file", help="Content JSON file to ingest (defaults to MEDIA_LIBRARY_FILE)")
    parser.add_argument(
        "--variant",
        choices=["mongo", "vector-db"],
        default="mongo",
        help="mongo: local embeddings and brute-force search; vector-db: delegate both to Qdrant",
    )
    parser.add_argument("--contacts", action="store_true",
                        help="Content file uses the contact schema (vector-db variant)")
    return parser


def print_results(results: List[SimilarityResult]) -> None:
    for result in results:
        print(f"'{result.id}'")


def run_mongo(config: SearchConfig, text: str, content_file: Optional[str]) -> None:
    if text == INIT_COMMAND:
        orchestrator = IngestionOrchestrator.from_config(config)
        try:
            summary = orchestrator.run(content_file)
        finally:
            orchestrator.close()
        logger.info(f"Stored {summary.documents_written} embeddings")
        return

    orchestrator = SearchOrchestrator.from_config(config)
    try:
        results = orchestrator.search(text)
    finally:
        orchestrator.close()
    print_results(results)


def run_vector_db(config: SearchConfig, text: str, content_file: Optional[str], contacts: bool) -> None:
    service = VectorDBService(
        QdrantVectorClient(config),
        batch_size=config.vector_db_batch_size,
        batch_delay_seconds=config.vector_db_batch_delay_seconds,
    )

    if text == INIT_COMMAND:
        path = content_file or config.media_library_file
        items = load_contacts(path) if contacts else load_media_library(path)
        service.create_schema()
        summary = service.upload(items)
        logger.info(f"Uploaded {summary.objects_uploaded}/{summary.objects_total} objects")
        return

    print_results(service.search(text, top_k=config.top_k))


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        config = SearchConfig.from_env()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    text = args.query
    if text is None:
        try:
            text = input("Enter your query: ")
        except EOFError:
            logger.error("No query provided")
            return 1
    text = text.strip()

    try:
        if args.variant == "vector-db":
            run_vector_db(config, text, args.file, args.contacts)
        else:
            run_mongo(config, text, args.file)
    except MediaSearchError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
