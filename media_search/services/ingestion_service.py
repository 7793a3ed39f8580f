from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Sequence, Union
import logging

from media_search.database.mongodb_client import MongoDBClient
from media_search.models.content_models import ContactContent, MediaLibraryContent
from media_search.models.embedding_models import EmbeddingAPIResponse, EmbeddingDocument
from media_search.models.pipeline_models import IngestionSummary
from media_search.services.embedding_service import EmbeddingService

logger = logging.getLogger(__name__)

ContentItem = Union[MediaLibraryContent, ContactContent]


class IngestionService:
    """
    Embeds every content item and writes one embedding document per item.
    At most max_workers items are being embedded or written at any time.
    """

    def __init__(self, embedding_service: EmbeddingService, store: MongoDBClient,
                 max_workers: int = 50):
        self.embedding_service = embedding_service
        self.store = store
        self.max_workers = max_workers

    def _process_item(self, item: ContentItem) -> EmbeddingAPIResponse:
        api_response = self.embedding_service.embed_content(item)
        data = api_response.first()

        document = EmbeddingDocument(
            id=item.id,
            embedding=data.embedding,
            magnitude=data.magnitude,
        )
        self.store.insert_embedding_document(document)
        return api_response

    def ingest(self, items: Sequence[ContentItem]) -> IngestionSummary:
        """
        Submit every item at once and block until all of them are done.
        The first failure cancels the work that has not started yet and is
        raised to the caller; there is no per-item skip.
        """
        summary = IngestionSummary(items_total=len(items))
        if not items:
            logger.warning("No content items to ingest")
            return summary

        logger.info(f"Ingesting {len(items)} items with {self.max_workers} workers")

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(self._process_item, item): item.id for item in items}
            try:
                for future in as_completed(futures):
                    api_response = future.result()
                    summary.documents_written += 1
                    summary.prompt_tokens += api_response.usage.prompt_tokens
                    summary.total_tokens += api_response.usage.total_tokens
            except Exception as e:
                logger.error(f"Ingestion aborted: {str(e)}")
                for pending in futures:
                    pending.cancel()
                raise

        logger.info(f"Ingestion complete: {summary.documents_written}/{summary.items_total} documents written, "
                    f"{summary.total_tokens} tokens used")
        return summary
