import logging
import time
from typing import Callable, List, Sequence

from qdrant_client.http.exceptions import ResponseHandlingException, UnexpectedResponse

from media_search.database.qdrant_client import ContentItem, QdrantVectorClient
from media_search.errors import VectorDBError
from media_search.models.embedding_models import SimilarityResult
from media_search.models.pipeline_models import VectorDBUploadSummary

logger = logging.getLogger(__name__)


class VectorDBService:
    """
    Vendor-delegated variant: no local embedding and no local similarity.
    Content is uploaded in fixed-size batches with a fixed pause in between.
    """

    def __init__(self, vector_client: QdrantVectorClient, batch_size: int = 500,
                 batch_delay_seconds: float = 1.0, sleep: Callable[[float], None] = time.sleep):
        self.vector_client = vector_client
        self.batch_size = batch_size
        self.batch_delay_seconds = batch_delay_seconds
        self._sleep = sleep

    def create_schema(self) -> None:
        self.vector_client.create_schema()

    def _batches(self, items: Sequence[ContentItem]) -> List[Sequence[ContentItem]]:
        return [items[i:i + self.batch_size] for i in range(0, len(items), self.batch_size)]

    def upload(self, items: Sequence[ContentItem]) -> VectorDBUploadSummary:
        """
        Upload every batch in order.
        A failed batch, or failed objects within a batch, are logged and counted;
        the next batch is still attempted.
        """
        batches = self._batches(items)
        summary = VectorDBUploadSummary(objects_total=len(items), batches_total=len(batches))

        for batch_number, batch in enumerate(batches, start=1):
            try:
                object_errors = self.vector_client.insert_batch(batch)
            except (UnexpectedResponse, ResponseHandlingException, VectorDBError) as e:
                summary.batches_failed += 1
                logger.error(f"Batch {batch_number}/{len(batches)} failed: {str(e)}")
            else:
                summary.objects_uploaded += len(batch) - len(object_errors)
                if object_errors:
                    summary.object_errors.extend(object_errors)
                    for error in object_errors:
                        logger.error(f"Batch {batch_number}/{len(batches)} object error: {error}")
                logger.info(f"Uploaded batch {batch_number}/{len(batches)} ({len(batch)} objects)")

            if batch_number < len(batches):
                self._sleep(self.batch_delay_seconds)

        logger.info(f"Vector database upload complete: {summary.objects_uploaded}/{summary.objects_total} objects, "
                    f"{summary.batches_failed} failed batches")
        return summary

    def search(self, query: str, top_k: int = 10) -> List[SimilarityResult]:
        return self.vector_client.search_text(query, limit=top_k)
