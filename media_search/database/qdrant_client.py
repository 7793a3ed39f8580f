import logging
import uuid
from typing import Any, List, Optional, Sequence, Union

from qdrant_client import QdrantClient, models
from qdrant_client.http.exceptions import ResponseHandlingException, UnexpectedResponse

from media_search.config import SearchConfig
from media_search.errors import VectorDBError
from media_search.models.content_models import ContactContent, MediaLibraryContent
from media_search.models.embedding_models import SimilarityResult

logger = logging.getLogger(__name__)

ContentItem = Union[MediaLibraryContent, ContactContent]


def point_id_for(content_id: str) -> str:
    """Qdrant only accepts integer or UUID point ids, so content ids are mapped to a stable UUID"""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, content_id))


class QdrantVectorClient:
    """
    Client for the vendor-managed variant.
    Qdrant vectorizes the content server-side with the configured OpenAI model,
    stores the vectors, and answers similarity queries.
    """

    def __init__(self, config: SearchConfig, client: Optional[Any] = None):
        self.collection_name = config.vector_db_collection
        self.dimensions = config.embedding_dimensions
        self.vectorizer_model = f"openai/{config.embedding_model}"
        self.vectorizer_options = {"openai-api-key": config.openai_api_key} if config.openai_api_key else None

        if client is not None:
            self.client = client
            return

        try:
            # Check if host contains protocol (http:// or https://)
            if config.qdrant_host.startswith(("http://", "https://")):
                self.client = QdrantClient(
                    url=config.qdrant_host,
                    api_key=config.qdrant_api_key,
                    cloud_inference=True,
                )
            else:
                self.client = QdrantClient(
                    host=config.qdrant_host,
                    port=config.qdrant_port,
                    api_key=config.qdrant_api_key,
                    cloud_inference=True,
                )
            logger.info(f"Qdrant client created for collection {self.collection_name}")
        except (ResponseHandlingException, UnexpectedResponse, ValueError) as e:
            logger.error(f"Failed to connect to Qdrant: {str(e)}")
            raise VectorDBError(f"Failed to connect to Qdrant: {e}") from e

    def _document(self, text: str) -> models.Document:
        return models.Document(
            text=text,
            model=self.vectorizer_model,
            options=self.vectorizer_options,
        )

    def create_schema(self) -> None:
        """
        (Re)create the collection. Vectors are produced by the vectorizer model
        attached to every inserted object, compared by cosine distance.
        """
        try:
            if self.client.collection_exists(self.collection_name):
                logger.info(f"Dropping existing collection {self.collection_name}")
                self.client.delete_collection(self.collection_name)

            self.client.create_collection(
                collection_name=self.collection_name,
                vectors_config=models.VectorParams(
                    size=self.dimensions,
                    distance=models.Distance.COSINE,
                ),
            )
            logger.info(f"Created collection {self.collection_name} "
                        f"(vectorizer={self.vectorizer_model}, size={self.dimensions})")
        except (ResponseHandlingException, UnexpectedResponse) as e:
            logger.error(f"Failed to create collection {self.collection_name}: {str(e)}")
            raise VectorDBError(f"Failed to create collection {self.collection_name}: {e}") from e

    def insert_batch(self, items: Sequence[ContentItem]) -> List[str]:
        """
        Upload one batch of content objects.
        Batch-level failures raise the client exception; object-level problems
        are returned as error strings.
        """
        points = [
            models.PointStruct(
                id=point_id_for(item.id),
                vector=self._document(item.to_embedding_input()),
                payload=item.model_dump(),
            )
            for item in items
        ]

        result = self.client.upsert(collection_name=self.collection_name, points=points, wait=True)

        errors = []
        status = getattr(result, "status", None)
        if status is not None and status != models.UpdateStatus.COMPLETED:
            errors.extend(f"{item.id}: update status {status}" for item in items)
        return errors

    def search_text(self, query: str, limit: int = 10) -> List[SimilarityResult]:
        """Vendor-side similarity search for free text"""
        try:
            response = self.client.query_points(
                collection_name=self.collection_name,
                query=self._document(query),
                limit=limit,
                with_payload=["id"],
            )
        except (ResponseHandlingException, UnexpectedResponse) as e:
            logger.error(f"Error in Qdrant text search: {str(e)}")
            raise VectorDBError(f"Vector database search failed: {e}") from e

        results = [
            SimilarityResult(
                id=(point.payload or {}).get("id", str(point.id)),
                similarity=float(point.score),
            )
            for point in response.points
        ]
        logger.info(f"Found {len(results)} matches in Qdrant")
        return results
