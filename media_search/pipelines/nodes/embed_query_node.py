from typing import Callable, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from media_search.models.pipeline_models import SearchState
    from media_search.services.embedding_service import EmbeddingService

logger = logging.getLogger(__name__)


def make_embed_query_node(embedding_service: 'EmbeddingService') -> Callable[['SearchState'], 'SearchState']:
    def embed_query_node(state: 'SearchState') -> 'SearchState':
        """
        Embed the free-text query through the same call path used for ingestion
        """
        api_response = embedding_service.embed_text(state["query"])
        data = api_response.first()

        state["query_embedding"] = data.embedding
        state["query_magnitude"] = data.magnitude
        state["metrics"]["query_tokens"] = api_response.usage.total_tokens
        state["pipeline_step"] = "query_embedded"

        logger.info(f"Query embedded: dim={len(data.embedding)}, magnitude={data.magnitude:.4f}")
        return state

    return embed_query_node
