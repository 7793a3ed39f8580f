from typing import Callable, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from media_search.models.pipeline_models import IngestionState
    from media_search.services.ingestion_service import IngestionService

logger = logging.getLogger(__name__)


def make_embed_and_store_node(ingestion_service: 'IngestionService') -> Callable[['IngestionState'], 'IngestionState']:
    def embed_and_store_node(state: 'IngestionState') -> 'IngestionState':
        """
        Embed every loaded item and write its embedding document.
        Any failure propagates and ends the pipeline.
        """
        items = state.get("content_items") or []
        logger.info(f"Embedding and storing {len(items)} content items")

        state["summary"] = ingestion_service.ingest(items)
        state["pipeline_step"] = "embeddings_stored"
        return state

    return embed_and_store_node
