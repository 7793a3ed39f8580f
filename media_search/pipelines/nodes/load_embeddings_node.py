from typing import Callable, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from media_search.database.mongodb_client import MongoDBClient
    from media_search.models.pipeline_models import SearchState

logger = logging.getLogger(__name__)


def make_load_embeddings_node(store: 'MongoDBClient') -> Callable[['SearchState'], 'SearchState']:
    def load_embeddings_node(state: 'SearchState') -> 'SearchState':
        documents = store.get_all_embeddings()

        state["documents"] = documents
        state["metrics"]["documents_scanned"] = len(documents)
        state["pipeline_step"] = "embeddings_loaded"

        logger.info(f"Loaded {len(documents)} stored embeddings")
        return state

    return load_embeddings_node
