from typing import Callable, TYPE_CHECKING
import logging

from media_search.models.embedding_models import EmbeddingData

if TYPE_CHECKING:
    from media_search.models.pipeline_models import SearchState
    from media_search.services.similarity_service import SimilarityService

logger = logging.getLogger(__name__)


def make_rank_embeddings_node(similarity_service: 'SimilarityService') -> Callable[['SearchState'], 'SearchState']:
    def rank_embeddings_node(state: 'SearchState') -> 'SearchState':
        """
        Score every stored document against the query and keep the top_k.
        A dimension mismatch between the query and any document is fatal.
        """
        query = EmbeddingData(
            embedding=state["query_embedding"],
            magnitude=state["query_magnitude"],
        )

        results = similarity_service.rank(query, state.get("documents") or [], top_k=state["top_k"])

        state["results"] = results
        state["pipeline_step"] = "ranked"

        if results:
            logger.info(f"Ranked {len(state.get('documents') or [])} documents, "
                        f"best match {results[0].id} ({results[0].similarity:.4f})")
        else:
            logger.warning("No stored embeddings to rank")
        return state

    return rank_embeddings_node
