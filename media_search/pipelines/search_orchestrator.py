from typing import List
from datetime import datetime
import logging
from langgraph.graph import StateGraph, END

# LangSmith tracing
from langsmith import traceable

from media_search.config import SearchConfig
from media_search.database.mongodb_client import MongoDBClient
from media_search.models.embedding_models import SimilarityResult
from media_search.models.pipeline_models import SearchState
from media_search.pipelines.nodes import (
    make_embed_query_node,
    make_load_embeddings_node,
    make_rank_embeddings_node,
)
from media_search.services.embedding_service import EmbeddingService
from media_search.services.similarity_service import SimilarityService

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """
    Orchestrator for brute-force semantic search:
    1. Embed query (same API path as ingestion)
    2. Load embeddings (full scan of the collection)
    3. Rank embeddings (cosine similarity on a bounded pool, sorted descending)
    """

    def __init__(self, embedding_service: EmbeddingService, store: MongoDBClient,
                 similarity_service: SimilarityService, top_k: int = 10):
        self.embedding_service = embedding_service
        self.store = store
        self.similarity_service = similarity_service
        self.top_k = top_k
        self.graph = self._build_graph()

    @classmethod
    def from_config(cls, config: SearchConfig) -> "SearchOrchestrator":
        return cls(
            embedding_service=EmbeddingService(config),
            store=MongoDBClient(config),
            similarity_service=SimilarityService(max_workers=config.similarity_workers),
            top_k=config.top_k,
        )

    def _build_graph(self):
        """Build the search LangGraph workflow"""
        workflow = StateGraph(SearchState)

        workflow.add_node("embed_query", make_embed_query_node(self.embedding_service))
        workflow.add_node("load_embeddings", make_load_embeddings_node(self.store))
        workflow.add_node("rank_embeddings", make_rank_embeddings_node(self.similarity_service))

        workflow.set_entry_point("embed_query")
        workflow.add_edge("embed_query", "load_embeddings")
        workflow.add_edge("load_embeddings", "rank_embeddings")
        workflow.add_edge("rank_embeddings", END)

        graph = workflow.compile()
        logger.info("Search LangGraph workflow compiled successfully")
        return graph

    @traceable(name="search_pipeline")
    def search(self, query: str) -> List[SimilarityResult]:
        """
        Return the top_k stored items most similar to the query, best first.
        Errors from any step are raised unchanged to the caller.
        """
        start_time = datetime.utcnow()

        initial_state: SearchState = {
            "query": query,
            "top_k": self.top_k,
            "query_embedding": None,
            "query_magnitude": None,
            "documents": None,
            "results": None,
            "pipeline_step": "initialized",
            "metrics": {},
            "execution_time": None
        }

        result = self.graph.invoke(initial_state)

        execution_time = (datetime.utcnow() - start_time).total_seconds()
        logger.info(f"Search completed in {execution_time:.2f}s "
                    f"({result.get('metrics', {}).get('documents_scanned', 0)} documents scanned)")

        return result.get("results") or []

    def close(self):
        """Release the storage connection"""
        self.store.close()
