from typing import Callable, List, Optional
from datetime import datetime
import logging
from langgraph.graph import StateGraph, END

# LangSmith tracing
from langsmith import traceable

from media_search.config import SearchConfig
from media_search.database.mongodb_client import MongoDBClient
from media_search.models.pipeline_models import IngestionState, IngestionSummary
from media_search.pipelines.nodes import make_load_content_node, make_embed_and_store_node
from media_search.services.content_loader import load_media_library
from media_search.services.embedding_service import EmbeddingService
from media_search.services.ingestion_service import IngestionService

logger = logging.getLogger(__name__)


class IngestionOrchestrator:
    """
    Orchestrator for the ingestion pipeline:
    1. Load content (read the media library file into memory)
    2. Embed and store (bounded worker pool: embed, compute magnitude, insert)
    """

    def __init__(self, ingestion_service: IngestionService, default_content_file: str,
                 loader: Callable[[str], List] = load_media_library):
        self.ingestion_service = ingestion_service
        self.default_content_file = default_content_file
        self.loader = loader
        self.graph = self._build_graph()

    @classmethod
    def from_config(cls, config: SearchConfig) -> "IngestionOrchestrator":
        ingestion_service = IngestionService(
            embedding_service=EmbeddingService(config),
            store=MongoDBClient(config),
            max_workers=config.ingest_workers,
        )
        return cls(ingestion_service, default_content_file=config.media_library_file)

    def _build_graph(self):
        """Build the ingestion LangGraph workflow"""
        workflow = StateGraph(IngestionState)

        workflow.add_node("load_content", make_load_content_node(self.loader))
        workflow.add_node("embed_and_store", make_embed_and_store_node(self.ingestion_service))

        workflow.set_entry_point("load_content")
        workflow.add_edge("load_content", "embed_and_store")
        workflow.add_edge("embed_and_store", END)

        graph = workflow.compile()
        logger.info("Ingestion LangGraph workflow compiled successfully")
        return graph

    @traceable(name="ingestion_pipeline")
    def run(self, content_file: Optional[str] = None) -> IngestionSummary:
        """
        Main entry point for ingestion.
        Errors from any step are raised unchanged to the caller.
        """
        start_time = datetime.utcnow()

        initial_state: IngestionState = {
            "content_file": content_file or self.default_content_file,
            "content_items": None,
            "summary": None,
            "pipeline_step": "initialized",
            "execution_time": None
        }

        result = self.graph.invoke(initial_state)

        execution_time = (datetime.utcnow() - start_time).total_seconds()
        logger.info(f"Ingestion pipeline completed in {execution_time:.2f}s")

        return result.get("summary") or IngestionSummary()

    def close(self):
        """Release the storage connection"""
        self.ingestion_service.store.close()
