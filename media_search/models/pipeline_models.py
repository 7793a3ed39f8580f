from typing import Any, Dict, List, Optional
from typing_extensions import TypedDict
from pydantic import BaseModel


class IngestionSummary(BaseModel):
    items_total: int = 0
    documents_written: int = 0
    prompt_tokens: int = 0
    total_tokens: int = 0


class VectorDBUploadSummary(BaseModel):
    objects_total: int = 0
    batches_total: int = 0
    batches_failed: int = 0
    objects_uploaded: int = 0
    object_errors: List[str] = []


class IngestionState(TypedDict, total=False):
    """
    State object for the ingestion pipeline
    Compatible with LangGraph's state handling
    """
    # Input
    content_file: str

    # Pipeline data
    content_items: Optional[List[Any]]
    summary: Optional[IngestionSummary]

    # Pipeline metadata
    pipeline_step: str
    execution_time: Optional[float]


class SearchState(TypedDict, total=False):
    """
    State object for the brute-force similarity search pipeline
    Compatible with LangGraph's state handling
    """
    # Input
    query: str
    top_k: int

    # Pipeline data
    query_embedding: Optional[List[float]]
    query_magnitude: Optional[float]
    documents: Optional[List[Any]]
    results: Optional[List[Any]]

    # Pipeline metadata
    pipeline_step: str
    metrics: Dict[str, Any]
    execution_time: Optional[float]
