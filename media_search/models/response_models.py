# Pydantic models for outgoing API responses
from pydantic import BaseModel
from typing import List, Optional

from media_search.models.embedding_models import SimilarityResult
from media_search.models.pipeline_models import IngestionSummary


class BaseResponse(BaseModel):
    """Base response model for API endpoints"""
    success: bool = True
    message: Optional[str] = None


class SearchResponse(BaseResponse):
    query: str
    results: List[SimilarityResult]


class IngestResponse(BaseResponse):
    content_file: str
    summary: IngestionSummary
