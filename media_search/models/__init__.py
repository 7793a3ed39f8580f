# Content models
from .content_models import MediaLibraryContent, ContactContent

# Embedding models
from .embedding_models import (
    EmbeddingData,
    EmbeddingUsage,
    EmbeddingAPIResponse,
    EmbeddingDocument,
    SimilarityResult,
)

# Pipeline models
from .pipeline_models import IngestionState, SearchState, IngestionSummary, VectorDBUploadSummary

# Response models
from .response_models import BaseResponse, SearchResponse, IngestResponse

__all__ = [
    "MediaLibraryContent",
    "ContactContent",
    "EmbeddingData",
    "EmbeddingUsage",
    "EmbeddingAPIResponse",
    "EmbeddingDocument",
    "SimilarityResult",
    "IngestionState",
    "SearchState",
    "IngestionSummary",
    "VectorDBUploadSummary",
    "BaseResponse",
    "SearchResponse",
    "IngestResponse",
]
