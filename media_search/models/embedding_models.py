# Data classes for embedding responses and stored embedding vectors
import numpy as np
from pydantic import BaseModel
from typing import List

from media_search.errors import EmbeddingAPIError


class EmbeddingData(BaseModel):
    object: str = "embedding"
    embedding: List[float]
    index: int = 0
    magnitude: float = 0.0  # computed client-side, not part of the API response


class EmbeddingUsage(BaseModel):
    prompt_tokens: int = 0
    total_tokens: int = 0


class EmbeddingAPIResponse(BaseModel):
    object: str = "list"
    data: List[EmbeddingData] = []
    model: str = ""
    usage: EmbeddingUsage = EmbeddingUsage()

    def set_magnitude(self) -> None:
        """Attach the Euclidean norm of the first embedding"""
        if not self.data:
            return
        self.data[0].magnitude = float(np.linalg.norm(np.asarray(self.data[0].embedding, dtype=float)))

    def first(self) -> EmbeddingData:
        if not self.data:
            raise EmbeddingAPIError("Embedding response contained no data")
        return self.data[0]


class EmbeddingDocument(BaseModel):
    """Persisted projection of an embedding: written once per content item"""
    id: str
    embedding: List[float]
    magnitude: float


class SimilarityResult(BaseModel):
    id: str
    similarity: float
