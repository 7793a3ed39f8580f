from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence
import logging

import numpy as np

from media_search.errors import DimensionMismatchError
from media_search.models.embedding_models import EmbeddingData, EmbeddingDocument, SimilarityResult

logger = logging.getLogger(__name__)


def compute_magnitude(vector: Sequence[float]) -> float:
    """Euclidean norm of a vector; 0.0 for an empty or all-zero vector"""
    if len(vector) == 0:
        return 0.0
    return float(np.linalg.norm(np.asarray(vector, dtype=float)))


def dot_product(v1: Sequence[float], v2: Sequence[float]) -> float:
    if len(v1) != len(v2):
        raise DimensionMismatchError(len(v1), len(v2))
    return float(np.dot(np.asarray(v1, dtype=float), np.asarray(v2, dtype=float)))


def cosine_similarity(document: EmbeddingDocument, query: EmbeddingData) -> float:
    """
    Cosine similarity using the magnitudes already attached to both vectors.
    Defined as 0.0 when either magnitude is zero.
    """
    if len(document.embedding) != len(query.embedding):
        raise DimensionMismatchError(len(document.embedding), len(query.embedding))

    dot = dot_product(document.embedding, query.embedding)
    if document.magnitude == 0 or query.magnitude == 0:
        return 0.0

    return dot / (document.magnitude * query.magnitude)


def rank_results(results: List[SimilarityResult], top_k: int = 10) -> List[SimilarityResult]:
    """
    Sort by similarity descending and keep the first top_k.
    Equal scores keep their input order (sorted() is stable).
    """
    ranked = sorted(results, key=lambda r: r.similarity, reverse=True)
    return ranked[:top_k]


class SimilarityService:
    """
    Brute-force similarity ranking: every stored document is scored against
    the query on a bounded thread pool, then the scores are sorted.
    """

    def __init__(self, max_workers: int = 100):
        self.max_workers = max_workers

    def score_documents(self, query: EmbeddingData,
                        documents: List[EmbeddingDocument]) -> List[SimilarityResult]:
        """
        Score all documents concurrently.
        Each task returns its own result and the results are collected here in
        submission order once every task has finished, so no worker ever
        touches a shared list.
        """
        if not documents:
            return []

        def _score(document: EmbeddingDocument) -> SimilarityResult:
            return SimilarityResult(id=document.id,
                                    similarity=cosine_similarity(document, query))

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(_score, document) for document in documents]
            try:
                results = [future.result() for future in futures]
            except Exception:
                for future in futures:
                    future.cancel()
                raise

        logger.debug(f"Scored {len(results)} documents with {self.max_workers} workers")
        return results

    def rank(self, query: EmbeddingData, documents: List[EmbeddingDocument],
             top_k: int = 10) -> List[SimilarityResult]:
        results = self.score_documents(query, documents)
        return rank_results(results, top_k)
