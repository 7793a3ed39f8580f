import math
import threading

import pytest

from media_search.errors import DimensionMismatchError
from media_search.models.embedding_models import EmbeddingData, EmbeddingDocument, SimilarityResult
from media_search.services.similarity_service import (
    SimilarityService,
    compute_magnitude,
    cosine_similarity,
    dot_product,
    rank_results,
)


def _doc(doc_id, vector):
    return EmbeddingDocument(id=doc_id, embedding=vector, magnitude=compute_magnitude(vector))


def _query(vector):
    return EmbeddingData(embedding=vector, magnitude=compute_magnitude(vector))


class TestMagnitude:
    def test_sqrt_of_sum_of_squares(self):
        assert compute_magnitude([3.0, 4.0]) == pytest.approx(5.0)
        assert compute_magnitude([1.0, 1.0]) == pytest.approx(math.sqrt(2))

    def test_zero_vector(self):
        assert compute_magnitude([0.0, 0.0, 0.0]) == 0.0

    def test_empty_vector(self):
        assert compute_magnitude([]) == 0.0


class TestCosineSimilarity:
    def test_same_direction_is_one(self):
        assert cosine_similarity(_doc("x", [2.0, 2.0]), _query([1.0, 1.0])) == pytest.approx(1.0)

    def test_orthogonal_is_zero(self):
        assert cosine_similarity(_doc("x", [1.0, 0.0]), _query([0.0, 1.0])) == pytest.approx(0.0)

    def test_zero_magnitude_is_zero_not_nan(self):
        result = cosine_similarity(_doc("x", [0.0, 0.0]), _query([1.0, 0.0]))
        assert result == 0.0
        assert not math.isnan(result)

        result = cosine_similarity(_doc("x", [1.0, 0.0]), _query([0.0, 0.0]))
        assert result == 0.0

    def test_uses_stored_magnitudes(self):
        document = EmbeddingDocument(id="x", embedding=[1.0, 0.0], magnitude=2.0)
        assert cosine_similarity(document, _query([1.0, 0.0])) == pytest.approx(0.5)

    def test_dimension_mismatch_raises(self):
        with pytest.raises(DimensionMismatchError):
            cosine_similarity(_doc("x", [1.0, 0.0, 0.0]), _query([1.0, 0.0]))

    def test_dot_product_dimension_mismatch_raises(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            dot_product([1.0], [1.0, 2.0])
        assert exc_info.value.left == 1
        assert exc_info.value.right == 2

    def test_dimension_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            dot_product([1.0, 2.0], [1.0])


class TestRankResults:
    def test_sorted_descending(self):
        results = [
            SimilarityResult(id="low", similarity=0.1),
            SimilarityResult(id="high", similarity=0.9),
            SimilarityResult(id="mid", similarity=0.5),
        ]
        ranked = rank_results(results)
        assert [r.id for r in ranked] == ["high", "mid", "low"]

    def test_ties_keep_input_order(self):
        results = [
            SimilarityResult(id="first", similarity=0.5),
            SimilarityResult(id="top", similarity=0.8),
            SimilarityResult(id="second", similarity=0.5),
            SimilarityResult(id="third", similarity=0.5),
        ]
        ranked = rank_results(results)
        assert [r.id for r in ranked] == ["top", "first", "second", "third"]

    def test_truncates_to_top_k(self):
        results = [SimilarityResult(id=str(i), similarity=i / 20) for i in range(20)]
        ranked = rank_results(results, top_k=10)
        assert len(ranked) == 10
        assert ranked[0].id == "19"
        assert ranked[-1].id == "10"
        similarities = [r.similarity for r in ranked]
        assert similarities == sorted(similarities, reverse=True)


class TestSimilarityService:
    def test_ranks_stored_documents(self):
        documents = [_doc("A", [1.0, 0.0]), _doc("B", [0.0, 1.0]), _doc("C", [1.0, 1.0])]
        service = SimilarityService(max_workers=2)

        ranked = service.rank(_query([1.0, 0.0]), documents, top_k=10)

        assert [r.id for r in ranked] == ["A", "C", "B"]
        assert ranked[0].similarity == pytest.approx(1.0)
        assert ranked[1].similarity == pytest.approx(1 / math.sqrt(2))
        assert ranked[2].similarity == pytest.approx(0.0)

    def test_every_document_scored_once(self):
        documents = [_doc(f"doc-{i}", [float(i), 1.0]) for i in range(250)]
        service = SimilarityService(max_workers=100)

        results = service.score_documents(_query([1.0, 1.0]), documents)

        assert [r.id for r in results] == [d.id for d in documents]

    def test_empty_collection(self):
        assert SimilarityService().rank(_query([1.0, 0.0]), []) == []

    def test_dimension_mismatch_aborts_ranking(self):
        documents = [_doc("A", [1.0, 0.0]), _doc("bad", [1.0, 0.0, 0.0])]
        with pytest.raises(DimensionMismatchError):
            SimilarityService(max_workers=2).rank(_query([1.0, 0.0]), documents)

    def test_worker_bound(self, monkeypatch):
        import media_search.services.similarity_service as similarity_module

        lock = threading.Lock()
        state = {"active": 0, "max": 0}
        original = similarity_module.cosine_similarity

        def tracking_cosine(document, query):
            with lock:
                state["active"] += 1
                state["max"] = max(state["max"], state["active"])
            try:
                threading.Event().wait(0.005)
                return original(document, query)
            finally:
                with lock:
                    state["active"] -= 1

        monkeypatch.setattr(similarity_module, "cosine_similarity", tracking_cosine)
        documents = [_doc(str(i), [1.0, float(i)]) for i in range(30)]

        SimilarityService(max_workers=3).score_documents(_query([1.0, 0.0]), documents)

        assert 1 <= state["max"] <= 3
