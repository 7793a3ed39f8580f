import pytest
from types import SimpleNamespace

from qdrant_client import models

from media_search.database.qdrant_client import QdrantVectorClient, point_id_for
from media_search.models.content_models import ContactContent, MediaLibraryContent
from media_search.services.vector_db_service import VectorDBService

from fakes import FakeQdrant


def _items(count):
    return [MediaLibraryContent(id=f"item-{i}", caption=f"caption {i}") for i in range(count)]


def _service(config, fake, batch_size=2, delay=0.5):
    sleeps = []
    service = VectorDBService(QdrantVectorClient(config, client=fake), batch_size=batch_size,
                              batch_delay_seconds=delay, sleep=sleeps.append)
    return service, sleeps


def test_create_schema_uses_cosine_vectors(config):
    fake = FakeQdrant()
    service, _ = _service(config, fake)

    service.create_schema()

    name, vectors_config = fake.created[0]
    assert name == "media_library"
    assert vectors_config.size == 1536
    assert vectors_config.distance == models.Distance.COSINE
    assert fake.deleted == []


def test_create_schema_replaces_existing_collection(config):
    fake = FakeQdrant(existing=True)
    service, _ = _service(config, fake)

    service.create_schema()

    assert fake.deleted == ["media_library"]
    assert len(fake.created) == 1


def test_upload_in_fixed_batches_with_delay(config):
    fake = FakeQdrant()
    service, sleeps = _service(config, fake, batch_size=500, delay=2.0)

    summary = service.upload(_items(1200))

    assert [len(batch) for batch in fake.upserts] == [500, 500, 200]
    assert sleeps == [2.0, 2.0]
    assert summary.batches_total == 3
    assert summary.objects_uploaded == 1200
    assert summary.batches_failed == 0


def test_points_are_vectorized_by_the_server(config):
    fake = FakeQdrant()
    service, _ = _service(config, fake)

    service.upload(_items(1))

    point = fake.upserts[0][0]
    assert point.id == point_id_for("item-0")
    assert point.payload["id"] == "item-0"
    assert isinstance(point.vector, models.Document)
    assert point.vector.model == "openai/text-embedding-ada-002"
    assert "caption 0" in point.vector.text


def test_failed_batch_is_logged_and_skipped(config):
    fake = FakeQdrant(fail_batches={2})
    service, sleeps = _service(config, fake, batch_size=2)

    summary = service.upload(_items(6))

    assert len(fake.upserts) == 3
    assert summary.batches_failed == 1
    assert summary.objects_uploaded == 4
    assert len(sleeps) == 2


def test_object_errors_are_reported(config):
    fake = FakeQdrant(status=models.UpdateStatus.ACKNOWLEDGED)
    service, _ = _service(config, fake, batch_size=2)

    summary = service.upload(_items(2))

    assert summary.objects_uploaded == 0
    assert len(summary.object_errors) == 2
    assert summary.object_errors[0].startswith("item-0")


def test_contact_records_upload(config):
    fake = FakeQdrant()
    service, _ = _service(config, fake)

    service.upload([ContactContent(id="c1", contact="jane", reach=100, engagement=0.5)])

    assert fake.upserts[0][0].payload == {"id": "c1", "contact": "jane", "reach": 100, "engagement": 0.5}


def test_search_is_delegated(config):
    fake = FakeQdrant(points=[
        SimpleNamespace(id=point_id_for("A"), score=0.91, payload={"id": "A"}),
        SimpleNamespace(id=point_id_for("B"), score=0.42, payload={"id": "B"}),
    ])
    service, _ = _service(config, fake)

    results = service.search("beach sunset", top_k=10)

    assert [(r.id, r.similarity) for r in results] == [("A", 0.91), ("B", 0.42)]
    assert fake.queries[0]["limit"] == 10
    assert fake.queries[0]["query"].text == "beach sunset"


def test_point_ids_are_stable():
    assert point_id_for("abc") == point_id_for("abc")
    assert point_id_for("abc") != point_id_for("abd")
