import math

import pytest

from media_search.config import SearchConfig
from media_search.database.mongodb_client import MongoDBClient
from media_search.models.content_models import MediaLibraryContent
from media_search.services.embedding_service import EmbeddingService

from fakes import FakeCollection, FakeEmbeddings, FakeMongoClient, FakeOpenAI


@pytest.fixture
def config():
    return SearchConfig(
        openai_api_key="test-key",
        media_library_file="library.json",
        ingest_workers=4,
        similarity_workers=4,
        top_k=10,
        vector_db_batch_size=2,
        vector_db_batch_delay_seconds=0.5,
    )


@pytest.fixture
def sample_items():
    return [
        MediaLibraryContent(id="A", caption="caption-a", hashtags="#a", mentions="@a"),
        MediaLibraryContent(id="B", caption="caption-b", hashtags="#b", mentions="@b"),
        MediaLibraryContent(id="C", caption="caption-c", hashtags="#c", mentions="@c"),
    ]


@pytest.fixture
def fake_embeddings():
    return FakeEmbeddings({
        "caption-a": [1.0, 0.0],
        "caption-b": [0.0, 1.0],
        "caption-c": [1.0, 1.0],
        "query-a": [1.0, 0.0],
    })


@pytest.fixture
def embedding_service(config, fake_embeddings):
    return EmbeddingService(config, client=FakeOpenAI(fake_embeddings))


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def store(config, collection):
    return MongoDBClient(config, client=FakeMongoClient(collection))


@pytest.fixture
def stored_documents():
    return [
        {"id": "A", "embedding": [1.0, 0.0], "magnitude": 1.0},
        {"id": "B", "embedding": [0.0, 1.0], "magnitude": 1.0},
        {"id": "C", "embedding": [1.0, 1.0], "magnitude": math.sqrt(2)},
    ]
