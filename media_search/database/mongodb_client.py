import logging
from typing import Any, List, Optional

from pydantic import ValidationError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from media_search.config import SearchConfig
from media_search.errors import StorageError
from media_search.models.embedding_models import EmbeddingDocument

logger = logging.getLogger(__name__)


class MongoDBClient:
    """
    MongoDB client for the embeddings collection.
    Holds {id, embedding, magnitude} documents, one per content item.
    A single MongoClient is shared by all worker threads.
    """

    def __init__(self, config: SearchConfig, client: Optional[Any] = None):
        timeout_ms = int(config.mongodb_timeout_seconds * 1000)

        try:
            self.client = client if client is not None else MongoClient(
                config.mongodb_connection_string,
                connectTimeoutMS=timeout_ms,
                serverSelectionTimeoutMS=timeout_ms,
            )
            self.db = self.client[config.mongodb_database]
            self.collection = self.db[config.mongodb_collection]
            logger.info(f"MongoDB client ready for {config.mongodb_database}.{config.mongodb_collection}")
        except PyMongoError as e:
            logger.error(f"Failed to connect to MongoDB: {str(e)}")
            raise StorageError(f"Failed to connect to MongoDB: {e}") from e

    def insert_embedding_document(self, document: EmbeddingDocument) -> None:
        """Insert one embedding document; writes are independent and unordered"""
        try:
            self.collection.insert_one(document.model_dump())
        except PyMongoError as e:
            logger.error(f"MongoDB error inserting embedding for {document.id}: {str(e)}")
            raise StorageError(f"Failed to insert embedding for {document.id}: {e}") from e

    def get_all_embeddings(self) -> List[EmbeddingDocument]:
        """
        Fetch every stored embedding document.
        No filter and no pagination: the whole collection is loaded into memory.
        """
        try:
            cursor = self.collection.find({}, {"_id": 0, "id": 1, "embedding": 1, "magnitude": 1})
            embeddings = [EmbeddingDocument.model_validate(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error(f"MongoDB error fetching embeddings: {str(e)}")
            raise StorageError(f"Failed to fetch embeddings: {e}") from e
        except ValidationError as e:
            raise StorageError(f"Stored embedding document could not be decoded: {e}") from e

        logger.info(f"Fetched {len(embeddings)} embedding documents from MongoDB")
        return embeddings

    def count_documents(self) -> int:
        try:
            return self.collection.count_documents({})
        except PyMongoError as e:
            raise StorageError(f"Failed to count embeddings: {e}") from e

    def close(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")
