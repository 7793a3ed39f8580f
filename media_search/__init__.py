"""
Semantic search over a social-media content library.
Embeddings come from the OpenAI embeddings API and are stored in MongoDB,
or delegated entirely to a Qdrant vector database.
"""

__version__ = "1.0.0"
