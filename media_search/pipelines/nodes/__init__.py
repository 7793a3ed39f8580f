# Pipeline nodes
# Each factory binds a node function to the service it calls

from .load_content_node import make_load_content_node
from .embed_and_store_node import make_embed_and_store_node
from .embed_query_node import make_embed_query_node
from .load_embeddings_node import make_load_embeddings_node
from .rank_embeddings_node import make_rank_embeddings_node

__all__ = [
    "make_load_content_node",
    "make_embed_and_store_node",
    "make_embed_query_node",
    "make_load_embeddings_node",
    "make_rank_embeddings_node"
]
