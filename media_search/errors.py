# Error types for the ingestion and search paths.
# Every one of them is fatal for the operation that raised it; the CLI and the
# API routes are the only places that catch them.


class MediaSearchError(Exception):
    """Base class for all media search failures"""


class ContentFileError(MediaSearchError):
    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Failed to load content file {path}: {reason}")


class EmbeddingAPIError(MediaSearchError):
    """Embedding request failed or returned an unusable response"""


class StorageError(MediaSearchError):
    """Document store connection, read or write failure"""


class DimensionMismatchError(MediaSearchError, ValueError):
    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(f"Vectors must have the same length ({left} != {right})")


class VectorDBError(MediaSearchError):
    """Vector database connection or schema failure"""
