"""
Loading of the media library content files.
The whole file is read into memory once; records are never mutated afterwards.
"""
import json
import logging
from typing import List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from media_search.errors import ContentFileError
from media_search.models.content_models import ContactContent, MediaLibraryContent

logger = logging.getLogger(__name__)

ContentT = TypeVar("ContentT", bound=BaseModel)


def _load_records(path: str, model: Type[ContentT]) -> List[ContentT]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise ContentFileError(path, str(e)) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ContentFileError(path, f"invalid JSON: {e}") from e

    if not isinstance(raw, list):
        raise ContentFileError(path, f"expected a JSON array, got {type(raw).__name__}")

    try:
        records = [model.model_validate(item) for item in raw]
    except ValidationError as e:
        raise ContentFileError(path, f"invalid record: {e}") from e

    logger.info(f"Loaded {len(records)} {model.__name__} records from {path}")
    return records


def load_media_library(path: str) -> List[MediaLibraryContent]:
    return _load_records(path, MediaLibraryContent)


def load_contacts(path: str) -> List[ContactContent]:
    return _load_records(path, ContactContent)
