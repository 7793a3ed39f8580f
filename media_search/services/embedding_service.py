import logging
from typing import Any, Optional, Union

import openai

from media_search.config import SearchConfig
from media_search.errors import EmbeddingAPIError
from media_search.models.content_models import ContactContent, MediaLibraryContent
from media_search.models.embedding_models import EmbeddingAPIResponse, EmbeddingData, EmbeddingUsage

logger = logging.getLogger(__name__)


class EmbeddingService:
    """
    Client for the OpenAI embeddings endpoint.
    One blocking request per call; the magnitude of the returned vector is
    computed here since the API does not send it.
    """

    def __init__(self, config: SearchConfig, client: Optional[Any] = None):
        self.model = config.embedding_model

        if client is not None:
            self.client = client
        else:
            if not config.openai_api_key:
                raise EmbeddingAPIError("OPENAI_API_KEY must be set to call the embeddings API")
            # No retry policy: a failed call is reported to the caller as-is
            self.client = openai.OpenAI(
                api_key=config.openai_api_key,
                base_url=config.embedding_api_base,
                max_retries=0,
            )

    def embed_text(self, text: str) -> EmbeddingAPIResponse:
        try:
            response = self.client.embeddings.create(model=self.model, input=text)
        except openai.OpenAIError as e:
            logger.error(f"Embedding request failed: {str(e)}")
            raise EmbeddingAPIError(f"Embedding request failed: {e}") from e

        api_response = self._to_api_response(response)
        if not api_response.data:
            raise EmbeddingAPIError("Embedding response contained no data")

        api_response.set_magnitude()
        return api_response

    def embed_content(self, item: Union[MediaLibraryContent, ContactContent]) -> EmbeddingAPIResponse:
        return self.embed_text(item.to_embedding_input())

    def _to_api_response(self, response: Any) -> EmbeddingAPIResponse:
        try:
            data = [
                EmbeddingData(
                    object=getattr(item, "object", "embedding"),
                    embedding=[float(x) for x in item.embedding],
                    index=getattr(item, "index", i),
                )
                for i, item in enumerate(response.data or [])
            ]
            usage = getattr(response, "usage", None)
            return EmbeddingAPIResponse(
                object=getattr(response, "object", "list"),
                data=data,
                model=getattr(response, "model", self.model) or self.model,
                usage=EmbeddingUsage(
                    prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
                    total_tokens=getattr(usage, "total_tokens", 0) or 0,
                ),
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise EmbeddingAPIError(f"Could not decode embedding response: {e}") from e
