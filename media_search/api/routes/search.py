from fastapi import APIRouter, Depends, HTTPException, Query
import logging

from media_search.api.dependencies import get_search_orchestrator
from media_search.errors import MediaSearchError
from media_search.models.response_models import SearchResponse
from media_search.pipelines.search_orchestrator import SearchOrchestrator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=SearchResponse)
def search_media(
    query: str = Query(..., min_length=1, description="Free-text query"),
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator),
):
    """
    Rank every stored embedding against the query and return the best matches
    """
    try:
        results = orchestrator.search(query.strip())
        return SearchResponse(query=query, results=results)
    except MediaSearchError as e:
        logger.error(f"Search failed for '{query}': {str(e)}")
        raise HTTPException(status_code=500, detail=f"Search failed: {e}")
