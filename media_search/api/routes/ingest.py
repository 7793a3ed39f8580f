from fastapi import APIRouter, Body, Depends, HTTPException
from typing import Optional
import logging

from media_search.api.dependencies import get_ingestion_orchestrator
from media_search.errors import MediaSearchError
from media_search.models.response_models import IngestResponse
from media_search.pipelines.ingestion_orchestrator import IngestionOrchestrator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=IngestResponse)
def ingest_media_library(
    file: Optional[str] = Body(None, embed=True, description="Content JSON file; defaults to MEDIA_LIBRARY_FILE"),
    orchestrator: IngestionOrchestrator = Depends(get_ingestion_orchestrator),
):
    """
    Embed every item of the content file and store the embeddings.
    Blocks until the whole file has been processed.
    """
    content_file = file or orchestrator.default_content_file
    try:
        logger.info(f"Triggering ingestion of {content_file} via API")
        summary = orchestrator.run(content_file)
        return IngestResponse(content_file=content_file, summary=summary)
    except MediaSearchError as e:
        logger.error(f"Error running ingestion via API: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Ingestion failed: {e}")
