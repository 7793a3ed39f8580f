# Load environment variables from .env file first, before any other imports
from dotenv import load_dotenv
load_dotenv()

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from media_search.api.routes import search, ingest
from media_search.errors import MediaSearchError

logger = logging.getLogger(__name__)

app = FastAPI(title="Media Library Semantic Search", version="1.0.0")

app.include_router(search.router, prefix="/search", tags=["search"])
app.include_router(ingest.router, prefix="/ingest", tags=["ingest"])


@app.exception_handler(MediaSearchError)
async def media_search_error_handler(request: Request, exc: MediaSearchError):
    # Raised while building services in dependencies, outside the routes' own handling
    logger.error(f"Request to {request.url.path} failed: {str(exc)}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health")
def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
