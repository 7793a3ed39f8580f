from functools import lru_cache

from media_search.config import SearchConfig
from media_search.pipelines.ingestion_orchestrator import IngestionOrchestrator
from media_search.pipelines.search_orchestrator import SearchOrchestrator


@lru_cache()
def get_config() -> SearchConfig:
    return SearchConfig.from_env()


@lru_cache()
def get_search_orchestrator() -> SearchOrchestrator:
    return SearchOrchestrator.from_config(get_config())


@lru_cache()
def get_ingestion_orchestrator() -> IngestionOrchestrator:
    return IngestionOrchestrator.from_config(get_config())
