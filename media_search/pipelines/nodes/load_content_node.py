from typing import Callable, List, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from media_search.models.pipeline_models import IngestionState

logger = logging.getLogger(__name__)


def make_load_content_node(loader: Callable[[str], List]) -> Callable[['IngestionState'], 'IngestionState']:
    """
    Build the node that reads the content file into memory.
    `loader` is load_media_library or load_contacts.
    """

    def load_content_node(state: 'IngestionState') -> 'IngestionState':
        logger.info(f"Loading content from {state['content_file']}")

        state["content_items"] = loader(state["content_file"])
        state["pipeline_step"] = "content_loaded"
        return state

    return load_content_node
