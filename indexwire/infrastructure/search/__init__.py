
from .opensearch_client import OpenSearchClient
from .opensearch_index import OpenSearchIndex
from .opensearch_type import OpenSearchType

__all__ = [
    "OpenSearchClient",
    "OpenSearchIndex",
    "OpenSearchType",
]
