
from .finder_port import FinderPort
from .provider_port import ProgressCallback, ProviderPort
from .search_client_port import SearchClientPort, SearchIndexPort, SearchTypePort
from .transformer_port import (
    ModelToDocumentTransformerPort,
    SearchToModelTransformerPort,
)

__all__ = [
    "SearchClientPort",
    "SearchIndexPort",
    "SearchTypePort",
    "SearchToModelTransformerPort",
    "ModelToDocumentTransformerPort",
    "ProviderPort",
    "ProgressCallback",
    "FinderPort",
]
