import logging
from typing import Any, List, Optional

from ...domain.ports.finder_port import FinderPort
from ...domain.ports.search_client_port import SearchTypePort
from ...domain.ports.transformer_port import SearchToModelTransformerPort
from ...domain.value_objects.document import SearchHit

logger = logging.getLogger(__name__)


class TransformedFinder(FinderPort):

    def __init__(
        self,
        search_type: SearchTypePort,
        transformer: SearchToModelTransformerPort,
    ) -> None:
        self._search_type = search_type
        self._transformer = transformer

    @property
    def search_type(self) -> SearchTypePort:
        return self._search_type

    def find_hits(self, query: Any, limit: Optional[int] = None) -> List[SearchHit]:
        return self._search_type.search(query, limit)

    def find(self, query: Any, limit: Optional[int] = None) -> List[Any]:
        hits = self.find_hits(query, limit)
        logger.debug(
            "Search on %s returned %d hits", self._search_type.name, len(hits)
        )
        if not hits:
            return []
        return self._transformer.transform(hits)
