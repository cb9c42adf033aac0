import logging
from typing import Any, Dict, List, Optional, Tuple

from ...domain.ports.search_client_port import SearchTypePort

logger = logging.getLogger(__name__)


class MappingSetter:

    def __init__(self, mappings: List[Tuple[SearchTypePort, Dict[str, Any]]]) -> None:
        self._mappings = list(mappings)

    def set_mappings(self, index_name: Optional[str] = None) -> int:
        applied = 0
        for search_type, properties in self._mappings:
            if index_name is not None and search_type.index.name != index_name:
                continue
            if not properties:
                continue
            search_type.set_mapping(properties)
            applied += 1
            logger.info(
                "Set mapping for %s/%s", search_type.index.name, search_type.name
            )
        return applied
