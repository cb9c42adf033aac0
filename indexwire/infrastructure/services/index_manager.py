from typing import Any, Dict, Optional

from ...domain.exceptions import UndefinedIndexError
from ...domain.ports.search_client_port import SearchIndexPort


class IndexManager:

    def __init__(
        self,
        indexes: Dict[str, SearchIndexPort],
        default_index: SearchIndexPort,
        settings: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> None:
        self._indexes = dict(indexes)
        self._default_index = default_index
        self._settings = dict(settings or {})

    def get_all_indexes(self) -> Dict[str, SearchIndexPort]:
        return dict(self._indexes)

    def get_index(self, name: Optional[str] = None) -> SearchIndexPort:
        if name is None:
            return self._default_index
        try:
            return self._indexes[name]
        except KeyError:
            raise UndefinedIndexError(name) from None

    def get_default_index(self) -> SearchIndexPort:
        return self._default_index

    def get_settings(self, name: str) -> Dict[str, Any]:
        if name not in self._indexes:
            raise UndefinedIndexError(name)
        return dict(self._settings.get(name, {}))
