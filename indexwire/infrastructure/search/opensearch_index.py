import logging
from typing import Any, Dict, Optional

from opensearchpy import OpenSearch

from ...domain.constants import DOC_TYPE_FIELD
from ...domain.ports.search_client_port import SearchIndexPort
from .opensearch_type import OpenSearchType

logger = logging.getLogger(__name__)


class OpenSearchIndex(SearchIndexPort):

    def __init__(self, client: OpenSearch, name: str) -> None:
        self._client = client
        self._name = name
        self._types: Dict[str, OpenSearchType] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def client(self) -> OpenSearch:
        return self._client

    def get_type(self, name: str) -> OpenSearchType:
        if name not in self._types:
            self._types[name] = OpenSearchType(self, name)
        return self._types[name]

    def exists(self) -> bool:
        return bool(self._client.indices.exists(index=self._name))

    def create(
        self,
        settings: Optional[Dict[str, Any]] = None,
        recreate: bool = False,
    ) -> None:
        if self.exists():
            if not recreate:
                logger.debug("Index %s already exists", self._name)
                return
            self.delete()

        body: Dict[str, Any] = {
            "mappings": {"properties": {DOC_TYPE_FIELD: {"type": "keyword"}}},
        }
        if settings:
            body["settings"] = settings

        self._client.indices.create(index=self._name, body=body)
        logger.info("Created index %s", self._name)

    def delete(self) -> None:
        if not self.exists():
            return
        self._client.indices.delete(index=self._name)
        logger.info("Deleted index %s", self._name)

    def refresh(self) -> None:
        self._client.indices.refresh(index=self._name)
