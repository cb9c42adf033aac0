import logging
from typing import Any, Dict, Optional

from opensearchpy import OpenSearch

from ...domain.ports.search_client_port import SearchClientPort
from .opensearch_index import OpenSearchIndex

logger = logging.getLogger(__name__)


class OpenSearchClient(SearchClientPort):

    DEFAULT_HOST = "localhost"
    DEFAULT_PORT = 9200

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        scheme: str = "http",
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[float] = None,
        verify_certs: bool = False,
        **transport_options: Any,
    ) -> None:
        self._host = host
        self._port = port
        self._scheme = scheme

        options: Dict[str, Any] = dict(transport_options)
        if timeout is not None:
            options["timeout"] = timeout

        self._client = OpenSearch(
            hosts=[{"host": host, "port": port, "scheme": scheme}],
            http_auth=(username, password) if username and password else None,
            use_ssl=scheme == "https",
            verify_certs=verify_certs,
            **options,
        )
        self._indexes: Dict[str, OpenSearchIndex] = {}
        logger.info("OpenSearch client configured for %s://%s:%d", scheme, host, port)

    @property
    def raw(self) -> OpenSearch:
        return self._client

    @property
    def endpoint(self) -> str:
        return f"{self._scheme}://{self._host}:{self._port}"

    def get_index(self, name: str) -> OpenSearchIndex:
        if name not in self._indexes:
            self._indexes[name] = OpenSearchIndex(self._client, name)
        return self._indexes[name]

    def close(self) -> None:
        try:
            self._client.close()
        except Exception as err:
            logger.warning("Error closing OpenSearch client: %s", err)
