from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from opensearchpy.helpers import BulkIndexError, bulk

from ...domain.constants import DOC_TYPE_FIELD
from ...domain.ports.search_client_port import SearchTypePort
from ...domain.value_objects.document import Document, SearchHit

if TYPE_CHECKING:
    from .opensearch_index import OpenSearchIndex

logger = logging.getLogger(__name__)


def _item_status(item: Dict[str, Any]) -> Optional[int]:
    for result in item.values():
        return result.get("status")
    return None


class OpenSearchType(SearchTypePort):
    """A document kind stored in a shared index.

    Every document is tagged with its type name and keyed as
    ``<type>:<id>`` so several types can live in one index.
    """

    def __init__(self, index: "OpenSearchIndex", name: str) -> None:
        self._index = index
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def index(self) -> "OpenSearchIndex":
        return self._index

    def _doc_id(self, doc_id: Any) -> str:
        return f"{self._name}:{doc_id}"

    def _strip_id(self, doc_id: str) -> str:
        prefix = f"{self._name}:"
        if doc_id.startswith(prefix):
            return doc_id[len(prefix):]
        return doc_id

    def set_mapping(self, properties: Dict[str, Any]) -> None:
        body = {
            "properties": {
                **properties,
                DOC_TYPE_FIELD: {"type": "keyword"},
            }
        }
        self._index.client.indices.put_mapping(index=self._index.name, body=body)
        logger.debug("Mapping set for %s/%s", self._index.name, self._name)

    def add_documents(self, documents: Iterable[Document]) -> int:
        actions = [
            {
                "_op_type": "index",
                "_index": self._index.name,
                "_id": self._doc_id(document.id),
                "_source": {**document.to_source(), DOC_TYPE_FIELD: self._name},
            }
            for document in documents
        ]
        if not actions:
            return 0

        try:
            success, _ = bulk(self._index.client, actions)
        except BulkIndexError as err:
            logger.error(
                "Failed to index %d documents into %s/%s",
                len(err.errors), self._index.name, self._name,
            )
            raise
        return success

    def delete_ids(self, ids: Iterable[str]) -> int:
        actions = [
            {
                "_op_type": "delete",
                "_index": self._index.name,
                "_id": self._doc_id(doc_id),
            }
            for doc_id in ids
        ]
        if not actions:
            return 0

        success, errors = bulk(self._index.client, actions, raise_on_error=False)
        # ids that are not indexed come back as 404
        failures = [item for item in errors if _item_status(item) != 404]
        if failures:
            logger.error(
                "Failed to delete %d documents from %s/%s",
                len(failures), self._index.name, self._name,
            )
            raise BulkIndexError(f"{len(failures)} document(s) failed to delete.", failures)
        return success

    def search(
        self,
        query: Any,
        limit: Optional[int] = None,
    ) -> List[SearchHit]:
        if isinstance(query, str):
            query = {"query_string": {"query": query}}

        body: Dict[str, Any] = {
            "query": {
                "bool": {
                    "must": [query],
                    "filter": [{"term": {DOC_TYPE_FIELD: self._name}}],
                }
            }
        }
        if limit is not None:
            body["size"] = limit

        response = self._index.client.search(index=self._index.name, body=body)

        hits = []
        for hit in response.get("hits", {}).get("hits", []):
            source = dict(hit.get("_source") or {})
            source.pop(DOC_TYPE_FIELD, None)
            hits.append(
                SearchHit(
                    id=self._strip_id(str(hit["_id"])),
                    score=float(hit.get("_score") or 0.0),
                    source=source,
                )
            )
        return hits
