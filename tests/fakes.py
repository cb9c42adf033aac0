from typing import Any, Dict, Iterable, List, Optional

from indexwire.domain.ports.search_client_port import (
    SearchClientPort,
    SearchIndexPort,
    SearchTypePort,
)
from indexwire.domain.value_objects.document import Document, SearchHit


class InMemorySearchType(SearchTypePort):

    def __init__(self, index: "InMemorySearchIndex", name: str) -> None:
        self._index = index
        self._name = name
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.mapping: Optional[Dict[str, Any]] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def index(self) -> "InMemorySearchIndex":
        return self._index

    def set_mapping(self, properties: Dict[str, Any]) -> None:
        self.mapping = dict(properties)

    def add_documents(self, documents: Iterable[Document]) -> int:
        count = 0
        for document in documents:
            self.documents[document.id] = document.to_source()
            count += 1
        return count

    def delete_ids(self, ids: Iterable[str]) -> int:
        removed = 0
        for doc_id in ids:
            if self.documents.pop(doc_id, None) is not None:
                removed += 1
        return removed

    def search(self, query: Any, limit: Optional[int] = None) -> List[SearchHit]:
        needle = str(query).lower()
        hits = [
            SearchHit(id=doc_id, score=1.0, source=dict(source))
            for doc_id, source in self.documents.items()
            if any(needle in str(value).lower() for value in source.values())
        ]
        return hits[:limit] if limit is not None else hits


class InMemorySearchIndex(SearchIndexPort):

    def __init__(self, name: str) -> None:
        self._name = name
        self._types: Dict[str, InMemorySearchType] = {}
        self.created = False
        self.settings: Optional[Dict[str, Any]] = None
        self.create_calls = 0
        self.refresh_calls = 0

    @property
    def name(self) -> str:
        return self._name

    def get_type(self, name: str) -> InMemorySearchType:
        if name not in self._types:
            self._types[name] = InMemorySearchType(self, name)
        return self._types[name]

    def create(
        self,
        settings: Optional[Dict[str, Any]] = None,
        recreate: bool = False,
    ) -> None:
        self.create_calls += 1
        if self.created and not recreate:
            return
        if recreate:
            for search_type in self._types.values():
                search_type.documents.clear()
        self.created = True
        self.settings = settings

    def delete(self) -> None:
        self.created = False

    def exists(self) -> bool:
        return self.created

    def refresh(self) -> None:
        self.refresh_calls += 1


class InMemorySearchClient(SearchClientPort):

    def __init__(self, **params: Any) -> None:
        self.params = params
        self.indexes: Dict[str, InMemorySearchIndex] = {}
        self.closed = False

    def get_index(self, name: str) -> InMemorySearchIndex:
        if name not in self.indexes:
            self.indexes[name] = InMemorySearchIndex(name)
        return self.indexes[name]

    def close(self) -> None:
        self.closed = True
