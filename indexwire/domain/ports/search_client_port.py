
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from ..value_objects.document import Document, SearchHit


class SearchTypePort(ABC):

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def index(self) -> "SearchIndexPort":
        ...

    @abstractmethod
    def set_mapping(self, properties: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def add_documents(self, documents: Iterable[Document]) -> int:
        ...

    @abstractmethod
    def delete_ids(self, ids: Iterable[str]) -> int:
        ...

    @abstractmethod
    def search(
        self,
        query: Any,
        limit: Optional[int] = None,
    ) -> List[SearchHit]:
        ...


class SearchIndexPort(ABC):

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def get_type(self, name: str) -> SearchTypePort:
        ...

    @abstractmethod
    def create(
        self,
        settings: Optional[Dict[str, Any]] = None,
        recreate: bool = False,
    ) -> None:
        ...

    @abstractmethod
    def delete(self) -> None:
        ...

    @abstractmethod
    def exists(self) -> bool:
        ...

    @abstractmethod
    def refresh(self) -> None:
        ...


class SearchClientPort(ABC):

    @abstractmethod
    def get_index(self, name: str) -> SearchIndexPort:
        ...

    @abstractmethod
    def close(self) -> None:
        ...
