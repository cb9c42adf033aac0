
from abc import ABC, abstractmethod
from typing import Any, Iterable, List

from ..value_objects.document import Document, SearchHit


class SearchToModelTransformerPort(ABC):

    @property
    @abstractmethod
    def object_class(self) -> type:
        ...

    @property
    @abstractmethod
    def identifier_field(self) -> str:
        ...

    @abstractmethod
    def transform(self, hits: List[SearchHit]) -> List[Any]:
        ...


class ModelToDocumentTransformerPort(ABC):

    @abstractmethod
    def transform(self, obj: Any, fields: Iterable[str]) -> Document:
        ...
