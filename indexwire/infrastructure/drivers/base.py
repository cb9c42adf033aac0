import importlib
import logging
from abc import abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ...domain.exceptions import ConfigurationError, MissingObjectsError
from ...domain.ports.provider_port import ProgressCallback, ProviderPort
from ...domain.ports.search_client_port import SearchTypePort
from ...domain.ports.transformer_port import (
    ModelToDocumentTransformerPort,
    SearchToModelTransformerPort,
)
from ...domain.value_objects.document import SearchHit

logger = logging.getLogger(__name__)


def resolve_model(model: Any) -> type:
    """Return the model class for a class or a ``package.module.Class`` path."""
    if isinstance(model, type):
        return model
    if not isinstance(model, str) or not model:
        raise ConfigurationError(f"Invalid model reference: {model!r}")

    if ":" in model:
        module_path, _, attr_path = model.partition(":")
    else:
        module_path, _, attr_path = model.rpartition(".")
    if not module_path or not attr_path:
        raise ConfigurationError(f'Model "{model}" must be a dotted import path')

    try:
        target: Any = importlib.import_module(module_path)
        for attr in attr_path.split("."):
            target = getattr(target, attr)
    except (ImportError, AttributeError) as err:
        raise ConfigurationError(f'Cannot import model "{model}": {err}') from err
    return target


class BaseSearchToModelTransformer(SearchToModelTransformerPort):

    DEFAULT_OPTIONS: Dict[str, Any] = {
        "identifier": "id",
        "hydrate": True,
        "ignore_missing": False,
    }

    def __init__(self, model: Any, options: Optional[Dict[str, Any]] = None) -> None:
        self._model_ref = model
        self._model: Optional[type] = None
        self._options = {**self.DEFAULT_OPTIONS, **(options or {})}

    @property
    def object_class(self) -> type:
        if self._model is None:
            self._model = resolve_model(self._model_ref)
        return self._model

    @property
    def identifier_field(self) -> str:
        return self._options["identifier"]

    @property
    def options(self) -> Dict[str, Any]:
        return dict(self._options)

    @abstractmethod
    def find_by_identifiers(self, ids: List[str], hydrate: bool) -> List[Any]:
        ...

    @abstractmethod
    def identifier_of(self, obj: Any, hydrate: bool) -> Any:
        ...

    def transform(self, hits: List[SearchHit]) -> List[Any]:
        ids = [hit.id for hit in hits]
        if not ids:
            return []

        hydrate = bool(self._options["hydrate"])
        objects = self.find_by_identifiers(ids, hydrate)
        by_id = {str(self.identifier_of(obj, hydrate)): obj for obj in objects}

        missing = [doc_id for doc_id in ids if doc_id not in by_id]
        if missing and not self._options["ignore_missing"]:
            raise MissingObjectsError(missing)
        if missing:
            logger.warning(
                "%d search results have no matching %s objects",
                len(missing), self.object_class.__name__,
            )

        return [by_id[doc_id] for doc_id in ids if doc_id in by_id]


class BaseProvider(ProviderPort):
    """Feeds every model row into a search type in fixed-size batches."""

    DEFAULT_OPTIONS: Dict[str, Any] = {
        "query_builder_method": "create_query_builder",
        "batch_size": 100,
        "clear_object_manager": True,
    }

    def __init__(
        self,
        search_type: SearchTypePort,
        transformer: ModelToDocumentTransformerPort,
        model: Any,
        options: Optional[Dict[str, Any]] = None,
        fields: Optional[Sequence[str]] = None,
    ) -> None:
        self._search_type = search_type
        self._transformer = transformer
        self._model_ref = model
        self._model: Optional[type] = None
        self._options = {**self.DEFAULT_OPTIONS, **(options or {})}
        self._fields = list(fields or [])

        if int(self._options["batch_size"]) < 1:
            raise ConfigurationError("batch_size must be >= 1")

    @property
    def model(self) -> type:
        if self._model is None:
            self._model = resolve_model(self._model_ref)
        return self._model

    @property
    def options(self) -> Dict[str, Any]:
        return dict(self._options)

    @property
    def fields(self) -> List[str]:
        return list(self._fields)

    @abstractmethod
    def create_query(self) -> Any:
        ...

    @abstractmethod
    def count_objects(self, query: Any) -> int:
        ...

    @abstractmethod
    def fetch_slice(self, query: Any, offset: int, limit: int) -> Iterable[Any]:
        ...

    @abstractmethod
    def clear_object_manager(self) -> None:
        ...

    def populate(self, progress: Optional[ProgressCallback] = None) -> int:
        query = self.create_query()
        total = self.count_objects(query)
        batch_size = int(self._options["batch_size"])

        indexed = 0
        for offset in range(0, total, batch_size):
            objects = list(self.fetch_slice(query, offset, batch_size))
            if not objects:
                break

            documents = [
                self._transformer.transform(obj, self._fields) for obj in objects
            ]
            indexed += self._search_type.add_documents(documents)

            if self._options["clear_object_manager"]:
                self.clear_object_manager()

            logger.debug(
                "Indexed %d/%d %s objects", indexed, total, self.model.__name__
            )
            if progress is not None:
                progress(indexed, total)

        return indexed
