from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, List

from mongoengine.queryset import QuerySet

from ...domain.constants import MONGODB_DRIVER
from ...domain.value_objects.service_ids import ServiceIds
from ..registry import ServiceDefinition, ServiceRegistry
from .base import BaseProvider, BaseSearchToModelTransformer

if TYPE_CHECKING:
    from ..extension.config import ExtensionConfig

logger = logging.getLogger(__name__)


class MongoEngineSearchToModelTransformer(BaseSearchToModelTransformer):

    def find_by_identifiers(self, ids: List[str], hydrate: bool) -> List[Any]:
        queryset = self.object_class.objects(
            **{f"{self.identifier_field}__in": ids}
        )
        if not hydrate:
            queryset = queryset.as_pymongo()
        return list(queryset)

    def identifier_of(self, obj: Any, hydrate: bool) -> Any:
        if hydrate:
            return getattr(obj, self.identifier_field)
        field = self.object_class._fields.get(self.identifier_field)
        return obj[field.db_field if field is not None else self.identifier_field]


class MongoEngineProvider(BaseProvider):

    def create_query(self) -> Any:
        builder = getattr(self.model, self._options["query_builder_method"], None)
        if isinstance(builder, QuerySet):
            return builder
        if callable(builder):
            return builder()
        return self.model.objects.order_by("pk")

    def count_objects(self, query: Any) -> int:
        return int(query.count())

    def fetch_slice(self, query: Any, offset: int, limit: int) -> Iterable[Any]:
        return list(query.clone().skip(offset).limit(limit))

    def clear_object_manager(self) -> None:
        # mongoengine keeps no identity map; each slice is a fresh cursor
        pass


def register_services(
    registry: ServiceRegistry,
    ids: ServiceIds,
    config: "ExtensionConfig",
) -> None:
    registry.set_definition(
        ids.search_to_model_prototype(MONGODB_DRIVER),
        ServiceDefinition(
            factory=MongoEngineSearchToModelTransformer,
            kwargs={"model": None, "options": {}},
            abstract=True,
        ),
    )
    registry.set_definition(
        ids.provider_prototype(MONGODB_DRIVER),
        ServiceDefinition(
            factory=MongoEngineProvider,
            kwargs={
                "search_type": None,
                "transformer": None,
                "model": None,
                "options": {},
                "fields": [],
            },
            abstract=True,
        ),
    )
    logger.debug("Loaded %s driver services", MONGODB_DRIVER)
