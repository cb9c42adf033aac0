from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import func, inspect, select
from sqlalchemy.orm import Session

from ...domain.constants import ORM_DRIVER
from ...domain.exceptions import ConfigurationError
from ...domain.ports.search_client_port import SearchTypePort
from ...domain.ports.transformer_port import ModelToDocumentTransformerPort
from ...domain.value_objects.service_ids import ServiceIds
from ..registry import Reference, ServiceDefinition, ServiceRegistry
from .base import BaseProvider, BaseSearchToModelTransformer

if TYPE_CHECKING:
    from ..extension.config import ExtensionConfig

logger = logging.getLogger(__name__)


def _coerce_ids(column: Any, ids: List[str]) -> List[Any]:
    try:
        python_type = column.type.python_type
    except (AttributeError, NotImplementedError):
        return ids
    if python_type is str:
        return ids
    try:
        return [python_type(doc_id) for doc_id in ids]
    except (TypeError, ValueError):
        return ids


class SqlAlchemySearchToModelTransformer(BaseSearchToModelTransformer):

    def __init__(
        self,
        session: Session,
        model: Any,
        options: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(model, options)
        self._session = session

    def _identifier_column(self) -> Any:
        return getattr(self.object_class, self.identifier_field)

    def find_by_identifiers(self, ids: List[str], hydrate: bool) -> List[Any]:
        column = self._identifier_column()
        values = _coerce_ids(column, ids)
        if hydrate:
            stmt = select(self.object_class).where(column.in_(values))
            return list(self._session.scalars(stmt).all())

        columns = [
            getattr(self.object_class, attr.key).label(attr.key)
            for attr in inspect(self.object_class).column_attrs
        ]
        stmt = select(*columns).where(column.in_(values))
        return [dict(row) for row in self._session.execute(stmt).mappings().all()]

    def identifier_of(self, obj: Any, hydrate: bool) -> Any:
        if hydrate:
            return getattr(obj, self.identifier_field)
        return obj[self.identifier_field]


class SqlAlchemyProvider(BaseProvider):

    def __init__(
        self,
        search_type: SearchTypePort,
        session: Session,
        transformer: ModelToDocumentTransformerPort,
        model: Any,
        options: Optional[Dict[str, Any]] = None,
        fields: Optional[Sequence[str]] = None,
    ) -> None:
        super().__init__(search_type, transformer, model, options, fields)
        self._session = session

    def create_query(self) -> Any:
        builder = getattr(self.model, self._options["query_builder_method"], None)
        if callable(builder):
            return builder()
        return select(self.model).order_by(*inspect(self.model).primary_key)

    def count_objects(self, query: Any) -> int:
        count_stmt = select(func.count()).select_from(query.subquery())
        return int(self._session.scalar(count_stmt) or 0)

    def fetch_slice(self, query: Any, offset: int, limit: int) -> Iterable[Any]:
        return self._session.scalars(query.offset(offset).limit(limit)).all()

    def clear_object_manager(self) -> None:
        self._session.expunge_all()


def register_services(
    registry: ServiceRegistry,
    ids: ServiceIds,
    config: "ExtensionConfig",
) -> None:
    session_id = ids.object_manager(ORM_DRIVER)
    if not registry.has(session_id):
        if config.orm_session_factory is None:
            raise ConfigurationError(
                f'The "{ORM_DRIVER}" driver needs a SQLAlchemy session: set '
                f'ExtensionConfig.orm_session_factory or register "{session_id}"'
            )
        registry.set_definition(
            session_id, ServiceDefinition(factory=config.orm_session_factory)
        )

    registry.set_definition(
        ids.search_to_model_prototype(ORM_DRIVER),
        ServiceDefinition(
            factory=SqlAlchemySearchToModelTransformer,
            kwargs={
                "session": Reference(session_id),
                "model": None,
                "options": {},
            },
            abstract=True,
        ),
    )
    registry.set_definition(
        ids.provider_prototype(ORM_DRIVER),
        ServiceDefinition(
            factory=SqlAlchemyProvider,
            kwargs={
                "search_type": None,
                "session": Reference(session_id),
                "transformer": None,
                "model": None,
                "options": {},
                "fields": [],
            },
            abstract=True,
        ),
    )
    logger.debug("Loaded %s driver services", ORM_DRIVER)
