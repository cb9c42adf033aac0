import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union

from ...application.configuration import (
    IndexSettings,
    PersistenceSettings,
    SearchSettings,
    TypeSettings,
    parse_settings,
    parse_type_settings,
)
from ...domain.constants import SUPPORTED_DRIVERS
from ...domain.exceptions import (
    ConfigurationError,
    MissingConfigurationError,
    UndefinedClientError,
    UndefinedIndexError,
    UnsupportedDriverError,
)
from ...domain.services.config_merger import deep_union, merge_documents
from ...domain.value_objects.service_ids import ServiceIds
from ..drivers import DRIVER_LOADERS
from ..registry import Reference, ServiceDefinition, ServiceRegistry
from ..services import (
    AutoModelToDocumentTransformer,
    IndexManager,
    MappingSetter,
    Populator,
    TransformedFinder,
)
from .config import ExtensionConfig

logger = logging.getLogger(__name__)

ConfigDocument = Mapping[str, Any]


@dataclass
class ResolvedConfiguration:

    default_client: str
    default_index: str
    client_ids: Dict[str, str] = field(default_factory=dict)
    index_ids: Dict[str, str] = field(default_factory=dict)
    type_ids: Dict[str, List[str]] = field(default_factory=dict)
    provider_ids: List[str] = field(default_factory=list)
    finder_ids: List[str] = field(default_factory=list)
    loaded_drivers: List[str] = field(default_factory=list)


class SearchExtension:
    """Turns search configuration documents into registry definitions.

    ``load`` runs once per registry: it validates the merged documents,
    registers clients, indexes and types, wires the optional persistence
    integration of every type and finally points the default aliases at the
    default client and index. Any configuration problem aborts the run with
    a :class:`ConfigurationError` before the registry is frozen.
    """

    def __init__(self, config: Optional[ExtensionConfig] = None) -> None:
        self._config = config or ExtensionConfig()
        self._ids = ServiceIds(self._config.prefix)
        self._type_mappings: List[Tuple[Reference, Dict[str, Any]]] = []
        self._loaded_drivers: Set[str] = set()
        self._driver_load_order: List[str] = []
        self._defined_ids: Set[str] = set()

    @property
    def ids(self) -> ServiceIds:
        return self._ids

    @property
    def loaded_drivers(self) -> List[str]:
        return list(self._driver_load_order)

    def load(
        self,
        configs: Union[ConfigDocument, Iterable[ConfigDocument]],
        registry: ServiceRegistry,
    ) -> ResolvedConfiguration:
        if isinstance(configs, Mapping):
            configs = [configs]
        settings = parse_settings(merge_documents(configs))

        self._type_mappings = []
        self._loaded_drivers = set()
        self._driver_load_order = []
        self._defined_ids = set()
        self._load_core_services(registry)

        if not settings.clients or not settings.indexes:
            raise MissingConfigurationError()

        default_client = settings.default_client or next(iter(settings.clients))
        default_index = settings.default_index or next(iter(settings.indexes))
        if default_client not in settings.clients:
            raise UndefinedClientError(default_client)
        if default_index not in settings.indexes:
            raise UndefinedIndexError(default_index)

        resolved = ResolvedConfiguration(
            default_client=default_client,
            default_index=default_index,
        )
        resolved.client_ids = self._load_clients(settings, registry)
        resolved.index_ids = self._load_indexes(
            settings, registry, resolved, default_client
        )

        self._load_index_manager(settings, registry, resolved.index_ids, default_index)
        self._load_mapping_setter(registry)

        registry.set_alias(self._ids.default_client, resolved.client_ids[default_client])
        registry.set_alias(self._ids.default_index, resolved.index_ids[default_index])
        resolved.loaded_drivers = self.loaded_drivers

        if self._config.freeze:
            registry.freeze()

        logger.info(
            "Loaded %d clients, %d indexes and %d types (default client: %s, default index: %s)",
            len(resolved.client_ids),
            len(resolved.index_ids),
            sum(len(type_ids) for type_ids in resolved.type_ids.values()),
            default_client,
            default_index,
        )
        return resolved

    def _define(
        self,
        registry: ServiceRegistry,
        service_id: str,
        definition: ServiceDefinition,
    ) -> None:
        self._claim(service_id)
        registry.set_definition(service_id, definition)

    def _claim(self, service_id: str) -> None:
        if service_id in self._defined_ids:
            raise ConfigurationError(f'Service id "{service_id}" is defined twice')
        self._defined_ids.add(service_id)

    def _load_core_services(self, registry: ServiceRegistry) -> None:
        self._define(
            registry,
            self._ids.finder_prototype,
            ServiceDefinition(
                factory=TransformedFinder,
                kwargs={"search_type": None, "transformer": None},
                abstract=True,
            ),
        )
        self._define(
            registry,
            self._ids.model_to_document_prototype,
            ServiceDefinition(
                factory=AutoModelToDocumentTransformer,
                kwargs={"options": {}},
                abstract=True,
            ),
        )
        self._define(registry, self._ids.populator, ServiceDefinition(factory=Populator))
        self._claim(self._ids.index_manager)
        self._claim(self._ids.mapping_setter)

    def _load_clients(
        self,
        settings: SearchSettings,
        registry: ServiceRegistry,
    ) -> Dict[str, str]:
        client_ids = {}
        for name, client_settings in settings.clients.items():
            client_id = self._ids.client(name)
            self._define(
                registry,
                client_id,
                ServiceDefinition(
                    factory=self._config.client_factory,
                    kwargs=client_settings.connection_params(),
                ),
            )
            client_ids[name] = client_id
        return client_ids

    def _load_indexes(
        self,
        settings: SearchSettings,
        registry: ServiceRegistry,
        resolved: ResolvedConfiguration,
        default_client: str,
    ) -> Dict[str, str]:
        index_ids = {}
        for name, index_settings in settings.indexes.items():
            client_name = index_settings.client or default_client
            if client_name not in resolved.client_ids:
                raise UndefinedClientError(client_name)

            index_id = self._ids.index(name)
            self._define(
                registry,
                index_id,
                ServiceDefinition(
                    factory_service=resolved.client_ids[client_name],
                    factory_method="get_index",
                    kwargs={"name": index_settings.index_name or name},
                ),
            )
            resolved.type_ids[name] = self._load_types(
                index_settings, registry, resolved, name, index_id
            )
            index_ids[name] = index_id
        return index_ids

    def _load_types(
        self,
        index_settings: IndexSettings,
        registry: ServiceRegistry,
        resolved: ResolvedConfiguration,
        index_name: str,
        index_id: str,
    ) -> List[str]:
        type_ids = []
        for name, raw_type in index_settings.types.items():
            merged = deep_union(index_settings.type_prototype, raw_type)
            type_settings = parse_type_settings(index_name, name, merged)

            type_id = self._ids.type(index_name, name)
            self._define(
                registry,
                type_id,
                ServiceDefinition(
                    factory_service=index_id,
                    factory_method="get_type",
                    kwargs={"name": name},
                ),
            )
            if type_settings.mappings:
                self._type_mappings.append((Reference(type_id), type_settings.mappings))
            if type_settings.persistence is not None:
                self._load_type_persistence_integration(
                    type_settings, registry, resolved, type_id, index_name, name
                )
            type_ids.append(type_id)
        return type_ids

    def _load_type_persistence_integration(
        self,
        type_settings: TypeSettings,
        registry: ServiceRegistry,
        resolved: ResolvedConfiguration,
        type_id: str,
        index_name: str,
        type_name: str,
    ) -> None:
        persistence = type_settings.persistence
        if persistence.driver not in SUPPORTED_DRIVERS:
            raise UnsupportedDriverError(persistence.driver, SUPPORTED_DRIVERS)
        self._load_driver(registry, persistence.driver)

        search_to_model_id = self._load_search_to_model_transformer(
            persistence, registry, index_name, type_name
        )
        model_to_document_id = self._load_model_to_document_transformer(
            persistence, registry, index_name, type_name
        )

        if persistence.provider is not None:
            provider_id = self._load_type_provider(
                persistence,
                registry,
                model_to_document_id,
                type_id,
                list(type_settings.mappings),
                index_name,
                type_name,
            )
            registry.get_definition(self._ids.populator).add_method_call(
                "add_provider", provider_id, Reference(provider_id), index_name
            )
            resolved.provider_ids.append(provider_id)

        if persistence.finder is not None:
            finder_id = self._load_type_finder(
                persistence, registry, search_to_model_id, type_id, index_name, type_name
            )
            resolved.finder_ids.append(finder_id)

    def _load_search_to_model_transformer(
        self,
        persistence: PersistenceSettings,
        registry: ServiceRegistry,
        index_name: str,
        type_name: str,
    ) -> str:
        settings = persistence.search_to_model_transformer
        if settings.service:
            return settings.service

        prototype = registry.get_definition(
            self._ids.search_to_model_prototype(persistence.driver)
        )
        service_id = self._ids.search_to_model_transformer(index_name, type_name)
        self._define(
            registry,
            service_id,
            prototype.derive(
                model=persistence.model,
                options={
                    "identifier": persistence.identifier,
                    "hydrate": settings.hydrate,
                    "ignore_missing": settings.ignore_missing,
                },
            ),
        )
        return service_id

    def _load_model_to_document_transformer(
        self,
        persistence: PersistenceSettings,
        registry: ServiceRegistry,
        index_name: str,
        type_name: str,
    ) -> str:
        if persistence.model_to_document_transformer.service:
            return persistence.model_to_document_transformer.service

        prototype = registry.get_definition(self._ids.model_to_document_prototype)
        service_id = self._ids.model_to_document_transformer(index_name, type_name)
        self._define(
            registry,
            service_id,
            prototype.derive(options={"identifier": persistence.identifier}),
        )
        return service_id

    def _load_type_provider(
        self,
        persistence: PersistenceSettings,
        registry: ServiceRegistry,
        model_to_document_id: str,
        type_id: str,
        fields: List[str],
        index_name: str,
        type_name: str,
    ) -> str:
        provider = persistence.provider
        if provider.service:
            return provider.service

        prototype = registry.get_definition(
            self._ids.provider_prototype(persistence.driver)
        )
        provider_id = self._ids.provider(index_name, type_name)
        self._define(
            registry,
            provider_id,
            prototype.derive(
                search_type=Reference(type_id),
                transformer=Reference(model_to_document_id),
                model=persistence.model,
                options={
                    "query_builder_method": provider.query_builder_method,
                    "batch_size": provider.batch_size,
                    "clear_object_manager": provider.clear_object_manager,
                },
                fields=fields,
            ),
        )
        return provider_id

    def _load_type_finder(
        self,
        persistence: PersistenceSettings,
        registry: ServiceRegistry,
        search_to_model_id: str,
        type_id: str,
        index_name: str,
        type_name: str,
    ) -> str:
        if persistence.finder.service:
            return persistence.finder.service

        prototype = registry.get_definition(self._ids.finder_prototype)
        finder_id = self._ids.finder(index_name, type_name)
        self._define(
            registry,
            finder_id,
            prototype.derive(
                search_type=Reference(type_id),
                transformer=Reference(search_to_model_id),
            ),
        )
        return finder_id

    def _load_index_manager(
        self,
        settings: SearchSettings,
        registry: ServiceRegistry,
        index_ids: Dict[str, str],
        default_index: str,
    ) -> None:
        registry.set_definition(
            self._ids.index_manager,
            ServiceDefinition(
                factory=IndexManager,
                kwargs={
                    "indexes": {
                        name: Reference(index_id) for name, index_id in index_ids.items()
                    },
                    "default_index": Reference(self._ids.default_index),
                    "settings": {
                        name: dict(index_settings.settings)
                        for name, index_settings in settings.indexes.items()
                    },
                },
            ),
        )

    def _load_mapping_setter(self, registry: ServiceRegistry) -> None:
        registry.set_definition(
            self._ids.mapping_setter,
            ServiceDefinition(
                factory=MappingSetter,
                kwargs={"mappings": list(self._type_mappings)},
            ),
        )

    def _load_driver(self, registry: ServiceRegistry, driver: str) -> None:
        if driver in self._loaded_drivers:
            return
        self._claim(self._ids.search_to_model_prototype(driver))
        self._claim(self._ids.provider_prototype(driver))
        self._claim(self._ids.object_manager(driver))
        DRIVER_LOADERS[driver](registry, self._ids, self._config)
        self._loaded_drivers.add(driver)
        self._driver_load_order.append(driver)
        logger.debug("Loaded persistence driver %s", driver)
