import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from injector import Injector, Module, provider, singleton

from ..application.use_cases.populate import PopulateUseCase
from ..domain.ports.search_client_port import SearchClientPort, SearchIndexPort
from ..domain.value_objects.service_ids import ServiceIds
from .config_loader import load_config_files
from .extension import ExtensionConfig, ResolvedConfiguration, SearchExtension
from .registry import ServiceRegistry
from .services import IndexManager, MappingSetter, Populator

logger = logging.getLogger(__name__)


class SearchModule(Module):

    def __init__(
        self,
        configs: Optional[Sequence[Dict[str, Any]]] = None,
        config_paths: Optional[Iterable[str]] = None,
        extension_config: Optional[ExtensionConfig] = None,
    ) -> None:
        self._configs: List[Dict[str, Any]] = list(configs or [])
        self._config_paths: List[str] = list(config_paths or [])
        self._extension_config = extension_config or ExtensionConfig()
        self._ids = ServiceIds(self._extension_config.prefix)
        self._resolved: Optional[ResolvedConfiguration] = None

    @property
    def resolved(self) -> Optional[ResolvedConfiguration]:
        return self._resolved

    @singleton
    @provider
    def provide_registry(self) -> ServiceRegistry:
        documents = load_config_files(self._config_paths) + self._configs
        registry = ServiceRegistry()
        extension = SearchExtension(self._extension_config)
        self._resolved = extension.load(documents, registry)
        return registry

    @singleton
    @provider
    def provide_default_client(self, registry: ServiceRegistry) -> SearchClientPort:
        return registry.get(self._ids.default_client)

    @singleton
    @provider
    def provide_default_index(self, registry: ServiceRegistry) -> SearchIndexPort:
        return registry.get(self._ids.default_index)

    @singleton
    @provider
    def provide_index_manager(self, registry: ServiceRegistry) -> IndexManager:
        return registry.get(self._ids.index_manager)

    @singleton
    @provider
    def provide_mapping_setter(self, registry: ServiceRegistry) -> MappingSetter:
        return registry.get(self._ids.mapping_setter)

    @singleton
    @provider
    def provide_populator(self, registry: ServiceRegistry) -> Populator:
        return registry.get(self._ids.populator)

    @singleton
    @provider
    def provide_populate_use_case(
        self,
        index_manager: IndexManager,
        mapping_setter: MappingSetter,
        populator: Populator,
    ) -> PopulateUseCase:
        return PopulateUseCase(
            index_manager=index_manager,
            mapping_setter=mapping_setter,
            populator=populator,
        )


class AppInjector:

    _instance: "AppInjector | None" = None

    def __init__(
        self,
        configs: Optional[Sequence[Dict[str, Any]]] = None,
        config_paths: Optional[Iterable[str]] = None,
        extension_config: Optional[ExtensionConfig] = None,
    ) -> None:
        self._module = SearchModule(
            configs=configs,
            config_paths=config_paths,
            extension_config=extension_config,
        )
        self._injector = Injector([self._module])

    @classmethod
    def get_instance(
        cls,
        configs: Optional[Sequence[Dict[str, Any]]] = None,
        config_paths: Optional[Iterable[str]] = None,
        extension_config: Optional[ExtensionConfig] = None,
    ) -> "AppInjector":
        if cls._instance is None:
            cls._instance = cls(
                configs=configs,
                config_paths=config_paths,
                extension_config=extension_config,
            )
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        if cls._instance is not None:
            cls._instance.close()
            cls._instance = None

    @property
    def registry(self) -> ServiceRegistry:
        return self._injector.get(ServiceRegistry)

    @property
    def resolved(self) -> ResolvedConfiguration:
        self._injector.get(ServiceRegistry)
        return self._module.resolved

    def get(self, key: Any) -> Any:
        if isinstance(key, str):
            return self.registry.get(key)
        return self._injector.get(key)

    def close(self) -> None:
        if self._module.resolved is None:
            return
        registry = self.registry
        for client_id in self._module.resolved.client_ids.values():
            if registry.is_instantiated(client_id):
                registry.get(client_id).close()
        logger.info("Search clients closed")


__all__ = ["AppInjector", "SearchModule"]
