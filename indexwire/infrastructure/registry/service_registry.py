import logging
from typing import Any, Dict, Iterator, List

from ...domain.exceptions import (
    CircularReferenceError,
    FrozenRegistryError,
    ServiceNotFoundError,
)
from .definition import Reference, ServiceDefinition

logger = logging.getLogger(__name__)


class ServiceRegistry:

    def __init__(self) -> None:
        self._definitions: Dict[str, ServiceDefinition] = {}
        self._aliases: Dict[str, str] = {}
        self._instances: Dict[str, Any] = {}
        self._loading: List[str] = []
        self._frozen = False

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True
        logger.debug(
            "Registry frozen with %d definitions and %d aliases",
            len(self._definitions), len(self._aliases),
        )

    def _check_mutable(self) -> None:
        if self._frozen:
            raise FrozenRegistryError("The service registry is frozen")

    def set_definition(self, service_id: str, definition: ServiceDefinition) -> ServiceDefinition:
        self._check_mutable()
        self._aliases.pop(service_id, None)
        self._definitions[service_id] = definition
        logger.debug("Registered service %s", service_id)
        return definition

    def set_instance(self, service_id: str, instance: Any) -> None:
        self._check_mutable()
        self._instances[service_id] = instance

    def set_alias(self, alias: str, service_id: str) -> None:
        self._check_mutable()
        if alias == service_id:
            raise ValueError(f'An alias cannot reference itself: "{alias}"')
        self._aliases[alias] = service_id
        logger.debug("Aliased %s to %s", alias, service_id)

    def resolve_id(self, service_id: str) -> str:
        seen = []
        while service_id in self._aliases:
            if service_id in seen:
                raise CircularReferenceError(seen + [service_id])
            seen.append(service_id)
            service_id = self._aliases[service_id]
        return service_id

    def has(self, service_id: str) -> bool:
        resolved = self.resolve_id(service_id)
        return resolved in self._definitions or resolved in self._instances

    def has_definition(self, service_id: str) -> bool:
        return self.resolve_id(service_id) in self._definitions

    def get_definition(self, service_id: str) -> ServiceDefinition:
        resolved = self.resolve_id(service_id)
        try:
            return self._definitions[resolved]
        except KeyError:
            raise ServiceNotFoundError(service_id) from None

    def aliases(self) -> Dict[str, str]:
        return dict(self._aliases)

    def service_ids(self, include_abstract: bool = False) -> List[str]:
        return [
            service_id
            for service_id, definition in self._definitions.items()
            if include_abstract or not definition.abstract
        ]

    def __contains__(self, service_id: str) -> bool:
        return self.has(service_id)

    def __iter__(self) -> Iterator[str]:
        return iter(self.service_ids())

    def get(self, service_id: str) -> Any:
        resolved = self.resolve_id(service_id)
        if resolved in self._instances:
            return self._instances[resolved]

        if resolved in self._loading:
            raise CircularReferenceError(self._loading + [resolved])

        definition = self.get_definition(resolved)
        if definition.abstract:
            raise ValueError(f'Service "{resolved}" is abstract and cannot be built')

        self._loading.append(resolved)
        try:
            instance = self._build(definition)
        finally:
            self._loading.pop()

        self._instances[resolved] = instance
        logger.debug("Instantiated service %s", resolved)
        return instance

    def _build(self, definition: ServiceDefinition) -> Any:
        kwargs = self._resolve_value(definition.kwargs)
        if definition.factory_service is not None:
            owner = self.get(definition.factory_service)
            factory = getattr(owner, definition.factory_method)
        else:
            factory = definition.factory

        instance = factory(**kwargs)

        for method, args in definition.method_calls:
            getattr(instance, method)(*self._resolve_value(list(args)))
        return instance

    def _resolve_value(self, value: Any) -> Any:
        if isinstance(value, Reference):
            return self.get(value.service_id)
        if isinstance(value, ServiceDefinition):
            return self._build(value)
        if isinstance(value, dict):
            return {key: self._resolve_value(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._resolve_value(item) for item in value]
        if isinstance(value, tuple):
            return tuple(self._resolve_value(item) for item in value)
        return value

    def is_instantiated(self, service_id: str) -> bool:
        return self.resolve_id(service_id) in self._instances
