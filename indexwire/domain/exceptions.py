
from typing import Iterable, Optional


class ConfigurationError(ValueError):
    pass


class MissingConfigurationError(ConfigurationError):

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message or "You must define at least one client and one index"
        )


class UndefinedClientError(ConfigurationError):

    def __init__(self, client_name: str) -> None:
        self.client_name = client_name
        super().__init__(f'The client with name "{client_name}" is not defined')


class UndefinedIndexError(ConfigurationError):

    def __init__(self, index_name: str) -> None:
        self.index_name = index_name
        super().__init__(f'The index with name "{index_name}" is not defined')


class UnsupportedDriverError(ConfigurationError):

    def __init__(self, driver: str, supported: Iterable[str] = ()) -> None:
        self.driver = driver
        self.supported = tuple(supported)
        message = f'The persistence driver "{driver}" is not supported'
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class ServiceNotFoundError(KeyError):

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(service_id)

    def __str__(self) -> str:
        return f'Service "{self.service_id}" is not defined'


class FrozenRegistryError(RuntimeError):
    pass


class CircularReferenceError(RuntimeError):

    def __init__(self, path: Iterable[str]) -> None:
        self.path = list(path)
        super().__init__("Circular reference detected: " + " -> ".join(self.path))


class MissingObjectsError(LookupError):

    def __init__(self, missing_ids: Iterable[str]) -> None:
        self.missing_ids = list(missing_ids)
        super().__init__(
            "Cannot find corresponding objects for all search results: "
            + ", ".join(self.missing_ids)
        )
