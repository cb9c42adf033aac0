
from .domain.exceptions import (
    ConfigurationError,
    MissingConfigurationError,
    UndefinedClientError,
    UndefinedIndexError,
    UnsupportedDriverError,
)
from .domain.services.config_merger import deep_union
from .infrastructure.di import AppInjector, SearchModule
from .infrastructure.extension import ExtensionConfig, SearchExtension
from .infrastructure.registry import ServiceRegistry

__all__ = [
    "AppInjector",
    "SearchModule",
    "SearchExtension",
    "ExtensionConfig",
    "ServiceRegistry",
    "deep_union",
    "ConfigurationError",
    "MissingConfigurationError",
    "UndefinedClientError",
    "UndefinedIndexError",
    "UnsupportedDriverError",
]

__version__ = "0.1.0"
