from .definition import Reference, ServiceDefinition
from .service_registry import ServiceRegistry

__all__ = [
    "Reference",
    "ServiceDefinition",
    "ServiceRegistry",
]
