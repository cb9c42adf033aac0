
from .config_loader import load_config_file, load_config_files
from .extension import ExtensionConfig, ResolvedConfiguration, SearchExtension
from .registry import Reference, ServiceDefinition, ServiceRegistry
from .search import OpenSearchClient
from .services import IndexManager, MappingSetter, Populator, TransformedFinder

__all__ = [
    "SearchExtension",
    "ExtensionConfig",
    "ResolvedConfiguration",
    "ServiceRegistry",
    "ServiceDefinition",
    "Reference",
    "OpenSearchClient",
    "IndexManager",
    "MappingSetter",
    "Populator",
    "TransformedFinder",
    "load_config_file",
    "load_config_files",
]
