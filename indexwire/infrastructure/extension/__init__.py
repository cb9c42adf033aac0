
from .config import ExtensionConfig
from .extension import ResolvedConfiguration, SearchExtension

__all__ = [
    "ExtensionConfig",
    "ResolvedConfiguration",
    "SearchExtension",
]
