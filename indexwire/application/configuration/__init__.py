
from .schema import (
    ClientSettings,
    FinderSettings,
    IndexSettings,
    ModelToDocumentTransformerSettings,
    PersistenceSettings,
    ProviderSettings,
    SearchSettings,
    SearchToModelTransformerSettings,
    TypeSettings,
    parse_settings,
    parse_type_settings,
)

__all__ = [
    "SearchSettings",
    "ClientSettings",
    "IndexSettings",
    "TypeSettings",
    "PersistenceSettings",
    "ProviderSettings",
    "FinderSettings",
    "SearchToModelTransformerSettings",
    "ModelToDocumentTransformerSettings",
    "parse_settings",
    "parse_type_settings",
]
