from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ...domain.exceptions import ConfigurationError


def _none_to_empty(data: Any, keys) -> Any:
    if not isinstance(data, dict):
        return data
    data = dict(data)
    for key in keys:
        if key not in data:
            continue
        value = data[key]
        if value is None or value is True:
            data[key] = {}
        elif value is False:
            del data[key]
    return data


class ClientSettings(BaseModel):

    model_config = ConfigDict(extra="allow")

    host: str = "localhost"
    port: int = Field(default=9200, ge=1, le=65535)
    scheme: str = "http"
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: Optional[float] = Field(default=None, gt=0)
    verify_certs: bool = False

    def connection_params(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SearchToModelTransformerSettings(BaseModel):

    model_config = ConfigDict(extra="forbid")

    service: Optional[str] = None
    hydrate: bool = True
    ignore_missing: bool = False


class ModelToDocumentTransformerSettings(BaseModel):

    model_config = ConfigDict(extra="forbid")

    service: Optional[str] = None


class ProviderSettings(BaseModel):

    model_config = ConfigDict(extra="forbid")

    service: Optional[str] = None
    query_builder_method: str = "create_query_builder"
    batch_size: int = Field(default=100, ge=1)
    clear_object_manager: bool = True


class FinderSettings(BaseModel):

    model_config = ConfigDict(extra="forbid")

    service: Optional[str] = None


class PersistenceSettings(BaseModel):
    """Persistence-driver integration of one type.

    ``provider`` and ``finder`` are switched on by their presence; a bare
    ``finder: ~`` in YAML enables the finder with its defaults.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    driver: str
    model: Any
    identifier: str = "id"
    provider: Optional[ProviderSettings] = None
    finder: Optional[FinderSettings] = None
    search_to_model_transformer: SearchToModelTransformerSettings = Field(
        default_factory=SearchToModelTransformerSettings
    )
    model_to_document_transformer: ModelToDocumentTransformerSettings = Field(
        default_factory=ModelToDocumentTransformerSettings
    )

    @model_validator(mode="before")
    @classmethod
    def _enable_bare_blocks(cls, data: Any) -> Any:
        return _none_to_empty(
            data,
            (
                "provider",
                "finder",
                "search_to_model_transformer",
                "model_to_document_transformer",
            ),
        )


class TypeSettings(BaseModel):

    model_config = ConfigDict(extra="forbid")

    mappings: Dict[str, Any] = Field(default_factory=dict)
    persistence: Optional[PersistenceSettings] = None

    @model_validator(mode="before")
    @classmethod
    def _empty_mappings(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("mappings") is None and "mappings" in data:
            data = dict(data)
            data["mappings"] = {}
        return data


class IndexSettings(BaseModel):

    model_config = ConfigDict(extra="forbid")

    index_name: Optional[str] = None
    client: Optional[str] = None
    settings: Dict[str, Any] = Field(default_factory=dict)
    type_prototype: Dict[str, Any] = Field(default_factory=dict)
    types: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _empty_blocks(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("settings", "type_prototype", "types"):
            if key in data and data[key] is None:
                data[key] = {}
        if isinstance(data.get("types"), dict):
            data["types"] = {
                name: ({} if config is None else config)
                for name, config in data["types"].items()
            }
        return data


class SearchSettings(BaseModel):

    model_config = ConfigDict(extra="forbid")

    clients: Dict[str, ClientSettings] = Field(default_factory=dict)
    indexes: Dict[str, IndexSettings] = Field(default_factory=dict)
    default_client: Optional[str] = None
    default_index: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _empty_blocks(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("clients", "indexes"):
            if key in data and data[key] is None:
                data[key] = {}
            if isinstance(data.get(key), dict):
                data[key] = {
                    name: ({} if config is None else config)
                    for name, config in data[key].items()
                }
        return data


def _format_errors(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def parse_settings(data: Optional[Mapping[str, Any]]) -> SearchSettings:
    try:
        return SearchSettings.model_validate(dict(data or {}))
    except ValidationError as err:
        raise ConfigurationError(
            f"Invalid search configuration: {_format_errors(err)}"
        ) from err


def parse_type_settings(
    index_name: str,
    type_name: str,
    data: Mapping[str, Any],
) -> TypeSettings:
    try:
        return TypeSettings.model_validate(dict(data))
    except ValidationError as err:
        raise ConfigurationError(
            f'Invalid configuration for type "{index_name}.{type_name}": '
            f"{_format_errors(err)}"
        ) from err
