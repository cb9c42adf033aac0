import enum
import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, Iterable, Mapping, Optional

from ...domain.ports.transformer_port import ModelToDocumentTransformerPort
from ...domain.value_objects.document import Document

logger = logging.getLogger(__name__)


def normalize_value(value: Any) -> Any:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return normalize_value(value.value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Mapping):
        return {str(key): normalize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [normalize_value(item) for item in value]
    return value


class AutoModelToDocumentTransformer(ModelToDocumentTransformerPort):

    DEFAULT_OPTIONS: Dict[str, Any] = {"identifier": "id"}

    def __init__(self, options: Optional[Dict[str, Any]] = None) -> None:
        self._options = {**self.DEFAULT_OPTIONS, **(options or {})}

    @property
    def identifier_field(self) -> str:
        return self._options["identifier"]

    def transform(self, obj: Any, fields: Iterable[str]) -> Document:
        identifier = getattr(obj, self.identifier_field)
        data = {}
        for field_name in fields:
            data[field_name] = normalize_value(getattr(obj, field_name))
        return Document(id=str(identifier), data=data)
