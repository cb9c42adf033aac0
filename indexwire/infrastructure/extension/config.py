from dataclasses import dataclass
from typing import Any, Callable, Optional

from ...domain.constants import SERVICE_PREFIX
from ..search import OpenSearchClient


@dataclass
class ExtensionConfig:

    prefix: str = SERVICE_PREFIX
    client_factory: Callable[..., Any] = OpenSearchClient
    orm_session_factory: Optional[Callable[[], Any]] = None
    freeze: bool = True
