
from .document import Document, SearchHit
from .service_ids import ServiceIds

__all__ = [
    "Document",
    "SearchHit",
    "ServiceIds",
]
