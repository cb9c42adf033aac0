
from .finder import TransformedFinder
from .index_manager import IndexManager
from .mapping_setter import MappingSetter
from .model_to_document import AutoModelToDocumentTransformer, normalize_value
from .populator import Populator

__all__ = [
    "AutoModelToDocumentTransformer",
    "normalize_value",
    "TransformedFinder",
    "IndexManager",
    "MappingSetter",
    "Populator",
]
