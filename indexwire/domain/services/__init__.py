
from .config_merger import deep_union, merge_documents

__all__ = [
    "deep_union",
    "merge_documents",
]
