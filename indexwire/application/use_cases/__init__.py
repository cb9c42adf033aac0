
from .populate import PopulateResult, PopulateUseCase

__all__ = [
    "PopulateResult",
    "PopulateUseCase",
]
