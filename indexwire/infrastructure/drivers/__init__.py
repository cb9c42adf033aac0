
from typing import Callable, Dict

from ...domain.constants import MONGODB_DRIVER, ORM_DRIVER
from . import mongodb, orm
from .base import BaseProvider, BaseSearchToModelTransformer, resolve_model
from .mongodb import MongoEngineProvider, MongoEngineSearchToModelTransformer
from .orm import SqlAlchemyProvider, SqlAlchemySearchToModelTransformer

DRIVER_LOADERS: Dict[str, Callable] = {
    ORM_DRIVER: orm.register_services,
    MONGODB_DRIVER: mongodb.register_services,
}

__all__ = [
    "DRIVER_LOADERS",
    "BaseProvider",
    "BaseSearchToModelTransformer",
    "resolve_model",
    "SqlAlchemySearchToModelTransformer",
    "SqlAlchemyProvider",
    "MongoEngineSearchToModelTransformer",
    "MongoEngineProvider",
]
