from datetime import datetime
from typing import Any, Dict, Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from indexwire.infrastructure.extension import ExtensionConfig

from fakes import InMemorySearchClient
from sample_models import Base, Category, Product


@pytest.fixture
def session_factory() -> Generator[sessionmaker, None, None]:
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine)
    engine.dispose()


@pytest.fixture
def session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    with session_factory() as session:
        yield session


@pytest.fixture
def seeded_session(session: Session) -> Session:
    session.add_all(
        [
            Product(id=1, name="Red chair", price=49.5, created_at=datetime(2024, 1, 2, 10, 0)),
            Product(id=2, name="Blue table", price=120.0, created_at=datetime(2024, 2, 3, 11, 30)),
            Product(id=3, name="Red lamp", price=19.9, created_at=datetime(2024, 3, 4, 12, 15)),
            Product(
                id=4,
                name="Retired sofa",
                price=300.0,
                created_at=datetime(2023, 5, 6, 9, 0),
                active=False,
            ),
            Category(id=1, title="Furniture"),
            Category(id=2, title="Lighting"),
        ]
    )
    session.commit()
    return session


@pytest.fixture
def extension_config(seeded_session: Session) -> ExtensionConfig:
    return ExtensionConfig(
        client_factory=InMemorySearchClient,
        orm_session_factory=lambda: seeded_session,
    )


@pytest.fixture
def minimal_config() -> Dict[str, Any]:
    return {
        "clients": {"default": {"host": "localhost", "port": 9200}},
        "indexes": {"website": {"types": {"page": {"mappings": {"title": {"type": "text"}}}}}},
    }


@pytest.fixture
def shop_config() -> Dict[str, Any]:
    return {
        "clients": {
            "primary": {"host": "search-1", "port": 9200},
            "archive": {"host": "search-2", "port": 9201},
        },
        "indexes": {
            "shop": {
                "settings": {"number_of_shards": 1},
                "type_prototype": {
                    "persistence": {
                        "driver": "orm",
                        "identifier": "id",
                        "provider": {"batch_size": 2},
                        "finder": None,
                    },
                },
                "types": {
                    "product": {
                        "mappings": {
                            "name": {"type": "text"},
                            "price": {"type": "float"},
                            "created_at": {"type": "date"},
                        },
                        "persistence": {"model": Product},
                    },
                    "category": {
                        "mappings": {"title": {"type": "text"}},
                        "persistence": {"model": "sample_models.Category"},
                    },
                },
            },
            "archive": {
                "client": "archive",
                "types": {"old_product": {"mappings": {"name": {"type": "text"}}}},
            },
        },
    }
