from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from atlas_search_gateway.app import create_app
from atlas_search_gateway.config import Cfg
from atlas_search_gateway.db import CollectionHandle


def make_cursor(records):
    cursor = MagicMock()
    cursor.__enter__.return_value = iter(records)
    return cursor


@pytest.fixture
def cfg():
    return Cfg(
        atlas_uri="mongodb://localhost:27017",
        database="sample_mflix",
        collection="movies",
        index="movies_search",
        route="/search",
        host="127.0.0.1",
        port=8000,
        server_selection_timeout_ms=1000,
        log_level="INFO",
    )


@pytest.fixture
def mock_collection():
    coll = MagicMock()
    coll.name = "movies"
    coll.full_name = "sample_mflix.movies"
    coll.aggregate.return_value = make_cursor([{"docs": [], "meta": [{"count": {"total": 0}}]}])
    coll.database.command.return_value = {"queryPlanner": {"winningPlan": {"stage": "SEARCH"}}}
    return coll


@pytest.fixture
def handle(mock_collection):
    return CollectionHandle(
        database_name="sample_mflix",
        collection_name="movies",
        index_name="movies_search",
        client=MagicMock(),
        collection=mock_collection,
    )


@pytest.fixture
def client(cfg, handle):
    return TestClient(create_app(cfg, handle))
