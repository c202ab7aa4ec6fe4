"""Long-lived MongoDB client and collection handle shared by all requests."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pymongo import MongoClient
from pymongo.collection import Collection

from .config import Cfg

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionHandle:
    database_name: str
    collection_name: str
    index_name: str
    client: MongoClient
    collection: Collection

    @property
    def namespace(self) -> str:
        return f"{self.database_name}.{self.collection_name}"

    def close(self) -> None:
        self.client.close()


def connect(cfg: Cfg) -> CollectionHandle:
    """Open the client and resolve the configured collection.

    MongoClient connects lazily, so an unreachable cluster surfaces on the first
    request rather than here.
    """
    client = MongoClient(
        cfg.atlas_uri,
        serverSelectionTimeoutMS=cfg.server_selection_timeout_ms,
    )
    coll = client[cfg.database][cfg.collection]
    handle = CollectionHandle(
        database_name=cfg.database,
        collection_name=cfg.collection,
        index_name=cfg.index,
        client=client,
        collection=coll,
    )
    logger.info("Using collection %s (search index '%s')", handle.namespace, handle.index_name)
    return handle
