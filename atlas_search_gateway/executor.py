from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pymongo.collection import Collection

logger = logging.getLogger(__name__)


@dataclass
class FacetResult:
    docs: List[Dict[str, Any]] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Optional[Dict[str, Any]]) -> Optional["FacetResult"]:
        if record is None:
            return None
        meta = record.get("meta") or []
        return cls(docs=list(record.get("docs") or []), meta=dict(meta[0]) if meta else {})


def run_pipeline(coll: Collection, pipeline: List[Dict[str, Any]]) -> Optional[FacetResult]:
    """Run a faceted pipeline; a $facet stage yields at most one record."""
    with coll.aggregate(pipeline) as cursor:
        record = next(cursor, None)
    if record is None:
        logger.debug("Aggregation on %s returned no facet record", coll.full_name)
    return FacetResult.from_record(record)


def explain_pipeline(coll: Collection, pipeline: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Return the query plan for an aggregation without running it."""
    return coll.database.command(
        {
            "explain": {"aggregate": coll.name, "pipeline": pipeline, "cursor": {}},
            "verbosity": "queryPlanner",
        }
    )
