"""Assemble and serialise the JSON response envelope."""

from __future__ import annotations

from typing import Any, Dict, Optional

from bson import json_util
from bson.json_util import RELAXED_JSON_OPTIONS

from .executor import FacetResult
from .request_parser import SearchRequest

CONTENT_TYPE = "text/json"


def build_envelope(
    req: SearchRequest,
    result: Optional[FacetResult],
    explain: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    envelope: Dict[str, Any] = {"request": req.echo()}
    if req.debug and explain is not None:
        envelope["debug"] = explain
    # No facet record means the docs and meta keys are left out entirely.
    if result is not None:
        envelope["docs"] = result.docs
        envelope["meta"] = result.meta
    return envelope


def dumps(envelope: Dict[str, Any]) -> str:
    # ObjectId, datetime and friends come out as relaxed Extended JSON
    return json_util.dumps(envelope, json_options=RELAXED_JSON_OPTIONS)
