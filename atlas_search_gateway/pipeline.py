"""Build the $search + $facet aggregation pipeline for a SearchRequest."""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .request_parser import SearchRequest

SEARCH_META = "$$SEARCH_META"


def make_text_operator(paths: List[str], query: str) -> Dict[str, Any]:
    return {"text": {"path": list(paths), "query": [query]}}


def make_equals_operator(path: str, value: str) -> Dict[str, Any]:
    return {"equals": {"path": path, "value": value}}


def make_compound_operator(req: SearchRequest) -> Dict[str, Any]:
    compound: Dict[str, Any] = {
        "must": [make_text_operator(req.search_fields, req.q)],
    }
    if req.filters:
        compound["filter"] = [make_equals_operator(path, value) for path, value in req.filters]
    return compound


def make_search_stage(req: SearchRequest, index_name: str) -> Dict[str, Any]:
    return {
        "$search": {
            "index": index_name,
            "compound": make_compound_operator(req),
            "scoreDetails": req.debug,
            "count": {"type": "total"},
        }
    }


def make_projection(req: SearchRequest) -> Dict[str, Any]:
    # Clause order matters: a later clause wins over an earlier one for the same key.
    clauses: List[Tuple[str, Any]] = [(name, 1) for name in req.project_fields]
    clauses.append(("_id", 1 if req.include_id else 0))
    if req.debug:
        clauses.append(("_scoreDetails", {"$meta": "searchScoreDetails"}))
    if req.include_score:
        clauses.append(("_score", {"$meta": "searchScore"}))

    projection: Dict[str, Any] = {}
    for name, value in clauses:
        projection[name] = value
    return projection


def make_facet_stage(req: SearchRequest) -> Dict[str, Any]:
    return {
        "$facet": {
            "docs": [
                {"$skip": req.skip},
                {"$limit": req.limit},
                {"$project": make_projection(req)},
            ],
            "meta": [
                {"$replaceWith": SEARCH_META},
                {"$limit": 1},
            ],
        }
    }


def build_pipeline(req: SearchRequest, index_name: str) -> List[Dict[str, Any]]:
    return [
        make_search_stage(req, index_name),
        make_facet_stage(req),
    ]
