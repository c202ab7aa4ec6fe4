"""
Turn the raw query string of a search request into a validated SearchRequest.

Recognised parameters:

  q=<query>                     required
  search=<field,field,...>      required, fields to search
  skip=N                        optional, default 0, capped at 100
  limit=N                       optional, default 10, capped at 25
  project=<field,field,...>     optional, may include _id and _score
  filter=<field>:<value>        optional, repeatable
  debug=true                    optional

Validation problems are collected so the caller sees all of them at once.
Non-integer skip/limit values raise ValueError straight from int().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

MAX_SKIP = 100
MAX_LIMIT = 25
DEFAULT_SKIP = 0
DEFAULT_LIMIT = 10


class SearchRequestError(ValueError):
    """Raised when one or more query parameters are invalid."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(format_errors(self.errors))


def format_errors(errors: List[str]) -> str:
    return "[" + ", ".join(errors) + "]"


@dataclass
class SearchRequest:
    q: str
    search_fields: List[str]
    skip: int = DEFAULT_SKIP
    limit: int = DEFAULT_LIMIT
    project_fields: List[str] = field(default_factory=list)
    include_id: bool = False
    include_score: bool = False
    filters: List[Tuple[str, str]] = field(default_factory=list)
    debug: bool = False

    # raw values, echoed back in the response envelope
    raw_search: Optional[str] = None
    raw_skip: Optional[str] = None
    raw_limit: Optional[str] = None
    raw_project: Optional[str] = None
    raw_filters: List[str] = field(default_factory=list)

    def echo(self) -> dict:
        return {
            "q": self.q,
            "skip": self.raw_skip,
            "limit": self.raw_limit,
            "search": self.raw_search,
            "project": self.raw_project,
            "filter": list(self.raw_filters),
        }


def split_filter(entry: str) -> Optional[Tuple[str, str]]:
    """Split `field:value` on the first colon; None when there is no usable field."""
    name, sep, value = entry.partition(":")
    if not sep or not name:
        return None
    return name, value


def _parse_bool(value: Optional[str]) -> bool:
    return value is not None and value.lower() == "true"


def parse_request(params) -> SearchRequest:
    """Validate a multi-valued query mapping (anything with get/getlist)."""
    q = params.get("q")
    search_value = params.get("search")
    skip_value = params.get("skip")
    limit_value = params.get("limit")
    project_value = params.get("project")
    debug_value = params.get("debug")
    filter_values = params.getlist("filter")

    errors: List[str] = []

    skip = DEFAULT_SKIP if skip_value is None else int(skip_value)
    limit = DEFAULT_LIMIT if limit_value is None else int(limit_value)
    if skip < 0:
        errors.append("`skip` must not be negative")
    if limit < 0:
        errors.append("`limit` must not be negative")
    skip = min(MAX_SKIP, skip)
    limit = min(MAX_LIMIT, limit or DEFAULT_LIMIT)

    if not q:
        errors.append("`q` is missing")
    if not search_value:
        errors.append("`search` fields-list required")

    filters: List[Tuple[str, str]] = []
    for entry in filter_values:
        pair = split_filter(entry)
        if pair is None:
            errors.append(f"Invalid `filter`: {entry}")
        else:
            filters.append(pair)

    if errors:
        raise SearchRequestError(errors)

    project_fields = project_value.split(",") if project_value else []
    include_id = "_id" in project_fields
    include_score = "_score" in project_fields
    project_fields = [f for f in project_fields if f not in ("_id", "_score")]

    return SearchRequest(
        q=q,
        search_fields=search_value.split(","),
        skip=skip,
        limit=limit,
        project_fields=project_fields,
        include_id=include_id,
        include_score=include_score,
        filters=filters,
        debug=_parse_bool(debug_value),
        raw_search=search_value,
        raw_skip=skip_value,
        raw_limit=limit_value,
        raw_project=project_value,
        raw_filters=list(filter_values),
    )
