#!/usr/bin/env python3
"""
Run a fixed Atlas Search query against sample_mflix.movies and print the
results, their score details and the query explanation.

Environment variables (a .env file is also read):
  ATLAS_URI    MongoDB Atlas connection string (required)
"""

from __future__ import annotations

import sys
from typing import Any, Dict, List

from bson import json_util
from bson.json_util import RELAXED_JSON_OPTIONS
from dotenv import load_dotenv
from pymongo import MongoClient

from .config import ConfigError, required_env
from .executor import explain_pipeline

DEMO_DB = "sample_mflix"
DEMO_COLLECTION = "movies"
RESULT_LIMIT = 30


def build_demo_pipeline() -> List[Dict[str, Any]]:
    genres_clause = {
        "compound": {
            "must": [
                {"text": {"path": "genres", "query": "Drama"}},
                {"text": {"path": "genres", "query": "Romance"}},
            ]
        }
    }

    cast_phrase = {
        "phrase": {
            "query": "keanu reeves",
            "path": "cast",
            "slop": 2,
        }
    }

    search_stage = {
        "$search": {
            "compound": {
                "filter": [genres_clause],
                "must": [cast_phrase],
            },
            "scoreDetails": True,
        }
    }

    projection = {
        "$project": {
            "_id": 0,
            "title": 1,
            "cast": 1,
            "genres": 1,
            "score": {"$meta": "searchScore"},
            "scoreDetails": {"$meta": "searchScoreDetails"},
        }
    }

    return [search_stage, projection, {"$limit": RESULT_LIMIT}]


def format_score_details(details: Dict[str, Any], indent: int = 2) -> List[str]:
    """Flatten a searchScoreDetails tree into indented `value, description` lines."""
    lines = [f"{' ' * indent}{details.get('value')}, {details.get('description')}"]
    for child in details.get("details") or []:
        lines.extend(format_score_details(child, indent + 2))
    return lines


def print_result(doc: Dict[str, Any]) -> None:
    print(doc.get("title"))
    print(f"  Cast: {doc.get('cast')}")
    print(f"  Genres: {doc.get('genres')}")
    print(f"  Score:{doc.get('score')}")
    if doc.get("scoreDetails"):
        for line in format_score_details(doc["scoreDetails"]):
            print(line)
    print("")


def main() -> int:
    load_dotenv()
    try:
        uri = required_env("ATLAS_URI")
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    client = MongoClient(uri)
    try:
        coll = client[DEMO_DB][DEMO_COLLECTION]
        pipeline = build_demo_pipeline()

        for doc in coll.aggregate(pipeline):
            print_result(doc)

        # The explain output shows how the query was interpreted
        print("Explain:")
        explain = explain_pipeline(coll, pipeline)
        print(json_util.dumps(explain, indent=2, json_options=RELAXED_JSON_OPTIONS))
        return 0
    except Exception as exc:  # noqa: BLE001
        print(exc, file=sys.stderr)
        return 1
    finally:
        client.close()


if __name__ == "__main__":
    raise SystemExit(main())
