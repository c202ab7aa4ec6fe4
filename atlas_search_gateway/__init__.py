"""HTTP gateway translating query strings into Atlas Search aggregations."""

__version__ = "0.1.0"
