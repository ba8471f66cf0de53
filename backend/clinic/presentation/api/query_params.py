"""Dependency exposing the raw query string as builder-ready QueryParameters."""

from fastapi import Request

from clinic.application.query.params import QueryValue, parse_query_string


def get_query_params(request: Request) -> dict[str, QueryValue]:
    """``?age[gte]=18&tag=a&tag=b`` -> ``{"age": {"gte": "18"}, "tag": ["a", "b"]}``."""
    return parse_query_string(request.query_params.multi_items())
