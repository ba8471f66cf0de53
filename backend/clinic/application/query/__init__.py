from .builder import QueryBuilder, QueryBuilderConfig
from .params import (
    RESERVED_QUERY_KEYS,
    QueryParameters,
    auto_parse,
    normalize_query_params,
    parse_query_string,
)

__all__ = [
    "QueryBuilder",
    "QueryBuilderConfig",
    "RESERVED_QUERY_KEYS",
    "QueryParameters",
    "auto_parse",
    "normalize_query_params",
    "parse_query_string",
]
