"""Input parsing utilities."""

from .query_params import parse_query

__all__ = ["parse_query"]
