""" Page Fetcher: load one page of rows """

from __future__ import annotations

from collections import abc
from typing import Any, Optional

from .adapters.base import CursorQuery
from .predicate import Expression
from .typing import Row


def fetch_page(query: CursorQuery,
               predicate: Optional[Expression],
               parameters: abc.Mapping[str, Any],
               execution_options: abc.Mapping[str, Any]) -> list[Row]:
    """ Load one page: the base query, narrowed by the predicate

    The base query is not modified: `where()` and `params()` produce a copy.
    The LIMIT is whatever the base query has.

    Args:
        query: The base query
        predicate: Tie-break predicate. None for the first page.
        parameters: Values for the predicate's parameters
        execution_options: Passed to the query as is, on every page
    """
    page_query = query
    if predicate is not None:
        page_query = page_query.where(predicate).params(**parameters)

    return page_query.execute(execution_options)
