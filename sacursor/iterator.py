""" CursorIterator: iterate over a query of any size, page by page, with keyset pagination """

from __future__ import annotations

import functools
import logging
from collections import abc
from typing import Any, Optional

import sqlalchemy as sa

from .adapters.base import CursorQuery
from .adapters.select import SelectQuery, Hydration, Bind
from .batch import batched
from .cursor_state import CursorState
from .orderspec import OrderSpec, extract_order_specs, extract_page_limit
from .page import fetch_page
from .predicate import build_predicate, predicate_parameters
from .settings import CursorSettings
from .typing import Row


logger = logging.getLogger(__name__)


class CursorIterator:
    """ Cursor Iterator: turns one ordered, limited query into a lazy sequence of all its rows

    The base query is executed page by page. Its LIMIT is the page size.
    Every next page is narrowed with a predicate: "strictly after the last row of the previous page".

    Iteration goes through these states:
    * not started: nothing is fetched until the first row is requested
    * fetching: a page is loaded with the predicate built from the cursor state
    * yielding: rows of the page are given away, one by one
    * exhausted: a page came out shorter than the limit. No more fetches.

    Every call to `iterate()` starts over from the first page.
    Rows that share the same key tuple may be skipped at page boundaries: make sure the ordering ends with a unique key.

    Example:
        stmt = sa.select(User).order_by(User.id).limit(100)
        for user in CursorIterator.for_select(stmt, session):
            ...
    """
    # The base query to paginate. Never modified.
    query: CursorQuery

    # Execution options for every page, e.g. {'yield_per': 100}
    execution_options: dict[str, Any]

    # Settings
    settings: CursorSettings

    # Ordering: the list of sort keys, most significant first
    order_specs: tuple[OrderSpec, ...]

    # Page size: the LIMIT of the base query
    page_size: int

    def __init__(self, query: CursorQuery, execution_options: Optional[abc.Mapping[str, Any]] = None, *, settings: Optional[CursorSettings] = None):
        """ Prepare to iterate over a query

        Args:
            query: The base query: must have ORDER BY and LIMIT
            execution_options: Options to execute every page with
            settings: Iterator settings

        Raises:
            exc.ConfigurationError: missing ordering, missing page size, invalid page size
        """
        self.query = query
        self.execution_options = dict(execution_options or {})
        self.settings = settings or CursorSettings()

        self.order_specs = extract_order_specs(query.order_by_clauses, strict=self.settings.strict_ordering, resolve=query.resolve_order_by)
        self.page_size = extract_page_limit(query.limit)

    __slots__ = 'query', 'execution_options', 'settings', 'order_specs', 'page_size'

    @classmethod
    def for_select(cls, stmt: sa.sql.Select, bind: Bind, *, execution_options: Optional[abc.Mapping[str, Any]] = None,
                   hydration: Optional[Hydration] = None, settings: Optional[CursorSettings] = None) -> CursorIterator:
        """ Iterate over an SqlAlchemy statement

        Args:
            stmt: The statement: `select(...).order_by(...).limit(...)`
            bind: Connection, Engine, or Session
            execution_options: Options to execute every page with
            hydration: The shape of result rows. See `SelectQuery`
            settings: Iterator settings
        """
        return cls(SelectQuery(stmt, bind, hydration), execution_options, settings=settings)

    @classmethod
    def prepare(cls, bind: Bind, *, execution_options: Optional[abc.Mapping[str, Any]] = None, hydration: Optional[Hydration] = None, settings: Optional[CursorSettings] = None):
        """ Prepare to iterate over statements with the same bind and settings

        Example:
            iterate_users = CursorIterator.prepare(session)
            for user in iterate_users(sa.select(User).order_by(User.id).limit(100)):
                ...
        """
        return functools.partial(cls.for_select, bind=bind, execution_options=execution_options, hydration=hydration, settings=settings)

    def __iter__(self) -> abc.Iterator[Row]:
        return self.iterate()

    def iterate(self) -> abc.Iterator[Row]:
        """ Iterate over all rows, page after page """
        for page in self.pages():
            yield from page

    def batch(self, size: Optional[int] = None) -> abc.Iterator[list[Row]]:
        """ Iterate over all rows in batches of `size`. Default: the page size

        Batches do not have to match pages: any size works, and the rows are the same.

        Raises:
            exc.ConfigurationError: 'invalid batch size'
        """
        return batched(self.iterate(), self.page_size if size is None else size)

    def pages(self) -> abc.Iterator[list[Row]]:
        """ Iterate over pages, as fetched. Empty pages are not given. """
        state = CursorState()
        n_pages = n_rows = 0

        while True:
            rows, state = self.fetch_next_page(state)
            n_pages += 1
            n_rows += len(rows)

            if rows:
                yield rows

            # A short page is the last one
            if len(rows) < self.page_size:
                logger.debug('Cursor exhausted: %d pages, %d rows', n_pages, n_rows)
                return

            if state.has_nulls:
                logger.warning('NULL sort key in the cursor: %r. Keyset pagination will likely stop here.', dict(state.values))

    def fetch_next_page(self, state: CursorState) -> tuple[list[Row], CursorState]:
        """ Fetch the page that follows the cursor `state`; get its rows and the new cursor state

        This is a single step of the iteration.
        With an empty `state`, it fetches the first page.
        """
        predicate = build_predicate(self.order_specs, state, self.settings.get_parameter_name)
        parameters = predicate_parameters(self.order_specs, state, self.settings.get_parameter_name) if predicate is not None else {}

        logger.debug('Fetching page: %s', predicate if predicate is not None else '(first page)')
        rows = fetch_page(self.query, predicate, parameters, self.execution_options)
        logger.debug('Fetched %d rows', len(rows))

        return rows, self.advance(state, rows)

    def advance(self, state: CursorState, rows: abc.Iterable[Row]) -> CursorState:
        """ Move the cursor over `rows`: the key tuple of the last row becomes the new state """
        return functools.reduce(
            lambda state, row: state.advance(row, self.order_specs, self.settings.get_value),
            rows,
            state,
        )
