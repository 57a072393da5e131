from typing import Optional

import sqlalchemy as sa

from sacursor import exc


def get_statement_limit(stmt: sa.sql.Select) -> Optional[int]:
    """ Get the LIMIT of a statement as an integer

    Raises:
        exc.ConfigurationError: the LIMIT is an expression, not an integer
    """
    if stmt._limit_clause is None:
        return None

    try:
        return stmt._limit
    except sa.exc.CompileError as e:
        raise exc.ConfigurationError('invalid page size', 'LIMIT must be a plain integer') from e
