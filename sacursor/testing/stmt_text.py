""" Convert a SA SQL statement to readable text """
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects import sqlite


# The dialect to use for compiling statements
DEFAULT_DIALECT: sa.engine.interfaces.Dialect = sqlite.dialect()  # type: ignore[misc]


def stmt2sql(stmt: sa.sql.ClauseElement, dialect: Optional[sa.engine.interfaces.Dialect] = None) -> str:
    """ Convert an SqlAlchemy statement into a string, with parameter placeholders

    Example:
        SELECT u.id FROM u WHERE u.id > ? ORDER BY u.id LIMIT ? OFFSET ?
    """
    query = stmt.compile(dialect=dialect or DEFAULT_DIALECT)
    return ' '.join(str(query).split())
