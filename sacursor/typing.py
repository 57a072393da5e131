from collections import abc
from typing import Any, Union

import sqlalchemy as sa


# Annotation for result rows: ORM instances, RowMapping, Row, dicts or any objects
Row = Any

# Annotation for dict rows (generic key/value rows)
RowDict = abc.Mapping[str, Any]

# Value extractor: (row, field name) -> value
ValueGetter = abc.Callable[[Row, str], Any]

# An ORDER BY clause as found on a query: an SqlAlchemy expression, or a '<field> ASC|DESC' string
OrderByClause = Union[sa.sql.ClauseElement, str]
