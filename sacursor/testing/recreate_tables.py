""" Create DB structure -- for testing """

from contextlib import contextmanager
from typing import Union

import sqlalchemy as sa


@contextmanager
def created_tables(bind: Union[sa.engine.Engine, sa.engine.Connection], metadata: sa.MetaData):
    """ Temporarily create tables, drop them when the context is quit

    Example:
        Base = sa.orm.declarative_base()

        with created_tables(connection, Base.metadata):
            ...
    """
    metadata.create_all(bind=bind)
    try:
        yield
    finally:
        metadata.drop_all(bind=bind)
