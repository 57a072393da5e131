""" Tools for testing """

from .recreate_tables import created_tables
from .statement_log import StatementLog
from .stmt_text import stmt2sql
