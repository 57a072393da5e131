""" SqlAlchemy introspection: read ORDER BY and LIMIT from statements """
