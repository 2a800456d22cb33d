"""PostgreSQL value types with conversion to and from the database's text formats."""

__version__ = "0.1.0"