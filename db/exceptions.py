"""
db/exceptions.py
----------------
Error taxonomy for the data-access layer.

Everything raised below the service layer is a DataAccessError, so callers
only need one ``except`` clause. Empty result sets are never errors.
"""

import psycopg2
from psycopg2 import pool


class DataAccessError(Exception):
    """Generic failure while talking to the photo store."""


class ConnectivityError(DataAccessError):
    """The store is unreachable or no pooled connection is available."""


class InvalidParameterError(DataAccessError, ValueError):
    """A query argument (timestamp, year, month, row range) is malformed."""


def translate_error(exc: Exception) -> DataAccessError:
    """
    Map a psycopg2 exception onto the data-access taxonomy.

    Args:
        exc: The exception raised by psycopg2 or its pool.

    Returns:
        The matching DataAccessError subclass instance. The caller is
        expected to ``raise translate_error(e) from e``.
    """
    if isinstance(exc, DataAccessError):
        return exc
    if isinstance(exc, (psycopg2.OperationalError, psycopg2.InterfaceError, pool.PoolError)):
        return ConnectivityError(str(exc).strip() or "database unreachable")
    if isinstance(exc, psycopg2.DataError):
        return InvalidParameterError(str(exc).strip())
    return DataAccessError(str(exc).strip())
