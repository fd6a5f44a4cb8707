"""
Error taxonomy shared by every dialect.

    InvalidArgumentError      bad input: missing name part, empty column, bad registry entry
    DatabaseConnectionError   the driver could not open a connection
    InvalidStateError         contract violated at runtime (NULL primary key, closed adapter)
    UnregisteredDialectError  connect() was asked for a dialect nobody registered
    ConfigError               config file missing, unreadable, or incomplete

Driver errors raised while a statement executes are NOT wrapped —
they reach the caller as whatever the driver raised.
"""


class DBSearchTextError(Exception):
    """Base class for all errors raised by dbsearchtext itself."""


class InvalidArgumentError(DBSearchTextError, ValueError):
    pass


class DatabaseConnectionError(DBSearchTextError, ConnectionError):
    pass


class InvalidStateError(DBSearchTextError, RuntimeError):
    pass


class UnregisteredDialectError(DBSearchTextError, LookupError):
    pass


class ConfigError(DBSearchTextError, ValueError):
    pass
