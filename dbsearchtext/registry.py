"""
Dialect registry — name → adapter factory.

Not a singleton: build one with default_registry() at startup (or an
empty DialectRegistry() and register your own), then pass it to
whatever resolves dialects by name.
"""

from .errors import InvalidArgumentError


class DialectRegistry:
    """Maps dialect names to callables that open a new adapter."""

    def __init__(self):
        self._factories = {}

    def register(self, name, factory):
        """
        Register `factory` under `name`, replacing any previous entry.

        factory(connection_string, **options) must return an opened
        DialectAdapter. Adapter classes qualify as-is.
        """
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(f"dialect name must be a non-empty string, got {name!r}")
        if not callable(factory):
            raise InvalidArgumentError(f"factory for {name!r} is not callable")
        self._factories[name] = factory

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._factories))

    def resolve(self, name, connection_string, **options):
        """Open an adapter for `name`, or return None if it isn't registered."""
        if name is None:
            raise InvalidArgumentError("dialect name must not be None")
        if connection_string is None:
            raise InvalidArgumentError("connection_string must not be None")
        factory = self._factories.get(name)
        if factory is None:
            return None
        return factory(connection_string, **options)

    def __contains__(self, name):
        return name in self._factories

    def __repr__(self):
        return f"<DialectRegistry {', '.join(self.names())}>"


def default_registry() -> DialectRegistry:
    """Registry with all five built-in dialects."""
    from .mysql import MySQLAdapter
    from .oracle import OracleAdapter
    from .postgres import PostgresAdapter
    from .sqlite import SQLiteAdapter
    from .sqlserver import SQLServerAdapter

    registry = DialectRegistry()
    for adapter in (MySQLAdapter, OracleAdapter, PostgresAdapter,
                    SQLiteAdapter, SQLServerAdapter):
        registry.register(adapter.name, adapter)
    return registry
