"""Builder registry (Open/Closed Principle).

``BuilderFactory`` maps dialect names to :class:`SQLDMLQueryBuilder`
subclasses so new dialects can be added without editing the package::

    from clausekit.build.registry import BuilderFactory

    @BuilderFactory.register("postgres")
    class PostgresDMLQueryBuilder(SQLDMLQueryBuilder):
        ...

    builder = BuilderFactory.create("postgres")
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from clausekit.build.sql import SQLDMLQueryBuilder
from clausekit.errors import UnknownDialectError
from clausekit.schema.dialect import DialectProfile


class BuilderFactory:
    """Registry mapping dialect names to builder classes.

    Builders are stateful, so :meth:`create` returns a fresh instance on
    every call.
    """

    _builders: ClassVar[dict[str, type[SQLDMLQueryBuilder]]] = {}

    @classmethod
    def register(
        cls, name: str
    ) -> Callable[[type[SQLDMLQueryBuilder]], type[SQLDMLQueryBuilder]]:
        """Decorator that registers a builder class under ``name``.

        Args:
            name: The dialect name (e.g. ``"mysql"``).

        Returns:
            A decorator that registers and returns the builder class.
        """

        def decorator(builder_cls: type[SQLDMLQueryBuilder]) -> type[SQLDMLQueryBuilder]:
            cls._builders[name] = builder_cls
            return builder_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, builder_cls: type[SQLDMLQueryBuilder]) -> None:
        """Register a builder class without using the decorator form."""
        cls._builders[name] = builder_cls

    @classmethod
    def create(cls, name: str, profile: DialectProfile | None = None) -> SQLDMLQueryBuilder:
        """Instantiate the builder registered for ``name``.

        Args:
            name: The dialect name.
            profile: Optional profile overriding the builder's default.

        Raises:
            UnknownDialectError: If no builder is registered for ``name``.
        """
        builder_cls = cls._builders.get(name)
        if builder_cls is None:
            raise UnknownDialectError(name, sorted(cls._builders))
        return builder_cls(profile)

    @classmethod
    def registered_targets(cls) -> list[str]:
        """Return the sorted list of registered dialect names."""
        return sorted(cls._builders)
