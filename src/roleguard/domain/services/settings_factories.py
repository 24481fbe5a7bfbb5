"""Registry of named settings factories used by templated grants."""

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from roleguard.domain.entities import Decoration
from roleguard.domain.exceptions import UnknownSettingsFactoryError, ValidationError

SettingsFactory = Callable[[Mapping[str, Any]], Mapping[str, Any]]


class SettingsFactoryRegistry:
    """Maps factory names stored on grants to pure ``Mapping -> Mapping`` callables.

    Grants persist only the name, so two grants use the same factory exactly
    when their names are equal.
    """

    def __init__(self, factories: Mapping[str, SettingsFactory] | None = None) -> None:
        self._factories: dict[str, SettingsFactory] = {}
        for name, factory in (factories or {}).items():
            self.register(name, factory)

    def register(
        self, name: str, factory: SettingsFactory | None = None
    ) -> SettingsFactory | Callable[[SettingsFactory], SettingsFactory]:
        """Register a factory; usable directly or as ``@registry.register("name")``."""
        if factory is None:

            def decorator(fn: SettingsFactory) -> SettingsFactory:
                self.register(name, fn)
                return fn

            return decorator

        if not name:
            raise ValidationError("Settings factory name must not be empty")
        if name in self._factories and self._factories[name] is not factory:
            raise ValidationError(f"Settings factory already registered: {name}")
        self._factories[name] = factory
        return factory

    def get(self, name: str) -> SettingsFactory:
        try:
            return self._factories[name]
        except KeyError:
            raise UnknownSettingsFactoryError(name) from None

    def apply(self, name: str, context: Mapping[str, Any]) -> Decoration:
        """Run factory ``name`` against a read-only view of the caller's settings."""
        result = self.get(name)(MappingProxyType(dict(context)))
        return dict(result or {})

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)
