"""Options describing the decoration of a single grant."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from roleguard.domain.exceptions import ValidationError


@dataclass(frozen=True)
class GrantOptions:
    """Static decoration or a registered settings factory name, never both."""

    decoration: Mapping[str, Any] | None = None
    factory: str | None = None

    def __post_init__(self) -> None:
        if self.decoration is not None and self.factory is not None:
            raise ValidationError("Grant takes either a decoration or a factory, not both")

    @property
    def is_templated(self) -> bool:
        return self.factory is not None

    @property
    def is_plain(self) -> bool:
        return self.decoration is None and self.factory is None
