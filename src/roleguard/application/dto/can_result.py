"""Authorization result DTO."""

from typing import NamedTuple

from roleguard.domain.entities import Decoration


class CanResult(NamedTuple):
    """Decision and decorations; unpacks as ``granted, decorations``.

    ``decorations`` is a list for single-permission checks and a
    name -> list mapping for multi-permission checks.
    """

    granted: bool
    decorations: list[Decoration] | dict[str, list[Decoration]]
