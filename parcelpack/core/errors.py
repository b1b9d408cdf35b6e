"""
Exceptions raised by the packing engine.
"""

from __future__ import annotations


class PackingError(Exception):
    """Base class for every failure surfaced by the packing engine."""


class MalformedDimensions(PackingError):
    """A dimension or weight field could not be parsed as a number."""


class NoFittingDimensions(MalformedDimensions):
    """A parcel template carries malformed geometry."""


class DimensionsExceeded(PackingError):
    """A unit does not fit the free space of a box in any orientation."""


class NoParcelFound(PackingError):
    """No parcel in the catalog can take any of the remaining units."""

    def __init__(self, remaining: int) -> None:
        super().__init__(f"no parcel found for {remaining} remaining unit(s)")
        self.remaining = remaining
