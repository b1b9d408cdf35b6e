"""
Geometry helper utilities shared by the packing tree, reports and plots.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


Dimensions = Tuple[float, float, float]


@dataclass(frozen=True)
class Placement:
    """
    Represents a unit placed inside a parcel.

    ``dimensions`` are the unit's own (length, width, height); ``orientation``
    names the fit test that accepted it.
    """

    item_id: str
    x: float
    y: float
    z: float
    dimensions: Dimensions
    orientation: str

    def as_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "dimensions": self.dimensions,
            "orientation": self.orientation,
        }


def volume_utilization(used_volume: float, container_volume: float) -> float:
    """
    Simple volume utilisation metric expressed as a percentage (0.0 - 100.0).
    """
    if container_volume <= 0:
        return 0.0
    return float(used_volume) / float(container_volume) * 100.0
