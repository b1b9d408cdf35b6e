"""
Packing-tree node representing a free cuboid inside a parcel.

The root node spans the whole parcel. Placing a unit fills the node and splits
its leftover space into three child nodes, one along each axis of the unit.
Each child is owned exclusively by its parent; nodes are never shared.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from parcelpack.core.errors import DimensionsExceeded
from parcelpack.core.utils_geometry import Placement
from parcelpack.models.line_item import Unit
from parcelpack.models.parcel import ParcelTemplate


@dataclass
class Box:
    """A free region of a parcel, filled with at most one unit."""

    length: float
    width: float
    height: float
    reservation: float = field(default=0.0)
    origin: Tuple[float, float, float] = field(default=(0.0, 0.0, 0.0))
    unit: Optional[Unit] = field(default=None)
    orientation: Optional[str] = field(default=None)
    children: Tuple["Box", ...] = field(default=())

    @classmethod
    def from_template(cls, template: ParcelTemplate, reservation: float) -> "Box":
        """Build the root node spanning the parcel's inner volume."""
        length, width, height, _ = template.floats_mm()
        return cls(length=length, width=width, height=height, reservation=reservation)

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        return self.length, self.width, self.height

    @property
    def is_empty(self) -> bool:
        """True when no free space is left along at least one axis."""
        return self.length == 0.0 or self.width == 0.0 or self.height == 0.0

    @property
    def lengthwise(self) -> Optional["Box"]:
        return self.children[0] if self.children else None

    @property
    def widthwise(self) -> Optional["Box"]:
        return self.children[1] if self.children else None

    @property
    def heightwise(self) -> Optional["Box"]:
        return self.children[2] if self.children else None

    def fit_orientation(self, unit: Unit) -> Optional[str]:
        """Return the name of the first orientation test the unit passes."""
        resv = self.reservation + 1.0
        max_l, max_w, max_h = self.length / resv, self.width / resv, self.height / resv
        if unit.length <= max_l and unit.width <= max_w and unit.height <= max_h:
            return "default"
        if unit.width <= max_l and unit.length <= max_w and unit.height <= max_h:
            return "swapped"
        # Upright test compares the unit's length against both the width and
        # the height of the box; the unit's width is never checked here.
        if unit.height <= max_l and unit.length <= max_w and unit.length <= max_h:
            return "upright"
        return None

    def place(self, unit: Unit) -> None:
        """
        Fill this box with ``unit`` and create the three child boxes.

        Raises ``DimensionsExceeded`` and leaves the box untouched when the unit
        fits no orientation. The children are always cut from the unit's own
        (length, width, height), whichever orientation test passed.
        """
        if self.unit is not None:
            raise ValueError("box is already filled")
        orientation = self.fit_orientation(unit)
        if orientation is None:
            raise DimensionsExceeded(
                f"unit {unit.item_id} {unit.dimensions} exceeds box {self.dimensions}"
            )

        x, y, z = self.origin
        self.unit = unit
        self.orientation = orientation
        self.children = (
            Box(
                length=self.length - unit.length,
                width=unit.width,
                height=self.height,
                origin=(x + unit.length, y, z),
            ),
            Box(
                length=self.length,
                width=self.width - unit.width,
                height=self.height,
                origin=(x, y + unit.width, z),
            ),
            Box(
                length=unit.length,
                width=unit.width,
                height=self.height - unit.height,
                origin=(x, y, z + unit.height),
            ),
        )

    def placements(self) -> List[Placement]:
        """Collect placed units depth-first (lengthwise, widthwise, heightwise)."""
        result: List[Placement] = []
        stack: List[Box] = [self]
        while stack:
            node = stack.pop()
            if node.unit is None:
                continue
            x, y, z = node.origin
            result.append(
                Placement(
                    item_id=node.unit.item_id,
                    x=x,
                    y=y,
                    z=z,
                    dimensions=node.unit.dimensions,
                    orientation=node.orientation or "default",
                )
            )
            stack.extend(reversed(node.children))
        return result
