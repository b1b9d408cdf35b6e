"""
Data models describing an order: raw shipping dimensions, order line items and
the individual packable units expanded from them.

Dimensions arrive as strings from the order store. They are parsed lazily and
converted to millimetres (mm); weights are converted to pounds (lb) on demand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from parcelpack.core.errors import MalformedDimensions

MM_PER_UNIT: Dict[str, float] = {
    "mm": 1.0,
    "cm": 10.0,
    "in": 25.4,
}

LB_PER_UNIT: Dict[str, float] = {
    "lb": 1.0,
    "oz": 1.0 / 16.0,
    "g": 1.0 / 453.59237,
    "kg": 1.0 / 0.45359237,
}


def parse_measure(name: str, raw: str | float) -> float:
    """Parse a numeric field, accepting a decimal comma and surrounding blanks."""
    text = str(raw).strip().replace(",", ".")
    if not text:
        raise MalformedDimensions(f"{name} is empty")
    try:
        value = float(text)
    except ValueError as exc:
        raise MalformedDimensions(f"{name} is not a number: {raw!r}") from exc
    if value < 0:
        raise MalformedDimensions(f"{name} cannot be negative, got {raw!r}")
    return value


@dataclass(frozen=True)
class ShippingDimensions:
    """Raw measurement strings as stored with an item or a parcel template."""

    length: str
    width: str
    height: str
    weight: str
    distance_unit: str = field(default="mm")
    mass_unit: str = field(default="lb")

    def floats_mm(self) -> Tuple[float, float, float, float]:
        """
        Return (length, width, height, weight) with the linear dimensions in mm.

        The weight is returned unconverted, in ``mass_unit``.
        """
        scale = MM_PER_UNIT.get(self.distance_unit.lower())
        if scale is None:
            raise MalformedDimensions(f"unknown distance unit {self.distance_unit!r}")
        length = parse_measure("length", self.length) * scale
        width = parse_measure("width", self.width) * scale
        height = parse_measure("height", self.height) * scale
        weight = parse_measure("weight", self.weight)
        return length, width, height, weight

    def weight_lb(self) -> float:
        """Return the weight converted to pounds."""
        scale = LB_PER_UNIT.get(self.mass_unit.lower())
        if scale is None:
            raise MalformedDimensions(f"unknown mass unit {self.mass_unit!r}")
        return parse_measure("weight", self.weight) * scale

    def to_dict(self) -> Dict[str, str]:
        return {
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "weight": self.weight,
            "distance_unit": self.distance_unit,
            "mass_unit": self.mass_unit,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, str | float]) -> "ShippingDimensions":
        return cls(
            length=str(payload["length"]),
            width=str(payload["width"]),
            height=str(payload["height"]),
            weight=str(payload["weight"]),
            distance_unit=str(payload.get("distance_unit", "mm")),
            mass_unit=str(payload.get("mass_unit", "lb")),
        )


@dataclass(frozen=True)
class OrderLineItem:
    """One line of a customer order: an item and the quantity ordered."""

    item_id: str
    name: str
    quantity: int
    dimensions: ShippingDimensions

    def __post_init__(self) -> None:
        if not self.item_id:
            raise ValueError("item_id must not be empty")
        if int(self.quantity) < 1:
            raise ValueError(f"quantity must be at least 1, got {self.quantity!r}")
        object.__setattr__(self, "quantity", int(self.quantity))

    def to_dict(self) -> Dict[str, object]:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "quantity": self.quantity,
            "dimensions": self.dimensions.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "OrderLineItem":
        return cls(
            item_id=str(payload["item_id"]),
            name=str(payload.get("name", payload["item_id"])),
            quantity=int(payload.get("quantity", 1)),
            dimensions=ShippingDimensions.from_dict(payload["dimensions"]),
        )


@dataclass(frozen=True)
class Unit:
    """A single physical instance of a line item, dimensions in mm."""

    item_id: str
    name: str
    length: float
    width: float
    height: float

    @property
    def volume(self) -> float:
        """Return the cubic volume of the unit in mm^3."""
        return self.length * self.width * self.height

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        return self.length, self.width, self.height

    def to_dict(self) -> Dict[str, float | str]:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "volume": self.volume,
        }
