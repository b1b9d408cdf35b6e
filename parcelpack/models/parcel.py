"""
Data models for the parcel catalog and for filled parcels.

A ``ParcelTemplate`` is read-only catalog input owned by the caller. A
``PackedParcel`` is the result of one successful (possibly partial) pack and is
handed to the rate-shopping and persistence collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from parcelpack.core.errors import MalformedDimensions, NoFittingDimensions
from parcelpack.core.utils_geometry import Placement, volume_utilization
from parcelpack.models.line_item import ShippingDimensions, Unit


@dataclass(frozen=True)
class ParcelTemplate:
    """Immutable catalog entry describing a carrier's parcel."""

    carrier: str
    template_id: str
    name: str
    dimensions: ShippingDimensions
    template: Optional[str] = field(default=None)

    def __post_init__(self) -> None:
        if not self.template_id:
            raise ValueError("template_id must not be empty")

    def floats_mm(self) -> Tuple[float, float, float, float]:
        """Return (length, width, height, tare weight) with lengths in mm."""
        try:
            return self.dimensions.floats_mm()
        except MalformedDimensions as exc:
            raise NoFittingDimensions(f"parcel {self.template_id}: {exc}") from exc

    def volume_mm3(self) -> float:
        length, width, height, _ = self.floats_mm()
        return length * width * height

    def tare_weight_lb(self) -> float:
        try:
            return self.dimensions.weight_lb()
        except MalformedDimensions as exc:
            raise NoFittingDimensions(f"parcel {self.template_id}: {exc}") from exc

    def to_dict(self) -> Dict[str, object]:
        return {
            "carrier": self.carrier,
            "template_id": self.template_id,
            "name": self.name,
            "template": self.template or "",
            "dimensions": self.dimensions.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "ParcelTemplate":
        """Instantiate from a raw catalog dictionary."""
        return cls(
            carrier=str(payload["carrier"]),
            template_id=str(payload["template_id"]),
            name=str(payload.get("name", payload["template_id"])),
            dimensions=ShippingDimensions.from_dict(payload["dimensions"]),
            template=payload.get("template") or None,
        )


@dataclass(frozen=True)
class ItemSummary:
    """Packing-list line: how many units of an item went into a parcel."""

    item_id: str
    name: str
    quantity: int

    def to_dict(self) -> Dict[str, object]:
        return {"item_id": self.item_id, "name": self.name, "quantity": self.quantity}


@dataclass(frozen=True)
class PackedParcel:
    """A parcel template together with the units placed into it."""

    template: ParcelTemplate
    items: Mapping[str, ItemSummary]
    units: Tuple[Unit, ...]
    placements: Tuple[Placement, ...]
    total_weight: float  # lb, tare included

    @classmethod
    def build(
        cls,
        template: ParcelTemplate,
        units: Tuple[Unit, ...],
        placements: Tuple[Placement, ...],
        total_weight: float,
    ) -> "PackedParcel":
        """Summarise the packed units per item id, in packing order."""
        counts: Dict[str, int] = {}
        names: Dict[str, str] = {}
        for unit in units:
            counts[unit.item_id] = counts.get(unit.item_id, 0) + 1
            names.setdefault(unit.item_id, unit.name)
        items = {
            item_id: ItemSummary(item_id=item_id, name=names[item_id], quantity=count)
            for item_id, count in counts.items()
        }
        return cls(
            template=template,
            items=items,
            units=tuple(units),
            placements=tuple(placements),
            total_weight=total_weight,
        )

    @property
    def carrier(self) -> str:
        return self.template.carrier

    @property
    def template_id(self) -> str:
        return self.template.template_id

    @property
    def name(self) -> str:
        return self.template.name

    def item_quantities(self) -> Dict[str, int]:
        return {item_id: summary.quantity for item_id, summary in self.items.items()}

    def weight_label(self) -> str:
        """Total weight formatted the way rate APIs expect it."""
        return f"{self.total_weight:.2f}"

    def volume_utilisation_pct(self) -> float:
        used = sum(unit.volume for unit in self.units)
        return volume_utilization(used, self.template.volume_mm3())

    def to_parcel_input(self) -> Dict[str, str]:
        """Return the parcel payload submitted to the rate-shopping API."""
        dims = self.template.dimensions
        return {
            "length": dims.length,
            "width": dims.width,
            "height": dims.height,
            "distance_unit": dims.distance_unit,
            "weight": self.weight_label(),
            "mass_unit": "lb",
        }

    def to_dict(self) -> Dict[str, object]:
        return {
            "carrier": self.carrier,
            "template_id": self.template_id,
            "name": self.name,
            "template": self.template.template or "",
            "dimensions": self.template.dimensions.to_dict(),
            "items": {item_id: summary.to_dict() for item_id, summary in self.items.items()},
            "total_weight": self.weight_label(),
            "volume_utilization": self.volume_utilisation_pct(),
            "positions": [placement.as_dict() for placement in self.placements],
        }
