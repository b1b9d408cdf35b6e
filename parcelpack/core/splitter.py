"""
Split an order across as many parcels as it takes.

Each pass selects a parcel for whatever is still unpacked. The loop ends when
every unit is packed, or fails when a whole pass over the catalog places
nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from parcelpack.core.dimensions import expand_units, remaining_line_items, sort_units
from parcelpack.core.errors import NoParcelFound
from parcelpack.core.parcel_selector import ORDER_RESERVATION, TEMPLATE_RESERVATION, select_parcel
from parcelpack.models.line_item import OrderLineItem
from parcelpack.models.parcel import PackedParcel, ParcelTemplate

logger = logging.getLogger(__name__)


@dataclass
class ShipmentPlan:
    parcels: List[PackedParcel] = field(default_factory=list)

    @property
    def total_weight(self) -> float:
        return sum(parcel.total_weight for parcel in self.parcels)

    def item_quantities(self) -> Dict[str, int]:
        """Units per item id across every parcel."""
        totals: Dict[str, int] = {}
        for parcel in self.parcels:
            for item_id, quantity in parcel.item_quantities().items():
                totals[item_id] = totals.get(item_id, 0) + quantity
        return totals

    def to_dict(self) -> dict:
        return {
            "parcel_count": len(self.parcels),
            "total_weight": f"{self.total_weight:.2f}",
            "parcels": [parcel.to_dict() for parcel in self.parcels],
        }


def catalog_for_carrier(catalog: Sequence[ParcelTemplate], carrier: str) -> List[ParcelTemplate]:
    """Keep the templates of one carrier, in catalog order."""
    wanted = carrier.lower()
    return [template for template in catalog if template.carrier.lower() == wanted]


def split_order(
    line_items: Sequence[OrderLineItem],
    catalog: Sequence[ParcelTemplate],
    reservation: float = ORDER_RESERVATION,
    template_reservation: float = TEMPLATE_RESERVATION,
) -> ShipmentPlan:
    """
    Pack the order into one or more parcels.

    Raises ``NoParcelFound`` when the remaining units stop shrinking, and lets
    ``MalformedDimensions`` from item or template geometry propagate.
    """
    plan = ShipmentPlan()
    units = expand_units(line_items)
    if not units:
        return plan

    previous = len(units)
    while True:
        pending = remaining_line_items(line_items, units)
        selection = select_parcel(
            catalog,
            pending,
            sort_units(units),
            reservation=reservation,
            template_reservation=template_reservation,
        )
        if selection.parcel is None:
            logger.error("split_order failed: no parcel admits %d unit(s)", len(units))
            raise NoParcelFound(len(units))

        remaining = selection.remaining
        if not remaining:
            plan.parcels.append(selection.parcel)
            logger.info("split_order: order packed in %d parcel(s)", len(plan.parcels))
            return plan

        if len(remaining) == previous:
            logger.error("split_order failed: no parcel found for %d unit(s)", len(remaining))
            raise NoParcelFound(len(remaining))

        plan.parcels.append(selection.parcel)
        previous = len(remaining)
        units = remaining
