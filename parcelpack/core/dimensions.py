"""
Order geometry: the aggregate envelope of an order and its expansion into
individual packable units.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Sequence

from parcelpack.core.errors import MalformedDimensions
from parcelpack.models.line_item import OrderLineItem, Unit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Envelope:
    """Aggregate figures used to prefilter candidate parcels."""

    weight: float = 0.0
    volume: float = 0.0
    max_length: float = 0.0
    max_width: float = 0.0
    max_height: float = 0.0


def aggregate_dimensions(line_items: Iterable[OrderLineItem]) -> Envelope:
    """
    Reduce line items to their envelope.

    Weight is multiplied by quantity but volume is summed once per line item,
    so the volume of multi-quantity lines is understated. Maximum length, width
    and height are taken independently across items.
    """
    total_weight = 0.0
    total_volume = 0.0
    max_length = max_width = max_height = 0.0

    for item in line_items:
        try:
            length, width, height, weight = item.dimensions.floats_mm()
        except MalformedDimensions as exc:
            logger.error("aggregate_dimensions failed for item %s: %s", item.item_id, exc)
            raise
        total_weight += weight * item.quantity
        total_volume += length * width * height
        max_length = max(max_length, length)
        max_width = max(max_width, width)
        max_height = max(max_height, height)

    return Envelope(
        weight=total_weight,
        volume=total_volume,
        max_length=max_length,
        max_width=max_width,
        max_height=max_height,
    )


def sort_units(units: Iterable[Unit]) -> List[Unit]:
    """Order units by descending volume, keeping input order among equals."""
    return sorted(units, key=lambda unit: unit.volume, reverse=True)


def expand_units(line_items: Iterable[OrderLineItem]) -> List[Unit]:
    """Emit one unit per ordered quantity, largest units first."""
    units: List[Unit] = []
    for item in line_items:
        try:
            length, width, height, _ = item.dimensions.floats_mm()
        except MalformedDimensions as exc:
            logger.error("expand_units failed for item %s: %s", item.item_id, exc)
            raise
        unit = Unit(
            item_id=item.item_id,
            name=item.name,
            length=length,
            width=width,
            height=height,
        )
        units.extend([unit] * item.quantity)
    return sort_units(units)


def remaining_line_items(
    line_items: Sequence[OrderLineItem],
    units: Iterable[Unit],
) -> List[OrderLineItem]:
    """
    Restrict line items to the given units.

    Each surviving line keeps its original position and takes the number of
    matching units as its quantity.
    """
    counts: Dict[str, int] = {}
    for unit in units:
        counts[unit.item_id] = counts.get(unit.item_id, 0) + 1

    remaining: List[OrderLineItem] = []
    for item in line_items:
        quantity = counts.pop(item.item_id, 0)
        if quantity:
            remaining.append(replace(item, quantity=quantity))
    return remaining
