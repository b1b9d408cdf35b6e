"""
Choose the cheapest parcel template for a set of units.

Carrier pricing per unit of volume drops as parcels grow, so the cheapest
option is the smallest parcel that takes the whole order. Templates are tried
from smallest to largest volume; when none takes everything, the largest
template tried is used and the rest is left for another parcel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from parcelpack.core.dimensions import Envelope, aggregate_dimensions
from parcelpack.core.errors import MalformedDimensions
from parcelpack.core.packing_tree import FillResult, fill_parcel
from parcelpack.models.line_item import OrderLineItem, Unit
from parcelpack.models.parcel import PackedParcel, ParcelTemplate

logger = logging.getLogger(__name__)

ORDER_RESERVATION = 0.2  # share of parcel volume kept for packing material
TEMPLATE_RESERVATION = 0.1  # share of each parcel extent kept while placing units


@dataclass
class ParcelSelection:
    template: Optional[ParcelTemplate]
    parcel: Optional[PackedParcel]
    remaining: List[Unit] = field(default_factory=list)


def validate_reservation(name: str, value: float) -> float:
    if not 0.0 <= value < 1.0:
        raise ValueError(f"{name} must be within [0, 1), got {value!r}")
    return float(value)


def _admits(
    template: ParcelTemplate,
    envelope: Envelope,
    reservation: float,
) -> bool:
    """Prefilter a template on order volume and on the largest unit extents."""
    length, width, height, _ = template.floats_mm()
    usable_volume = length * width * height * (1 - reservation)
    if not envelope.volume < usable_volume:
        logger.debug("skip %s: order volume %.1f >= %.1f", template.template_id, envelope.volume, usable_volume)
        return False
    if length < envelope.max_length or width < envelope.max_width or height < envelope.max_height:
        logger.debug("skip %s: largest items exceed parcel extents", template.template_id)
        return False
    return True


def _scan(
    ordered: Sequence[ParcelTemplate],
    envelope: Envelope,
    units: Sequence[Unit],
    reservation: float,
    template_reservation: float,
) -> List[FillResult]:
    """Fill admitted templates in ascending volume, stopping at the first perfect fit."""
    attempts: List[FillResult] = []
    for template in ordered:
        if not _admits(template, envelope, reservation):
            continue
        attempt = fill_parcel(units, template, template_reservation)
        attempts.append(attempt)
        if attempt.complete:
            break
    return attempts


def _parcel_weight(
    attempt: FillResult,
    line_items: Sequence[OrderLineItem],
) -> float:
    """Tare weight plus the weight of every packed unit, in lb."""
    by_id: Dict[str, OrderLineItem] = {item.item_id: item for item in line_items}
    total = attempt.template.tare_weight_lb()
    for unit in attempt.packed:
        total += by_id[unit.item_id].dimensions.weight_lb()
    return total


def select_parcel(
    catalog: Sequence[ParcelTemplate],
    line_items: Sequence[OrderLineItem],
    units: Sequence[Unit],
    reservation: float = ORDER_RESERVATION,
    template_reservation: float = TEMPLATE_RESERVATION,
) -> ParcelSelection:
    """
    Pick the smallest template that takes every unit, or else the largest one
    tried, and pack it.

    ``line_items`` describe the units still to ship: they provide the envelope
    used for prefiltering and the per-unit weights. Returns a selection with
    ``template`` set to ``None`` when no template passes the prefilters.
    """
    reservation = validate_reservation("reservation", reservation)
    template_reservation = validate_reservation("template_reservation", template_reservation)

    if not catalog or not units or not line_items:
        logger.info("select_parcel: no items")
        return ParcelSelection(template=None, parcel=None, remaining=[])

    try:
        envelope = aggregate_dimensions(line_items)
        ordered = sorted(catalog, key=lambda template: template.volume_mm3())
        attempts = _scan(ordered, envelope, units, reservation, template_reservation)
    except MalformedDimensions as exc:
        logger.error("select_parcel failed: %s", exc)
        raise

    if not attempts:
        logger.warning("select_parcel: no template admits %d unit(s)", len(units))
        return ParcelSelection(template=None, parcel=None, remaining=list(units))

    # the last attempt is either the perfect fit or the largest template tried
    chosen = attempts[-1]
    parcel = PackedParcel.build(
        template=chosen.template,
        units=tuple(chosen.packed),
        placements=tuple(chosen.root.placements()),
        total_weight=_parcel_weight(chosen, line_items),
    )
    logger.info(
        "select_parcel: %s packed %d unit(s), %d remaining",
        chosen.template.template_id,
        len(chosen.packed),
        len(chosen.remaining),
    )
    return ParcelSelection(template=chosen.template, parcel=parcel, remaining=list(chosen.remaining))
