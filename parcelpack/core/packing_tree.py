"""
Greedy placement of units into a parcel using a three-way space-partition tree.

The units are expected largest first (first-fit decreasing). Each unit is tried
in the current free box; a placed unit splits the box into lengthwise,
widthwise and heightwise children, and the rest of the units flow through
those children in that order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from parcelpack.core.dimensions import sort_units
from parcelpack.core.errors import DimensionsExceeded
from parcelpack.models.box import Box
from parcelpack.models.line_item import Unit
from parcelpack.models.parcel import ParcelTemplate

logger = logging.getLogger(__name__)


@dataclass
class PackResult:
    packed: List[Unit]
    remaining: List[Unit]


@dataclass
class FillResult:
    """Outcome of filling one parcel template, with the tree kept for reporting."""

    template: ParcelTemplate
    root: Box
    packed: List[Unit]
    remaining: List[Unit]

    @property
    def complete(self) -> bool:
        return not self.remaining


def pack_into(units: Sequence[Unit], box: Box) -> PackResult:
    """
    Recursively place ``units`` into ``box`` and its descendants.

    Returns the units placed, in tree order, and the units that found no room.
    """
    if not units:
        return PackResult(packed=[], remaining=[])
    if box.is_empty:
        return PackResult(packed=[], remaining=list(units))

    head, tail = units[0], units[1:]
    try:
        box.place(head)
    except DimensionsExceeded:
        # try the smaller units in the same free space
        rest = pack_into(tail, box)
        return PackResult(packed=rest.packed, remaining=[head] + rest.remaining)

    packed = [head]
    remaining = list(tail)
    for child in box.children:
        if not remaining:
            break
        branch = pack_into(remaining, child)
        packed.extend(branch.packed)
        remaining = branch.remaining
    return PackResult(packed=packed, remaining=remaining)


def fill_parcel(units: Sequence[Unit], template: ParcelTemplate, reservation: float) -> FillResult:
    """Fill a fresh parcel built from ``template`` with as many units as fit."""
    root = Box.from_template(template, reservation)
    if not units:
        logger.debug("fill_parcel: empty unit list for %s", template.template_id)
        return FillResult(template=template, root=root, packed=[], remaining=[])

    result = pack_into(sort_units(units), root)
    logger.debug(
        "fill_parcel: %s packed %d, remaining %d",
        template.template_id,
        len(result.packed),
        len(result.remaining),
    )
    return FillResult(
        template=template,
        root=root,
        packed=result.packed,
        remaining=result.remaining,
    )
