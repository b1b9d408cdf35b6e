import pytest

from parcelpack.core.dimensions import (
    Envelope,
    aggregate_dimensions,
    expand_units,
    remaining_line_items,
    sort_units,
)
from parcelpack.core.errors import MalformedDimensions
from parcelpack.models.line_item import ShippingDimensions


def test_empty_order_has_zero_envelope():
    assert aggregate_dimensions([]) == Envelope()


def test_weight_scales_with_quantity_but_volume_does_not(make_item):
    items = [
        make_item("A", 10, 20, 30, weight=1.5, quantity=2),
        make_item("B", 40, 5, 10, weight=2.0),
    ]

    envelope = aggregate_dimensions(items)

    assert envelope.weight == pytest.approx(5.0)
    assert envelope.volume == pytest.approx(6000 + 2000)


def test_max_extents_are_taken_per_axis(make_item):
    items = [make_item("A", 10, 20, 30), make_item("B", 40, 5, 10)]

    envelope = aggregate_dimensions(items)

    assert (envelope.max_length, envelope.max_width, envelope.max_height) == (40, 20, 30)


def test_unparsable_dimension_is_malformed(make_item):
    with pytest.raises(MalformedDimensions):
        aggregate_dimensions([make_item("A", "ten", 20, 30)])


def test_expand_units_emits_one_unit_per_quantity(make_item):
    units = expand_units([make_item("A", 1, 2, 3, quantity=3)])

    assert len(units) == 3
    assert all(unit.item_id == "A" and unit.volume == 6 for unit in units)


def test_expand_units_sorts_descending_and_keeps_input_order_on_ties(make_item):
    items = [
        make_item("X", 2, 2, 2, quantity=2),
        make_item("Y", 1, 1, 1),
        make_item("Z", 4, 2, 1),
        make_item("W", 3, 3, 3),
    ]

    units = expand_units(items)

    assert [unit.item_id for unit in units] == ["W", "X", "X", "Z", "Y"]


def test_expand_units_converts_to_millimetres(make_item):
    (unit,) = expand_units([make_item("A", 1, 2, 0.5, distance_unit="in")])

    assert unit.dimensions == pytest.approx((25.4, 50.8, 12.7))


def test_sort_units_is_stable(make_unit):
    first = make_unit("a", 1, 1, 2)
    second = make_unit("b", 2, 1, 1)
    big = make_unit("c", 2, 2, 2)

    assert sort_units([first, second, big]) == [big, first, second]


def test_remaining_line_items_rebuilds_quantities(make_item):
    items = [
        make_item("A", 5, 5, 5, quantity=3),
        make_item("B", 4, 4, 4, quantity=1),
        make_item("C", 3, 3, 3, quantity=2),
    ]
    units = expand_units(items)
    leftover = [unit for unit in units if unit.item_id != "B"][1:]

    remaining = remaining_line_items(items, leftover)

    assert [(item.item_id, item.quantity) for item in remaining] == [("A", 2), ("C", 2)]
    assert remaining[0].dimensions == items[0].dimensions


@pytest.mark.parametrize(
    "raw, expected",
    [("12,5", 12.5), ("  10.0 ", 10.0), ("3", 3.0)],
)
def test_measurements_accept_loose_formatting(raw, expected):
    dims = ShippingDimensions(length=raw, width="1", height="1", weight="1")

    assert dims.floats_mm()[0] == expected


@pytest.mark.parametrize(
    "dims",
    [
        ShippingDimensions(length="", width="1", height="1", weight="1"),
        ShippingDimensions(length="-1", width="1", height="1", weight="1"),
        ShippingDimensions(length="1", width="1", height="1", weight="1", distance_unit="ft"),
    ],
)
def test_bad_measurements_are_malformed(dims):
    with pytest.raises(MalformedDimensions):
        dims.floats_mm()


def test_weight_converts_to_pounds():
    ounces = ShippingDimensions(length="1", width="1", height="1", weight="8", mass_unit="oz")
    grams = ShippingDimensions(length="1", width="1", height="1", weight="453.59237", mass_unit="g")

    assert ounces.weight_lb() == pytest.approx(0.5)
    assert grams.weight_lb() == pytest.approx(1.0)


def test_unknown_mass_unit_is_malformed():
    dims = ShippingDimensions(length="1", width="1", height="1", weight="1", mass_unit="stone")

    with pytest.raises(MalformedDimensions):
        dims.weight_lb()
