import pytest

from parcelpack.core.dimensions import expand_units
from parcelpack.core.errors import MalformedDimensions, NoFittingDimensions
from parcelpack.core.parcel_selector import select_parcel


@pytest.fixture
def order(make_item):
    return [
        make_item("001", 8, 8, 3, weight=1.0),
        make_item("002", 5, 5, 2, weight=0.5),
        make_item("003", 3, 3, 2, weight=0.25),
    ]


@pytest.fixture
def catalog(make_template):
    return [
        make_template("large", 20, 20, 10, weight=1.0),
        make_template("small", 12, 12, 6, weight=0.5),
        make_template("tiny", 6, 6, 6, weight=0.25),
    ]


def test_smallest_fitting_template_is_chosen(order, catalog):
    selection = select_parcel(catalog, order, expand_units(order))

    assert selection.template.template_id == "small"
    assert selection.remaining == []
    assert selection.parcel.item_quantities() == {"001": 1, "002": 1, "003": 1}


def test_weight_adds_tare_and_packed_units(order, catalog):
    selection = select_parcel(catalog, order, expand_units(order))

    assert selection.parcel.total_weight == pytest.approx(0.5 + 1.0 + 0.5 + 0.25)
    assert selection.parcel.weight_label() == "2.25"


def test_tare_weight_is_converted_to_pounds(order, make_template):
    catalog = [make_template("small", 12, 12, 6, weight=8, mass_unit="oz")]

    selection = select_parcel(catalog, order, expand_units(order))

    assert selection.parcel.total_weight == pytest.approx(0.5 + 1.75)


def test_largest_tried_template_is_used_when_nothing_fits_everything(make_item, make_template):
    order = [make_item("P", 10, 10, 10, quantity=3)]
    catalog = [make_template("tall", 12, 12, 24), make_template("cube", 12, 12, 12)]

    selection = select_parcel(catalog, order, expand_units(order))

    assert selection.template.template_id == "tall"
    assert selection.parcel.item_quantities() == {"P": 2}
    assert [unit.item_id for unit in selection.remaining] == ["P"]


def test_volume_prefilter_rejects_small_templates(make_item, make_template):
    order = [make_item("P", 10, 10, 8)]
    # 950 * 0.8 leaves 760, less than the 800 ordered
    catalog = [make_template("tight", 10, 10, 9.5), make_template("roomy", 10, 10, 12)]

    selection = select_parcel(catalog, order, expand_units(order), reservation=0.2, template_reservation=0.0)

    assert selection.template.template_id == "roomy"


def test_extent_prefilter_rejects_templates_shorter_than_largest_item(make_item, make_template):
    order = [make_item("rod", 30, 1, 1)]
    catalog = [make_template("flat", 20, 20, 2), make_template("tube", 35, 5, 5)]

    selection = select_parcel(catalog, order, expand_units(order))

    assert selection.template.template_id == "tube"


def test_no_admitted_template_leaves_every_unit(make_item, make_template):
    order = [make_item("P", 10, 10, 10, quantity=2)]
    units = expand_units(order)

    selection = select_parcel([make_template("tiny", 6, 6, 6)], order, units)

    assert selection.template is None
    assert selection.parcel is None
    assert selection.remaining == units


def test_empty_inputs_are_a_no_op(order, catalog):
    assert select_parcel([], order, expand_units(order)).remaining == []
    assert select_parcel(catalog, order, []).parcel is None


def test_malformed_template_geometry(order, make_template):
    catalog = [make_template("broken", "twelve", 12, 6)]

    with pytest.raises(NoFittingDimensions) as excinfo:
        select_parcel(catalog, order, expand_units(order))
    assert isinstance(excinfo.value, MalformedDimensions)


@pytest.mark.parametrize("reservation", [-0.1, 1.0])
def test_reservation_must_be_a_fraction(order, catalog, reservation):
    with pytest.raises(ValueError):
        select_parcel(catalog, order, expand_units(order), reservation=reservation)


def test_selection_is_deterministic(order, catalog):
    first = select_parcel(catalog, order, expand_units(order))
    second = select_parcel(catalog, order, expand_units(order))

    assert first.parcel.to_dict() == second.parcel.to_dict()
