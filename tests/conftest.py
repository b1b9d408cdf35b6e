import pytest

from parcelpack.models.line_item import OrderLineItem, ShippingDimensions, Unit
from parcelpack.models.parcel import ParcelTemplate


def _dims(length, width, height, weight, distance_unit="mm", mass_unit="lb"):
    return ShippingDimensions(
        length=str(length),
        width=str(width),
        height=str(height),
        weight=str(weight),
        distance_unit=distance_unit,
        mass_unit=mass_unit,
    )


@pytest.fixture
def make_unit():
    def factory(item_id, length, width, height, name=None):
        return Unit(item_id=item_id, name=name or f"Item {item_id}", length=length, width=width, height=height)

    return factory


@pytest.fixture
def make_item():
    def factory(item_id, length, width, height, weight=1.0, quantity=1, **units):
        return OrderLineItem(
            item_id=item_id,
            name=f"Item {item_id}",
            quantity=quantity,
            dimensions=_dims(length, width, height, weight, **units),
        )

    return factory


@pytest.fixture
def make_template():
    def factory(template_id, length, width, height, weight=0.5, carrier="USPS", **units):
        return ParcelTemplate(
            carrier=carrier,
            template_id=template_id,
            name=template_id.replace("_", " ").title(),
            dimensions=_dims(length, width, height, weight, **units),
        )

    return factory


@pytest.fixture
def three_units(make_unit):
    """Units of volume 192, 50 and 18."""
    return [
        make_unit("001", 8.0, 8.0, 3.0),
        make_unit("002", 5.0, 5.0, 2.0),
        make_unit("003", 3.0, 3.0, 2.0),
    ]


@pytest.fixture
def eight_units(three_units, make_unit):
    return three_units + [make_unit("003", 3.0, 3.0, 2.0) for _ in range(5)]
