import pytest

from contracts import ObjectCategory, PersonalDeviceUserType
from conversion.classification import classify


@pytest.mark.parametrize(
    "actor_type",
    [PersonalDeviceUserType.PEDESTRIAN, PersonalDeviceUserType.PUBLIC_SAFETY_WORKER, PersonalDeviceUserType.ANIMAL],
)
def test_pedestrian_like_types(actor_type) -> None:
    assert classify(actor_type) == (ObjectCategory.PEDESTRIAN, (0.5, 0.5, 1.0))


def test_cyclist_maps_to_motorcycle() -> None:
    assert classify(PersonalDeviceUserType.PEDALCYCLIST) == (ObjectCategory.MOTORCYCLE, (1.0, 0.5, 1.0))


@pytest.mark.parametrize("actor_type", [PersonalDeviceUserType.UNAVAILABLE, 0, 17, -3])
def test_other_types_are_unknown(actor_type) -> None:
    assert classify(actor_type) == (ObjectCategory.UNKNOWN, (0.5, 0.5, 1.0))


def test_package_exports_resolve() -> None:
    import contracts
    import conversion

    for module in (contracts, conversion):
        for name in module.__all__:
            assert hasattr(module, name), name
    assert conversion.classify is classify
    assert contracts.Vector3 is contracts.types.Vector3
