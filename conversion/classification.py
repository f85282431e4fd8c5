"""Actor type to object category and default size."""

from __future__ import annotations

from typing import Dict, Tuple

from contracts import ObjectCategory, PersonalDeviceUserType, Vector3

# Half extents (x, y, z) in meters; a pedestrian is assumed 1 x 1 x 2 m.
PEDESTRIAN_HALF_EXTENTS: Vector3 = (0.5, 0.5, 1.0)
CYCLIST_HALF_EXTENTS: Vector3 = (1.0, 0.5, 1.0)

_CATEGORY_TABLE: Dict[PersonalDeviceUserType, Tuple[ObjectCategory, Vector3]] = {
    PersonalDeviceUserType.PEDESTRIAN: (ObjectCategory.PEDESTRIAN, PEDESTRIAN_HALF_EXTENTS),
    PersonalDeviceUserType.PUBLIC_SAFETY_WORKER: (ObjectCategory.PEDESTRIAN, PEDESTRIAN_HALF_EXTENTS),
    # No animal category exists
    PersonalDeviceUserType.ANIMAL: (ObjectCategory.PEDESTRIAN, PEDESTRIAN_HALF_EXTENTS),
    # No bicycle category exists; a motorcycle is the closest
    PersonalDeviceUserType.PEDALCYCLIST: (ObjectCategory.MOTORCYCLE, CYCLIST_HALF_EXTENTS),
}


def classify(actor_type: int) -> Tuple[ObjectCategory, Vector3]:
    try:
        return _CATEGORY_TABLE[PersonalDeviceUserType(actor_type)]
    except (KeyError, ValueError):
        return ObjectCategory.UNKNOWN, PEDESTRIAN_HALF_EXTENTS
