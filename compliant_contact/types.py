from __future__ import annotations

from dataclasses import dataclass, field
from typing import NewType

import numpy as np
from numpy.typing import NDArray

ArrayF = NDArray[np.float64]

# Spatial vectors are (angular, linear): velocities (w, v), forces (moment, force).
SpatialVec = ArrayF

ContactTypeId = NewType("ContactTypeId", int)

NO_CONTACT_TYPE = ContactTypeId(0)


def spatial_vec(angular: ArrayF | None = None, linear: ArrayF | None = None) -> SpatialVec:
    out = np.zeros(6)
    if angular is not None:
        out[:3] = angular
    if linear is not None:
        out[3:] = linear
    return out


@dataclass(slots=True)
class Frame:
    origin: ArrayF
    rotation: ArrayF = field(default_factory=lambda: np.eye(3))

    @property
    def normal(self) -> ArrayF:
        return self.rotation[:, 2]

    def to_local(self, vec: ArrayF) -> ArrayF:
        return self.rotation.T @ vec

    def to_ground(self, vec: ArrayF) -> ArrayF:
        return self.rotation @ vec


@dataclass(frozen=True, slots=True, eq=False)
class ContactForce:
    """Resultant of one contact, applied at the center of pressure.

    ``force_on_surface2`` is a ground-frame spatial force acting on surface 2
    at ``center_of_pressure``; surface 1 receives its negative.
    """

    contact_id: int | None
    center_of_pressure: ArrayF
    force_on_surface2: SpatialVec
    potential_energy: float = 0.0
    power: float = 0.0

    @classmethod
    def zero(cls, contact_id: int | None, point: ArrayF | None = None) -> ContactForce:
        p = np.zeros(3) if point is None else np.asarray(point, dtype=float)
        return cls(contact_id=contact_id, center_of_pressure=p, force_on_surface2=np.zeros(6))

    @property
    def moment(self) -> ArrayF:
        return self.force_on_surface2[:3]

    @property
    def force(self) -> ArrayF:
        return self.force_on_surface2[3:]

    def is_valid(self) -> bool:
        return self.contact_id is not None

    def about(self, point: ArrayF) -> SpatialVec:
        """Return the same spatial force with its moment taken about ``point``."""
        lever = self.center_of_pressure - np.asarray(point, dtype=float)
        return spatial_vec(self.moment + np.cross(lever, self.force), self.force)

    def __str__(self) -> str:
        return (
            f"ContactForce(contact_id={self.contact_id}, "
            f"cop={np.array2string(self.center_of_pressure)}, "
            f"force={np.array2string(self.force_on_surface2)}, "
            f"pe={self.potential_energy:.6g}, power={self.power:.6g})"
        )


@dataclass(slots=True)
class ContactDetail:
    """One element of a contact patch.

    The local frame has z pointing from surface 1 toward surface 2; x is the
    long patch direction where that makes sense. ``force_on_surface2`` is
    expressed in the local frame and applied at its origin.
    """

    element_id: int
    frame: Frame
    half_dimensions: tuple[float, float]
    deformations: tuple[float, float]
    deformation_rates: tuple[float, float]
    force_on_surface2: SpatialVec
    potential_energy: float = 0.0
    power: float = 0.0

    def force_in_ground(self) -> SpatialVec:
        return spatial_vec(
            self.frame.to_ground(self.force_on_surface2[:3]),
            self.frame.to_ground(self.force_on_surface2[3:]),
        )


@dataclass(slots=True)
class ContactPatch:
    resultant: ContactForce
    elements: list[ContactDetail] = field(default_factory=list)

    def element_resultant(self, point: ArrayF) -> SpatialVec:
        """Sum the element forces with moments taken about ``point``."""
        total = np.zeros(6)
        p = np.asarray(point, dtype=float)
        for element in self.elements:
            f = element.force_in_ground()
            lever = element.frame.origin - p
            total[:3] += f[:3] + np.cross(lever, f[3:])
            total[3:] += f[3:]
        return total
