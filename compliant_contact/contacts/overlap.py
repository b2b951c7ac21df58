from __future__ import annotations

import itertools
import math
from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from compliant_contact.contacts.material import CombinedMaterial, ContactMaterial
from compliant_contact.errors import InvalidArgumentError
from compliant_contact.types import NO_CONTACT_TYPE, ArrayF, ContactTypeId

CIRCULAR_POINT_CONTACT = ContactTypeId(1)
ELLIPTICAL_POINT_CONTACT = ContactTypeId(2)
TRIANGLE_MESH_CONTACT = ContactTypeId(3)

_next_type_id = itertools.count(TRIANGLE_MESH_CONTACT + 1)


def create_contact_type_id() -> ContactTypeId:
    """Reserve an id for a contact kind defined outside this package."""
    return ContactTypeId(next(_next_type_id))


def _unit(vec: ArrayF, what: str) -> ArrayF:
    v = np.asarray(vec, dtype=float)
    n = float(np.linalg.norm(v))
    if n == 0.0:
        raise InvalidArgumentError(f"{what} must be nonzero")
    return v / n


@dataclass(frozen=True, slots=True, eq=False)
class Contact:
    """Overlap between undeformed surfaces on ``body1`` and ``body2``.

    Produced by a contact tracker; carries geometry only, never forces.
    """

    type_id: ClassVar[ContactTypeId] = NO_CONTACT_TYPE

    contact_id: int
    body1: int
    body2: int
    material1: ContactMaterial
    material2: ContactMaterial

    def combined_material(self) -> CombinedMaterial:
        return CombinedMaterial.of(self.material1, self.material2)


@dataclass(frozen=True, slots=True, eq=False)
class CircularPointContact(Contact):
    type_id: ClassVar[ContactTypeId] = CIRCULAR_POINT_CONTACT

    origin: ArrayF
    normal: ArrayF
    radius1: float
    radius2: float
    depth: float

    def __post_init__(self) -> None:
        if self.radius1 <= 0.0 or self.radius2 <= 0.0:
            raise InvalidArgumentError("surface radii must be positive")
        if math.isinf(self.radius1) and math.isinf(self.radius2):
            raise InvalidArgumentError("two planes do not make a point contact")
        object.__setattr__(self, "origin", np.asarray(self.origin, dtype=float))
        object.__setattr__(self, "normal", _unit(self.normal, "contact normal"))

    @property
    def effective_radius(self) -> float:
        if math.isinf(self.radius1):
            return self.radius2
        if math.isinf(self.radius2):
            return self.radius1
        return self.radius1 * self.radius2 / (self.radius1 + self.radius2)


@dataclass(frozen=True, slots=True, eq=False)
class EllipticalPointContact(Contact):
    """Point contact with distinct relative principal curvatures.

    Column 0 of ``frame`` is the direction of least curvature ``kmin``,
    column 2 is the normal from surface 1 toward surface 2.
    """

    type_id: ClassVar[ContactTypeId] = ELLIPTICAL_POINT_CONTACT

    origin: ArrayF
    frame: ArrayF
    kmax: float
    kmin: float
    depth: float

    def __post_init__(self) -> None:
        if not self.kmax >= self.kmin > 0.0:
            raise InvalidArgumentError(
                f"curvatures must satisfy kmax >= kmin > 0, got {self.kmax}, {self.kmin}"
            )
        rot = np.asarray(self.frame, dtype=float)
        if rot.shape != (3, 3) or not np.allclose(rot.T @ rot, np.eye(3), atol=1e-9):
            raise InvalidArgumentError("frame must be a 3x3 rotation matrix")
        object.__setattr__(self, "origin", np.asarray(self.origin, dtype=float))
        object.__setattr__(self, "frame", rot)

    @property
    def normal(self) -> ArrayF:
        return self.frame[:, 2]


@dataclass(frozen=True, slots=True, eq=False)
class TriangleMeshContact(Contact):
    """Mesh surface (surface 1) overlapping another surface.

    One row per mesh face currently overlapping: face centroid on the
    undeformed mesh, outward normal, area and penetration depth of surface 2.
    """

    type_id: ClassVar[ContactTypeId] = TRIANGLE_MESH_CONTACT

    face_ids: np.ndarray
    centroids: ArrayF
    normals: ArrayF
    areas: ArrayF
    depths: ArrayF
    thickness: float

    def __post_init__(self) -> None:
        if self.thickness <= 0.0:
            raise InvalidArgumentError(f"elastic layer thickness must be positive, got {self.thickness}")
        centroids = np.asarray(self.centroids, dtype=float).reshape(-1, 3)
        normals = np.asarray(self.normals, dtype=float).reshape(-1, 3)
        areas = np.asarray(self.areas, dtype=float).reshape(-1)
        depths = np.asarray(self.depths, dtype=float).reshape(-1)
        face_ids = np.asarray(self.face_ids, dtype=np.int64).reshape(-1)
        n = len(centroids)
        if not len(normals) == len(areas) == len(depths) == len(face_ids) == n:
            raise InvalidArgumentError("mesh contact arrays must have one row per face")
        lengths = np.linalg.norm(normals, axis=1)
        if np.any(lengths == 0.0):
            raise InvalidArgumentError("face normals must be nonzero")
        object.__setattr__(self, "face_ids", face_ids)
        object.__setattr__(self, "centroids", centroids)
        object.__setattr__(self, "normals", normals / lengths[:, None])
        object.__setattr__(self, "areas", areas)
        object.__setattr__(self, "depths", depths)

    @property
    def n_faces(self) -> int:
        return len(self.face_ids)
