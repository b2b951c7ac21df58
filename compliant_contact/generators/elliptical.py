from __future__ import annotations

import math

from compliant_contact.contacts.overlap import ELLIPTICAL_POINT_CONTACT, Contact, EllipticalPointContact
from compliant_contact.errors import InvalidArgumentError
from compliant_contact.generators.base import ForceContext, ForceGenerator
from compliant_contact.generators.hertz import PointResponse, point_contact_response
from compliant_contact.types import ContactForce, ContactPatch, SpatialVec


def ellipticity_factors(ratio: float) -> tuple[float, float]:
    """Johnson's correction factors F1 (patch size) and F2 (approach) for R'/R'' >= 1."""
    f1 = 1.0 - (ratio**0.0602 - 1.0) ** 1.456
    f2 = 1.0 - (ratio**0.0684 - 1.0) ** 1.531
    return f1, f2


class HertzElliptical(ForceGenerator):
    """Hertz response for a point contact with two principal curvatures.

    Uses the equivalent radius ``Re = sqrt(R' R'')`` with Johnson's
    approximations; identical to :class:`HertzCircular` when the curvatures
    are equal.
    """

    def __init__(self) -> None:
        super().__init__(ELLIPTICAL_POINT_CONTACT)

    def _respond(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> PointResponse | None:
        self.check_contact(contact, EllipticalPointContact)
        d = contact.depth
        if d <= 0.0:
            return None
        material = contact.combined_material()
        r_major, r_minor = 1.0 / contact.kmin, 1.0 / contact.kmax
        ratio = r_major / r_minor
        re = math.sqrt(r_major * r_minor)
        f1, f2 = ellipticity_factors(ratio)
        if f1 <= 0.0 or f2 <= 0.0:
            raise InvalidArgumentError(f"curvature ratio {ratio:.3g} is outside the elliptical Hertz range")
        elastic = 4.0 / 3.0 * material.stiffness * math.sqrt(re) * (d / f2) ** 1.5
        c = f1 * math.sqrt(re * d / f2)
        a = c * ratio ** (1.0 / 3.0)
        b = c * ratio ** (-1.0 / 3.0)
        return point_contact_response(
            context,
            contact.contact_id,
            contact.origin,
            contact.normal,
            d,
            elastic,
            material,
            velocity1,
            velocity2,
            half_dimensions=(a, b),
            long_axis=contact.frame[:, 0],
        )

    def compute_resultant(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> ContactForce:
        response = self._respond(context, contact, velocity1, velocity2)
        if response is None:
            return ContactForce.zero(contact.contact_id, contact.origin)
        return response.force

    def compute_detailed_patch(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> ContactPatch:
        response = self._respond(context, contact, velocity1, velocity2)
        if response is None:
            return ContactPatch(resultant=ContactForce.zero(contact.contact_id, contact.origin))
        return response.patch()
