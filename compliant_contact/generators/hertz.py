from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from compliant_contact.contacts.material import CombinedMaterial
from compliant_contact.contacts.overlap import CIRCULAR_POINT_CONTACT, CircularPointContact, Contact
from compliant_contact.generators.base import ForceContext, ForceGenerator
from compliant_contact.generators.friction import friction_force
from compliant_contact.geometry import center_of_pressure, frame_from_normal, station_velocity
from compliant_contact.types import ArrayF, ContactDetail, ContactForce, ContactPatch, Frame, SpatialVec, spatial_vec

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PointResponse:
    force: ContactForce
    frame: Frame
    half_dimensions: tuple[float, float]
    deformations: tuple[float, float]
    deformation_rates: tuple[float, float]

    def patch(self) -> ContactPatch:
        f = self.force.force_on_surface2
        local = spatial_vec(self.frame.to_local(f[:3]), self.frame.to_local(f[3:]))
        detail = ContactDetail(
            element_id=0,
            frame=self.frame,
            half_dimensions=self.half_dimensions,
            deformations=self.deformations,
            deformation_rates=self.deformation_rates,
            force_on_surface2=local,
            potential_energy=self.force.potential_energy,
            power=self.force.power,
        )
        return ContactPatch(resultant=self.force, elements=[detail])


def point_contact_response(
    context: ForceContext,
    contact_id: int,
    origin: ArrayF,
    normal: ArrayF,
    depth: float,
    elastic_force: float,
    material: CombinedMaterial,
    velocity1: SpatialVec,
    velocity2: SpatialVec,
    half_dimensions: tuple[float, float],
    long_axis: ArrayF | None = None,
) -> PointResponse:
    """Hunt-Crossley normal force plus regularized friction at a single point.

    ``elastic_force`` is the conservative Hertz term for ``depth``; its
    potential energy is 2/5 of ``elastic_force * depth`` for any law that
    grows with depth**1.5.
    """
    s1, s2 = material.s1, material.s2
    point = origin + (0.5 - s1) * depth * normal
    v_rel = station_velocity(velocity2, point) - station_velocity(velocity1, point)
    vn = float(v_rel @ normal)
    depth_rate = -vn
    potential_energy = 0.4 * elastic_force * depth

    damping_force = 1.5 * material.dissipation * elastic_force * depth_rate
    fn = elastic_force + damping_force
    slip = v_rel - vn * normal
    frame = frame_from_normal(point, normal, long_axis if long_axis is not None else slip)
    deformations = (s1 * depth, s2 * depth)
    rates = (s1 * depth_rate, s2 * depth_rate)

    if fn <= 0.0:
        # Surfaces are being pulled apart faster than they can relax; the
        # stored energy is lost to unmodeled vibration rather than returned.
        logger.debug(f"contact {contact_id} yanked apart at depth rate {depth_rate:.3e}")
        force = ContactForce(
            contact_id=contact_id,
            center_of_pressure=point,
            force_on_surface2=np.zeros(6),
            potential_energy=potential_energy,
            power=0.0,
        )
        return PointResponse(force, frame, half_dimensions, deformations, rates)

    ft, friction_power = friction_force(fn, slip, material, context.transition_velocity)
    force_vec = fn * normal + ft
    force = ContactForce(
        contact_id=contact_id,
        center_of_pressure=center_of_pressure(point, fn * normal),
        force_on_surface2=spatial_vec(np.zeros(3), force_vec),
        potential_energy=potential_energy,
        power=damping_force * depth_rate + friction_power,
    )
    return PointResponse(force, frame, half_dimensions, deformations, rates)


class HertzCircular(ForceGenerator):
    """Hertz response for smooth non-conforming surfaces meeting at a point.

    Normal force is ``4/3 k a d`` with patch radius ``a = sqrt(R d)``, scaled by
    ``(1 + 3/2 c ddot)`` for Hunt-Crossley dissipation.
    """

    def __init__(self) -> None:
        super().__init__(CIRCULAR_POINT_CONTACT)

    def _respond(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> PointResponse | None:
        self.check_contact(contact, CircularPointContact)
        d = contact.depth
        if d <= 0.0:
            return None
        material = contact.combined_material()
        a = math.sqrt(contact.effective_radius * d)
        elastic = 4.0 / 3.0 * material.stiffness * a * d
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
            half_dimensions=(a, a),
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
