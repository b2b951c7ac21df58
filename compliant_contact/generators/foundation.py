from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from compliant_contact.contacts.overlap import TRIANGLE_MESH_CONTACT, Contact, TriangleMeshContact
from compliant_contact.generators.base import ForceContext, ForceGenerator
from compliant_contact.generators.friction import friction_force
from compliant_contact.geometry import center_of_pressure, frame_from_normal, station_velocity
from compliant_contact.types import ArrayF, ContactDetail, ContactForce, ContactPatch, SpatialVec, spatial_vec


@dataclass(slots=True)
class FaceResponse:
    s1: float
    face_ids: np.ndarray
    points: ArrayF
    normals: ArrayF
    areas: ArrayF
    depths: ArrayF
    depth_rates: ArrayF
    normal_forces: ArrayF
    forces: ArrayF
    potential_energy: ArrayF
    power: ArrayF


class ElasticFoundation(ForceGenerator):
    """Elastic foundation response for a triangle mesh overlapping another surface.

    Every overlapping face is an independent linear spring of stiffness
    ``k A / h`` (layer thickness ``h``) with Hunt-Crossley damping and
    regularized friction. The resultant sums the faces about the center of
    pressure of their normal forces.
    """

    def __init__(self) -> None:
        super().__init__(TRIANGLE_MESH_CONTACT)

    def _faces(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> FaceResponse:
        self.check_contact(contact, TriangleMeshContact)
        material = contact.combined_material()
        keep = contact.depths > 0.0
        depths = contact.depths[keep]
        normals = contact.normals[keep]
        areas = contact.areas[keep]

        points = contact.centroids[keep] - (material.s1 * depths)[:, None] * normals
        v_rel = station_velocity(velocity2, points) - station_velocity(velocity1, points)
        vn = np.einsum("ij,ij->i", v_rel, normals)
        depth_rate = -vn

        elastic = material.stiffness / contact.thickness * areas * depths
        damping = 1.5 * material.dissipation * elastic * depth_rate
        fn = elastic + damping
        # yanked faces push nothing back
        pulling = fn <= 0.0
        fn = np.where(pulling, 0.0, fn)
        damping = np.where(pulling, 0.0, damping)

        slip = v_rel - vn[:, None] * normals
        ft, friction_power = friction_force(fn, slip, material, context.transition_velocity)
        normal_forces = fn[:, None] * normals
        return FaceResponse(
            s1=material.s1,
            face_ids=contact.face_ids[keep],
            points=points,
            normals=normals,
            areas=areas,
            depths=depths,
            depth_rates=depth_rate,
            normal_forces=normal_forces,
            forces=normal_forces + ft,
            potential_energy=0.5 * elastic * depths,
            power=damping * depth_rate + friction_power,
        )

    def _resultant(self, contact: Contact, faces: FaceResponse) -> ContactForce:
        if len(faces.depths) == 0:
            return ContactForce.zero(contact.contact_id)
        cop = center_of_pressure(faces.points, faces.normal_forces)
        moment = np.sum(np.cross(faces.points - cop, faces.forces), axis=0)
        return ContactForce(
            contact_id=contact.contact_id,
            center_of_pressure=cop,
            force_on_surface2=spatial_vec(moment, np.sum(faces.forces, axis=0)),
            potential_energy=float(np.sum(faces.potential_energy)),
            power=float(np.sum(faces.power)),
        )

    def compute_resultant(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> ContactForce:
        return self._resultant(contact, self._faces(context, contact, velocity1, velocity2))

    def compute_detailed_patch(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> ContactPatch:
        faces = self._faces(context, contact, velocity1, velocity2)
        s1, s2 = faces.s1, 1.0 - faces.s1
        elements: list[ContactDetail] = []
        for i, face_id in enumerate(faces.face_ids):
            frame = frame_from_normal(faces.points[i], faces.normals[i])
            half = 0.5 * float(np.sqrt(faces.areas[i]))
            d, rate = float(faces.depths[i]), float(faces.depth_rates[i])
            elements.append(
                ContactDetail(
                    element_id=int(face_id),
                    frame=frame,
                    half_dimensions=(half, half),
                    deformations=(s1 * d, s2 * d),
                    deformation_rates=(s1 * rate, s2 * rate),
                    force_on_surface2=spatial_vec(np.zeros(3), frame.to_local(faces.forces[i])),
                    potential_energy=float(faces.potential_energy[i]),
                    power=float(faces.power[i]),
                )
            )
        return ContactPatch(resultant=self._resultant(contact, faces), elements=elements)
