from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Protocol

from compliant_contact.contacts.material import ContactMaterial
from compliant_contact.contacts.overlap import CircularPointContact, Contact
from compliant_contact.state import Stage, State


class ContactTracker(Protocol):
    def active_contacts(self, state: State) -> list[Contact]:
        """Return the overlaps active in ``state``, in a stable order."""


@dataclass(slots=True)
class StaticContactTracker:
    contacts: list[Contact] = field(default_factory=list)

    def active_contacts(self, state: State) -> list[Contact]:
        return list(self.contacts)


@dataclass(slots=True)
class SphereOnPlaneTracker:
    """Spheres on bodies ``spheres[i]`` against the ground plane z = 0.

    The ground is body 0 and is surface 1 of every contact it reports.
    """

    spheres: dict[int, float]
    sphere_material: ContactMaterial
    ground_material: ContactMaterial

    def active_contacts(self, state: State) -> list[Contact]:
        state.require(Stage.POSITION, "tracking sphere contacts")
        contacts: list[Contact] = []
        for body, radius in sorted(self.spheres.items()):
            center = state.body_origin(body)
            depth = radius - float(center[2])
            if depth <= 0.0:
                continue
            origin = center.copy()
            origin[2] = -0.5 * depth
            contacts.append(
                CircularPointContact(
                    contact_id=body,
                    body1=0,
                    body2=body,
                    material1=self.ground_material,
                    material2=self.sphere_material,
                    origin=origin,
                    normal=[0.0, 0.0, 1.0],
                    radius1=math.inf,
                    radius2=radius,
                    depth=depth,
                )
            )
        return contacts
