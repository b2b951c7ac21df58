from __future__ import annotations

from compliant_contact.contacts.overlap import Contact
from compliant_contact.errors import UnimplementedAlgorithmError
from compliant_contact.generators.base import ForceContext, ForceGenerator
from compliant_contact.types import NO_CONTACT_TYPE, ContactForce, ContactPatch, ContactTypeId, SpatialVec


class DoNothing(ForceGenerator):
    """Silently produce no force; used to ignore a contact type on purpose."""

    def __init__(self, contact_type_id: ContactTypeId = NO_CONTACT_TYPE) -> None:
        super().__init__(contact_type_id)

    def compute_resultant(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> ContactForce:
        self.check_contact(contact)
        return ContactForce.zero(contact.contact_id)

    def compute_detailed_patch(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> ContactPatch:
        self.check_contact(contact)
        return ContactPatch(resultant=ContactForce.zero(contact.contact_id))


class ThrowError(ForceGenerator):
    """Refuse to respond; used to flag contact types that must not occur."""

    def __init__(self, contact_type_id: ContactTypeId = NO_CONTACT_TYPE) -> None:
        super().__init__(contact_type_id)

    def _refuse(self, contact: Contact, operation: str) -> UnimplementedAlgorithmError:
        return UnimplementedAlgorithmError(
            f"{type(self).__name__}.{operation}() has no algorithm for "
            f"{type(contact).__name__} (type {contact.type_id}, contact {contact.contact_id})"
        )

    def compute_resultant(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> ContactForce:
        raise self._refuse(contact, "compute_resultant")

    def compute_detailed_patch(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> ContactPatch:
        raise self._refuse(contact, "compute_detailed_patch")
