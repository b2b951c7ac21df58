from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from compliant_contact.contacts.overlap import Contact
from compliant_contact.errors import InvalidArgumentError
from compliant_contact.state import State
from compliant_contact.types import NO_CONTACT_TYPE, ContactForce, ContactPatch, ContactTypeId, SpatialVec

if TYPE_CHECKING:
    from compliant_contact.subsystem.registry import GeneratorRegistry


@dataclass(frozen=True, slots=True)
class ForceContext:
    """Instance information a generator may use besides its explicit arguments."""

    state: State
    transition_velocity: float


class ForceGenerator(ABC):
    """Algorithm producing the response to one kind of contact.

    Implementations must not read positions or velocities from the state:
    positions come from the contact, velocities are passed explicitly so the
    same call serves velocity-free queries such as potential energy. They
    hold no per-call mutable state.
    """

    def __init__(self, contact_type_id: ContactTypeId) -> None:
        self._contact_type_id = contact_type_id
        self._owner: GeneratorRegistry | None = None

    @property
    def contact_type_id(self) -> ContactTypeId:
        return self._contact_type_id

    @property
    def owner(self) -> GeneratorRegistry | None:
        return self._owner

    def attach(self, owner: GeneratorRegistry) -> None:
        if self._owner is not None:
            raise InvalidArgumentError(
                f"{type(self).__name__} is already owned; register a fresh instance instead"
            )
        self._owner = owner

    def detach(self) -> None:
        self._owner = None

    def check_contact(self, contact: Contact, expected: type[Contact] | None = None) -> None:
        # Fallback generators (type 0) accept any contact.
        if self._contact_type_id != NO_CONTACT_TYPE and contact.type_id != self._contact_type_id:
            raise InvalidArgumentError(
                f"{type(self).__name__} handles contact type {self._contact_type_id}, "
                f"got {type(contact).__name__} (type {contact.type_id})"
            )
        if expected is not None and not isinstance(contact, expected):
            raise InvalidArgumentError(
                f"{type(self).__name__} needs a {expected.__name__}, got {type(contact).__name__}"
            )

    @abstractmethod
    def compute_resultant(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> ContactForce:
        """Cheap per-step resultant force, potential energy and power."""

    @abstractmethod
    def compute_detailed_patch(
        self,
        context: ForceContext,
        contact: Contact,
        velocity1: SpatialVec,
        velocity2: SpatialVec,
    ) -> ContactPatch:
        """Resultant plus per-element patch details; may be expensive."""
