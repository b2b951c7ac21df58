from dataclasses import dataclass
from typing import ClassVar

import numpy as np
import pytest
from compliant_contact.contacts import (
    CIRCULAR_POINT_CONTACT,
    ELLIPTICAL_POINT_CONTACT,
    TRIANGLE_MESH_CONTACT,
    CircularPointContact,
    Contact,
    ContactMaterial,
    StaticContactTracker,
    create_contact_type_id,
)
from compliant_contact.errors import (
    ConfigurationError,
    InvalidArgumentError,
    InvalidStateError,
    UnimplementedAlgorithmError,
)
from compliant_contact.generators import DoNothing, ForceContext, ForceGenerator, ThrowError
from compliant_contact.state import Stage, State
from compliant_contact.subsystem import CompliantContactConfig, CompliantContactSubsystem
from compliant_contact.types import ContactForce, ContactPatch, ContactTypeId, SpatialVec, spatial_vec

MATERIAL = ContactMaterial(stiffness=1e7, dissipation=0.4, static_friction=0.6, dynamic_friction=0.4)


def sphere_contact(contact_id: int, depth: float, x: float = 0.0) -> CircularPointContact:
    return CircularPointContact(
        contact_id=contact_id, body1=0, body2=1, material1=MATERIAL, material2=MATERIAL,
        origin=[x, 0.0, 0.0], normal=[0.0, 0.0, 1.0], radius1=0.1, radius2=0.1, depth=depth,
    )


@dataclass(frozen=True, slots=True, eq=False)
class PushContact(Contact):
    type_id: ClassVar[ContactTypeId] = create_contact_type_id()

    push: float


class PushGenerator(ForceGenerator):
    def __init__(self) -> None:
        super().__init__(PushContact.type_id)

    def compute_resultant(
        self, context: ForceContext, contact: Contact, velocity1: SpatialVec, velocity2: SpatialVec
    ) -> ContactForce:
        self.check_contact(contact, PushContact)
        return ContactForce(contact.contact_id, np.zeros(3), spatial_vec(linear=[0.0, 0.0, contact.push]))

    def compute_detailed_patch(
        self, context: ForceContext, contact: Contact, velocity1: SpatialVec, velocity2: SpatialVec
    ) -> ContactPatch:
        return ContactPatch(self.compute_resultant(context, contact, velocity1, velocity2))


def make_system(contacts: list[Contact], **config: float) -> tuple[CompliantContactSubsystem, State]:
    subsystem = CompliantContactSubsystem(StaticContactTracker(contacts), CompliantContactConfig(**config))
    state = State(n_bodies=2, subsystems=[subsystem])
    return subsystem, state


def test_builtin_generators_registered_without_default() -> None:
    subsystem, _ = make_system([])
    for type_id in (CIRCULAR_POINT_CONTACT, ELLIPTICAL_POINT_CONTACT, TRIANGLE_MESH_CONTACT):
        assert subsystem.has_generator(type_id)
        assert subsystem.get_generator(type_id).owner is not None
    assert not subsystem.has_default_generator()
    with pytest.raises(ConfigurationError):
        subsystem.get_default_generator()


def test_realize_velocity_evaluates_in_tracker_order() -> None:
    subsystem, state = make_system([sphere_contact(5, 0.01), sphere_contact(2, 0.0), sphere_contact(9, 0.02)])
    state.realize(Stage.VELOCITY)
    assert subsystem.num_forces == 3
    assert [subsystem.get_force(n).contact_id for n in range(3)] == [5, 2, 9]
    assert subsystem.get_force(2).force[2] > subsystem.get_force(0).force[2] > 0.0
    assert subsystem.evaluate(state) == 3


def test_evaluate_requires_velocity_stage() -> None:
    subsystem, state = make_system([sphere_contact(1, 0.01)])
    state.realize(Stage.POSITION)
    with pytest.raises(InvalidStateError):
        subsystem.evaluate(state)
    with pytest.raises(InvalidStateError):
        subsystem.get_force(0)
    with pytest.raises(InvalidStateError):
        subsystem.compute_all_patch_details(state)


def test_get_force_index_checked() -> None:
    subsystem, state = make_system([sphere_contact(1, 0.01)])
    state.realize(Stage.VELOCITY)
    for bad in (-1, 1):
        with pytest.raises(InvalidArgumentError):
            subsystem.get_force(bad)


def test_forces_go_stale_when_velocities_change() -> None:
    subsystem, state = make_system([sphere_contact(1, 0.01)])
    state.realize(Stage.VELOCITY)
    subsystem.get_force(0)
    state.set_body_velocity(1, spatial_vec(linear=[0.1, 0.0, 0.0]))
    with pytest.raises(InvalidStateError):
        subsystem.get_force(0)
    state.realize(Stage.VELOCITY)
    assert subsystem.get_force(0).force[0] < 0.0


def test_transition_velocity_setting() -> None:
    subsystem, state = make_system([sphere_contact(1, 0.01)], transition_velocity=0.05)
    assert subsystem.transition_velocity == 0.05
    state.realize(Stage.VELOCITY)
    subsystem.transition_velocity = 0.2
    assert subsystem.transition_velocity == 0.2
    assert subsystem.get_force(0).force[2] > 0.0
    for bad in (0.0, -1.0):
        with pytest.raises(InvalidArgumentError):
            subsystem.transition_velocity = bad
    with pytest.raises(InvalidArgumentError):
        CompliantContactConfig(transition_velocity=0.0)


def test_transition_velocity_reaches_friction_law() -> None:
    subsystem, state = make_system([sphere_contact(1, 0.01)], transition_velocity=1.0)
    state.set_body_velocity(1, spatial_vec(linear=[0.01, 0.0, 0.0]))
    state.realize(Stage.VELOCITY)
    slow = abs(subsystem.get_force(0).force[0])
    subsystem.transition_velocity = 0.01
    assert abs(subsystem.get_force(0).force[0]) > slow


def test_acceleration_after_transition_velocity_change_reevaluates() -> None:
    subsystem, state = make_system([sphere_contact(1, 0.01)], transition_velocity=1.0)
    state.set_body_velocity(1, spatial_vec(linear=[0.01, 0.0, 0.0]))
    state.realize(Stage.VELOCITY)
    slow = subsystem.get_dissipation_rate(state)
    subsystem.transition_velocity = 0.01
    state.realize(Stage.ACCELERATION)
    rate = subsystem.get_dissipation_rate(state)
    assert rate > slow
    assert state.get_zdot(0) == pytest.approx(rate)


def test_published_rate_follows_transition_velocity_change() -> None:
    subsystem, state = make_system([sphere_contact(1, 0.01)], transition_velocity=1.0)
    state.set_body_velocity(1, spatial_vec(linear=[0.01, 0.0, 0.0]))
    state.realize(Stage.ACCELERATION)
    slow = state.get_zdot(0)
    subsystem.transition_velocity = 0.01
    assert subsystem.get_dissipation_rate(state) > slow
    assert state.get_zdot(0) == pytest.approx(subsystem.get_dissipation_rate(state))


def test_unknown_type_needs_default() -> None:
    push = PushContact(contact_id=1, body1=0, body2=1, material1=MATERIAL, material2=MATERIAL, push=3.0)
    subsystem, state = make_system([push])
    with pytest.raises(ConfigurationError):
        state.realize(Stage.VELOCITY)
    subsystem.register_default_generator(DoNothing())
    state.realize(Stage.VELOCITY)
    assert subsystem.get_force(0).force[2] == 0.0


def test_new_contact_type_dispatches_to_registered_generator() -> None:
    push = PushContact(contact_id=1, body1=0, body2=1, material1=MATERIAL, material2=MATERIAL, push=3.0)
    subsystem, state = make_system([sphere_contact(0, 0.01), push])
    subsystem.register_generator(PushContact.type_id, PushGenerator())
    state.realize(Stage.VELOCITY)
    assert subsystem.get_force(1).force[2] == 3.0
    patches = subsystem.compute_all_patch_details(state)
    assert [p.resultant.contact_id for p in patches] == [0, 1]
    assert len(patches[0].elements) == 1


def test_replacing_generator_changes_behavior() -> None:
    subsystem, state = make_system([sphere_contact(1, 0.01)])
    previous = subsystem.get_generator(CIRCULAR_POINT_CONTACT)
    state.realize(Stage.VELOCITY)
    assert subsystem.get_force(0).force[2] > 0.0
    subsystem.register_generator(CIRCULAR_POINT_CONTACT, DoNothing(CIRCULAR_POINT_CONTACT))
    assert previous.owner is None
    assert np.all(subsystem.get_force(0).force_on_surface2 == 0.0)
    state.realize(Stage.ACCELERATION)
    assert subsystem.get_dissipation_rate(state) == 0.0


def test_fatal_generator_stops_evaluation() -> None:
    subsystem, state = make_system([sphere_contact(1, 0.01)])
    subsystem.register_generator(CIRCULAR_POINT_CONTACT, ThrowError(CIRCULAR_POINT_CONTACT))
    with pytest.raises(UnimplementedAlgorithmError):
        state.realize(Stage.VELOCITY)
    assert state.stage == Stage.POSITION
    with pytest.raises(InvalidStateError):
        subsystem.get_force(0)


def test_potential_energy_needs_positions_only() -> None:
    subsystem, state = make_system([sphere_contact(1, 0.01), sphere_contact(2, 0.005, x=1.0)])
    state.set_body_velocity(1, spatial_vec(linear=[0.0, 0.0, -0.5]))
    state.realize(Stage.POSITION)
    pe = subsystem.get_potential_energy(state)
    state.realize(Stage.VELOCITY)
    assert pe == pytest.approx(sum(subsystem.get_force(n).potential_energy for n in range(2)))


def test_acceleration_publishes_dissipation_rate() -> None:
    subsystem, state = make_system([sphere_contact(1, 0.01)])
    state.set_body_velocity(1, spatial_vec(linear=[0.2, 0.0, -0.1]))
    state.realize(Stage.ACCELERATION)
    rate = subsystem.get_dissipation_rate(state)
    assert rate > 0.0
    assert state.get_zdot(0) == pytest.approx(rate)
    other = State(n_bodies=2)
    other.realize(Stage.VELOCITY)
    with pytest.raises(InvalidStateError):
        subsystem.get_dissipation_rate(other)
