import pytest
from compliant_contact.contacts import CircularPointContact, ContactMaterial, SphereOnPlaneTracker
from compliant_contact.errors import InvalidStateError
from compliant_contact.state import Stage, State

MATERIAL = ContactMaterial(stiffness=1e7)


def test_sphere_on_plane_reports_only_overlaps() -> None:
    tracker = SphereOnPlaneTracker(spheres={2: 0.1, 1: 0.05}, sphere_material=MATERIAL, ground_material=MATERIAL)
    state = State(n_bodies=3)
    state.set_body_origin(1, [0.0, 0.0, 0.04])
    state.set_body_origin(2, [1.0, 0.0, 0.5])
    with pytest.raises(InvalidStateError):
        tracker.active_contacts(state)
    state.realize(Stage.POSITION)
    contacts = tracker.active_contacts(state)
    assert len(contacts) == 1
    contact = contacts[0]
    assert isinstance(contact, CircularPointContact)
    assert (contact.body1, contact.body2) == (0, 1)
    assert contact.depth == pytest.approx(0.01)
    assert contact.origin[2] == pytest.approx(-0.005)
    assert contact.effective_radius == pytest.approx(0.05)
