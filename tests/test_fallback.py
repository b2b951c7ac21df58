import numpy as np
import pytest
from compliant_contact.contacts import CircularPointContact, ContactMaterial
from compliant_contact.errors import InvalidArgumentError, UnimplementedAlgorithmError
from compliant_contact.generators import DoNothing, ForceContext, ThrowError
from compliant_contact.state import State
from compliant_contact.types import ContactTypeId

MATERIAL = ContactMaterial(stiffness=1e7)
CONTACT = CircularPointContact(
    contact_id=4, body1=0, body2=1, material1=MATERIAL, material2=MATERIAL,
    origin=np.zeros(3), normal=[0.0, 0.0, 1.0], radius1=0.1, radius2=0.1, depth=0.01,
)
CONTEXT = ForceContext(state=State(), transition_velocity=0.01)
STILL = np.zeros(6)


def test_do_nothing_returns_inert_record() -> None:
    gen = DoNothing()
    f = gen.compute_resultant(CONTEXT, CONTACT, STILL, STILL)
    assert f.is_valid()
    assert f.contact_id == 4
    assert np.all(f.force_on_surface2 == 0.0)
    assert f.potential_energy == 0.0
    assert f.power == 0.0
    patch = gen.compute_detailed_patch(CONTEXT, CONTACT, STILL, STILL)
    assert patch.elements == []
    assert patch.resultant.contact_id == 4


def test_throw_error_always_fails() -> None:
    gen = ThrowError()
    with pytest.raises(UnimplementedAlgorithmError, match="compute_resultant"):
        gen.compute_resultant(CONTEXT, CONTACT, STILL, STILL)
    with pytest.raises(UnimplementedAlgorithmError, match="compute_detailed_patch"):
        gen.compute_detailed_patch(CONTEXT, CONTACT, STILL, STILL)
    with pytest.raises(NotImplementedError):
        gen.compute_resultant(CONTEXT, CONTACT, STILL, STILL)


def test_typed_fallback_checks_contact_type() -> None:
    gen = DoNothing(ContactTypeId(99))
    with pytest.raises(InvalidArgumentError):
        gen.compute_resultant(CONTEXT, CONTACT, STILL, STILL)
