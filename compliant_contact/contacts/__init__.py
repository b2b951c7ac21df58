from .material import CombinedMaterial, ContactMaterial
from .overlap import (
    CIRCULAR_POINT_CONTACT,
    ELLIPTICAL_POINT_CONTACT,
    TRIANGLE_MESH_CONTACT,
    CircularPointContact,
    Contact,
    EllipticalPointContact,
    TriangleMeshContact,
    create_contact_type_id,
)
from .tracker import ContactTracker, SphereOnPlaneTracker, StaticContactTracker

__all__ = [
    "CIRCULAR_POINT_CONTACT",
    "ELLIPTICAL_POINT_CONTACT",
    "TRIANGLE_MESH_CONTACT",
    "CircularPointContact",
    "CombinedMaterial",
    "Contact",
    "ContactMaterial",
    "ContactTracker",
    "EllipticalPointContact",
    "SphereOnPlaneTracker",
    "StaticContactTracker",
    "TriangleMeshContact",
    "create_contact_type_id",
]
