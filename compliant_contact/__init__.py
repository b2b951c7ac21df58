"""Compliant contact force generation for multibody simulation."""

from .errors import (
    ConfigurationError,
    ContactForceError,
    InvalidArgumentError,
    InvalidStateError,
    UnimplementedAlgorithmError,
)
from .state import Stage, State
from .subsystem import CompliantContactConfig, CompliantContactSubsystem
from .types import ContactDetail, ContactForce, ContactPatch

__all__ = [
    "CompliantContactConfig",
    "CompliantContactSubsystem",
    "ConfigurationError",
    "ContactDetail",
    "ContactForce",
    "ContactForceError",
    "ContactPatch",
    "InvalidArgumentError",
    "InvalidStateError",
    "Stage",
    "State",
    "UnimplementedAlgorithmError",
]
