from .compliant import CompliantContactConfig, CompliantContactSubsystem
from .energy import DissipatedEnergy
from .registry import GeneratorRegistry

__all__ = [
    "CompliantContactConfig",
    "CompliantContactSubsystem",
    "DissipatedEnergy",
    "GeneratorRegistry",
]
