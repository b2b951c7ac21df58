from .base import ForceContext, ForceGenerator
from .elliptical import HertzElliptical
from .fallback import DoNothing, ThrowError
from .foundation import ElasticFoundation
from .friction import friction_force, stribeck
from .hertz import HertzCircular

__all__ = [
    "DoNothing",
    "ElasticFoundation",
    "ForceContext",
    "ForceGenerator",
    "HertzCircular",
    "HertzElliptical",
    "ThrowError",
    "friction_force",
    "stribeck",
]
