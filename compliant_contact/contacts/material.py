from __future__ import annotations

import math
from dataclasses import dataclass

from compliant_contact.errors import InvalidArgumentError


def _combine_friction(a: float, b: float) -> float:
    return 0.0 if a + b == 0.0 else 2.0 * a * b / (a + b)


@dataclass(slots=True)
class ContactMaterial:
    stiffness: float
    dissipation: float = 0.0
    static_friction: float = 0.0
    dynamic_friction: float = 0.0
    viscous_friction: float = 0.0

    def __post_init__(self) -> None:
        if not (self.stiffness > 0.0 and math.isfinite(self.stiffness)):
            raise InvalidArgumentError(f"stiffness must be positive and finite, got {self.stiffness}")
        for name in ("dissipation", "static_friction", "dynamic_friction", "viscous_friction"):
            if getattr(self, name) < 0.0:
                raise InvalidArgumentError(f"{name} must be nonnegative, got {getattr(self, name)}")
        self.static_friction = max(self.static_friction, self.dynamic_friction)

    @classmethod
    def from_elastic(
        cls,
        youngs_modulus: float,
        poisson_ratio: float,
        dissipation: float = 0.0,
        static_friction: float = 0.0,
        dynamic_friction: float = 0.0,
        viscous_friction: float = 0.0,
    ) -> ContactMaterial:
        if not 0.0 <= poisson_ratio < 0.5:
            raise InvalidArgumentError(f"Poisson's ratio must lie in [0, 0.5), got {poisson_ratio}")
        return cls(
            stiffness=youngs_modulus / (1.0 - poisson_ratio**2),
            dissipation=dissipation,
            static_friction=static_friction,
            dynamic_friction=dynamic_friction,
            viscous_friction=viscous_friction,
        )


@dataclass(frozen=True, slots=True)
class CombinedMaterial:
    """Material seen by a surface pair.

    ``s1`` is the fraction of the total deformation taken by surface 1.
    """

    s1: float
    stiffness: float
    dissipation: float
    static_friction: float
    dynamic_friction: float
    viscous_friction: float

    @property
    def s2(self) -> float:
        return 1.0 - self.s1

    @classmethod
    def of(cls, m1: ContactMaterial, m2: ContactMaterial) -> CombinedMaterial:
        s1 = m2.stiffness / (m1.stiffness + m2.stiffness)
        s2 = 1.0 - s1
        return cls(
            s1=s1,
            stiffness=m1.stiffness * s1,
            dissipation=m1.dissipation * s1 + m2.dissipation * s2,
            static_friction=_combine_friction(m1.static_friction, m2.static_friction),
            dynamic_friction=_combine_friction(m1.dynamic_friction, m2.dynamic_friction),
            viscous_friction=_combine_friction(m1.viscous_friction, m2.viscous_friction),
        )
