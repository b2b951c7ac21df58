from __future__ import annotations

import numpy as np

from compliant_contact.contacts.material import CombinedMaterial
from compliant_contact.types import ArrayF


def stribeck(us: float, ud: float, uv: float, v: ArrayF | float) -> ArrayF | float:
    """Friction coefficient at slip speed ``v`` measured in transition velocities.

    Rises smoothly from zero, peaks at ``us`` when v = 1 and settles to
    ``ud``, plus a viscous ``uv * v`` term.
    """
    v = np.asarray(v, dtype=float)
    mu = np.minimum(v, 1.0) * (ud + 2.0 * (us - ud) / (1.0 + v * v)) + uv * v
    return mu if mu.ndim else float(mu)


def friction_force(
    normal_force: ArrayF | float,
    slip_velocity: ArrayF,
    material: CombinedMaterial,
    transition_velocity: float,
) -> tuple[ArrayF, ArrayF | float]:
    """Regularized friction on surface 2 and the power it dissipates.

    Works on a single slip vector of shape (3,) or a stack of shape (n, 3)
    with matching normal forces.
    """
    slip = np.asarray(slip_velocity, dtype=float)
    fn = np.asarray(normal_force, dtype=float)
    speed = np.linalg.norm(slip, axis=-1)
    mu = np.asarray(
        stribeck(
            material.static_friction,
            material.dynamic_friction,
            material.viscous_friction,
            speed / transition_velocity,
        )
    )
    magnitude = mu * fn
    with np.errstate(invalid="ignore", divide="ignore"):
        scale = np.where(speed > 0.0, magnitude / speed, 0.0)
    force = -scale[..., None] * slip
    power = magnitude * speed
    return force, (power if power.ndim else float(power))
