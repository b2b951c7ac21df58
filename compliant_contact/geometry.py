from __future__ import annotations

import numpy as np

from compliant_contact.types import ArrayF, Frame, SpatialVec


def station_velocity(velocity: SpatialVec, point: ArrayF) -> ArrayF:
    """Velocity of ground-frame point(s) fixed to a surface moving at ``velocity``.

    ``velocity`` must have its linear part taken at the ground origin.
    """
    return velocity[3:] + np.cross(velocity[:3], point)


def center_of_pressure(points: ArrayF, normal_forces: ArrayF) -> ArrayF:
    """Weighted location sum(r_i |r_i x Fn_i|) / sum |r_i x Fn_i|.

    Friction and pure moments do not take part. If every moment weight
    vanishes the normal force magnitudes are used instead, and if those
    vanish too the plain centroid is returned.
    """
    r = np.asarray(points, dtype=float).reshape(-1, 3)
    fn = np.asarray(normal_forces, dtype=float).reshape(-1, 3)
    if len(r) == 0:
        return np.zeros(3)
    for weights in (
        np.linalg.norm(np.cross(r, fn), axis=1),
        np.linalg.norm(fn, axis=1),
    ):
        total = float(np.sum(weights))
        if total > np.finfo(float).tiny:
            return weights @ r / total
    return np.mean(r, axis=0)


def tangent_basis(normal: ArrayF, x_hint: ArrayF | None = None) -> ArrayF:
    """Rotation whose z column is ``normal``; x follows ``x_hint`` when usable."""
    z = normal / np.linalg.norm(normal)
    x = None
    if x_hint is not None:
        x = x_hint - (x_hint @ z) * z
        if np.linalg.norm(x) <= 1e-12 * max(np.linalg.norm(x_hint), 1.0):
            x = None
    if x is None:
        # pick the ground axis least aligned with z
        axis = np.zeros(3)
        axis[int(np.argmin(np.abs(z)))] = 1.0
        x = axis - (axis @ z) * z
    x = x / np.linalg.norm(x)
    y = np.cross(z, x)
    return np.column_stack([x, y, z])


def frame_from_normal(origin: ArrayF, normal: ArrayF, x_hint: ArrayF | None = None) -> Frame:
    return Frame(origin=np.asarray(origin, dtype=float), rotation=tangent_basis(normal, x_hint))
