from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Protocol

import numpy as np

from compliant_contact.errors import InvalidArgumentError, InvalidStateError
from compliant_contact.types import ArrayF, SpatialVec


class Stage(IntEnum):
    EMPTY = 0
    TOPOLOGY = 1
    MODEL = 2
    INSTANCE = 3
    TIME = 4
    POSITION = 5
    VELOCITY = 6
    DYNAMICS = 7
    ACCELERATION = 8
    REPORT = 9


class Realizable(Protocol):
    def realize(self, state: State, stage: Stage) -> None:
        """Compute whatever this component owns at ``stage``."""


@dataclass(slots=True)
class State:
    """Staged container for time, body kinematics and continuous variables.

    Values owned by a stage are only valid once ``stage`` has reached it.
    Changing an input drops the marker below the stage that consumes it.
    """

    n_bodies: int = 1
    subsystems: list[Realizable] = field(default_factory=list)
    time: float = 0.0
    stage: Stage = Stage.EMPTY
    _origins: ArrayF = field(init=False)
    _velocities: ArrayF = field(init=False)
    _z: list[float] = field(default_factory=list, init=False)
    _zdot: list[float] = field(default_factory=list, init=False)
    _versions: list[int] = field(default_factory=lambda: [0] * len(Stage), init=False)

    def __post_init__(self) -> None:
        if self.n_bodies < 1:
            raise InvalidArgumentError("a state needs at least the ground body")
        self._origins = np.zeros((self.n_bodies, 3))
        self._velocities = np.zeros((self.n_bodies, 6))

    # -- stage bookkeeping ---------------------------------------------------

    def realize(self, stage: Stage) -> None:
        for s in Stage:
            if s <= self.stage or s > stage:
                continue
            for subsystem in self.subsystems:
                subsystem.realize(self, s)
            self.stage = s

    def invalidate(self, stage: Stage) -> None:
        for s in Stage:
            if s >= stage:
                self._versions[s] += 1
        if stage <= Stage.MODEL:
            self._z.clear()
            self._zdot.clear()
        if self.stage >= stage:
            self.stage = Stage(max(stage - 1, Stage.EMPTY))

    def require(self, stage: Stage, what: str) -> None:
        if self.stage < stage:
            raise InvalidStateError(
                f"{what} requires stage {stage.name} but the state is only at {self.stage.name}"
            )

    def version(self, stage: Stage) -> int:
        return self._versions[stage]

    # -- inputs ---------------------------------------------------------------

    def set_time(self, t: float) -> None:
        self.time = float(t)
        self.invalidate(Stage.TIME)

    def body_origin(self, body: int) -> ArrayF:
        return self._origins[body].copy()

    def set_body_origin(self, body: int, origin: ArrayF) -> None:
        self._origins[body] = origin
        self.invalidate(Stage.POSITION)

    def body_velocity(self, body: int) -> SpatialVec:
        """Spatial velocity (w, v) of ``body``, with v taken at the body origin."""
        return self._velocities[body].copy()

    def set_body_velocity(self, body: int, velocity: SpatialVec) -> None:
        self._velocities[body] = velocity
        self.invalidate(Stage.VELOCITY)

    def surface_velocity(self, body: int) -> SpatialVec:
        """Spatial velocity of ``body`` with its linear part shifted to the ground origin."""
        w = self._velocities[body, :3]
        v = self._velocities[body, 3:] - np.cross(w, self._origins[body])
        return np.concatenate([w, v])

    # -- continuous variables ----------------------------------------------------

    def allocate_z(self, initial: float = 0.0) -> int:
        if self.stage != Stage.TOPOLOGY:
            raise InvalidStateError(
                "continuous variables can only be allocated while realizing MODEL"
            )
        self._z.append(float(initial))
        self._zdot.append(0.0)
        return len(self._z) - 1

    def get_z(self, index: int) -> float:
        self.require(Stage.MODEL, "reading a continuous variable")
        return self._z[index]

    def set_z(self, index: int, value: float) -> None:
        self.require(Stage.MODEL, "writing a continuous variable")
        self._z[index] = float(value)
        self.invalidate(Stage.DYNAMICS)

    def get_zdot(self, index: int) -> float:
        self.require(Stage.ACCELERATION, "reading a continuous variable derivative")
        return self._zdot[index]

    def set_zdot(self, index: int, value: float) -> None:
        self._zdot[index] = float(value)
