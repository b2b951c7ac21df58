from __future__ import annotations

from dataclasses import dataclass

from compliant_contact.errors import InvalidArgumentError, InvalidStateError
from compliant_contact.state import Stage, State


@dataclass(slots=True)
class DissipatedEnergy:
    """Continuous state variable holding the energy dissipated so far.

    Only storage: an external integrator advances it from the rate written
    by :meth:`set_rate`. Hunt-Crossley contacts that are yanked apart lose
    their stored energy to unmodeled ringing, so the total
    kinetic + potential + dissipated energy can drop in that case.
    """

    initial: float = 0.0
    _index: int | None = None

    def __post_init__(self) -> None:
        if self.initial < 0.0:
            raise InvalidArgumentError(f"dissipated energy must be nonnegative, got {self.initial}")

    def allocate(self, state: State) -> None:
        self._index = state.allocate_z(self.initial)

    def _slot(self, state: State, what: str) -> int:
        state.require(Stage.MODEL, what)
        if self._index is None:
            raise InvalidStateError(f"{what}: dissipated energy was never allocated in this state")
        return self._index

    def get(self, state: State) -> float:
        return state.get_z(self._slot(state, "reading dissipated energy"))

    def set(self, state: State, energy: float) -> None:
        if energy < 0.0:
            raise InvalidArgumentError(f"dissipated energy must be nonnegative, got {energy}")
        state.set_z(self._slot(state, "setting dissipated energy"), energy)

    def set_rate(self, state: State, power: float) -> None:
        state.set_zdot(self._slot(state, "setting dissipation rate"), power)

    def get_rate(self, state: State) -> float:
        return state.get_zdot(self._slot(state, "reading dissipation rate"))
