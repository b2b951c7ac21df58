from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from compliant_contact.contacts.tracker import ContactTracker
from compliant_contact.errors import InvalidArgumentError, InvalidStateError
from compliant_contact.generators.base import ForceContext, ForceGenerator
from compliant_contact.generators.elliptical import HertzElliptical
from compliant_contact.generators.foundation import ElasticFoundation
from compliant_contact.generators.hertz import HertzCircular
from compliant_contact.state import Stage, State
from compliant_contact.subsystem.energy import DissipatedEnergy
from compliant_contact.subsystem.registry import GeneratorRegistry
from compliant_contact.types import ContactForce, ContactPatch, ContactTypeId

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CompliantContactConfig:
    transition_velocity: float = 0.01
    initial_dissipated_energy: float = 0.0
    register_builtin_generators: bool = True

    def __post_init__(self) -> None:
        if not self.transition_velocity > 0.0:
            raise InvalidArgumentError(
                f"transition velocity must be positive, got {self.transition_velocity}"
            )
        if self.initial_dissipated_energy < 0.0:
            raise InvalidArgumentError(
                f"initial dissipated energy must be nonnegative, got {self.initial_dissipated_energy}"
            )


@dataclass(slots=True)
class _Evaluation:
    state: State
    velocity_version: int
    revision: int
    forces: list[ContactForce]


class CompliantContactSubsystem:
    """Turns the tracker's active contacts into contact forces.

    Each contact is answered by the generator registered for its type, or by
    the default generator. Resultants are computed when the state is realized
    to VELOCITY; patch details only on request. The dissipated energy is a
    state variable whose rate is published at ACCELERATION for the
    integrator to advance.
    """

    def __init__(self, tracker: ContactTracker, config: CompliantContactConfig | None = None) -> None:
        config = config or CompliantContactConfig()
        self._tracker = tracker
        self._registry = GeneratorRegistry()
        self._energy = DissipatedEnergy(initial=config.initial_dissipated_energy)
        self._transition_velocity = config.transition_velocity
        self._evaluation: _Evaluation | None = None
        # Bumped whenever the transition velocity or a generator changes.
        self._revision = 0
        if config.register_builtin_generators:
            for generator in (HertzCircular(), HertzElliptical(), ElasticFoundation()):
                self._registry.register(generator.contact_type_id, generator)

    @property
    def tracker(self) -> ContactTracker:
        return self._tracker

    # -- configuration ----------------------------------------------------

    @property
    def transition_velocity(self) -> float:
        return self._transition_velocity

    @transition_velocity.setter
    def transition_velocity(self, vt: float) -> None:
        if not vt > 0.0:
            raise InvalidArgumentError(f"transition velocity must be positive, got {vt}")
        logger.info(f"Friction transition velocity {self._transition_velocity:g} -> {vt:g}")
        self._transition_velocity = float(vt)
        self._revision += 1

    # -- generators -------------------------------------------------------

    def register_generator(self, contact_type_id: ContactTypeId, generator: ForceGenerator) -> None:
        self._registry.register(contact_type_id, generator)
        self._revision += 1

    def register_default_generator(self, generator: ForceGenerator) -> None:
        self._registry.register_default(generator)
        self._revision += 1

    def has_generator(self, contact_type_id: ContactTypeId) -> bool:
        return self._registry.has(contact_type_id)

    def has_default_generator(self) -> bool:
        return self._registry.has_default()

    def get_generator(self, contact_type_id: ContactTypeId) -> ForceGenerator:
        return self._registry.lookup(contact_type_id)

    def get_default_generator(self) -> ForceGenerator:
        return self._registry.default()

    # -- staged computation -------------------------------------------------

    def realize(self, state: State, stage: Stage) -> None:
        if stage == Stage.MODEL:
            self._energy.allocate(state)
        elif stage == Stage.VELOCITY:
            self._evaluate(state)
        elif stage == Stage.ACCELERATION:
            self._energy.set_rate(state, self.get_dissipation_rate(state))

    def _context(self, state: State) -> ForceContext:
        return ForceContext(state=state, transition_velocity=self._transition_velocity)

    def _evaluate(self, state: State) -> int:
        self._evaluation = None
        context = self._context(state)
        forces: list[ContactForce] = []
        for contact in self._tracker.active_contacts(state):
            generator = self._registry.lookup(contact.type_id)
            forces.append(
                generator.compute_resultant(
                    context,
                    contact,
                    state.surface_velocity(contact.body1),
                    state.surface_velocity(contact.body2),
                )
            )
        self._evaluation = _Evaluation(state, state.version(Stage.VELOCITY), self._revision, forces)
        logger.debug(f"Evaluated {len(forces)} contact forces at t={state.time:g}")
        return len(forces)

    def evaluate(self, state: State) -> int:
        state.require(Stage.VELOCITY, "evaluating contact forces")
        return self._evaluate(state)

    def _current(self, state: State | None = None) -> list[ContactForce]:
        ev = self._evaluation
        if ev is None:
            raise InvalidStateError("contact forces have not been evaluated")
        if state is not None and ev.state is not state:
            raise InvalidStateError("contact forces were evaluated for a different state")
        if ev.state.stage < Stage.VELOCITY or ev.state.version(Stage.VELOCITY) != ev.velocity_version:
            raise InvalidStateError("contact forces are stale; realize the state to VELOCITY again")
        if ev.revision != self._revision:
            logger.debug("Re-evaluating contact forces after a configuration change")
            self._evaluate(ev.state)
            ev = self._evaluation
            if ev.state.stage >= Stage.ACCELERATION:
                self._energy.set_rate(ev.state, sum(f.power for f in ev.forces))
        return ev.forces

    @property
    def num_forces(self) -> int:
        return len(self._current())

    def get_force(self, n: int) -> ContactForce:
        forces = self._current()
        if not 0 <= n < len(forces):
            raise InvalidArgumentError(f"contact force index {n} out of range [0, {len(forces)})")
        return forces[n]

    def get_forces(self) -> list[ContactForce]:
        return list(self._current())

    def compute_all_patch_details(self, state: State) -> list[ContactPatch]:
        state.require(Stage.VELOCITY, "computing contact patch details")
        context = self._context(state)
        patches: list[ContactPatch] = []
        for contact in self._tracker.active_contacts(state):
            generator = self._registry.lookup(contact.type_id)
            patches.append(
                generator.compute_detailed_patch(
                    context,
                    contact,
                    state.surface_velocity(contact.body1),
                    state.surface_velocity(contact.body2),
                )
            )
        return patches

    def get_potential_energy(self, state: State) -> float:
        """Elastic energy stored in all active contacts; needs positions only."""
        state.require(Stage.POSITION, "computing contact potential energy")
        context = self._context(state)
        still = np.zeros(6)
        return float(
            sum(
                self._registry.lookup(contact.type_id)
                .compute_resultant(context, contact, still, still)
                .potential_energy
                for contact in self._tracker.active_contacts(state)
            )
        )

    def get_dissipation_rate(self, state: State) -> float:
        return float(sum(f.power for f in self._current(state)))

    # -- dissipated energy ----------------------------------------------------

    def get_dissipated_energy(self, state: State) -> float:
        return self._energy.get(state)

    def set_dissipated_energy(self, state: State, energy: float) -> None:
        self._energy.set(state, energy)
