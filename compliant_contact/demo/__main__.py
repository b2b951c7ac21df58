from __future__ import annotations

from pathlib import Path

import numpy as np

from compliant_contact.contacts import ContactMaterial, SphereOnPlaneTracker
from compliant_contact.state import Stage, State
from compliant_contact.subsystem import CompliantContactConfig, CompliantContactSubsystem
from compliant_contact.types import spatial_vec
from compliant_contact.viz import plot_contact_patches

GRAVITY = np.array([0.0, 0.0, -9.81])


def main() -> None:
    radius, mass = 0.05, 1.0
    inertia = 0.4 * mass * radius**2
    tracker = SphereOnPlaneTracker(
        spheres={1: radius},
        sphere_material=ContactMaterial.from_elastic(
            2e7, 0.45, dissipation=0.5, static_friction=0.7, dynamic_friction=0.5
        ),
        ground_material=ContactMaterial.from_elastic(
            2e9, 0.3, dissipation=0.1, static_friction=0.8, dynamic_friction=0.6
        ),
    )
    contact = CompliantContactSubsystem(tracker, CompliantContactConfig(transition_velocity=1e-2))
    state = State(n_bodies=2, subsystems=[contact])
    state.set_body_origin(1, [0.0, 0.0, 0.2])
    state.set_body_velocity(1, spatial_vec(linear=[0.5, 0.0, 0.0]))

    dt, n_steps = 1e-5, 50_000
    for step in range(n_steps + 1):
        state.realize(Stage.ACCELERATION)
        origin = state.body_origin(1)
        velocity = state.body_velocity(1)
        force, moment = mass * GRAVITY, np.zeros(3)
        for n in range(contact.num_forces):
            f = contact.get_force(n)
            force = force + f.force
            moment = moment + f.moment + np.cross(f.center_of_pressure - origin, f.force)

        if step % 5000 == 0:
            kinetic = 0.5 * mass * velocity[3:] @ velocity[3:] + 0.5 * inertia * velocity[:3] @ velocity[:3]
            gravity_pe = -mass * GRAVITY @ origin
            elastic = contact.get_potential_energy(state)
            dissipated = contact.get_dissipated_energy(state)
            print(
                f"t={state.time:.3f} z={origin[2]:.4f} vx={velocity[3]:+.4f} "
                f"wy={velocity[1]:+.3f} contacts={contact.num_forces} "
                f"E={kinetic + gravity_pe + elastic:.5f} diss={dissipated:.5f} "
                f"total={kinetic + gravity_pe + elastic + dissipated:.5f}"
            )

        rate = contact.get_dissipation_rate(state)
        contact.set_dissipated_energy(state, contact.get_dissipated_energy(state) + dt * rate)
        w = velocity[:3] + dt * moment / inertia
        v = velocity[3:] + dt * force / mass
        state.set_body_velocity(1, spatial_vec(w, v))
        state.set_body_origin(1, origin + dt * v)
        state.set_time(state.time + dt)

    state.realize(Stage.VELOCITY)
    patches = contact.compute_all_patch_details(state)
    out_path = Path("demo_contact.png")
    plot_contact_patches(patches, output_path=str(out_path))
    print(f"Saved visualization to {out_path}")


if __name__ == "__main__":
    main()
