from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np

from compliant_contact.types import ContactPatch


def plot_contact_patches(
    patches: list[ContactPatch],
    output_path: str | None = None,
) -> None:
    fig = plt.figure(figsize=(10, 4))

    ax1 = fig.add_subplot(1, 2, 1)
    points = [e.frame.origin for p in patches for e in p.elements]
    normal = [e.force_on_surface2[5] for p in patches for e in p.elements]
    if points:
        xy = np.array(points)
        c = ax1.scatter(xy[:, 0], xy[:, 1], c=normal, cmap="viridis", s=20)
        fig.colorbar(c, ax=ax1, label="Normal force [N]")
    for patch in patches:
        cop = patch.resultant.center_of_pressure
        ax1.plot(cop[0], cop[1], "rx", markersize=10)
    ax1.set_title("Patch elements and centers of pressure")
    ax1.set_aspect("equal")

    ax2 = fig.add_subplot(1, 2, 2)
    ids = [str(p.resultant.contact_id) for p in patches]
    ax2.bar(ids, [p.resultant.potential_energy for p in patches], label="Potential energy [J]")
    ax2.bar(ids, [p.resultant.power for p in patches], alpha=0.6, label="Power [W]")
    ax2.set_xlabel("Contact")
    ax2.set_title("Resultant energy and power")
    ax2.legend()

    fig.tight_layout()
    if output_path:
        fig.savefig(output_path, dpi=150)
    else:
        plt.show()
    plt.close(fig)
