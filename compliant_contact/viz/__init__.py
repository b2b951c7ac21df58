from .viewer import plot_contact_patches

__all__ = ["plot_contact_patches"]
