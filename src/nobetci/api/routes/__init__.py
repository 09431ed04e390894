"""Route group exports."""

from . import health, pharmacies

__all__ = ["health", "pharmacies"]
