"""TestForge: Cypress test generation with post-generation code repair."""

from ._version import __version__

__all__ = ["__version__"]
