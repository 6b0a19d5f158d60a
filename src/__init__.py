# src/__init__.py — v1
"""caselens — layered, role-aware summaries of legal case bundles."""

from caselens.version import __version__

__all__ = ["__version__"]
