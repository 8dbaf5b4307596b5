"""Viewport and projection engine for the mesh node map."""

__version__ = "0.1.0"
