"""Geometry, Coxeter diagrams, Coxeter matrices and symmetry groups for polytopes."""

__version__ = "0.4.15"