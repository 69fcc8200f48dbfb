"""Projection calculator."""

from .projection import ProjectionEngine, run_projection

__all__ = ["ProjectionEngine", "run_projection"]
