"""Embedded Runge-Kutta tableaux."""

from hrtrace.methods.embedded import rkf45, validate_tableau

__all__ = ["rkf45", "validate_tableau"]
