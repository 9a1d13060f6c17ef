"""Concrete vector fields."""

from hrtrace.models.hindmarsh_rose import (
    HindmarshRose,
    HindmarshRoseParams,
    HRComponent,
    HR_CONTROL_RANGES,
    request_from_controls,
)

__all__ = [
    "HindmarshRose",
    "HindmarshRoseParams",
    "HRComponent",
    "HR_CONTROL_RANGES",
    "request_from_controls",
]
