"""Core abstractions: vector fields, run configuration, tableaux."""

from hrtrace.core.field import VectorField, FunctionField
from hrtrace.core.params import Tolerances, ParameterRange, RunRequest
from hrtrace.core.tableau import EmbeddedTableau

__all__ = [
    "VectorField",
    "FunctionField",
    "Tolerances",
    "ParameterRange",
    "RunRequest",
    "EmbeddedTableau",
]
