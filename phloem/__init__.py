from .widgets import Widget, Options
from .engine import reflow, default_backends
from .errors import (
    ReflowError, InvalidGeometry, DuplicateId,
    SolverInfeasible, Unsatisfiable, Unbounded
)

__all__ = [
    "reflow",
    "default_backends",
    "Widget",
    "Options",
    "ReflowError",
    "InvalidGeometry",
    "DuplicateId",
    "SolverInfeasible",
    "Unsatisfiable",
    "Unbounded",
]
