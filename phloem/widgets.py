import math
from dataclasses import dataclass, replace
from .errors import InvalidGeometry, DuplicateId

BACKEND_NAMES = ("simplex", "glop")

@dataclass
class Widget:
    id     : str
    x      : float
    y      : float
    width  : float
    height : float
    hidden : bool = False

    @property
    def right(self):
        return self.x + self.width

    @property
    def bottom(self):
        return self.y + self.height

@dataclass(frozen=True)
class Options:
    """Reflow policy.

    collapse_spacing: a hidden widget keeps no gap below it.
    measure_only_nearest_above: spacing is measured only against the
      direct-above neighbors with the lowest original bottom edge.
    backend: name of the solver backend, see engine.default_backends.
    """
    collapse_spacing : bool = True
    measure_only_nearest_above : bool = True
    backend : str = "simplex"

    def __post_init__(self):
        if self.backend not in BACKEND_NAMES:
            raise ValueError(f"unknown solver backend {self.backend!r}")

    def replace(self, **changes):
        return replace(self, **changes)

def validate(widgets):
    seen = set()
    for widget in widgets:
        for name in ("x", "y", "width", "height"):
            value = getattr(widget, name)
            if not math.isfinite(value):
                raise InvalidGeometry(widget.id, f"{name} is not finite ({value!r})")
        if widget.width < 0:
            raise InvalidGeometry(widget.id, f"negative width ({widget.width!r})")
        if widget.height < 0:
            raise InvalidGeometry(widget.id, f"negative height ({widget.height!r})")
        if widget.id in seen:
            raise DuplicateId(widget.id)
        seen.add(widget.id)
