from dataclasses import dataclass, field, replace
from typing import List, Set
from .solver import LinearExpr, Names, flex, eq, ge, ges, MEDIUM, WEAK, EPSILON
from .graph import nearest_above

@dataclass(eq=False)
class Box:
    """Unknown vertical placement of one widget."""
    top    : LinearExpr = field(default_factory=flex)
    height : LinearExpr = field(default_factory=flex)

    @property
    def bottom(self):
        return self.top + self.height

@dataclass(eq=False)
class Model:
    ordered  : List
    direct   : List[Set[int]]
    blocking : List[Set[int]]
    options  : object
    boxes       : List[Box] = field(default_factory=list)
    constraints : List = field(default_factory=list)

    def __post_init__(self):
        self.boxes = [Box() for _ in self.ordered]
        for i in range(len(self.ordered)):
            self.constrain(i)

    def add(self, constraint):
        self.constraints.append(constraint)

    def constrain(self, i):
        widget = self.ordered[i]
        box = self.boxes[i]
        self.add(eq(box.height - (0.0 if widget.hidden else widget.height)))
        # canvas floor, and as high up as everything else allows
        self.add(ges(box.top, WEAK))

        neighbors = self.direct[i]
        if not neighbors:
            self.add(ge(box.top - widget.y, MEDIUM))
        elif self.options.measure_only_nearest_above:
            neighbors = nearest_above(self.ordered, neighbors)
        for j in sorted(neighbors):
            gap = self.spacing(widget, self.ordered[j])
            self.add(ge(box.top - self.boxes[j].bottom - gap, MEDIUM))

        for j in sorted(self.blocking[i]):
            self.add(ge(box.top - self.boxes[j].top - self.ordered[j].height))

    def spacing(self, widget, neighbor):
        if neighbor.hidden and self.options.collapse_spacing:
            return 0.0
        return max(widget.y - neighbor.bottom, 0.0)

    def names(self):
        names = {}
        for widget, box in zip(self.ordered, self.boxes):
            names[box.top.var] = f"{widget.id}.y"
            names[box.height.var] = f"{widget.id}.height"
        return Names(names)

    def apply(self, results):
        out = []
        for widget, box in zip(self.ordered, self.boxes):
            out.append(replace(widget,
                y = max(_clean_(box.top.eval(results)), 0.0),
                height = _clean_(box.height.eval(results))))
        return out

def _clean_(value):
    # solver round-off around zero, e.g. -1e-15 for a widget at the top
    if abs(value) < EPSILON:
        return 0.0
    return value
