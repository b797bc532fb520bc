import logging
from . import solver
from . import glop
from .widgets import Options, validate
from .graph import reading_order, above_sets, direct_above, blockers
from .model import Model

logger = logging.getLogger(__name__)

default_backends = {
    "simplex": solver.System,
    "glop": glop.System,
}

def reflow(widgets, options=None, **overrides):
    """Collapses the vertical space of hidden widgets.

    Returns new widgets in reading order; only y and height differ from
    the input. The input list and its widgets are left untouched.
    """
    options = Options() if options is None else options
    if overrides:
        options = options.replace(**overrides)
    widgets = list(widgets)
    validate(widgets)

    ordered = reading_order(widgets)
    above = above_sets(ordered)
    model = Model(ordered, direct_above(above), blockers(ordered, above), options)

    system = default_backends[options.backend]()
    for constraint in model.constraints:
        system.add(constraint)
    logger.debug("reflow: %d widgets (%d hidden), %d constraints, %s backend",
        len(ordered), sum(w.hidden for w in ordered),
        len(model.constraints), options.backend)
    results = system.results()
    if logger.isEnabledFor(logging.DEBUG) and isinstance(system, solver.System):
        logger.debug("solved tableau:\n%s", system.format(model.names()))
    return model.apply(results)
