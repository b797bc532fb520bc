class ReflowError(Exception):
    pass

class InvalidGeometry(ReflowError, ValueError):
    def __init__(self, widget_id, reason):
        super().__init__(f"widget {widget_id!r}: {reason}")
        self.widget_id = widget_id
        self.reason = reason

class DuplicateId(ReflowError, ValueError):
    def __init__(self, widget_id):
        super().__init__(f"widget id {widget_id!r} appears more than once")
        self.widget_id = widget_id

class SolverInfeasible(ReflowError, RuntimeError):
    pass

class Unsatisfiable(SolverInfeasible):
    pass

class Unbounded(SolverInfeasible):
    pass
