import logging
from ortools.linear_solver import pywraplp
from .solver import Names
from .errors import SolverInfeasible

logger = logging.getLogger(__name__)

class System:
    """Tiered linear program on OR-Tools' GLOP.

    Tiers are minimized strongest first; each optimum is pinned as a
    constraint before the next tier is minimized.
    """
    def __init__(self, tolerance=1e-7):
        self.solver = pywraplp.Solver.CreateSolver("GLOP")
        if self.solver is None:
            raise SolverInfeasible("GLOP solver is not available in this OR-Tools build")
        self.tolerance = tolerance
        self.names = Names({})
        self.variables = {}
        self.objective = {}

    def get(self, expr):
        terms = [v * self.get_var(k) for k, v in expr.coeffs.items()]
        return self.solver.Sum(terms) + expr.constant

    def get_var(self, var):
        try:
            return self.variables[var]
        except KeyError:
            name = self.names.get(var)
            inf = self.solver.infinity()
            lb = 0.0 if var.slack else -inf
            self.variables[var] = nv = self.solver.NumVar(lb, inf, name)
            return nv

    def add(self, constraint):
        self.solver.Add(self.get(constraint.expr) == 0)
        self.add_objective({k: self.get(v) for k, v in constraint.objective.items()})

    def add_objective(self, objective):
        for s, v in objective.items():
            obj = self.objective.setdefault(s, [])
            obj.append(v)

    def results(self):
        tiers = sorted(self.objective)
        if not tiers:
            self.check(None)
        for n, s in enumerate(tiers):
            obj = self.solver.Sum(self.objective[s])
            self.solver.Minimize(obj)
            self.check(s)
            value = self.solver.Objective().Value()
            logger.debug("strength %d minimized to %g", s, value)
            # the solution is gone once the model changes again
            if n + 1 < len(tiers):
                self.solver.Add(obj <= value + self.tolerance)
        return {var: nv.solution_value() for var, nv in self.variables.items()}

    def check(self, strength):
        res = self.solver.Solve()
        if res != pywraplp.Solver.OPTIMAL:
            if strength is None:
                raise SolverInfeasible(f"GLOP returned status {res}")
            raise SolverInfeasible(f"GLOP returned status {res} at strength {strength}")
