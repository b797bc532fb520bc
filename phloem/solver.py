import logging
from dataclasses import dataclass, field
from itertools import count
from operator import attrgetter
from typing import Dict, Optional
from .errors import Unsatisfiable, Unbounded

logger = logging.getLogger(__name__)

# Strength tiers, smaller is stronger. Required constraints use None.
STRONG = 0
MEDIUM = 1
WEAK   = 2

EPSILON = 1e-9

_serials = count()

@dataclass(eq=False)
class Variable:
    slack    : bool = False
    strength : Optional[int] = None
    serial   : int = field(default_factory=lambda: next(_serials), init=False)

def flex():
    x = Variable(False)
    return LinearExpr({x: 1}, 0.0)

def slack(strength=None):
    x = Variable(True, strength)
    return LinearExpr({x: 1}, 0.0)

class Names:
    def __init__(self, names):
        self.names = names
        self.used  = set(names.values())
        self.counter = 0

    def get(self, var):
        if var in self.names:
            return self.names[var]
        while True:
            if var.slack:
                candidate = f"s{self.counter}"
            else:
                candidate = f"x{self.counter}"
            self.counter += 1
            if candidate not in self.used:
                self.names[var] = candidate
                self.used.add(candidate)
                return candidate

def promote(c):
    if isinstance(c, (int, float)):
        return LinearExpr({}, c)
    else:
        return c

@dataclass
class LinearExpr:
    coeffs: Dict[Variable, float]
    constant: float

    def __add__(self, other):
        other = promote(other)
        coeffs = self.coeffs.copy()
        for k, v in other.coeffs.items():
            coeffs[k] = coeffs.get(k, 0.0) + v
            if abs(coeffs[k]) < EPSILON:
                coeffs.pop(k)
        return LinearExpr(coeffs, self.constant + other.constant)

    def __radd__(self, other):
        return promote(other) + self

    def __sub__(self, other):
        return self + -promote(other)

    def __rsub__(self, other):
        return promote(other) - self

    def __neg__(self):
        coeffs = {k: -v for k, v in self.coeffs.items()}
        return LinearExpr(coeffs, -self.constant)

    def __mul__(self, other):
        if not isinstance(other, (int, float)):
            raise TypeError("Can only multiply a LinearExpr by a scalar")
        coeffs = {k: v * other for k, v in self.coeffs.items()}
        return LinearExpr(coeffs, self.constant * other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not isinstance(other, (int, float)):
            raise TypeError("Can only divide a LinearExpr by a scalar")
        coeffs = {k: v / other for k, v in self.coeffs.items()}
        return LinearExpr(coeffs, self.constant / other)

    @property
    def var(self):
        if len(self.coeffs) == 1:
            return next(iter(self.coeffs.keys()))
        raise ValueError("expression doesn't refer to exactly one variable")

    def eval(self, results):
        constant = self.constant
        for k, s in self.coeffs.items():
            constant += results.get(k, 0.0)*s
        return constant

    def subs(self, *ms):
        coeffs  = {}
        constant = self.constant
        for k, s in self.coeffs.items():
            for m in ms:
                if k in m:
                    c = m[k]
                    for j, v in c.coeffs.items():
                        coeffs[j] = coeffs.get(j, 0.0) + v*s
                    constant += c.constant*s
                    break
            else:
                coeffs[k] = coeffs.get(k, 0.0) + s
        coeffs = {k: v for k, v in coeffs.items() if abs(v) >= EPSILON}
        return LinearExpr(coeffs, constant)

    def format(self, names):
        terms = []
        if self.constant != 0:
            terms.append(f"{self.constant:g}")
        for v in sorted(self.coeffs, key=_order_):
            coef = self.coeffs[v]
            nm = names.get(v)
            if coef < 0:
                if terms:
                    terms.append(" - ")
                else:
                    terms.append("-")
            elif terms:
                terms.append(" + ")

            if abs(coef) == 1:
                terms.append(nm)
            else:
                terms.append(f"{abs(coef):g}*{nm}")
        if not terms:
            return "0"
        return "".join(terms)

    def positive(self):
        if self.constant < 0:
            return -self
        else:
            return self

class System:
    """Incremental simplex tableau with strength-tiered objectives.

    Cu holds rows for unrestricted basic variables, Cv rows for basic
    slack variables (kept non-negative). Parametric variables are zero,
    so a basic variable's value is the constant of its row. O holds one
    objective row per strength, always written over parametric variables.
    columns maps every parametric variable to the basic variables whose
    rows mention it, so a pivot only rewrites the rows it touches.
    """
    def __init__(self):
        self.Cu = {}
        self.Cv = {}
        self.O = {}
        self.columns = {}
        self.resolve = False

    def add(self, constraint):
        _insert_equation_(self, constraint.expr)
        _insert_objective_(self, constraint.objective)
        self.resolve = True

    def results(self):
        self.solve()
        results = {}
        for k, c in self.Cv.items():
            results[k] = c.constant
        for k, c in self.Cu.items():
            results[k] = c.constant
        return results

    def solve(self):
        if self.resolve:
            pivots = _minimize_(self)
            logger.debug("minimized %d tiers in %d pivots", len(self.O), pivots)
            self.resolve = False

    def format(self, names):
        out = ["objective:"]
        for k, c in sorted(self.O.items()):
            out.append(f"  [{k}] = {c.format(names)}")
        out.append("equations:")
        for k, c in self.Cu.items():
            out.append(f"  {names.get(k)} = {c.format(names)}")
        out.append('  ----')
        for k, c in self.Cv.items():
            out.append(f"  {names.get(k)} = {c.format(names)}")
        return "\n".join(out)

def _insert_equation_(S, c):
    c = c.subs(S.Cu, S.Cv)
    k = min(_unrestricted_(c), key=_order_, default=None)
    if k is not None:
        _pivot_(S, S.Cu, c, k)
        return
    c = c.positive()
    # A slack no restricted row depends on can absorb the whole row.
    k = min(_free_subjects_(S, c), key=_rank_, default=None)
    if k is not None:
        _pivot_(S, S.Cv, c, k)
        return
    # Otherwise drive the constant to zero by raising slacks,
    # swapping out rows that would turn negative.
    while c.constant > EPSILON:
        k = min(_entering_variable_(c), key=_order_, default=None)
        if k is None:
            raise Unsatisfiable("required constraints conflict")
        p = c.constant / -c.coeffs[k]
        j = min(_leaving_variable_(S, k, lambda q: q < p), key=_lvf_, default=(p,None))[1]
        if j is None:
            _pivot_(S, S.Cv, c, k)
            return
        _pivot_(S, S.Cv, _remove_(S, S.Cv, j), k)
        c = c.subs(S.Cv)
    # A satisfied row still binds its variables and must enter the tableau.
    c = LinearExpr(c.coeffs, 0.0)
    k = min(_entering_variable_(c), key=_order_, default=None)
    if k is None:
        k = min(c.coeffs, key=_order_, default=None)
    if k is not None:
        _pivot_(S, S.Cv, c, k)

def _unrestricted_(c):
    for k in c.coeffs:
        if not k.slack:
            yield k

def _entering_variable_(c):
    for k, s in c.coeffs.items():
        if s < 0.0:
            yield k

def _free_subjects_(S, c):
    for k in _entering_variable_(c):
        if not any(j in S.Cv for j in S.columns.get(k, ())):
            yield k

def _rank_(k):
    # plain slacks first, then error terms of the weakest tier
    if k.strength is None:
        return 0, 0, k.serial
    return 1, -k.strength, k.serial

def _insert_objective_(S, o):
    zero = promote(0.0)
    for s, c in o.items():
        S.O[s] = S.O.get(s, zero) + c.subs(S.Cu, S.Cv)

def _minimize_(S):
    pivots = 0
    k = min(_lex_entering_variable_(S.O), key=_order_, default=None)
    while k is not None:
        j = min(_leaving_variable_(S, k, lambda q: True), key=_lvf_, default=(0,None))[1]
        if j is None:
            raise Unbounded("objective decreases without limit")
        _pivot_(S, S.Cv, _remove_(S, S.Cv, j), k)
        pivots += 1
        k = min(_lex_entering_variable_(S.O), key=_order_, default=None)
    return pivots

def _lex_entering_variable_(O):
    strengths = sorted(O)
    candidates = set().union(*[o.coeffs.keys() for o in O.values()])
    for k in candidates:
        if not k.slack:
            continue
        for s in strengths:
            w = O[s].coeffs.get(k, 0.0)
            if abs(w) >= EPSILON:
                if w < 0.0:
                    yield k
                break

def _leaving_variable_(S, k, cutoff):
    for j in S.columns.get(k, ()):
        d = S.Cv.get(j)
        if d is None:
            continue
        if (w := d.coeffs.get(k, 0.0)) < 0.0:
            q = d.constant / -w
            if cutoff(q):
                yield q, j

def _store_(S, C, k, row):
    C[k] = row
    for v in row.coeffs:
        S.columns.setdefault(v, set()).add(k)

def _unstore_(S, k, row):
    for v in row.coeffs:
        S.columns[v].discard(k)

def _remove_(S, C, k):
    row = C.pop(k)
    _unstore_(S, k, row)
    return row - LinearExpr({k: 1.0}, 0.0)

def _pivot_(S, C, c, k):
    coeffs = c.coeffs.copy()
    constant = c.constant
    s = coeffs.pop(k)
    for h in coeffs.keys():
        coeffs[h] = coeffs[h] / -s
    constant /= -s
    row = LinearExpr(coeffs, constant)
    m = {k: row}
    for j in list(S.columns.get(k, ())):
        D = S.Cu if j in S.Cu else S.Cv
        _unstore_(S, j, D[j])
        _store_(S, D, j, D[j].subs(m))
    S.columns.pop(k, None)
    _store_(S, C, k, row)
    for strength, o in S.O.items():
        if k in o.coeffs:
            S.O[strength] = o.subs(m)

_order_ = attrgetter("serial")

def _lvf_(p):
    x, y = p
    return x, y.serial

@dataclass(eq=False)
class Constraint:
    expr      : LinearExpr
    objective : Dict[int, LinearExpr]

def eq(expr):
    return Constraint(expr, {})

def ge(expr, strength=None):
    if strength is None:
        s1 = slack()
        return Constraint(expr - s1, {})
    else:
        s1 = slack()
        s2 = slack(strength)
        return Constraint(expr - s1 + s2, {strength: s2})

def ges(expr, strength):
    s1 = slack(strength)
    return Constraint(expr - s1, {strength: s1})
