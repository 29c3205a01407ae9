from collections import namedtuple

EPS = 1e-3

Point = namedtuple("Point", ["x", "y"])
Constraint = namedtuple("Constraint", ["a", "b", "value", "relation"])
Objective = namedtuple("Objective", ["a", "b"])

# vertices is the ordered feasible region the optimum was picked from
Solution = namedtuple("Solution", ["point", "value", "vertices"])
NoSolution = namedtuple("NoSolution", ["reason"])

RELATIONS = {"<=": "<=", "≤": "<=", ">=": ">=", "≥": ">=", "=": "=", "==": "="}
DIRECTIONS = {"maximize": "maximize", "max": "maximize", "minimize": "minimize", "min": "minimize"}


class InvalidInputError(ValueError):
    pass


class DegenerateConstraintError(InvalidInputError):
    pass


def same_point(p, q, tol=EPS):
    return abs(p[0] - q[0]) < tol and abs(p[1] - q[1]) < tol
