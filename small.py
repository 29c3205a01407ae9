from graphical_method import solve
from lp_types import Constraint, NoSolution, Objective

constraints = [
    Constraint(1, 1, 4, "<="),  # x1 + x2 <= 4
    Constraint(1, 0, 2, "<="),  # x1 <= 2
    Constraint(0, 1, 3, "<="),  # x2 <= 3
]

res = solve(
    Objective(3, 2),  # maximize 3x1 + 2x2
    "maximize",
    constraints,
    opts={"tol": 1e-3},
)

if isinstance(res, NoSolution):
    print("no solution:", res.reason)
else:
    print(res.point, res.value, "vertices:", len(res.vertices))
