import logging

import numpy as np

from graphical_utils import (
    _defaults,
    _make_model,
    _validate_problem,
    export_solution_pdf_report,
    feasible_region,
    pick_optimum,
    solution_summary,
    solution_viewer,
)
from lp_types import InvalidInputError, NoSolution

logger = logging.getLogger(__name__)


def solve(objective, direction, constraints, opts=None):
    if opts is None:
        opts = {}
    opts = _defaults(opts)

    objective, direction, constraints = _validate_problem(objective, direction, constraints)
    vertices = feasible_region(constraints, opts["tol"])
    if not vertices:
        logger.info("no feasible vertices for %d constraints", len(constraints))
        return NoSolution("no feasible vertices found")

    sol = pick_optimum(vertices, objective, direction)
    logger.debug("%s optimum %s, Z=%.6g over %d vertices", direction, tuple(sol.point), sol.value, len(vertices))
    return sol


def graphical_method(c, A, b, sense, direction="maximize", opts=None):
    if opts is None:
        opts = {}
    opts = _defaults(opts)

    c = np.asarray(c, dtype=float).reshape(-1)
    A = np.asarray(A, dtype=float)
    b = np.asarray(b, dtype=float).reshape(-1)
    sense = np.asarray(sense).reshape(-1)

    if c.size != 2:
        raise InvalidInputError("the graphical method needs exactly two decision variables.")
    if A.size == 0:
        A = A.reshape(0, 2)
    if A.ndim != 2 or A.shape[1] != 2:
        raise InvalidInputError("A must have shape (m, 2).")
    m = A.shape[0]
    if b.size != m or sense.size != m:
        raise InvalidInputError("A, b and sense must describe the same number of constraints.")

    rows = [(A[i, 0], A[i, 1], b[i], sense[i]) for i in range(m)]
    objective, direction, constraints = _validate_problem(c, direction, rows)
    res = solve(objective, direction, constraints, opts)
    model = _make_model(objective, direction, constraints, opts)

    if isinstance(res, NoSolution):
        out = {
            "status": "infeasible",
            "x": None,
            "z": None,
            "vertices": np.empty((0, 2)),
        }
    else:
        out = {
            "status": "optimal",
            "x": np.array(res.point, dtype=float),
            "z": res.value,
            "vertices": np.array(res.vertices, dtype=float).reshape(-1, 2),
        }
    out["direction"] = direction
    out["solution"] = res
    out["model"] = model

    if opts["report_pdf_path"] is not None:
        export_solution_pdf_report(model, res, opts["report_pdf_path"], opts)

    if opts["launch_viewer"]:
        solution_viewer(model, res, opts)

    return out


def demo():
    c = [1, 1]
    A = [
        [1, 1],
        [2, 1],
    ]
    b = [10, 15]
    sense = ["<=", "<="]

    res = graphical_method(c, A, b, sense, "maximize", opts={"launch_viewer": True})
    print(solution_summary(res["model"], res["solution"]))
    return res


if __name__ == "__main__":
    demo()
