import logging
import math
import os
from collections.abc import Mapping
from itertools import combinations

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.widgets import Slider, Button
from matplotlib.backends.backend_pdf import PdfPages

from lp_types import (
    DIRECTIONS,
    EPS,
    RELATIONS,
    Constraint,
    DegenerateConstraintError,
    InvalidInputError,
    Objective,
    Point,
    Solution,
    same_point,
)

logger = logging.getLogger(__name__)

CONSTRAINT_COLORS = ["#EF4444", "#10B981", "#3B82F6", "#F59E0B", "#8B5CF6", "#EC4899"]


def is_feasible(point, constraints, tol=EPS):
    x, y = point[0], point[1]
    for c in constraints:
        lhs = c.a * x + c.b * y
        if c.relation == "<=":
            ok = lhs <= c.value + tol
        elif c.relation == ">=":
            ok = lhs >= c.value - tol
        elif c.relation == "=":
            ok = abs(lhs - c.value) < tol
        else:
            raise InvalidInputError("relation entries must be <=, >=, =")
        if not ok:
            return False
    return True


def axis_intercepts(constraint):
    pts = []
    if constraint.a != 0:
        x = constraint.value / constraint.a
        if x >= 0:
            pts.append(Point(float(x), 0.0))
    if constraint.b != 0:
        y = constraint.value / constraint.b
        if y >= 0:
            pts.append(Point(0.0, float(y)))
    return pts


def line_intersection(c1, c2, tol=EPS):
    det = c1.a * c2.b - c2.a * c1.b
    if abs(det) < tol:
        return None
    x = (c1.value * c2.b - c2.value * c1.b) / det
    y = (c1.a * c2.value - c2.a * c1.value) / det
    return Point(float(x), float(y))


def candidate_points(constraints, tol=EPS):
    pts = [Point(0.0, 0.0)]
    for c in constraints:
        pts.extend(axis_intercepts(c))
    for c1, c2 in combinations(constraints, 2):
        p = line_intersection(c1, c2, tol)
        if p is not None and p.x >= 0 and p.y >= 0:
            pts.append(p)
    return pts


def dedupe_points(points, tol=EPS):
    out = []
    for p in points:
        if not any(same_point(p, q, tol) for q in out):
            out.append(p)
    return out


def collect_vertices(constraints, tol=EPS):
    cands = candidate_points(constraints, tol)
    feasible = [p for p in cands if is_feasible(p, constraints, tol)]
    vertices = dedupe_points(feasible, tol)
    logger.debug(
        "%d candidates, %d feasible, %d distinct vertices",
        len(cands), len(feasible), len(vertices),
    )
    return vertices


def order_polygon(points):
    if not points:
        return []
    E = np.asarray(points, dtype=float).reshape(-1, 2)
    c = E.mean(axis=0)
    ang = np.arctan2(E[:, 1] - c[1], E[:, 0] - c[0])
    order = np.argsort(ang, kind="stable")
    return [points[i] for i in order]


def feasible_region(constraints, tol=EPS):
    return order_polygon(collect_vertices(constraints, tol))


def objective_value(objective, point):
    return objective.a * point[0] + objective.b * point[1]


def pick_optimum(vertices, objective, direction):
    if not vertices:
        return None
    best = vertices[0]
    best_val = objective_value(objective, best)
    for v in vertices[1:]:
        val = objective_value(objective, v)
        if (direction == "maximize" and val > best_val) or (direction == "minimize" and val < best_val):
            best, best_val = v, val
    return Solution(best, float(best_val), list(vertices))


def _as_float(v, what):
    try:
        out = float(v)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{what} must be a number, got {v!r}.") from None
    if not math.isfinite(out):
        raise InvalidInputError(f"{what} must be finite, got {v!r}.")
    return out


def _as_constraint(row, i):
    if isinstance(row, Mapping):
        relation = row.get("relation", row.get("operator"))
        a, b, value = row.get("a"), row.get("b"), row.get("value")
    else:
        try:
            a, b, value, relation = row
        except (TypeError, ValueError):
            raise InvalidInputError(f"constraint {i+1} must be (a, b, value, relation).") from None

    rel = RELATIONS.get(str(relation).strip())
    if rel is None:
        raise InvalidInputError(f"constraint {i+1}: relation entries must be <=, >=, =")

    c = Constraint(
        _as_float(a, f"constraint {i+1} coefficient a"),
        _as_float(b, f"constraint {i+1} coefficient b"),
        _as_float(value, f"constraint {i+1} value"),
        rel,
    )
    if c.a == 0 and c.b == 0:
        raise DegenerateConstraintError(f"constraint {i+1} has both coefficients zero.")
    return c


def _validate_problem(objective, direction, constraints):
    if isinstance(objective, Mapping):
        objective = (objective.get("a"), objective.get("b"))
    try:
        a, b = objective
    except (TypeError, ValueError):
        raise InvalidInputError("objective must have exactly two coefficients.") from None
    obj = Objective(_as_float(a, "objective coefficient a"), _as_float(b, "objective coefficient b"))

    d = DIRECTIONS.get(str(direction).strip().lower())
    if d is None:
        raise InvalidInputError("direction must be 'maximize' or 'minimize'.")

    try:
        constraints = list(constraints)
    except TypeError:
        raise InvalidInputError("constraints must be a sequence of rows.") from None
    rows = tuple(_as_constraint(row, i) for i, row in enumerate(constraints))
    return obj, d, rows


def _make_model(objective, direction, constraints, opts):
    return {
        "objective": objective,
        "direction": direction,
        "constraints": constraints,
        "tol": opts["tol"],
    }


def _fnum(v, digits=6):
    if abs(v) < 1e-12:
        v = 0.0
    return f"{v:.{digits}g}"


def format_linear(a, b):
    sign = "-" if b < 0 else "+"
    return f"{_fnum(a)}x1 {sign} {_fnum(abs(b))}x2"


def format_constraint(c):
    return f"{format_linear(c.a, c.b)} {c.relation} {_fnum(c.value)}"


def format_objective(objective, direction):
    return f"{direction} Z = {format_linear(objective.a, objective.b)}"


def solution_summary(model, result):
    obj = model["objective"]
    direction = model["direction"]
    lines = [format_objective(obj, direction), "subject to:"]
    lines += [f"  {format_constraint(c)}" for c in model["constraints"]]
    lines.append("  x1, x2 >= 0")
    lines.append("")

    if not isinstance(result, Solution):
        lines.append(f"No solution: {result.reason}.")
        lines.append("The constraints have no common point in the first quadrant (infeasible problem).")
        return "\n".join(lines)

    p = result.point
    word = "maximum" if direction == "maximize" else "minimum"
    lines.append(f"Optimal point: X1 = {p.x:.2f}, X2 = {p.y:.2f}")
    lines.append(f"Optimal value: Z = {result.value:.2f} ({direction}d)")
    lines.append("Feasible region vertices: " + ", ".join(f"({v.x:.2f}, {v.y:.2f})" for v in result.vertices))
    lines.append(
        f"The optimal solution is at ({p.x:.2f}, {p.y:.2f}) where Z = "
        f"{format_linear(obj.a, obj.b)} reaches its {word} value of {result.value:.2f}."
    )
    return "\n".join(lines)


def _vertex_table_text(model, result):
    vertices = result.vertices if isinstance(result, Solution) else []
    rows = [["vertex", "x1", "x2", "Z", ""]]
    for i, v in enumerate(vertices):
        mark = "*" if same_point(v, result.point, model["tol"]) else ""
        rows.append([f"V{i+1}", _fnum(v.x), _fnum(v.y), _fnum(objective_value(model["objective"], v)), mark])

    if len(rows) == 1:
        return "No feasible vertices."

    widths = [max(len(str(rows[r][c])) for r in range(len(rows))) for c in range(len(rows[0]))]
    out = [" | ".join(str(rows[0][c]).rjust(widths[c]) for c in range(len(widths)))]
    out.append("-+-".join("-" * widths[c] for c in range(len(widths))))
    for r in range(1, len(rows)):
        out.append(" | ".join(str(rows[r][c]).rjust(widths[c]) for c in range(len(widths))))
    return "\n".join(out)


def _plot_limit(constraints, vertices):
    lim = 20.0
    for c in constraints:
        lim = max(lim, c.value / max(c.a, 0.1), c.value / max(c.b, 0.1))
    for v in vertices:
        lim = max(lim, v.x, v.y)
    return lim * 1.2


def _halfplane_polygon(c, lim):
    a, b, value = c.a, c.b, c.value
    if c.relation == ">=":
        a, b, value = -a, -b, -value

    box = [(0.0, 0.0), (lim, 0.0), (lim, lim), (0.0, lim)]
    out = []
    for i in range(len(box)):
        p, q = box[i], box[(i + 1) % len(box)]
        fp = a * p[0] + b * p[1] - value
        fq = a * q[0] + b * q[1] - value
        if fp <= 0:
            out.append(p)
        if (fp < 0 < fq) or (fq < 0 < fp):
            t = fp / (fp - fq)
            out.append((p[0] + t * (q[0] - p[0]), p[1] + t * (q[1] - p[1])))
    return np.array(out, dtype=float).reshape(-1, 2)


def _line_points(a, b, value, lim):
    if abs(b) >= abs(a):
        xx = np.linspace(0.0, lim, 300)
        yy = (value - a * xx) / b
    else:
        yy = np.linspace(0.0, lim, 300)
        xx = (value - b * yy) / a
    return xx, yy


def _draw_objective_2d(ax, objective, z, lim):
    if abs(objective.a) < 1e-12 and abs(objective.b) < 1e-12:
        return
    xx, yy = _line_points(objective.a, objective.b, z, lim)
    ax.plot(xx, yy, "k--", linewidth=1.6, label=f"{format_linear(objective.a, objective.b)} = {_fnum(z, 4)}", zorder=4)


def plot_solution(ax, model, result, opts=None, level=None):
    opts = _defaults({} if opts is None else opts)
    constraints = model["constraints"]
    vertices = result.vertices if isinstance(result, Solution) else []
    lim = _plot_limit(constraints, vertices)

    ax.clear()
    ax.set_xlabel("X1")
    ax.set_ylabel("X2")
    ax.set_title("Graphical method: " + format_objective(model["objective"], model["direction"]))
    ax.grid(True, alpha=0.4)
    ax.set_xlim(0.0, lim)
    ax.set_ylim(0.0, lim)

    for i, c in enumerate(constraints):
        color = CONSTRAINT_COLORS[i % len(CONSTRAINT_COLORS)]
        xx, yy = _line_points(c.a, c.b, c.value, lim)
        ax.plot(xx, yy, color=color, linewidth=2, label=format_constraint(c), zorder=2)
        if opts["show_halfplanes"] and c.relation != "=":
            poly = _halfplane_polygon(c, lim)
            if len(poly) >= 3:
                ax.fill(poly[:, 0], poly[:, 1], color=color, alpha=0.12, zorder=1)

    scatter = None
    if vertices:
        E = np.asarray(vertices, dtype=float)
        if len(E) >= 3:
            ax.fill(E[:, 0], E[:, 1], color="#22C55E", alpha=0.25, zorder=2)
        closed = np.vstack([E, E[:1]])
        ax.plot(closed[:, 0], closed[:, 1], color="#22C55E", linewidth=3, zorder=3)
        scatter = ax.scatter(E[:, 0], E[:, 1], c="#1F2937", s=30, zorder=5)
        if opts["label_vertices"]:
            for v in vertices:
                ax.annotate(f"({v.x:.1f}, {v.y:.1f})", xy=(v.x, v.y), xytext=(6, 6),
                            textcoords="offset points", fontsize=8, color="#1F2937")

        p = result.point
        ax.plot(p.x, p.y, "r*", markersize=16, zorder=6, label=f"optimum Z = {_fnum(result.value, 6)}")
        _draw_objective_2d(ax, model["objective"], result.value if level is None else level, lim)
    else:
        ax.text(0.5, 0.5, "No feasible region", ha="center", va="center",
                transform=ax.transAxes, fontsize=12, color="#B91C1C")

    ax.set_xlim(0.0, lim)
    ax.set_ylim(0.0, lim)
    ax.legend(loc="upper right", fontsize=8, frameon=True)
    return {"scatter": scatter, "limit": lim}


def export_solution_pdf_report(model, result, output_path, opts=None):
    opts = _defaults({} if opts is None else opts)
    with PdfPages(output_path) as pdf:
        fig = plt.figure(figsize=(11.69, 8.27))  # A4 landscape
        gs = fig.add_gridspec(1, 2, width_ratios=[0.58, 0.42], wspace=0.12)
        ax_plot = fig.add_subplot(gs[0, 0])
        ax_txt = fig.add_subplot(gs[0, 1])
        ax_txt.axis("off")
        plot_solution(ax_plot, model, result, opts)
        ax_txt.text(0.0, 1.0, solution_summary(model, result), va="top", ha="left", fontsize=8, wrap=True)
        fig.suptitle("Graphical Method Report", fontsize=12, fontweight="bold")
        pdf.savefig(fig, bbox_inches="tight")
        plt.close(fig)

        fig = plt.figure(figsize=(11.69, 8.27))
        ax_txt = fig.add_subplot(1, 1, 1)
        ax_txt.axis("off")
        ax_txt.text(0.0, 1.0, "VERTICES\n\n" + _vertex_table_text(model, result),
                    va="top", ha="left", family="monospace", fontsize=9)
        pdf.savefig(fig, bbox_inches="tight")
        plt.close(fig)
    logger.debug("wrote graphical report to %s", output_path)


def _level_range(model, result):
    if not isinstance(result, Solution):
        return 0.0, 1.0
    vals = [objective_value(model["objective"], v) for v in result.vertices]
    lo, hi = min(vals), max(vals)
    if hi - lo < 1e-12:
        lo, hi = lo - 1.0, hi + 1.0
    return lo, hi


def _shading_button_label(enabled):
    return "Half-planes: ON" if enabled else "Half-planes: OFF"


def solution_viewer(model, result, opts=None):
    opts = _defaults({} if opts is None else opts)
    ui = {"opts": dict(opts)}
    hover = {"scatter": None, "label": None}
    vertices = result.vertices if isinstance(result, Solution) else []

    fig = plt.figure(figsize=(14, 8))
    ax_plot = fig.add_axes([0.05, 0.18, 0.55, 0.75])
    ax_txt = fig.add_axes([0.64, 0.18, 0.34, 0.75])
    ax_txt.axis("off")
    ax_slider = fig.add_axes([0.10, 0.07, 0.40, 0.03])
    ax_shade = fig.add_axes([0.60, 0.06, 0.18, 0.05])

    lo, hi = _level_range(model, result)
    z0 = result.value if isinstance(result, Solution) else lo
    slider = Slider(ax_slider, "Z level", lo, hi, valinit=z0)
    btn_shade = Button(ax_shade, _shading_button_label(ui["opts"]["show_halfplanes"]))

    ax_txt.text(0.0, 1.0, solution_summary(model, result), va="top", ha="left", fontsize=9, wrap=True)

    def render(z):
        drawn = plot_solution(ax_plot, model, result, ui["opts"], level=z)
        hover["scatter"] = drawn["scatter"]
        hover["label"] = ax_plot.annotate(
            "",
            xy=(0.0, 0.0),
            xytext=(8, 10),
            textcoords="offset points",
            bbox={"boxstyle": "round,pad=0.25", "fc": "white", "ec": "0.5", "alpha": 0.95},
            fontsize=8,
        )
        hover["label"].set_visible(False)
        fig.canvas.draw_idle()

    def on_toggle_shading(_):
        ui["opts"]["show_halfplanes"] = not ui["opts"]["show_halfplanes"]
        btn_shade.label.set_text(_shading_button_label(ui["opts"]["show_halfplanes"]))
        render(slider.val)

    def on_hover(event):
        if event.inaxes != ax_plot or hover["scatter"] is None or hover["label"] is None:
            return
        contains, info = hover["scatter"].contains(event)
        if contains and len(info.get("ind", [])):
            i = int(info["ind"][0])
            v = vertices[i]
            hover["label"].xy = (v.x, v.y)
            hover["label"].set_text(
                f"V{i+1}: ({v.x:.6g}, {v.y:.6g})  Z={_fnum(objective_value(model['objective'], v))}"
            )
            hover["label"].set_visible(True)
            fig.canvas.draw_idle()
        elif hover["label"].get_visible():
            hover["label"].set_visible(False)
            fig.canvas.draw_idle()

    slider.on_changed(render)
    btn_shade.on_clicked(on_toggle_shading)
    fig.canvas.mpl_connect("motion_notify_event", on_hover)

    render(z0)
    plt.show()


def _defaults(opts):
    out = dict(opts)
    out.setdefault("launch_viewer", False)
    out.setdefault("tol", EPS)
    out.setdefault("report_pdf_path", None)
    out.setdefault("show_halfplanes", True)
    out.setdefault("label_vertices", True)

    try:
        tol = float(out["tol"])
    except (TypeError, ValueError):
        raise ValueError("opts['tol'] must be a positive finite number.") from None
    if (not np.isfinite(tol)) or tol <= 0:
        raise ValueError("opts['tol'] must be a positive finite number.")
    out["tol"] = tol

    report_pdf_path = out["report_pdf_path"]
    if isinstance(report_pdf_path, bool):
        out["report_pdf_path"] = "graphical_report.pdf" if report_pdf_path else None
    elif report_pdf_path is None:
        pass
    elif isinstance(report_pdf_path, os.PathLike):
        out["report_pdf_path"] = os.fspath(report_pdf_path)
    elif isinstance(report_pdf_path, str) and report_pdf_path.strip():
        out["report_pdf_path"] = report_pdf_path.strip()
    else:
        raise ValueError("opts['report_pdf_path'] must be None, True/False, or a non-empty path string.")

    for key in ("launch_viewer", "show_halfplanes", "label_vertices"):
        if not isinstance(out[key], bool):
            raise ValueError(f"opts['{key}'] must be True or False.")
    return out
