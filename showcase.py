from graphical_method import graphical_method
from graphical_utils import _as_constraint, format_constraint, format_objective, solution_summary
from lp_types import Constraint, InvalidInputError, Objective

DEFAULT_PROBLEM = {
    "name": "Default form problem",
    "c": [1, 1],
    "direction": "maximize",
    "A": [
        [1, 1],
        [2, 1],
    ],
    "b": [10, 15],
    "sense": ["<=", "<="],
}

EXAMPLES = {
    "production": {
        "name": "2D Production Mix",
        "c": [70, 130],
        "direction": "maximize",
        "A": [
            [12, 6],
            [0, 15],
            [2, 8],
            [0, 1],
        ],
        "b": [600, 300, 220, 10],
        "sense": ["<=", "<=", "<=", ">="],
    },
    "mixed": {
        "name": "2D Mixed Constraints",
        "c": [5, 4],
        "direction": "maximize",
        "A": [
            [1, 1],
            [1, 0],
            [0, 1],
        ],
        "b": [4, 3, 1],
        "sense": [">=", "<=", "="],
    },
    "diet": {
        "name": "Minimum Cost Diet",
        "c": [3, 2],
        "direction": "minimize",
        "A": [
            [1, 1],
            [1, 2],
            [1, 0],
        ],
        "b": [4, 6, 5],
        "sense": [">=", ">=", "<="],
    },
    "form": {
        "name": "Two Resource Limits",
        "c": [1, 1],
        "direction": "maximize",
        "A": [
            [1, 1],
            [2, 1],
        ],
        "b": [10, 15],
        "sense": ["<=", "<="],
    },
    "open": {
        "name": "Open Region (no upper bound)",
        "c": [1, 1],
        "direction": "minimize",
        "A": [
            [1, 1],
        ],
        "b": [10],
        "sense": [">="],
    },
    "parallel": {
        "name": "Parallel Constraints",
        "c": [1, 1],
        "direction": "maximize",
        "A": [
            [1, 1],
            [1, 1],
        ],
        "b": [10, 5],
        "sense": ["<=", "<="],
    },
    "infeasible": {
        "name": "Contradictory Constraints",
        "c": [1, 1],
        "direction": "maximize",
        "A": [
            [1, 0],
            [1, 0],
        ],
        "b": [10, 5],
        "sense": [">=", "<="],
    },
}


def _normalize(raw):
    return raw.strip().lower()


def _pick_from_menu(prompt, options, default_key):
    while True:
        print(prompt)
        for i, opt in enumerate(options, start=1):
            marker = " (default)" if opt["key"] == default_key else ""
            print(f"  {i}) {opt['label']}{marker}")
        raw = _normalize(input("> "))

        if raw in {"q", "quit", "exit"}:
            raise KeyboardInterrupt
        if raw == "":
            return default_key
        if raw.isdigit():
            idx = int(raw) - 1
            if 0 <= idx < len(options):
                return options[idx]["key"]

        for opt in options:
            if raw in opt["aliases"]:
                return opt["key"]

        valid = ", ".join(opt["label"] for opt in options)
        print(f"Invalid choice. Enter a number or one of: {valid}.")
        print("Type q to quit.")


def _pick_problem():
    options = [
        {"key": key, "label": ex["name"], "aliases": {key}}
        for key, ex in EXAMPLES.items()
    ]
    options.append({"key": "custom", "label": "Custom problem", "aliases": {"custom", "c"}})
    return _pick_from_menu("Choose a problem:", options, default_key="production")


def _read_number(prompt, default):
    while True:
        raw = _normalize(input(f"{prompt} [{default:g}]: "))
        if raw in {"q", "quit", "exit"}:
            raise KeyboardInterrupt
        if raw == "":
            return float(default)
        try:
            return float(raw)
        except ValueError:
            print("Please enter a number. Type q to quit.")


def _read_direction(default):
    options = [
        {"key": "maximize", "label": "Maximize", "aliases": {"max", "maximize"}},
        {"key": "minimize", "label": "Minimize", "aliases": {"min", "minimize"}},
    ]
    return _pick_from_menu("Optimization direction:", options, default_key=default)


def _parse_row(raw, i=0):
    parts = raw.split()
    if len(parts) != 4:
        raise InvalidInputError("a constraint row is 'a b op value', e.g. '2 1 <= 15'.")
    a, b, op, value = parts
    return _as_constraint((a, b, value, op), i)


def _default_rows():
    return [
        Constraint(float(r[0]), float(r[1]), float(v), s)
        for r, v, s in zip(DEFAULT_PROBLEM["A"], DEFAULT_PROBLEM["b"], DEFAULT_PROBLEM["sense"])
    ]


def _print_rows(rows):
    if not rows:
        print("  (no constraints)")
    for i, row in enumerate(rows, start=1):
        print(f"  {i}) {format_constraint(row)}")


def _read_constraints():
    rows = _default_rows()
    print("Constraints (x1, x2 >= 0 are implicit):")
    _print_rows(rows)
    print("Add rows as 'a b op value'. 'del k' removes row k, 'reset' restores the defaults.")
    print("Press Enter on an empty line to solve.")
    while True:
        raw = input("+ ").strip()
        cmd = _normalize(raw)
        if cmd in {"q", "quit", "exit"}:
            raise KeyboardInterrupt
        if cmd == "":
            if rows:
                return rows
            print("Add at least one constraint.")
            continue
        if cmd == "reset":
            rows = _default_rows()
            _print_rows(rows)
            continue
        if cmd.startswith("del"):
            arg = cmd[3:].strip()
            if arg.isdigit() and 1 <= int(arg) <= len(rows):
                del rows[int(arg) - 1]
                _print_rows(rows)
            else:
                print(f"Row number must be between 1 and {len(rows)}.")
            continue
        try:
            rows.append(_parse_row(raw, len(rows)))
        except InvalidInputError as exc:
            print(f"Invalid row: {exc}")
            continue
        _print_rows(rows)


def _read_custom_problem():
    print("Objective Z = a*x1 + b*x2")
    a = _read_number("a", DEFAULT_PROBLEM["c"][0])
    b = _read_number("b", DEFAULT_PROBLEM["c"][1])
    direction = _read_direction(DEFAULT_PROBLEM["direction"])
    rows = _read_constraints()
    return {
        "name": "Custom problem",
        "c": [a, b],
        "direction": direction,
        "A": [[r.a, r.b] for r in rows],
        "b": [r.value for r in rows],
        "sense": [r.relation for r in rows],
    }


def _confirm(prompt, default=True):
    hint = "[Y/n]" if default else "[y/N]"
    while True:
        raw = _normalize(input(f"{prompt} {hint}: "))
        if raw == "":
            return default
        if raw in {"y", "yes"}:
            return True
        if raw in {"n", "no"}:
            return False
        if raw in {"q", "quit", "exit"}:
            raise KeyboardInterrupt
        print("Please answer y or n. Type q to quit.")


def run_showcase():
    print("Graphical Method Showcase")
    print("-------------------------")
    print("Tip: choose with number keys. Press Enter to accept defaults. Type q to quit.")
    try:
        key = _pick_problem()
        problem = _read_custom_problem() if key == "custom" else EXAMPLES[key]
        launch_viewer = _confirm("Open the interactive viewer?", default=False)
        report = _confirm("Write a PDF report?", default=False)
    except KeyboardInterrupt:
        print("\nCancelled.")
        return None

    objective = Objective(float(problem["c"][0]), float(problem["c"][1]))
    print(f"\nRunning: {problem['name']}")
    print(format_objective(objective, problem["direction"]))

    res = graphical_method(
        problem["c"],
        problem["A"],
        problem["b"],
        problem["sense"],
        problem["direction"],
        opts={
            "launch_viewer": launch_viewer,
            "report_pdf_path": report,
        },
    )

    print()
    print(solution_summary(res["model"], res["solution"]))
    if report:
        print("\nReport written to graphical_report.pdf")
    return res


if __name__ == "__main__":
    run_showcase()
