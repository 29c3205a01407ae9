import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from lp_types import Constraint  # noqa: E402


@pytest.fixture
def scenario_a():
    return [Constraint(1, 1, 10, "<="), Constraint(2, 1, 15, "<=")]


@pytest.fixture
def production_mix():
    return [
        Constraint(12, 6, 600, "<="),
        Constraint(0, 15, 300, "<="),
        Constraint(2, 8, 220, "<="),
        Constraint(0, 1, 10, ">="),
    ]
