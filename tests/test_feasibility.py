import pytest

from graphical_utils import is_feasible
from lp_types import Constraint, InvalidInputError

LE = Constraint(1, 1, 10, "<=")
GE = Constraint(1, 2, 6, ">=")
EQ = Constraint(1, 1, 4, "=")


def test_less_equal_allows_tolerance_band():
    assert is_feasible((5, 5), [LE])
    assert is_feasible((5, 5.0009), [LE])
    assert not is_feasible((5, 5.002), [LE])


def test_greater_equal_allows_tolerance_band():
    assert is_feasible((2, 2), [GE])
    assert is_feasible((2, 1.9996), [GE])
    assert not is_feasible((0, 2.9), [GE])


def test_equality_needs_to_be_within_tolerance():
    assert is_feasible((3, 1), [EQ])
    assert is_feasible((3, 1.0005), [EQ])
    assert not is_feasible((3, 1.002), [EQ])
    assert not is_feasible((0, 0), [EQ])


def test_every_constraint_must_hold():
    assert is_feasible((1, 3), [LE, GE])
    assert not is_feasible((0, 0), [LE, GE])


def test_no_constraints_means_feasible():
    assert is_feasible((123.0, 4.5), [])


def test_custom_tolerance():
    assert not is_feasible((5, 5.05), [LE])
    assert is_feasible((5, 5.05), [LE], tol=0.1)


def test_unknown_relation_raises():
    with pytest.raises(InvalidInputError):
        is_feasible((0, 0), [Constraint(1, 1, 1, "<")])
