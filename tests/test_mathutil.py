import pytest

from wclkit.mathutil import abs_int


def test_abs_int_negative():
    assert abs_int(-3) == 3


@pytest.mark.parametrize("n", [0, 1, 42, 2**63 - 1])
def test_abs_int_non_negative_unchanged(n):
    assert abs_int(n) == n


@pytest.mark.parametrize("n", [1, 17, 2**40, 2**63])
def test_abs_int_symmetric(n):
    assert abs_int(-n) == abs_int(n)
    assert abs_int(-n) >= 0