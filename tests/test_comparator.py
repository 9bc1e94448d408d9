"""
Equals / LessThan over naturals.
"""

import pytest

from peano_eval import (
    FIVE,
    FOUR,
    ONE,
    TEN,
    THREE,
    TRUE,
    TWO,
    ZERO,
    IllTypedQueryError,
    equals,
    less_than,
    minus,
    num,
    plus,
    reify,
)


def test_two_plus_two_is_four() -> None:
    two_plus_two = plus(TWO, TWO)
    assert reify(equals(two_plus_two, FOUR)) is True
    minus_one = minus(two_plus_two, ONE)
    assert reify(equals(minus_one, THREE)) is True


def test_zero_is_not_one() -> None:
    assert reify(equals(ZERO, ONE)) is False
    assert reify(equals(ONE, ZERO)) is False
    assert reify(equals(ZERO, ZERO)) is True


def test_less_than_values() -> None:
    assert reify(less_than(THREE, FIVE)) is True
    assert reify(less_than(FIVE, FIVE)) is False
    assert reify(less_than(TEN, FIVE)) is False
    assert reify(less_than(ZERO, ZERO)) is False
    assert reify(less_than(ZERO, ONE)) is True
    assert reify(less_than(ONE, ZERO)) is False


@pytest.mark.parametrize("a", range(0, 9))
@pytest.mark.parametrize("b", range(0, 9))
def test_comparison_grid(a: int, b: int) -> None:
    ma, mb = num(a), num(b)
    assert reify(equals(ma, mb)) is (a == b)
    assert reify(less_than(ma, mb)) is (a < b)


def test_comparator_rejects_booleans() -> None:
    with pytest.raises(IllTypedQueryError):
        equals(ONE, TRUE)
    with pytest.raises(IllTypedQueryError):
        less_than(TRUE, ONE)
