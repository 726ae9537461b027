"""Tests for the weighted overall score."""

import pytest
from decimal import Decimal, ROUND_HALF_UP
from itertools import product

from charitycomply.domain.aggregator import aggregate_scores
from charitycomply.domain.entities import Grade
from charitycomply.domain.scoring import build_category_score


def score(percentage, record_count=1):
    return build_category_score(percentage, record_count)


def test_example_overall_is_eighty_four():
    """0.4*70 + 0.3*85 + 0.3*100 = 83.5, rounded half up to 84."""
    overall = aggregate_scores(score(70), score(85), score(100))
    assert overall.percentage == 84
    assert overall.grade == Grade.B
    assert overall.level == "Good"


def test_all_perfect():
    overall = aggregate_scores(score(100), score(100), score(100))
    assert overall.percentage == 100
    assert overall.grade == Grade.A
    assert overall.level == "Excellent"


def test_no_data_anywhere_is_not_started():
    empty = build_category_score(0, 0)
    overall = aggregate_scores(empty, empty, empty)
    assert overall.percentage == 0
    assert overall.level == "Not Started"
    assert overall.grade == Grade.F


def test_missing_category_counts_as_zero():
    """A category without records contributes nothing to the weighted score."""
    empty = build_category_score(0, 0)
    overall = aggregate_scores(score(100), empty, score(100))
    assert overall.percentage == 70
    assert overall.level == "Fair"
    assert overall.grade == Grade.C


def test_to_dict():
    overall = aggregate_scores(score(70), score(85), score(100))
    assert overall.to_dict() == {"percentage": 84, "level": "Good", "grade": "B"}


def expected_overall(s, o, f):
    weighted = Decimal("0.4") * s + Decimal("0.3") * o + Decimal("0.3") * f
    return int(weighted.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@pytest.mark.parametrize(
    "s,o,f,expected",
    [
        (0, 0, 5, 2),
        (1, 0, 0, 0),
        (10, 25, 0, 12),
        (33, 67, 91, 61),
        (55, 45, 65, 55),
        (99, 98, 97, 98),
    ],
)
def test_weighted_formula_examples(s, o, f, expected):
    assert aggregate_scores(score(s), score(o), score(f)).percentage == expected


def test_weighted_formula_over_grid():
    for s, o, f in product(range(0, 101, 9), repeat=3):
        overall = aggregate_scores(score(s), score(o), score(f))
        assert overall.percentage == expected_overall(s, o, f), (s, o, f)
