"""Tests for scoring configuration and banding helpers."""

import pytest
from dataclasses import replace
from decimal import Decimal

from charitycomply.domain.entities import ComplianceCategory, Grade
from charitycomply.domain.errors import ConfigurationError
from charitycomply.domain.scoring_config import (
    DEFAULT_SCORING_CONFIG,
    ScoringConfig,
    clamp_percentage,
    describe_scoring,
    grade_for,
    level_for,
    level_message,
    round_half_up,
    validate_config,
)


def test_default_weights_sum_to_one():
    """Category weights sum exactly to one."""
    total = sum(DEFAULT_SCORING_CONFIG.category_weights.values(), Decimal("0"))
    assert total == Decimal("1")


def test_default_weights():
    weights = DEFAULT_SCORING_CONFIG.category_weights
    assert weights[ComplianceCategory.SAFEGUARDING] == Decimal("0.40")
    assert weights[ComplianceCategory.OVERSEAS] == Decimal("0.30")
    assert weights[ComplianceCategory.FUNDRAISING] == Decimal("0.30")


def test_weights_not_summing_to_one_rejected():
    """A configuration whose weights don't sum to one is rejected."""
    config = ScoringConfig(
        category_weights={
            ComplianceCategory.SAFEGUARDING: Decimal("0.40"),
            ComplianceCategory.OVERSEAS: Decimal("0.30"),
            ComplianceCategory.FUNDRAISING: Decimal("0.20"),
        }
    )
    with pytest.raises(ConfigurationError) as excinfo:
        validate_config(config)
    assert "sum to 1" in str(excinfo.value)


def test_float_weights_rejected():
    config = ScoringConfig(
        category_weights={
            ComplianceCategory.SAFEGUARDING: 0.4,
            ComplianceCategory.OVERSEAS: Decimal("0.30"),
            ComplianceCategory.FUNDRAISING: Decimal("0.30"),
        }
    )
    with pytest.raises(ConfigurationError):
        validate_config(config)


def test_missing_weight_rejected():
    config = ScoringConfig(
        category_weights={
            ComplianceCategory.SAFEGUARDING: Decimal("0.50"),
            ComplianceCategory.OVERSEAS: Decimal("0.50"),
        }
    )
    with pytest.raises(ConfigurationError) as excinfo:
        validate_config(config)
    assert "fundraising" in str(excinfo.value)


def test_bands_must_descend():
    config = replace(DEFAULT_SCORING_CONFIG, level_bands=((75, "Good"), (90, "Excellent")))
    with pytest.raises(ConfigurationError):
        validate_config(config)


def test_band_threshold_out_of_range():
    config = replace(DEFAULT_SCORING_CONFIG, grade_bands=((120, Grade.A),))
    with pytest.raises(ConfigurationError):
        validate_config(config)


def test_negative_penalty_rejected():
    config = replace(DEFAULT_SCORING_CONFIG, dbs_expired_penalty=-5)
    with pytest.raises(ConfigurationError) as excinfo:
        validate_config(config)
    assert "dbs_expired_penalty" in str(excinfo.value)


def test_validate_config_returns_config():
    config = ScoringConfig()
    assert validate_config(config) is config


@pytest.mark.parametrize(
    "percentage,expected",
    [(100, "Excellent"), (90, "Excellent"), (89, "Good"), (75, "Good"), (74, "Fair"), (50, "Fair"), (49, "Poor"), (0, "Poor")],
)
def test_level_for(percentage, expected):
    assert level_for(percentage) == expected


@pytest.mark.parametrize(
    "percentage,expected",
    [(95, Grade.A), (90, Grade.A), (84, Grade.B), (80, Grade.B), (79, Grade.C), (60, Grade.D), (59, Grade.F), (0, Grade.F)],
)
def test_grade_for(percentage, expected):
    assert grade_for(percentage) == expected


def test_round_half_up():
    """Halves round up rather than to even."""
    assert round_half_up(Decimal("83.5")) == 84
    assert round_half_up(Decimal("84.5")) == 85
    assert round_half_up(Decimal("84.49")) == 84
    assert round_half_up(2.5) == 3
    assert round_half_up(7) == 7


def test_clamp_percentage():
    assert clamp_percentage(-10) == 0
    assert clamp_percentage(150) == 100
    assert clamp_percentage(42) == 42


def test_level_message():
    assert "Urgent" in level_message("Poor")
    assert level_message("Not Started") != ""
    assert level_message("Unknown") == ""


def test_describe_scoring_lists_weights_and_penalties():
    rows = dict(describe_scoring())
    assert rows["Safeguarding weight"] == "40%"
    assert rows["Overseas weight"] == "30%"
    assert rows["Fundraising weight"] == "30%"
    assert rows["Expired DBS check"] == "-20 points each"
    assert rows["Grade A"] == ">= 90%"
