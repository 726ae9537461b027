"""Weighted overall score."""

from decimal import Decimal

from charitycomply.domain.entities import CategoryScore, ComplianceCategory, OverallScore
from charitycomply.domain.scoring_config import (
    DEFAULT_SCORING_CONFIG,
    ScoringConfig,
    clamp_percentage,
    grade_for,
    level_for,
    round_half_up,
)


def aggregate_scores(
    safeguarding: CategoryScore,
    overseas: CategoryScore,
    fundraising: CategoryScore,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> OverallScore:
    """Combine the three category percentages into an overall score.

    Args:
        safeguarding: Safeguarding category score
        overseas: Overseas category score
        fundraising: Fundraising category score
        config: Scoring configuration supplying weights and bands

    Returns:
        OverallScore with percentage, level and grade
    """
    weights = config.category_weights
    weighted = (
        Decimal(safeguarding.percentage) * weights[ComplianceCategory.SAFEGUARDING]
        + Decimal(overseas.percentage) * weights[ComplianceCategory.OVERSEAS]
        + Decimal(fundraising.percentage) * weights[ComplianceCategory.FUNDRAISING]
    )
    percentage = clamp_percentage(round_half_up(weighted))

    if not (safeguarding.has_data or overseas.has_data or fundraising.has_data):
        level = config.no_data_level
    else:
        level = level_for(percentage, config)

    return OverallScore(
        percentage=percentage,
        level=level,
        grade=grade_for(percentage, config),
    )
