"""Scoring thresholds, weights and banding.

Every number that influences a compliance score lives here so that the
scorers and anything that explains the score to a user read the same values.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from charitycomply.domain.entities import ComplianceCategory, Grade
from charitycomply.domain.errors import ConfigurationError

NO_DATA_LEVEL = "Not Started"

LEVEL_MESSAGES = {
    "Excellent": "Your charity is fully compliant with all tracked requirements",
    "Good": "Good compliance standing with minor areas for improvement",
    "Fair": "Several compliance issues need your attention",
    "Poor": "Urgent action required to meet compliance requirements",
    NO_DATA_LEVEL: "No records have been entered yet",
}


def _default_weights() -> dict[ComplianceCategory, Decimal]:
    return {
        ComplianceCategory.SAFEGUARDING: Decimal("0.40"),
        ComplianceCategory.OVERSEAS: Decimal("0.30"),
        ComplianceCategory.FUNDRAISING: Decimal("0.30"),
    }


@dataclass(frozen=True)
class ScoringConfig:
    """Named scoring constants.

    Level and grade bands are (minimum percentage, label) pairs in strictly
    descending order; a percentage below the last threshold gets the
    fallback label.
    """

    base_score: int = 100

    # Safeguarding
    dbs_expired_penalty: int = 20
    dbs_expiring_penalty: int = 10
    dbs_expiry_warning_days: int = 30
    dbs_renewal_years: int = 3

    # Overseas
    unapproved_high_risk_penalty: int = 15
    missing_sanctions_check_penalty: int = 10

    # Fundraising
    documentation_weight: int = 80
    related_party_bonus: int = 20
    unclaimed_gift_aid_penalty: int = 5

    category_weights: dict[ComplianceCategory, Decimal] = field(
        default_factory=_default_weights
    )

    level_bands: tuple[tuple[int, str], ...] = (
        (90, "Excellent"),
        (75, "Good"),
        (50, "Fair"),
    )
    fallback_level: str = "Poor"

    grade_bands: tuple[tuple[int, Grade], ...] = (
        (90, Grade.A),
        (80, Grade.B),
        (70, Grade.C),
        (60, Grade.D),
    )
    fallback_grade: Grade = Grade.F

    no_data_level: str = NO_DATA_LEVEL
    no_data_percentage: int = 0


def _check_bands(name: str, bands: tuple) -> None:
    previous = None
    for threshold, _label in bands:
        if not 0 <= threshold <= 100:
            raise ConfigurationError(
                f"{name} threshold {threshold} is outside the range 0-100"
            )
        if previous is not None and threshold >= previous:
            raise ConfigurationError(
                f"{name} thresholds must be strictly descending, got {threshold} after {previous}"
            )
        previous = threshold


def validate_config(config: ScoringConfig) -> ScoringConfig:
    """Check a configuration for internal consistency.

    Returns:
        The same configuration, so it can be used inline

    Raises:
        ConfigurationError: If weights, bands or penalties are inconsistent
    """
    weights = config.category_weights
    missing = [c.value for c in ComplianceCategory if c not in weights]
    if missing:
        raise ConfigurationError(f"Missing category weights: {', '.join(missing)}")
    for category, weight in weights.items():
        if not isinstance(weight, Decimal):
            raise ConfigurationError(
                f"Weight for {category.value} must be a Decimal, got {type(weight).__name__}"
            )
        if weight < 0:
            raise ConfigurationError(f"Weight for {category.value} is negative")
    total = sum(weights.values(), Decimal("0"))
    if total != Decimal("1"):
        raise ConfigurationError(f"Category weights must sum to 1, got {total}")

    _check_bands("Level band", config.level_bands)
    _check_bands("Grade band", config.grade_bands)

    non_negative = {
        "base_score": config.base_score,
        "dbs_expired_penalty": config.dbs_expired_penalty,
        "dbs_expiring_penalty": config.dbs_expiring_penalty,
        "dbs_expiry_warning_days": config.dbs_expiry_warning_days,
        "dbs_renewal_years": config.dbs_renewal_years,
        "unapproved_high_risk_penalty": config.unapproved_high_risk_penalty,
        "missing_sanctions_check_penalty": config.missing_sanctions_check_penalty,
        "documentation_weight": config.documentation_weight,
        "related_party_bonus": config.related_party_bonus,
        "unclaimed_gift_aid_penalty": config.unclaimed_gift_aid_penalty,
    }
    for name, value in non_negative.items():
        if value < 0:
            raise ConfigurationError(f"{name} must not be negative, got {value}")
    if config.base_score == 0:
        raise ConfigurationError("base_score must be positive")
    if not 0 <= config.no_data_percentage <= 100:
        raise ConfigurationError("no_data_percentage must be within 0-100")
    return config


DEFAULT_SCORING_CONFIG = validate_config(ScoringConfig())


def round_half_up(value: Union[Decimal, float, int]) -> int:
    """Round to the nearest integer, halves rounding up."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def clamp_percentage(value: int) -> int:
    """Clamp a value into [0, 100]."""
    return max(0, min(100, value))


def level_for(percentage: int, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> str:
    """Return the level label for a percentage."""
    for threshold, label in config.level_bands:
        if percentage >= threshold:
            return label
    return config.fallback_level


def grade_for(percentage: int, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> Grade:
    """Return the letter grade for a percentage."""
    for threshold, grade in config.grade_bands:
        if percentage >= threshold:
            return grade
    return config.fallback_grade


def level_message(level: str) -> str:
    """Return a one-line explanation of a level label."""
    return LEVEL_MESSAGES.get(level, "")


def describe_scoring(config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> list[tuple[str, str]]:
    """Explain how the score is calculated as (label, value) rows."""
    weights = config.category_weights
    rows = [
        ("Safeguarding weight", f"{weights[ComplianceCategory.SAFEGUARDING] * 100:.0f}%"),
        ("Overseas weight", f"{weights[ComplianceCategory.OVERSEAS] * 100:.0f}%"),
        ("Fundraising weight", f"{weights[ComplianceCategory.FUNDRAISING] * 100:.0f}%"),
        ("Expired DBS check", f"-{config.dbs_expired_penalty} points each"),
        (
            f"DBS check expiring within {config.dbs_expiry_warning_days} days",
            f"-{config.dbs_expiring_penalty} points each",
        ),
        ("DBS renewal period (when no expiry date)", f"{config.dbs_renewal_years} years"),
        (
            "High-risk overseas activity without approval",
            f"-{config.unapproved_high_risk_penalty} points each",
        ),
        (
            "Missing sanctions / due-diligence check",
            f"-{config.missing_sanctions_check_penalty} points each",
        ),
        ("Income documentation rate", f"up to {config.documentation_weight} points"),
        ("All related-party income disclosed", f"+{config.related_party_bonus} points"),
        ("Unclaimed Gift Aid", f"-{config.unclaimed_gift_aid_penalty} points each"),
    ]
    for threshold, label in config.level_bands:
        rows.append((f"Level '{label}'", f">= {threshold}%"))
    rows.append((f"Level '{config.fallback_level}'", "below the lowest band"))
    for threshold, grade in config.grade_bands:
        rows.append((f"Grade {grade.value}", f">= {threshold}%"))
    rows.append((f"Grade {config.fallback_grade.value}", "below the lowest band"))
    rows.append(
        (
            "Category with no records",
            f"{config.no_data_percentage}% ('{config.no_data_level}')",
        )
    )
    return rows
