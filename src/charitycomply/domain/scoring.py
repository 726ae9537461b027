"""Category scorers.

Each scorer turns one organization's records for a category into a
CategoryResult. Scorers never raise on empty or incomplete input: a missing
value is treated as the condition not being satisfied, which lowers the score
rather than failing the computation.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from charitycomply.domain.entities import (
    CategoryResult,
    CategoryScore,
    ComplianceCategory,
    CountryRisk,
    Finding,
    FindingKind,
    IncomeRecord,
    OverseasActivity,
    SafeguardingRecord,
)
from charitycomply.domain.scoring_config import (
    DEFAULT_SCORING_CONFIG,
    ScoringConfig,
    clamp_percentage,
    level_for,
    round_half_up,
)

CountryLookup = Callable[[str], Optional[CountryRisk]]


def build_category_score(
    score: int,
    record_count: int,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> CategoryScore:
    """Build a CategoryScore from raw points.

    A category without records gets the configured "no data" score instead
    of the points total.
    """
    max_score = config.base_score
    if record_count == 0:
        return CategoryScore(
            percentage=config.no_data_percentage,
            level=config.no_data_level,
            score=0,
            max_score=max_score,
            record_count=0,
        )
    score = max(0, min(max_score, score))
    percentage = clamp_percentage(round_half_up(Decimal(100 * score) / Decimal(max_score)))
    return CategoryScore(
        percentage=percentage,
        level=level_for(percentage, config),
        score=score,
        max_score=max_score,
        record_count=record_count,
    )


def score_safeguarding(
    records: Iterable[SafeguardingRecord],
    today: date,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> CategoryResult:
    """Score DBS check currency for the active safeguarding records."""
    active = [r for r in records if r.is_active is not False]
    findings: list[Finding] = []

    for record in active:
        if record.requires_dbs:
            expiry = record.effective_expiry_date(config.dbs_renewal_years)
            if expiry is None:
                findings.append(
                    Finding(
                        kind=FindingKind.DBS_EXPIRED,
                        record_id=record.id,
                        points=config.dbs_expired_penalty,
                        detail=f"{record.person_name}: no issue or expiry date recorded",
                    )
                )
            elif expiry < today:
                findings.append(
                    Finding(
                        kind=FindingKind.DBS_EXPIRED,
                        record_id=record.id,
                        points=config.dbs_expired_penalty,
                        detail=f"{record.person_name}: expired {expiry.isoformat()}",
                    )
                )
            elif (expiry - today).days < config.dbs_expiry_warning_days:
                findings.append(
                    Finding(
                        kind=FindingKind.DBS_EXPIRING,
                        record_id=record.id,
                        points=config.dbs_expiring_penalty,
                        detail=f"{record.person_name}: expires {expiry.isoformat()}",
                    )
                )

        if record.works_with_vulnerable_groups and not record.training_completed:
            findings.append(
                Finding(
                    kind=FindingKind.TRAINING_INCOMPLETE,
                    record_id=record.id,
                    detail=f"{record.person_name}: safeguarding training not recorded",
                )
            )

    penalties = sum(f.points for f in findings)
    return CategoryResult(
        category=ComplianceCategory.SAFEGUARDING,
        score=build_category_score(config.base_score - penalties, len(active), config),
        findings=tuple(findings),
    )


def score_overseas(
    activities: Iterable[OverseasActivity],
    country_lookup: CountryLookup,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> CategoryResult:
    """Score approvals and sanctions checks for overseas activities."""
    activities = list(activities)
    findings: list[Finding] = []

    for activity in activities:
        code = (activity.country_code or "").strip().upper()
        country = country_lookup(code) if code else None
        if country is None:
            country = CountryRisk.unknown(code)

        if country.is_high_risk and activity.approval_obtained is not True:
            findings.append(
                Finding(
                    kind=FindingKind.UNAPPROVED_HIGH_RISK,
                    record_id=activity.id,
                    points=config.unapproved_high_risk_penalty,
                    detail=f"{activity.activity_name} ({code or 'no country'})",
                )
            )
        elif not country.is_high_risk and activity.approval_required and not activity.approval_obtained:
            findings.append(
                Finding(
                    kind=FindingKind.APPROVAL_PENDING,
                    record_id=activity.id,
                    detail=f"{activity.activity_name} ({code})",
                )
            )

        if country.additional_checks_required and activity.sanctions_check_completed is not True:
            findings.append(
                Finding(
                    kind=FindingKind.MISSING_SANCTIONS_CHECK,
                    record_id=activity.id,
                    points=config.missing_sanctions_check_penalty,
                    detail=f"{activity.activity_name} ({code or 'no country'})",
                )
            )

    penalties = sum(f.points for f in findings)
    return CategoryResult(
        category=ComplianceCategory.OVERSEAS,
        score=build_category_score(config.base_score - penalties, len(activities), config),
        findings=tuple(findings),
    )


def score_fundraising(
    records: Iterable[IncomeRecord],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> CategoryResult:
    """Score documentation, related-party disclosure and Gift Aid claims."""
    records = list(records)
    findings: list[Finding] = []
    if not records:
        return CategoryResult(
            category=ComplianceCategory.FUNDRAISING,
            score=build_category_score(0, 0, config),
        )

    documented = 0
    related_party_undisclosed = 0
    for record in records:
        if record.documentation_complete is True:
            documented += 1
        else:
            findings.append(
                Finding(
                    kind=FindingKind.INCOMPLETE_DOCUMENTATION,
                    record_id=record.id,
                    detail=f"{record.source} of {record.amount}",
                )
            )

        if record.is_related_party and not record.related_party_disclosed:
            related_party_undisclosed += 1
            findings.append(
                Finding(
                    kind=FindingKind.UNDISCLOSED_RELATED_PARTY,
                    record_id=record.id,
                    detail=record.donor_name or "related party",
                )
            )

        if record.gift_aid_eligible is True and record.gift_aid_claimed is not True:
            findings.append(
                Finding(
                    kind=FindingKind.UNCLAIMED_GIFT_AID,
                    record_id=record.id,
                    points=config.unclaimed_gift_aid_penalty,
                    detail=record.donor_name or f"{record.source} of {record.amount}",
                )
            )

    documentation_rate = Decimal(documented) / Decimal(len(records))
    score = round_half_up(documentation_rate * config.documentation_weight)
    if related_party_undisclosed == 0:
        score += config.related_party_bonus
    score -= sum(f.points for f in findings)

    return CategoryResult(
        category=ComplianceCategory.FUNDRAISING,
        score=build_category_score(score, len(records), config),
        findings=tuple(findings),
    )
