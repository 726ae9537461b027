"""Tests for certificate eligibility."""

from datetime import date

from charitycomply.domain.certificates import (
    ACHIEVEMENT_THRESHOLD,
    CERTIFICATE_TEMPLATES,
    IMPROVEMENT_POINTS,
    MILESTONE_THRESHOLD,
    VERIFICATION_ALPHABET,
    eligible_certificates,
    generate_verification_code,
)
from charitycomply.domain.entities import (
    CategoryBreakdown,
    ComplianceStatistics,
    OverallScore,
    Trend,
    TrendDirection,
)
from charitycomply.domain.scoring import build_category_score
from charitycomply.domain.scoring_config import grade_for, level_for

AS_OF = date(2025, 6, 1)


def statistics(percentage, change=None):
    category = build_category_score(percentage, 1)
    trend = Trend()
    if change is not None:
        trend = Trend(direction=TrendDirection.UP, change=change, last_month=percentage - change)
    return ComplianceStatistics(
        organization_id=1,
        as_of=AS_OF,
        overall=OverallScore(percentage, level_for(percentage), grade_for(percentage)),
        breakdown=CategoryBreakdown(category, category, category),
        trends=trend,
    )


def test_below_eighty_earns_nothing():
    assert eligible_certificates("Hope Foundation", statistics(79)) == []


def test_compliance_achievement_at_eighty():
    certificates = eligible_certificates("Hope Foundation", statistics(80))
    assert [c.type for c in certificates] == ["compliance-achievement"]
    certificate = certificates[0]
    assert certificate.issued_to == "Hope Foundation"
    assert certificate.issued_date == AS_OF


def test_full_compliance_earns_milestone():
    certificates = eligible_certificates("Hope Foundation", statistics(100))
    assert [c.type for c in certificates] == ["compliance-achievement", "milestone-reached"]


def test_improvement_award():
    certificates = eligible_certificates("Hope Foundation", statistics(65, change=20))
    assert [c.type for c in certificates] == ["improvement-award"]

    assert eligible_certificates("Hope Foundation", statistics(65, change=19)) == []


def test_explicit_issue_date():
    certificates = eligible_certificates("Hope Foundation", statistics(90), issued_date=date(2025, 7, 4))
    assert certificates[0].issued_date == date(2025, 7, 4)


def test_verification_code_format():
    code = generate_verification_code()
    assert len(code) == 8
    assert all(ch in VERIFICATION_ALPHABET for ch in code)
    assert code == code.upper()


def test_thresholds_drive_eligibility_and_wording():
    by_type = {t.type: t for t in CERTIFICATE_TEMPLATES}

    assert f"{ACHIEVEMENT_THRESHOLD}%" in by_type["compliance-achievement"].description
    assert by_type["milestone-reached"].subtitle == f"{MILESTONE_THRESHOLD}% compliance score"
    assert f"{IMPROVEMENT_POINTS} points" in by_type["improvement-award"].description

    assert eligible_certificates("Hope", statistics(ACHIEVEMENT_THRESHOLD - 1)) == []
    assert eligible_certificates("Hope", statistics(ACHIEVEMENT_THRESHOLD))
    assert eligible_certificates("Hope", statistics(50, change=IMPROVEMENT_POINTS))
