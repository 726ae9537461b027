"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from charitycomply.database.models import (
    Organization as ORMOrganization,
    SafeguardingRecord as ORMSafeguardingRecord,
    IncomeRecord as ORMIncomeRecord,
    Country as ORMCountry,
    ScoreSnapshot as ORMScoreSnapshot,
)
from charitycomply.database.mappers import (
    organization_to_domain,
    safeguarding_record_to_domain,
    income_record_to_domain,
    country_to_domain,
    score_snapshot_to_domain,
)
from charitycomply.domain.entities import (
    Organization,
    SafeguardingRecord,
    IncomeRecord,
    CountryRisk,
    RiskLevel,
    ScoreSnapshot,
)


def test_organization_to_domain():
    orm_org = ORMOrganization(
        id=1, name="Hope Foundation", charity_number="1234567", created_at=datetime.now(UTC)
    )

    org = organization_to_domain(orm_org)

    assert isinstance(org, Organization)
    assert org.name == "Hope Foundation"
    assert org.charity_number == "1234567"


def test_safeguarding_record_to_domain():
    orm_record = ORMSafeguardingRecord(
        id=3,
        organization_id=1,
        person_name="Jane Smith",
        role_type="trustee",
        dbs_check_type="enhanced_barred",
        issue_date=date(2023, 2, 1),
        works_with_vulnerable_adults=True,
        is_active=False,
    )

    record = safeguarding_record_to_domain(orm_record)

    assert isinstance(record, SafeguardingRecord)
    assert record.role_type == "trustee"
    assert record.works_with_vulnerable_groups is True
    assert record.is_active is False
    assert record.effective_expiry_date(3) == date(2026, 2, 1)


def test_income_record_to_domain():
    orm_record = ORMIncomeRecord(
        id=7,
        organization_id=1,
        source="donation",
        amount=Decimal("99.99"),
        is_related_party=True,
        related_party_disclosure="Trustee",
    )

    record = income_record_to_domain(orm_record)

    assert isinstance(record, IncomeRecord)
    assert record.amount == Decimal("99.99")
    assert record.related_party_disclosed is True


def test_country_to_domain():
    country = country_to_domain(
        ORMCountry(code="KE", name="Kenya", risk_level="medium", additional_checks_required=True)
    )

    assert isinstance(country, CountryRisk)
    assert country.risk_level == RiskLevel.MEDIUM
    assert country.is_high_risk is False


def test_country_with_unrecognised_risk_is_high():
    country = country_to_domain(
        ORMCountry(code="ZZ", name="Nowhere", risk_level="severe", additional_checks_required=None)
    )

    assert country.risk_level == RiskLevel.HIGH
    assert country.additional_checks_required is False


def test_score_snapshot_to_domain():
    captured_at = datetime(2025, 5, 1, tzinfo=UTC)
    snapshot = score_snapshot_to_domain(
        ORMScoreSnapshot(id=2, organization_id=1, overall_score=72, captured_at=captured_at)
    )

    assert isinstance(snapshot, ScoreSnapshot)
    assert snapshot.overall_score == 72
    assert snapshot.captured_at == captured_at
