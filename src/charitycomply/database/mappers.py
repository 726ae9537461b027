"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so scoring code never depends on the
database schema.
"""

from charitycomply.domain import entities as domain
from charitycomply.database.models import (
    Organization as ORMOrganization,
    SafeguardingRecord as ORMSafeguardingRecord,
    OverseasActivity as ORMOverseasActivity,
    IncomeRecord as ORMIncomeRecord,
    Country as ORMCountry,
    ScoreSnapshot as ORMScoreSnapshot,
)


def organization_to_domain(orm_org: ORMOrganization) -> domain.Organization:
    """Convert SQLAlchemy Organization model to domain Organization entity."""
    return domain.Organization(
        id=orm_org.id,
        name=orm_org.name,
        charity_number=orm_org.charity_number,
        created_at=orm_org.created_at,
    )


def safeguarding_record_to_domain(orm_record: ORMSafeguardingRecord) -> domain.SafeguardingRecord:
    """Convert SQLAlchemy SafeguardingRecord model to domain SafeguardingRecord entity."""
    return domain.SafeguardingRecord(
        id=orm_record.id,
        organization_id=orm_record.organization_id,
        person_name=orm_record.person_name,
        role_type=orm_record.role_type,
        role_title=orm_record.role_title,
        dbs_check_type=orm_record.dbs_check_type,
        dbs_certificate_number=orm_record.dbs_certificate_number,
        issue_date=orm_record.issue_date,
        expiry_date=orm_record.expiry_date,
        training_completed=orm_record.training_completed,
        training_date=orm_record.training_date,
        works_with_children=orm_record.works_with_children,
        works_with_vulnerable_adults=orm_record.works_with_vulnerable_adults,
        is_active=orm_record.is_active,
        notes=orm_record.notes,
        created_at=orm_record.created_at,
    )


def overseas_activity_to_domain(orm_activity: ORMOverseasActivity) -> domain.OverseasActivity:
    """Convert SQLAlchemy OverseasActivity model to domain OverseasActivity entity."""
    return domain.OverseasActivity(
        id=orm_activity.id,
        organization_id=orm_activity.organization_id,
        activity_name=orm_activity.activity_name,
        activity_type=orm_activity.activity_type,
        country_code=orm_activity.country_code,
        partner_name=orm_activity.partner_name,
        amount_gbp=orm_activity.amount_gbp,
        transfer_method=orm_activity.transfer_method,
        transfer_date=orm_activity.transfer_date,
        transfer_reference=orm_activity.transfer_reference,
        approval_required=orm_activity.approval_required,
        approval_obtained=orm_activity.approval_obtained,
        sanctions_check_completed=orm_activity.sanctions_check_completed,
        created_at=orm_activity.created_at,
    )


def income_record_to_domain(orm_record: ORMIncomeRecord) -> domain.IncomeRecord:
    """Convert SQLAlchemy IncomeRecord model to domain IncomeRecord entity."""
    return domain.IncomeRecord(
        id=orm_record.id,
        organization_id=orm_record.organization_id,
        source=orm_record.source,
        amount=orm_record.amount,
        date_received=orm_record.date_received,
        donor_name=orm_record.donor_name,
        reference_number=orm_record.reference_number,
        documentation_complete=orm_record.documentation_complete,
        gift_aid_eligible=orm_record.gift_aid_eligible,
        gift_aid_claimed=orm_record.gift_aid_claimed,
        is_restricted=orm_record.is_restricted,
        is_related_party=orm_record.is_related_party,
        related_party_disclosure=orm_record.related_party_disclosure,
        created_at=orm_record.created_at,
    )


def country_to_domain(orm_country: ORMCountry) -> domain.CountryRisk:
    """Convert SQLAlchemy Country model to domain CountryRisk entity.

    An unrecognised stored risk level maps to high risk.
    """
    try:
        risk_level = domain.RiskLevel(orm_country.risk_level)
    except ValueError:
        risk_level = domain.RiskLevel.HIGH
    return domain.CountryRisk(
        code=orm_country.code,
        name=orm_country.name,
        risk_level=risk_level,
        additional_checks_required=bool(orm_country.additional_checks_required),
    )


def score_snapshot_to_domain(orm_snapshot: ORMScoreSnapshot) -> domain.ScoreSnapshot:
    """Convert SQLAlchemy ScoreSnapshot model to domain ScoreSnapshot entity."""
    return domain.ScoreSnapshot(
        id=orm_snapshot.id,
        organization_id=orm_snapshot.organization_id,
        overall_score=orm_snapshot.overall_score,
        captured_at=orm_snapshot.captured_at,
    )
