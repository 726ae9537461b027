"""Safeguarding record domain service."""

from datetime import date
from typing import Optional

from charitycomply.database.base import Database
from charitycomply.domain.cache import NullStatisticsCache, StatisticsCache
from charitycomply.domain.entities import (
    DBS_CHECK_TYPES,
    SAFEGUARDING_ROLE_TYPES,
    SafeguardingRecord,
)
from charitycomply.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_record_reference,
    invalid_choice,
    organization_not_found,
    record_not_found,
)


class SafeguardingService:
    """Service for managing DBS checks and safeguarding records."""

    def __init__(self, db: Database, cache: Optional[StatisticsCache] = None):
        """Initialize safeguarding service.

        Args:
            db: Database instance
            cache: Statistics cache to invalidate when records change
        """
        self.db = db
        self.cache = cache or NullStatisticsCache()

    def add_record(
        self,
        organization_id: int,
        person_name: str,
        role_type: str,
        role_title: Optional[str] = None,
        dbs_check_type: Optional[str] = None,
        dbs_certificate_number: Optional[str] = None,
        issue_date: Optional[date] = None,
        expiry_date: Optional[date] = None,
        training_completed: Optional[bool] = None,
        training_date: Optional[date] = None,
        works_with_children: Optional[bool] = None,
        works_with_vulnerable_adults: Optional[bool] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Add a safeguarding record.

        Args:
            organization_id: Owning organization
            person_name: Name of the person checked
            role_type: employee, volunteer, trustee or contractor
            role_title: Optional job title
            dbs_check_type: basic, standard, enhanced or enhanced_barred;
                None for reference-only records
            dbs_certificate_number: Optional certificate number, unique per organization
            issue_date: Certificate issue date
            expiry_date: Certificate expiry date (derived from issue date when omitted)
            training_completed: Whether safeguarding training is complete
            training_date: Date training was completed
            works_with_children: Role involves children
            works_with_vulnerable_adults: Role involves vulnerable adults
            notes: Free text

        Returns:
            Record ID

        Raises:
            NotFoundError: If organization doesn't exist
            ValidationError: If enum values or dates are invalid
            ConflictError: If the certificate number is already recorded
        """
        if self.db.get_organization(organization_id) is None:
            raise NotFoundError(organization_not_found(organization_id))

        person_name = person_name.strip()
        if not person_name:
            raise ValidationError("Person name must not be empty")
        if role_type not in SAFEGUARDING_ROLE_TYPES:
            raise ValidationError(invalid_choice("role type", role_type, list(SAFEGUARDING_ROLE_TYPES)))
        if dbs_check_type is not None and dbs_check_type not in DBS_CHECK_TYPES:
            raise ValidationError(invalid_choice("DBS check type", dbs_check_type, list(DBS_CHECK_TYPES)))
        if issue_date is not None and expiry_date is not None and expiry_date < issue_date:
            raise ValidationError("Expiry date cannot be before issue date")

        if dbs_certificate_number:
            if self.db.safeguarding_reference_exists(organization_id, dbs_certificate_number):
                raise ConflictError(
                    duplicate_record_reference("safeguarding", dbs_certificate_number, organization_id)
                )

        record_id = self.db.create_safeguarding_record(
            organization_id=organization_id,
            person_name=person_name,
            role_type=role_type,
            role_title=role_title,
            dbs_check_type=dbs_check_type,
            dbs_certificate_number=dbs_certificate_number,
            issue_date=issue_date,
            expiry_date=expiry_date,
            training_completed=training_completed,
            training_date=training_date,
            works_with_children=works_with_children,
            works_with_vulnerable_adults=works_with_vulnerable_adults,
            notes=notes,
        )
        self.cache.invalidate(organization_id)
        return record_id

    def get_record(self, record_id: int) -> Optional[SafeguardingRecord]:
        """Get safeguarding record by ID."""
        return self.db.get_safeguarding_record(record_id)

    def list_records(self, organization_id: int, include_inactive: bool = False) -> list[SafeguardingRecord]:
        """List safeguarding records, active ones only by default."""
        return self.db.list_safeguarding_records(organization_id, include_inactive=include_inactive)

    def deactivate_record(self, record_id: int) -> None:
        """Flag a record as superseded. Records are kept for the audit trail.

        Raises:
            NotFoundError: If record doesn't exist
        """
        record = self.db.get_safeguarding_record(record_id)
        if record is None:
            raise NotFoundError(record_not_found("safeguarding", record_id))
        self.db.set_safeguarding_record_active(record_id, False)
        self.cache.invalidate(record.organization_id)
