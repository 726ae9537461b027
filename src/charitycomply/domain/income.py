"""Income and fundraising record domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from charitycomply.database.base import Database
from charitycomply.domain.cache import NullStatisticsCache, StatisticsCache
from charitycomply.domain.entities import INCOME_SOURCES, IncomeRecord
from charitycomply.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_record_reference,
    invalid_choice,
    organization_not_found,
    record_not_found,
)


class IncomeService:
    """Service for managing income records."""

    def __init__(self, db: Database, cache: Optional[StatisticsCache] = None):
        """Initialize income service.

        Args:
            db: Database instance
            cache: Statistics cache to invalidate when records change
        """
        self.db = db
        self.cache = cache or NullStatisticsCache()

    def add_record(
        self,
        organization_id: int,
        source: str,
        amount: Decimal,
        date_received: Optional[date] = None,
        donor_name: Optional[str] = None,
        reference_number: Optional[str] = None,
        documentation_complete: Optional[bool] = None,
        gift_aid_eligible: Optional[bool] = None,
        gift_aid_claimed: Optional[bool] = None,
        is_restricted: Optional[bool] = None,
        is_related_party: Optional[bool] = None,
        related_party_disclosure: Optional[str] = None,
    ) -> int:
        """Add an income record.

        Returns:
            Record ID

        Raises:
            NotFoundError: If organization doesn't exist
            ValidationError: If source is unknown
            ConflictError: If the reference number is already recorded
        """
        if self.db.get_organization(organization_id) is None:
            raise NotFoundError(organization_not_found(organization_id))
        if source not in INCOME_SOURCES:
            raise ValidationError(invalid_choice("income source", source, list(INCOME_SOURCES)))

        if reference_number:
            if self.db.income_reference_exists(organization_id, reference_number):
                raise ConflictError(
                    duplicate_record_reference("income", reference_number, organization_id)
                )

        record_id = self.db.create_income_record(
            organization_id=organization_id,
            source=source,
            amount=amount,
            date_received=date_received,
            donor_name=donor_name,
            reference_number=reference_number,
            documentation_complete=documentation_complete,
            gift_aid_eligible=gift_aid_eligible,
            gift_aid_claimed=gift_aid_claimed,
            is_restricted=is_restricted,
            is_related_party=is_related_party,
            related_party_disclosure=related_party_disclosure,
        )
        self.cache.invalidate(organization_id)
        return record_id

    def get_record(self, record_id: int) -> Optional[IncomeRecord]:
        """Get income record by ID."""
        return self.db.get_income_record(record_id)

    def list_records(self, organization_id: int) -> list[IncomeRecord]:
        """List income records for an organization."""
        return self.db.list_income_records(organization_id)

    def mark_gift_aid_claimed(self, record_id: int) -> None:
        """Record that Gift Aid has been claimed on a donation.

        Raises:
            NotFoundError: If record doesn't exist
            ValidationError: If the donation is not Gift Aid eligible
        """
        record = self.db.get_income_record(record_id)
        if record is None:
            raise NotFoundError(record_not_found("income", record_id))
        if record.gift_aid_eligible is not True:
            raise ValidationError(f"Income record {record_id} is not Gift Aid eligible")
        self.db.update_income_gift_aid_claimed(record_id, True)
        self.cache.invalidate(record.organization_id)
