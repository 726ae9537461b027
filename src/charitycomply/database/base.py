"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from charitycomply.domain.entities import (
    Organization,
    SafeguardingRecord,
    OverseasActivity,
    IncomeRecord,
    CountryRisk,
    ScoreSnapshot,
)


class Database(ABC):
    """Abstract database interface for charitycomply.

    Read methods used by the statistics computation (the list_* record
    methods, get_country and get_latest_score_snapshot) raise FetchError when
    the underlying store fails.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Organization operations
    @abstractmethod
    def create_organization(self, name: str, charity_number: Optional[str] = None) -> int:
        """Create a new organization. Returns organization ID."""
        pass

    @abstractmethod
    def get_organization(self, organization_id: int) -> Optional[Organization]:
        """Get organization by ID.

        Raises:
            FetchError: If the store cannot be read
        """
        pass

    @abstractmethod
    def get_organization_by_name(self, name: str) -> Optional[Organization]:
        """Get organization by name."""
        pass

    @abstractmethod
    def list_organizations(self) -> list[Organization]:
        """List all organizations."""
        pass

    @abstractmethod
    def update_organization(
        self, organization_id: int, name: str, charity_number: Optional[str] = None
    ) -> None:
        """Update organization name and optionally charity number."""
        pass

    # Safeguarding operations
    @abstractmethod
    def create_safeguarding_record(
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
        """Create a safeguarding record. Returns record ID."""
        pass

    @abstractmethod
    def get_safeguarding_record(self, record_id: int) -> Optional[SafeguardingRecord]:
        """Get safeguarding record by ID."""
        pass

    @abstractmethod
    def list_safeguarding_records(
        self, organization_id: int, include_inactive: bool = True
    ) -> list[SafeguardingRecord]:
        """List safeguarding records for an organization."""
        pass

    @abstractmethod
    def set_safeguarding_record_active(self, record_id: int, is_active: bool) -> None:
        """Flag a safeguarding record active or inactive."""
        pass

    @abstractmethod
    def safeguarding_reference_exists(self, organization_id: int, certificate_number: str) -> bool:
        """Check if a DBS certificate number is already recorded for the organization."""
        pass

    # Overseas operations
    @abstractmethod
    def create_overseas_activity(
        self,
        organization_id: int,
        activity_name: str,
        country_code: str,
        amount_gbp: Decimal,
        activity_type: str = "other",
        partner_name: Optional[str] = None,
        transfer_method: Optional[str] = None,
        transfer_date: Optional[date] = None,
        transfer_reference: Optional[str] = None,
        approval_required: Optional[bool] = None,
        approval_obtained: Optional[bool] = None,
        sanctions_check_completed: Optional[bool] = None,
    ) -> int:
        """Create an overseas activity. Returns activity ID."""
        pass

    @abstractmethod
    def get_overseas_activity(self, activity_id: int) -> Optional[OverseasActivity]:
        """Get overseas activity by ID."""
        pass

    @abstractmethod
    def list_overseas_activities(self, organization_id: int) -> list[OverseasActivity]:
        """List overseas activities for an organization."""
        pass

    @abstractmethod
    def overseas_reference_exists(self, organization_id: int, transfer_reference: str) -> bool:
        """Check if a transfer reference is already recorded for the organization."""
        pass

    # Income operations
    @abstractmethod
    def create_income_record(
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
        """Create an income record. Returns record ID."""
        pass

    @abstractmethod
    def get_income_record(self, record_id: int) -> Optional[IncomeRecord]:
        """Get income record by ID."""
        pass

    @abstractmethod
    def list_income_records(self, organization_id: int) -> list[IncomeRecord]:
        """List income records for an organization."""
        pass

    @abstractmethod
    def update_income_gift_aid_claimed(self, record_id: int, claimed: bool) -> None:
        """Set the Gift Aid claimed flag on an income record."""
        pass

    @abstractmethod
    def income_reference_exists(self, organization_id: int, reference_number: str) -> bool:
        """Check if an income reference number is already recorded for the organization."""
        pass

    # Country risk operations
    @abstractmethod
    def upsert_country(
        self, code: str, name: str, risk_level: str, additional_checks_required: bool
    ) -> None:
        """Create or replace a country risk entry."""
        pass

    @abstractmethod
    def get_country(self, code: str) -> Optional[CountryRisk]:
        """Get country risk entry by ISO code."""
        pass

    @abstractmethod
    def list_countries(self) -> list[CountryRisk]:
        """List all country risk entries."""
        pass

    # Score snapshot operations
    @abstractmethod
    def create_score_snapshot(
        self, organization_id: int, overall_score: int, captured_at: Optional[datetime] = None
    ) -> int:
        """Persist an overall score snapshot. Returns snapshot ID."""
        pass

    @abstractmethod
    def get_latest_score_snapshot(
        self, organization_id: int, before: Optional[datetime] = None
    ) -> Optional[ScoreSnapshot]:
        """Get the most recent snapshot, optionally only those captured before a time."""
        pass

    @abstractmethod
    def list_score_snapshots(
        self, organization_id: int, limit: Optional[int] = None
    ) -> list[ScoreSnapshot]:
        """List snapshots newest first."""
        pass
