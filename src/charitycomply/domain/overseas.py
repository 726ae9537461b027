"""Overseas activity and country risk domain services."""

from datetime import date
from decimal import Decimal
from typing import Optional

from charitycomply.database.base import Database
from charitycomply.domain.cache import NullStatisticsCache, StatisticsCache
from charitycomply.domain.entities import (
    ACTIVITY_TYPES,
    TRANSFER_METHODS,
    CountryRisk,
    OverseasActivity,
    RiskLevel,
)
from charitycomply.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_record_reference,
    invalid_choice,
    organization_not_found,
)


def normalize_country_code(code: str) -> str:
    """Upper-case and validate a two-letter ISO country code."""
    code = (code or "").strip().upper()
    if len(code) != 2 or not code.isalpha():
        raise ValidationError(f"Invalid country code '{code}'. Expected a two-letter ISO code")
    return code


class CountryService:
    """Service for the country risk table.

    A country's risk feeds every organization's overseas score, so writes
    clear the whole statistics cache rather than one organization's entries.
    """

    def __init__(self, db: Database, cache: Optional[StatisticsCache] = None):
        """Initialize country service.

        Args:
            db: Database instance
            cache: Statistics cache to clear when the risk table changes
        """
        self.db = db
        self.cache = cache or NullStatisticsCache()

    def set_country(
        self,
        code: str,
        name: str,
        risk_level: str,
        additional_checks_required: bool = False,
    ) -> CountryRisk:
        """Create or update a country risk entry.

        Raises:
            ValidationError: If code or risk level is invalid
        """
        code = normalize_country_code(code)
        try:
            level = RiskLevel(risk_level)
        except ValueError:
            raise ValidationError(
                invalid_choice("risk level", risk_level, [r.value for r in RiskLevel])
            )
        self.db.upsert_country(
            code=code,
            name=name.strip() or code,
            risk_level=level.value,
            additional_checks_required=additional_checks_required,
        )
        self.cache.clear()
        return self.db.get_country(code)

    def get_country(self, code: str) -> Optional[CountryRisk]:
        """Get a country risk entry by code."""
        return self.db.get_country((code or "").strip().upper())

    def list_countries(self) -> list[CountryRisk]:
        """List all country risk entries."""
        return self.db.list_countries()

    def lookup_country_risk(self, code: str) -> CountryRisk:
        """Resolve a country's risk, treating unknown codes as high risk."""
        country = self.get_country(code)
        if country is None:
            return CountryRisk.unknown((code or "").strip().upper())
        return country


class OverseasService:
    """Service for managing overseas activities."""

    def __init__(self, db: Database, cache: Optional[StatisticsCache] = None):
        """Initialize overseas service.

        Args:
            db: Database instance
            cache: Statistics cache to invalidate when records change
        """
        self.db = db
        self.cache = cache or NullStatisticsCache()

    def add_activity(
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
        """Add an overseas activity.

        Returns:
            Activity ID

        Raises:
            NotFoundError: If organization doesn't exist
            ValidationError: If country code, enums or amount are invalid
            ConflictError: If the transfer reference is already recorded
        """
        if self.db.get_organization(organization_id) is None:
            raise NotFoundError(organization_not_found(organization_id))

        activity_name = activity_name.strip()
        if not activity_name:
            raise ValidationError("Activity name must not be empty")
        country_code = normalize_country_code(country_code)
        if activity_type not in ACTIVITY_TYPES:
            raise ValidationError(invalid_choice("activity type", activity_type, list(ACTIVITY_TYPES)))
        if transfer_method is not None and transfer_method not in TRANSFER_METHODS:
            raise ValidationError(invalid_choice("transfer method", transfer_method, list(TRANSFER_METHODS)))
        if amount_gbp < 0:
            raise ValidationError("Amount must not be negative")

        if transfer_reference:
            if self.db.overseas_reference_exists(organization_id, transfer_reference):
                raise ConflictError(
                    duplicate_record_reference("overseas", transfer_reference, organization_id)
                )

        activity_id = self.db.create_overseas_activity(
            organization_id=organization_id,
            activity_name=activity_name,
            country_code=country_code,
            amount_gbp=amount_gbp,
            activity_type=activity_type,
            partner_name=partner_name,
            transfer_method=transfer_method,
            transfer_date=transfer_date,
            transfer_reference=transfer_reference,
            approval_required=approval_required,
            approval_obtained=approval_obtained,
            sanctions_check_completed=sanctions_check_completed,
        )
        self.cache.invalidate(organization_id)
        return activity_id

    def get_activity(self, activity_id: int) -> Optional[OverseasActivity]:
        """Get overseas activity by ID."""
        return self.db.get_overseas_activity(activity_id)

    def list_activities(self, organization_id: int) -> list[OverseasActivity]:
        """List overseas activities for an organization."""
        return self.db.list_overseas_activities(organization_id)


# Default country risk table: (code, name, risk level, additional checks required)
INITIAL_COUNTRIES = [
    ("GB", "United Kingdom", "low", False),
    ("IE", "Ireland", "low", False),
    ("FR", "France", "low", False),
    ("DE", "Germany", "low", False),
    ("US", "United States", "low", False),
    ("IN", "India", "low", False),
    ("KE", "Kenya", "medium", True),
    ("UG", "Uganda", "medium", True),
    ("NG", "Nigeria", "medium", True),
    ("ET", "Ethiopia", "medium", True),
    ("BD", "Bangladesh", "high", True),
    ("PK", "Pakistan", "high", True),
    ("AF", "Afghanistan", "high", True),
    ("SY", "Syria", "high", True),
    ("SO", "Somalia", "high", True),
    ("YE", "Yemen", "high", True),
]
