"""Organization domain service."""

from typing import Optional
from charitycomply.database.base import Database
from charitycomply.domain.entities import Organization as OrganizationEntity
from charitycomply.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_organization_name,
    organization_not_found,
)


class OrganizationService:
    """Service for managing organizations."""

    def __init__(self, db: Database):
        """Initialize organization service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_organization(self, name: str, charity_number: Optional[str] = None) -> int:
        """Create a new organization.

        Args:
            name: Organization name
            charity_number: Optional Charity Commission registration number

        Returns:
            Organization ID

        Raises:
            ValidationError: If name is blank
            ConflictError: If organization name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Organization name must not be empty")
        if self.db.get_organization_by_name(name) is not None:
            raise ConflictError(duplicate_organization_name(name))

        return self.db.create_organization(name=name, charity_number=charity_number)

    def get_organization(self, organization_id: int) -> Optional[OrganizationEntity]:
        """Get organization by ID."""
        return self.db.get_organization(organization_id)

    def get_organization_by_name(self, name: str) -> Optional[OrganizationEntity]:
        """Get organization by name."""
        return self.db.get_organization_by_name(name)

    def require_organization(self, organization_id: int) -> OrganizationEntity:
        """Get organization by ID or raise NotFoundError."""
        org = self.db.get_organization(organization_id)
        if org is None:
            raise NotFoundError(organization_not_found(organization_id))
        return org

    def list_organizations(self) -> list[OrganizationEntity]:
        """List all organizations."""
        return self.db.list_organizations()

    def rename_organization(
        self, organization_id: int, name: str, charity_number: Optional[str] = None
    ) -> None:
        """Rename an organization.

        Args:
            organization_id: Organization ID to rename
            name: New organization name
            charity_number: Optional new charity number (if None, it is not updated)

        Raises:
            NotFoundError: If organization not found
            ConflictError: If name already exists
        """
        self.require_organization(organization_id)

        existing = self.db.get_organization_by_name(name)
        if existing is not None and existing.id != organization_id:
            raise ConflictError(duplicate_organization_name(name))

        self.db.update_organization(
            organization_id=organization_id, name=name, charity_number=charity_number
        )
