"""Utility for resolving organization names to IDs."""

from charitycomply.domain.errors import NotFoundError
from charitycomply.domain.organization import OrganizationService


def resolve_organization(organization_service: OrganizationService, organization: str | int) -> int:
    """Resolve organization name or ID to organization ID.

    Args:
        organization_service: OrganizationService instance
        organization: Organization name (str) or ID (int or string representation of int)

    Returns:
        Organization ID

    Raises:
        NotFoundError: If organization is not found
    """
    if isinstance(organization, int):
        if organization_service.get_organization(organization) is None:
            raise NotFoundError(f"Organization ID {organization} not found")
        return organization

    try:
        organization_id = int(organization)
    except (ValueError, TypeError):
        organization_id = None

    if organization_id is not None:
        if organization_service.get_organization(organization_id) is None:
            raise NotFoundError(f"Organization ID {organization_id} not found")
        return organization_id

    org = organization_service.get_organization_by_name(organization)
    if org is None:
        raise NotFoundError(f"Organization '{organization}' not found")
    return org.id
