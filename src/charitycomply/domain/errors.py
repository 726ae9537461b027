"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class FetchError(Exception):
    """Retrieving records or snapshots from the repository failed.

    Not a DomainError: callers should offer a retry rather than treat the
    request as invalid.
    """


class ConfigurationError(Exception):
    """Scoring configuration is internally inconsistent."""


def organization_not_found(organization_id: int) -> str:
    """Return message for missing organization."""
    return f"Organization {organization_id} not found"


def duplicate_organization_name(name: str) -> str:
    """Return message for duplicate organization name."""
    return f"Organization with name '{name}' already exists"


def record_not_found(kind: str, record_id: int) -> str:
    """Return message for a missing compliance record."""
    return f"{kind.capitalize()} record {record_id} not found"


def duplicate_record_reference(kind: str, reference: str, organization_id: int) -> str:
    """Return message for a record reference already used by the organization."""
    return (
        f"{kind.capitalize()} record with reference '{reference}' already exists "
        f"for organization {organization_id}"
    )


def invalid_choice(field: str, value: str, choices: list[str]) -> str:
    """Return message for a value outside an enumerated set."""
    return f"Invalid {field} '{value}'. Expected one of: {', '.join(choices)}"


def fetch_failed(what: str, organization_id: int) -> str:
    """Return message for a failed repository read."""
    return f"Could not load {what} for organization {organization_id}"
