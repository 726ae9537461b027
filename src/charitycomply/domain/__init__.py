"""Domain layer for charitycomply application.

Services are imported from their own modules; this package only re-exports
the entity and error types so the database layer can import it safely.
"""

from charitycomply.domain.entities import (
    ActionItem,
    CategoryScore,
    ComplianceCategory,
    ComplianceStatistics,
    OverallScore,
    Priority,
    Trend,
    TrendDirection,
)
from charitycomply.domain.errors import (
    ConfigurationError,
    DomainError,
    FetchError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "ActionItem",
    "CategoryScore",
    "ComplianceCategory",
    "ComplianceStatistics",
    "OverallScore",
    "Priority",
    "Trend",
    "TrendDirection",
    "ConfigurationError",
    "DomainError",
    "FetchError",
    "NotFoundError",
    "ValidationError",
]
