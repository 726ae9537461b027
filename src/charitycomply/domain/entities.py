"""Domain model entities for charitycomply.

These are pure data classes representing compliance records and the scoring
results derived from them, independent of database schema. Scoring code only
ever sees these entities, never ORM rows.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from dateutil.relativedelta import relativedelta


class ComplianceCategory(str, Enum):
    """Scored compliance categories, in display order."""

    SAFEGUARDING = "safeguarding"
    OVERSEAS = "overseas"
    FUNDRAISING = "fundraising"


CATEGORY_ORDER = (
    ComplianceCategory.SAFEGUARDING,
    ComplianceCategory.OVERSEAS,
    ComplianceCategory.FUNDRAISING,
)


class Priority(str, Enum):
    """Action item priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_ORDER = (Priority.HIGH, Priority.MEDIUM, Priority.LOW)


class TrendDirection(str, Enum):
    """Direction of the overall score against the last snapshot."""

    UP = "up"
    DOWN = "down"
    FLAT = "flat"


class RiskLevel(str, Enum):
    """Country risk classification."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Grade(str, Enum):
    """Letter grade for the overall score."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class FindingKind(str, Enum):
    """Conditions detected on individual records while scoring."""

    DBS_EXPIRED = "dbs_expired"
    DBS_EXPIRING = "dbs_expiring"
    TRAINING_INCOMPLETE = "training_incomplete"
    UNAPPROVED_HIGH_RISK = "unapproved_high_risk"
    MISSING_SANCTIONS_CHECK = "missing_sanctions_check"
    APPROVAL_PENDING = "approval_pending"
    INCOMPLETE_DOCUMENTATION = "incomplete_documentation"
    UNDISCLOSED_RELATED_PARTY = "undisclosed_related_party"
    UNCLAIMED_GIFT_AID = "unclaimed_gift_aid"


SAFEGUARDING_ROLE_TYPES = ("employee", "volunteer", "trustee", "contractor")
DBS_CHECK_TYPES = ("basic", "standard", "enhanced", "enhanced_barred")
ACTIVITY_TYPES = (
    "humanitarian_aid",
    "development",
    "education",
    "healthcare",
    "emergency_relief",
    "capacity_building",
    "advocacy",
    "other",
)
TRANSFER_METHODS = (
    "bank_transfer",
    "wire_transfer",
    "cryptocurrency",
    "cash_courier",
    "money_service_business",
    "mobile_money",
    "informal_value_transfer",
    "other",
)
INCOME_SOURCES = ("donation", "grant", "fundraising", "trading", "legacy", "other")


@dataclass(frozen=True)
class Organization:
    """Charity organization domain entity."""

    id: int
    name: str
    charity_number: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class SafeguardingRecord:
    """DBS check and safeguarding training record for one person."""

    id: int
    organization_id: int
    person_name: str
    role_type: str
    role_title: Optional[str] = None
    dbs_check_type: Optional[str] = None
    dbs_certificate_number: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    training_completed: Optional[bool] = None
    training_date: Optional[date] = None
    works_with_children: Optional[bool] = None
    works_with_vulnerable_adults: Optional[bool] = None
    is_active: Optional[bool] = True
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def requires_dbs(self) -> bool:
        """Whether this record carries a DBS certificate that can expire."""
        return self.dbs_check_type is not None

    @property
    def works_with_vulnerable_groups(self) -> bool:
        return bool(self.works_with_children) or bool(self.works_with_vulnerable_adults)

    def effective_expiry_date(self, renewal_years: int) -> Optional[date]:
        """Stored expiry date, or issue date plus the renewal period."""
        if self.expiry_date is not None:
            return self.expiry_date
        if self.issue_date is not None:
            return self.issue_date + relativedelta(years=renewal_years)
        return None


@dataclass(frozen=True)
class OverseasActivity:
    """A reported overseas transfer or programme."""

    id: int
    organization_id: int
    activity_name: str
    country_code: str
    amount_gbp: Decimal
    activity_type: str = "other"
    partner_name: Optional[str] = None
    transfer_method: Optional[str] = None
    transfer_date: Optional[date] = None
    transfer_reference: Optional[str] = None
    approval_required: Optional[bool] = None
    approval_obtained: Optional[bool] = None
    sanctions_check_completed: Optional[bool] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class IncomeRecord:
    """A single income or fundraising transaction."""

    id: int
    organization_id: int
    source: str
    amount: Decimal
    date_received: Optional[date] = None
    donor_name: Optional[str] = None
    reference_number: Optional[str] = None
    documentation_complete: Optional[bool] = None
    gift_aid_eligible: Optional[bool] = None
    gift_aid_claimed: Optional[bool] = None
    is_restricted: Optional[bool] = None
    is_related_party: Optional[bool] = None
    related_party_disclosure: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def related_party_disclosed(self) -> bool:
        return bool(self.related_party_disclosure and self.related_party_disclosure.strip())


@dataclass(frozen=True)
class CountryRisk:
    """Risk classification for a destination country."""

    code: str
    name: str
    risk_level: RiskLevel
    additional_checks_required: bool

    @property
    def is_high_risk(self) -> bool:
        return self.risk_level == RiskLevel.HIGH

    @classmethod
    def unknown(cls, code: str) -> "CountryRisk":
        """Conservative classification for a code missing from the risk table."""
        return cls(
            code=code,
            name="Unknown",
            risk_level=RiskLevel.HIGH,
            additional_checks_required=True,
        )


@dataclass(frozen=True)
class ScoreSnapshot:
    """Persisted overall score at a point in time."""

    id: int
    organization_id: int
    overall_score: int
    captured_at: datetime


@dataclass(frozen=True)
class CategoryScore:
    """Score for a single compliance category."""

    percentage: int
    level: str
    score: int
    max_score: int
    record_count: int = 0

    @property
    def has_data(self) -> bool:
        return self.record_count > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "percentage": self.percentage,
            "level": self.level,
            "score": self.score,
            "max_score": self.max_score,
            "record_count": self.record_count,
        }


@dataclass(frozen=True)
class Finding:
    """A condition detected on one record, with the penalty it carried."""

    kind: FindingKind
    record_id: Optional[int]
    points: int = 0
    detail: str = ""


@dataclass(frozen=True)
class CategoryResult:
    """Category score plus the findings that produced it."""

    category: ComplianceCategory
    score: CategoryScore
    findings: tuple[Finding, ...] = ()

    def findings_of(self, kind: FindingKind) -> tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.kind == kind)

    @property
    def penalty_points(self) -> int:
        return sum(f.points for f in self.findings)


@dataclass(frozen=True)
class OverallScore:
    """Weighted overall score."""

    percentage: int
    level: str
    grade: Grade

    def to_dict(self) -> dict[str, Any]:
        return {
            "percentage": self.percentage,
            "level": self.level,
            "grade": self.grade.value,
        }


@dataclass(frozen=True)
class ActionItem:
    """A remediation item derived from category findings."""

    category: ComplianceCategory
    priority: Priority
    code: str
    title: str
    description: str
    count: Optional[int] = None
    # Penalty points the findings behind this item cost the category.
    impact: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "priority": self.priority.value,
            "code": self.code,
            "title": self.title,
            "description": self.description,
            "count": self.count,
            "impact": self.impact,
        }


@dataclass(frozen=True)
class Trend:
    """Overall score movement since the last snapshot."""

    direction: Optional[TrendDirection] = None
    change: Optional[int] = None
    last_month: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "direction": self.direction.value if self.direction else None,
            "change": self.change,
            "last_month": self.last_month,
        }


@dataclass(frozen=True)
class CategoryBreakdown:
    """Per-category scores."""

    safeguarding: CategoryScore
    overseas: CategoryScore
    fundraising: CategoryScore

    def for_category(self, category: ComplianceCategory) -> CategoryScore:
        return getattr(self, category.value)

    def to_dict(self) -> dict[str, Any]:
        return {
            category.value: self.for_category(category).to_dict()
            for category in CATEGORY_ORDER
        }


@dataclass(frozen=True)
class ComplianceStatistics:
    """Everything the dashboard, score page, certificates and reports consume."""

    organization_id: int
    as_of: date
    overall: OverallScore
    breakdown: CategoryBreakdown
    action_items: tuple[ActionItem, ...] = ()
    trends: Trend = field(default_factory=Trend)

    def to_dict(self) -> dict[str, Any]:
        return {
            "organization_id": self.organization_id,
            "as_of": self.as_of.isoformat(),
            "overall": self.overall.to_dict(),
            "breakdown": self.breakdown.to_dict(),
            "action_items": [item.to_dict() for item in self.action_items],
            "trends": self.trends.to_dict(),
        }


@dataclass(frozen=True)
class Certificate:
    """An achievement certificate the organization is eligible for."""

    type: str
    title: str
    subtitle: str
    description: str
    issued_to: str
    issued_date: date
    verification_code: str
