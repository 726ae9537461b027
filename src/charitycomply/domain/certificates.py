"""Achievement certificates."""

import secrets
import string
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from charitycomply.domain.entities import Certificate, ComplianceStatistics

VERIFICATION_ALPHABET = string.ascii_uppercase + string.digits
VERIFICATION_CODE_LENGTH = 8

ACHIEVEMENT_THRESHOLD = 80
MILESTONE_THRESHOLD = 100
IMPROVEMENT_POINTS = 20


@dataclass(frozen=True)
class CertificateTemplate:
    type: str
    title: str
    subtitle: str
    description: str
    is_eligible: Callable[[ComplianceStatistics], bool]


def _improved_by(statistics: ComplianceStatistics, points: int) -> bool:
    change = statistics.trends.change
    return change is not None and change >= points


CERTIFICATE_TEMPLATES: tuple[CertificateTemplate, ...] = (
    CertificateTemplate(
        type="compliance-achievement",
        title="Certificate of Compliance Achievement",
        subtitle="Charity Commission compliance",
        description=f"Awarded for achieving a compliance score of {ACHIEVEMENT_THRESHOLD}% or higher.",
        is_eligible=lambda stats: stats.overall.percentage >= ACHIEVEMENT_THRESHOLD,
    ),
    CertificateTemplate(
        type="milestone-reached",
        title="Full Compliance Milestone",
        subtitle=f"{MILESTONE_THRESHOLD}% compliance score",
        description="Awarded for reaching full compliance across safeguarding, "
        "overseas activities and fundraising.",
        is_eligible=lambda stats: stats.overall.percentage >= MILESTONE_THRESHOLD,
    ),
    CertificateTemplate(
        type="improvement-award",
        title="Compliance Improvement Award",
        subtitle="Significant progress",
        description=f"Awarded for improving the compliance score by {IMPROVEMENT_POINTS} points or more "
        "since the last snapshot.",
        is_eligible=lambda stats: _improved_by(stats, IMPROVEMENT_POINTS),
    ),
)


def generate_verification_code(length: int = VERIFICATION_CODE_LENGTH) -> str:
    """Random upper-case alphanumeric code printed on a certificate."""
    return "".join(secrets.choice(VERIFICATION_ALPHABET) for _ in range(length))


def eligible_certificates(
    organization_name: str,
    statistics: ComplianceStatistics,
    issued_date: Optional[date] = None,
) -> list[Certificate]:
    """Certificates the organization currently qualifies for.

    Args:
        organization_name: Name printed on the certificate
        statistics: Computed compliance statistics
        issued_date: Issue date (defaults to the statistics' as-of date)

    Returns:
        One Certificate per template whose rule holds, in template order
    """
    issued_date = issued_date or statistics.as_of
    return [
        Certificate(
            type=template.type,
            title=template.title,
            subtitle=template.subtitle,
            description=template.description,
            issued_to=organization_name,
            issued_date=issued_date,
            verification_code=generate_verification_code(),
        )
        for template in CERTIFICATE_TEMPLATES
        if template.is_eligible(statistics)
    ]
