"""Action item derivation from category findings."""

from collections import Counter
from typing import Iterable

from charitycomply.domain.entities import (
    CATEGORY_ORDER,
    PRIORITY_ORDER,
    ActionItem,
    CategoryResult,
    ComplianceCategory,
    FindingKind,
    Priority,
)

# (priority, title, description template); {count} is the number of findings.
FINDING_ACTIONS: dict[FindingKind, tuple[Priority, str, str]] = {
    FindingKind.DBS_EXPIRED: (
        Priority.HIGH,
        "Expired DBS checks",
        "{count} DBS check(s) have expired. Renew them before the people concerned continue in their roles.",
    ),
    FindingKind.DBS_EXPIRING: (
        Priority.MEDIUM,
        "DBS checks expiring soon",
        "{count} DBS check(s) expire within the warning window. Start renewals now.",
    ),
    FindingKind.TRAINING_INCOMPLETE: (
        Priority.LOW,
        "Safeguarding training not recorded",
        "{count} person(s) working with children or vulnerable adults have no completed safeguarding training.",
    ),
    FindingKind.UNAPPROVED_HIGH_RISK: (
        Priority.HIGH,
        "Unapproved high-risk overseas activity",
        "{count} activity(ies) in high-risk countries lack the required approval.",
    ),
    FindingKind.MISSING_SANCTIONS_CHECK: (
        Priority.HIGH,
        "Missing sanctions checks",
        "{count} activity(ies) in countries requiring additional checks have no sanctions or due-diligence check.",
    ),
    FindingKind.APPROVAL_PENDING: (
        Priority.MEDIUM,
        "Overseas approvals pending",
        "{count} activity(ies) are awaiting a required approval.",
    ),
    FindingKind.INCOMPLETE_DOCUMENTATION: (
        Priority.MEDIUM,
        "Incomplete income documentation",
        "{count} income record(s) are missing supporting documentation.",
    ),
    FindingKind.UNDISCLOSED_RELATED_PARTY: (
        Priority.HIGH,
        "Undisclosed related-party transactions",
        "{count} related-party transaction(s) have no disclosure recorded.",
    ),
    FindingKind.UNCLAIMED_GIFT_AID: (
        Priority.LOW,
        "Unclaimed Gift Aid",
        "{count} Gift Aid eligible donation(s) have not been claimed.",
    ),
}

NO_DATA_ACTIONS: dict[ComplianceCategory, tuple[str, str]] = {
    ComplianceCategory.SAFEGUARDING: (
        "Add safeguarding records",
        "No active safeguarding records yet. Add DBS checks for staff and volunteers.",
    ),
    ComplianceCategory.OVERSEAS: (
        "Add overseas activities",
        "No overseas activities recorded. Add transfers and programmes delivered abroad.",
    ),
    ComplianceCategory.FUNDRAISING: (
        "Add income records",
        "No income records yet. Add donations, grants and fundraising income.",
    ),
}


def _items_for(result: CategoryResult) -> list[ActionItem]:
    if not result.score.has_data:
        title, description = NO_DATA_ACTIONS[result.category]
        return [
            ActionItem(
                category=result.category,
                priority=Priority.LOW,
                code=f"{result.category.value}_no_data",
                title=title,
                description=description,
            )
        ]

    counts = Counter(f.kind for f in result.findings)
    points: Counter = Counter()
    for finding in result.findings:
        points[finding.kind] += finding.points
    items = []
    # Iterate FINDING_ACTIONS so item order within a category is fixed.
    for kind, (priority, title, description) in FINDING_ACTIONS.items():
        count = counts.get(kind, 0)
        if count == 0:
            continue
        items.append(
            ActionItem(
                category=result.category,
                priority=priority,
                code=kind.value,
                title=title,
                description=description.format(count=count),
                count=count,
                impact=points[kind] or None,
            )
        )
    return items


def derive_action_items(results: Iterable[CategoryResult]) -> list[ActionItem]:
    """Derive a prioritized list of remediation items.

    One item is produced per distinct finding kind with a count of the
    records that triggered it. Items are ordered by priority, then by
    category (safeguarding, overseas, fundraising). The full list is
    returned; callers truncate for display.
    """
    items: list[ActionItem] = []
    for result in results:
        items.extend(_items_for(result))

    return sorted(
        items,
        key=lambda item: (
            PRIORITY_ORDER.index(item.priority),
            CATEGORY_ORDER.index(item.category),
        ),
    )
