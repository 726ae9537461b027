"""Compliance score commands."""

import json

import click
from charitycomply.cli.error_handling import handle_domain_error, handle_fetch_error
from charitycomply.cli.organization_resolution import resolve_organization_or_exit
from charitycomply.domain.certificates import ACHIEVEMENT_THRESHOLD, eligible_certificates
from charitycomply.domain.entities import CATEGORY_ORDER, ActionItem, ComplianceStatistics
from charitycomply.domain.errors import FetchError
from charitycomply.domain.organization import OrganizationService
from charitycomply.domain.scoring_config import describe_scoring, level_message
from charitycomply.domain.statistics import ComplianceStatisticsService
from charitycomply.utils.date_parser import parse_optional_date

TREND_ARROWS = {"up": "↑", "down": "↓", "flat": "→"}


@click.group()
def score_group():
    """Compliance score, action items and certificates."""
    pass


def _statistics_or_exit(ctx, organization: str, as_of: str | None) -> ComplianceStatistics:
    db = ctx.obj["db"]
    org_id = resolve_organization_or_exit(ctx, OrganizationService(db), organization)
    service = ComplianceStatisticsService(db, ctx.obj.get("cache"))
    try:
        return service.compute_compliance_statistics(org_id, as_of=parse_optional_date(as_of))
    except FetchError as e:
        handle_fetch_error(ctx, e)
    except ValueError as e:
        handle_domain_error(ctx, e)


def _echo_action_items(items: list[ActionItem]) -> None:
    for item in items:
        count = f" ({item.count})" if item.count is not None else ""
        impact = f"  +{item.impact} points" if item.impact else ""
        click.echo(f"  [{item.priority.value.upper():6s}] {item.title}{count}{impact}")
        click.echo(f"           {item.description}")


@score_group.command("show")
@click.option("--org", "organization", required=True, help="Organization name or ID")
@click.option("--as-of", help="Score as of a date (default: today)")
@click.option("--limit", type=click.IntRange(min=1), default=5, show_default=True, help="Action items to show")
@click.option("--json", "as_json", is_flag=True, help="Print the full statistics as JSON")
@click.pass_context
def show_score(ctx, organization: str, as_of: str | None, limit: int, as_json: bool):
    """Show the compliance score for an organization.

    Examples:
        charitycomply score show --org "Hope Foundation"
        charitycomply score show --org 1 --as-of 2025-03-31 --json
    """
    statistics = _statistics_or_exit(ctx, organization, as_of)

    if as_json:
        click.echo(json.dumps(statistics.to_dict(), indent=2))
        return

    overall = statistics.overall
    click.echo(f"\nCompliance score as of {statistics.as_of.isoformat()}")
    click.echo("=" * 60)
    click.echo(f"Overall: {overall.percentage}%  Grade {overall.grade.value}  ({overall.level})")
    message = level_message(overall.level)
    if message:
        click.echo(message)

    trend = statistics.trends
    if trend.direction is not None:
        arrow = TREND_ARROWS[trend.direction.value]
        click.echo(f"Trend: {arrow} {trend.change:+d} since last snapshot ({trend.last_month}%)")

    click.echo("\nBreakdown:")
    click.echo("-" * 60)
    for category in CATEGORY_ORDER:
        category_score = statistics.breakdown.for_category(category)
        click.echo(
            f"  {category.value.capitalize():15s} {category_score.percentage:3d}%  "
            f"{category_score.level:12s} ({category_score.record_count} records)"
        )

    items = list(statistics.action_items)
    if items:
        click.echo(f"\nTop action items ({min(limit, len(items))} of {len(items)}):")
        click.echo("-" * 60)
        _echo_action_items(items[:limit])


@score_group.command("actions")
@click.option("--org", "organization", required=True, help="Organization name or ID")
@click.option("--as-of", help="Score as of a date (default: today)")
@click.option("--priority", type=click.Choice(["high", "medium", "low"]), help="Only show this priority")
@click.pass_context
def list_actions(ctx, organization: str, as_of: str | None, priority: str | None):
    """List every action item, highest priority first."""
    statistics = _statistics_or_exit(ctx, organization, as_of)

    items = [
        item for item in statistics.action_items
        if priority is None or item.priority.value == priority
    ]
    if not items:
        click.echo("No action items. Nothing to fix.")
        return

    click.echo(f"\nAction items ({len(items)}):")
    click.echo("-" * 60)
    _echo_action_items(items)


@score_group.command("snapshot")
@click.option("--org", "organization", required=True, help="Organization name or ID")
@click.pass_context
def snapshot_score(ctx, organization: str):
    """Record the current overall score for trend tracking."""
    db = ctx.obj["db"]
    org_id = resolve_organization_or_exit(ctx, OrganizationService(db), organization)
    service = ComplianceStatisticsService(db, ctx.obj.get("cache"))

    try:
        snapshot = service.record_snapshot(org_id)
        click.echo(f"Recorded snapshot {snapshot.id}: {snapshot.overall_score}%")
    except FetchError as e:
        handle_fetch_error(ctx, e)
    except ValueError as e:
        handle_domain_error(ctx, e)


@score_group.command("history")
@click.option("--org", "organization", required=True, help="Organization name or ID")
@click.option("--limit", type=click.IntRange(min=1), default=12, show_default=True, help="Snapshots to show")
@click.pass_context
def score_history(ctx, organization: str, limit: int):
    """Show recorded score snapshots, newest first."""
    db = ctx.obj["db"]
    org_id = resolve_organization_or_exit(ctx, OrganizationService(db), organization)
    service = ComplianceStatisticsService(db)

    try:
        snapshots = service.get_score_history(org_id, limit=limit)
    except FetchError as e:
        handle_fetch_error(ctx, e)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not snapshots:
        click.echo("No snapshots recorded. Use 'charitycomply score snapshot' to record one.")
        return

    click.echo(f"\n{'Captured':19s} | Score")
    click.echo("-" * 30)
    for snapshot in snapshots:
        click.echo(f"{snapshot.captured_at:%Y-%m-%d %H:%M:%S} | {snapshot.overall_score:3d}%")


@score_group.command("explain")
def explain_score():
    """Explain how the compliance score is calculated."""
    click.echo("\nHow the compliance score is calculated:")
    click.echo("-" * 70)
    for label, value in describe_scoring():
        click.echo(f"  {label:48s} {value}")


@score_group.command("certificates")
@click.option("--org", "organization", required=True, help="Organization name or ID")
@click.option("--as-of", help="Check eligibility as of a date (default: today)")
@click.pass_context
def list_certificates(ctx, organization: str, as_of: str | None):
    """Show the certificates the organization currently qualifies for."""
    statistics = _statistics_or_exit(ctx, organization, as_of)
    org = OrganizationService(ctx.obj["db"]).get_organization(statistics.organization_id)

    certificates = eligible_certificates(org.name, statistics)
    if not certificates:
        click.echo(
            f"No certificates available yet. Reach {ACHIEVEMENT_THRESHOLD}% to earn "
            "the Compliance Achievement certificate."
        )
        return

    for certificate in certificates:
        click.echo(f"\n{certificate.title}")
        click.echo(f"  {certificate.subtitle}")
        click.echo(f"  Issued to: {certificate.issued_to} on {certificate.issued_date.isoformat()}")
        click.echo(f"  {certificate.description}")
        click.echo(f"  Verification code: {certificate.verification_code}")


def register_commands(cli):
    """Register score commands with main CLI."""
    cli.add_command(score_group, name="score")
