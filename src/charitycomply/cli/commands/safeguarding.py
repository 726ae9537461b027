"""Safeguarding record commands."""

import click
from charitycomply.cli.error_handling import handle_domain_error
from charitycomply.cli.organization_resolution import resolve_organization_or_exit
from charitycomply.domain.entities import DBS_CHECK_TYPES, SAFEGUARDING_ROLE_TYPES
from charitycomply.domain.organization import OrganizationService
from charitycomply.domain.safeguarding import SafeguardingService
from charitycomply.utils.date_parser import parse_optional_date


@click.group()
def safeguarding_group():
    """Manage DBS checks and safeguarding records."""
    pass


@safeguarding_group.command("add")
@click.argument("person_name")
@click.option("--org", "organization", required=True, help="Organization name or ID")
@click.option("--role-type", type=click.Choice(SAFEGUARDING_ROLE_TYPES), required=True, help="Role type")
@click.option("--role-title", help="Job or volunteer role title")
@click.option("--dbs-type", type=click.Choice(DBS_CHECK_TYPES), help="DBS check level")
@click.option("--certificate", help="DBS certificate number")
@click.option("--issue-date", help="Certificate issue date (YYYY-MM-DD or relative like '2 years ago')")
@click.option("--expiry-date", help="Certificate expiry date (derived from issue date when omitted)")
@click.option("--training/--no-training", default=None, help="Safeguarding training completed")
@click.option("--training-date", help="Date training was completed")
@click.option("--children/--no-children", default=None, help="Role involves working with children")
@click.option(
    "--vulnerable-adults/--no-vulnerable-adults",
    default=None,
    help="Role involves working with vulnerable adults",
)
@click.option("--notes", help="Notes")
@click.pass_context
def add_record(
    ctx,
    person_name: str,
    organization: str,
    role_type: str,
    role_title: str | None,
    dbs_type: str | None,
    certificate: str | None,
    issue_date: str | None,
    expiry_date: str | None,
    training: bool | None,
    training_date: str | None,
    children: bool | None,
    vulnerable_adults: bool | None,
    notes: str | None,
):
    """Add a safeguarding record for a person.

    Examples:
        charitycomply safeguarding add "Jane Smith" --org "Hope Foundation" \\
            --role-type volunteer --dbs-type enhanced --issue-date 2024-03-01 --children
    """
    db = ctx.obj["db"]
    org_id = resolve_organization_or_exit(ctx, OrganizationService(db), organization)
    service = SafeguardingService(db, ctx.obj.get("cache"))

    try:
        record_id = service.add_record(
            organization_id=org_id,
            person_name=person_name,
            role_type=role_type,
            role_title=role_title,
            dbs_check_type=dbs_type,
            dbs_certificate_number=certificate,
            issue_date=parse_optional_date(issue_date),
            expiry_date=parse_optional_date(expiry_date),
            training_completed=training,
            training_date=parse_optional_date(training_date),
            works_with_children=children,
            works_with_vulnerable_adults=vulnerable_adults,
            notes=notes,
        )
        click.echo(f"Added safeguarding record for '{person_name}' (ID: {record_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@safeguarding_group.command("list")
@click.option("--org", "organization", required=True, help="Organization name or ID")
@click.option("--all", "include_inactive", is_flag=True, help="Include deactivated records")
@click.pass_context
def list_records(ctx, organization: str, include_inactive: bool):
    """List safeguarding records."""
    db = ctx.obj["db"]
    org_id = resolve_organization_or_exit(ctx, OrganizationService(db), organization)
    service = SafeguardingService(db)

    records = service.list_records(org_id, include_inactive=include_inactive)
    if not records:
        click.echo("No safeguarding records found.")
        return

    click.echo(f"\n{'ID':>4} | {'Name':25s} | {'Role':10s} | {'DBS':15s} | {'Expiry':10s} | Status")
    click.echo("-" * 85)
    for record in records:
        expiry = record.expiry_date.isoformat() if record.expiry_date else "-"
        status = "active" if record.is_active is not False else "inactive"
        click.echo(
            f"{record.id:4d} | {record.person_name[:25]:25s} | {record.role_type:10s} | "
            f"{record.dbs_check_type or '-':15s} | {expiry:10s} | {status}"
        )


@safeguarding_group.command("deactivate")
@click.argument("record_id", type=int)
@click.pass_context
def deactivate_record(ctx, record_id: int):
    """Deactivate a superseded safeguarding record.

    The record is kept for the audit trail but no longer counts towards the score.
    """
    db = ctx.obj["db"]
    service = SafeguardingService(db, ctx.obj.get("cache"))

    try:
        service.deactivate_record(record_id)
        click.echo(f"Deactivated safeguarding record {record_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register safeguarding commands with main CLI."""
    cli.add_command(safeguarding_group, name="safeguarding")
