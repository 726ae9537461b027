"""Income record commands."""

import click
from charitycomply.cli.error_handling import handle_domain_error
from charitycomply.cli.organization_resolution import resolve_organization_or_exit
from charitycomply.domain.entities import INCOME_SOURCES
from charitycomply.domain.income import IncomeService
from charitycomply.domain.organization import OrganizationService
from charitycomply.utils.amount_parser import parse_amount
from charitycomply.utils.date_parser import parse_optional_date


@click.group()
def income_group():
    """Manage income and fundraising records."""
    pass


@income_group.command("add")
@click.option("--org", "organization", required=True, help="Organization name or ID")
@click.option("--source", type=click.Choice(INCOME_SOURCES), required=True, help="Income source")
@click.option("--amount", required=True, help="Amount in GBP (e.g., 250.00 or £1,200)")
@click.option("--date", "date_received", help="Date received (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--donor", help="Donor or funder name")
@click.option("--reference", help="Reference number")
@click.option("--documented/--undocumented", default=None, help="Supporting documentation complete")
@click.option("--gift-aid/--no-gift-aid", default=None, help="Eligible for Gift Aid")
@click.option("--gift-aid-claimed/--gift-aid-unclaimed", default=None, help="Gift Aid already claimed")
@click.option("--restricted/--unrestricted", default=None, help="Restricted funds")
@click.option("--related-party/--no-related-party", default=None, help="Donation from a related party")
@click.option("--disclosure", help="Related-party disclosure text")
@click.pass_context
def add_record(
    ctx,
    organization: str,
    source: str,
    amount: str,
    date_received: str | None,
    donor: str | None,
    reference: str | None,
    documented: bool | None,
    gift_aid: bool | None,
    gift_aid_claimed: bool | None,
    restricted: bool | None,
    related_party: bool | None,
    disclosure: str | None,
):
    """Add an income record.

    Examples:
        charitycomply income add --org 1 --source donation --amount 250 --documented --gift-aid
    """
    db = ctx.obj["db"]
    org_id = resolve_organization_or_exit(ctx, OrganizationService(db), organization)
    service = IncomeService(db, ctx.obj.get("cache"))

    try:
        record_id = service.add_record(
            organization_id=org_id,
            source=source,
            amount=parse_amount(amount),
            date_received=parse_optional_date(date_received),
            donor_name=donor,
            reference_number=reference,
            documentation_complete=documented,
            gift_aid_eligible=gift_aid,
            gift_aid_claimed=gift_aid_claimed,
            is_restricted=restricted,
            is_related_party=related_party,
            related_party_disclosure=disclosure,
        )
        click.echo(f"Added income record (ID: {record_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@income_group.command("list")
@click.option("--org", "organization", required=True, help="Organization name or ID")
@click.pass_context
def list_records(ctx, organization: str):
    """List income records."""
    db = ctx.obj["db"]
    org_id = resolve_organization_or_exit(ctx, OrganizationService(db), organization)
    service = IncomeService(db)

    records = service.list_records(org_id)
    if not records:
        click.echo("No income records found.")
        return

    click.echo(f"\n{'ID':>4} | {'Date':10s} | {'Source':11s} | {'Amount':>12s} | {'Donor':20s} | Docs | Gift Aid")
    click.echo("-" * 85)
    for record in records:
        received = record.date_received.isoformat() if record.date_received else "-"
        docs = "yes" if record.documentation_complete else "no"
        if record.gift_aid_eligible:
            gift_aid = "claimed" if record.gift_aid_claimed else "unclaimed"
        else:
            gift_aid = "-"
        click.echo(
            f"{record.id:4d} | {received:10s} | {record.source:11s} | "
            f"{'£' + format(record.amount, ',.2f'):>12s} | {(record.donor_name or '-')[:20]:20s} | "
            f"{docs:4s} | {gift_aid}"
        )


@income_group.command("claim-gift-aid")
@click.argument("record_id", type=int)
@click.pass_context
def claim_gift_aid(ctx, record_id: int):
    """Mark Gift Aid as claimed on an income record."""
    db = ctx.obj["db"]
    service = IncomeService(db, ctx.obj.get("cache"))

    try:
        service.mark_gift_aid_claimed(record_id)
        click.echo(f"Marked Gift Aid claimed on income record {record_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register income commands with main CLI."""
    cli.add_command(income_group, name="income")
