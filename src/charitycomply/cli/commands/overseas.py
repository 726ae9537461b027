"""Overseas activity and country risk commands."""

import click
from charitycomply.cli.error_handling import handle_domain_error
from charitycomply.cli.organization_resolution import resolve_organization_or_exit
from charitycomply.domain.entities import ACTIVITY_TYPES, TRANSFER_METHODS, RiskLevel
from charitycomply.domain.organization import OrganizationService
from charitycomply.domain.overseas import CountryService, OverseasService
from charitycomply.utils.amount_parser import parse_amount
from charitycomply.utils.date_parser import parse_optional_date


@click.group()
def overseas_group():
    """Manage overseas activities."""
    pass


@overseas_group.command("add")
@click.argument("activity_name")
@click.option("--org", "organization", required=True, help="Organization name or ID")
@click.option("--country", "country_code", required=True, help="ISO two-letter country code")
@click.option("--amount", required=True, help="Amount in GBP")
@click.option("--type", "activity_type", type=click.Choice(ACTIVITY_TYPES), default="other", show_default=True)
@click.option("--partner", help="Partner organization name")
@click.option("--transfer-method", type=click.Choice(TRANSFER_METHODS), help="How funds were sent")
@click.option("--transfer-date", help="Transfer date (YYYY-MM-DD or relative)")
@click.option("--reference", help="Transfer reference")
@click.option("--approval-required/--no-approval-required", default=None)
@click.option("--approved/--not-approved", default=None, help="Approval obtained")
@click.option("--sanctions-checked/--no-sanctions-check", default=None, help="Sanctions check completed")
@click.pass_context
def add_activity(
    ctx,
    activity_name: str,
    organization: str,
    country_code: str,
    amount: str,
    activity_type: str,
    partner: str | None,
    transfer_method: str | None,
    transfer_date: str | None,
    reference: str | None,
    approval_required: bool | None,
    approved: bool | None,
    sanctions_checked: bool | None,
):
    """Add an overseas activity.

    Examples:
        charitycomply overseas add "Water project" --org 1 --country KE \\
            --amount 5000 --type development --approved --sanctions-checked
    """
    db = ctx.obj["db"]
    org_id = resolve_organization_or_exit(ctx, OrganizationService(db), organization)
    service = OverseasService(db, ctx.obj.get("cache"))

    try:
        activity_id = service.add_activity(
            organization_id=org_id,
            activity_name=activity_name,
            country_code=country_code,
            amount_gbp=parse_amount(amount),
            activity_type=activity_type,
            partner_name=partner,
            transfer_method=transfer_method,
            transfer_date=parse_optional_date(transfer_date),
            transfer_reference=reference,
            approval_required=approval_required,
            approval_obtained=approved,
            sanctions_check_completed=sanctions_checked,
        )
        click.echo(f"Added overseas activity '{activity_name}' (ID: {activity_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@overseas_group.command("list")
@click.option("--org", "organization", required=True, help="Organization name or ID")
@click.pass_context
def list_activities(ctx, organization: str):
    """List overseas activities with their country risk."""
    db = ctx.obj["db"]
    org_id = resolve_organization_or_exit(ctx, OrganizationService(db), organization)
    service = OverseasService(db)
    country_service = CountryService(db)

    activities = service.list_activities(org_id)
    if not activities:
        click.echo("No overseas activities found.")
        return

    click.echo(f"\n{'ID':>4} | {'Activity':25s} | {'Country':7s} | {'Risk':7s} | {'Amount':>12s} | Approved")
    click.echo("-" * 80)
    for activity in activities:
        risk = country_service.lookup_country_risk(activity.country_code)
        approved = {True: "yes", False: "no"}.get(activity.approval_obtained, "-")
        click.echo(
            f"{activity.id:4d} | {activity.activity_name[:25]:25s} | {activity.country_code:7s} | "
            f"{risk.risk_level.value:7s} | {'£' + format(activity.amount_gbp, ',.2f'):>12s} | {approved}"
        )


@click.group()
def country_group():
    """Manage the country risk table."""
    pass


@country_group.command("set")
@click.argument("code")
@click.argument("name")
@click.option(
    "--risk",
    "risk_level",
    type=click.Choice([r.value for r in RiskLevel]),
    required=True,
    help="Risk level",
)
@click.option("--checks-required", is_flag=True, help="Sanctions or due-diligence checks required")
@click.pass_context
def set_country(ctx, code: str, name: str, risk_level: str, checks_required: bool):
    """Create or update a country risk entry.

    Examples:
        charitycomply country set SY Syria --risk high --checks-required
    """
    db = ctx.obj["db"]
    service = CountryService(db, ctx.obj.get("cache"))

    try:
        country = service.set_country(code, name, risk_level, checks_required)
        click.echo(f"Set {country.code} ({country.name}) to {country.risk_level.value} risk")
    except ValueError as e:
        handle_domain_error(ctx, e)


@country_group.command("list")
@click.pass_context
def list_countries(ctx):
    """List the country risk table."""
    db = ctx.obj["db"]
    service = CountryService(db)

    countries = service.list_countries()
    if not countries:
        click.echo("No countries found. Run 'charitycomply init-countries' to load defaults.")
        return

    click.echo(f"\n{'Code':4s} | {'Name':25s} | {'Risk':6s} | Checks")
    click.echo("-" * 50)
    for country in countries:
        checks = "required" if country.additional_checks_required else "-"
        click.echo(f"{country.code:4s} | {country.name[:25]:25s} | {country.risk_level.value:6s} | {checks}")


def register_commands(cli):
    """Register overseas and country commands with main CLI."""
    cli.add_command(overseas_group, name="overseas")
    cli.add_command(country_group, name="country")
