"""Organization management commands."""

import click
from charitycomply.cli.error_handling import handle_domain_error
from charitycomply.cli.organization_resolution import resolve_organization_or_exit
from charitycomply.domain.organization import OrganizationService


@click.group()
def organization_group():
    """Manage organizations."""
    pass


@organization_group.command("create")
@click.argument("name", metavar="ORG_NAME")
@click.option("--charity-number", help="Charity Commission registration number")
@click.pass_context
def create_organization(ctx, name: str, charity_number: str | None):
    """Create a new organization.

    Examples:
        charitycomply org create "Hope Foundation"
        charitycomply org create "Hope Foundation" --charity-number 1234567
    """
    db = ctx.obj["db"]
    service = OrganizationService(db)

    try:
        org_id = service.create_organization(name=name, charity_number=charity_number)
        click.echo(f"Created organization '{name.strip()}' (ID: {org_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@organization_group.command("list")
@click.pass_context
def list_organizations(ctx):
    """List all organizations."""
    db = ctx.obj["db"]
    service = OrganizationService(db)

    orgs = service.list_organizations()
    if not orgs:
        click.echo("No organizations found.")
        return

    click.echo("\nOrganizations:")
    click.echo("-" * 60)
    for org in orgs:
        click.echo(f"ID: {org.id:3d} | {org.name:30s} | Charity no: {org.charity_number or '-'}")


@organization_group.command("rename")
@click.argument("organization", metavar="ORG")
@click.argument("new_name", metavar="NEW_NAME")
@click.option("--charity-number", help="New charity number (optional)")
@click.pass_context
def rename_organization(ctx, organization: str, new_name: str, charity_number: str | None) -> None:
    """Rename an organization.

    ORG can be an organization name or ID.

    Examples:
        charitycomply org rename "Hope Foundation" "Hope Trust"
        charitycomply org rename 1 "Hope Trust" --charity-number 7654321
    """
    db = ctx.obj["db"]
    service = OrganizationService(db)
    org_id = resolve_organization_or_exit(ctx, service, organization)

    try:
        service.rename_organization(
            organization_id=org_id, name=new_name, charity_number=charity_number
        )
        click.echo(f"Renamed organization to '{new_name}'")
        if charity_number is not None:
            click.echo(f"Charity number updated to '{charity_number}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register organization commands with main CLI."""
    cli.add_command(organization_group, name="org")
