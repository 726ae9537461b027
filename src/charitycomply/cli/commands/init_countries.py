"""Initialize the default country risk table."""

import click
from charitycomply.domain.overseas import INITIAL_COUNTRIES, CountryService


@click.command("init-countries")
@click.option("--force", is_flag=True, help="Overwrite existing country entries")
@click.pass_context
def init_countries(ctx, force: bool):
    """Initialize database with the default country risk table."""
    db = ctx.obj["db"]
    service = CountryService(db, ctx.obj.get("cache"))

    existing = service.list_countries()
    if existing and not force:
        click.echo("Countries already exist. Use --force to overwrite.")
        return

    click.echo("Loading country risk table...")

    created = 0
    errors = 0
    for code, name, risk_level, checks_required in INITIAL_COUNTRIES:
        try:
            service.set_country(code, name, risk_level, checks_required)
            created += 1
        except ValueError as e:
            click.echo(f"Warning: Could not add country '{code}': {e}", err=True)
            errors += 1

    if errors == 0:
        click.echo(f"Successfully loaded {created} countries.")
    else:
        click.echo(f"Loaded {created} countries with {errors} errors.")


def register_commands(cli):
    """Register init-countries command with main CLI."""
    cli.add_command(init_countries)
