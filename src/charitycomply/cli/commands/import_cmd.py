"""CSV import command."""

import click
from charitycomply.cli.error_handling import handle_domain_error
from charitycomply.cli.organization_resolution import resolve_organization_or_exit
from charitycomply.domain.organization import OrganizationService
from charitycomply.domain.record_import import IMPORT_KINDS, RecordImportService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--org", "organization", required=True, help="Organization name or ID")
@click.option("--kind", type=click.Choice(IMPORT_KINDS), required=True, help="Record type in the file")
@click.pass_context
def import_csv(ctx, csv_file: str, organization: str, kind: str):
    """Import safeguarding, overseas or income records from a CSV file."""
    db = ctx.obj["db"]
    org_id = resolve_organization_or_exit(ctx, OrganizationService(db), organization)
    service = RecordImportService(db, ctx.obj.get("cache"))

    try:
        result = service.import_csv(csv_file_path=csv_file, organization_id=org_id, kind=kind)
        click.echo(f"\nImport complete:")
        click.echo(f"  Imported: {result['imported']} {kind} records")
        click.echo(f"  Skipped: {result['skipped']} duplicates")
        if result["errors"]:
            click.echo(f"  Errors: {len(result['errors'])}")
            for error in result["errors"]:
                click.echo(f"    {error}", err=True)
    except (ValueError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
