"""CLI error handling helpers."""

import click

from charitycomply.domain.errors import DomainError, FetchError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_fetch_error(ctx: click.Context, error: FetchError) -> None:
    """Render a record fetch failure with a retry hint."""
    click.echo(f"Error: {error}", err=True)
    click.echo("The compliance data could not be loaded. Please try again.", err=True)
    ctx.exit(2)
