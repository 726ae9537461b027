"""CLI helpers for organization resolution."""

from __future__ import annotations

import click
from charitycomply.cli.error_handling import handle_fetch_error
from charitycomply.domain.errors import FetchError
from charitycomply.domain.organization import OrganizationService
from charitycomply.utils.organization_resolver import resolve_organization


def resolve_organization_or_exit(
    ctx: click.Context, organization_service: OrganizationService, organization: str | int
) -> int:
    """Resolve organization name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_organization(organization_service, organization)
    except FetchError as exc:
        handle_fetch_error(ctx, exc)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
