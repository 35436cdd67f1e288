"""CLI commands for managing authorized actors."""

from __future__ import annotations

import click

from chainlog.application.manage_actors import (
    AddAuthorizedActorHandler,
    RemoveAuthorizedActorHandler,
)
from chainlog.application.show_product import CheckAuthorizationHandler
from chainlog.domain.exceptions import DomainException
from chainlog.infrastructure.bootstrap import identity_verifier, ledger_store
from chainlog.infrastructure.cli.common import caller_options


@click.command("grant")
@caller_options
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--actor", required=True, help="Identity allowed to add events.")
def actor_grant(caller: str, token: str, product_id: str, actor: str) -> None:
    """Authorize an actor to add tracking events (owner only)."""
    handler = AddAuthorizedActorHandler(
        store=ledger_store(), identity=identity_verifier([token])
    )

    try:
        handler.handle(owner=caller, product_id=product_id, actor=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{actor} may now add events to '{product_id}'.")


@click.command("revoke")
@caller_options
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--actor", required=True, help="Identity to revoke.")
def actor_revoke(caller: str, token: str, product_id: str, actor: str) -> None:
    """Revoke an actor's authorization (owner only)."""
    handler = RemoveAuthorizedActorHandler(
        store=ledger_store(), identity=identity_verifier([token])
    )

    try:
        handler.handle(owner=caller, product_id=product_id, actor=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{actor} is no longer authorized for '{product_id}'.")


@click.command("check")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--actor", required=True, help="Identity to check.")
def actor_check(product_id: str, actor: str) -> None:
    """Report whether an identity may add events to a product."""
    handler = CheckAuthorizationHandler(store=ledger_store())

    try:
        allowed = handler.handle(product_id, actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("authorized" if allowed else "not authorized")
