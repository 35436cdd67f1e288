import click

from chainlog.application.show_product import ShowStatsHandler
from chainlog.infrastructure.bootstrap import ledger_store
from chainlog.infrastructure.cli.actor_commands import actor_check, actor_grant, actor_revoke
from chainlog.infrastructure.cli.event_commands import (
    event_add,
    event_count,
    event_import,
    event_list,
    event_show,
)
from chainlog.infrastructure.cli.product_commands import (
    product_deactivate,
    product_import,
    product_reactivate,
    product_register,
    product_show,
    product_transfer,
)
from chainlog.infrastructure.config import get_settings
from chainlog.infrastructure.identity.token_verifier import issue_token
from chainlog.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """chainlog: supply-chain product and tracking-event ledger"""
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)


@cli.group()
def product() -> None:
    """Register products and manage their lifecycle."""


@cli.group()
def actor() -> None:
    """Manage who may add events to a product."""


@cli.group()
def event() -> None:
    """Record and query tracking events."""


@cli.group()
def token() -> None:
    """Identity tokens."""


@cli.command("stats")
def stats() -> None:
    """Show ledger-wide product counters."""
    result = ShowStatsHandler(store=ledger_store()).handle()
    click.echo(f"Total products:  {result.total_products}")
    click.echo(f"Active products: {result.active_products}")


@token.command("issue")
@click.option("--identity", required=True, help="Identity the token proves.")
@click.option("--ttl", type=click.IntRange(min=1), default=None, help="Lifetime in seconds.")
def token_issue(identity: str, ttl: int | None) -> None:
    """Sign an identity token with the configured secret."""
    settings = get_settings()
    click.echo(
        issue_token(
            identity,
            settings.identity_secret,
            algorithm=settings.identity_algorithm,
            ttl_seconds=ttl or settings.identity_token_ttl_seconds,
        )
    )


# Register subcommands
product.add_command(product_deactivate)
product.add_command(product_import)
product.add_command(product_reactivate)
product.add_command(product_register)
product.add_command(product_show)
product.add_command(product_transfer)
actor.add_command(actor_check)
actor.add_command(actor_grant)
actor.add_command(actor_revoke)
event.add_command(event_add)
event.add_command(event_count)
event.add_command(event_import)
event.add_command(event_list)
event.add_command(event_show)
