"""CLI commands for the Product aggregate."""

from __future__ import annotations

import json
from pathlib import Path

import click

from chainlog.application.deactivate_product import DeactivateProductHandler
from chainlog.application.dto import ProductSpec
from chainlog.application.reactivate_product import ReactivateProductHandler
from chainlog.application.register_product import RegisterProductHandler
from chainlog.application.show_product import ShowProductHandler
from chainlog.application.transfer_product import TransferProductHandler
from chainlog.domain.exceptions import DomainException
from chainlog.infrastructure.bootstrap import (
    clock,
    event_publisher,
    identity_verifier,
    ledger_store,
)
from chainlog.infrastructure.cli.common import (
    caller_options,
    display_product,
    json_object,
    json_text,
    json_text_list,
    json_text_map,
    parse_hashes,
    parse_pairs,
)


def _spec_from_json(raw: object) -> ProductSpec:
    """Build a ProductSpec from one entry of an import file."""
    entry = json_object(raw, "product")
    return ProductSpec(
        id=json_text(entry, "id"),
        name=json_text(entry, "name"),
        origin_location=json_text(entry, "origin_location"),
        category=json_text(entry, "category"),
        description=json_text(entry, "description", default=""),
        tags=json_text_list(entry, "tags"),
        certifications=parse_hashes(json_text_list(entry, "certifications"), "certifications"),
        media_hashes=parse_hashes(json_text_list(entry, "media_hashes"), "media_hashes"),
        custom=json_text_map(entry, "custom"),
    )


@click.command("register")
@caller_options
@click.option("--id", "product_id", required=True, help="Unique product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--origin", required=True, help="Origin location.")
@click.option("--category", required=True, help="Product category.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable).")
@click.option("--cert", "certs", multiple=True, help="Certification hash, 64 hex chars (repeatable).")
@click.option("--media", multiple=True, help="Media hash, 64 hex chars (repeatable).")
@click.option("--custom", multiple=True, help="Custom field as key=value (repeatable).")
def product_register(
    caller: str,
    token: str,
    product_id: str,
    name: str,
    origin: str,
    category: str,
    description: str,
    tags: tuple[str, ...],
    certs: tuple[str, ...],
    media: tuple[str, ...],
    custom: tuple[str, ...],
) -> None:
    """Register a new product owned by the caller."""
    spec = ProductSpec(
        id=product_id,
        name=name,
        origin_location=origin,
        category=category,
        description=description,
        tags=list(tags),
        certifications=parse_hashes(certs, "--cert"),
        media_hashes=parse_hashes(media, "--media"),
        custom=parse_pairs(custom, "--custom"),
    )

    handler = RegisterProductHandler(
        store=ledger_store(),
        identity=identity_verifier([token]),
        clock=clock(),
        publisher=event_publisher(),
    )

    try:
        product = handler.handle(owner=caller, spec=spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product.id}' registered (owner={product.owner})")


@click.command("import")
@caller_options
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def product_import(caller: str, token: str, file: Path) -> None:
    """Register every product in a JSON array file, all or nothing."""
    try:
        entries = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON: {exc}", param_hint="FILE")
    if not isinstance(entries, list):
        raise click.BadParameter("Expected a JSON array of products.", param_hint="FILE")

    specs = [_spec_from_json(entry) for entry in entries]

    handler = RegisterProductHandler(
        store=ledger_store(),
        identity=identity_verifier([token]),
        clock=clock(),
        publisher=event_publisher(),
    )

    try:
        products = handler.handle_batch(owner=caller, specs=specs)
    except DomainException as exc:
        raise click.ClickException(f"Import aborted, nothing registered: {exc}")

    click.echo(f"Registered {len(products)} products.")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID to display.")
def product_show(product_id: str) -> None:
    """Show details of a product."""
    handler = ShowProductHandler(store=ledger_store())

    try:
        product = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_product(product)


@click.command("deactivate")
@caller_options
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--reason", required=True, help="Why the product leaves circulation.")
def product_deactivate(caller: str, token: str, product_id: str, reason: str) -> None:
    """Deactivate a product (owner only)."""
    handler = DeactivateProductHandler(
        store=ledger_store(),
        identity=identity_verifier([token]),
        clock=clock(),
        publisher=event_publisher(),
    )

    try:
        handler.handle(owner=caller, product_id=product_id, reason=reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product_id}' deactivated.")


@click.command("reactivate")
@caller_options
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_reactivate(caller: str, token: str, product_id: str) -> None:
    """Reactivate a deactivated product (owner only)."""
    handler = ReactivateProductHandler(
        store=ledger_store(),
        identity=identity_verifier([token]),
        clock=clock(),
        publisher=event_publisher(),
    )

    try:
        handler.handle(owner=caller, product_id=product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product_id}' reactivated.")


@click.command("transfer")
@caller_options
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--new-owner", required=True, help="Identity receiving the product.")
@click.option("--new-owner-token", required=True, help="Identity token of the new owner.")
def product_transfer(
    caller: str, token: str, product_id: str, new_owner: str, new_owner_token: str
) -> None:
    """Transfer ownership; both parties must present a token."""
    handler = TransferProductHandler(
        store=ledger_store(),
        identity=identity_verifier([token, new_owner_token]),
        publisher=event_publisher(),
    )

    try:
        handler.handle(owner=caller, product_id=product_id, new_owner=new_owner)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product_id}' transferred to {new_owner}.")
