"""Option parsing and formatting shared by the CLI command modules."""

from __future__ import annotations

from collections.abc import Callable

import click

from chainlog.domain.exceptions import DomainException
from chainlog.domain.model.page import Page
from chainlog.domain.model.product import Product
from chainlog.domain.model.tracking_event import TrackingEvent
from chainlog.domain.model.value_objects import ContentHash


def caller_options(func: Callable) -> Callable:
    """``--as`` names the calling identity, ``--token`` proves it."""
    func = click.option(
        "--token",
        required=True,
        envvar="CHAINLOG_TOKEN",
        help="Identity token for the caller (see 'chainlog token issue').",
    )(func)
    func = click.option("--as", "caller", required=True, help="Calling identity.")(func)
    return func


def parse_pairs(pairs: tuple[str, ...], option: str) -> dict[str, str]:
    """Parse repeated 'key=value' options into a dict."""
    result: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid entry '{pair}'. Expected 'key=value'.", param_hint=option
            )
        key, value = pair.split("=", 1)
        result[key.strip()] = value
    return result


def parse_hash(raw: str, option: str) -> ContentHash:
    try:
        return ContentHash.of(raw)
    except DomainException as exc:
        raise click.BadParameter(str(exc), param_hint=option)


def parse_hashes(raws: tuple[str, ...] | list[str], option: str) -> list[ContentHash]:
    return [parse_hash(raw, option) for raw in raws]


# --- Import files -------------------------------------------------------------


def _bad_entry(message: str) -> click.BadParameter:
    return click.BadParameter(message, param_hint="FILE")


def json_object(raw: object, kind: str) -> dict:
    if not isinstance(raw, dict):
        raise _bad_entry(f"Each {kind} entry must be a JSON object, got {type(raw).__name__}")
    return raw


def json_text(entry: dict, field: str, default: str | None = None) -> str:
    """String field of an import entry; required when *default* is None."""
    if field not in entry:
        if default is None:
            raise _bad_entry(f"Entry is missing field '{field}'")
        return default
    value = entry[field]
    if not isinstance(value, str):
        raise _bad_entry(f"Field '{field}' must be a string, got {type(value).__name__}")
    return value


def json_text_list(entry: dict, field: str) -> list[str]:
    values = entry.get(field, [])
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise _bad_entry(f"Field '{field}' must be a list of strings")
    return list(values)


def json_text_map(entry: dict, field: str) -> dict[str, str]:
    values = entry.get(field, {})
    if not isinstance(values, dict) or not all(isinstance(v, str) for v in values.values()):
        raise _bad_entry(f"Field '{field}' must be an object of string values")
    return dict(values)


# --- Display ------------------------------------------------------------------


def display_product(product: Product) -> None:
    state = "active" if product.active else "deactivated"
    click.echo(f"Product {product.id}  ({state})")
    click.echo(f"  Name:        {product.name}")
    click.echo(f"  Category:    {product.category}")
    click.echo(f"  Origin:      {product.origin_location}")
    click.echo(f"  Owner:       {product.owner}")
    click.echo(f"  Created:     {product.created_at}")
    if product.description:
        click.echo(f"  Description: {product.description}")
    if product.tags:
        click.echo(f"  Tags:        {', '.join(product.tags)}")
    for h in product.certifications:
        click.echo(f"  Certificate: {h}")
    for h in product.media_hashes:
        click.echo(f"  Media:       {h}")
    for key, value in product.custom.items():
        click.echo(f"  {key}: {value}")
    if product.deactivation is not None:
        record = product.deactivation
        click.echo(
            f"  Deactivated: {record.deactivated_at} by {record.deactivated_by}"
            f" ({record.reason})"
        )


def display_event(event: TrackingEvent) -> None:
    click.echo(f"Event #{event.event_id}  {event.event_type}  product={event.product_id}")
    click.echo(f"  Actor:     {event.actor}")
    click.echo(f"  Timestamp: {event.timestamp}")
    click.echo(f"  Location:  {event.location}")
    click.echo(f"  Data hash: {event.data_hash}")
    if event.note:
        click.echo(f"  Note:      {event.note}")
    for key, value in event.metadata.items():
        click.echo(f"  {key}: {value}")


def display_event_page(page: Page[TrackingEvent], offset: int) -> None:
    if not page.items:
        click.echo(f"No events (total {page.total_count}).")
        return

    click.echo(f"  {'ID':>6} {'Type':<14} {'Timestamp':>12} {'Actor':<16} Location")
    click.echo(f"  {'-'*70}")
    for event in page.items:
        click.echo(
            f"  {event.event_id:>6} {event.event_type:<14} {event.timestamp:>12} "
            f"{event.actor:<16} {event.location}"
        )
    click.echo(f"  {'-'*70}")
    shown_to = offset + len(page.items)
    more = "  (more available)" if page.has_more else ""
    click.echo(f"  {offset + 1}-{shown_to} of {page.total_count}{more}")
