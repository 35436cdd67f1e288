"""CLI commands for tracking events."""

from __future__ import annotations

import json
from pathlib import Path

import click

from chainlog.application.add_tracking_event import AddTrackingEventHandler
from chainlog.application.dto import EventSpec
from chainlog.application.query_events import EventQueryHandler
from chainlog.domain.exceptions import DomainException
from chainlog.domain.model.tracking_event import MAX_TIMESTAMP, EventFilter
from chainlog.domain.model.value_objects import ContentHash
from chainlog.infrastructure.bootstrap import (
    clock,
    event_publisher,
    identity_verifier,
    ledger_store,
)
from chainlog.infrastructure.cli.common import (
    caller_options,
    display_event,
    display_event_page,
    json_object,
    json_text,
    json_text_map,
    parse_hash,
    parse_pairs,
)


def _data_hash(hash_hex: str | None, data: str | None) -> ContentHash:
    """Use --hash verbatim, or digest --data; default to the zero hash."""
    if hash_hex and data:
        raise click.UsageError("Use either --hash or --data, not both.")
    if hash_hex:
        return parse_hash(hash_hex, "--hash")
    if data is not None:
        return ContentHash.digest(data.encode("utf-8"))
    return ContentHash.zero()


def _spec_from_json(raw: object) -> EventSpec:
    entry = json_object(raw, "event")
    hash_hex = json_text(entry, "data_hash", default="")
    return EventSpec(
        event_type=json_text(entry, "event_type"),
        location=json_text(entry, "location", default=""),
        data_hash=parse_hash(hash_hex, "data_hash") if hash_hex else ContentHash.zero(),
        note=json_text(entry, "note", default=""),
        metadata=json_text_map(entry, "metadata"),
    )


@click.command("add")
@caller_options
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--type", "event_type", required=True, help="Event type, e.g. HARVEST or SHIP.")
@click.option("--location", default="", help="Where it happened.")
@click.option("--hash", "hash_hex", default=None, help="Content hash, 64 hex chars.")
@click.option("--data", default=None, help="Payload text; its SHA-256 becomes the hash.")
@click.option("--note", default="", help="Free-text note.")
@click.option("--meta", multiple=True, help="Metadata as key=value (repeatable).")
def event_add(
    caller: str,
    token: str,
    product_id: str,
    event_type: str,
    location: str,
    hash_hex: str | None,
    data: str | None,
    note: str,
    meta: tuple[str, ...],
) -> None:
    """Append a tracking event to a product."""
    spec = EventSpec(
        event_type=event_type,
        location=location,
        data_hash=_data_hash(hash_hex, data),
        note=note,
        metadata=parse_pairs(meta, "--meta"),
    )

    handler = AddTrackingEventHandler(
        store=ledger_store(),
        identity=identity_verifier([token]),
        clock=clock(),
        publisher=event_publisher(),
    )

    try:
        event_id = handler.handle(actor=caller, product_id=product_id, spec=spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Event #{event_id} recorded for '{product_id}'.")


@click.command("import")
@caller_options
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def event_import(caller: str, token: str, product_id: str, file: Path) -> None:
    """Append every event in a JSON array file, all or nothing."""
    try:
        entries = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON: {exc}", param_hint="FILE")
    if not isinstance(entries, list):
        raise click.BadParameter("Expected a JSON array of events.", param_hint="FILE")

    specs = [_spec_from_json(entry) for entry in entries]

    handler = AddTrackingEventHandler(
        store=ledger_store(),
        identity=identity_verifier([token]),
        clock=clock(),
        publisher=event_publisher(),
    )

    try:
        ids = handler.handle_batch(actor=caller, product_id=product_id, specs=specs)
    except DomainException as exc:
        raise click.ClickException(f"Import aborted, nothing recorded: {exc}")

    if ids:
        click.echo(f"Recorded {len(ids)} events (#{ids[0]}-#{ids[-1]}).")
    else:
        click.echo("Recorded 0 events.")


@click.command("show")
@click.option("--event-id", required=True, type=int, help="Event ID to display.")
def event_show(event_id: int) -> None:
    """Show a single tracking event."""
    handler = EventQueryHandler(store=ledger_store())

    try:
        event = handler.get_event(event_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_event(event)


@click.command("list")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--type", "event_type", default="", help="Only this event type.")
@click.option("--actor", default=None, help="Only events by this identity.")
@click.option("--location", default="", help="Only events at this exact location.")
@click.option("--start", "start_time", type=int, default=0, help="Earliest timestamp (inclusive).")
@click.option("--end", "end_time", type=int, default=MAX_TIMESTAMP, help="Latest timestamp (inclusive).")
@click.option("--recent", is_flag=True, default=False, help="Newest first.")
@click.option("--offset", type=click.IntRange(min=0), default=0, help="Events to skip.")
@click.option("--limit", type=click.IntRange(min=0), default=20, help="Page size.")
def event_list(
    product_id: str,
    event_type: str,
    actor: str | None,
    location: str,
    start_time: int,
    end_time: int,
    recent: bool,
    offset: int,
    limit: int,
) -> None:
    """List a product's events, one page at a time."""
    handler = EventQueryHandler(store=ledger_store())
    event_filter = EventFilter(
        event_type=event_type, start_time=start_time, end_time=end_time, location=location
    )
    filtering = event_filter != EventFilter()

    if sum([recent, actor is not None, filtering]) > 1:
        raise click.UsageError("--recent, --actor and the filter options are exclusive.")

    try:
        if recent:
            page = handler.recent(product_id, offset, limit)
        elif actor is not None:
            page = handler.by_actor(product_id, actor, offset, limit)
        else:
            page = handler.filtered(product_id, event_filter, offset, limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_event_page(page, offset)


@click.command("count")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--type", "event_type", default=None, help="Count only this event type.")
@click.option("--actor", default=None, help="Count only events by this identity.")
def event_count(product_id: str, event_type: str | None, actor: str | None) -> None:
    """Count a product's events."""
    handler = EventQueryHandler(store=ledger_store())

    try:
        if event_type is not None:
            count = handler.event_count_by_type(product_id, event_type)
        elif actor is not None:
            count = handler.event_count_by_actor(product_id, actor)
        else:
            count = handler.event_count(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(str(count))
