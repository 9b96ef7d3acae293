from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, IO, Optional

import click
from pydantic import ValidationError

from .booking_normalizer import envelope_to_booking_record
from .config import get_settings
from .models import FlightFilters, PayloadError, SearchFormData, offers_from_json
from .offer_filter import apply_filters, default_filters, extract_filter_options
from .request_builder import build_request
from .two_oneway import group_offers_by_flight

logger = logging.getLogger(__name__)


def _load(fh: IO[str]) -> Any:
    try:
        return json.load(fh)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{fh.name}: invalid JSON ({exc})") from exc


def _echo(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Flight search, filter and booking helpers."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        raise click.ClickException(f"invalid configuration: {exc}") from exc
    level = "DEBUG" if verbose else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@cli.command("build-request")
@click.argument("form_file", type=click.File("r"))
def build_request_cmd(form_file: IO[str]) -> None:
    """Print the AirShopping request for a search form."""
    try:
        form = SearchFormData.from_dict(_load(form_file))
    except PayloadError as exc:
        raise click.ClickException(str(exc)) from exc
    request = build_request(form)
    logger.info(
        "Built %s request with %d legs and %d passengers",
        request.shopping_criteria.trip_type,
        len(request.origin_dest),
        len(request.pax),
    )
    _echo(request.to_payload())


@cli.command()
@click.argument("offers_file", type=click.File("r"))
def facets(offers_file: IO[str]) -> None:
    """Print the filter options available for a list of offers."""
    try:
        offers = offers_from_json(_load(offers_file))
    except PayloadError as exc:
        raise click.ClickException(str(exc)) from exc
    _echo(extract_filter_options(offers).to_dict())


@cli.command("group-flights")
@click.argument("offers_file", type=click.File("r"))
def group_flights(offers_file: IO[str]) -> None:
    """Print two-oneway offers merged per flight, with their fare options."""
    try:
        offers = offers_from_json(_load(offers_file))
    except PayloadError as exc:
        raise click.ClickException(str(exc)) from exc
    _echo([offer.to_dict() for offer in group_offers_by_flight(offers)])


@cli.command("filter")
@click.argument("offers_file", type=click.File("r"))
@click.option(
    "--filters",
    "filters_file",
    type=click.File("r"),
    help="JSON file with the selected filters",
)
def filter_cmd(offers_file: IO[str], filters_file: Optional[IO[str]]) -> None:
    """Print the ids of the offers matching the selected filters."""
    try:
        offers = offers_from_json(_load(offers_file))
        filters = (
            FlightFilters.from_dict(_load(filters_file))
            if filters_file
            else default_filters()
        )
    except PayloadError as exc:
        raise click.ClickException(str(exc)) from exc
    matched = apply_filters(offers, filters)
    logger.info("%d of %d offers match", len(matched), len(offers))
    for offer in matched:
        click.echo(offer.id)


@cli.command()
@click.argument("envelope_file", type=click.File("r"))
@click.option("--created-by", help="User id or email that created the booking")
@click.option("--created-by-email", help="Email of the creating user")
@click.option("--issued-override", help="Issue timestamp to record instead of respondedOn")
def booking(
    envelope_file: IO[str],
    created_by: Optional[str],
    created_by_email: Optional[str],
    issued_override: Optional[str],
) -> None:
    """Print the booking record for an OrderCreate/OrderRetrieve response."""
    try:
        record = envelope_to_booking_record(
            _load(envelope_file),
            created_by=created_by,
            created_by_email=created_by_email,
            issued_override=issued_override,
            updated_at=datetime.now(timezone.utc).isoformat(),
        )
    except PayloadError as exc:
        raise click.ClickException(str(exc)) from exc
    _echo(record.to_dict())


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
