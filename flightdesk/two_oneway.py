"""Merge same-flight offers of a two-oneway search into single result cards.

When a domestic multicity search is shown as two one-way lists, the provider
returns one offer per fare class. Offers for the same physical flights are
collapsed into one offer whose ``up_sell_options`` list the fares, cheapest
first.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from .models import FareFeatures, FlightOffer, UpSellOption
from .offer_filter import offer_price

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "BDT"


def flight_signature(offer: FlightOffer) -> str:
    """Identify the flights of *offer*: carrier, flight numbers and times."""
    parts = [
        f"{seg.airline.code}{seg.flight_number}_{seg.departure.date_time}_{seg.arrival.date_time}"
        for group in offer.segments
        for seg in group.segments
    ]
    return f"{offer.validating_carrier.code}_{'_'.join(parts)}"


def _format_amount(amount: float) -> str:
    # thousands separators, at most three decimals
    return f"{amount:,.3f}".rstrip("0").rstrip(".")


def _booking_class(offer: FlightOffer) -> str:
    if offer.segments and offer.segments[0].segments:
        return offer.segments[0].segments[0].booking_class
    return ""


def _fare_option(offer: FlightOffer) -> UpSellOption:
    rbd = _booking_class(offer)
    currency = offer.pricing.currency or DEFAULT_CURRENCY
    price = f"{currency} {_format_amount(offer_price(offer))}"
    return UpSellOption(
        id=offer.id,
        brand_name=f"Economy ({rbd}) - {price}" if rbd else price,
        refundable=offer.refundable,
        pricing=offer.pricing,
        features=FareFeatures(refund_allowed=offer.refundable),
        baggage=offer.baggage,
        booking_class=rbd or None,
    )


def merge_same_flight(offers: List[FlightOffer]) -> FlightOffer:
    """Collapse offers for one flight into the cheapest, listing every fare."""
    if not offers:
        raise ValueError("merge_same_flight needs at least one offer")
    if len(offers) == 1:
        return offers[0]
    ordered = sorted(offers, key=offer_price)
    return ordered[0].model_copy(
        update={"up_sell_options": [_fare_option(o) for o in ordered]}
    )


def group_offers_by_flight(offers: List[FlightOffer]) -> List[FlightOffer]:
    """Group *offers* by :func:`flight_signature`, keeping first-seen order."""
    groups: Dict[str, List[FlightOffer]] = {}
    for offer in offers:
        groups.setdefault(flight_signature(offer), []).append(offer)
    merged = [merge_same_flight(group) for group in groups.values()]
    logger.debug("Grouped %d offers into %d flights", len(offers), len(merged))
    return merged


__all__ = [
    "DEFAULT_CURRENCY",
    "flight_signature",
    "merge_same_flight",
    "group_offers_by_flight",
]
