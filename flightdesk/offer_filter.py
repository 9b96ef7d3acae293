"""Facet extraction and compound filtering over a list of flight offers.

Both entry points are pure: :func:`extract_filter_options` builds the dynamic
filter options shown next to the results, :func:`apply_filters` narrows the
offers down to the ones matching every active criterion.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Dict, Iterable, Iterator, List, Optional

from .alliances import ALLIANCE_ORDER, alliance_for
from .models import (
    AirlineFacet,
    AirportFacet,
    CountFacet,
    FacetSet,
    FlightFilters,
    FlightOffer,
    FlightSegment,
    Layover,
    SegmentGroup,
    ValueRange,
)

logger = logging.getLogger(__name__)

DEFAULT_PRICE_RANGE = (0, 100000)
DEFAULT_DURATION_RANGE = (0, 2400)  # 40 hours
MAX_VALID_DURATION = 10000  # minutes, anything longer is corrupt data

STOP_LABELS = {"non-stop": "Non-Stop", "1-stop": "1 Stop", "2-plus": "2+ Stops"}

# (slot, first hour, end hour) in UTC, half-open
TIME_SLOTS = (("00-06", 0, 6), ("06-12", 6, 12), ("12-18", 12, 18), ("18-24", 18, 24))

# (bucket, lower bound, upper bound) in minutes, half-open
LAYOVER_BUCKETS = (
    ("0h-5h", 0, 300),
    ("5h-10h", 300, 600),
    ("10h-15h", 600, 900),
    ("15h+", 900, math.inf),
)


# ────────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────────


def default_filters() -> FlightFilters:
    """Filter state with nothing selected and unbounded ranges."""
    return FlightFilters()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def offer_price(offer: FlightOffer) -> float:
    """Displayed price: gross (before discount) when known, else total."""
    gross = offer.pricing.gross
    return gross if gross is not None else offer.pricing.total


def segment_group_duration(group: SegmentGroup) -> int:
    """Minutes from the group's departure to its arrival.

    Falls back to the provider's ``total_duration`` when the timestamps are
    missing or do not give a positive span.
    """
    dep = parse_timestamp(group.departure.date_time)
    arr = parse_timestamp(group.arrival.date_time)
    if dep is not None and arr is not None:
        minutes = round((arr - dep).total_seconds() / 60)
        if minutes > 0:
            return minutes
    return group.total_duration


def max_stops(offer: FlightOffer) -> int:
    return max((group.stops for group in offer.segments), default=0)


def stop_bucket(offer: FlightOffer) -> str:
    """Bucket an offer by its worst leg."""
    stops = max_stops(offer)
    if stops <= 0:
        return "non-stop"
    if stops == 1:
        return "1-stop"
    return "2-plus"


def departure_slot(hour: int) -> Optional[str]:
    for slot, start, end in TIME_SLOTS:
        if start <= hour < end:
            return slot
    return None


def layover_bucket(minutes: float) -> Optional[str]:
    for bucket, low, high in LAYOVER_BUCKETS:
        if low <= minutes < high:
            return bucket
    return None


def _layovers(offer: FlightOffer) -> Iterator[Layover]:
    for group in offer.segments:
        for segment in group.segments:
            if segment.layover is not None:
                yield segment.layover


def is_range_filter_active(low: float, high: float) -> bool:
    """Return ``True`` if a min/max range actually constrains anything.

    ``inf`` is the "no upper bound" default and ``0`` is a zeroed UI state;
    neither may exclude offers.
    """
    if high == math.inf or high == 0:
        return False
    if not math.isfinite(low) or not math.isfinite(high):
        return False
    return low <= high


def format_duration(minutes: int) -> str:
    """``"2h 15m"``; a zero hour or minute part is left out (``"45m"``, ``"2h"``)."""
    hours, mins = divmod(int(minutes), 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def calculate_total_duration(segments: Iterable[FlightSegment]) -> int:
    """Flying time of *segments* plus the layover after each of them."""
    total = 0
    for segment in segments:
        total += segment.duration
        if segment.layover is not None:
            total += segment.layover.duration
    return total


# ────────────────────────────────────────────────────────────────
# Facets
# ────────────────────────────────────────────────────────────────


def _default_range(bounds) -> ValueRange:
    low, high = bounds
    return ValueRange(min=low, max=high)


def _price_range(offers: List[FlightOffer]) -> ValueRange:
    prices = [offer_price(o) for o in offers]
    return ValueRange(min=math.floor(min(prices)), max=math.ceil(max(prices)))


def _duration_range(offers: List[FlightOffer]) -> ValueRange:
    durations = [
        d
        for o in offers
        for d in (segment_group_duration(g) for g in o.segments)
        if 0 < d < MAX_VALID_DURATION
    ]
    if not durations:
        return _default_range(DEFAULT_DURATION_RANGE)
    return ValueRange(min=math.floor(min(durations)), max=math.ceil(max(durations)))


def _airline_facets(offers: List[FlightOffer]) -> List[AirlineFacet]:
    facets: Dict[str, AirlineFacet] = {}
    for offer in offers:
        carrier = offer.validating_carrier
        price = offer_price(offer)
        facet = facets.get(carrier.code)
        if facet is None:
            facets[carrier.code] = AirlineFacet(
                code=carrier.code,
                label=carrier.name or carrier.code,
                count=1,
                price=price,
            )
        else:
            facet.count += 1
            facet.price = min(facet.price, price)
    # most common carrier first
    return sorted(facets.values(), key=lambda f: f.count, reverse=True)


def _layover_airport_facets(offers: List[FlightOffer]) -> List[AirportFacet]:
    facets: Dict[str, AirportFacet] = {}
    for offer in offers:
        price = offer_price(offer)
        for layover in _layovers(offer):
            facet = facets.get(layover.airport)
            if facet is None:
                facets[layover.airport] = AirportFacet(
                    code=layover.airport,
                    label=layover.airport,
                    name=f"{layover.airport} Airport",
                    count=1,
                    price=price,
                )
            else:
                facet.count += 1
                facet.price = min(facet.price, price)
    # cheapest connection first
    return sorted(facets.values(), key=lambda f: f.price)


def _alliance_facets(offers: List[FlightOffer]) -> List[CountFacet]:
    counts = dict.fromkeys(ALLIANCE_ORDER, 0)
    for offer in offers:
        alliance = alliance_for(offer.validating_carrier.code)
        if alliance:
            counts[alliance] += 1
    return [
        CountFacet(value=name, label=name, count=counts[name])
        for name in ALLIANCE_ORDER
        if counts[name] > 0
    ]


def _stops_facets(offers: List[FlightOffer]) -> List[CountFacet]:
    counts = dict.fromkeys(STOP_LABELS, 0)
    for offer in offers:
        counts[stop_bucket(offer)] += 1
    return [
        CountFacet(value=bucket, label=label, count=counts[bucket])
        for bucket, label in STOP_LABELS.items()
        if counts[bucket] > 0
    ]


def extract_filter_options(offers: List[FlightOffer]) -> FacetSet:
    """Compute the filter facets available for *offers*."""
    if not offers:
        return FacetSet(
            price_range=_default_range(DEFAULT_PRICE_RANGE),
            duration_range=_default_range(DEFAULT_DURATION_RANGE),
        )

    return FacetSet(
        price_range=_price_range(offers),
        duration_range=_duration_range(offers),
        airlines=_airline_facets(offers),
        layover_airports=_layover_airport_facets(offers),
        alliance_options=_alliance_facets(offers),
        stops_options=_stops_facets(offers),
    )


# ────────────────────────────────────────────────────────────────
# Filtering
# ────────────────────────────────────────────────────────────────


def _in_range(value: float, rng: ValueRange) -> bool:
    return rng.min <= value <= rng.max


def _matches_duration(offer: FlightOffer, rng: ValueRange) -> bool:
    durations = [segment_group_duration(g) for g in offer.segments]
    positive = [d for d in durations if d > 0]
    if not positive:
        return True
    return _in_range(max(positive), rng)


def _matches_departure_slot(offer: FlightOffer, slots: List[str]) -> bool:
    if not offer.segments:
        return False
    departure = parse_timestamp(offer.segments[0].departure.date_time)
    if departure is None:
        return False
    hour = departure.astimezone(timezone.utc).hour
    return departure_slot(hour) in slots


def _matches_layover_time(offer: FlightOffer, buckets: List[str]) -> bool:
    minutes = [layover.duration for layover in _layovers(offer)]
    if not minutes:
        return True
    return layover_bucket(max(minutes)) in buckets


def _matches_alliance(offer: FlightOffer, alliances: List[str]) -> bool:
    alliance = alliance_for(offer.validating_carrier.code)
    return alliance is not None and alliance in alliances


def _matches_layover_airport(offer: FlightOffer, airports: List[str]) -> bool:
    return any(layover.airport in airports for layover in _layovers(offer))


def matches_filters(offer: FlightOffer, filters: FlightFilters) -> bool:
    """Return ``True`` if *offer* passes every active criterion of *filters*."""
    if filters.stops and stop_bucket(offer) not in filters.stops:
        return False

    if filters.refundable_only and offer.refundable is not True:
        return False

    price = filters.price_range
    if is_range_filter_active(price.min, price.max):
        if not _in_range(offer_price(offer), price):
            return False

    duration = filters.duration_range
    if is_range_filter_active(duration.min, duration.max):
        if not _matches_duration(offer, duration):
            return False

    if filters.departure_time_slots and not _matches_departure_slot(
        offer, filters.departure_time_slots
    ):
        return False

    if filters.layover_time and not _matches_layover_time(offer, filters.layover_time):
        return False

    if filters.alliances and not _matches_alliance(offer, filters.alliances):
        return False

    if filters.airlines and offer.validating_carrier.code not in filters.airlines:
        return False

    if filters.layover_airports and not _matches_layover_airport(
        offer, filters.layover_airports
    ):
        return False

    return True


def apply_filters(
    offers: List[FlightOffer], filters: FlightFilters
) -> List[FlightOffer]:
    """Return the offers matching *filters*, keeping their order."""
    result = [offer for offer in offers if matches_filters(offer, filters)]
    logger.debug("Filters kept %d of %d offers", len(result), len(offers))
    return result


__all__ = [
    "DEFAULT_PRICE_RANGE",
    "DEFAULT_DURATION_RANGE",
    "MAX_VALID_DURATION",
    "STOP_LABELS",
    "TIME_SLOTS",
    "LAYOVER_BUCKETS",
    "default_filters",
    "parse_timestamp",
    "offer_price",
    "segment_group_duration",
    "max_stops",
    "stop_bucket",
    "departure_slot",
    "layover_bucket",
    "is_range_filter_active",
    "format_duration",
    "calculate_total_duration",
    "extract_filter_options",
    "matches_filters",
    "apply_filters",
]
