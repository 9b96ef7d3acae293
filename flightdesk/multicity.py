from __future__ import annotations

from typing import Callable, Optional, Set

from .airports import BANGLADESH_AIRPORT_CODES, CityInfo, get_city_info
from .models import FlightOffer, SearchFormData

CityLookup = Callable[[str], Optional[CityInfo]]


def is_multicity_domestic(
    form: SearchFormData, lookup: CityLookup = get_city_info
) -> bool:
    """Return ``True`` if every airport of a multicity search is in one country.

    An airport the lookup cannot place makes the whole search non-domestic.
    """
    if form.trip_type != "multicity" or not form.segments:
        return False

    airports: Set[str] = set()
    for segment in form.segments:
        for airport in (segment.from_airport, segment.to_airport):
            if airport and airport.iata:
                airports.add(airport.iata)

    countries: Set[str] = set()
    for iata in airports:
        info = lookup(iata)
        if info is None or not info.country_code:
            return False
        countries.add(info.country_code)

    return len(countries) == 1


def is_multicity_two_segments(form: SearchFormData) -> bool:
    return form.trip_type == "multicity" and len(form.segments) == 2


def should_display_as_two_oneway(
    form: SearchFormData, lookup: CityLookup = get_city_info
) -> bool:
    """Domestic multicity searches with exactly two legs are shown as two one-ways."""
    return is_multicity_two_segments(form) and is_multicity_domestic(form, lookup)


def _in_bangladesh(iata: str, lookup: CityLookup) -> bool:
    code = (iata or "").strip().upper()
    if not code:
        return False
    info = lookup(code)
    if info is not None:
        return info.country_code == "BD"
    return code in BANGLADESH_AIRPORT_CODES


def is_domestic_bangladesh_offer(
    offer: FlightOffer, lookup: CityLookup = get_city_info
) -> bool:
    """Return ``True`` if every airport an offer touches is in Bangladesh.

    Group endpoints and each flight's endpoints are all checked; an offer
    without segment groups is not domestic. Cards for such routes hide the
    operating carrier.
    """
    if not offer.segments:
        return False
    for group in offer.segments:
        endpoints = [group.departure, group.arrival]
        for segment in group.segments:
            endpoints.extend((segment.departure, segment.arrival))
        if not all(_in_bangladesh(e.airport, lookup) for e in endpoints):
            return False
    return True


__all__ = [
    "CityLookup",
    "is_multicity_domestic",
    "is_multicity_two_segments",
    "should_display_as_two_oneway",
    "is_domestic_bangladesh_offer",
]
