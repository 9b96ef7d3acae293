from __future__ import annotations

import logging
from typing import List, Optional

from .config import get_settings
from .models import (
    OriginDest,
    PaxEntry,
    SearchFormData,
    ShoppingCriteria,
    ShoppingRequest,
    TravelerData,
)

logger = logging.getLogger(__name__)

TRIP_TYPE_MAP = {
    "oneway": "Oneway",
    "roundtrip": "Return",
    "multicity": "Circle",
}

DEFAULT_CHILD_AGE = 11


def ptc_for_child_age(age: Optional[int]) -> str:
    """Return the passenger type code for a child of *age* years.

    Children under 12 get an age-specific code (``C05``); older ones fall
    back to the generic ``CHD``.
    """
    if age is None:
        age = DEFAULT_CHILD_AGE
    if age < 12:
        return f"C{age:02d}"
    return "CHD"


def _origin_dest(form: SearchFormData) -> List[OriginDest]:
    legs: List[OriginDest] = []

    if form.trip_type == "multicity":
        for idx, seg in enumerate(form.segments):
            origin = seg.from_airport.iata if seg.from_airport else ""
            dest = seg.to_airport.iata if seg.to_airport else ""
            if not origin or not dest or not seg.departure_date:
                logger.debug("Skipping incomplete multicity segment %d", idx)
                continue
            legs.append(OriginDest(origin, seg.departure_date, dest))
        return legs

    origin, dest = form.from_airport, form.to_airport
    if origin and dest:
        legs.append(OriginDest(origin.iata, form.departure_date, dest.iata))

    if form.trip_type == "roundtrip":
        if form.return_date and origin and dest:
            legs.append(OriginDest(dest.iata, form.return_date, origin.iata))
        else:
            logger.debug("Roundtrip without return data, sending outbound only")
    return legs


def _pax(travelers: TravelerData) -> List[PaxEntry]:
    ptcs = ["ADT"] * travelers.adults
    ages = travelers.children_ages
    for i in range(travelers.children):
        ptcs.append(ptc_for_child_age(ages[i] if i < len(ages) else None))
    ptcs.extend(["INF"] * travelers.infants)
    return [PaxEntry(f"PAX{n}", ptc) for n, ptc in enumerate(ptcs, start=1)]


def build_request(
    form: SearchFormData, *, point_of_sale: Optional[str] = None
) -> ShoppingRequest:
    """Translate the dashboard search form into an AirShopping request."""
    settings = get_settings()
    criteria = ShoppingCriteria(
        trip_type=TRIP_TYPE_MAP[form.trip_type],
        cabin_code=form.traveler_data.travel_class or settings.default_cabin,
        vendor_pref=[form.preferred_airline] if form.preferred_airline else [],
        # Circle trips ask the provider for combined-fare pricing.
        prefer_combine=form.trip_type == "multicity",
    )
    return ShoppingRequest(
        point_of_sale=point_of_sale or settings.point_of_sale,
        origin_dest=_origin_dest(form),
        pax=_pax(form.traveler_data),
        shopping_criteria=criteria,
    )


__all__ = ["TRIP_TYPE_MAP", "DEFAULT_CHILD_AGE", "ptc_for_child_age", "build_request"]
