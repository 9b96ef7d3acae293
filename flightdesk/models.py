"""Data models used throughout the project.

Attribute names are snake_case. The incoming JSON shapes produced by the
dashboard and the upstream flight API are camelCase and are validated with
pydantic models; the request, facet and booking types built here are plain
dataclasses whose ``to_dict``/``to_payload`` methods emit camelCase again.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel

TRIP_TYPES = ("oneway", "roundtrip", "multicity")


class PayloadError(ValueError):
    """A JSON payload does not have the structure this library expects."""


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'payload'}: {err['msg']}"
        for err in exc.errors()
    )


class Payload(BaseModel):
    """Base for camelCase JSON input.

    ``null`` and empty-string values count as absent so the field default
    applies, which is how the dashboard sends untouched form fields.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_blanks(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None and v != ""}
        return data

    @classmethod
    def from_dict(cls, data: Any):
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise PayloadError(f"Invalid {cls.__name__}: {_describe(exc)}") from exc


# ────────────────────────────────────────────────────────────────
# Search form (UI side)
# ────────────────────────────────────────────────────────────────


class Airport(Payload):
    iata: str = ""
    city: str = ""
    country: str = ""
    name: str = ""


class MulticitySegment(Payload):
    from_airport: Optional[Airport] = Field(None, alias="from")
    to_airport: Optional[Airport] = Field(None, alias="to")
    departure_date: str = ""


class TravelerData(Payload):
    adults: int = Field(0, ge=0)
    children: int = Field(0, ge=0)
    infants: int = Field(0, ge=0)
    children_ages: List[Optional[int]] = Field(default_factory=list)
    travel_class: str = ""


class SearchFormData(Payload):
    trip_type: Literal["oneway", "roundtrip", "multicity"]
    from_airport: Optional[Airport] = Field(None, alias="from")
    to_airport: Optional[Airport] = Field(None, alias="to")
    departure_date: str = ""
    return_date: Optional[str] = None
    segments: List[MulticitySegment] = Field(default_factory=list)
    traveler_data: TravelerData = Field(default_factory=TravelerData)
    preferred_airline: str = ""
    fare_type: str = "regular"


# ────────────────────────────────────────────────────────────────
# Shopping request (wire side)
# ────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class OriginDest:
    origin: str
    date: str
    destination: str


@dataclass(slots=True)
class PaxEntry:
    pax_id: str
    ptc: str


@dataclass(slots=True)
class ShoppingCriteria:
    trip_type: str
    cabin_code: str
    vendor_pref: List[str] = field(default_factory=list)
    prefer_combine: bool = False
    return_upsell_info: bool = True


@dataclass(slots=True)
class ShoppingRequest:
    point_of_sale: str
    origin_dest: List[OriginDest]
    pax: List[PaxEntry]
    shopping_criteria: ShoppingCriteria

    def to_payload(self) -> Dict[str, Any]:
        """Render the JSON body expected by the AirShopping endpoint."""
        criteria = self.shopping_criteria
        return {
            "pointOfSale": self.point_of_sale,
            "request": {
                "originDest": [
                    {
                        "originDepRequest": {
                            "iatA_LocationCode": od.origin,
                            "date": od.date,
                        },
                        "destArrivalRequest": {
                            "iatA_LocationCode": od.destination,
                        },
                    }
                    for od in self.origin_dest
                ],
                "pax": [{"paxID": p.pax_id, "ptc": p.ptc} for p in self.pax],
                "shoppingCriteria": {
                    "tripType": criteria.trip_type,
                    "travelPreferences": {
                        "vendorPref": list(criteria.vendor_pref),
                        "cabinCode": criteria.cabin_code,
                    },
                    "returnUPSellInfo": criteria.return_upsell_info,
                    "preferCombine": criteria.prefer_combine,
                },
            },
        }


# ────────────────────────────────────────────────────────────────
# Flight offers (already transformed from the provider response)
# ────────────────────────────────────────────────────────────────


class Carrier(Payload):
    code: str = ""
    name: str = ""


class Endpoint(Payload):
    airport: str = ""
    date_time: str = ""
    city: str = ""
    terminal: Optional[str] = None


class Layover(Payload):
    duration: int = 0
    airport: str = ""


class FlightSegment(Payload):
    """A single physical flight inside a segment group."""

    flight_number: str = ""
    airline: Carrier = Field(default_factory=Carrier)
    departure: Endpoint = Field(default_factory=Endpoint)
    arrival: Endpoint = Field(default_factory=Endpoint)
    duration: int = 0
    cabin_class: str = ""
    booking_class: str = ""
    layover: Optional[Layover] = None


class SegmentGroup(Payload):
    """One directional leg of an offer (outbound, inbound or a multicity leg)."""

    group_id: int = 0
    departure: Endpoint = Field(default_factory=Endpoint)
    arrival: Endpoint = Field(default_factory=Endpoint)
    segments: List[FlightSegment] = Field(default_factory=list)
    total_duration: int = 0
    stops: int = 0
    is_return: bool = False


class Pricing(Payload):
    total: float = 0.0
    currency: str = ""
    gross: Optional[float] = None
    breakdown: Dict[str, float] = Field(default_factory=dict)


class FareFeatures(Payload):
    meal: bool = False
    seat: str = ""
    miles: str = ""
    refund_allowed: bool = False
    exchange_allowed: bool = False


class UpSellOption(Payload):
    """An alternative fare for the same flight, shown in the fare dropdown."""

    id: str = ""
    brand_name: str = ""
    refundable: bool = False
    pricing: Pricing = Field(default_factory=Pricing)
    features: FareFeatures = Field(default_factory=FareFeatures)
    baggage: Dict[str, Any] = Field(default_factory=dict)
    booking_class: Optional[str] = None


class FlightOffer(Payload):
    id: str = ""
    validating_carrier: Carrier = Field(default_factory=Carrier)
    segments: List[SegmentGroup] = Field(default_factory=list)
    pricing: Pricing = Field(default_factory=Pricing)
    refundable: bool = False
    fare_type: str = "Web"
    baggage: Dict[str, Any] = Field(default_factory=dict)
    seats_remaining: int = 0
    up_sell_options: List[UpSellOption] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


_OFFER_LIST = TypeAdapter(List[FlightOffer])


def offers_from_json(data: Any) -> List[FlightOffer]:
    """Parse a list of offers, or an object carrying them under ``offers``."""
    if isinstance(data, dict):
        data = data.get("offers")
    try:
        return _OFFER_LIST.validate_python(data if data is not None else [])
    except ValidationError as exc:
        raise PayloadError(f"Invalid offers: {_describe(exc)}") from exc


# ────────────────────────────────────────────────────────────────
# Filters and facets
# ────────────────────────────────────────────────────────────────


class ValueRange(Payload):
    min: float = 0
    max: float = math.inf

    def to_dict(self) -> Dict[str, float]:
        return {"min": self.min, "max": self.max}


class FlightFilters(Payload):
    stops: List[str] = Field(default_factory=list)
    refundable_only: bool = False
    price_range: ValueRange = Field(default_factory=ValueRange)
    duration_range: ValueRange = Field(default_factory=ValueRange)
    departure_time_slots: List[str] = Field(default_factory=list)
    layover_time: List[str] = Field(default_factory=list)
    alliances: List[str] = Field(default_factory=list)
    airlines: List[str] = Field(default_factory=list)
    layover_airports: List[str] = Field(default_factory=list)


@dataclass(slots=True)
class CountFacet:
    value: str
    label: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "label": self.label, "count": self.count}


@dataclass(slots=True)
class AirlineFacet:
    code: str
    label: str
    count: int
    price: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.code,
            "label": self.label,
            "code": self.code,
            "count": self.count,
            "price": self.price,
        }


@dataclass(slots=True)
class AirportFacet:
    code: str
    label: str
    name: str
    count: int
    price: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.code,
            "label": self.label,
            "code": self.code,
            "name": self.name,
            "count": self.count,
            "price": self.price,
        }


@dataclass(slots=True)
class FacetSet:
    price_range: ValueRange
    duration_range: ValueRange
    airlines: List[AirlineFacet] = field(default_factory=list)
    layover_airports: List[AirportFacet] = field(default_factory=list)
    alliance_options: List[CountFacet] = field(default_factory=list)
    stops_options: List[CountFacet] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "priceRange": self.price_range.to_dict(),
            "durationRange": self.duration_range.to_dict(),
            "airlines": [f.to_dict() for f in self.airlines],
            "layoverAirports": [f.to_dict() for f in self.layover_airports],
            "allianceOptions": [f.to_dict() for f in self.alliance_options],
            "stopsOptions": [f.to_dict() for f in self.stops_options],
        }


# ────────────────────────────────────────────────────────────────
# Booking record (persisted)
# ────────────────────────────────────────────────────────────────


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    PENDING = "pending"
    ON_HOLD = "on-hold"
    IN_PROGRESS = "in-progress"
    UNCONFIRMED = "unconfirmed"


@dataclass(slots=True)
class BookingRecord:
    """Booking as stored by the persistence layer, keyed by ``reference_no``.

    ``pnr``, ``created_by_email`` and ``updated_at`` are ``None`` when unknown
    and are left out of :meth:`to_dict` entirely, which is not the same as
    storing an empty string.
    """

    reference_no: str
    create_date: str
    status: BookingStatus
    name: str
    fly_date: str
    airline: str
    fare: float
    issued: str
    passenger_type: str
    route: str
    created_by: str
    pnr: Optional[str] = None
    created_by_email: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "referenceNo": self.reference_no,
            "createDate": self.create_date,
            "status": self.status.value,
            "name": self.name,
            "flyDate": self.fly_date,
            "airline": self.airline,
            "fare": self.fare,
            "issued": self.issued,
            "passengerType": self.passenger_type,
            "route": self.route,
            "createdBy": self.created_by,
        }
        if self.pnr is not None:
            record["pnr"] = self.pnr
        if self.created_by_email is not None:
            record["createdByEmail"] = self.created_by_email
        if self.updated_at is not None:
            record["updatedAt"] = self.updated_at
        return record


__all__ = [
    "TRIP_TYPES",
    "PayloadError",
    "Payload",
    "Airport",
    "MulticitySegment",
    "TravelerData",
    "SearchFormData",
    "OriginDest",
    "PaxEntry",
    "ShoppingCriteria",
    "ShoppingRequest",
    "Carrier",
    "Endpoint",
    "Layover",
    "FlightSegment",
    "SegmentGroup",
    "Pricing",
    "FareFeatures",
    "UpSellOption",
    "FlightOffer",
    "offers_from_json",
    "ValueRange",
    "FlightFilters",
    "CountFacet",
    "AirlineFacet",
    "AirportFacet",
    "FacetSet",
    "BookingStatus",
    "BookingRecord",
]
