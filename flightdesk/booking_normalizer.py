"""Turn OrderCreate / OrderRetrieve payloads into persistable booking records.

Order payloads differ between provider versions (missing lists, ``response``
versus ``Response``, absent PNRs), so every lookup here navigates the raw
dictionaries defensively and falls back to a display placeholder instead of
raising.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from .config import get_settings
from .models import BookingRecord, BookingStatus, PayloadError

logger = logging.getLogger(__name__)

PLACEHOLDER = "–"  # en dash shown for unknown values

API_STATUS_TO_BOOKING: Mapping[str, BookingStatus] = MappingProxyType(
    {
        "OnHold": BookingStatus.ON_HOLD,
        "Pending": BookingStatus.PENDING,
        "InProgress": BookingStatus.IN_PROGRESS,
        "Confirmed": BookingStatus.CONFIRMED,
        "UnConfirmed": BookingStatus.UNCONFIRMED,
        "Unconfirmed": BookingStatus.UNCONFIRMED,
        "Expired": BookingStatus.EXPIRED,
        "Cancelled": BookingStatus.CANCELLED,
    }
)

PTC_LABELS: Mapping[str, str] = MappingProxyType(
    {"ADT": "Adult", "CHD": "Child", "INF": "Infant"}
)


def _dig(data: Any, *path: Any) -> Any:
    """Follow *path* through nested dicts/lists, returning ``None`` on a miss."""
    for key in path:
        if isinstance(key, int):
            if not isinstance(data, list) or not -len(data) <= key < len(data):
                return None
        elif not isinstance(data, Mapping):
            return None
        data = data[key] if isinstance(key, int) else data.get(key)
        if data is None:
            return None
    return data


def _pax_list(response: Mapping[str, Any]) -> List[Any]:
    pax = response.get("paxList")
    return pax if isinstance(pax, list) else []


def normalize_status(api_status: Optional[str]) -> BookingStatus:
    """Map an upstream order status onto :class:`BookingStatus`.

    The lookup is case-exact; anything unknown becomes ``pending``.
    """
    status = None
    if isinstance(api_status, str):
        status = API_STATUS_TO_BOOKING.get(api_status)
    if status is None:
        logger.debug("Unmapped order status %r, using pending", api_status)
        return BookingStatus.PENDING
    return status


def format_pax_type(ptc: str) -> str:
    return PTC_LABELS.get(ptc, ptc)


def build_passenger_type(pax_list: List[Any]) -> str:
    """Summarise passengers by type, e.g. ``"Adult 2+Child 1"``."""
    counts: Dict[str, int] = {}
    for pax in pax_list:
        label = format_pax_type(_dig(pax, "ptc") or "")
        counts[label] = counts.get(label, 0) + 1
    return "+".join(f"{label} {n}" for label, n in counts.items())


def build_name(pax_list: List[Any]) -> str:
    """Upper-cased name of the first passenger, with ``(+N)`` for the others."""
    if not pax_list or pax_list[0] is None:
        return PLACEHOLDER
    first = pax_list[0]
    parts = [
        _dig(first, "individual", "givenName"),
        _dig(first, "individual", "surname"),
    ]
    name = " ".join(str(p) for p in parts if p).strip() or PLACEHOLDER
    name = name.upper()
    if len(pax_list) > 1:
        return f"{name} (+{len(pax_list) - 1})"
    return name


def _segments(order_item: Any) -> List[Any]:
    segments = _dig(order_item, "paxSegmentList")
    return segments if isinstance(segments, list) else []


def build_route(order_item: Any) -> str:
    """Comma separated ``DEP-ARR`` pairs, e.g. ``"DAC-CXB,CXB-DAC"``."""
    legs = []
    for item in _segments(order_item):
        dep = _dig(item, "paxSegment", "departure", "iatA_LocationCode") or ""
        arr = _dig(item, "paxSegment", "arrival", "iatA_LocationCode") or ""
        if dep or arr:
            legs.append(f"{dep}-{arr}")
    return ",".join(legs) or PLACEHOLDER


def get_fly_date(order_item: Any) -> Optional[str]:
    return _dig(
        order_item,
        "paxSegmentList",
        0,
        "paxSegment",
        "departure",
        "aircraftScheduledDateTime",
    ) or None


def get_pnr(response: Mapping[str, Any]) -> Optional[str]:
    """PNR from the first segment, else the top level; ``None`` if neither."""
    pnr = _dig(response, "orderItem", 0, "paxSegmentList", 0, "paxSegment", "airlinePNR")
    if not pnr:
        pnr = response.get("pnr")
    return pnr or None


def get_airline(order_item: Any) -> str:
    airline = _dig(order_item, "validatingCarrier") or _dig(
        order_item,
        "paxSegmentList",
        0,
        "paxSegment",
        "marketingCarrierInfo",
        "carrierDesigCode",
    )
    return airline or PLACEHOLDER


def order_response_to_booking_record(
    response: Mapping[str, Any],
    *,
    responded_on: str,
    created_by: Optional[str] = None,
    created_by_email: Optional[str] = None,
    issued_override: Optional[str] = None,
    updated_at: Optional[str] = None,
) -> BookingRecord:
    """Build the :class:`BookingRecord` for an order payload.

    ``responded_on`` is the API response timestamp and doubles as the creation
    and (unless ``issued_override`` is given) the issue time. ``updated_at`` is
    supplied by the caller, typically the current time of a resync.
    """
    order_item = _dig(response, "orderItem", 0)
    fly_date = get_fly_date(order_item)
    if fly_date is None:
        logger.debug(
            "Order %s has no segment departure, using response date",
            response.get("orderReference"),
        )
        fly_date = responded_on[:10]

    fare = _dig(order_item, "price", "totalPayable", "total")
    if not isinstance(fare, (int, float)) or isinstance(fare, bool):
        fare = 0

    return BookingRecord(
        reference_no=str(response.get("orderReference") or ""),
        create_date=responded_on,
        status=normalize_status(response.get("orderStatus")),
        pnr=get_pnr(response),
        name=build_name(_pax_list(response)),
        fly_date=fly_date,
        airline=get_airline(order_item),
        fare=fare,
        issued=issued_override or responded_on,
        passenger_type=build_passenger_type(_pax_list(response)),
        route=build_route(order_item),
        created_by=created_by or get_settings().guest_label,
        created_by_email=created_by_email or None,
        updated_at=updated_at,
    )


def extract_order_payload(envelope: Any) -> Optional[Mapping[str, Any]]:
    """Return the order payload of an API envelope (``response`` or ``Response``)."""
    if not isinstance(envelope, Mapping):
        return None
    payload = envelope.get("response")
    if payload is None:
        payload = envelope.get("Response")
    return payload if isinstance(payload, Mapping) else None


def envelope_to_booking_record(
    envelope: Mapping[str, Any],
    *,
    responded_on: Optional[str] = None,
    **options: Any,
) -> BookingRecord:
    """Normalize a full OrderCreate/OrderRetrieve API response.

    Raises :class:`PayloadError` when the envelope carries no order with an
    ``orderReference``.
    """
    payload = extract_order_payload(envelope)
    if payload is None or not payload.get("orderReference"):
        error = _dig(envelope, "error", "errorMessage") or _dig(envelope, "message")
        raise PayloadError(
            f"Invalid order response: {error or 'no order data returned'}"
        )
    responded_on = responded_on or envelope.get("respondedOn")
    if not responded_on:
        raise PayloadError("Order response has no respondedOn timestamp")
    return order_response_to_booking_record(
        payload, responded_on=str(responded_on), **options
    )


__all__ = [
    "PLACEHOLDER",
    "API_STATUS_TO_BOOKING",
    "PTC_LABELS",
    "normalize_status",
    "format_pax_type",
    "build_passenger_type",
    "build_name",
    "build_route",
    "get_fly_date",
    "get_pnr",
    "get_airline",
    "order_response_to_booking_record",
    "extract_order_payload",
    "envelope_to_booking_record",
]
