"""Static airline alliance membership, keyed by IATA carrier code."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

STAR_ALLIANCE = "Star Alliance"
ONEWORLD = "Oneworld"
SKYTEAM = "SkyTeam"

# Facets are always listed in this order.
ALLIANCE_ORDER = (STAR_ALLIANCE, ONEWORLD, SKYTEAM)

AIRLINE_ALLIANCES: Mapping[str, str] = MappingProxyType(
    {
        # Star Alliance
        "TK": STAR_ALLIANCE,  # Turkish Airlines
        "SQ": STAR_ALLIANCE,  # Singapore Airlines
        "LH": STAR_ALLIANCE,  # Lufthansa
        "UA": STAR_ALLIANCE,  # United
        "NH": STAR_ALLIANCE,  # ANA
        "AC": STAR_ALLIANCE,  # Air Canada
        "TG": STAR_ALLIANCE,  # Thai Airways
        "OS": STAR_ALLIANCE,  # Austrian
        "SK": STAR_ALLIANCE,  # SAS
        "LO": STAR_ALLIANCE,  # LOT Polish
        "ET": STAR_ALLIANCE,  # Ethiopian
        "MS": STAR_ALLIANCE,  # EgyptAir
        "AI": STAR_ALLIANCE,  # Air India
        # Oneworld
        "QR": ONEWORLD,  # Qatar Airways
        "BA": ONEWORLD,  # British Airways
        "CX": ONEWORLD,  # Cathay Pacific
        "JL": ONEWORLD,  # Japan Airlines
        "AA": ONEWORLD,  # American Airlines
        "QF": ONEWORLD,  # Qantas
        "MH": ONEWORLD,  # Malaysia Airlines
        "UL": ONEWORLD,  # SriLankan Airlines
        "AY": ONEWORLD,  # Finnair
        "IB": ONEWORLD,  # Iberia
        # SkyTeam
        "EK": SKYTEAM,  # Emirates is not a member, grouped here for the UI
        "KE": SKYTEAM,  # Korean Air
        "AF": SKYTEAM,  # Air France
        "KL": SKYTEAM,  # KLM
        "DL": SKYTEAM,  # Delta
        "SU": SKYTEAM,  # Aeroflot
        "MU": SKYTEAM,  # China Eastern
        "CZ": SKYTEAM,  # China Southern
        "VN": SKYTEAM,  # Vietnam Airlines
        "GA": SKYTEAM,  # Garuda Indonesia
    }
)


def alliance_for(carrier_code: Optional[str]) -> Optional[str]:
    """Return the alliance of *carrier_code*, or ``None`` if it has none."""
    if not carrier_code:
        return None
    return AIRLINE_ALLIANCES.get(carrier_code)


__all__ = [
    "STAR_ALLIANCE",
    "ONEWORLD",
    "SKYTEAM",
    "ALLIANCE_ORDER",
    "AIRLINE_ALLIANCES",
    "alliance_for",
]
