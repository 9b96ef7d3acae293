"""Airport to city/country lookup used for route classification."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional


@dataclass(frozen=True, slots=True)
class CityInfo:
    city: str
    country: str
    country_code: str
    city_code: Optional[str] = None  # metro area code, e.g. LON


# (city, country, country code, metro code, airports)
_CITIES = (
    ("London", "United Kingdom", "GB", "LON", ("LHR", "LGW", "STN", "LTN", "LCY", "SEN", "BQH")),
    ("New York", "United States", "US", "NYC", ("JFK", "LGA", "EWR")),
    ("Paris", "France", "FR", "PAR", ("CDG", "ORY", "BVA")),
    ("Tokyo", "Japan", "JP", "TYO", ("NRT", "HND")),
    ("Dubai", "United Arab Emirates", "AE", "DXB_CITY", ("DXB", "DWC")),
    ("Bangkok", "Thailand", "TH", "BKK_CITY", ("BKK", "DMK")),
    ("Singapore", "Singapore", "SG", "SIN_CITY", ("SIN",)),
    ("Hong Kong", "Hong Kong", "HK", "HKG_CITY", ("HKG",)),
    ("Los Angeles", "United States", "US", "LAX_CITY", ("LAX", "BUR", "LGB", "SNA")),
    ("Chicago", "United States", "US", "CHI", ("ORD", "MDW")),
    ("Milan", "Italy", "IT", "MIL", ("MXP", "LIN", "BGY")),
    ("Berlin", "Germany", "DE", "BER_CITY", ("BER", "SXF", "TXL")),
    ("Moscow", "Russia", "RU", "MOW", ("SVO", "DME", "VKO")),
    ("Istanbul", "Turkey", "TR", "IST_CITY", ("IST", "SAW")),
    ("Mumbai", "India", "IN", "BOM_CITY", ("BOM",)),
    ("Delhi", "India", "IN", "DEL_CITY", ("DEL",)),
    ("Dhaka", "Bangladesh", "BD", "DAC_CITY", ("DAC",)),
    ("Chittagong", "Bangladesh", "BD", "CGP_CITY", ("CGP",)),
    ("Sylhet", "Bangladesh", "BD", "ZYL_CITY", ("ZYL",)),
    ("Cox's Bazar", "Bangladesh", "BD", "CXB_CITY", ("CXB",)),
    ("Jessore", "Bangladesh", "BD", "JSR_CITY", ("JSR",)),
    ("Saidpur", "Bangladesh", "BD", "SPD_CITY", ("SPD",)),
    ("Rajshahi", "Bangladesh", "BD", "RJH_CITY", ("RJH",)),
    ("Barisal", "Bangladesh", "BD", "BZL_CITY", ("BZL",)),
    ("Kathmandu", "Nepal", "NP", "KTM_CITY", ("KTM",)),
    ("Colombo", "Sri Lanka", "LK", "CMB_CITY", ("CMB",)),
    ("Karachi", "Pakistan", "PK", "KHI_CITY", ("KHI",)),
    ("Lahore", "Pakistan", "PK", "LHE_CITY", ("LHE",)),
    ("Islamabad", "Pakistan", "PK", "ISB_CITY", ("ISB",)),
    ("Guangzhou", "China", "CN", "CAN_CITY", ("CAN",)),
    ("Beijing", "China", "CN", "BJS", ("PEK", "PKX")),
    ("Shanghai", "China", "CN", "SHA", ("PVG", "SHA")),
    ("Washington", "United States", "US", "WAS", ("DCA", "IAD", "BWI")),
    ("San Francisco", "United States", "US", "SFO_CITY", ("SFO", "OAK", "SJC")),
    ("Rome", "Italy", "IT", "ROM", ("FCO", "CIA")),
    ("Barcelona", "Spain", "ES", "BCN_CITY", ("BCN",)),
    ("Madrid", "Spain", "ES", "MAD_CITY", ("MAD",)),
    ("Amsterdam", "Netherlands", "NL", "AMS_CITY", ("AMS",)),
    ("Frankfurt", "Germany", "DE", "FRA_CITY", ("FRA",)),
    ("Zurich", "Switzerland", "CH", "ZUR_CITY", ("ZUR",)),
    ("Vienna", "Austria", "AT", "VIE_CITY", ("VIE",)),
    ("Stockholm", "Sweden", "SE", "STO", ("ARN", "BMA", "NYO")),
    ("Oslo", "Norway", "NO", "OSL_CITY", ("OSL",)),
    ("Copenhagen", "Denmark", "DK", "CPH_CITY", ("CPH",)),
    ("Helsinki", "Finland", "FI", "HEL_CITY", ("HEL",)),
)

# served by domestic flights inside Bangladesh
BANGLADESH_AIRPORT_CODES = frozenset(
    ("DAC", "CGP", "ZYL", "CXB", "JSR", "SPD", "RJH", "BZL")
)

CITY_AIRPORTS: Mapping[str, CityInfo] = MappingProxyType(
    {
        iata: CityInfo(city, country, country_code, city_code)
        for city, country, country_code, city_code, airports in _CITIES
        for iata in airports
    }
)


def get_city_info(iata_code: Optional[str]) -> Optional[CityInfo]:
    """Return city information for *iata_code*, or ``None`` when unknown."""
    if not iata_code:
        return None
    return CITY_AIRPORTS.get(iata_code.strip().upper())


def airports_for_city(city_code: str) -> List[str]:
    return [
        iata for iata, info in CITY_AIRPORTS.items() if info.city_code == city_code
    ]


__all__ = [
    "CityInfo",
    "CITY_AIRPORTS",
    "BANGLADESH_AIRPORT_CODES",
    "get_city_info",
    "airports_for_city",
]
