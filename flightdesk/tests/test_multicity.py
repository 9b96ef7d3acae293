from flightdesk.airports import CityInfo, airports_for_city, get_city_info
from flightdesk.models import FlightOffer, SearchFormData
from flightdesk.multicity import (
    is_domestic_bangladesh_offer,
    is_multicity_domestic,
    is_multicity_two_segments,
    should_display_as_two_oneway,
)


def make_form(legs, trip_type="multicity"):
    return SearchFormData.from_dict(
        {
            "tripType": trip_type,
            "from": {"iata": legs[0][0]} if legs else None,
            "to": {"iata": legs[0][1]} if legs else None,
            "departureDate": "2025-03-10",
            "segments": [
                {
                    "from": {"iata": origin} if origin else None,
                    "to": {"iata": dest} if dest else None,
                    "departureDate": "2025-03-10",
                }
                for origin, dest in legs
            ],
        }
    )


def test_domestic_two_legs_display_as_two_oneway():
    form = make_form([("DAC", "CXB"), ("CXB", "DAC")])
    assert is_multicity_domestic(form)
    assert is_multicity_two_segments(form)
    assert should_display_as_two_oneway(form)


def test_domestic_three_legs_is_not_two_oneway():
    form = make_form([("DAC", "CXB"), ("CXB", "CGP"), ("CGP", "DAC")])
    assert is_multicity_domestic(form)
    assert not should_display_as_two_oneway(form)


def test_international_is_not_domestic():
    form = make_form([("DAC", "DXB"), ("DXB", "DAC")])
    assert not is_multicity_domestic(form)
    assert not should_display_as_two_oneway(form)


def test_unknown_airport_fails_closed():
    form = make_form([("DAC", "XYZ"), ("XYZ", "DAC")])
    assert not is_multicity_domestic(form)


def test_airport_without_country_code_fails_closed():
    def lookup(iata):
        return CityInfo("Somewhere", "Nowhere", "")

    form = make_form([("DAC", "CXB"), ("CXB", "DAC")])
    assert not is_multicity_domestic(form, lookup)


def test_custom_lookup_is_used():
    def lookup(iata):
        return CityInfo(iata, "Testland", "TL")

    form = make_form([("AAA", "BBB"), ("BBB", "CCC")])
    assert should_display_as_two_oneway(form, lookup)


def test_missing_airports_are_ignored():
    form = make_form([("DAC", None), ("CGP", "ZYL")])
    assert is_multicity_domestic(form)


def test_non_multicity_trip_is_never_domestic():
    form = make_form([("DAC", "CXB")], trip_type="oneway")
    assert not is_multicity_domestic(form)
    assert not is_multicity_two_segments(form)


def test_empty_segments_are_not_domestic():
    assert not is_multicity_domestic(make_form([]))


def test_city_lookup():
    assert get_city_info("dac").country_code == "BD"
    assert get_city_info("LHR").city_code == "LON"
    assert get_city_info("XYZ") is None
    assert get_city_info("") is None
    assert sorted(airports_for_city("NYC")) == ["EWR", "JFK", "LGA"]


def make_offer(*legs):
    """Offer with one group per leg; a leg is a list of (dep, arr) flights."""
    groups = []
    for flights in legs:
        groups.append(
            {
                "departure": {"airport": flights[0][0]},
                "arrival": {"airport": flights[-1][1]},
                "segments": [
                    {"departure": {"airport": dep}, "arrival": {"airport": arr}}
                    for dep, arr in flights
                ],
            }
        )
    return FlightOffer.from_dict({"id": "x", "segments": groups})


def test_domestic_bangladesh_offer():
    offer = make_offer([("DAC", "CXB")], [("CXB", "dac")])
    assert is_domestic_bangladesh_offer(offer)


def test_connection_abroad_is_not_domestic():
    offer = make_offer([("DAC", "CCU"), ("CCU", "CGP")])
    assert not is_domestic_bangladesh_offer(offer)


def test_offer_without_groups_is_not_domestic():
    assert not is_domestic_bangladesh_offer(FlightOffer.from_dict({"id": "x"}))


def test_missing_airport_code_is_not_domestic():
    offer = make_offer([("DAC", "")])
    assert not is_domestic_bangladesh_offer(offer)


def test_domestic_offer_falls_back_to_known_codes():
    offer = make_offer([("DAC", "BZL")])
    assert is_domestic_bangladesh_offer(offer, lambda iata: None)
    assert not is_domestic_bangladesh_offer(make_offer([("DAC", "DXB")]), lambda iata: None)
