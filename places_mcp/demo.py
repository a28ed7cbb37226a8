"""Canned search results served while payment is disabled."""

from types import MappingProxyType

DEMO_LOCATION = "San Francisco (demo)"

_DEMO_PLACES = (
    {
        "name": "Blue Bottle Coffee",
        "formatted_address": "66 Mint St, San Francisco, CA 94103, USA",
        "rating": 4.1,
        "price_level": 2,
        "types": ["cafe", "food", "point_of_interest", "store"],
        "business_status": "OPERATIONAL",
        "formatted_phone_number": "(510) 653-3394",
    },
    {
        "name": "Philz Coffee",
        "formatted_address": "3101 24th St, San Francisco, CA 94110, USA",
        "rating": 4.3,
        "price_level": 2,
        "types": ["cafe", "food", "point_of_interest", "store"],
        "business_status": "OPERATIONAL",
        "formatted_phone_number": "(415) 875-9943",
    },
    {
        "name": "Sightglass Coffee",
        "formatted_address": "270 7th St, San Francisco, CA 94103, USA",
        "rating": 4.2,
        "price_level": 2,
        "types": ["cafe", "food", "point_of_interest", "store"],
        "business_status": "OPERATIONAL",
        "formatted_phone_number": "(415) 861-1313",
    },
)

DEMO_RESULTS = MappingProxyType({"results": tuple(MappingProxyType(p) for p in _DEMO_PLACES)})


def demo_payload() -> dict:
    """Return a fresh copy of the demo payload as plain JSON-like data."""
    return {
        "results": [
            {**place, "types": list(place["types"])} for place in DEMO_RESULTS["results"]
        ]
    }
